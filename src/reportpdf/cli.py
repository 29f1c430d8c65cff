"""reportpdf CLI — render workforce reports to PDF."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .layout.settings import list_layouts
from .pdf.inspect import PdfStructureError, inspect_pdf
from .pipeline import ReportPipeline

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="reportpdf")
def main():
    """reportpdf — Turn report data into paginated PDF documents."""
    pass


@main.command()
@click.argument("source", type=click.Path(dir_okay=False))
@click.option(
    "-o", "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    envvar="REPORTPDF_OUTPUT_DIR",
    default="./output",
    help="Output directory (default: ./output, or set REPORTPDF_OUTPUT_DIR).",
)
@click.option(
    "--layout",
    "layout_name",
    type=click.Choice([t.name for t in list_layouts()], case_sensitive=False),
    envvar="REPORTPDF_LAYOUT",
    default="standard",
    help="Layout preset (or set REPORTPDF_LAYOUT env var).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def render(source: str, output_dir: str, layout_name: str, verbose: bool):
    """Render a JSON or YAML report file to PDF.

    SOURCE is a report file with ``metadata`` and ``blocks`` keys.
    """
    _setup_logging(verbose)
    result = ReportPipeline().run(source, output_dir=output_dir, layout_name=layout_name)
    if not result.success:
        raise SystemExit(1)


@main.command()
def layouts():
    """List available layout presets."""
    from rich.table import Table as RichTable

    table = RichTable(title="Available Layouts", show_lines=False)
    table.add_column("Name", style="bold cyan")
    table.add_column("Margins (top/bottom)")
    table.add_column("Row Height", justify="right")
    table.add_column("Masthead")
    table.add_column("Description")

    for t in list_layouts():
        table.add_row(
            t.name,
            f"{t.page.top_margin:g} / {t.page.bottom_margin:g}",
            f"{t.table.row_height:g}",
            "every page" if t.repeat_masthead else "first page",
            t.description,
        )

    console.print(table)


@main.command()
@click.argument("pdf", type=click.Path(exists=True, dir_okay=False))
def check(pdf: str):
    """Validate the structure of a PDF written by reportpdf."""
    from rich.table import Table as RichTable

    data = Path(pdf).read_bytes()
    try:
        summary = inspect_pdf(data)
    except PdfStructureError as exc:
        console.print(f"[bold red]❌ Invalid PDF:[/] {escape(str(exc))}")
        raise SystemExit(1)

    console.print(
        f"[green]✓[/] Valid PDF: {summary.page_count} page(s), "
        f"{summary.object_count} objects, {len(data):,} bytes"
    )
    table = RichTable(show_lines=False)
    table.add_column("Page", justify="right", style="bold")
    table.add_column("Text runs", justify="right")
    table.add_column("First line")
    for index in range(summary.page_count):
        texts = summary.page_texts(index)
        table.add_row(str(index + 1), str(len(texts)), escape(texts[0]) if texts else "")
    console.print(table)


if __name__ == "__main__":
    main()

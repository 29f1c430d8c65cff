"""Orchestration pipeline — ties loader, builder and export together."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .builder import ReportBuilder
from .core.loader import ReportSourceError, load_report
from .core.models import RenderResult
from .export import PdfExport
from .layout.settings import get_layout
from .pdf.inspect import inspect_pdf

console = Console()


class ReportPipeline:
    """Report file → PDF on disk.

    Usage::

        pipeline = ReportPipeline()
        result = pipeline.run("reports/hours.json", output_dir="./output")
        print(result.output_path)
    """

    def run(
        self,
        source: str | Path,
        *,
        output_dir: str | Path = "./output",
        layout_name: str = "standard",
    ) -> RenderResult:
        """Run the full pipeline.

        Parameters
        ----------
        source
            Path to a ``.json``, ``.yaml`` or ``.yml`` report file.
        output_dir
            Directory where the PDF will be written.
        layout_name
            Name of a registered layout preset (e.g. ``standard``, ``ledger``).
        """
        result = RenderResult(source=str(source))

        # -- Resolve layout -----------------------------------------------
        try:
            layout = get_layout(layout_name)
        except KeyError as exc:
            result.success = False
            result.error = str(exc.args[0])
            console.print(f"[bold red]❌ {escape(result.error)}[/]")
            return result
        console.print(f"[dim]📐 Layout:[/] [bold]{layout.name}[/bold]")

        # -- Step 1: Load report ------------------------------------------
        console.print(f"\n[bold blue]📥 Loading report from:[/] {source}")
        try:
            report = load_report(source)
        except (FileNotFoundError, ReportSourceError) as exc:
            result.success = False
            result.error = str(exc)
            console.print(f"[bold red]❌ Load failed:[/] {escape(str(exc))}")
            return result
        console.print(f"[green]✓[/] Loaded {escape(repr(report.metadata.title))} ({len(report.blocks)} blocks)")

        # -- Step 2: Render -----------------------------------------------
        console.print("[bold blue]📄 Rendering PDF...[/]")
        data = ReportBuilder.from_model(report, layout).build()
        summary = inspect_pdf(data)
        result.page_count = summary.page_count
        result.byte_size = len(data)
        console.print(f"[green]✓[/] {summary.page_count} page(s), {len(data):,} bytes")

        # -- Step 3: Write ------------------------------------------------
        export = PdfExport.from_report(report.metadata, data)
        try:
            result.output_path = export.write(Path(output_dir).resolve())
        except OSError as exc:
            result.success = False
            result.error = str(exc)
            console.print(f"[red]✗[/] Write failed: {escape(str(exc))}")
            return result

        console.print(
            f"\n[bold green]🎉 Done![/] → "
            f"[link=file://{result.output_path}]{result.output_path}[/link]\n"
        )
        return result

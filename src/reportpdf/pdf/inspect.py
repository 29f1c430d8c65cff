"""Structural inspection of produced PDF buffers.

Reads back the parts the document builder is responsible for (xref table,
trailer, page tree, content streams) and checks them against each other.
This is not a general PDF parser: it understands the uncompressed,
single-revision files this package writes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .document import TEXT_ENCODING

_STARTXREF_RE = re.compile(rb"startxref\s+(\d+)\s+%%EOF\s*$")
_XREF_HEAD_RE = re.compile(rb"xref\s+(\d+)\s+(\d+)\s*\n")
_XREF_ENTRY_RE = re.compile(rb"(\d{10}) (\d{5}) ([nf]) ?\r?\n")
_TRAILER_RE = re.compile(rb"trailer\s*<<(.*?)>>", re.S)
_SIZE_RE = re.compile(rb"/Size\s+(\d+)")
_ROOT_RE = re.compile(rb"/Root\s+(\d+)\s+0\s+R")
_PAGES_REF_RE = re.compile(rb"/Pages\s+(\d+)\s+0\s+R")
_KIDS_RE = re.compile(rb"/Kids\s*\[([^\]]*)\]")
_COUNT_RE = re.compile(rb"/Count\s+(\d+)")
_REF_RE = re.compile(rb"(\d+)\s+0\s+R")
_PAGE_TYPE_RE = re.compile(rb"/Type\s*/Page(?![s\w])")
_CONTENTS_RE = re.compile(rb"/Contents\s+(\d+)\s+0\s+R")
_LENGTH_RE = re.compile(rb"/Length\s+(\d+)")
_SHOW_TEXT_RE = re.compile(rb"\(((?:[^()\\]|\\.)*)\)\s*Tj", re.S)
_ESCAPE_RE = re.compile(rb"\\(.)", re.S)


class PdfStructureError(ValueError):
    """The buffer violates an xref / numbering / page-tree invariant."""


@dataclass
class PdfSummary:
    """What ``inspect_pdf`` found in a buffer."""

    size: int
    root: int
    offsets: dict[int, int] = field(default_factory=dict)
    kids: list[int] = field(default_factory=list)
    page_object_count: int = 0
    content_streams: list[bytes] = field(default_factory=list)

    @property
    def object_count(self) -> int:
        return len(self.offsets)

    @property
    def page_count(self) -> int:
        return len(self.kids)

    def page_texts(self, index: int) -> list[str]:
        """Strings shown with ``Tj`` on page *index*, unescaped."""
        return [
            _ESCAPE_RE.sub(rb"\1", raw).decode(TEXT_ENCODING, errors="replace")
            for raw in _SHOW_TEXT_RE.findall(self.content_streams[index])
        ]

    def all_texts(self) -> list[str]:
        texts: list[str] = []
        for index in range(self.page_count):
            texts.extend(self.page_texts(index))
        return texts


def _object_bodies(data: bytes, offsets: dict[int, int], xref_pos: int) -> dict[int, bytes]:
    """Slice each object from its marker up to the next object (or the xref)."""
    bodies: dict[int, bytes] = {}
    ordered = sorted(offsets.items(), key=lambda item: item[1])
    for index, (obj_id, offset) in enumerate(ordered):
        end = ordered[index + 1][1] if index + 1 < len(ordered) else xref_pos
        body = data[offset:end]
        if not body.rstrip().endswith(b"endobj"):
            raise PdfStructureError(f"object {obj_id} does not end with endobj")
        bodies[obj_id] = body
    return bodies


def _dictionary_part(body: bytes) -> bytes:
    return body.split(b"\nstream\n", 1)[0]


def _stream_data(body: bytes, obj_id: int) -> bytes:
    m = _LENGTH_RE.search(body)
    start = body.find(b"stream\n")
    if m is None or start < 0:
        raise PdfStructureError(f"object {obj_id} is not a stream")
    start += len(b"stream\n")
    length = int(m.group(1))
    stream = body[start:start + length]
    if body[start + length:].lstrip(b"\r\n")[:9] != b"endstream":
        raise PdfStructureError(
            f"object {obj_id}: /Length {length} does not end at endstream"
        )
    return stream


def inspect_pdf(data: bytes) -> PdfSummary:
    """Parse and cross-check *data*; raise ``PdfStructureError`` on defects."""
    if not data.startswith(b"%PDF-"):
        raise PdfStructureError("missing %PDF- header")

    m = _STARTXREF_RE.search(data)
    if m is None:
        raise PdfStructureError("missing startxref / %%EOF")
    xref_pos = int(m.group(1))
    if data[xref_pos:xref_pos + 4] != b"xref":
        raise PdfStructureError(f"startxref {xref_pos} does not point at 'xref'")

    head = _XREF_HEAD_RE.match(data, xref_pos)
    if head is None or int(head.group(1)) != 0:
        raise PdfStructureError("malformed xref subsection header")
    entry_count = int(head.group(2))

    offsets: dict[int, int] = {}
    pos = head.end()
    for number in range(entry_count):
        entry = _XREF_ENTRY_RE.match(data, pos)
        if entry is None:
            raise PdfStructureError(f"malformed xref entry {number}")
        pos = entry.end()
        if number == 0:
            if entry.group(3) != b"f" or entry.group(2) != b"65535":
                raise PdfStructureError("xref slot 0 must be the free entry")
            continue
        offset = int(entry.group(1))
        marker = f"{number} 0 obj".encode("ascii")
        if data[offset:offset + len(marker)] != marker:
            raise PdfStructureError(f"xref offset {offset} does not point at '{number} 0 obj'")
        offsets[number] = offset

    trailer = _TRAILER_RE.search(data, pos)
    if trailer is None:
        raise PdfStructureError("missing trailer")
    size_m = _SIZE_RE.search(trailer.group(1))
    root_m = _ROOT_RE.search(trailer.group(1))
    if size_m is None or root_m is None:
        raise PdfStructureError("trailer lacks /Size or /Root")
    size = int(size_m.group(1))
    if size != entry_count or size != len(offsets) + 1:
        raise PdfStructureError(f"/Size {size} != object count + 1 ({len(offsets) + 1})")

    summary = PdfSummary(size=size, root=int(root_m.group(1)), offsets=offsets)
    bodies = _object_bodies(data, offsets, xref_pos)

    catalog = bodies.get(summary.root)
    pages_m = _PAGES_REF_RE.search(catalog or b"")
    if pages_m is None:
        raise PdfStructureError("catalog does not reference a page tree")
    tree = bodies.get(int(pages_m.group(1)), b"")
    kids_m = _KIDS_RE.search(tree)
    count_m = _COUNT_RE.search(tree)
    if kids_m is None or count_m is None:
        raise PdfStructureError("page tree lacks /Kids or /Count")
    summary.kids = [int(ref) for ref in _REF_RE.findall(kids_m.group(1))]
    if int(count_m.group(1)) != len(summary.kids):
        raise PdfStructureError(f"/Count {count_m.group(1).decode()} != {len(summary.kids)} kids")

    summary.page_object_count = sum(
        1 for body in bodies.values() if _PAGE_TYPE_RE.search(_dictionary_part(body))
    )
    if summary.page_object_count != len(summary.kids):
        raise PdfStructureError(
            f"{summary.page_object_count} page objects but {len(summary.kids)} kids"
        )

    for kid in summary.kids:
        body = _dictionary_part(bodies.get(kid, b""))
        if not _PAGE_TYPE_RE.search(body):
            raise PdfStructureError(f"kid {kid} is not a /Page object")
        contents = _CONTENTS_RE.search(body)
        if contents is None:
            raise PdfStructureError(f"page {kid} has no /Contents")
        content_id = int(contents.group(1))
        summary.content_streams.append(_stream_data(bodies.get(content_id, b""), content_id))

    return summary

"""Byte-level PDF 1.4 object writer.

``PdfWriter`` hands out object numbers from a monotonically increasing
allocator, stores each object's body and serializes the whole file in
ascending id order. Byte offsets are taken from the running buffer length
immediately before ``N 0 obj`` is written, so every xref entry points at
its object by construction.
"""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
FREE_ENTRY = b"0000000000 65535 f \n"


class PdfWriter:
    """Collects numbered objects and writes them out with an xref table."""

    def __init__(self) -> None:
        self._next_id = 1
        self._bodies: dict[int, bytes] = {}

    # ------------------------------------------------------------------
    # Object allocation
    # ------------------------------------------------------------------

    def reserve(self) -> int:
        """Allocate the next object number without supplying a body yet."""
        obj_id = self._next_id
        self._next_id += 1
        return obj_id

    @property
    def object_count(self) -> int:
        return self._next_id - 1

    def put(self, obj_id: int, dictionary: str) -> None:
        """Store a dictionary object (``<< ... >>`` text) under *obj_id*."""
        self._bodies[obj_id] = dictionary.encode("ascii")

    def put_stream(self, obj_id: int, data: bytes) -> None:
        """Store a stream object whose ``/Length`` is ``len(data)``."""
        self._bodies[obj_id] = (
            f"<< /Length {len(data)} >>\nstream\n".encode("ascii")
            + data
            + b"\nendstream"
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_bytes(self, root_id: int) -> bytes:
        """Serialize header, objects, xref, trailer and ``%%EOF``."""
        buffer = bytearray(PDF_HEADER)
        offsets: list[int] = []

        for obj_id in range(1, self._next_id):
            offsets.append(len(buffer))
            buffer += f"{obj_id} 0 obj\n".encode("ascii")
            buffer += self._bodies[obj_id]
            buffer += b"\nendobj\n"

        size = self.object_count + 1
        xref_offset = len(buffer)
        buffer += f"xref\n0 {size}\n".encode("ascii")
        buffer += FREE_ENTRY
        for offset in offsets:
            buffer += f"{offset:010d} 00000 n \n".encode("ascii")

        buffer += (
            f"trailer\n<< /Size {size} /Root {root_id} 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF\n"
        ).encode("ascii")

        log.debug("Serialized %d objects, xref at byte %d", self.object_count, xref_offset)
        return bytes(buffer)

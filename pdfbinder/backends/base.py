"""Backend protocol for PDF operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .pypdf_backend import OutputDocument, SourceDocument


class PDFBackend(Protocol):
    """Protocol defining how pipelines obtain source and output documents."""

    def parse(self, data: bytes) -> "SourceDocument":
        """Parse a PDF byte buffer into a page-addressable source document."""

    def create_empty(self) -> "OutputDocument":
        """Return a new, empty output document."""

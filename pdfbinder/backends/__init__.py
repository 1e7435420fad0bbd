"""Document model adapter: parsing, copying, drawing and serializing PDFs."""

from .base import PDFBackend
from .drawing import (
    CircleOperation,
    DrawOperation,
    ImageOperation,
    PathOperation,
    RectangleOperation,
    TextOperation,
)
from .pypdf_backend import (
    DEFAULT_BACKEND,
    OutputDocument,
    Page,
    PypdfBackend,
    SourceDocument,
    SourcePage,
    create_document,
    parse_document,
)
from .resources import FontHandle, ImageHandle, StandardFont

__all__ = [
    "PDFBackend",
    "PypdfBackend",
    "DEFAULT_BACKEND",
    "SourceDocument",
    "SourcePage",
    "OutputDocument",
    "Page",
    "FontHandle",
    "ImageHandle",
    "StandardFont",
    "DrawOperation",
    "TextOperation",
    "ImageOperation",
    "RectangleOperation",
    "CircleOperation",
    "PathOperation",
    "parse_document",
    "create_document",
]

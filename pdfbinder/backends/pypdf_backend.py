"""pypdf backend implementation for pdfbinder.

Pages are parsed and copied with ``pypdf``. Drawing calls are recorded on the
output pages and rendered once per document with ``reportlab`` when the
document is serialized; the rendered overlay is then merged onto each page.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from pypdf import PageObject, PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError
from reportlab.pdfgen.canvas import Canvas

from ..exceptions import (
    IndexOutOfRangeError,
    ParseError,
    PdfBinderError,
    SerializationError,
)
from ..types import RGB, ImageKind, PdfMetadata
from .base import PDFBackend
from .drawing import (
    BLACK,
    CircleOperation,
    DrawOperation,
    ImageOperation,
    PathOperation,
    Point,
    RectangleOperation,
    TextOperation,
    as_points,
    render_operations,
)
from .resources import FontHandle, ImageHandle, StandardFont

LOGGER = logging.getLogger("pdfbinder.backends")


def _check_opacity(opacity: float) -> float:
    if not 0.0 <= opacity <= 1.0:
        raise ValueError(f"Opacity must be within [0, 1], got {opacity}")
    return float(opacity)


@dataclass
class SourceDocument:
    """A parsed, page-addressable input document."""

    reader: PdfReader = field(repr=False)
    raw_bytes: bytes = field(repr=False)
    page_count: int = 0

    def page_indices(self) -> List[int]:
        return list(range(self.page_count))

    def check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(f"Page index must be an integer, got {index!r}")
        if not 0 <= index < self.page_count:
            raise IndexOutOfRangeError(
                f"Page index {index} is out of range for a document with {self.page_count} page(s)."
            )
        return index

    def get_page(self, index: int) -> PageObject:
        return self.reader.pages[self.check_index(index)]

    def iter_pages(self) -> Iterator[PageObject]:
        return iter(self.reader.pages)


@dataclass(frozen=True)
class SourcePage:
    """A page selected from a source document, ready to be appended."""

    document: SourceDocument
    index: int

    @property
    def page(self) -> PageObject:
        return self.document.get_page(self.index)


class Page:
    """A page owned by an :class:`OutputDocument`."""

    def __init__(self, document: "OutputDocument", raw: PageObject) -> None:
        self._document = document
        self.raw = raw
        self.operations: List[DrawOperation] = []

    def __repr__(self) -> str:
        return f"Page(width={self.width:.2f}, height={self.height:.2f}, rotation={self.rotation})"

    @property
    def width(self) -> float:
        return float(self.raw.mediabox.width)

    @property
    def height(self) -> float:
        return float(self.raw.mediabox.height)

    @property
    def left(self) -> float:
        return float(self.raw.mediabox.left)

    @property
    def bottom(self) -> float:
        return float(self.raw.mediabox.bottom)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def rotation(self) -> int:
        return int(self.raw.rotation) % 360

    @rotation.setter
    def rotation(self, value: int) -> None:
        self._document._ensure_open()
        if value % 90:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {value}")
        self.raw.rotation = int(value) % 360

    def rotate(self, delta: int) -> int:
        """Add *delta* degrees to the page rotation and return the new value."""
        self.rotation = self.rotation + delta
        return self.rotation

    def _record(self, operation: DrawOperation) -> None:
        self._document._ensure_open()
        self.operations.append(operation)

    def draw_text(
        self,
        text: str,
        *,
        x: float,
        y: float,
        size: float,
        font: FontHandle,
        color: RGB = BLACK,
        opacity: float = 1.0,
        rotate: float = 0.0,
    ) -> None:
        self._record(
            TextOperation(
                text=text,
                x=x,
                y=y,
                size=size,
                font=font.name,
                color=color,
                opacity=_check_opacity(opacity),
                rotate=rotate,
            )
        )

    def draw_image(
        self,
        image: ImageHandle,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        opacity: float = 1.0,
    ) -> None:
        self._record(
            ImageOperation(image=image, x=x, y=y, width=width, height=height, opacity=_check_opacity(opacity))
        )

    def draw_rectangle(
        self,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Optional[RGB] = None,
        border_color: Optional[RGB] = None,
        border_width: float = 1.0,
        radius: float = 0.0,
        opacity: float = 1.0,
    ) -> None:
        self._record(
            RectangleOperation(
                x=x,
                y=y,
                width=width,
                height=height,
                color=color,
                border_color=border_color,
                border_width=border_width,
                radius=radius,
                opacity=_check_opacity(opacity),
            )
        )

    def draw_circle(
        self,
        *,
        x: float,
        y: float,
        radius: float,
        color: Optional[RGB] = None,
        border_color: Optional[RGB] = None,
        border_width: float = 1.0,
        opacity: float = 1.0,
    ) -> None:
        self._record(
            CircleOperation(
                x=x,
                y=y,
                radius=radius,
                color=color,
                border_color=border_color,
                border_width=border_width,
                opacity=_check_opacity(opacity),
            )
        )

    def draw_path(
        self,
        points: Sequence[Point],
        *,
        color: Optional[RGB] = None,
        border_color: Optional[RGB] = None,
        border_width: float = 1.0,
        opacity: float = 1.0,
    ) -> None:
        self._record(
            PathOperation(
                points=as_points(points),
                color=color,
                border_color=border_color,
                border_width=border_width,
                opacity=_check_opacity(opacity),
            )
        )


class OutputDocument:
    """A document under construction.

    Pages are appended in call order. :meth:`serialize` may be called exactly
    once; afterwards the document rejects every mutation.
    """

    def __init__(self) -> None:
        self._writer = PdfWriter()
        self._pages: List[Page] = []
        self._fonts: dict[str, FontHandle] = {}
        self._images: List[ImageHandle] = []
        self._copied: dict[int, tuple[SourceDocument, set[int]]] = {}
        self._serialized = False

    @property
    def pages(self) -> tuple[Page, ...]:
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def is_serialized(self) -> bool:
        return self._serialized

    def _ensure_open(self) -> None:
        if self._serialized:
            raise SerializationError("Output document has already been serialized.")

    # ------------------------------------------------------------------
    # Page assembly
    # ------------------------------------------------------------------
    def copy_pages(self, source: SourceDocument, indices: Iterable[int]) -> List[SourcePage]:
        """Select pages of *source*; every index is validated before any copy."""
        self._ensure_open()
        selected = [source.check_index(index) for index in indices]
        return [SourcePage(source, index) for index in selected]

    def _source_page(self, page: SourcePage) -> PageObject:
        # pypdf reuses the first clone of a reader's page, so a repeated page
        # is read again from a fresh reader to get an independent copy
        copied = self._copied.setdefault(id(page.document), (page.document, set()))[1]
        if page.index not in copied:
            copied.add(page.index)
            return page.page
        LOGGER.debug("Page %s appended more than once, copying from a fresh reader", page.index)
        return PdfReader(io.BytesIO(page.document.raw_bytes)).pages[page.index]

    def append_page(self, page: SourcePage) -> Page:
        self._ensure_open()
        try:
            raw = self._writer.add_page(self._source_page(page))
        except PdfBinderError:
            raise
        except Exception as exc:
            LOGGER.error("Failed to copy page %s: %s", page.index, exc)
            raise ParseError(f"Unable to copy page {page.index}: {exc}") from exc
        added = Page(self, raw)
        self._pages.append(added)
        LOGGER.debug("Appended page %s as output page %s", page.index, len(self._pages))
        return added

    def append_all(self, source: SourceDocument) -> List[Page]:
        return [self.append_page(page) for page in self.copy_pages(source, source.page_indices())]

    def add_blank_page(self, width: float, height: float) -> Page:
        self._ensure_open()
        raw = self._writer.add_blank_page(width=width, height=height)
        added = Page(self, raw)
        self._pages.append(added)
        return added

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    def embed_image(self, data: bytes, kind: ImageKind) -> ImageHandle:
        self._ensure_open()
        image = ImageHandle.decode(data, kind)
        self._images.append(image)
        LOGGER.debug("Embedded %s image %sx%s", image.kind.value, image.width, image.height)
        return image

    def embed_standard_font(self, family: str | StandardFont = StandardFont.HELVETICA_BOLD) -> FontHandle:
        self._ensure_open()
        font = FontHandle.standard(family)
        return self._fonts.setdefault(font.name, font)

    def set_metadata(self, metadata: Optional[PdfMetadata], creator: Optional[str] = None) -> None:
        self._ensure_open()
        info = (metadata or PdfMetadata()).as_document_info(creator)
        if info:
            LOGGER.debug("Setting metadata on output PDF: %s", info)
            self._writer.add_metadata(info)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def _render_drawings(self) -> None:
        pending = [page for page in self._pages if page.operations]
        if not pending:
            return

        buffer = io.BytesIO()
        canvas = Canvas(buffer)
        for page in pending:
            canvas.setPageSize(page.size)
            render_operations(canvas, page.operations)
            canvas.showPage()
        canvas.save()

        overlay = PdfReader(io.BytesIO(buffer.getvalue()))
        for page, overlay_page in zip(pending, overlay.pages):
            page.raw.merge_transformed_page(
                overlay_page,
                Transformation().translate(page.left, page.bottom),
            )
        LOGGER.debug("Rendered drawings onto %d page(s)", len(pending))

    def serialize(self) -> bytes:
        self._ensure_open()
        buffer = io.BytesIO()
        try:
            self._render_drawings()
            self._writer.write(buffer)
        except PdfBinderError:
            raise
        except Exception as exc:
            LOGGER.error("Failed to serialize output document: %s", exc)
            raise SerializationError(f"Failed to serialize output document: {exc}") from exc
        finally:
            self._serialized = True
        return buffer.getvalue()


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def parse(self, data: bytes) -> SourceDocument:
        if not data:
            raise ParseError("PDF data is empty.")

        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted:
                LOGGER.debug("Attempting to decrypt encrypted PDF with an empty password")
                if reader.decrypt("") == 0:
                    raise ParseError("PDF is encrypted and cannot be opened without a password.")
            page_count = len(reader.pages)
        except ParseError:
            raise
        except PdfReadError as exc:
            raise ParseError(f"Corrupted or invalid PDF data: {exc}") from exc
        except Exception as exc:
            raise ParseError(f"Unexpected error reading PDF: {exc}") from exc

        LOGGER.debug("Parsed PDF with %d page(s), %d bytes", page_count, len(data))
        return SourceDocument(reader=reader, raw_bytes=data, page_count=page_count)

    def create_empty(self) -> OutputDocument:
        return OutputDocument()


DEFAULT_BACKEND = PypdfBackend()


def parse_document(data: bytes) -> SourceDocument:
    return DEFAULT_BACKEND.parse(data)


def create_document() -> OutputDocument:
    return DEFAULT_BACKEND.create_empty()


__all__ = [
    "SourceDocument",
    "SourcePage",
    "Page",
    "OutputDocument",
    "PypdfBackend",
    "DEFAULT_BACKEND",
    "parse_document",
    "create_document",
]

"""Low resolution page previews rendered with ``pypdfium2``."""

from __future__ import annotations

import io
import logging
from typing import List, Optional

import pypdfium2 as pdfium

from ..exceptions import IndexOutOfRangeError, ParseError
from ..settings import DEFAULT_SETTINGS

LOGGER = logging.getLogger("pdfbinder.editor")

_ROTATIONS = (0, 90, 180, 270)


def _open(data: bytes) -> pdfium.PdfDocument:
    if not data:
        raise ParseError("PDF data is empty.")
    try:
        return pdfium.PdfDocument(data)
    except pdfium.PdfiumError as exc:
        raise ParseError(f"Unable to render PDF: {exc}") from exc


def _render_png(document: pdfium.PdfDocument, index: int, scale: float, rotation: int) -> bytes:
    page = document[index]
    try:
        image = page.render(scale=scale, rotation=rotation).to_pil()
    finally:
        page.close()
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def _check_scale(scale: Optional[float]) -> float:
    scale = DEFAULT_SETTINGS.thumbnail_scale if scale is None else float(scale)
    if scale <= 0:
        raise ValueError(f"Thumbnail scale must be positive, got {scale}")
    return scale


def render_thumbnails(data: bytes, scale: Optional[float] = None) -> List[bytes]:
    """Return one PNG preview per page of *data*, in page order."""

    scale = _check_scale(scale)
    document = _open(data)
    try:
        thumbnails = [_render_png(document, index, scale, 0) for index in range(len(document))]
    finally:
        document.close()
    LOGGER.debug("Rendered %d thumbnail(s) at scale %s", len(thumbnails), scale)
    return thumbnails


def render_thumbnail(data: bytes, index: int, scale: Optional[float] = None, rotation: int = 0) -> bytes:
    """Render page *index* of *data* as PNG, turned clockwise by *rotation* degrees."""

    scale = _check_scale(scale)
    rotation %= 360
    if rotation not in _ROTATIONS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {rotation}")

    document = _open(data)
    try:
        if not 0 <= index < len(document):
            raise IndexOutOfRangeError(
                f"Page index {index} is out of range for a document with {len(document)} page(s)."
            )
        return _render_png(document, index, scale, rotation)
    finally:
        document.close()


__all__ = ["render_thumbnails", "render_thumbnail"]

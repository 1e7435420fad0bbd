"""Fonts and images that can be drawn onto output pages."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics

from ..exceptions import SerializationError, UnsupportedImageFormatError
from ..types import ImageKind


class StandardFont(str, Enum):
    """The standard 14 PDF fonts that need no embedding."""

    HELVETICA = "Helvetica"
    HELVETICA_BOLD = "Helvetica-Bold"
    HELVETICA_OBLIQUE = "Helvetica-Oblique"
    HELVETICA_BOLD_OBLIQUE = "Helvetica-BoldOblique"
    TIMES_ROMAN = "Times-Roman"
    TIMES_BOLD = "Times-Bold"
    TIMES_ITALIC = "Times-Italic"
    TIMES_BOLD_ITALIC = "Times-BoldItalic"
    COURIER = "Courier"
    COURIER_BOLD = "Courier-Bold"
    COURIER_OBLIQUE = "Courier-Oblique"
    COURIER_BOLD_OBLIQUE = "Courier-BoldOblique"
    SYMBOL = "Symbol"
    ZAPF_DINGBATS = "ZapfDingbats"


@dataclass(frozen=True)
class FontHandle:
    """A standard font with the metrics needed for layout."""

    name: str

    @classmethod
    def standard(cls, family: str | StandardFont) -> "FontHandle":
        name = family.value if isinstance(family, StandardFont) else str(family)
        if name not in pdfmetrics.standardFonts:
            raise SerializationError(f"Font '{name}' is not one of the standard PDF fonts.")
        return cls(name)

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)

    def height_at_size(self, size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self.name, size)
        return ascent - descent


@dataclass(eq=False)
class ImageHandle:
    """
    A decoded PNG or JPEG image ready to be drawn.

    Attributes:
        data: Encoded image bytes
        kind: Declared image kind
        width: Intrinsic width in pixels, drawn as points at scale 1
        height: Intrinsic height in pixels
    """
    data: bytes = field(repr=False)
    kind: ImageKind
    width: int
    height: int
    reader: ImageReader = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reader = ImageReader(io.BytesIO(self.data))

    @classmethod
    def decode(cls, data: bytes, kind: ImageKind) -> "ImageHandle":
        """Decode *data* and check that it really is an image of *kind*."""
        kind = ImageKind(kind)
        if not data:
            raise UnsupportedImageFormatError("Image data is empty.")
        try:
            with Image.open(io.BytesIO(data)) as image:
                detected = image.format
                width, height = image.size
                image.load()
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise UnsupportedImageFormatError(
                f"Image data could not be decoded as {kind.pillow_format}: {exc}"
            ) from exc

        if detected not in kind.pillow_formats:
            raise UnsupportedImageFormatError(
                f"Expected a {kind.pillow_format} image but found {detected or 'unknown data'}."
            )
        return cls(data=data, kind=kind, width=width, height=height)

    def scale(self, factor: float) -> tuple[float, float]:
        return (self.width * factor, self.height * factor)


__all__ = ["StandardFont", "FontHandle", "ImageHandle"]

"""
Type definitions and dataclasses for pdfbinder.

This module defines the immutable value objects passed between callers and
the engine: colours, watermark settings, document metadata, logo images and
named input/output buffers.
"""

from __future__ import annotations

import logging
import mimetypes
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import List, Optional

from .exceptions import UnsupportedImageFormatError

LOGGER = logging.getLogger("pdfbinder.types")

DEFAULT_WATERMARK_TEXT = "vtunotesforall"

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class RGB:
    """An RGB colour with channels in the 0..1 range."""

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"Colour channels must be within [0, 1], got {channel}")

    @classmethod
    def from_hex(cls, value: str) -> "RGB":
        """Parse ``#rrggbb``; malformed strings fall back to the strict grey."""
        match = _HEX_COLOR.match(value.strip())
        if not match:
            LOGGER.warning("Invalid hex colour %r, using default grey", value)
            return STRICT_WATERMARK_COLOR
        red, green, blue = (int(group, 16) / 255 for group in match.groups())
        return cls(red, green, blue)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_hex(self) -> str:
        return "#" + "".join(f"{round(channel * 255):02x}" for channel in self.as_tuple())


STRICT_WATERMARK_COLOR = RGB(0.5, 0.5, 0.5)


class ImageKind(str, Enum):
    """Raster formats that can be embedded into an output document."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def pillow_format(self) -> str:
        return self.value.upper()

    @property
    def pillow_formats(self) -> tuple[str, ...]:
        # JPEGs carrying an MPF segment decode as MPO
        if self is ImageKind.JPEG:
            return ("JPEG", "MPO")
        return (self.pillow_format,)


_MIME_KINDS = {
    "image/png": ImageKind.PNG,
    "image/jpeg": ImageKind.JPEG,
    "image/jpg": ImageKind.JPEG,
    "image/pjpeg": ImageKind.JPEG,
}

_EXTENSION_KINDS = {
    ".png": ImageKind.PNG,
    ".jpg": ImageKind.JPEG,
    ".jpeg": ImageKind.JPEG,
}


@dataclass(frozen=True)
class LogoImage:
    """
    Raw logo bytes supplied by a caller.

    Attributes:
        data: Encoded image bytes
        filename: Original file name, used to infer the format
        mime_type: Declared MIME type, preferred over the file name
    """
    data: bytes = field(repr=False)
    filename: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def kind(self) -> ImageKind:
        """Return the image kind declared by MIME type or file extension."""
        if self.mime_type:
            kind = _MIME_KINDS.get(self.mime_type.lower())
            if kind is None:
                raise UnsupportedImageFormatError(
                    f"Unsupported logo type '{self.mime_type}'. Use a PNG or JPEG image."
                )
            return kind

        if self.filename:
            kind = _EXTENSION_KINDS.get(PurePath(self.filename).suffix.lower())
            if kind is not None:
                return kind

        raise UnsupportedImageFormatError(
            f"Cannot determine image type of logo '{self.filename or '<unnamed>'}'. "
            "Use a PNG or JPEG image."
        )

    @classmethod
    def from_filename(cls, filename: str, data: bytes) -> "LogoImage":
        mime_type, _ = mimetypes.guess_type(filename)
        return cls(data=data, filename=PurePath(filename).name, mime_type=mime_type)


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class WatermarkConfig:
    """
    Watermark placement and styling.

    Attributes:
        diagonal: Draw the stamp rotated by +60 degrees across the page
        bottom: Draw a small footer stamp 15pt above the bottom edge
        top: Draw a small header stamp 25pt below the top edge
        crossed: Draw the stamp rotated by -60 degrees across the page
        text_color: Stamp colour
        text_opacity: Stamp opacity
        logo: Optional logo drawn centred behind the text
        logo_opacity: Logo opacity
        logo_scale: Logo width as a fraction of the page width
        text: Stamp text; ``None`` uses the configured default
    """
    diagonal: bool = True
    bottom: bool = True
    top: bool = False
    crossed: bool = False
    text_color: RGB = STRICT_WATERMARK_COLOR
    text_opacity: float = 0.2
    logo: Optional[LogoImage] = None
    logo_opacity: float = 0.5
    logo_scale: float = 0.5
    text: Optional[str] = None

    def __post_init__(self) -> None:
        _check_unit_interval("text_opacity", self.text_opacity)
        _check_unit_interval("logo_opacity", self.logo_opacity)
        _check_unit_interval("logo_scale", self.logo_scale)

    @property
    def stamp_text(self) -> str:
        return self.text or DEFAULT_WATERMARK_TEXT

    @property
    def draws_anything(self) -> bool:
        return any((self.diagonal, self.bottom, self.top, self.crossed, self.logo is not None))


STRICT_WATERMARK_CONFIG = WatermarkConfig(
    diagonal=True,
    bottom=True,
    top=False,
    crossed=False,
    text_color=STRICT_WATERMARK_COLOR,
    text_opacity=0.2,
    logo=None,
    logo_opacity=0.5,
    logo_scale=0.5,
)


@dataclass(frozen=True)
class PdfMetadata:
    """Document information written to an output before serialization."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None

    def as_document_info(self, creator: Optional[str] = None) -> dict[str, str]:
        """Return the ``/Info`` entries for fields that are present."""
        info: dict[str, str] = {}
        for key, value in (("/Title", self.title), ("/Author", self.author), ("/Subject", self.subject)):
            if value is not None and value.strip():
                info[key] = value.strip()
        if creator:
            info["/Creator"] = creator
        return info


@dataclass(frozen=True)
class SourceFile:
    """A named input buffer."""

    name: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class ProcessedFile:
    """
    One output of batch processing.

    Attributes:
        original_name: Name of the content file that produced this output
        download_filename: Suggested file name for the output
        data: Serialized PDF bytes
    """
    original_name: str
    download_filename: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class BatchFailure:
    """A content file that failed when failures are isolated."""

    original_name: str
    error: str


@dataclass
class BatchResult:
    """
    Result of a batch processing run.

    Attributes:
        files: Outputs in content-file order
        failures: Files that failed (only populated when failures are isolated)
    """
    files: List[ProcessedFile] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.files) + len(self.failures)

    @property
    def success(self) -> bool:
        return not self.failures

    def __str__(self) -> str:
        return f"BatchResult(total={self.total}, processed={len(self.files)}, failed={len(self.failures)})"


__all__ = [
    "DEFAULT_WATERMARK_TEXT",
    "RGB",
    "STRICT_WATERMARK_COLOR",
    "ImageKind",
    "LogoImage",
    "WatermarkConfig",
    "STRICT_WATERMARK_CONFIG",
    "PdfMetadata",
    "SourceFile",
    "ProcessedFile",
    "BatchFailure",
    "BatchResult",
]

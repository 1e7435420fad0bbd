"""
Custom exceptions for pdfbinder.

Every engine failure aborts the operation in progress; callers never receive
a partially assembled buffer.
"""

from __future__ import annotations

from typing import Iterable


class PdfBinderError(Exception):
    """Base exception for all pdfbinder errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF processing error occurred."


class ParseError(PdfBinderError):
    """Raised when a source buffer cannot be read as a PDF document."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF data."


class IndexOutOfRangeError(PdfBinderError, IndexError):
    """Raised when a page index is not present in a source document."""

    @property
    def default_message(self) -> str:
        return "Requested page index is out of range."


class UnsupportedImageFormatError(PdfBinderError):
    """Raised when logo data is not a PNG or JPEG image."""

    @property
    def default_message(self) -> str:
        return "Unsupported image format. Only PNG and JPEG images can be embedded."


class MissingSourceError(PdfBinderError):
    """Raised when an editor page references a source that was not supplied."""

    def __init__(self, message: str = "", missing_ids: Iterable[str] = ()) -> None:
        self.missing_ids = tuple(missing_ids)
        if not message and self.missing_ids:
            message = "Missing source document(s): " + ", ".join(self.missing_ids)
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "A page references a source document that was not supplied."


class SerializationError(PdfBinderError):
    """Raised when an output document cannot be assembled or written."""

    @property
    def default_message(self) -> str:
        return "Failed to serialize the output document."


class MergeError(PdfBinderError):
    """Raised when a single-output merge fails for any reason."""

    @property
    def default_message(self) -> str:
        return "Failed to process PDFs. Ensure files are valid."


class ConfigurationError(PdfBinderError):
    """Raised when settings cannot be loaded or hold invalid values."""

    @property
    def default_message(self) -> str:
        return "Invalid pdfbinder configuration."


__all__ = [
    "PdfBinderError",
    "ParseError",
    "IndexOutOfRangeError",
    "UnsupportedImageFormatError",
    "MissingSourceError",
    "SerializationError",
    "MergeError",
    "ConfigurationError",
]

"""Utilities shared by the pdfbinder pipelines and command line interface."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

ProgressCallback = Callable[[float], None]

_PDF_EXTENSION = re.compile(r"\.pdf$", re.IGNORECASE)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level)
    return logger


class ProgressReporter:
    """Forward progress percentages to an optional callback.

    Values are clamped to ``[0, 100]`` and never go backwards within one
    reporter, so callers can draw a progress bar from the raw values.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._callback = callback
        self.last = 0.0

    def __call__(self, value: float) -> None:
        value = max(self.last, min(100.0, max(0.0, float(value))))
        self.last = value
        if self._callback is not None:
            self._callback(value)


def output_filename(original_name: str, suffix: str | None) -> str:
    """Return ``name_suffix.pdf`` for *original_name*.

    The suffix is not repeated when the stem already ends with it, and a blank
    suffix leaves the stem untouched.
    """

    stem = _PDF_EXTENSION.sub("", original_name)
    clean_suffix = (suffix or "").strip()
    if not clean_suffix:
        return f"{stem}.pdf"
    if stem.endswith(f"_{clean_suffix}") or stem.endswith(clean_suffix):
        return f"{stem}.pdf"
    return f"{stem}_{clean_suffix}.pdf"


__all__ = ["ProgressCallback", "ProgressReporter", "get_logger", "output_filename"]

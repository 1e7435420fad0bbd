"""Watermark stamping for the :mod:`pdfbinder` toolkit."""

from __future__ import annotations

from .engine import (
    apply_watermark,
    edge_opacity,
    embed_logo,
    rotated_font_size,
    rotated_text_origin,
    watermark_pages,
)

__all__ = [
    "apply_watermark",
    "edge_opacity",
    "embed_logo",
    "rotated_font_size",
    "rotated_text_origin",
    "watermark_pages",
]

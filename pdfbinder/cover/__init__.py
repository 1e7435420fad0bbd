"""Default cover page synthesis for the :mod:`pdfbinder` toolkit."""

from __future__ import annotations

from .synthesizer import COVER_HEIGHT, COVER_WIDTH, draw_cover_page

__all__ = ["COVER_WIDTH", "COVER_HEIGHT", "draw_cover_page"]

"""Page editor for the :mod:`pdfbinder` toolkit."""

from __future__ import annotations

from .compiler import SourceCache, compile_pages, missing_sources
from .pages import EditorPage, SourceId, SourceState
from .session import EditorSession
from .thumbnails import render_thumbnail, render_thumbnails

__all__ = [
    "EditorPage",
    "EditorSession",
    "SourceCache",
    "SourceId",
    "SourceState",
    "compile_pages",
    "missing_sources",
    "render_thumbnail",
    "render_thumbnails",
]

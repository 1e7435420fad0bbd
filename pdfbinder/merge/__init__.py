"""Merge utilities for the :mod:`pdfbinder` toolkit."""

from __future__ import annotations

from .combiner import combine
from .pipeline import merge_with_cover, process_batch, process_batch_file

__all__ = [
    "combine",
    "merge_with_cover",
    "process_batch",
    "process_batch_file",
]

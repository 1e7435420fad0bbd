"""Concatenation of already processed outputs."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..backends import DEFAULT_BACKEND, PDFBackend
from ..settings import DEFAULT_SETTINGS, BinderSettings

LOGGER = logging.getLogger("pdfbinder.merge")


def combine(
    buffers: Iterable[bytes],
    *,
    settings: Optional[BinderSettings] = None,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Concatenate every page of *buffers*, in order, into one PDF.

    Pages are copied as they are: nothing is stamped and rotations are kept.
    """

    settings = settings or DEFAULT_SETTINGS
    backend = backend or DEFAULT_BACKEND

    output = backend.create_empty()
    count = 0
    for count, data in enumerate(buffers, start=1):
        pages = output.append_all(backend.parse(data))
        LOGGER.debug("Combined buffer %d with %d page(s)", count, len(pages))

    output.set_metadata(None, settings.creator)
    result = output.serialize()
    LOGGER.info("Combined %d buffer(s) into %d page(s)", count, output.page_count)
    return result


__all__ = ["combine"]

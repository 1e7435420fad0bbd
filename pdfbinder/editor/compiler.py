"""Compile an edited page list back into a single PDF."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

from ..backends import DEFAULT_BACKEND, PDFBackend, SourceDocument
from ..exceptions import MissingSourceError
from ..settings import DEFAULT_SETTINGS, BinderSettings
from ..types import PdfMetadata
from .pages import EditorPage, SourceId

LOGGER = logging.getLogger("pdfbinder.editor")


class SourceCache:
    """Parse each source buffer at most once while the cache is open.

    The cache is a context manager; parsed documents are dropped on exit.
    """

    def __init__(self, sources: Mapping[SourceId, bytes], backend: Optional[PDFBackend] = None) -> None:
        self._sources = sources
        self._backend = backend or DEFAULT_BACKEND
        self._documents: Dict[SourceId, SourceDocument] = {}

    def __enter__(self) -> "SourceCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, source_id: SourceId) -> SourceDocument:
        document = self._documents.get(source_id)
        if document is None:
            if source_id not in self._sources:
                raise MissingSourceError(missing_ids=[source_id])
            document = self._backend.parse(self._sources[source_id])
            self._documents[source_id] = document
            LOGGER.debug("Parsed source %s (%d page(s))", source_id, document.page_count)
        return document

    def clear(self) -> None:
        self._documents.clear()


def missing_sources(pages: Sequence[EditorPage], sources: Mapping[SourceId, bytes]) -> list[SourceId]:
    """Return the referenced source ids absent from *sources*, in first-use order."""
    missing: list[SourceId] = []
    for page in pages:
        if page.source_id not in sources and page.source_id not in missing:
            missing.append(page.source_id)
    return missing


def compile_pages(
    pages: Sequence[EditorPage],
    sources: Mapping[SourceId, bytes],
    *,
    metadata: Optional[PdfMetadata] = None,
    settings: Optional[BinderSettings] = None,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Build one PDF from *pages* in list order.

    Each output page is a copy of the referenced source page with its
    rotation advanced by the page's ``rotation_delta``. A reference to a
    source id absent from *sources* fails before any work is done.
    """

    missing = missing_sources(pages, sources)
    if missing:
        LOGGER.error("Cannot compile, missing source(s): %s", ", ".join(missing))
        raise MissingSourceError(missing_ids=missing)

    settings = settings or DEFAULT_SETTINGS
    backend = backend or DEFAULT_BACKEND
    output = backend.create_empty()

    with SourceCache(sources, backend) as cache:
        for page in pages:
            document = cache.get(page.source_id)
            for selected in output.copy_pages(document, [page.original_page_index]):
                added = output.append_page(selected)
                added.rotation = (added.rotation + page.rotation_delta) % 360

        if metadata is not None:
            output.set_metadata(metadata, settings.creator)
        result = output.serialize()
        LOGGER.info("Compiled %d page(s) from %d source(s)", len(pages), len(cache))

    return result


__all__ = ["SourceCache", "compile_pages", "missing_sources"]

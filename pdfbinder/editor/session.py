"""Stateful page editor: upload sources, rearrange pages, compile."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..backends import DEFAULT_BACKEND, PDFBackend
from ..exceptions import IndexOutOfRangeError, MissingSourceError
from ..settings import DEFAULT_SETTINGS, BinderSettings
from ..types import PdfMetadata, SourceFile
from .compiler import compile_pages
from .pages import EditorPage, SourceId, SourceState
from .thumbnails import render_thumbnails

LOGGER = logging.getLogger("pdfbinder.editor")


@dataclass
class _Source:
    name: str
    data: bytes = field(repr=False)
    page_count: int
    state: SourceState = SourceState.UPLOADED


class EditorSession:
    """Working list of pages drawn from any number of uploaded sources.

    Every edit replaces :class:`EditorPage` values rather than mutating them;
    the source buffers are only parsed again when :meth:`compile` runs.
    """

    def __init__(
        self,
        *,
        settings: Optional[BinderSettings] = None,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._backend = backend or DEFAULT_BACKEND
        self._sources: Dict[SourceId, _Source] = {}
        self._pages: List[EditorPage] = []

    def __len__(self) -> int:
        return len(self._pages)

    @property
    def pages(self) -> tuple[EditorPage, ...]:
        return tuple(self._pages)

    @property
    def sources(self) -> Dict[SourceId, SourceFile]:
        return {source_id: SourceFile(source.name, source.data) for source_id, source in self._sources.items()}

    def state_of(self, source_id: SourceId) -> SourceState:
        return self._source(source_id).state

    def _source(self, source_id: SourceId) -> _Source:
        try:
            return self._sources[source_id]
        except KeyError:
            raise MissingSourceError(missing_ids=[source_id]) from None

    def _position(self, page_id: str) -> int:
        for position, page in enumerate(self._pages):
            if page.id == page_id:
                return position
        raise KeyError(f"Unknown page id: {page_id}")

    def add_source(self, data: bytes, name: str, *, thumbnails: bool = True) -> List[EditorPage]:
        """Register *data* and append one page entry per source page, in order."""
        document = self._backend.parse(data)
        source_id = SourceId(uuid.uuid4().hex)
        source = _Source(name=name, data=data, page_count=document.page_count)

        previews: Sequence[Optional[bytes]] = [None] * document.page_count
        if thumbnails and document.page_count:
            previews = render_thumbnails(data, self._settings.thumbnail_scale)
            source.state = SourceState.THUMBNAILED

        added = [
            EditorPage(
                id=uuid.uuid4().hex,
                source_id=source_id,
                original_page_index=index,
                thumbnail=previews[index],
            )
            for index in range(document.page_count)
        ]
        self._sources[source_id] = source
        self._pages.extend(added)
        LOGGER.debug("Added source %s (%s) with %d page(s)", source_id, name, len(added))
        return added

    def rotate(self, page_id: str) -> EditorPage:
        position = self._position(page_id)
        self._pages[position] = self._pages[position].rotated()
        return self._pages[position]

    def remove(self, page_id: str) -> EditorPage:
        return self._pages.pop(self._position(page_id))

    def move(self, page_id: str, index: int) -> None:
        """Move a page so it ends up at position *index* of the list."""
        if not 0 <= index < len(self._pages):
            raise IndexOutOfRangeError(f"Position {index} is out of range for {len(self._pages)} page(s).")
        page = self._pages.pop(self._position(page_id))
        self._pages.insert(index, page)

    def reorder(self, page_ids: Sequence[str]) -> None:
        """Put the pages in the order of *page_ids*, a permutation of the current ids."""
        by_id = {page.id: page for page in self._pages}
        if len(page_ids) != len(by_id) or set(page_ids) != set(by_id):
            raise ValueError("New order must list every current page id exactly once")
        self._pages = [by_id[page_id] for page_id in page_ids]

    def remove_source(self, source_id: SourceId) -> None:
        """Forget a source together with every page taken from it."""
        self._source(source_id)
        del self._sources[source_id]
        self._pages = [page for page in self._pages if page.source_id != source_id]

    def compile(self, metadata: Optional[PdfMetadata] = None) -> bytes:
        data = compile_pages(
            self._pages,
            {source_id: source.data for source_id, source in self._sources.items()},
            metadata=metadata,
            settings=self._settings,
            backend=self._backend,
        )
        for page in self._pages:
            self._sources[page.source_id].state = SourceState.COMPILED
        return data


__all__ = ["EditorSession"]

"""Value types of the page editor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NewType, Optional

SourceId = NewType("SourceId", str)

QUARTER_TURN = 90


class SourceState(str, Enum):
    """Lifecycle of a source file inside an editor session."""

    UPLOADED = "uploaded"
    THUMBNAILED = "thumbnailed"
    COMPILED = "compiled"


@dataclass(frozen=True)
class EditorPage:
    """
    One page of the editor's working list.

    Attributes:
        id: Identity of this entry in the list
        source_id: Source file the page comes from
        original_page_index: 0-based index of the page in its source
        rotation_delta: Clockwise rotation added on compile, one of 0/90/180/270
        thumbnail: PNG preview, if one was rendered
    """
    id: str
    source_id: SourceId
    original_page_index: int
    rotation_delta: int = 0
    thumbnail: Optional[bytes] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.rotation_delta % QUARTER_TURN or not 0 <= self.rotation_delta < 360:
            raise ValueError(f"rotation_delta must be one of 0, 90, 180, 270, got {self.rotation_delta}")
        if self.original_page_index < 0:
            raise ValueError(f"original_page_index must not be negative, got {self.original_page_index}")

    def rotated(self) -> "EditorPage":
        """Return a copy turned a further 90 degrees clockwise."""
        return replace(self, rotation_delta=(self.rotation_delta + QUARTER_TURN) % 360)


__all__ = ["SourceId", "SourceState", "EditorPage", "QUARTER_TURN"]

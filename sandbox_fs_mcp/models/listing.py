from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class DirectoryEntry(BaseModel):
    """Metadata of a single directory entry, read at traversal time."""

    name: str
    kind: EntryKind
    size: int = 0
    modified: datetime | None = None
    link_target: str | None = None  # Only set for symlinks


class ListingResult(BaseModel):
    """Rendered tree lines plus the aggregates collected while walking."""

    lines: list[str] = Field(default_factory=list)
    file_count: int = 0
    dir_count: int = 0
    total_size: int = 0
    inaccessible_count: int = 0

    @property
    def had_partial_failures(self) -> bool:
        """True when at least one entry or directory could not be read."""
        return self.inaccessible_count > 0

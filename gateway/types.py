"""Gateway data type definitions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EntryKind(str, Enum):
    FOLDER = "Folder"
    FILE = "File"

    @property
    def sort_order(self) -> int:
        """Folders list before files."""
        return 0 if self is EntryKind.FOLDER else 1


@dataclass(frozen=True)
class ShareStat:
    """
    Raw metadata reported by a share client for one path.

    Times are epoch seconds; 0 means the share reported no value.
    """
    name: str
    path: str
    is_directory: bool
    size: int = 0
    created: float = 0.0
    modified: float = 0.0


@dataclass(frozen=True)
class ShareEntry:
    """
    One listed child of a share directory.
    """
    name: str
    kind: EntryKind
    size_bytes: int
    size_display: str
    full_path: str
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


@dataclass(frozen=True)
class ByteRange:
    """
    Inclusive byte range within a resource of ``total`` bytes.
    """
    start: int
    end: int
    total: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.total}"

"""Pydantic schemas for file operation endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gateway.types import ShareEntry


class ShareEntryResponse(BaseModel):
    """Response model for one listed file or folder."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str
    size: int
    formatted_size: str = Field(alias="formattedSize")
    date_created: Optional[datetime] = Field(default=None, alias="dateCreated")
    date_modified: Optional[datetime] = Field(default=None, alias="dateModified")
    full_path: str = Field(alias="fullPath")

    @classmethod
    def from_entry(cls, entry: ShareEntry) -> "ShareEntryResponse":
        return cls(
            name=entry.name,
            type=entry.kind.value,
            size=entry.size_bytes,
            formatted_size=entry.size_display,
            date_created=entry.created_at,
            date_modified=entry.modified_at,
            full_path=entry.full_path,
        )


class ExistsResponse(BaseModel):
    """Response model for existence checks."""
    exists: bool

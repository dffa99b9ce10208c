"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ListCommand:
    """List a share directory."""

    remote_dir: str = ""
    command: Literal["ls"] = "ls"


@dataclass(frozen=True)
class UploadCommand:
    """Upload a local file into a share directory."""

    local_file: str
    remote_dir: str = ""
    overwrite: bool = True
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class DownloadCommand:
    """Download a share file, resuming a partial local copy."""

    remote_path: str
    output_path: str | None = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class ExistsCommand:
    """Check whether a share path exists."""

    remote_path: str
    command: Literal["exists"] = "exists"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a share path."""

    remote_path: str
    command: Literal["rm"] = "rm"


CommandRequest = (
    ListCommand
    | UploadCommand
    | DownloadCommand
    | ExistsCommand
    | DeleteCommand
)

"""Protocol-agnostic share client capability interface."""

from abc import ABC, abstractmethod
from typing import List

from common.constants import STREAM_PIECE_SIZE_BYTES
from gateway.types import ShareStat


class ShareReader(ABC):
    """
    Open read handle on a share file.

    ``size`` is the total length of the file as reported by the opened stream.
    """

    size: int = 0
    seekable: bool = True

    @abstractmethod
    async def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; returns b"" at end of file."""

    @abstractmethod
    async def seek(self, offset: int) -> None:
        """Move to an absolute offset. Only valid when ``seekable`` is true."""

    @abstractmethod
    async def close(self) -> None:
        """Release the handle."""

    async def advance_to(self, offset: int) -> None:
        """
        Position the stream at ``offset`` from the start of the file.

        Streams that cannot seek are advanced by reading and discarding,
        so this must be called on a freshly opened reader.
        """
        if self.seekable:
            await self.seek(offset)
            return

        remaining = offset
        while remaining > 0:
            piece = await self.read(min(remaining, STREAM_PIECE_SIZE_BYTES))
            if not piece:
                break
            remaining -= len(piece)


class ShareWriter(ABC):
    """Open write handle on a share file."""

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Write all of ``data``."""

    @abstractmethod
    async def close(self) -> None:
        """Flush and release the handle."""


class ShareClient(ABC):
    """
    Operations against paths addressed inside the remote share.

    Paths are canonical share URLs as produced by ``PathResolver``.
    Implementations must be safe for concurrent use by many requests.
    """

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True when a file or directory exists at ``path``."""

    @abstractmethod
    async def stat(self, path: str) -> ShareStat:
        """
        Raises:
            ShareNotFoundError: If nothing exists at ``path``
        """

    @abstractmethod
    async def list_dir(self, path: str) -> List[ShareStat]:
        """
        List the direct children of a directory.

        Raises:
            ShareNotFoundError: If the directory does not exist
        """

    @abstractmethod
    async def open_read(self, path: str) -> ShareReader:
        """
        Raises:
            ShareNotFoundError: If the file does not exist
        """

    @abstractmethod
    async def open_write(self, path: str) -> ShareWriter:
        """Create or truncate the file at ``path`` for writing."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete a file, or a directory and all of its contents."""

    @abstractmethod
    async def mkdirs(self, path: str) -> None:
        """Create a directory and all missing ancestors; no error if present."""

    @abstractmethod
    async def rename(self, src: str, dst: str, replace: bool = False) -> None:
        """
        Move ``src`` to ``dst``.

        Raises:
            ShareEntryExistsError: If ``dst`` exists and ``replace`` is False
        """

    async def close(self) -> None:
        """Release connections held by the client."""

"""File service for the share bridge operations."""

import posixpath
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional

from common.constants import STREAM_PIECE_SIZE_BYTES, TEMP_UPLOAD_SUFFIX
from common.formatting import format_size
from common.logging_config import get_logger
from gateway.exceptions import (
    GatewayException,
    InvalidInputError,
    ShareEntryExistsError,
    ShareNotFoundError,
)
from gateway.services.path_resolver import PathResolver, join_relative, split_relative
from gateway.services.range_parser import parse_range_header
from gateway.share.client import ShareClient, ShareReader
from gateway.types import ByteRange, EntryKind, ShareEntry, ShareStat

logger = get_logger(__name__)


@dataclass
class FileDownload:
    """
    An opened download, ready to be streamed.

    ``body`` closes the backing share handle once it is exhausted or
    abandoned, so it must be consumed at most once. A body that is never
    started is released through ``close()``.
    """
    file_name: str
    size: int
    byte_range: Optional[ByteRange]
    reader: ShareReader
    body: Optional[AsyncIterator[bytes]] = None
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def content_length(self) -> int:
        return self.byte_range.length if self.byte_range else self.size

    async def close(self) -> None:
        """Release the share handle; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self.reader.close()


def _to_datetime(raw: float) -> Optional[datetime]:
    if raw and raw > 0:
        return datetime.fromtimestamp(raw, tz=timezone.utc)
    return None


class FileService:
    def __init__(self, share_client: ShareClient, resolver: PathResolver):
        self.share_client = share_client
        self.resolver = resolver

    async def list_entries(self, relative_path: str = "") -> List[ShareEntry]:
        """
        List a share directory, folders first and then by name.

        Raises:
            ShareNotFoundError: If the directory does not exist
        """
        directory = self.resolver.resolve_directory(relative_path)
        children = await self.share_client.list_dir(directory)

        entries = [self._to_entry(directory, child) for child in children]
        entries.sort(key=lambda entry: (entry.kind.sort_order, entry.name))

        logger.debug(f"Listed {len(entries)} entries in {directory}")
        return entries

    def _to_entry(self, directory: str, child: ShareStat) -> ShareEntry:
        name = child.name.rstrip("/\\")
        if child.is_directory:
            kind, size, size_display = EntryKind.FOLDER, 0, ""
        else:
            kind, size = EntryKind.FILE, child.size
            size_display = format_size(size)

        return ShareEntry(
            name=name,
            kind=kind,
            size_bytes=size,
            size_display=size_display,
            full_path=directory + name,
            created_at=_to_datetime(child.created),
            modified_at=_to_datetime(child.modified),
        )

    async def upload_file(
        self,
        relative_dir: str,
        file_name: str,
        content: AsyncIterator[bytes],
        overwrite: bool = True,
    ) -> str:
        """
        Store an uploaded file under ``relative_dir``.

        Content is written to a hidden temporary sibling first and renamed
        into place once complete; a failed or cancelled upload removes the
        temporary file and never leaves a partial file under the final name.

        Args:
            relative_dir: Destination directory relative to the base ("" for root)
            file_name: Name of the uploaded file
            content: Async iterator of content chunks
            overwrite: Replace an existing file instead of picking name_N.ext

        Returns:
            Relative path the content was stored under

        Raises:
            InvalidInputError: If the file name or content is missing
        """
        name = (file_name or "").replace("\\", "/").rsplit("/", 1)[-1]
        if not name or name in (".", ".."):
            raise InvalidInputError("File is missing")

        target_rel = self.resolver.normalize(join_relative(relative_dir, name))
        directory_rel, name = split_relative(target_rel)

        chunks = content.__aiter__()
        first_chunk = b""
        while not first_chunk:
            try:
                first_chunk = await chunks.__anext__()
            except StopAsyncIteration:
                raise InvalidInputError("File is missing")

        parent = self.resolver.resolve_directory(directory_rel)
        if not await self.share_client.exists(parent):
            logger.info(f"Creating missing directory {parent}")
            await self.share_client.mkdirs(parent)

        temp_path = self.resolver.resolve(
            join_relative(directory_rel, f".{name}.{uuid.uuid4().hex[:12]}{TEMP_UPLOAD_SUFFIX}")
        )
        written = await self._write_temp(temp_path, first_chunk, chunks)

        try:
            stored_rel = await self._commit(temp_path, directory_rel, name, overwrite)
        except BaseException:
            await self._discard(temp_path)
            raise

        logger.info(f"Uploaded {written} bytes to {stored_rel} (overwrite={overwrite})")
        return stored_rel

    async def _write_temp(self, temp_path: str, first_chunk: bytes, chunks: AsyncIterator[bytes]) -> int:
        writer = await self.share_client.open_write(temp_path)
        written = 0
        try:
            try:
                await writer.write(first_chunk)
                written += len(first_chunk)
                async for piece in chunks:
                    if piece:
                        await writer.write(piece)
                        written += len(piece)
            finally:
                await writer.close()
        except BaseException:
            logger.warning(f"Upload to {temp_path} aborted after {written} bytes")
            await self._discard(temp_path)
            raise
        return written

    async def _commit(self, temp_path: str, directory_rel: str, name: str, overwrite: bool) -> str:
        target_rel = join_relative(directory_rel, name)
        target = self.resolver.resolve(target_rel)

        if overwrite:
            if await self.share_client.exists(target):
                logger.info(f"Overwriting existing file {target}")
                await self.share_client.delete(target)
            await self.share_client.rename(temp_path, target, replace=True)
            return target_rel

        stem, extension = posixpath.splitext(name)
        counter = 0
        candidate_rel = target_rel
        while True:
            candidate = self.resolver.resolve(candidate_rel)
            if not await self.share_client.exists(candidate):
                try:
                    await self.share_client.rename(temp_path, candidate, replace=False)
                    if counter:
                        logger.info(f"Name {target_rel} taken, stored as {candidate_rel}")
                    return candidate_rel
                except ShareEntryExistsError:
                    logger.info(f"Name {candidate_rel} was claimed concurrently, probing further")
            counter += 1
            candidate_rel = join_relative(directory_rel, f"{stem}_{counter}{extension}")

    async def _discard(self, path: str) -> None:
        try:
            if await self.share_client.exists(path):
                await self.share_client.delete(path)
                logger.info(f"Removed incomplete upload {path}")
        except GatewayException as e:
            logger.error(f"Failed to remove incomplete upload {path}: {e}")

    async def open_download(self, relative_path: str, range_header: Optional[str] = None) -> FileDownload:
        """
        Open a file for a full or single-range download.

        Raises:
            ShareNotFoundError: If the file does not exist
            InvalidRangeError: If the Range header is malformed or unsatisfiable
        """
        path = self.resolver.resolve(relative_path)
        if path.endswith("/"):
            raise ShareNotFoundError(f"File not found: {relative_path}")

        reader = await self.share_client.open_read(path)
        try:
            byte_range = parse_range_header(range_header, reader.size)
            if byte_range:
                await reader.advance_to(byte_range.start)
        except BaseException:
            await reader.close()
            raise

        length = byte_range.length if byte_range else reader.size
        if byte_range:
            logger.info(f"Serving {byte_range.content_range} of {path}")
        else:
            logger.info(f"Serving {path} ({reader.size} bytes)")

        download = FileDownload(
            file_name=path.rsplit("/", 1)[-1],
            size=reader.size,
            byte_range=byte_range,
            reader=reader,
        )
        download.body = self._stream(download, path, length)
        return download

    async def _stream(self, download: FileDownload, path: str, length: int) -> AsyncIterator[bytes]:
        remaining = length
        try:
            while remaining > 0:
                piece = await download.reader.read(min(STREAM_PIECE_SIZE_BYTES, remaining))
                if not piece:
                    logger.warning(f"Short read on {path}: {remaining} of {length} bytes missing")
                    break
                remaining -= len(piece)
                yield piece
        finally:
            await download.close()

    async def exists(self, relative_path: str) -> bool:
        return await self.share_client.exists(self.resolver.resolve(relative_path))

    async def delete(self, relative_path: str) -> None:
        """Delete a file or a folder with its contents; absent paths are ignored."""
        if not self.resolver.normalize(relative_path):
            raise InvalidInputError("Refusing to delete the share root")

        path = self.resolver.resolve(relative_path)
        if not await self.share_client.exists(path):
            logger.info(f"Delete skipped, {path} does not exist")
            return

        try:
            await self.share_client.delete(path)
        except ShareNotFoundError:
            logger.info(f"Delete raced with removal of {path}")
            return
        logger.info(f"Deleted {path}")

    async def ping(self) -> bool:
        """Return True when the base location is reachable."""
        try:
            return await self.share_client.exists(self.resolver.resolve(""))
        except GatewayException as e:
            logger.warning(f"Share readiness check failed: {e}")
            return False

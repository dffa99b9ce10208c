"""SMB implementation of the share client on top of smbclient (smbprotocol)."""

import asyncio
import errno
import functools
import stat as stat_module
from typing import List

import smbclient
import smbclient.path
import smbclient.shutil
from smbprotocol.exceptions import SMBException

from common.logging_config import get_logger
from gateway.config import ShareSettings
from gateway.exceptions import (
    GatewayException,
    ShareEntryExistsError,
    ShareNotFoundError,
    ShareOperationError,
)
from gateway.share.client import ShareClient, ShareReader, ShareWriter
from gateway.types import ShareStat

logger = get_logger(__name__)

_NOT_FOUND_ERRNOS = (errno.ENOENT, errno.ENOTDIR, errno.EISDIR)


def to_unc(path: str) -> str:
    """
    Convert a canonical share URL into the UNC form smbclient expects.

    ``smb://nas/share/dir/file.txt`` and ``//nas/share/dir/file.txt`` both
    become ``\\\\nas\\share\\dir\\file.txt``.
    """
    if path.lower().startswith("smb:"):
        path = path[4:]
    path = path.replace("\\", "/").strip("/")
    return "\\\\" + path.replace("/", "\\")


def server_of(path: str) -> str:
    """Return the host component of a share URL or UNC path."""
    return to_unc(path)[2:].split("\\", 1)[0]


def translate_error(exc: Exception, path: str) -> GatewayException:
    """Map smbclient failures onto the gateway exception hierarchy."""
    code = getattr(exc, "errno", None)
    if code in _NOT_FOUND_ERRNOS:
        return ShareNotFoundError(f"Share path not found: {path}")
    if code == errno.EEXIST:
        return ShareEntryExistsError(f"Share path already exists: {path}")
    return ShareOperationError(f"Share operation failed on {path}: {exc}")


class _Executor:
    """Runs blocking smbclient calls off the event loop and translates their errors."""

    def __init__(self, session_kwargs: dict):
        self.session_kwargs = session_kwargs

    async def call(self, path: str, func, *args, with_session: bool = True, **kwargs):
        if with_session:
            kwargs.update(self.session_kwargs)
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except (OSError, SMBException) as e:
            raise translate_error(e, path) from e


class SmbFileReader(ShareReader):
    """Read handle over an smbclient file object."""

    def __init__(self, fd, size: int, path: str, executor: _Executor):
        self._fd = fd
        self._path = path
        self._executor = executor
        self.size = size
        self.seekable = fd.seekable()

    async def read(self, size: int) -> bytes:
        return await self._executor.call(self._path, self._fd.read, size, with_session=False)

    async def seek(self, offset: int) -> None:
        await self._executor.call(self._path, self._fd.seek, offset, with_session=False)

    async def close(self) -> None:
        await self._executor.call(self._path, self._fd.close, with_session=False)


class SmbFileWriter(ShareWriter):
    """Write handle over an smbclient file object."""

    def __init__(self, fd, path: str, executor: _Executor):
        self._fd = fd
        self._path = path
        self._executor = executor

    async def write(self, data: bytes) -> None:
        await self._executor.call(self._path, self._fd.write, data, with_session=False)

    async def close(self) -> None:
        await self._executor.call(self._path, self._fd.close, with_session=False)


class SmbShareClient(ShareClient):
    """
    Share client backed by smbclient's pooled SMB sessions.

    smbclient caches one authenticated connection per server and
    serializes messages on it internally, so a single instance is shared
    by all concurrent requests.
    """

    def __init__(self, settings: ShareSettings):
        self.settings = settings
        self._server = server_of(settings.base_url)
        session_kwargs = {
            "port": settings.port,
            "connection_timeout": settings.connection_timeout,
        }
        if settings.username:
            session_kwargs["username"] = settings.username
            session_kwargs["password"] = settings.password
        self._executor = _Executor(session_kwargs)

    async def connect(self) -> None:
        """Register the authenticated session with the share server."""
        logger.info(f"Registering SMB session with {self._server}:{self.settings.port}")
        await self._executor.call(self._server, smbclient.register_session, self._server)

    async def close(self) -> None:
        try:
            await self._executor.call(
                self._server,
                smbclient.delete_session,
                self._server,
                port=self.settings.port,
                with_session=False,
            )
            logger.info(f"Closed SMB session with {self._server}")
        except GatewayException as e:
            logger.warning(f"Failed to close SMB session with {self._server}: {e}")

    async def exists(self, path: str) -> bool:
        return await self._executor.call(path, smbclient.path.exists, to_unc(path))

    async def stat(self, path: str) -> ShareStat:
        result = await self._executor.call(path, smbclient.stat, to_unc(path))
        name = path.rstrip("/").rsplit("/", 1)[-1]
        return self._to_share_stat(name, path, result)

    async def list_dir(self, path: str) -> List[ShareStat]:
        def scan():
            return [
                (entry.name, entry.stat())
                for entry in smbclient.scandir(to_unc(path), **self._executor.session_kwargs)
                if entry.name not in (".", "..")
            ]

        entries = await self._executor.call(path, scan, with_session=False)
        base = path.rstrip("/")
        return [self._to_share_stat(name, f"{base}/{name}", result) for name, result in entries]

    async def open_read(self, path: str) -> ShareReader:
        def open_and_measure():
            fd = smbclient.open_file(to_unc(path), mode="rb", **self._executor.session_kwargs)
            try:
                size = fd.seek(0, 2)
                fd.seek(0)
            except (OSError, SMBException):
                fd.close()
                raise
            return fd, size

        fd, size = await self._executor.call(path, open_and_measure, with_session=False)
        return SmbFileReader(fd, size, path, self._executor)

    async def open_write(self, path: str) -> ShareWriter:
        fd = await self._executor.call(path, smbclient.open_file, to_unc(path), mode="wb")
        return SmbFileWriter(fd, path, self._executor)

    async def delete(self, path: str) -> None:
        """Delete a file, or a folder together with everything inside it."""
        info = await self.stat(path)
        if info.is_directory:
            await self._executor.call(path, smbclient.shutil.rmtree, to_unc(path))
        else:
            await self._executor.call(path, smbclient.remove, to_unc(path))

    async def mkdirs(self, path: str) -> None:
        await self._executor.call(path, smbclient.makedirs, to_unc(path), exist_ok=True)

    async def rename(self, src: str, dst: str, replace: bool = False) -> None:
        func = smbclient.replace if replace else smbclient.rename
        await self._executor.call(dst, func, to_unc(src), to_unc(dst))

    @staticmethod
    def _to_share_stat(name: str, path: str, result) -> ShareStat:
        is_directory = stat_module.S_ISDIR(result.st_mode)
        return ShareStat(
            name=name,
            path=path,
            is_directory=is_directory,
            size=0 if is_directory else result.st_size,
            created=getattr(result, "st_ctime", 0.0) or 0.0,
            modified=getattr(result, "st_mtime", 0.0) or 0.0,
        )

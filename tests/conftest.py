"""Shared pytest fixtures for all tests."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from gateway.exceptions import (
    ShareEntryExistsError,
    ShareNotFoundError,
    ShareOperationError,
)
from gateway.services.file_service import FileService
from gateway.services.path_resolver import PathResolver
from gateway.share.client import ShareClient, ShareReader, ShareWriter
from gateway.types import ShareStat

BASE_URL = "smb://nas/share/base"


def _key(path: str) -> str:
    return path.rstrip("/")


def _parent(key: str) -> str:
    return key.rsplit("/", 1)[0]


class MemoryReader(ShareReader):
    def __init__(self, data: bytes, seekable: bool = True):
        self._data = data
        self._pos = 0
        self.size = len(data)
        self.seekable = seekable
        self.closed = False

    async def read(self, size: int) -> bytes:
        piece = self._data[self._pos:self._pos + size]
        self._pos += len(piece)
        return piece

    async def seek(self, offset: int) -> None:
        if not self.seekable:
            raise ShareOperationError("stream is not seekable")
        self._pos = offset

    async def close(self) -> None:
        self.closed = True


class MemoryWriter(ShareWriter):
    def __init__(self, client: "MemoryShareClient", key: str):
        self._client = client
        self._key = key
        self._writes = 0

    async def write(self, data: bytes) -> None:
        if self._client.fail_on_write is not None and self._writes >= self._client.fail_on_write:
            raise ShareOperationError("disk full")
        self._writes += 1
        self._client.files[self._key] += data

    async def close(self) -> None:
        pass


class MemoryShareClient(ShareClient):
    """
    In-memory share used in place of a real SMB server.

    Keys are share URLs without a trailing slash; the base location is
    created up front.
    """

    def __init__(self, root: str = BASE_URL):
        self.root = _key(root)
        self.files: Dict[str, bytes] = {}
        self.dirs = {self.root}
        self.times: Dict[str, tuple] = {}
        self.readers: List[MemoryReader] = []
        self.seekable = True
        self.fail_on_write: Optional[int] = None
        self.hidden_once = set()

    def add_file(self, relative: str, data: bytes, created: float = 0.0, modified: float = 0.0) -> None:
        key = f"{self.root}/{relative}"
        self._make_parents(_parent(key))
        self.files[key] = data
        self.times[key] = (created, modified)

    def add_dir(self, relative: str) -> None:
        self._make_parents(f"{self.root}/{relative}")

    def _make_parents(self, key: str) -> None:
        while key not in self.dirs:
            self.dirs.add(key)
            key = _parent(key)

    def _stat(self, key: str) -> ShareStat:
        created, modified = self.times.get(key, (0.0, 0.0))
        name = key.rsplit("/", 1)[-1]
        if key in self.dirs:
            return ShareStat(name=name, path=key, is_directory=True, created=created, modified=modified)
        return ShareStat(
            name=name, path=key, is_directory=False,
            size=len(self.files[key]), created=created, modified=modified,
        )

    async def exists(self, path: str) -> bool:
        key = _key(path)
        if key in self.hidden_once:
            self.hidden_once.discard(key)
            return False
        return key in self.files or key in self.dirs

    async def stat(self, path: str) -> ShareStat:
        key = _key(path)
        if key not in self.files and key not in self.dirs:
            raise ShareNotFoundError(path)
        return self._stat(key)

    async def list_dir(self, path: str) -> List[ShareStat]:
        key = _key(path)
        if key not in self.dirs:
            raise ShareNotFoundError(path)
        children = [k for k in list(self.dirs) + list(self.files) if k != key and _parent(k) == key]
        return [self._stat(child) for child in children]

    async def open_read(self, path: str) -> ShareReader:
        key = _key(path)
        if key not in self.files:
            raise ShareNotFoundError(path)
        reader = MemoryReader(self.files[key], seekable=self.seekable)
        self.readers.append(reader)
        return reader

    async def open_write(self, path: str) -> ShareWriter:
        key = _key(path)
        if _parent(key) not in self.dirs:
            raise ShareNotFoundError(path)
        self.files[key] = b""
        return MemoryWriter(self, key)

    async def delete(self, path: str) -> None:
        key = _key(path)
        if key in self.files:
            del self.files[key]
        elif key in self.dirs:
            prefix = key + "/"
            self.files = {k: v for k, v in self.files.items() if not k.startswith(prefix)}
            self.dirs = {k for k in self.dirs if k != key and not k.startswith(prefix)}
        else:
            raise ShareNotFoundError(path)

    async def mkdirs(self, path: str) -> None:
        self._make_parents(_key(path))

    async def rename(self, src: str, dst: str, replace: bool = False) -> None:
        src_key, dst_key = _key(src), _key(dst)
        if src_key not in self.files:
            raise ShareNotFoundError(src)
        if not replace and (dst_key in self.files or dst_key in self.dirs):
            raise ShareEntryExistsError(dst)
        self.files[dst_key] = self.files.pop(src_key)

    def relative_files(self) -> Dict[str, bytes]:
        prefix = self.root + "/"
        return {k[len(prefix):]: v for k, v in self.files.items()}


async def stream_of(*parts: bytes):
    """Async iterator over the given upload chunks."""
    for part in parts:
        yield part


@pytest.fixture
def share():
    """In-memory share rooted at BASE_URL."""
    return MemoryShareClient()


@pytest.fixture
def resolver():
    return PathResolver(BASE_URL)


@pytest.fixture
def file_service(share, resolver):
    return FileService(share, resolver)


@pytest.fixture
def api_client(file_service):
    """
    FastAPI test client wired to the in-memory share.

    Startup handlers are not run, so no SMB session is attempted.
    """
    from gateway.dependencies import get_file_service
    from gateway.main import app

    app.dependency_overrides[get_file_service] = lambda: file_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .nasbridge directory
    """
    config_dir = tmp_path / '.nasbridge'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path

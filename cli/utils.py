"""Utility functions for CLI operations."""

import sys

from cli.constants import GREEN, RESET, TRANSFER_CHUNK_SIZE
from common.formatting import format_size


def show_progress(action: str, name: str, done: int, total: int) -> None:
    """
    Redraw a single progress line on stdout.

    Args:
        action: Verb shown before the name (e.g. "Uploading")
        name: Display name of the file
        done: Bytes transferred so far
        total: Total bytes, or 0 when unknown
    """
    if total > 0:
        progress = (done / total) * 100
        sys.stdout.write(
            f"\r{action} {name}: {format_size(done)} / {format_size(total)} ({GREEN}{progress:.1f}%{RESET})"
        )
    else:
        sys.stdout.write(f"\r{action} {name}: {format_size(done)}")
    sys.stdout.flush()


def end_progress() -> None:
    """Terminate the progress line."""
    sys.stdout.write('\n')
    sys.stdout.flush()


def clear_progress() -> None:
    """Erase a partially drawn progress line."""
    sys.stdout.write('\r' + ' ' * 100 + '\r')
    sys.stdout.flush()


class ProgressFileWrapper:
    """File-like wrapper that displays upload progress while httpx reads it."""

    def __init__(self, file_path: str, file_size: int, filename: str):
        """
        Initialize the progress file wrapper.

        Args:
            file_path: Path to the file to read
            file_size: Total size of the file in bytes
            filename: Display name for the file
        """
        self.file_size = file_size
        self.filename = filename
        self._file = open(file_path, 'rb')
        self._uploaded = 0
        self._finished = False

    def read(self, size: int = -1) -> bytes:
        """
        Read bytes from the file and update progress display.

        Args:
            size: Number of bytes to read (-1 or 0 for default chunk size)

        Returns:
            Bytes read from the file
        """
        chunk = self._file.read(size if size > 0 else TRANSFER_CHUNK_SIZE)
        if chunk:
            self._uploaded += len(chunk)
            show_progress("Uploading", self.filename, self._uploaded, self.file_size)
        elif not self._finished:
            self._finished = True
            end_progress()
        return chunk

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> 'ProgressFileWrapper':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

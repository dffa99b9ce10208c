"""Parsing of HTTP Range headers into byte ranges."""

import re
from typing import Optional

from gateway.exceptions import InvalidRangeError
from gateway.types import ByteRange

_NUMBER = re.compile(r"[0-9]+")


def _parse_offset(value: str, header: str) -> int:
    if not _NUMBER.fullmatch(value):
        raise InvalidRangeError(f"Invalid range bound {value!r} in {header!r}")
    return int(value)


def parse_range_header(header: Optional[str], total: int) -> Optional[ByteRange]:
    """
    Parse a ``Range: bytes=<start>-<end>`` header against a resource size.

    Only the first clause of a multi-range header is honored. A missing
    end defaults to the last byte and an end past the resource is clamped
    to it. The suffix form ``bytes=-N`` selects the last N bytes.

    Args:
        header: Raw header value, or None when the request has no Range
        total: Size of the resource in bytes

    Returns:
        ByteRange, or None when no range was requested

    Raises:
        InvalidRangeError: If the header is malformed or unsatisfiable
    """
    if header is None or not header.strip():
        return None

    unit, sep, ranges = header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise InvalidRangeError(f"Unsupported range unit in {header!r}")

    clause = ranges.split(",", 1)[0].strip()
    start_str, dash, end_str = clause.partition("-")
    if not dash:
        raise InvalidRangeError(f"Malformed range {header!r}")
    start_str = start_str.strip()
    end_str = end_str.strip()

    if not start_str:
        suffix = _parse_offset(end_str, header)
        if suffix == 0 or total == 0:
            raise InvalidRangeError(f"Range {header!r} not satisfiable for {total} bytes")
        return ByteRange(start=max(total - suffix, 0), end=total - 1, total=total)

    start = _parse_offset(start_str, header)
    end = _parse_offset(end_str, header) if end_str else total - 1

    if start > end:
        raise InvalidRangeError(f"Range start exceeds end in {header!r}")
    if start >= total:
        raise InvalidRangeError(f"Range {header!r} not satisfiable for {total} bytes")

    return ByteRange(start=start, end=min(end, total - 1), total=total)

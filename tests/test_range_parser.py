"""Tests for Range header parsing."""

import pytest

from gateway.exceptions import InvalidRangeError
from gateway.services.range_parser import parse_range_header


def test_no_header_means_full_content():
    assert parse_range_header(None, 100) is None
    assert parse_range_header("  ", 100) is None


def test_closed_range():
    byte_range = parse_range_header("bytes=10-19", 100)
    assert (byte_range.start, byte_range.end, byte_range.total) == (10, 19, 100)
    assert byte_range.length == 10
    assert byte_range.content_range == "bytes 10-19/100"


def test_open_ended_range_runs_to_last_byte():
    byte_range = parse_range_header("bytes=90-", 100)
    assert (byte_range.start, byte_range.end) == (90, 99)


def test_end_past_size_is_clamped():
    byte_range = parse_range_header("bytes=50-500", 100)
    assert byte_range.end == 99
    assert byte_range.length == 50


def test_suffix_range():
    byte_range = parse_range_header("bytes=-10", 100)
    assert (byte_range.start, byte_range.end) == (90, 99)


def test_suffix_longer_than_file_covers_whole_file():
    byte_range = parse_range_header("bytes=-500", 100)
    assert (byte_range.start, byte_range.end) == (0, 99)


def test_only_first_clause_honored():
    byte_range = parse_range_header("bytes=0-9, 20-29", 100)
    assert (byte_range.start, byte_range.end) == (0, 9)


def test_single_byte_range():
    byte_range = parse_range_header("bytes=99-99", 100)
    assert byte_range.length == 1


@pytest.mark.parametrize("header", [
    "items=0-10",
    "0-10",
    "bytes=abc",
    "bytes=a-10",
    "bytes=0-b",
    "bytes=--5",
    "bytes=-",
    "bytes=20-10",
    "bytes=100-",
    "bytes=150-200",
    "bytes=-0",
])
def test_invalid_ranges_rejected(header):
    with pytest.raises(InvalidRangeError):
        parse_range_header(header, 100)


def test_any_range_on_empty_file_rejected():
    with pytest.raises(InvalidRangeError):
        parse_range_header("bytes=0-", 0)
    with pytest.raises(InvalidRangeError):
        parse_range_header("bytes=-5", 0)

"""Tests for relative path resolution against the share base."""

import pytest

from gateway.exceptions import InvalidInputError, InvalidPathError
from gateway.services.path_resolver import PathResolver, join_relative, split_relative


@pytest.fixture
def resolver():
    return PathResolver("smb://nas/share/base/")


def test_root_resolves_with_trailing_slash(resolver):
    assert resolver.resolve("") == "smb://nas/share/base/"
    assert resolver.resolve(None) == "smb://nas/share/base/"


def test_backslashes_are_normalized(resolver):
    assert resolver.resolve("docs\\reports\\q1.pdf") == "smb://nas/share/base/docs/reports/q1.pdf"


def test_empty_and_dot_segments_dropped(resolver):
    assert resolver.normalize("/docs//./reports/") == "docs/reports"


def test_dotdot_collapses_inside_base(resolver):
    assert resolver.resolve("docs/../music/a.mp3") == "smb://nas/share/base/music/a.mp3"


@pytest.mark.parametrize("path", ["..", "../secret", "docs/../../etc", "..\\other"])
def test_dotdot_above_base_rejected(resolver, path):
    with pytest.raises(InvalidPathError):
        resolver.resolve(path)


def test_invalid_path_is_invalid_input():
    assert issubclass(InvalidPathError, InvalidInputError)


def test_resolve_directory_always_ends_with_slash(resolver):
    assert resolver.resolve_directory("docs") == "smb://nas/share/base/docs/"
    assert resolver.resolve_directory("docs/") == "smb://nas/share/base/docs/"
    assert resolver.resolve_directory("") == "smb://nas/share/base/"


def test_base_backslashes_normalized():
    resolver = PathResolver("smb:\\\\nas\\share")
    assert resolver.resolve("a.txt") == "smb://nas/share/a.txt"


def test_join_and_split_relative():
    assert join_relative("", "a.txt") == "a.txt"
    assert join_relative("docs", "a.txt") == "docs/a.txt"
    assert split_relative("a.txt") == ("", "a.txt")
    assert split_relative("docs/sub/a.txt") == ("docs/sub", "a.txt")

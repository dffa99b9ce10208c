"""Translation of caller-supplied relative paths into share paths."""

from gateway.exceptions import InvalidPathError


class PathResolver:
    """
    Joins the configured base location with relative paths.

    Backslashes are normalized to forward slashes, empty and ``.``
    segments are dropped, and ``..`` segments are collapsed. A ``..`` that
    would climb above the base location is rejected.
    """

    def __init__(self, base_url: str):
        base = base_url.strip().replace("\\", "/")
        self.base_url = base.rstrip("/")

    def normalize(self, relative_path: str) -> str:
        """
        Normalize a relative path without the base location.

        Args:
            relative_path: Caller-supplied path, may be empty or None

        Returns:
            Slash-separated path without leading or trailing separators
            ("" for the share root)

        Raises:
            InvalidPathError: If the path escapes the base location
        """
        segments = []
        for segment in (relative_path or "").replace("\\", "/").split("/"):
            if segment in ("", "."):
                continue
            if segment == "..":
                if not segments:
                    raise InvalidPathError(f"Path escapes the share base: {relative_path}")
                segments.pop()
                continue
            segments.append(segment)
        return "/".join(segments)

    def resolve(self, relative_path: str) -> str:
        """Resolve a relative path into a share path (the root keeps its trailing "/")."""
        normalized = self.normalize(relative_path)
        if not normalized:
            return self.base_url + "/"
        return f"{self.base_url}/{normalized}"

    def resolve_directory(self, relative_path: str) -> str:
        """Resolve a relative path for listing; always ends with "/"."""
        resolved = self.resolve(relative_path)
        return resolved if resolved.endswith("/") else resolved + "/"


def join_relative(directory: str, name: str) -> str:
    """Join a normalized relative directory and a file name."""
    return f"{directory}/{name}" if directory else name


def split_relative(path: str) -> tuple[str, str]:
    """Split a normalized relative path into (directory, name)."""
    if "/" not in path:
        return "", path
    directory, name = path.rsplit("/", 1)
    return directory, name

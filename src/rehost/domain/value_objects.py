"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from urllib.parse import urlsplit

from rehost.domain.exceptions import FetchError, IoError

_NO_NAME = frozenset({"", ".", ".."})


@dataclass(frozen=True, slots=True)
class SourcePath:
    """Local file path with an extractable file name.

    ``SourcePath.from_string("docs/readme.txt").file_name == "readme.txt"``.
    Empty paths, roots and paths ending in ``..`` have no file name and are
    rejected.
    """

    raw: str
    file_name: str

    @classmethod
    def from_string(cls, path: str) -> SourcePath:
        """Parse and validate a raw path string."""
        name = PurePath(path).name
        if name in _NO_NAME:
            raise IoError(f"Cannot determine a file name from path '{path}'.")
        return cls(raw=path, file_name=name)


@dataclass(frozen=True, slots=True)
class SourceUrl:
    """Absolute URL whose last non-empty path segment names the served file.

    ``https://example.com/dist/app.js?v=2`` yields ``app.js``; a bare domain
    such as ``https://example.com/`` is rejected.  The segment is kept exactly
    as written, percent-escapes included.
    """

    raw: str
    file_name: str

    @classmethod
    def from_string(cls, url: str) -> SourceUrl:
        """Parse and validate a raw URL string."""
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise FetchError(f"Invalid URL '{url}': {exc}") from exc

        if not parts.scheme or not parts.netloc:
            raise FetchError(
                f"Invalid URL '{url}'. Expected an absolute URL such as "
                "https://example.com/file.txt"
            )

        segments = [seg for seg in parts.path.split("/") if seg]
        if not segments:
            raise FetchError(f"Cannot determine a file name from URL '{url}'.")

        return cls(raw=url, file_name=segments[-1])

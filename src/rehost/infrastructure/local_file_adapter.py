"""Local filesystem adapter — implements the LocalReader port."""

from __future__ import annotations

from pathlib import Path

from rehost.domain.exceptions import IoError


class LocalFileAdapter:
    """Concrete ``LocalReader`` reading UTF-8 text files."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def read_text(self, path: str) -> str:
        """Read the whole file at *path* (blocking), without newline translation."""
        try:
            return Path(path).read_bytes().decode(self._encoding)
        except FileNotFoundError as exc:
            raise IoError(f"File not found: {path}") from exc
        except UnicodeDecodeError as exc:
            raise IoError(f"File is not valid {self._encoding} text: {path}") from exc
        except OSError as exc:
            raise IoError(f"Error reading file {path}: {exc}") from exc

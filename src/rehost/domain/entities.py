"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union


@dataclass(frozen=True, slots=True)
class LocalLocation:
    """A file read from the local filesystem."""

    path: str


@dataclass(frozen=True, slots=True)
class ExternalLocation:
    """A file fetched over HTTP(S)."""

    url: str


Location = Union[LocalLocation, ExternalLocation]


@dataclass(frozen=True, slots=True)
class Replacement:
    """A literal find/replace rule; ``to`` is expanded as a template first."""

    from_: str
    to: str


@dataclass(frozen=True, slots=True)
class FileDeclaration:
    """One ``[[file]]`` block of the configuration."""

    location: Location
    rename: str | None = None
    replacements: tuple[Replacement, ...] = ()


@dataclass(frozen=True, slots=True)
class Configuration:
    """Decoded configuration: substitution vars plus files in declared order."""

    vars: Mapping[str, str] = field(default_factory=dict)
    files: tuple[FileDeclaration, ...] = ()


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """Raw content of a declaration together with its default served name."""

    name: str
    content: str


class ContentStore(Mapping[str, str]):
    """Read-only ``name → content`` mapping served for the process lifetime.

    The store copies its input once and exposes it through a
    :class:`~types.MappingProxyType`, so there is no mutation path after
    construction and concurrent readers need no locking.
    """

    __slots__ = ("_data",)

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._data: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, name: str) -> str:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ContentStore({sorted(self._data)!r})"

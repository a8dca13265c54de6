"""TOML configuration decoder — turns a config file into a ``Configuration``.

Expected shape::

    [vars]
    name = "value"

    [[file]]
    path = "static/index.html"      # or: url = "https://..."
    rename = "home.html"            # optional
    replace = [{ from = "@TITLE@", to = "{name}" }]   # optional

Exactly one of ``path`` / ``url`` must be present in each file block.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from rehost.domain.entities import (
    Configuration,
    ExternalLocation,
    FileDeclaration,
    LocalLocation,
    Location,
    Replacement,
)
from rehost.domain.exceptions import ConfigError

logger = logging.getLogger(__name__)


class _ReplaceBlock(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: str = Field(alias="from")
    to: str


class _FileBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str | None = None
    url: str | None = None
    rename: str | None = None
    replace: list[_ReplaceBlock] = Field(default_factory=list)

    @model_validator(mode="after")
    def _exactly_one_location(self) -> _FileBlock:
        if (self.path is None) == (self.url is None):
            msg = "each file block needs exactly one of 'path' or 'url'"
            raise ValueError(msg)
        return self

    def to_declaration(self) -> FileDeclaration:
        location: Location
        if self.path is not None:
            location = LocalLocation(path=self.path)
        else:
            assert self.url is not None
            location = ExternalLocation(url=self.url)
        return FileDeclaration(
            location=location,
            rename=self.rename,
            replacements=tuple(Replacement(from_=r.from_, to=r.to) for r in self.replace),
        )


class _ConfigDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vars: dict[str, str] = Field(default_factory=dict)
    file: list[_FileBlock] = Field(default_factory=list)


def _describe(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = " → ".join(str(p) for p in err.get("loc", []))
        msg = err.get("msg", "validation error")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages)


def parse_config(text: str) -> Configuration:
    """Decode TOML *text* into a :class:`Configuration`."""
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Error deserializing TOML: {exc}") from exc

    try:
        document = _ConfigDocument.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {_describe(exc)}") from exc

    return Configuration(
        vars=dict(document.vars),
        files=tuple(block.to_declaration() for block in document.file),
    )


def load_config(path: str | Path) -> Configuration:
    """Read and decode the configuration file at *path*."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error reading config '{path}': {exc}") from exc

    config = parse_config(text)
    logger.debug(
        "Loaded %s: %d var(s), %d file(s)", path, len(config.vars), len(config.files)
    )
    return config

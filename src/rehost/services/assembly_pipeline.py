"""Assembly pipeline — builds the content store from the configuration.

This is the single entry point for the business logic.  It depends only on
the :class:`SourceResolver` and the pure template engine; the interface
layer injects concrete adapters at startup.  The build is all-or-nothing:
the first resolution failure propagates and no store is produced.
"""

from __future__ import annotations

import logging
import os

from rehost.domain.entities import Configuration, ContentStore, FileDeclaration
from rehost.domain.ports.source_reader import EnvLookup
from rehost.services.source_resolver import SourceResolver
from rehost.services.template_engine import apply_replacements

logger = logging.getLogger(__name__)


class AssemblyPipeline:
    """Orchestrates resolve → replace → rename → insert for every file.

    Parameters
    ----------
    resolver:
        Resolves each declaration's location to its default name and content.
    use_env:
        Prefer upper-cased environment variables over ``vars`` when expanding
        placeholders.
    env_lookup:
        Environment capability; defaults to :func:`os.environ.get`.
    """

    def __init__(
        self,
        resolver: SourceResolver,
        use_env: bool = False,
        env_lookup: EnvLookup = os.environ.get,
    ) -> None:
        self._resolver = resolver
        self._use_env = use_env
        self._env_lookup = env_lookup

    # ── Public entry point ──────────────────────────────────────────────

    async def assemble(self, config: Configuration) -> ContentStore:
        """Process every declaration in order and return the finished store."""
        logger.info("Assembling %d file(s)", len(config.files))
        entries: dict[str, str] = {}

        # Declared order decides name collisions: later entries overwrite.
        for declaration in config.files:
            name, content = await self._build_file(declaration, config)
            if name in entries:
                logger.warning("'%s' declared more than once; keeping the later one", name)
            entries[name] = content
            logger.info("Serving %s (%d chars)", name, len(content))

        return ContentStore(entries)

    # ── Steps ───────────────────────────────────────────────────────────

    async def _build_file(
        self, declaration: FileDeclaration, config: Configuration
    ) -> tuple[str, str]:
        source = await self._resolver.resolve(declaration.location)
        content = apply_replacements(
            source.content,
            declaration.replacements,
            config.vars,
            use_env=self._use_env,
            env_lookup=self._env_lookup,
        )
        name = declaration.rename if declaration.rename is not None else source.name
        return name, content

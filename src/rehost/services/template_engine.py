"""Template engine — escaped-brace variable interpolation and literal replacement.

A placeholder is ``{name}`` where *name* is zero or more word characters and
the opening brace is not preceded by a backslash.  Placeholders resolve
against the environment (upper-cased name, only when enabled) and then
against the configured vars; unresolved placeholders are left as written.
A final pass turns ``\\{`` and ``\\}`` into literal braces.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping

from rehost.domain.entities import Replacement
from rehost.domain.ports.source_reader import EnvLookup

logger = logging.getLogger(__name__)

# The lookbehind also lets a placeholder sit at position 0 or directly after
# another placeholder's closing brace.
_PLACEHOLDER_RE = re.compile(r"(?<!\\)\{(\w*)\}")

_ESCAPES: tuple[tuple[str, str], ...] = (("\\{", "{"), ("\\}", "}"))


def expand(
    template: str,
    vars: Mapping[str, str],
    use_env: bool = False,
    env_lookup: EnvLookup = os.environ.get,
) -> str:
    """Interpolate placeholders in *template*, then unescape literal braces."""

    def _resolve(match: re.Match[str]) -> str:
        name = match[1]
        if use_env:
            value = env_lookup(name.upper())
            if value is not None:
                return value
        if name in vars:
            return vars[name]
        logger.debug("Placeholder %r left unresolved", match[0])
        return match[0]

    result = _PLACEHOLDER_RE.sub(_resolve, template)
    for escaped, literal in _ESCAPES:
        result = result.replace(escaped, literal)
    return result


def apply_replacements(
    content: str,
    replacements: Iterable[Replacement],
    vars: Mapping[str, str],
    use_env: bool = False,
    env_lookup: EnvLookup = os.environ.get,
) -> str:
    """Apply *replacements* to *content* in order.

    Each rule's ``to`` is expanded first; every non-overlapping literal
    occurrence of ``from_`` in the current content is then replaced, so later
    rules see the output of earlier ones.
    """
    for rule in replacements:
        to = expand(rule.to, vars, use_env=use_env, env_lookup=env_lookup)
        content = content.replace(rule.from_, to)
    return content

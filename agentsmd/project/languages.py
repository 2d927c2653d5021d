"""
Language name -> file extensions table for the lang() matcher.

Built from the pygments lexer registry: a language is known by its lexer
name or any of its aliases (case-insensitive); its extensions are taken
from the lexer's plain "*.ext" filename patterns.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, FrozenSet, Optional, Set

from pygments.lexers import get_all_lexers

__all__ = ["language_extensions", "known_languages"]

_PLAIN_EXT = re.compile(r"^\*\.([A-Za-z0-9_+\-]+)$")


@lru_cache(maxsize=1)
def _language_table() -> Dict[str, FrozenSet[str]]:
    table: Dict[str, Set[str]] = {}
    for name, aliases, filenames, _mimetypes in get_all_lexers():
        exts = set()
        for glob in filenames:
            m = _PLAIN_EXT.match(glob)
            if m:
                exts.add(m.group(1).lower())
        for key in (name, *aliases):
            table.setdefault(key.lower(), set()).update(exts)
    return {key: frozenset(exts) for key, exts in table.items()}


def language_extensions(name: str) -> Optional[FrozenSet[str]]:
    """
    Extensions (lowercase, without dot) of a language.

    Args:
        name: Language name or alias, any case ("TypeScript", "ts", "rust")

    Returns:
        Set of extensions (possibly empty) or None for an unknown language
    """
    return _language_table().get(name.strip().lower())


def known_languages() -> FrozenSet[str]:
    """All recognized (lowercase) language names and aliases."""
    return frozenset(_language_table())

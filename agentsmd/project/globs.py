"""
Glob patterns of the exists() matcher.

A pattern is matched against the whole POSIX path of each file, relative to
the project root. Wildcards follow fnmatch: '*' and '?' also match '/', so
"*.rs" finds Rust files at any depth while "Cargo.toml" only names the root
file. Extensions:
- {a,b,c} alternation (nested groups allowed)
- '**/' also matches zero directories ("src/**/mod.rs" matches "src/mod.rs")
- backslash escapes a single character ("\\*" is a literal star)

Only files are matched, so a directory never satisfies a pattern.
"""

from __future__ import annotations

import fnmatch
import re
from typing import List, Pattern

from ..conditions.errors import EvaluationError

__all__ = ["GlobPattern", "compile_glob", "expand_braces"]

_FNMATCH_SPECIAL = "*?[\\"


def expand_braces(pattern: str) -> List[str]:
    """
    Expands {a,b} alternations (nested ones included) into plain patterns.

    "src/**/{main,lib}.rs" -> ["src/**/main.rs", "src/**/lib.rs"]

    Raises:
        ValueError: Unbalanced braces
    """
    depth = 0
    start = -1
    escaped = False
    for i, ch in enumerate(pattern):
        if escaped:
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            if depth == 0:
                raise ValueError(f"unmatched '}}' at position {i}")
            depth -= 1
            if depth == 0:
                head, body, tail = pattern[:start], pattern[start + 1:i], pattern[i + 1:]
                expanded: List[str] = []
                for alternative in _split_alternatives(body):
                    expanded.extend(expand_braces(head + alternative + tail))
                return expanded
    if depth:
        raise ValueError(f"unclosed '{{' at position {start}")
    return [pattern]


def _split_alternatives(body: str) -> List[str]:
    """Splits the inside of a brace group on top-level commas."""
    parts: List[str] = []
    depth = 0
    current = 0
    escaped = False
    for i, ch in enumerate(body):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(body[current:i])
            current = i + 1
    parts.append(body[current:])
    return parts


def _globstar_variants(pattern: str) -> List[str]:
    """Adds the forms where each '**/' component matches no directory at all."""
    idx = pattern.find("**/")
    while idx > 0 and pattern[idx - 1] != "/":
        idx = pattern.find("**/", idx + 1)
    if idx == -1:
        return [pattern]

    head, tail = pattern[:idx], pattern[idx + 3:]
    variants: List[str] = []
    for rest in _globstar_variants(tail):
        variants.append(head + "**/" + rest)
        variants.append(head + rest)
    return variants


def _escape_literals(pattern: str) -> str:
    """Spells escaped characters the fnmatch way: '\\*' -> '[*]', '\\x' -> 'x'."""
    out: List[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            nxt = pattern[i + 1]
            out.append(f"[{nxt}]" if nxt in _FNMATCH_SPECIAL else nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _check_classes(pattern: str) -> None:
    """
    Raises:
        ValueError: '[' without a closing ']'
    """
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise ValueError(f"unclosed character class at position {i}")
            i = close
        i += 1


class GlobPattern:
    """
    Compiled exists() pattern.

    Usage:
        glob = compile_glob("**/*.rs")
        glob.matches_file("src/main.rs")  # True
    """

    def __init__(self, source: str, regexes: List[Pattern[str]]):
        self.source = source
        self._regexes = regexes

    def matches_file(self, rel_path: str) -> bool:
        """Check a file path (relative to root, POSIX format)."""
        return any(rx.match(rel_path) for rx in self._regexes)

    def __repr__(self) -> str:
        return f"GlobPattern({self.source!r})"


def compile_glob(pattern: str) -> GlobPattern:
    """
    Compiles an exists() pattern.

    The empty pattern is valid and matches nothing.

    Raises:
        EvaluationError: Unbalanced braces or an unclosed character class
    """
    if not pattern:
        return GlobPattern(pattern, [])

    try:
        regexes = []
        for alternative in expand_braces(pattern):
            # Paths are relative to the root; a leading '/' only spells that out
            alternative = alternative[1:] if alternative.startswith("/") else alternative
            for variant in _globstar_variants(_escape_literals(alternative)):
                _check_classes(variant)
                regexes.append(re.compile(fnmatch.translate(variant)))
    except (ValueError, re.error) as e:
        raise EvaluationError(f"invalid exists() pattern: {pattern}: {e}") from e

    return GlobPattern(pattern, regexes)

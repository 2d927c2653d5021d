"""
Ignore rules with recursive loading and caching.

Implements the usual VCS semantics:
- Global excludes file (~/.config/git/ignore or $XDG_CONFIG_HOME/git/ignore)
- Repository excludes (.git/info/exclude)
- Recursive loading of .gitignore and .ignore files from all directories
- Patterns are relative to the directory of the file that declares them
- Caching for performance during filesystem traversal
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

__all__ = [
    "IgnoreRules",
    "IGNORE_FILE_NAMES",
    "global_excludes_path",
]

# Order matters: later files take precedence within one directory
IGNORE_FILE_NAMES: Tuple[str, ...] = (".gitignore", ".ignore")


def global_excludes_path(environ: Mapping[str, str]) -> Optional[Path]:
    """
    Location of the user-wide excludes file used by git by default.

    Returns:
        Path to the file (it may not exist) or None if no home is known
    """
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "git" / "ignore"
    home = environ.get("HOME")
    if home:
        return Path(home) / ".config" / "git" / "ignore"
    return None


class IgnoreRules:
    """
    Checks paths against ignore rules of a project.

    - Each .gitignore/.ignore applies to its directory and subdirectories
    - Patterns are matched relative to the ignore file location
    - Results are cached

    Exclusion of whole directories is the walker's job: once a directory
    is ignored it must not be entered (see should_descend()).

    Usage:
        rules = IgnoreRules(project_root)
        if rules.is_ignored("src/temp/file.py"):
            # File is ignored
            pass
    """

    def __init__(
        self,
        root: Path,
        *,
        environ: Optional[Mapping[str, str]] = None,
        use_global: bool = True,
    ):
        """
        Args:
            root: Project root directory
            environ: Environment used to locate the global excludes file
            use_global: Whether to honor the global excludes file
        """
        self.root = root.resolve()

        # PathSpec per directory (relative POSIX path, "" for root), None if no rules
        self._specs: Dict[str, Optional[PathSpec]] = {}

        self._ignore_cache: Dict[Tuple[str, bool], bool] = {}

        self._load_root_ignores(os.environ if environ is None else environ, use_global)

    def _load_root_ignores(self, environ: Mapping[str, str], use_global: bool) -> None:
        """Load root-level ignore patterns."""
        patterns: List[str] = []

        if use_global:
            global_path = global_excludes_path(environ)
            if global_path is not None and global_path.is_file():
                patterns.extend(self._read_ignore_file(global_path))

        exclude_path = self.root / ".git" / "info" / "exclude"
        if exclude_path.is_file():
            patterns.extend(self._read_ignore_file(exclude_path))

        for name in IGNORE_FILE_NAMES:
            path = self.root / name
            if path.is_file():
                patterns.extend(self._read_ignore_file(path))

        self._specs[""] = PathSpec.from_lines(GitWildMatchPattern, patterns) if patterns else None

    def _read_ignore_file(self, path: Path) -> List[str]:
        """
        Read and parse an ignore file.

        Args:
            path: Path to the ignore file

        Returns:
            List of non-empty, non-comment patterns
        """
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return []

        patterns = []
        for line in content.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line)
        return patterns

    def _get_spec_for_dir(self, rel_dir: str) -> Optional[PathSpec]:
        """
        Get or load the PathSpec of a directory.

        Args:
            rel_dir: Directory path relative to root (POSIX format)
        """
        if rel_dir in self._specs:
            return self._specs[rel_dir]

        patterns: List[str] = []
        for name in IGNORE_FILE_NAMES:
            path = self.root / rel_dir / name
            if path.is_file():
                patterns.extend(self._read_ignore_file(path))

        spec = PathSpec.from_lines(GitWildMatchPattern, patterns) if patterns else None
        self._specs[rel_dir] = spec
        return spec

    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """
        Check whether a path is ignored by the rules of its own directory
        and of every ancestor directory.

        The closest directory whose rules match the path decides, so a
        nested "!pattern" re-includes what a parent level ignored.

        Args:
            rel_path: Path relative to the project root (POSIX format)
            is_dir: The path denotes a directory (enables "dir/" patterns)

        Returns:
            True if the path is ignored
        """
        key = (rel_path, is_dir)
        if key in self._ignore_cache:
            return self._ignore_cache[key]

        parts = rel_path.strip("/").split("/")
        suffix = "/" if is_dir else ""
        ignored = False

        # Level i holds the rules declared in directory parts[:i]; deepest first
        for i in range(len(parts) - 1, -1, -1):
            spec = self._get_spec_for_dir("/".join(parts[:i]))
            if spec is None:
                continue
            remaining = "/".join(parts[i:]) + suffix
            result = spec.check_file(remaining)
            if result.include is not None:
                ignored = result.include
                break

        self._ignore_cache[key] = ignored
        return ignored

    def should_descend(self, rel_dir: str) -> bool:
        """
        Check whether a directory should be entered during traversal.

        Args:
            rel_dir: Directory path relative to root (POSIX format)
        """
        return not self.is_ignored(rel_dir, is_dir=True)

"""
Project query capability.

The condition evaluator never touches the filesystem or the environment
directly: it asks a ProjectQuery. FsProjectQuery answers from a real
project directory; tests use an in-memory fake.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, runtime_checkable

from ..conditions.errors import EvaluationError
from .globs import compile_glob
from .ignore import IgnoreRules
from .languages import language_extensions

logger = logging.getLogger(__name__)


@runtime_checkable
class ProjectQuery(Protocol):
    """
    Questions the matchers may ask about a project.

    Implementations must present a consistent snapshot for their whole
    lifetime: files and environment variables must not appear to change
    in the middle of a render.
    """

    def glob_exists(self, pattern: str) -> bool:
        """
        Does any non-ignored file match the glob (relative to the root)?

        Raises:
            EvaluationError: Invalid pattern
        """
        ...

    def env_value(self, name: str) -> Optional[str]:
        """Value of an environment variable, or None if unset."""
        ...

    def lang_exists(self, name: str) -> bool:
        """
        Does any non-ignored file have an extension of the language?

        Raises:
            EvaluationError: Unknown language name
        """
        ...


class FsProjectQuery:
    """
    ProjectQuery backed by a directory tree and an environment mapping.

    The environment is copied on construction; the list of non-ignored
    files is collected on the first file question and reused afterwards.
    Create one instance per render.
    """

    def __init__(
        self,
        root: Path,
        environ: Optional[Mapping[str, str]] = None,
        *,
        use_global_excludes: bool = True,
    ):
        """
        Args:
            root: Project root
            environ: Environment snapshot (defaults to os.environ)
            use_global_excludes: Honor the user-wide git excludes file
        """
        self.root = Path(root).resolve()
        self.environ: Dict[str, str] = dict(os.environ if environ is None else environ)
        self._use_global_excludes = use_global_excludes
        self._files: Optional[List[str]] = None

    def files(self) -> List[str]:
        """Non-ignored files, relative POSIX paths, in walk order."""
        if self._files is None:
            self._files = list(self._walk())
            logger.debug(f"Collected {len(self._files)} files under {self.root}")
        return self._files

    def _walk(self):
        rules = IgnoreRules(self.root, environ=self.environ, use_global=self._use_global_excludes)
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = Path(dirpath).relative_to(self.root).as_posix()
            prefix = "" if rel_dir == "." else rel_dir + "/"

            # Do not enter .git; prune ignored directories early (in place)
            dirnames[:] = sorted(
                d for d in dirnames
                if d != ".git" and rules.should_descend(prefix + d)
            )

            for fn in sorted(filenames):
                if os.path.islink(os.path.join(dirpath, fn)):
                    continue
                rel_posix = prefix + fn
                if rules.is_ignored(rel_posix):
                    continue
                yield rel_posix

    def glob_exists(self, pattern: str) -> bool:
        glob = compile_glob(pattern)
        return any(glob.matches_file(rel) for rel in self.files())

    def env_value(self, name: str) -> Optional[str]:
        return self.environ.get(name)

    def lang_exists(self, name: str) -> bool:
        exts = language_extensions(name)
        if exts is None:
            raise EvaluationError(f"unknown language: {name}")
        if not exts:
            return False
        for rel in self.files():
            suffix = Path(rel).suffix
            if suffix and suffix[1:].lower() in exts:
                return True
        return False


__all__ = ["ProjectQuery", "FsProjectQuery"]

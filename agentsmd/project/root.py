"""
Project root detection.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..errors import ProjectRootError

__all__ = ["project_root", "VCS_DIRS", "FALLBACK_MARKERS"]

VCS_DIRS = (".git", ".hg", ".svn")
FALLBACK_MARKERS = ("Cargo.lock",)


def _has_vcs_dir(directory: Path) -> bool:
    return any((directory / name).is_dir() for name in VCS_DIRS)


def project_root(path: Union[str, Path]) -> Path:
    """
    Find the project root by walking upwards from `path`.

    Starts at `path` (or its parent if `path` is a file) and returns the
    nearest ancestor that contains a version control directory (.git, .hg
    or .svn). Without one, the nearest ancestor holding a fallback marker
    file (Cargo.lock) is used.

    Raises:
        ProjectRootError: Neither kind of marker was found
    """
    start = Path(path).absolute()
    if start.is_file():
        start = start.parent

    fallback: Optional[Path] = None
    for directory in (start, *start.parents):
        if _has_vcs_dir(directory):
            return directory
        if fallback is None and any((directory / m).is_file() for m in FALLBACK_MARKERS):
            fallback = directory

    if fallback is not None:
        return fallback

    raise ProjectRootError("project root not found")

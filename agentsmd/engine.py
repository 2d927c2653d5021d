"""
Rendering pipeline around the template core.

Resolves template locations, renders the project-local template and the
shared one (in that order) and writes the result.
"""

from __future__ import annotations

import difflib
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import ProjectRootError, TemplateReadError
from .project.query import FsProjectQuery
from .project.root import project_root
from .templating import render_template

logger = logging.getLogger(__name__)

LOCAL_TEMPLATE_NAME = ".agents.md"
DEFAULT_OUTPUT_NAME = "AGENTS.md"
CLAUDE_OUTPUT_NAME = "CLAUDE.md"
TEMPLATE_ENV_VAR = "AGENTS_TEMPLATE"


def compute_root(path: Optional[Path] = None, forced_root: Optional[Path] = None) -> Path:
    """
    Project root: `forced_root` as given, otherwise detected from `path`
    (current directory by default).
    """
    if forced_root is not None:
        return forced_root
    return project_root(path if path is not None else Path.cwd())


def resolve_template_path(
    explicit: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Shared template location: explicit path > $AGENTS_TEMPLATE > ~/.agents.md.

    Raises:
        ProjectRootError: No explicit path and no home directory
    """
    if explicit is not None:
        return explicit
    env = os.environ if environ is None else environ
    from_env = env.get(TEMPLATE_ENV_VAR)
    if from_env:
        return Path(from_env)
    home = env.get("HOME") or env.get("USERPROFILE")
    if not home:
        raise ProjectRootError("cannot locate default template: HOME is not set")
    return Path(home) / LOCAL_TEMPLATE_NAME


def _read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateReadError(path, e) from e


def _paths_equal(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return a == b


def render_combined(
    root: Path,
    shared_template_path: Path,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Render the local template (<root>/.agents.md, if present) followed by
    the shared one. When both are the same file it is rendered once.

    Each template is rendered against its own project snapshot.

    Raises:
        TemplateReadError: Shared template is missing or unreadable
        TemplateError: A template is malformed or a condition fails
    """
    local_path = root / LOCAL_TEMPLATE_NAME
    parts = []

    if local_path.is_file():
        logger.debug(f"Rendering local template {local_path}")
        parts.append(render_template(_read_template(local_path), FsProjectQuery(root, environ)))

    if not _paths_equal(local_path, shared_template_path):
        logger.debug(f"Rendering shared template {shared_template_path}")
        text = _read_template(shared_template_path)
        parts.append(render_template(text, FsProjectQuery(root, environ)))

    return "".join(parts)


def compute_output_path(root: Path, out: Optional[Path] = None) -> Path:
    """Absolute --out as is, relative --out under root, AGENTS.md by default."""
    if out is None:
        return root / DEFAULT_OUTPUT_NAME
    if out.is_absolute():
        return out
    return root / out


def write_if_changed(path: Path, contents: str) -> bool:
    """
    Write `contents` unless the file already holds exactly that.

    Returns:
        True if the file was written
    """
    try:
        if path.read_text(encoding="utf-8") == contents:
            logger.debug(f"{path} is up to date")
            return False
    except (OSError, UnicodeDecodeError):
        pass
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    logger.info(f"Wrote {path}")
    return True


def unified_diff(current: str, rendered: str, target: Path) -> str:
    """Unified diff between the file on disk and the rendered text."""
    name = target.name
    lines = difflib.unified_diff(
        current.splitlines(keepends=True),
        rendered.splitlines(keepends=True),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
        n=3,
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


__all__ = [
    "LOCAL_TEMPLATE_NAME",
    "DEFAULT_OUTPUT_NAME",
    "CLAUDE_OUTPUT_NAME",
    "TEMPLATE_ENV_VAR",
    "compute_root",
    "resolve_template_path",
    "render_combined",
    "compute_output_path",
    "write_if_changed",
    "unified_diff",
]

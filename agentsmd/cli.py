from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer

from .engine import (
    CLAUDE_OUTPUT_NAME,
    compute_output_path,
    compute_root,
    render_combined,
    resolve_template_path,
    unified_diff,
    write_if_changed,
)
from .errors import AgentsUserError
from .version import tool_version

DEBUG_ENV_VAR = "AGENTS_DEBUG"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="agents",
        description="Render AGENTS.md by combining project and shared templates with simple matchers",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="target project path (defaults to the current directory)",
    )
    p.add_argument(
        "--template",
        type=Path,
        metavar="PATH",
        help="shared template (defaults to $AGENTS_TEMPLATE, then ~/.agents.md)",
    )
    p.add_argument(
        "--root",
        type=Path,
        metavar="PATH",
        help="force the project root (skip detection)",
    )
    p.add_argument("--stdout", action="store_true", help="print to stdout instead of writing AGENTS.md")
    p.add_argument("--diff", action="store_true", help="show a unified diff of pending changes; do not write")
    p.add_argument("--claude", action="store_true", help="also write CLAUDE.md alongside AGENTS.md")
    p.add_argument(
        "--out",
        type=Path,
        metavar="PATH",
        help="output file (relative paths are under the project root)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV_VAR) else logging.WARNING
    root_logger = logging.getLogger("agentsmd")
    root_logger.setLevel(level)
    if not root_logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root_logger.addHandler(h)


def _print_diff(current: str, rendered: str, target: Path) -> None:
    diff = unified_diff(current, rendered, target)
    if sys.stdout.isatty():
        diff = highlight(diff, DiffLexer(), TerminalFormatter())
    sys.stdout.write(diff)


def _read_existing(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        root = compute_root(ns.path, ns.root)
        template_path = resolve_template_path(ns.template)
        rendered = render_combined(root, template_path)
    except AgentsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 1

    target = compute_output_path(root, ns.out)

    if ns.diff:
        current = _read_existing(target)
        if current == rendered:
            sys.stdout.write("No changes\n")
        else:
            _print_diff(current, rendered, target)
        return 0

    if ns.stdout:
        sys.stdout.write(rendered)
        return 0

    outputs = [target]
    if ns.claude:
        outputs.append(target.parent / CLAUDE_OUTPUT_NAME)

    for path in outputs:
        try:
            write_if_changed(path, rendered)
        except OSError as e:
            sys.stderr.write(f"write error ({path}): {e}\n")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

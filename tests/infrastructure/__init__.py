"""
Shared test infrastructure for agentsmd.

Modules:
- file_utils: creating files and directories
- fakes: in-memory ProjectQuery
- project_builders: temporary project trees
- cli_utils: running the CLI in a subprocess
"""

from .file_utils import write, touch
from .fakes import FakeProjectQuery
from .project_builders import make_project
from .cli_utils import run_cli

__all__ = [
    "write",
    "touch",
    "FakeProjectQuery",
    "make_project",
    "run_cli",
]

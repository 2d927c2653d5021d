"""
Project state as seen by the matchers: files, ignore rules, languages, root.
"""

from .globs import GlobPattern, compile_glob, expand_braces
from .ignore import IgnoreRules
from .languages import known_languages, language_extensions
from .query import FsProjectQuery, ProjectQuery
from .root import project_root

__all__ = [
    "FsProjectQuery",
    "GlobPattern",
    "IgnoreRules",
    "ProjectQuery",
    "compile_glob",
    "expand_braces",
    "known_languages",
    "language_extensions",
    "project_root",
]

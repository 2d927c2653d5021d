"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from AgentsUserError.

Programming errors and bugs should NOT inherit from AgentsUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class AgentsUserError(Exception):
    """
    Base class for all user-facing errors in agentsmd.

    These errors indicate problems that the user can fix:
    malformed templates, unknown languages, missing files, etc.
    """
    pass


class ProjectRootError(AgentsUserError):
    """Project root could not be determined."""

    def __init__(self, message: str):
        super().__init__(f"project root error: {message}")
        self.message = message


class TemplateReadError(AgentsUserError):
    """Template file could not be read."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"template read error ({path}): {cause}")
        self.path = path
        self.cause = cause


__all__ = ["AgentsUserError", "ProjectRootError", "TemplateReadError"]

"""
Errors of template rendering.

Every error aborts the render: no partial output is ever produced.
"""

from __future__ import annotations

from typing import Optional

from ..errors import AgentsUserError


class TemplateError(AgentsUserError):
    """Base class of template errors; carries the location in the document."""

    def __init__(self, message: str, line: int = 0, column: int = 0, cause: Optional[Exception] = None):
        self.message = message
        self.line = line
        self.column = column
        self.cause = cause
        where = f" at {line}:{column}" if line else ""
        super().__init__(f"template error{where}: {message}")


class TemplateStructureError(TemplateError):
    """Unmatched if/endif, content after 'endif', unterminated comment."""
    pass


class TemplateConditionError(TemplateError):
    """Condition of an 'if' failed to parse or to evaluate."""

    def __init__(self, message: str, condition: str, line: int, column: int, cause: Exception):
        super().__init__(f"{message} in condition '{condition}'", line, column, cause)
        self.condition = condition


__all__ = ["TemplateError", "TemplateStructureError", "TemplateConditionError"]

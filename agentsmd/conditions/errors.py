"""
Errors of the condition subsystem.
"""

from __future__ import annotations

from ..errors import AgentsUserError


class ParseError(AgentsUserError):
    """Syntax error in a condition expression."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class LexError(ParseError):
    """Lexical error: unterminated literal or stray characters in an argument list."""
    pass


class EvaluationError(AgentsUserError):
    """Matcher could not be evaluated (invalid glob, unknown language)."""
    pass


__all__ = ["ParseError", "LexError", "EvaluationError"]

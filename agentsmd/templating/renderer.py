"""
Renderer of documents with conditional blocks.

Ties together the scanner, the condition parser and the evaluator:
walks the document once, keeps a stack of open 'if' blocks and emits the
text of blocks whose conditions (and all enclosing ones) hold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..conditions import ConditionEvaluator, ConditionParser, EvaluationError, ParseError
from ..project.query import ProjectQuery
from .errors import TemplateConditionError, TemplateStructureError
from .scanner import ControlMarker, TemplateScanner, TextSegment, line_col

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """Open 'if' block."""
    marker: ControlMarker
    active: bool


class TemplateRenderer:
    """
    Single-pass renderer for documents with <!-- if --> / <!-- endif --> blocks.

    A block's content is emitted only if its own condition and the condition
    of every enclosing block are true. Conditions inside a suppressed block
    are still parsed (syntax errors anywhere abort the render) but are not
    evaluated.
    """

    def __init__(self, query: ProjectQuery):
        """
        Args:
            query: Project state the matchers are evaluated against
        """
        self.query = query
        self.parser = ConditionParser()

    def render(self, text: str) -> str:
        """
        Renders a document.

        Args:
            text: Source document

        Returns:
            Document with control markers removed and false blocks dropped

        Raises:
            TemplateStructureError: Unbalanced markers or malformed comments
            TemplateConditionError: Condition failed to parse or evaluate
        """
        # Fresh evaluator per render: its memo must not outlive the snapshot
        evaluator = ConditionEvaluator(self.query)
        stack: List[_Frame] = []
        inactive = 0  # number of false frames on the stack
        out: List[str] = []

        for segment in TemplateScanner(text).scan():
            if isinstance(segment, TextSegment):
                if not inactive:
                    out.append(segment.text)
                continue

            if segment.kind == "if":
                active = self._evaluate(text, segment, evaluator, enabled=not inactive)
                stack.append(_Frame(marker=segment, active=active))
                if not active:
                    inactive += 1
            else:
                if not stack:
                    raise TemplateStructureError("stray 'endif'", segment.line, segment.column)
                frame = stack.pop()
                if not frame.active:
                    inactive -= 1

        if stack:
            opened = stack[-1].marker
            raise TemplateStructureError("unclosed 'if' block", opened.line, opened.column)

        return "".join(out)

    def _evaluate(self, text: str, marker: ControlMarker, evaluator: ConditionEvaluator, *, enabled: bool) -> bool:
        try:
            ast = self.parser.parse(marker.condition)
        except ParseError as e:
            line, column = line_col(text, marker.condition_pos + e.position)
            raise TemplateConditionError(e.message, marker.condition, line, column, e) from e

        if not enabled:
            return False

        try:
            result = evaluator.evaluate(ast)
        except EvaluationError as e:
            raise TemplateConditionError(str(e), marker.condition, marker.line, marker.column, e) from e

        logger.debug(f"if {marker.condition} ({marker.location}) -> {result}")
        return result


def render_template(text: str, query: ProjectQuery) -> str:
    """
    Convenience function: renders a document against a project query.

    Args:
        text: Source document
        query: Project state

    Returns:
        Rendered text
    """
    return TemplateRenderer(query).render(text)


__all__ = ["TemplateRenderer", "render_template"]

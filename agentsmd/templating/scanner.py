"""
Scanner for HTML comments carrying control markers.

Finds `<!-- if EXPR -->` and `<!-- endif -->` comments in a document and
splits it into literal text segments and control markers. Any other HTML
comment is plain text and is left untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Union

from .errors import TemplateStructureError


@dataclass(frozen=True)
class ControlMarker:
    """
    Control comment: If(condition) or EndIf.

    Attributes:
        kind: 'if' or 'endif'
        condition: Condition text of an 'if' (stripped), empty for 'endif'
        start_pos: Offset of '<!--' in the document
        end_pos: Offset just after '-->'
        span_start: Start of the text removed from the output
        span_end: End of the text removed from the output
        line: 1-based line of the comment
        column: 1-based column of the comment
        condition_pos: Offset of the condition text in the document
    """
    kind: str
    condition: str
    start_pos: int
    end_pos: int
    span_start: int
    span_end: int
    line: int
    column: int
    condition_pos: int = -1

    @property
    def location(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class TextSegment:
    """Literal text (non-control comments included), emitted verbatim."""
    start_pos: int
    end_pos: int
    text: str


Segment = Union[TextSegment, ControlMarker]


def line_col(text: str, pos: int) -> tuple:
    """1-based (line, column) of an offset."""
    line = text.count("\n", 0, pos) + 1
    column = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, column


class TemplateScanner:
    """
    Splits a document into text segments and control markers.

    Recognizes:
    - <!-- if CONDITION -->
    - <!-- endif -->

    A marker alone on its line takes the whole line with it (indentation and
    line break included), so blocks do not leave blank lines behind.
    """

    COMMENT_PATTERN = re.compile(r'<!--(.*?)-->', re.DOTALL)
    CONTROL_PATTERN = re.compile(r'\s*(if|endif)(?![A-Za-z0-9_])(.*)\Z', re.DOTALL)
    COMMENT_OPEN = "<!--"

    def __init__(self, text: str):
        """
        Args:
            text: Source document
        """
        self.text = text
        self.length = len(text)

    def scan(self) -> List[Segment]:
        """
        Scans the whole document.

        Returns:
            Segments in document order; concatenating every TextSegment
            gives the document with control markers removed

        Raises:
            TemplateStructureError: Unterminated comment or content after 'endif'
        """
        segments: List[Segment] = []
        current_pos = 0
        scanned_pos = 0

        for match in self.COMMENT_PATTERN.finditer(self.text):
            scanned_pos = match.end()
            marker = self._classify(match)
            if marker is None:
                continue

            self._append_text(segments, current_pos, marker.span_start)
            segments.append(marker)
            current_pos = marker.span_end

        # A comment opener after the last complete comment never found its '-->'
        opener = self.text.find(self.COMMENT_OPEN, scanned_pos)
        if opener != -1:
            line, column = line_col(self.text, opener)
            raise TemplateStructureError("unterminated comment; missing '-->'", line, column)

        self._append_text(segments, current_pos, self.length)
        return segments

    def _classify(self, match: re.Match) -> Union[ControlMarker, None]:
        control = self.CONTROL_PATTERN.match(match.group(1))
        if not control:
            return None

        kind = control.group(1)
        rest = control.group(2)
        line, column = line_col(self.text, match.start())

        if kind == "endif" and rest.strip():
            raise TemplateStructureError(
                f"unexpected content after 'endif': '{rest.strip()}'", line, column
            )

        condition = rest.strip()
        condition_pos = match.start(1) + control.start(2) + (len(rest) - len(rest.lstrip()))
        span_start, span_end = self._removal_span(match.start(), match.end())

        return ControlMarker(
            kind=kind,
            condition=condition if kind == "if" else "",
            start_pos=match.start(),
            end_pos=match.end(),
            span_start=span_start,
            span_end=span_end,
            line=line,
            column=column,
            condition_pos=condition_pos if kind == "if" else -1,
        )

    def _removal_span(self, start: int, end: int) -> tuple:
        """Extends a marker to its whole line when nothing else is on it."""
        line_start = self.text.rfind("\n", 0, start) + 1
        if self.text[line_start:start].strip(" \t"):
            return start, end

        line_end = self.text.find("\n", end)
        tail_end = self.length if line_end == -1 else line_end
        if self.text[end:tail_end].strip(" \t\r"):
            return start, end

        return line_start, self.length if line_end == -1 else line_end + 1

    def _append_text(self, segments: List[Segment], start: int, end: int) -> None:
        if start >= end:
            return
        segments.append(TextSegment(start_pos=start, end_pos=end, text=self.text[start:end]))


def scan_template(text: str) -> List[Segment]:
    """Convenience function: scans a document into segments."""
    return TemplateScanner(text).scan()


__all__ = [
    "ControlMarker",
    "TextSegment",
    "Segment",
    "TemplateScanner",
    "scan_template",
    "line_col",
]

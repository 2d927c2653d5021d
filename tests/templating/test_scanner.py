"""
Tests for the control comment scanner.
"""

import pytest

from agentsmd.templating.errors import TemplateStructureError
from agentsmd.templating.scanner import ControlMarker, TemplateScanner, TextSegment, line_col, scan_template


def markers(text: str):
    return [s for s in scan_template(text) if isinstance(s, ControlMarker)]


def texts(text: str) -> str:
    return "".join(s.text for s in scan_template(text) if isinstance(s, TextSegment))


class TestTemplateScanner:

    def test_plain_text(self):
        segments = TemplateScanner("hello\nworld\n").scan()
        assert segments == [TextSegment(start_pos=0, end_pos=12, text="hello\nworld\n")]

    def test_empty_document(self):
        assert scan_template("") == []

    def test_if_and_endif(self):
        found = markers('<!-- if exists("a") -->\nbody\n<!-- endif -->\n')

        assert [m.kind for m in found] == ["if", "endif"]
        assert found[0].condition == 'exists("a")'
        assert found[1].condition == ""
        assert found[0].line == 1 and found[0].column == 1
        assert found[1].location == "3:1"

    def test_condition_whitespace_is_trimmed(self):
        found = markers("<!--   if    env(CI)   -->")
        assert found[0].condition == "env(CI)"

    def test_markers_without_spaces(self):
        found = markers("<!--if env(CI)--><!--endif-->")
        assert [m.kind for m in found] == ["if", "endif"]
        assert found[0].condition == "env(CI)"

    def test_condition_position(self):
        text = "ab\n<!-- if  env(CI) -->"
        (marker,) = markers(text)
        assert text[marker.condition_pos:].startswith("env(CI)")

    def test_multiline_condition(self):
        found = markers("<!-- if env(A)\n   && env(B) -->x<!-- endif -->")
        assert found[0].condition == "env(A)\n   && env(B)"

    def test_other_comments_are_text(self):
        text = "<!-- just a note -->\n<!-- iffy -->\n<!-- endiff -->\n"
        assert markers(text) == []
        assert texts(text) == text

    def test_standalone_markers_take_their_line(self):
        text = "before\n  <!-- if env(CI) -->  \nbody\n<!-- endif -->\nafter\n"
        assert texts(text) == "before\nbody\nafter\n"

    def test_inline_markers_keep_surroundings(self):
        text = "a <!-- if env(CI) -->b<!-- endif --> c\n"
        assert texts(text) == "a b c\n"

    def test_marker_on_last_line_without_newline(self):
        assert texts("x\n<!-- endif -->") == "x\n"

    def test_crlf_line_endings(self):
        text = "<!-- if env(CI) -->\r\nbody\r\n<!-- endif -->\r\n"
        assert texts(text) == "body\r\n"

    def test_content_after_endif(self):
        with pytest.raises(TemplateStructureError, match="unexpected content after 'endif': 'env\\(CI\\)'") as exc:
            scan_template("x\n<!-- endif env(CI) -->")
        assert (exc.value.line, exc.value.column) == (2, 1)

    def test_unterminated_comment(self):
        with pytest.raises(TemplateStructureError, match="unterminated comment") as exc:
            scan_template("<!-- note -->\ntext <!-- if env(CI)\nmore")
        assert (exc.value.line, exc.value.column) == (2, 6)

    def test_unterminated_plain_comment(self):
        with pytest.raises(TemplateStructureError, match="missing '-->'"):
            scan_template("<!-- just a note")


def test_line_col():
    text = "ab\ncd\n"
    assert line_col(text, 0) == (1, 1)
    assert line_col(text, 1) == (1, 2)
    assert line_col(text, 3) == (2, 1)
    assert line_col(text, 6) == (3, 1)

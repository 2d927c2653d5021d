"""
Tests for the matcher argument lexer.
"""

import pytest

from agentsmd.conditions.errors import LexError, ParseError
from agentsmd.conditions.literals import ArgumentLexer, unescape
from agentsmd.conditions.model import ArgKind


def lex(args: str, split_equals: bool = False):
    """Scans '(' + args + ')' and returns (kind, value) pairs."""
    tokens, end = ArgumentLexer().scan("(" + args + ")", 1, split_equals=split_equals)
    assert end == len(args) + 2
    return [(t.kind, t.value) for t in tokens]


class TestArgumentLexer:

    def test_double_quoted(self):
        assert lex('"Cargo.toml"') == [(ArgKind.STRING, "Cargo.toml")]

    def test_single_quoted(self):
        assert lex("'src/**'") == [(ArgKind.STRING, "src/**")]

    def test_escape_sequences(self):
        assert lex(r'"a\nb\tc\rd"') == [(ArgKind.STRING, "a\nb\tc\rd")]
        assert lex(r'"back\\slash"') == [(ArgKind.STRING, "back\\slash")]
        assert lex(r'"say \"hi\""') == [(ArgKind.STRING, 'say "hi"')]
        assert lex(r"'it\'s'") == [(ArgKind.STRING, "it's")]

    def test_unknown_escape_kept(self):
        assert lex(r'"\d+"') == [(ArgKind.STRING, "\\d+")]

    def test_raw_strings_are_verbatim(self):
        assert lex(r'r"C:\path\n"') == [(ArgKind.STRING, "C:\\path\\n")]
        assert lex(r"r'**/*.rs'") == [(ArgKind.STRING, "**/*.rs")]

    def test_bare_tokens(self):
        assert lex("CI") == [(ArgKind.BARE, "CI")]
        assert lex("src/**/*.rs") == [(ArgKind.BARE, "src/**/*.rs")]
        assert lex("c++") == [(ArgKind.BARE, "c++")]

    def test_bare_token_starting_with_r(self):
        """'rust' is a name, not a raw string"""
        assert lex("rust") == [(ArgKind.BARE, "rust")]

    def test_equals_separator(self):
        assert lex("NODE_ENV=production", split_equals=True) == [
            (ArgKind.BARE, "NODE_ENV"),
            (ArgKind.EQUALS, "="),
            (ArgKind.BARE, "production"),
        ]

    def test_bare_token_keeps_equals_and_quotes(self):
        assert lex("a=b.txt") == [(ArgKind.BARE, "a=b.txt")]
        assert lex('it"s') == [(ArgKind.BARE, 'it"s')]
        assert lex("=") == [(ArgKind.BARE, "=")]

    def test_env_bare_token_stops_at_equals(self):
        assert lex("a=b.txt", split_equals=True) == [
            (ArgKind.BARE, "a"),
            (ArgKind.EQUALS, "="),
            (ArgKind.BARE, "b.txt"),
        ]

    def test_whitespace_is_insignificant(self):
        assert lex('  NAME  =  "v a l"  ', split_equals=True) == [
            (ArgKind.BARE, "NAME"),
            (ArgKind.EQUALS, "="),
            (ArgKind.STRING, "v a l"),
        ]

    def test_empty_argument_list(self):
        assert lex("") == []
        assert lex("   ") == []

    def test_closing_paren_inside_quotes(self):
        assert lex('"a)b"') == [(ArgKind.STRING, "a)b")]

    def test_end_position(self):
        tokens, end = ArgumentLexer().scan('("a") && env(B)', 1)
        assert [t.value for t in tokens] == ["a"]
        assert end == 5

    def test_token_positions(self):
        tokens, _ = ArgumentLexer().scan('(A = "b")', 1, split_equals=True)
        assert [t.position for t in tokens] == [1, 3, 5]

    def test_unterminated_string(self):
        with pytest.raises(LexError, match="unterminated string literal"):
            ArgumentLexer().scan('("abc)', 1)

        with pytest.raises(LexError, match="unterminated string literal"):
            ArgumentLexer().scan(r"('abc\')", 1)

    def test_unterminated_raw_string(self):
        with pytest.raises(LexError, match="unterminated raw string"):
            ArgumentLexer().scan('(r"abc)', 1)

    def test_missing_closing_paren(self):
        with pytest.raises(LexError, match="missing '\\)'"):
            ArgumentLexer().scan('("a"', 1)

    def test_lex_error_is_parse_error(self):
        with pytest.raises(ParseError):
            ArgumentLexer().scan('("a', 1)


def test_unescape():
    assert unescape(r"a\\b") == "a\\b"
    assert unescape("plain") == "plain"
    assert unescape("trailing\\") == "trailing\\"

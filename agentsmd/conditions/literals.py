"""
Lexer for matcher argument lists.

Reads the text between the parentheses of a matcher call and splits it into
argument tokens:
- quoted strings ("..." and '...') with escape sequences
- raw strings (r"..." and r'...') taken verbatim
- bare tokens (unquoted names, globs, language names)
- the '=' separator of env(NAME=VALUE)
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .errors import LexError
from .model import ArgKind, ArgToken

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def unescape(body: str) -> str:
    """
    Decodes escape sequences of a quoted literal.

    Unknown escapes are kept as is (backslash included).
    """
    out: List[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class ArgumentLexer:
    """
    Tokenizer for the contents of a matcher's parentheses.

    Supported tokens:
    - STRING: "..." / '...' (unescaped) and r"..." / r'...' (verbatim)
    - BARE: run of characters up to whitespace or ')'; with split_equals
      (env arguments) it also stops at '=' and quotes
    - EQUALS: '=' (split_equals only)
    - CLOSE: ')' ends the argument list
    """

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),
        (r'\)', 'CLOSE', False),
        (r'=', 'EQUALS', False),

        # Raw strings go before bare tokens, otherwise 'r' would be taken as a name
        (r'r"[^"]*"', 'RAW', False),
        (r"r'[^']*'", 'RAW', False),
        (r'r["\']', 'UNTERMINATED_RAW', False),

        (r'"(?:[^"\\]|\\.)*"', 'QUOTED', False),
        (r"'(?:[^'\\]|\\.)*'", 'QUOTED', False),
        (r'["\']', 'UNTERMINATED', False),

        (r'[^\s)="\']+', 'BARE', False),
    ]

    # exists() and lang() take one token that may contain '=' and quotes
    PLAIN_BARE = r'[^\s)"\'][^\s)]*'

    def __init__(self):
        self._env_patterns = self._compile(self.TOKEN_SPECS)
        self._plain_patterns = self._compile(
            [spec for spec in self.TOKEN_SPECS if spec[1] not in ('EQUALS', 'BARE')]
            + [(self.PLAIN_BARE, 'BARE', False)]
        )

    @staticmethod
    def _compile(specs):
        return [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in specs
        ]

    def scan(self, text: str, position: int, *, split_equals: bool = False) -> Tuple[List[ArgToken], int]:
        """
        Tokenizes an argument list.

        Args:
            text: Full condition text
            position: Offset just after the opening '('
            split_equals: Treat '=' as a separator (env arguments)

        Returns:
            Tuple (tokens, offset just after the closing ')')

        Raises:
            LexError: Unterminated literal or missing ')'
        """
        open_pos = max(position - 1, 0)
        patterns = self._env_patterns if split_equals else self._plain_patterns
        tokens: List[ArgToken] = []

        while position < len(text):
            for pattern, token_type, ignore in patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if token_type == 'CLOSE':
                    return tokens, match.end()
                if token_type == 'UNTERMINATED':
                    raise LexError("unterminated string literal", position)
                if token_type == 'UNTERMINATED_RAW':
                    raise LexError("unterminated raw string", position)

                if not ignore:
                    tokens.append(self._make_token(token_type, value, position))

                position = match.end()
                break

        raise LexError("missing ')' after matcher arguments", open_pos)

    @staticmethod
    def _make_token(token_type: str, value: str, position: int) -> ArgToken:
        if token_type == 'EQUALS':
            return ArgToken(kind=ArgKind.EQUALS, value="=", position=position)
        if token_type == 'RAW':
            return ArgToken(kind=ArgKind.STRING, value=value[2:-1], position=position)
        if token_type == 'QUOTED':
            return ArgToken(kind=ArgKind.STRING, value=unescape(value[1:-1]), position=position)
        return ArgToken(kind=ArgKind.BARE, value=value, position=position)


__all__ = ["ArgumentLexer", "unescape"]

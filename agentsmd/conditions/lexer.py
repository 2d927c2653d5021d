"""
Lexer for condition expressions.

Splits a condition string into meaningful elements:
- Operators (!, &&, ||)
- Parentheses for grouping
- Matcher names (identifiers)
- Matcher argument lists (delegated to ArgumentLexer)
- Whitespace (ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import ParseError
from .literals import ArgumentLexer
from .model import ArgToken


@dataclass
class Token:
    """
    Token of a condition expression.

    Attributes:
        type: Token type (OPERATOR, SYMBOL, IDENTIFIER, ARGS, EOF)
        value: Token text
        position: Offset in the source string
        args: Decoded arguments (ARGS tokens only)
    """
    type: str
    value: str
    position: int
    args: Tuple[ArgToken, ...] = ()

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """
    Lexer that turns a condition string into tokens.

    Supported tokens:
    - OPERATOR: !, &&, ||
    - SYMBOL: (, )
    - IDENTIFIER: matcher names
    - ARGS: argument list following an identifier, '(' and ')' included
    - EOF: end of input
    """

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        # Two-character operators go before anything that could split them
        (r'&&', 'OPERATOR', False),
        (r'\|\|', 'OPERATOR', False),
        (r'!', 'OPERATOR', False),

        (r'\(', 'SYMBOL', False),
        (r'\)', 'SYMBOL', False),

        (r'[A-Za-z_][A-Za-z0-9_]*', 'IDENTIFIER', False),

        # Operator-like garbage: '&', '|', '=', '==', '<', ...
        (r'[&|=<>~^%+*/,;:?-]+', 'UNKNOWN_OPERATOR', False),

        (r'.', 'UNKNOWN', False),
    ]

    _CALL_OPEN = re.compile(r'\s*\(')

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]
        self._args_lexer = ArgumentLexer()

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits the string into tokens.

        Args:
            text: Condition string

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: On an unknown operator or unexpected character
            LexError: On a malformed argument list
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)

                if token_type == 'UNKNOWN_OPERATOR':
                    raise ParseError(f"unknown operator '{value}'", position)
                if token_type == 'UNKNOWN':
                    raise ParseError(f"unexpected character '{value}'", position)

                position = match.end()
                if ignore:
                    break

                tokens.append(Token(type=token_type, value=value, position=match.start()))

                # An identifier directly followed by '(' starts an argument list
                if token_type == 'IDENTIFIER':
                    call = self._CALL_OPEN.match(text, position)
                    if call:
                        args_start = call.end() - 1
                        args, end = self._args_lexer.scan(text, call.end(), split_equals=(value == "env"))
                        tokens.append(Token(
                            type='ARGS',
                            value=text[args_start:end],
                            position=args_start,
                            args=tuple(args),
                        ))
                        position = end
                break

        tokens.append(Token(type='EOF', value='', position=position))

        return tokens

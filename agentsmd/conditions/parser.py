"""
Recursive-descent parser for condition expressions.

Builds an abstract syntax tree (AST) from the token sequence.
Honors operator precedence and explicit grouping with parentheses.

Grammar:
expression     → or_expression
or_expression  → and_expression ("||" and_expression)*
and_expression → not_expression ("&&" not_expression)*
not_expression → "!" not_expression | primary
primary        → "(" expression ")" | matcher_call

matcher_call   → IDENTIFIER ARGS
    exists(PATTERN)
    lang(NAME)
    env(NAME) | env(NAME=VALUE)
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import LexError, ParseError
from .lexer import ConditionLexer, Token
from .model import (
    MATCHER_NAMES,
    ArgKind,
    ArgToken,
    BinaryCondition,
    Condition,
    ConditionType,
    GroupCondition,
    MatcherCall,
    MatcherCondition,
    NotCondition,
)


class ConditionParser:
    """
    Recursive-descent parser for condition expressions.

    Turns the token list into an AST following the precedence and
    grouping rules. Performs no evaluation and no I/O.
    """

    def __init__(self):
        self.lexer = ConditionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, condition_str: str) -> Condition:
        """
        Parses a condition string into an AST.

        Args:
            condition_str: Condition expression

        Returns:
            Root node of the AST

        Raises:
            ParseError: On a syntax error (LexError for lexical ones)
        """
        if not condition_str.strip():
            raise ParseError("Empty condition", 0)

        self._tokens = self.lexer.tokenize(condition_str)
        self._position = 0

        result = self._parse_expression()

        if not self._is_at_end():
            current = self._current_token()
            raise ParseError(
                f"trailing characters in expression: '{current.value}'",
                current.position,
            )

        return result

    def _parse_expression(self) -> Condition:
        return self._parse_or_expression()

    def _parse_or_expression(self) -> Condition:
        """Parses '||' (lowest precedence)."""
        left = self._parse_and_expression()

        while self._match_operator("||"):
            right = self._parse_and_expression()
            left = BinaryCondition(left=left, right=right, operator=ConditionType.OR)

        return left

    def _parse_and_expression(self) -> Condition:
        """Parses '&&'."""
        left = self._parse_not_expression()

        while self._match_operator("&&"):
            right = self._parse_not_expression()
            left = BinaryCondition(left=left, right=right, operator=ConditionType.AND)

        return left

    def _parse_not_expression(self) -> Condition:
        """Parses '!' (highest precedence, right-associative)."""
        if self._match_operator("!"):
            condition = self._parse_not_expression()
            return NotCondition(condition=condition)

        return self._parse_primary()

    def _parse_primary(self) -> Condition:
        """Parses a matcher call or a parenthesized group."""
        if self._match_symbol("("):
            expr = self._parse_expression()
            if not self._match_symbol(")"):
                raise ParseError("expected ')' after grouped expression", self._current_position())
            return GroupCondition(condition=expr)

        current = self._current_token()
        if current.type == 'IDENTIFIER':
            self._advance()
            return MatcherCondition(call=self._parse_matcher_call(current))

        if current.type == 'EOF':
            raise ParseError("unexpected end of expression", current.position)
        raise ParseError(f"expected matcher or '(', got '{current.value}'", current.position)

    def _parse_matcher_call(self, name_token: Token) -> MatcherCall:
        name = name_token.value
        if name not in MATCHER_NAMES:
            raise ParseError(
                f"unknown matcher '{name}'. Expected one of: {', '.join(MATCHER_NAMES)}",
                name_token.position,
            )

        args_token = self._current_token()
        if args_token.type != 'ARGS':
            raise ParseError(f"expected '(' after '{name}'", args_token.position)
        self._advance()

        args = args_token.args
        if name == "env":
            self._check_env_args(args, args_token)
        else:
            self._check_single_arg(name, args, args_token)

        return MatcherCall(name=name, args=args)

    @staticmethod
    def _check_single_arg(name: str, args: Tuple[ArgToken, ...], args_token: Token) -> None:
        """exists(...) and lang(...) take exactly one string or bare token."""
        if not args:
            raise ParseError(f"expected argument for '{name}'", args_token.position)
        if len(args) > 1:
            raise LexError("stray characters in argument list", args[1].position)

    @staticmethod
    def _check_env_args(args: Tuple[ArgToken, ...], args_token: Token) -> None:
        """env(NAME) or env(NAME=VALUE); VALUE may be empty."""
        if not args:
            raise ParseError("empty env() argument", args_token.position)
        if args[0].kind is ArgKind.EQUALS or not args[0].value:
            raise ParseError("empty env var name", args[0].position)
        if len(args) == 1:
            return
        if args[1].kind is not ArgKind.EQUALS:
            raise LexError("stray characters in argument list", args[1].position)
        if len(args) == 2:
            return
        if len(args) == 3 and args[2].kind is not ArgKind.EQUALS:
            return
        stray = args[2] if args[2].kind is ArgKind.EQUALS else args[3]
        raise LexError("stray characters in argument list", stray.position)

    # Token helpers

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return self._tokens[-1]
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _match_operator(self, operator: str) -> bool:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == operator:
            self._advance()
            return True
        return False

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False


def parse_condition(condition_str: str) -> Condition:
    """Convenience function: parses a condition string."""
    return ConditionParser().parse(condition_str)


__all__ = ["ConditionParser", "ParseError", "LexError", "parse_condition"]

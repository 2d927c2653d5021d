"""
Data model for condition expressions.

Holds the AST produced by the condition parser: logical operators over
matcher calls (`exists`, `env`, `lang`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


MATCHER_NAMES = ("exists", "env", "lang")


class ConditionType(Enum):
    """Node types of the condition AST."""
    MATCHER = "matcher"
    AND = "and"
    OR = "or"
    NOT = "not"
    GROUP = "group"  # explicit parentheses


class ArgKind(Enum):
    """Kinds of tokens inside a matcher argument list."""
    STRING = "string"  # quoted or raw literal, already unescaped
    BARE = "bare"      # unquoted run of characters
    EQUALS = "equals"  # '=' separator of env(NAME=VALUE)


@dataclass(frozen=True)
class ArgToken:
    """
    Single token of a matcher argument list.

    Attributes:
        kind: Token kind
        value: Decoded value ('=' for EQUALS)
        position: Offset of the token in the condition text
    """
    kind: ArgKind
    value: str
    position: int

    def __str__(self) -> str:
        if self.kind is ArgKind.STRING:
            escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return self.value


@dataclass(frozen=True)
class MatcherCall:
    """
    Call of a named predicate: exists(...), env(...), lang(...).

    The parser guarantees that `name` is one of MATCHER_NAMES and that the
    arguments fit the matcher's arity.
    """
    name: str
    args: Tuple[ArgToken, ...]

    def values(self) -> Tuple[str, ...]:
        """Argument values without '=' separators."""
        return tuple(a.value for a in self.args if a.kind is not ArgKind.EQUALS)

    def has_equals(self) -> bool:
        return any(a.kind is ArgKind.EQUALS for a in self.args)

    def __str__(self) -> str:
        if self.has_equals():
            return f"{self.name}({''.join(str(a) for a in self.args)})"
        return f"{self.name}({' '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Condition(ABC):
    """Base class of all condition nodes."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Returns the node type."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class MatcherCondition(Condition):
    """
    Leaf node: a matcher call.

    True when the matcher holds for the project being rendered.
    """
    call: MatcherCall

    def get_type(self) -> ConditionType:
        return ConditionType.MATCHER

    def _to_string(self) -> str:
        return str(self.call)


@dataclass(frozen=True)
class GroupCondition(Condition):
    """
    Parenthesized condition: (condition)

    Transparent for evaluation, kept to reproduce the source structure.
    """
    condition: Condition

    def get_type(self) -> ConditionType:
        return ConditionType.GROUP

    def _to_string(self) -> str:
        return f"({self.condition})"


@dataclass(frozen=True)
class NotCondition(Condition):
    """Negation: !condition"""
    condition: Condition

    def get_type(self) -> ConditionType:
        return ConditionType.NOT

    def _to_string(self) -> str:
        return f"!{self.condition}"


@dataclass(frozen=True)
class BinaryCondition(Condition):
    """
    Binary operation: left op right

    Supported operators:
    - AND (&&): true if both operands are true
    - OR (||): true if at least one operand is true
    """
    left: Condition
    right: Condition
    operator: ConditionType  # AND or OR

    def get_type(self) -> ConditionType:
        return self.operator

    def _to_string(self) -> str:
        op_str = "&&" if self.operator == ConditionType.AND else "||"
        return f"{self.left} {op_str} {self.right}"


__all__ = [
    "MATCHER_NAMES",
    "ArgKind",
    "ArgToken",
    "MatcherCall",
    "Condition",
    "ConditionType",
    "MatcherCondition",
    "GroupCondition",
    "NotCondition",
    "BinaryCondition",
]

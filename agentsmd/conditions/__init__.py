"""
Condition expressions: exists(), env(), lang() combined with !, &&, ||.
"""

from .errors import EvaluationError, LexError, ParseError
from .evaluator import ConditionEvaluator, evaluate_condition_string
from .lexer import ConditionLexer, Token
from .literals import ArgumentLexer
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
from .parser import ConditionParser, parse_condition

__all__ = [
    "MATCHER_NAMES",
    "ArgKind",
    "ArgToken",
    "ArgumentLexer",
    "BinaryCondition",
    "Condition",
    "ConditionEvaluator",
    "ConditionLexer",
    "ConditionParser",
    "ConditionType",
    "EvaluationError",
    "GroupCondition",
    "LexError",
    "MatcherCall",
    "MatcherCondition",
    "NotCondition",
    "ParseError",
    "Token",
    "evaluate_condition_string",
    "parse_condition",
]

"""
Evaluator of condition expressions.

Walks the condition AST and computes its value against a ProjectQuery:
files of the project (exists, lang) and the process environment (env).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Tuple, cast

from .errors import EvaluationError
from .model import (
    BinaryCondition,
    Condition,
    ConditionType,
    GroupCondition,
    MatcherCall,
    MatcherCondition,
    NotCondition,
)

if TYPE_CHECKING:
    from ..project.query import ProjectQuery

logger = logging.getLogger(__name__)

MatcherKey = Tuple[str, Tuple[str, ...]]


class ConditionEvaluator:
    """
    Evaluator of condition expressions.

    Takes a condition AST and a project query, returns a boolean.
    Matcher results are memoized for the evaluator's lifetime, so one
    evaluator should live exactly as long as one render.
    """

    def __init__(self, query: ProjectQuery):
        """
        Args:
            query: Capability answering file and environment questions
        """
        self.query = query
        self._cache: Dict[MatcherKey, bool] = {}

    def evaluate(self, condition: Condition) -> bool:
        """
        Computes the value of a condition.

        Args:
            condition: Root node of the condition AST

        Returns:
            Result of the evaluation

        Raises:
            EvaluationError: Invalid glob, unknown language or unknown node type
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.MATCHER:
            return self._evaluate_matcher(cast(MatcherCondition, condition).call)
        elif condition_type == ConditionType.GROUP:
            return self.evaluate(cast(GroupCondition, condition).condition)
        elif condition_type == ConditionType.NOT:
            return not self.evaluate(cast(NotCondition, condition).condition)
        elif condition_type == ConditionType.AND:
            return self._evaluate_and(cast(BinaryCondition, condition))
        elif condition_type == ConditionType.OR:
            return self._evaluate_or(cast(BinaryCondition, condition))
        else:
            raise EvaluationError(f"Unknown condition type: {condition_type}")

    def _evaluate_and(self, condition: BinaryCondition) -> bool:
        # Short-circuit: the right operand is not evaluated (nor can it fail)
        if not self.evaluate(condition.left):
            return False
        return self.evaluate(condition.right)

    def _evaluate_or(self, condition: BinaryCondition) -> bool:
        if self.evaluate(condition.left):
            return True
        return self.evaluate(condition.right)

    def _evaluate_matcher(self, call: MatcherCall) -> bool:
        key = self._matcher_key(call)
        if key in self._cache:
            return self._cache[key]

        if call.name == "exists":
            result = self._evaluate_exists(call)
        elif call.name == "env":
            result = self._evaluate_env(call)
        elif call.name == "lang":
            result = self._evaluate_lang(call)
        else:
            raise EvaluationError(f"unknown matcher: {call.name}")

        logger.debug(f"{call} -> {result}")
        self._cache[key] = result
        return result

    def _evaluate_exists(self, call: MatcherCall) -> bool:
        """
        exists(PATTERN)

        True if at least one non-ignored file matches the glob.
        """
        (pattern,) = call.values()
        return self.query.glob_exists(pattern)

    def _evaluate_env(self, call: MatcherCall) -> bool:
        """
        env(NAME) / env(NAME=VALUE)

        - env(NAME): variable is set to a non-empty value
          (unset and empty are the same thing here)
        - env(NAME=VALUE): variable is set and equals VALUE exactly
        """
        values = call.values()
        actual = self.query.env_value(values[0])
        if call.has_equals():
            expected = values[1] if len(values) > 1 else ""
            return actual is not None and actual == expected
        return bool(actual)

    def _evaluate_lang(self, call: MatcherCall) -> bool:
        """
        lang(NAME)

        True if any non-ignored file has an extension of the language.
        Unknown languages raise EvaluationError.
        """
        (name,) = call.values()
        return self.query.lang_exists(name)

    @staticmethod
    def _matcher_key(call: MatcherCall) -> MatcherKey:
        values = call.values()
        if call.name == "lang":
            values = tuple(v.lower() for v in values)
        elif call.name == "env" and call.has_equals():
            values = (values[0], "=", values[1] if len(values) > 1 else "")
        return call.name, values


def evaluate_condition_string(condition_str: str, query: ProjectQuery) -> bool:
    """
    Parses and evaluates a condition string.

    Args:
        condition_str: Condition expression
        query: Project query to evaluate matchers against

    Returns:
        Result of the evaluation

    Raises:
        ParseError: On a syntax error
        EvaluationError: On a matcher error
    """
    from .parser import ConditionParser

    parser = ConditionParser()
    ast = parser.parse(condition_str)

    evaluator = ConditionEvaluator(query)
    return evaluator.evaluate(ast)

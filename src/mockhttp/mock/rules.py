"""
mockhttp Rule Evaluator

Boolean rule expressions evaluated against the request context.

Rules use Python expression syntax. Dictionary keys can be reached with
attribute access or subscripts:

    body.name == "William"
    headers["X-Tenant"] == "acme" and int(queryParams.page) > 1
    "premium" in raw

Available names: raw, body, routeParams, headers, cookies, queryParams,
method, path, host.
"""

import logging
from typing import Any, Dict, Optional, Protocol, Sequence

from simpleeval import EvalWithCompoundTypes

logger = logging.getLogger("mockhttp.rules")


class RuleEvaluator(Protocol):
    """Pluggable expression evaluation capability."""

    def evaluate(self, expression: str, context: Dict[str, Any]) -> bool:
        """Evaluate one expression; may raise on invalid input."""
        ...


class KeyFirstEval(EvalWithCompoundTypes):
    """
    simpleeval with dict keys taking precedence over attributes.

    `body.items` reads the "items" field of the request body, not dict.items.
    """

    def _eval_attribute(self, node):
        value = self._eval(node.value)
        if isinstance(value, dict) and node.attr in value:
            return value[node.attr]
        return super()._eval_attribute(node)


class SimpleRuleEvaluator:
    """
    Sandboxed rule evaluator backed by simpleeval.

    Example:
        evaluator = SimpleRuleEvaluator()
        evaluator.evaluate('body.name == "William"', {'body': {'name': 'William'}})
        # True
    """

    def __init__(self, functions: Optional[Dict[str, Any]] = None):
        """
        Initialize evaluator.

        Args:
            functions: Extra functions callable from rules
        """
        self.functions = {
            'int': int,
            'float': float,
            'str': str,
            'len': len,
            'lower': lambda value: str(value).lower(),
            'upper': lambda value: str(value).upper(),
            **(functions or {}),
        }

    def evaluate(self, expression: str, context: Dict[str, Any]) -> bool:
        evaluator = KeyFirstEval(names=context, functions=self.functions)
        return evaluator.eval(expression)


def rules_satisfied(evaluator: RuleEvaluator, rules: Sequence[str], context: Dict[str, Any]) -> bool:
    """
    Check whether every rule evaluates to boolean True.

    An empty rule list is never satisfied (it marks the default response).
    Evaluation errors and non-boolean results count as not satisfied.

    Args:
        evaluator: Rule evaluator
        rules: Rule expressions
        context: Request context (NormalizedRequest.rule_context())

    Returns:
        True if all rules hold
    """
    if not rules:
        return False

    for rule in rules:
        try:
            result = evaluator.evaluate(rule, context)
        except Exception as e:
            logger.debug(f"Rule {rule!r} failed to evaluate: {e}")
            return False

        if result is not True:
            return False

    return True

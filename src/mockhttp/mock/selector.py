"""
mockhttp Response Selector

Picks exactly one response from a matched definition.
"""

from typing import Optional

from ..errors import NoMockResponseError
from .models import Definition, MockResponse, NormalizedRequest
from .rules import RuleEvaluator, SimpleRuleEvaluator, rules_satisfied


class ResponseSelector:
    """
    Chooses the response to serve for a matched definition.

    Selection order (declaration order preserved):
    1. First response whose non-empty rule set is fully satisfied
    2. First response without rules (the default)
    """

    def __init__(self, evaluator: Optional[RuleEvaluator] = None):
        self.evaluator = evaluator or SimpleRuleEvaluator()

    def select(self, definition: Definition, request: NormalizedRequest) -> MockResponse:
        """
        Select the response for a request.

        Args:
            definition: Matched definition
            request: Normalized request with route parameters filled in

        Returns:
            Chosen MockResponse

        Raises:
            NoMockResponseError: If no rule-bearing response is satisfied and
                                 the definition has no default response
        """
        context = request.rule_context()

        for response in definition.responses:
            if not response.is_default and rules_satisfied(self.evaluator, response.rules, context):
                return response

        for response in definition.responses:
            if response.is_default:
                return response

        raise NoMockResponseError(
            f"No mock response qualified for {definition.method} {definition.host}{definition.path}"
        )

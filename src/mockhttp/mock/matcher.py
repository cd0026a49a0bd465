"""
mockhttp Request Matcher

Finds the definition serving an inbound request by walking the match tiers
in priority order:

1. Exact paths        (/v1/users/me)
2. Path parameters    (/v1/users/:id)
3. Trailing wildcards (/v1/users/*)

Within a tier the first definition (declaration order) whose compiled
pattern matches the path wins.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .index import DefinitionIndex
from .models import Definition, MatchTier

TIER_ORDER = (MatchTier.EXACT, MatchTier.PARAMETERIZED, MatchTier.WILDCARD)


@dataclass
class MatchResult:
    """Result of matching a request."""

    matched: bool
    definition: Optional[Definition] = None
    route_params: Dict[str, str] = field(default_factory=dict)
    tier: Optional[MatchTier] = None
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'matched': self.matched,
            'tier': self.tier.name.lower() if self.tier else None,
            'route_params': dict(self.route_params),
            'reason': self.reason,
            'definition_path': self.definition.path if self.definition else None,
        }


class RequestMatcher:
    """
    Tiered matcher over a DefinitionIndex.

    Example:
        matcher = RequestMatcher(index)
        result = matcher.find_match('api.example.com', 'GET', '/info/gordon/project/go')

        if result.matched:
            print(result.route_params)  # {'user': 'gordon', 'project': 'go'}
    """

    def __init__(self, index: DefinitionIndex):
        self.index = index

    def find_match(self, host: str, method: str, path: str) -> MatchResult:
        """
        Find the definition for a request.

        Args:
            host: Request host (port kept unless default)
            method: HTTP method
            path: Canonical request path

        Returns:
            MatchResult with definition and route parameters, or matched=False
        """
        for tier in TIER_ORDER:
            for definition in self.index.tier(tier, host, method):
                route_params = definition.pattern.match(path)
                if route_params is None:
                    continue

                if tier is MatchTier.EXACT:
                    route_params = {}

                return MatchResult(
                    matched=True,
                    definition=definition,
                    route_params=route_params,
                    tier=tier,
                    reason=f"{tier.name.capitalize()} match: {definition.path}",
                )

        return MatchResult(
            matched=False,
            reason=f"No definition for {method.upper()} {host}{path}",
        )

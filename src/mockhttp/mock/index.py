"""
mockhttp Definition Index

Buckets loaded definitions into three disjoint match tiers keyed by
(host, method). Built in one pass and never mutated afterwards, so it can be
shared by concurrent resolve calls without locking.
"""

from typing import Dict, Iterable, List, Tuple

from .models import Definition, MatchTier, normalize_host

IndexKey = Tuple[str, str]


class DefinitionIndex:
    """
    Read-only tiered index of definitions.

    Example:
        index = DefinitionIndex.build(definitions)
        for definition in index.tier(MatchTier.EXACT, 'api.example.com', 'GET'):
            ...
    """

    def __init__(self, tiers: Dict[MatchTier, Dict[IndexKey, Tuple[Definition, ...]]], definitions: Tuple[Definition, ...]):
        self._tiers = tiers
        self._definitions = definitions

    @classmethod
    def build(cls, definitions: Iterable[Definition]) -> 'DefinitionIndex':
        """
        Build an index from definitions, preserving declaration order.

        Args:
            definitions: Compiled definitions

        Returns:
            New DefinitionIndex
        """
        buckets: Dict[MatchTier, Dict[IndexKey, List[Definition]]] = {tier: {} for tier in MatchTier}
        ordered = []

        for definition in definitions:
            buckets[definition.tier].setdefault(definition.key, []).append(definition)
            ordered.append(definition)

        tiers = {
            tier: {key: tuple(items) for key, items in bucket.items()}
            for tier, bucket in buckets.items()
        }
        return cls(tiers, tuple(ordered))

    @classmethod
    def empty(cls) -> 'DefinitionIndex':
        return cls.build([])

    def tier(self, tier: MatchTier, host: str, method: str) -> Tuple[Definition, ...]:
        """Definitions of one tier for a host and method, in declaration order."""
        return self._tiers[tier].get((normalize_host(host), method.upper()), ())

    @property
    def definitions(self) -> Tuple[Definition, ...]:
        return self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def stats(self) -> Dict[str, int]:
        """Number of definitions per tier."""
        return {
            tier.name.lower(): sum(len(items) for items in self._tiers[tier].values())
            for tier in MatchTier
        }

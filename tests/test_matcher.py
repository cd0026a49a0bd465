"""
Tests for mockhttp Definition Index and Request Matcher

Tests the tiered matching engine including:
- Tier classification
- Exact > parameterized > wildcard precedence
- Declaration order within a tier
- Host and method scoping
"""

import pytest

from mockhttp.mock.index import DefinitionIndex
from mockhttp.mock.matcher import MatchResult, RequestMatcher
from mockhttp.mock.models import Definition, MatchTier


def make_definition(path, method='GET', host='api.example.com', desc=''):
    return Definition.from_dict({
        'host': host,
        'path': path,
        'method': method,
        'desc': desc or path,
        'responses': [{'response_body': desc or path}],
    })


@pytest.fixture
def overlapping_definitions():
    """Definitions that all match /v1/users/me, declared lowest tier first."""
    return [
        make_definition('/v1/*rest', desc='wildcard'),
        make_definition('/v1/users/:id', desc='param'),
        make_definition('/v1/users/me', desc='exact'),
    ]


class TestDefinitionIndex:
    """Test suite for DefinitionIndex."""

    def test_tier_classification(self, overlapping_definitions):
        """Test that each definition lands in exactly one tier."""
        wildcard, param, exact = overlapping_definitions

        assert wildcard.tier is MatchTier.WILDCARD
        assert param.tier is MatchTier.PARAMETERIZED
        assert exact.tier is MatchTier.EXACT

    def test_build_buckets_by_tier(self, overlapping_definitions):
        """Test build() distributes definitions across tiers."""
        index = DefinitionIndex.build(overlapping_definitions)

        assert len(index) == 3
        assert index.stats() == {'exact': 1, 'parameterized': 1, 'wildcard': 1}
        assert [d.desc for d in index.tier(MatchTier.EXACT, 'api.example.com', 'GET')] == ['exact']

    def test_tier_lookup_normalizes_host_and_method(self, overlapping_definitions):
        """Test lookups ignore host case, default ports and method case."""
        index = DefinitionIndex.build(overlapping_definitions)

        assert index.tier(MatchTier.EXACT, 'API.example.com:443', 'get')
        assert index.tier(MatchTier.EXACT, 'api.example.com:80', 'GET')
        assert index.tier(MatchTier.EXACT, 'api.example.com:8080', 'GET') == ()

    def test_declaration_order_preserved(self):
        """Test definitions keep declaration order inside a tier."""
        first = make_definition('/a/:x', desc='first')
        second = make_definition('/b/:y', desc='second')

        index = DefinitionIndex.build([first, second])

        assert index.tier(MatchTier.PARAMETERIZED, 'api.example.com', 'GET') == (first, second)
        assert index.definitions == (first, second)

    def test_empty_index(self):
        """Test an empty index has nothing in any tier."""
        index = DefinitionIndex.empty()

        assert len(index) == 0
        assert index.tier(MatchTier.WILDCARD, 'api.example.com', 'GET') == ()


class TestRequestMatcher:
    """Test suite for RequestMatcher."""

    def test_exact_beats_param_and_wildcard(self, overlapping_definitions):
        """Test exact definitions win regardless of load order."""
        matcher = RequestMatcher(DefinitionIndex.build(overlapping_definitions))

        result = matcher.find_match('api.example.com', 'GET', '/v1/users/me')

        assert result.matched
        assert result.tier is MatchTier.EXACT
        assert result.definition.desc == 'exact'
        assert result.route_params == {}

    def test_param_beats_wildcard(self, overlapping_definitions):
        """Test parameterized definitions win over wildcards."""
        matcher = RequestMatcher(DefinitionIndex.build(overlapping_definitions))

        result = matcher.find_match('api.example.com', 'GET', '/v1/users/42')

        assert result.tier is MatchTier.PARAMETERIZED
        assert result.route_params == {'id': '42'}

    def test_wildcard_fallback(self, overlapping_definitions):
        """Test wildcard catches what nothing else matches."""
        matcher = RequestMatcher(DefinitionIndex.build(overlapping_definitions))

        result = matcher.find_match('api.example.com', 'GET', '/v1/orders/1/items')

        assert result.tier is MatchTier.WILDCARD
        assert result.route_params['rest'] == 'orders/1/items'
        assert result.route_params['*'] == 'orders/1/items'

    def test_first_declared_wins_within_tier(self):
        """Test the first matching definition in declaration order wins."""
        index = DefinitionIndex.build([
            make_definition('/users/:id', desc='first'),
            make_definition('/users/:name', desc='second'),
        ])

        result = RequestMatcher(index).find_match('api.example.com', 'GET', '/users/7')

        assert result.definition.desc == 'first'
        assert result.route_params == {'id': '7'}

    def test_host_filters_every_tier(self):
        """Test definitions for another host never match, in any tier."""
        index = DefinitionIndex.build([
            make_definition('/ping', host='other.example.com'),
            make_definition('/users/:id', host='other.example.com'),
            make_definition('/*', host='other.example.com'),
        ])
        matcher = RequestMatcher(index)

        for path in ('/ping', '/users/1', '/anything'):
            assert not matcher.find_match('api.example.com', 'GET', path).matched
            assert matcher.find_match('other.example.com', 'GET', path).matched

    def test_method_scoping(self):
        """Test definitions only match their own method."""
        index = DefinitionIndex.build([make_definition('/users', method='POST')])
        matcher = RequestMatcher(index)

        assert not matcher.find_match('api.example.com', 'GET', '/users').matched
        assert matcher.find_match('api.example.com', 'post', '/users').matched

    def test_no_match_result(self):
        """Test the result when nothing matches."""
        matcher = RequestMatcher(DefinitionIndex.empty())

        result = matcher.find_match('api.example.com', 'GET', '/missing')

        assert isinstance(result, MatchResult)
        assert result.matched is False
        assert result.definition is None
        assert 'No definition' in result.reason

    def test_to_dict(self, overlapping_definitions):
        """Test MatchResult serialization."""
        matcher = RequestMatcher(DefinitionIndex.build(overlapping_definitions))

        data = matcher.find_match('api.example.com', 'GET', '/v1/users/42').to_dict()

        assert data == {
            'matched': True,
            'tier': 'parameterized',
            'route_params': {'id': '42'},
            'reason': 'Parameterized match: /v1/users/:id',
            'definition_path': '/v1/users/:id',
        }

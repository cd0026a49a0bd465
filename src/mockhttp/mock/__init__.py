"""
mockhttp Mock Resolution Module

Turns inbound HTTP requests into synthesized mock responses.

This module provides:
- Path pattern compiler (exact, :param and trailing * templates)
- Tiered definition index and request matcher
- Request normalizer with JSON, XML and form body decoding
- Rule-based response selection
- Response synthesis with templating and Content-Type sniffing
"""

from .pattern import PathPattern, clean_path, compile_path
from .models import Definition, MatchTier, MockResponse, MockResult, NormalizedRequest
from .body import ReusableBody
from .parsers import MimeGroups
from .normalizer import RequestNormalizer
from .index import DefinitionIndex
from .matcher import RequestMatcher, MatchResult
from .rules import RuleEvaluator, SimpleRuleEvaluator
from .selector import ResponseSelector
from .generator import ResponseGenerator, detect_content_type, render_template
from .resolver import MockResolver

__all__ = [
    # Patterns
    'PathPattern',
    'clean_path',
    'compile_path',

    # Model
    'Definition',
    'MatchTier',
    'MockResponse',
    'MockResult',
    'NormalizedRequest',

    # Request handling
    'ReusableBody',
    'MimeGroups',
    'RequestNormalizer',

    # Matching
    'DefinitionIndex',
    'RequestMatcher',
    'MatchResult',

    # Selection and synthesis
    'RuleEvaluator',
    'SimpleRuleEvaluator',
    'ResponseSelector',
    'ResponseGenerator',
    'detect_content_type',
    'render_template',

    # Resolver
    'MockResolver',
]

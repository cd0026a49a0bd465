"""
mockhttp Data Model

Immutable mock definitions, the per-call normalized request view and the
synthesized response artifact.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import DefinitionError
from .pattern import PathPattern, compile_path


HTTP_METHODS = ('GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE', 'CONNECT')


class MatchTier(Enum):
    """Match priority tier of a definition (lower value wins)."""

    EXACT = 1
    PARAMETERIZED = 2
    WILDCARD = 3


_TRUE_VALUES = ('true', 'yes', 'on', '1')
_FALSE_VALUES = ('false', 'no', 'off', '0', '')


def _parse_bool(name: str, value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise DefinitionError(f"Invalid boolean for {name}: {value!r}")


def normalize_host(host: str) -> str:
    """Lower-case a host and drop default HTTP/HTTPS ports."""
    host = (host or '').strip().lower()
    for default_port in (':80', ':443'):
        if host.endswith(default_port):
            return host[:-len(default_port)]
    return host


@dataclass(frozen=True)
class MockResponse:
    """One candidate reply belonging to a definition."""

    status_code: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ''
    rules: Tuple[str, ...] = ()
    delay_ms: int = 0
    enable_template: bool = False

    @property
    def is_default(self) -> bool:
        """A response without rules is the fallback candidate."""
        return not self.rules

    @property
    def delay(self) -> timedelta:
        return timedelta(milliseconds=self.delay_ms)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MockResponse':
        """
        Create MockResponse from a source record.

        Args:
            data: Record with response_headers, response_body, status_code,
                  enable_template, delay and rules keys

        Returns:
            MockResponse instance

        Raises:
            DefinitionError: If a field has the wrong type
        """
        if not isinstance(data, dict):
            raise DefinitionError(f"Response must be a mapping, got {type(data).__name__}")

        headers = data.get('response_headers') or {}
        if not isinstance(headers, dict):
            raise DefinitionError("response_headers must be a mapping")

        rules = data.get('rules') or []
        if isinstance(rules, str) or not isinstance(rules, list):
            raise DefinitionError("rules must be a list of expressions")

        status_code = data.get('status_code')
        delay_ms = data.get('delay')
        try:
            status_code = 200 if status_code is None else int(status_code)
            delay_ms = 0 if delay_ms is None else int(delay_ms)
        except (TypeError, ValueError) as e:
            raise DefinitionError(f"Invalid numeric field in response: {e}") from e

        if not 100 <= status_code <= 599:
            raise DefinitionError(f"status_code must be between 100 and 599, got {status_code}")
        if delay_ms < 0:
            raise DefinitionError(f"delay must not be negative, got {delay_ms}")

        body = data.get('response_body')
        return cls(
            status_code=status_code,
            headers=MappingProxyType({str(k): str(v) for k, v in headers.items()}),
            body='' if body is None else str(body),
            rules=tuple(str(rule) for rule in rules),
            delay_ms=delay_ms,
            enable_template=_parse_bool('enable_template', data.get('enable_template', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a source record."""
        return {
            'response_headers': dict(self.headers),
            'response_body': self.body,
            'status_code': self.status_code,
            'enable_template': self.enable_template,
            'delay': self.delay_ms,
            'rules': list(self.rules),
        }


@dataclass(frozen=True)
class Definition:
    """
    Mapping from (host, path template, method) to candidate responses.

    The path template is compiled once at construction; the tier, parameter
    names and flags are derived from the compiled pattern.
    """

    host: str
    path: str
    method: str
    desc: str = ''
    responses: Tuple[MockResponse, ...] = ()
    case_sensitive: bool = True
    pattern: PathPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'responses', tuple(self.responses))
        object.__setattr__(self, 'pattern', compile_path(self.path, case_sensitive=self.case_sensitive))

    @property
    def params(self) -> Tuple[str, ...]:
        return self.pattern.params

    @property
    def has_params(self) -> bool:
        return self.pattern.has_params

    @property
    def has_wildcard(self) -> bool:
        return self.pattern.has_wildcard

    @property
    def tier(self) -> MatchTier:
        if self.has_wildcard:
            return MatchTier.WILDCARD
        if self.has_params:
            return MatchTier.PARAMETERIZED
        return MatchTier.EXACT

    @property
    def key(self) -> Tuple[str, str]:
        """Index key: normalized host and method."""
        return normalize_host(self.host), self.method

    @classmethod
    def from_dict(cls, data: Dict[str, Any], case_sensitive: bool = True) -> 'Definition':
        """
        Create Definition from a source record.

        Args:
            data: Record with host, path, method, desc and responses keys
            case_sensitive: Compile the path template case-sensitively

        Returns:
            Definition instance

        Raises:
            DefinitionError: If a required field is missing or invalid
        """
        if not isinstance(data, dict):
            raise DefinitionError(f"Definition must be a mapping, got {type(data).__name__}")

        missing = [name for name in ('host', 'path', 'method') if not data.get(name)]
        if missing:
            raise DefinitionError(f"Definition is missing required fields: {', '.join(missing)}")

        method = str(data['method']).upper()
        if method not in HTTP_METHODS:
            raise DefinitionError(f"Unsupported HTTP method: {data['method']!r}")

        responses = data.get('responses') or []
        if not isinstance(responses, list):
            raise DefinitionError("responses must be a list")

        return cls(
            host=str(data['host']),
            path=str(data['path']),
            method=method,
            desc=str(data.get('desc') or ''),
            responses=tuple(MockResponse.from_dict(item) for item in responses),
            case_sensitive=case_sensitive,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a source record."""
        return {
            'host': self.host,
            'path': self.path,
            'method': self.method,
            'desc': self.desc,
            'responses': [response.to_dict() for response in self.responses],
        }


@dataclass
class NormalizedRequest:
    """Structured view of one inbound request. Created per resolve call."""

    host: str
    method: str
    endpoint: str
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    route_params: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    raw_body: str = ''

    def collect_params(self) -> Dict[str, str]:
        """
        Merge all request parameters for template rendering.

        Sources are merged query -> cookies -> headers -> route, so route
        parameters win on key collision, then headers, then cookies.
        """
        merged: Dict[str, str] = {}
        for source in (self.query_params, self.cookies, self.headers, self.route_params):
            merged.update(source)
        return merged

    def rule_context(self) -> Dict[str, Any]:
        """Build the name -> value context rules are evaluated against."""
        return {
            'raw': self.raw_body,
            'body': self.body,
            'routeParams': dict(self.route_params),
            'headers': dict(self.headers),
            'cookies': dict(self.cookies),
            'queryParams': dict(self.query_params),
            'method': self.method,
            'path': self.endpoint,
            'host': self.host,
        }


@dataclass
class MockResult:
    """Synthesized response returned for a mock hit."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    delay: timedelta = timedelta(0)
    definition: Optional[Definition] = None
    response: Optional[MockResponse] = None

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'status': self.status_code,
            'resp_headers': dict(self.headers),
            'resp_body': self.text,
            'delay_ms': int(self.delay.total_seconds() * 1000),
            'definition': self.definition.desc if self.definition else None,
        }


def definitions_summary(definitions: List[Definition]) -> List[Dict[str, Any]]:
    """Short listing of definitions for logging and debugging."""
    return [
        {
            'method': d.method,
            'host': d.host,
            'path': d.path,
            'tier': d.tier.name.lower(),
            'responses': len(d.responses),
        }
        for d in definitions
    ]

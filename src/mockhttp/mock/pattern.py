"""
mockhttp Path Patterns

Compiles path templates into anchored regular expressions.

Template syntax:
- Literal segments separated by "/"
- ":name" captures a single path segment under "name"
- A trailing "*" or "*name" captures the rest of the path under "*"
  (and under "name" when declared)

Example:
    pattern = compile_path('/info/:user/project/:project')
    pattern.match('/info/gordon/project/go')
    # {'user': 'gordon', 'project': 'go'}
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern, Tuple

from ..errors import PatternError

WILDCARD_PARAM = '*'

_PARAM_RE = re.compile(r':(\w+)')
_WILDCARD_NAME_RE = re.compile(r'\w*')


def clean_path(path: str) -> str:
    """
    Return the canonical form of a URL path.

    Rules:
    1. Repeated slashes collapse into one
    2. "." segments are removed
    3. ".." removes the preceding segment (never climbs above root)
    4. A leading "/" is always present

    A trailing "/" (or a final "." segment) is preserved unless the result
    is the root. Empty input becomes "/".

    Args:
        path: Raw URL path

    Returns:
        Canonical path
    """
    if not path:
        return '/'

    segments = []
    raw_segments = path.split('/')
    for segment in raw_segments:
        if segment in ('', '.'):
            continue
        if segment == '..':
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    cleaned = '/' + '/'.join(segments)

    trailing = (len(path) > 1 and path.endswith('/')) or raw_segments[-1] == '.'
    if trailing and cleaned != '/':
        cleaned += '/'

    return cleaned


@dataclass(frozen=True)
class PathPattern:
    """Compiled path template."""

    template: str
    regex: Pattern
    params: Tuple[str, ...]
    wildcard_name: Optional[str] = None

    @property
    def has_params(self) -> bool:
        """True if the template declares at least one ":name" segment."""
        return any(name != WILDCARD_PARAM for name in self.params)

    @property
    def has_wildcard(self) -> bool:
        """True if the template ends with a wildcard."""
        return bool(self.params) and self.params[-1] == WILDCARD_PARAM

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """
        Match a canonical request path against this pattern.

        Args:
            path: Request path (already passed through clean_path)

        Returns:
            Route parameters keyed by declared name, or None if no match
        """
        result = self.regex.match(path)
        if result is None:
            return None

        values = result.groups()
        if len(values) != len(self.params):
            return None

        route_params = {
            name: value if value is not None else ''
            for name, value in zip(self.params, values)
        }
        if self.wildcard_name:
            route_params[self.wildcard_name] = route_params[WILDCARD_PARAM]

        return route_params


def compile_path(template: str, case_sensitive: bool = True, end: bool = True) -> PathPattern:
    """
    Compile a path template into a PathPattern.

    Args:
        template: Path template (e.g. "/users/:id", "/static/*filepath")
        case_sensitive: Match literal segments case-sensitively
        end: Anchor at the end of the path; False compiles a prefix matcher
             that stops at a segment boundary

    Returns:
        PathPattern with ordered parameter names (wildcard always last)

    Raises:
        PatternError: If a wildcard is not the final segment, a wildcard name
                      is invalid, or a parameter name is declared twice
    """
    body = clean_path(template).rstrip('/')

    has_wildcard = False
    wildcard_name = None

    last_slash = body.rfind('/')
    last_segment = body[last_slash + 1:]
    if last_segment.startswith('*'):
        name = last_segment[1:]
        if not _WILDCARD_NAME_RE.fullmatch(name):
            raise PatternError(f"Invalid wildcard name in path template: {template!r}")
        has_wildcard = True
        wildcard_name = name or None
        body = body[:last_slash]

    if '*' in body:
        raise PatternError(f"Wildcard must be the final path segment: {template!r}")

    params = []
    source = ''
    position = 0
    for token in _PARAM_RE.finditer(body):
        name = token.group(1)
        if name in params or name == wildcard_name:
            raise PatternError(f"Duplicate parameter {name!r} in path template: {template!r}")
        source += re.escape(body[position:token.start()]) + '([^/]+)'
        params.append(name)
        position = token.end()
    source += re.escape(body[position:])

    if has_wildcard:
        params.append(WILDCARD_PARAM)
        if body:
            source += '(?:/(.+)|/*)$'
        else:
            source += '/(.*)$'
    elif end:
        source += '/*$'
    elif body:
        source += '(?=/|$)'

    flags = 0 if case_sensitive else re.IGNORECASE
    regex = re.compile('^' + source, flags)

    return PathPattern(
        template=template,
        regex=regex,
        params=tuple(params),
        wildcard_name=wildcard_name,
    )

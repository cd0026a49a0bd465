"""
mockhttp Common Utilities

Shared helpers for turning raw HTTP request parts into flat name -> value maps.
"""

from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

HeaderInput = Union[Mapping[str, str], Iterable[Tuple[str, str]], None]


def canonical_header_name(name: str) -> str:
    """
    Canonicalize a header name ("x-request-id" -> "X-Request-Id").

    Rule expressions and templates reference headers by this form, so the
    case used by the client never matters.
    """
    return '-'.join(part.capitalize() for part in name.strip().split('-'))


def collapse_headers(headers: HeaderInput) -> Dict[str, str]:
    """
    Flatten request headers into a dict.

    Accepts a mapping or an iterable of (name, value) pairs. Duplicate names
    (compared case-insensitively) collapse to the last value.

    Args:
        headers: Request headers

    Returns:
        Dict keyed by canonical header name
    """
    if not headers:
        return {}

    items = headers.items() if isinstance(headers, Mapping) else headers

    collapsed: Dict[str, str] = {}
    for name, value in items:
        if isinstance(name, bytes):
            name = name.decode('latin-1')
        if isinstance(value, bytes):
            value = value.decode('latin-1')
        collapsed[canonical_header_name(name)] = value
    return collapsed


def parse_cookie_header(cookie_header: Optional[str]) -> Dict[str, str]:
    """
    Parse a Cookie request header into name -> value.

    Malformed pairs are skipped individually rather than dropping the header.
    """
    if not cookie_header:
        return {}

    cookies: Dict[str, str] = {}
    for pair in cookie_header.split(';'):
        if '=' not in pair:
            continue
        jar = SimpleCookie()
        try:
            jar.load(pair.strip())
        except CookieError:
            continue
        for name, morsel in jar.items():
            cookies[name] = morsel.value
    return cookies


def lookup_header(headers: Mapping[str, Any], name: str) -> Optional[Any]:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None

"""
mockhttp Common Utilities

Shared utilities and helpers used across mockhttp modules.
"""

from .utils import canonical_header_name, collapse_headers, parse_cookie_header, lookup_header
from .url_utils import URLParts

__all__ = [
    'canonical_header_name',
    'collapse_headers',
    'parse_cookie_header',
    'lookup_header',
    'URLParts',
]

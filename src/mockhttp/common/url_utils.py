"""
mockhttp URL Utilities

Shared URL parsing helpers used by the request normalizer.
"""

from typing import Dict
from urllib.parse import parse_qsl, urlsplit


class URLParts:
    """Handles URL decomposition for mock matching."""

    @staticmethod
    def host(url: str) -> str:
        """
        Extract host[:port] from a URL.

        Args:
            url: Absolute URL

        Returns:
            Network location without credentials ("" for relative URLs)
        """
        netloc = urlsplit(url).netloc
        return netloc.rsplit('@', 1)[-1]

    @staticmethod
    def path(url: str) -> str:
        """Return the (still percent-encoded) path of a URL."""
        return urlsplit(url).path

    @staticmethod
    def query_params(url: str) -> Dict[str, str]:
        """
        Extract query parameters from a URL.

        Repeated names collapse to the last value.
        """
        params: Dict[str, str] = {}
        for name, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
            params[name] = value
        return params

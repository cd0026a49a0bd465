"""
Mock policy for mockhttp clients.

Decides which outbound requests are offered to the resolver based on host
matching (exact, wildcard) and regex patterns. Requests rejected here go
straight to the real upstream.
"""

import logging
import re
from typing import List, Optional

from ..errors import ConfigurationError

logger = logging.getLogger("mockhttp.client")


class RequestFilter:
    """
    Handles filtering logic to determine which requests may be mocked.

    Supports:
    - Exact host matching (e.g., "api.example.com")
    - Wildcard matching (e.g., "*.example.com")
    - Regex pattern matching on URL and host
    """

    def __init__(self, host_filters: Optional[List[str]] = None, regex_pattern: Optional[str] = None):
        """
        Initialize the filter.

        Args:
            host_filters: List of hosts to match (supports wildcards)
            regex_pattern: Optional regex pattern to match against URLs

        Raises:
            ConfigurationError: If regex_pattern does not compile
        """
        self.host_filters = [h.lower() for h in (host_filters or [])]
        self.regex_pattern = None

        if regex_pattern:
            try:
                self.regex_pattern = re.compile(regex_pattern)
            except re.error as e:
                raise ConfigurationError(f"Invalid regex pattern {regex_pattern!r}: {e}") from e

    def should_mock(self, host: str, url: str) -> bool:
        """
        Determine if a request should be offered to the resolver.

        Filtering logic:
        - If no filters configured: mock everything
        - If any filter matches: mock (OR logic)

        Args:
            host: The request hostname (e.g., "api.example.com")
            url: The full URL (e.g., "https://api.example.com/users")

        Returns:
            True if the request may be mocked, False otherwise
        """
        if not self.host_filters and not self.regex_pattern:
            return True

        hostname = host.lower().split(':', 1)[0]
        match_reason = ""

        for filter_host in self.host_filters:
            if filter_host == hostname:
                match_reason = f"exact match: {filter_host}"
                break

            # *.example.com matches api.example.com and example.com itself
            if filter_host.startswith('*.'):
                domain = filter_host[2:]
                if hostname.endswith('.' + domain) or hostname == domain:
                    match_reason = f"wildcard match: {filter_host}"
                    break

        if not match_reason and self.regex_pattern:
            if self.regex_pattern.search(url) or self.regex_pattern.search(host):
                match_reason = f"regex match: {self.regex_pattern.pattern}"

        if match_reason:
            logger.debug(f"[MOCK] {host} ({match_reason})")
            return True

        logger.debug(f"[SKIP] {host}")
        return False

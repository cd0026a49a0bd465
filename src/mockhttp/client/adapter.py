"""
requests integration for mockhttp.

MockAdapter is mounted on a requests.Session. Mock hits are answered from the
resolver; everything else goes through the regular HTTPAdapter.

Example:
    resolver = MockResolver(FileDefinitionSource('./mock-data'))
    resolver.load()

    session = create_session(resolver)
    session.get('https://api.example.com/users/42')
"""

import io
from http import HTTPStatus
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import ReadTimeout
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers
from urllib3.util.retry import Retry

from ..config import MockConfig
from ..mock.body import ReusableBody
from ..mock.models import MockResult
from ..mock.resolver import MockResolver
from .base import MockDispatcher
from .filters import RequestFilter
from .metrics import MockMetrics


def _read_timeout(timeout) -> Optional[float]:
    """Read timeout from any of the forms requests accepts."""
    if timeout is None:
        return None
    if isinstance(timeout, tuple):
        return timeout[1]
    if hasattr(timeout, 'read_timeout'):
        return timeout.read_timeout
    return float(timeout)


class MockAdapter(HTTPAdapter):
    """
    Transport adapter answering matched requests with mock responses.

    File-like and generator request bodies are wrapped in ReusableBody
    before resolving, so a pass-through still sends the original bytes.
    """

    def __init__(
        self,
        resolver: MockResolver,
        request_filter: Optional[RequestFilter] = None,
        config: Optional[MockConfig] = None,
        metrics: Optional[MockMetrics] = None,
        **kwargs
    ):
        """
        Initialize adapter.

        Args:
            resolver: Loaded MockResolver
            request_filter: Mock policy (defaults to the config's filters)
            config: MockConfig (defaults to the resolver's)
            metrics: Shared MockMetrics
            **kwargs: Passed to HTTPAdapter (e.g. max_retries)
        """
        super().__init__(**kwargs)
        self.dispatcher = MockDispatcher(resolver, request_filter, config, metrics)

    @property
    def metrics(self) -> MockMetrics:
        return self.dispatcher.metrics

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body
        if body is not None and not isinstance(body, (bytes, str)):
            body = ReusableBody(body)
            request.body = body

        result = self.dispatcher.dispatch(request.method, request.url, request.headers, body)
        if result is None:
            return super().send(request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies)

        if not self.dispatcher.wait(result.delay, _read_timeout(timeout)):
            raise ReadTimeout(f"Mock response for {request.url} delayed past the read timeout", request=request)

        return self.build_mock_response(request, result)

    def build_mock_response(self, request, result: MockResult) -> requests.Response:
        """Build a requests.Response from a MockResult."""
        response = requests.Response()
        response.status_code = result.status_code
        response.headers = CaseInsensitiveDict(result.headers)
        response.encoding = get_encoding_from_headers(response.headers)
        response.raw = io.BytesIO(result.body)
        response._content = result.body
        response.url = request.url
        response.request = request
        response.connection = self

        try:
            response.reason = HTTPStatus(result.status_code).phrase
        except ValueError:
            response.reason = None

        return response


def create_session(
    resolver: MockResolver,
    request_filter: Optional[RequestFilter] = None,
    config: Optional[MockConfig] = None,
    max_retries: int = 0
) -> requests.Session:
    """
    Create a requests.Session with MockAdapter mounted for http and https.

    Args:
        resolver: Loaded MockResolver
        request_filter: Mock policy
        config: MockConfig (defaults to the resolver's)
        max_retries: Retries for pass-through requests

    Returns:
        Configured session; its adapter's metrics are at
        session.get_adapter('https://').metrics
    """
    session = requests.Session()

    retries = max_retries
    if max_retries:
        retries = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
        )

    adapter = MockAdapter(resolver, request_filter=request_filter, config=config, max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session

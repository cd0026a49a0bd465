"""
httpx integration for mockhttp.

Example:
    transport = MockTransport(resolver)
    with httpx.Client(transport=transport) as client:
        client.get('https://api.example.com/users/42')
"""

from typing import Optional

import httpx

from ..config import MockConfig
from ..mock.resolver import MockResolver
from .base import MockDispatcher
from .filters import RequestFilter
from .metrics import MockMetrics


class MockTransport(httpx.BaseTransport):
    """
    httpx transport answering matched requests with mock responses and
    forwarding the rest to a real transport (httpx.HTTPTransport by default).
    """

    def __init__(
        self,
        resolver: MockResolver,
        transport: Optional[httpx.BaseTransport] = None,
        request_filter: Optional[RequestFilter] = None,
        config: Optional[MockConfig] = None,
        metrics: Optional[MockMetrics] = None
    ):
        self.dispatcher = MockDispatcher(resolver, request_filter, config, metrics)
        self.transport = transport or httpx.HTTPTransport()

    @property
    def metrics(self) -> MockMetrics:
        return self.dispatcher.metrics

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        # read() caches streamed content so the fallback can send it again
        body = request.read()

        result = self.dispatcher.dispatch(request.method, str(request.url), request.headers.multi_items(), body)
        if result is None:
            return self.transport.handle_request(request)

        timeout = request.extensions.get('timeout', {}).get('read')
        if not self.dispatcher.wait(result.delay, timeout):
            raise httpx.ReadTimeout(f"Mock response for {request.url} delayed past the read timeout", request=request)

        return httpx.Response(
            status_code=result.status_code,
            headers=list(result.headers.items()),
            content=result.body,
            request=request,
        )

    def close(self) -> None:
        self.transport.close()

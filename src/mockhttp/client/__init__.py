"""
mockhttp Client Integration

Wrappers deciding per request between a mock hit and a pass-through to the
real upstream, for requests (MockAdapter) and httpx (MockTransport).
"""

from .adapter import MockAdapter, create_session
from .base import MockDispatcher
from .filters import RequestFilter
from .metrics import MockMetrics
from .transport import MockTransport

__all__ = [
    'MockAdapter',
    'MockDispatcher',
    'MockMetrics',
    'MockTransport',
    'RequestFilter',
    'create_session',
]

"""
Mock-or-forward decision shared by the requests and httpx integrations.
"""

import logging
import time
from datetime import timedelta
from typing import Optional

from ..common import URLParts
from ..common.utils import HeaderInput
from ..config import MockConfig
from ..errors import MockError, NotFoundError
from ..mock.models import MockResult
from ..mock.normalizer import BodyInput
from ..mock.resolver import MockResolver
from .filters import RequestFilter
from .metrics import MockMetrics

logger = logging.getLogger("mockhttp.client")


class MockDispatcher:
    """
    Asks the resolver for a mock and reports whether to forward instead.

    A request is offered to the resolver only when mocking is enabled and the
    RequestFilter allows its host. Every MockError from the resolver means
    "pass through"; NotFoundError is the expected miss and is logged at
    debug, anything else at warning.
    """

    def __init__(
        self,
        resolver: MockResolver,
        request_filter: Optional[RequestFilter] = None,
        config: Optional[MockConfig] = None,
        metrics: Optional[MockMetrics] = None
    ):
        self.resolver = resolver
        self.config = config or resolver.config
        self.request_filter = request_filter or RequestFilter(
            self.config.filter_hosts, self.config.filter_regex
        )
        self.metrics = metrics or MockMetrics()

    def dispatch(self, method: str, url: str, headers: HeaderInput, body: BodyInput) -> Optional[MockResult]:
        """
        Resolve a request, or return None when it must go to the real upstream.
        """
        if not self.config.enabled:
            self.metrics.record_passed_through()
            return None

        host = URLParts.host(url)
        if not self.request_filter.should_mock(host, url):
            self.metrics.record_passed_through()
            return None

        try:
            result = self.resolver.resolve(method, url, headers, body)
        except NotFoundError as e:
            logger.debug(f"Pass-through {method} {url}: {e}")
            self.metrics.record_passed_through()
            return None
        except MockError as e:
            logger.warning(f"Pass-through {method} {url} after {type(e).__name__}: {e}")
            self.metrics.record_passed_through(error=True)
            return None

        self.metrics.record_mocked()
        if self.config.verbose_mode:
            logger.info(f"Mocked {method} {url} -> {result.status_code}")
        return result

    def wait(self, delay: timedelta, read_timeout: Optional[float]) -> bool:
        """
        Sleep the response delay, bounded by the read timeout.

        Returns:
            False if the delay exceeds the read timeout (the caller raises its
            client's read-timeout error), True otherwise
        """
        seconds = delay.total_seconds()
        if not self.config.honor_delay or seconds <= 0:
            return True

        if read_timeout is not None and seconds > read_timeout:
            time.sleep(read_timeout)
            return False

        time.sleep(seconds)
        return True

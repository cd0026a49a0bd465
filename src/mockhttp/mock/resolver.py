"""
mockhttp Mock Resolver

End-to-end mock resolution: load definitions once, then turn inbound
requests into synthesized responses.

Resolve steps:
1. Normalize the request (headers, cookies, query, canonical path, body)
2. Find the definition: exact path, then path parameters, then wildcard
3. Select the response: satisfied rules first, then the default
4. Synthesize status, headers and body (optionally templated)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..common.utils import HeaderInput
from ..config import MockConfig
from ..errors import ConfigurationError, NotFoundError
from .generator import ResponseGenerator
from .index import DefinitionIndex
from .matcher import RequestMatcher
from .models import MockResult, definitions_summary
from .normalizer import BodyInput, RequestNormalizer
from .rules import RuleEvaluator
from .selector import ResponseSelector

if TYPE_CHECKING:
    from ..sources import DefinitionSource


class MockResolver:
    """
    Mock resolution engine.

    Definitions are loaded exactly once. The index is built in a scratch
    structure and published with a single assignment only when every source
    loaded successfully; a second load raises ConfigurationError and leaves
    the published index untouched. After loading, resolve() only reads shared
    state and may be called from many threads.

    Example:
        resolver = MockResolver(FileDefinitionSource('./mock-data'))
        resolver.load()

        try:
            result = resolver.resolve('GET', 'https://api.example.com/users/42')
        except NotFoundError:
            ...  # forward to the real upstream
    """

    def __init__(
        self,
        *sources: DefinitionSource,
        evaluator: Optional[RuleEvaluator] = None,
        normalizer: Optional[RequestNormalizer] = None,
        generator: Optional[ResponseGenerator] = None,
        config: Optional[MockConfig] = None
    ):
        """
        Initialize resolver.

        Args:
            *sources: Definition sources, loaded in order
            evaluator: Rule evaluator (defaults to SimpleRuleEvaluator)
            normalizer: Request normalizer
            generator: Response generator
            config: Optional MockConfig (log level, verbosity)
        """
        self.sources = list(sources)
        self.config = config or MockConfig()
        self.normalizer = normalizer or RequestNormalizer()
        self.selector = ResponseSelector(evaluator)
        self.generator = generator or ResponseGenerator()

        self.logger = logging.getLogger("mockhttp.resolver")
        self.log_level = getattr(logging, self.config.log_level.upper())

        self._load_lock = threading.Lock()
        self._loaded = False
        self._index = DefinitionIndex.empty()
        self._matcher = RequestMatcher(self._index)

    @classmethod
    def from_config(cls, config: MockConfig, evaluator: Optional[RuleEvaluator] = None) -> 'MockResolver':
        """Create a resolver reading definitions from config.definitions_dir."""
        from ..sources import FileDefinitionSource

        if not config.definitions_dir:
            raise ConfigurationError("definitions_dir is not configured")

        source = FileDefinitionSource(config.definitions_dir, case_sensitive=config.case_sensitive)
        return cls(source, evaluator=evaluator, config=config)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def index(self) -> DefinitionIndex:
        return self._index

    def load(self) -> DefinitionIndex:
        """
        Load all sources and publish the index.

        Returns:
            The published DefinitionIndex

        Raises:
            ConfigurationError: If definitions were already loaded, or a
                                source fails (nothing is published then)
        """
        with self._load_lock:
            if self._loaded:
                raise ConfigurationError("Mock definitions have already been loaded")

            definitions = []
            for source in self.sources:
                loaded = source.load()
                self._log(logging.DEBUG, f"Loaded {len(loaded)} definitions from {type(source).__name__}")
                definitions.extend(loaded)

            index = DefinitionIndex.build(definitions)

            self._index = index
            self._matcher = RequestMatcher(index)
            self._loaded = True

        self._log(logging.INFO, f"Loaded {len(index)} mock definitions {index.stats()}")
        return index

    def resolve(
        self,
        method: str,
        url: str,
        headers: HeaderInput = None,
        body: BodyInput = None
    ) -> MockResult:
        """
        Resolve a request into a mock response.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers
            body: Request body (ReusableBody keeps it re-readable for callers)

        Returns:
            MockResult; its delay is advisory and never slept here

        Raises:
            NotFoundError: No definition matches (forward to the real upstream)
            NoMockResponseError: Definition matched but no response qualified
            ContentTypeError: Body without a supported Content-Type
            RequestBodyError: Body could not be decoded
            SynthesisError: Template rendering failed
        """
        request = self.normalizer.normalize(method, url, headers, body)

        matcher = self._matcher
        match = matcher.find_match(request.host, request.method, request.endpoint)
        if not match.matched:
            self._log(logging.DEBUG, match.reason)
            raise NotFoundError(match.reason)

        request.route_params = match.route_params
        response = self.selector.select(match.definition, request)
        result = self.generator.generate(response, request, match.definition)

        level = logging.INFO if self.config.verbose_mode else logging.DEBUG
        self._log(level, f"{request.method} {request.host}{request.endpoint} -> {match.reason} "
                  f"(status {result.status_code}, delay {response.delay_ms}ms)")

        return result

    def _log(self, level: int, message: str) -> None:
        # The logger is shared across resolvers; filter by this instance's level
        if level >= self.log_level:
            self.logger.log(level, message)

    def summary(self) -> List[Dict[str, Any]]:
        """Loaded definitions in declaration order."""
        return definitions_summary(list(self._index.definitions))

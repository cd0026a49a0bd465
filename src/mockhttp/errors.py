"""
mockhttp Errors

Exception taxonomy for the mock resolution engine.

Every failure is scoped to a single resolve call. Client wrappers treat any
MockError raised while resolving as "forward to the real upstream".
"""


class MockError(Exception):
    """Base class for all mockhttp errors."""


class ConfigurationError(MockError):
    """Resolver or source is misconfigured (e.g. definitions loaded twice)."""


class DefinitionError(ConfigurationError, ValueError):
    """A definition record is invalid."""


class PatternError(DefinitionError):
    """A path template cannot be compiled."""


class NotFoundError(MockError):
    """No definition matches the request host, method and path."""


class NoMockResponseError(MockError):
    """A definition matched but none of its responses qualified."""


class ContentTypeError(MockError):
    """Request carries a body with a missing or unsupported Content-Type."""


class RequestBodyError(MockError):
    """Request body could not be decoded for its Content-Type."""


class SynthesisError(MockError):
    """Response body template could not be rendered."""

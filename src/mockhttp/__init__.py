"""
mockhttp - mock resolution for outbound HTTP

Intercepts outbound requests and answers them from declarative mock
definitions, forwarding everything that has no definition to the real
upstream.
"""

from .config import MockConfig
from .errors import (
    ConfigurationError,
    ContentTypeError,
    DefinitionError,
    MockError,
    NoMockResponseError,
    NotFoundError,
    PatternError,
    RequestBodyError,
    SynthesisError,
)
from .mock import MockResolver, MockResult
from .sources import FileDefinitionSource, InMemoryDefinitionSource, SQLiteDefinitionSource
from .client import MockAdapter, MockTransport, RequestFilter, create_session

__all__ = [
    'MockConfig',
    'MockResolver',
    'MockResult',
    'FileDefinitionSource',
    'InMemoryDefinitionSource',
    'SQLiteDefinitionSource',
    'MockAdapter',
    'MockTransport',
    'RequestFilter',
    'create_session',
    'MockError',
    'ConfigurationError',
    'DefinitionError',
    'PatternError',
    'NotFoundError',
    'NoMockResponseError',
    'ContentTypeError',
    'RequestBodyError',
    'SynthesisError',
]

__version__ = '1.0.0'

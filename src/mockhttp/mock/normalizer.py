"""
mockhttp Request Normalizer

Extracts a structured view of an inbound request: headers, cookies, query
parameters, canonical endpoint path, parsed body and raw body text.
"""

from typing import Any, Optional, Union

from ..common import URLParts, collapse_headers, lookup_header, parse_cookie_header
from ..common.utils import HeaderInput
from ..errors import ContentTypeError
from .body import ReusableBody
from .models import NormalizedRequest
from .parsers import MimeGroups
from .pattern import clean_path

MUTATING_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')

BodyInput = Union[ReusableBody, bytes, str, Any, None]


class RequestNormalizer:
    """
    Builds NormalizedRequest objects from raw request parts.

    The body is extracted when it is non-empty or when the method is
    mutating (POST, PUT, PATCH, DELETE). In both cases the Content-Type
    header must name a registered MIME group (JSON, XML, form), otherwise
    ContentTypeError is raised.

    Example:
        normalizer = RequestNormalizer()
        request = normalizer.normalize(
            'POST',
            'https://api.example.com/users?page=2',
            {'Content-Type': 'application/json'},
            b'{"name": "William"}'
        )
        request.body['name']  # 'William'
    """

    def __init__(self, mime_groups: Optional[MimeGroups] = None):
        """
        Initialize normalizer.

        Args:
            mime_groups: MIME group registry (defaults to JSON, XML and form)
        """
        self.mime_groups = mime_groups or MimeGroups.default()

    def normalize(
        self,
        method: str,
        url: str,
        headers: HeaderInput = None,
        body: BodyInput = None
    ) -> NormalizedRequest:
        """
        Normalize one request.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers (mapping or (name, value) pairs)
            body: ReusableBody, raw bytes/text, or a file-like object

        Returns:
            NormalizedRequest with empty route parameters

        Raises:
            ContentTypeError: Body present (or mutating method) without a
                              supported Content-Type
            RequestBodyError: Body cannot be decoded
        """
        method = method.upper()
        flat_headers = collapse_headers(headers)

        host = URLParts.host(url) or flat_headers.get('Host', '')

        request = NormalizedRequest(
            host=host,
            method=method,
            endpoint=clean_path(URLParts.path(url)),
            headers=flat_headers,
            cookies=parse_cookie_header(flat_headers.get('Cookie')),
            query_params=URLParts.query_params(url),
        )

        reusable = body if isinstance(body, ReusableBody) else ReusableBody(body)
        raw = reusable.read()

        if raw or method in MUTATING_METHODS:
            request.raw_body = raw.decode('utf-8', errors='replace')
            request.body = self._parse_body(request.raw_body, flat_headers)

        return request

    def _parse_body(self, raw_body: str, headers: dict) -> dict:
        content_type = lookup_header(headers, 'Content-Type')
        if not content_type:
            raise ContentTypeError("Unable to find Content-Type for request body")

        decoder = self.mime_groups.decoder_for(content_type)
        if decoder is None:
            raise ContentTypeError(f"Unsupported request Content-Type: {content_type}")

        if not raw_body:
            return {}
        return decoder(raw_body, content_type)

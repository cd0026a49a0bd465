"""
mockhttp Response Generator

Synthesizes the final mock response: template rendering, header assembly,
content sniffing and advisory delay.

Features:
- Template variable substitution ({{name}}, {{ name }}, {{.name}})
- Declared headers copied verbatim
- Content-Type detection when none is declared
"""

import json
import re
from typing import Dict, Optional

from ..common import lookup_header
from ..errors import SynthesisError
from .models import Definition, MockResponse, MockResult, NormalizedRequest

PLACEHOLDER_RE = re.compile(r'\{\{\s*\.?([\w*][\w\-.*]*)\s*\}\}')
OPEN_DELIMITER = '{{'

_BINARY_SIGNATURES = [
    (b'\x89PNG\r\n\x1a\n', 'image/png'),
    (b'GIF87a', 'image/gif'),
    (b'GIF89a', 'image/gif'),
    (b'\xff\xd8\xff', 'image/jpeg'),
    (b'%PDF-', 'application/pdf'),
    (b'PK\x03\x04', 'application/zip'),
    (b'\x1f\x8b\x08', 'application/x-gzip'),
]

_HTML_PREFIXES = (
    b'<!doctype html', b'<html', b'<head', b'<body', b'<script', b'<iframe',
    b'<h1', b'<div', b'<font', b'<table', b'<a', b'<style', b'<title',
    b'<b', b'<br', b'<p', b'<!--',
)


def render_template(template: str, params: Dict[str, str]) -> str:
    """
    Substitute {{name}} placeholders from params.

    Args:
        template: Body template
        params: Merged request parameters

    Returns:
        Rendered body

    Raises:
        SynthesisError: On an unknown name or an unterminated placeholder
    """
    def replacer(match):
        name = match.group(1)
        if name not in params:
            raise SynthesisError(f"Template references unknown parameter {name!r}")
        return str(params[name])

    rendered = []
    position = 0
    for match in PLACEHOLDER_RE.finditer(template):
        literal = template[position:match.start()]
        if OPEN_DELIMITER in literal:
            raise SynthesisError(f"Malformed template placeholder near {literal[literal.index(OPEN_DELIMITER):][:40]!r}")
        rendered.append(literal)
        rendered.append(replacer(match))
        position = match.end()

    tail = template[position:]
    if OPEN_DELIMITER in tail:
        raise SynthesisError(f"Malformed template placeholder near {tail[tail.index(OPEN_DELIMITER):][:40]!r}")
    rendered.append(tail)

    return ''.join(rendered)


def detect_content_type(body: bytes) -> str:
    """
    Sniff a Content-Type from body bytes.

    JSON objects/arrays are reported as application/json; HTML, XML, common
    binary signatures and plain UTF-8 text are recognized otherwise.
    """
    if not body:
        return 'text/plain; charset=utf-8'

    for signature, content_type in _BINARY_SIGNATURES:
        if body.startswith(signature):
            return content_type

    stripped = body.lstrip()
    if stripped[:1] in (b'{', b'['):
        try:
            json.loads(stripped.decode('utf-8'))
            return 'application/json'
        except (UnicodeDecodeError, json.JSONDecodeError):
            pass

    lowered = stripped[:64].lower()
    if lowered.startswith(b'<?xml'):
        return 'text/xml; charset=utf-8'
    for prefix in _HTML_PREFIXES:
        if lowered.startswith(prefix) and lowered[len(prefix):len(prefix) + 1] in (b' ', b'>'):
            return 'text/html; charset=utf-8'

    try:
        body.decode('utf-8')
    except UnicodeDecodeError:
        return 'application/octet-stream'
    return 'text/plain; charset=utf-8'


class ResponseGenerator:
    """
    Response synthesizer for matched mock responses.

    Example:
        generator = ResponseGenerator()
        result = generator.generate(response, request, definition)
        result.status_code, result.headers, result.body
    """

    def generate(
        self,
        response: MockResponse,
        request: NormalizedRequest,
        definition: Optional[Definition] = None
    ) -> MockResult:
        """
        Generate the mock result for a selected response.

        Args:
            response: Selected MockResponse
            request: Normalized request (route parameters filled in)
            definition: Definition the response belongs to

        Returns:
            MockResult with rendered body, headers, status and delay

        Raises:
            SynthesisError: If template rendering fails
        """
        body = response.body
        if response.enable_template:
            body = render_template(body, request.collect_params())

        body_bytes = body.encode('utf-8')

        headers = dict(response.headers)
        if lookup_header(headers, 'Content-Type') is None:
            headers['Content-Type'] = detect_content_type(body_bytes)

        return MockResult(
            status_code=response.status_code,
            headers=headers,
            body=body_bytes,
            delay=response.delay,
            definition=definition,
            response=response,
        )

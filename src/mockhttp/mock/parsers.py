"""
mockhttp Body Parsers

Decoders turning raw request bodies into structured key -> value maps, and
the MIME groups used to pick one.
"""

import json
from email.parser import BytesParser
from email.policy import HTTP
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl
from xml.parsers.expat import ExpatError

import xmltodict

from ..errors import RequestBodyError

BodyDecoder = Callable[[str, str], Dict[str, Any]]

JSON_MIME_TYPES = ['application/json']
XML_MIME_TYPES = ['application/xml', 'application/soap+xml', 'text/xml']
FORM_MIME_TYPES = ['application/x-www-form-urlencoded', 'multipart/form-data']


def media_type(content_type: Optional[str]) -> str:
    """Strip parameters from a Content-Type value ("a/b; charset=x" -> "a/b")."""
    if not content_type:
        return ''
    return content_type.split(';', 1)[0].strip().lower()


def parse_json(raw: str, content_type: str = '') -> Dict[str, Any]:
    """Decode a JSON object body."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise RequestBodyError(f"Invalid JSON body: {e}") from e

    if not isinstance(data, dict):
        raise RequestBodyError(f"JSON body must be an object, got {type(data).__name__}")
    return data


def parse_xml(raw: str, content_type: str = '') -> Dict[str, Any]:
    """
    Decode an XML body.

    The root element becomes the single top-level key; attributes are
    prefixed with "@" and mixed text is stored under "#text".
    """
    try:
        return dict(xmltodict.parse(raw))
    except (ExpatError, ValueError) as e:
        raise RequestBodyError(f"Invalid XML body: {e}") from e


def parse_form(raw: str, content_type: str = '') -> Dict[str, Any]:
    """Decode url-encoded or multipart form data. Repeated names keep the last value."""
    if media_type(content_type) == 'multipart/form-data':
        return _parse_multipart(raw, content_type)

    data: Dict[str, Any] = {}
    for name, value in parse_qsl(raw, keep_blank_values=True):
        data[name] = value
    return data


def _parse_multipart(raw: str, content_type: str) -> Dict[str, Any]:
    if 'boundary=' not in content_type:
        raise RequestBodyError("multipart/form-data body without boundary")

    envelope = f"Content-Type: {content_type}\r\n\r\n".encode('utf-8') + raw.encode('utf-8')
    message = BytesParser(policy=HTTP).parsebytes(envelope)
    if not message.is_multipart():
        raise RequestBodyError("Malformed multipart/form-data body")

    data: Dict[str, Any] = {}
    for part in message.iter_parts():
        name = part.get_param('name', header='content-disposition')
        if not name:
            continue
        filename = part.get_filename()
        if filename:
            data[name] = filename
        else:
            payload = part.get_payload(decode=True) or b''
            data[name] = payload.decode(part.get_content_charset() or 'utf-8', errors='replace')
    return data


class MimeGroups:
    """
    Registry of MIME groups and their decoders.

    Exact media types are looked up first, then structured syntax suffixes
    ("+json", "+xml").

    Example:
        groups = MimeGroups.default()
        decoder = groups.decoder_for('application/json; charset=utf-8')
        body = decoder(raw, content_type)
    """

    def __init__(self):
        self.groups: Dict[str, Tuple[List[str], BodyDecoder]] = {}
        self.suffixes: Dict[str, str] = {}

    @classmethod
    def default(cls) -> 'MimeGroups':
        groups = cls()
        groups.register('json', JSON_MIME_TYPES, parse_json, suffix='+json')
        groups.register('xml', XML_MIME_TYPES, parse_xml, suffix='+xml')
        groups.register('form', FORM_MIME_TYPES, parse_form)
        return groups

    def register(
        self,
        name: str,
        mime_types: List[str],
        decoder: BodyDecoder,
        suffix: Optional[str] = None
    ):
        """
        Register a MIME group.

        Args:
            name: Group name
            mime_types: Media types belonging to the group
            decoder: Function (raw_text, content_type) -> dict
            suffix: Optional structured syntax suffix (e.g. "+json")
        """
        self.groups[name] = ([m.lower() for m in mime_types], decoder)
        if suffix:
            self.suffixes[suffix.lower()] = name

    def group_of(self, content_type: Optional[str]) -> Optional[str]:
        """Return the group name a Content-Type belongs to, or None."""
        mime = media_type(content_type)
        if not mime:
            return None

        for name, (mime_types, _) in self.groups.items():
            if mime in mime_types:
                return name

        for suffix, name in self.suffixes.items():
            if mime.endswith(suffix):
                return name

        return None

    def decoder_for(self, content_type: Optional[str]) -> Optional[BodyDecoder]:
        group = self.group_of(content_type)
        if group is None:
            return None
        return self.groups[group][1]

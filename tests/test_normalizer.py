"""
Tests for mockhttp Request Normalizer

Tests request normalization including:
- Header, cookie and query extraction
- Endpoint canonicalization
- JSON, XML and form body decoding
- Content-Type requirements
- Reusable request bodies
"""

import io

import pytest

from mockhttp.errors import ContentTypeError, RequestBodyError
from mockhttp.mock.body import ReusableBody
from mockhttp.mock.normalizer import RequestNormalizer
from mockhttp.mock.parsers import MimeGroups, media_type, parse_form, parse_json, parse_xml


@pytest.fixture
def normalizer():
    return RequestNormalizer()


class TestNormalize:
    """Test suite for RequestNormalizer.normalize()."""

    def test_basic_get(self, normalizer):
        """Test a GET without body."""
        request = normalizer.normalize(
            'get',
            'https://api.example.com//users/./42/?page=2&sort=asc',
            {'x-tenant': 'acme', 'Cookie': 'session=abc'},
        )

        assert request.method == 'GET'
        assert request.host == 'api.example.com'
        assert request.endpoint == '/users/42/'
        assert request.headers == {'X-Tenant': 'acme', 'Cookie': 'session=abc'}
        assert request.cookies == {'session': 'abc'}
        assert request.query_params == {'page': '2', 'sort': 'asc'}
        assert request.route_params == {}
        assert request.body == {}
        assert request.raw_body == ''

    def test_host_header_fallback(self, normalizer):
        """Test the Host header is used for relative URLs."""
        request = normalizer.normalize('GET', '/ping', {'Host': 'internal.local'})

        assert request.host == 'internal.local'
        assert request.endpoint == '/ping'

    def test_json_body(self, normalizer):
        """Test JSON bodies are decoded into a map."""
        request = normalizer.normalize(
            'POST',
            'https://api.example.com/users',
            {'Content-Type': 'application/json; charset=utf-8'},
            b'{"name": "William", "age": 30}',
        )

        assert request.body == {'name': 'William', 'age': 30}
        assert request.raw_body == '{"name": "William", "age": 30}'

    def test_vendor_json_suffix(self, normalizer):
        """Test +json media types use the JSON decoder."""
        request = normalizer.normalize(
            'PUT',
            'https://api.example.com/users/1',
            {'Content-Type': 'application/vnd.api+json'},
            '{"id": 1}',
        )

        assert request.body == {'id': 1}

    def test_xml_body(self, normalizer):
        """Test XML bodies are decoded with the root element as key."""
        request = normalizer.normalize(
            'POST',
            'https://api.example.com/soap',
            {'Content-Type': 'text/xml'},
            b'<order id="7"><item>book</item></order>',
        )

        assert request.body == {'order': {'@id': '7', 'item': 'book'}}

    def test_form_body(self, normalizer):
        """Test url-encoded form bodies."""
        request = normalizer.normalize(
            'POST',
            'https://api.example.com/login',
            {'Content-Type': 'application/x-www-form-urlencoded'},
            b'user=william&remember=1&user=bob',
        )

        assert request.body == {'user': 'bob', 'remember': '1'}

    def test_multipart_body(self, normalizer):
        """Test multipart form bodies."""
        body = (
            '--XyZ\r\n'
            'Content-Disposition: form-data; name="name"\r\n\r\n'
            'William\r\n'
            '--XyZ\r\n'
            'Content-Disposition: form-data; name="avatar"; filename="me.png"\r\n'
            'Content-Type: image/png\r\n\r\n'
            'PNGDATA\r\n'
            '--XyZ--\r\n'
        )
        request = normalizer.normalize(
            'POST',
            'https://api.example.com/profile',
            {'Content-Type': 'multipart/form-data; boundary=XyZ'},
            body,
        )

        assert request.body == {'name': 'William', 'avatar': 'me.png'}

    def test_post_without_content_type(self, normalizer):
        """Test a mutating method without Content-Type is rejected."""
        with pytest.raises(ContentTypeError):
            normalizer.normalize('POST', 'https://api.example.com/users')

    def test_body_without_content_type(self, normalizer):
        """Test any non-empty body requires a Content-Type."""
        with pytest.raises(ContentTypeError):
            normalizer.normalize('GET', 'https://api.example.com/search', {}, b'q=1')

    def test_unsupported_content_type(self, normalizer):
        """Test an unregistered media type is rejected."""
        with pytest.raises(ContentTypeError):
            normalizer.normalize(
                'POST', 'https://api.example.com/upload',
                {'Content-Type': 'application/octet-stream'}, b'\x00\x01',
            )

    def test_empty_body_with_supported_type(self, normalizer):
        """Test an empty mutating body with a supported type parses to {}."""
        request = normalizer.normalize(
            'DELETE', 'https://api.example.com/users/1', {'Content-Type': 'application/json'},
        )

        assert request.body == {}
        assert request.raw_body == ''

    def test_invalid_json(self, normalizer):
        """Test malformed JSON raises RequestBodyError."""
        with pytest.raises(RequestBodyError):
            normalizer.normalize(
                'POST', 'https://api.example.com/users',
                {'Content-Type': 'application/json'}, b'{"name": ',
            )

    def test_reusable_body_left_readable(self, normalizer):
        """Test the caller can read a ReusableBody again after normalizing."""
        body = ReusableBody(b'{"a": 1}')

        normalizer.normalize('POST', 'https://api.example.com/x', {'Content-Type': 'application/json'}, body)

        assert body.read() == b'{"a": 1}'

    def test_file_like_body(self, normalizer):
        """Test file-like bodies are drained."""
        request = normalizer.normalize(
            'POST', 'https://api.example.com/x',
            {'Content-Type': 'application/json'}, io.BytesIO(b'{"a": 1}'),
        )

        assert request.body == {'a': 1}


class TestParsers:
    """Test suite for body decoders and MIME groups."""

    def test_media_type(self):
        """Test parameters are stripped from Content-Type values."""
        assert media_type('Application/JSON; charset=utf-8') == 'application/json'
        assert media_type(None) == ''

    def test_json_must_be_object(self):
        """Test JSON arrays are rejected."""
        with pytest.raises(RequestBodyError):
            parse_json('[1, 2]')

    def test_invalid_xml(self):
        """Test malformed XML raises RequestBodyError."""
        with pytest.raises(RequestBodyError):
            parse_xml('<open>')

    def test_multipart_without_boundary(self):
        """Test multipart without boundary is rejected."""
        with pytest.raises(RequestBodyError):
            parse_form('x', 'multipart/form-data')

    @pytest.mark.parametrize('content_type, group', [
        ('application/json', 'json'),
        ('application/problem+json', 'json'),
        ('application/xml', 'xml'),
        ('application/soap+xml; charset=utf-8', 'xml'),
        ('text/xml', 'xml'),
        ('application/atom+xml', 'xml'),
        ('application/x-www-form-urlencoded', 'form'),
        ('multipart/form-data; boundary=abc', 'form'),
        ('text/plain', None),
        ('', None),
    ])
    def test_default_groups(self, content_type, group):
        """Test the default MIME group classification."""
        assert MimeGroups.default().group_of(content_type) == group

    def test_register_custom_group(self):
        """Test registering an extra decoder."""
        groups = MimeGroups.default()
        groups.register('text', ['text/plain'], lambda raw, content_type: {'text': raw})
        normalizer = RequestNormalizer(groups)

        request = normalizer.normalize(
            'POST', 'https://api.example.com/notes', {'Content-Type': 'text/plain'}, b'hello',
        )

        assert request.body == {'text': 'hello'}


class TestReusableBody:
    """Test suite for ReusableBody."""

    def test_read_twice(self):
        """Test full reads replay the same bytes."""
        body = ReusableBody(b'payload')

        assert body.read() == b'payload'
        assert body.read() == b'payload'

    def test_chunked_reads_then_replay(self):
        """Test chunked reads end with b'' and rewind afterwards."""
        body = ReusableBody(b'abcdef')

        chunks = []
        while True:
            chunk = body.read(4)
            if not chunk:
                break
            chunks.append(chunk)

        assert chunks == [b'abcd', b'ef']
        assert body.read() == b'abcdef'

    def test_partial_read_then_full_read(self):
        """Test a full read after a partial read returns the remainder, then the whole body."""
        body = ReusableBody(b'abcdef')

        assert body.read(2) == b'ab'
        assert body.read() == b'cdef'
        assert body.read() == b'abcdef'

    def test_sources(self):
        """Test text, file-like and chunk iterable sources."""
        assert ReusableBody('text').read() == b'text'
        assert ReusableBody(io.BytesIO(b'file')).read() == b'file'
        assert ReusableBody(iter([b'a', 'b', b'c'])).read() == b'abc'
        assert ReusableBody(None).read() == b''

    def test_len_seek_and_getvalue(self):
        """Test file-object helpers used by HTTP clients."""
        body = ReusableBody(b'abcdef')

        assert len(body) == 6
        assert body.seek(0, io.SEEK_END) == 6
        assert body.seek(2) == 2
        assert body.read(2) == b'cd'
        assert body.getvalue() == b'abcdef'
        assert body.seekable()

    def test_empty_body_is_truthy(self):
        """Test an empty body is still treated as a body object."""
        body = ReusableBody(b'')

        assert len(body) == 0
        assert body
        assert (body or None) is body

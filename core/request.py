"""Fluent request builder for the CLIP API.

A :class:`Request` is owned by a single caller. Each setter mutates the
builder and returns it so calls can be chained::

    body = Request(client).verb('GET').resource('light').id(light_id).do_raw()

Nothing is validated until the URL is resolved by :meth:`Request.url`,
which :meth:`Request.do_raw` does before any network activity.
"""

import posixpath
import re
from urllib.parse import parse_qsl, quote, urlencode

import requests
from requests.structures import CaseInsensitiveDict

from core.errors import ConfigurationError, InvalidQueryError
from core.response import Response

DEFAULT_API_VERSION = 'v2'
APPLICATION_KEY_HEADER = 'hue-application-key'

_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _clean_join(*parts: str) -> str:
    """Join path elements and clean the result, skipping empty elements."""
    joined = '/'.join(p for p in parts if p)
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith('//'):
        cleaned = '/' + cleaned.lstrip('/')
    return cleaned


def _encode_query(raw: str) -> str:
    """Parse a raw query string and re-encode it with keys sorted."""
    if ';' in raw:
        raise InvalidQueryError(raw, "invalid semicolon separator")
    match = _BAD_ESCAPE.search(raw)
    if match:
        raise InvalidQueryError(raw, f"invalid URL escape {raw[match.start():match.start() + 3]!r}")

    # surrogateescape keeps bytes that are not valid UTF-8 intact
    pairs = parse_qsl(raw, keep_blank_values=True, errors='surrogateescape')
    # stable sort keeps repeated keys in their original order
    pairs.sort(key=lambda kv: kv[0])
    return urlencode(pairs, errors='surrogateescape')


class Request:
    """Builder for a single HTTP request against a bridge."""

    def __init__(self, client):
        self._client = client

        self._verb = 'GET'
        self._path = ''
        self._query = ''
        self._headers: CaseInsensitiveDict | None = None

        self._api_version = DEFAULT_API_VERSION
        self._resource_type = ''
        self._resource_id = ''

        self._body = None

    def username(self, key: str) -> 'Request':
        """Authenticate this request with the given application key."""
        return self.header(APPLICATION_KEY_HEADER, key)

    def verb(self, method: str) -> 'Request':
        self._verb = method
        return self

    def resource(self, resource_type: str) -> 'Request':
        """Set the resource type, e.g. ``light`` -> ``/clip/v2/resource/light``."""
        self._resource_type = resource_type
        return self

    def id(self, resource_id: str) -> 'Request':
        self._resource_id = resource_id
        return self

    def api_version(self, version: str) -> 'Request':
        """Set the API version segment. Defaults to ``v2``."""
        self._api_version = version
        return self

    def path(self, path: str) -> 'Request':
        """Set a raw path that overrides version/resource/id composition."""
        self._path = path
        return self

    def query(self, query: str) -> 'Request':
        """Set the raw query string. It is validated when the URL is resolved."""
        self._query = query
        return self

    def body(self, body) -> 'Request':
        """Set the request body (bytes, str or a file-like object)."""
        self._body = body
        return self

    def headers(self, headers) -> 'Request':
        """Replace all headers. Values may be strings or lists of strings."""
        self._headers = CaseInsensitiveDict()
        for key, value in headers.items():
            values = [value] if isinstance(value, str) else list(value)
            self._headers[key] = values
        return self

    def header(self, key: str, *values: str) -> 'Request':
        """Set one header, replacing any existing values for the key.

        Calling with no values removes the header.
        """
        if self._headers is None:
            self._headers = CaseInsensitiveDict()
        self._headers.pop(key, None)
        if values:
            self._headers[key] = list(values)
        return self

    def url(self) -> str:
        """Resolve the final URL for this request.

        Raises:
            InvalidQueryError: if the raw query string cannot be parsed
        """
        if not self._api_version:
            self._api_version = DEFAULT_API_VERSION
        path = f"/clip/{self._api_version}/"

        if self._resource_type:
            path = _clean_join(path, 'resource', self._resource_type.lower())

        if self._resource_id:
            path = _clean_join(path, self._resource_id)

        if self._path:
            path = self._path

        query = _encode_query(self._query)

        base = self._client.base_url
        return base._replace(path=quote(path, safe="/:@!$&'()*+,;="), query=query).geturl()

    def _outgoing_headers(self) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict()
        if self._headers is not None:
            for key, values in self._headers.items():
                headers[key] = ', '.join(values)

        # an explicit per-request key wins over the client's stored key
        if self._client.username and APPLICATION_KEY_HEADER not in headers:
            headers[APPLICATION_KEY_HEADER] = self._client.username
        return headers

    def do_raw(self, timeout=None) -> bytes:
        """Execute the request and return the full response body.

        Args:
            timeout: seconds, or a (connect, read) tuple, passed to requests

        Raises:
            InvalidQueryError: malformed query string, before any network call
            ConfigurationError: the verb is not a valid HTTP token
            requests.exceptions.RequestException: transport failures
        """
        url = self.url()

        if not _TOKEN.match(self._verb or ''):
            raise ConfigurationError(f"invalid HTTP method {self._verb!r}")

        session = self._client.session
        prepared = session.prepare_request(requests.Request(
            method=self._verb,
            url=url,
            headers=self._outgoing_headers(),
            data=self._body,
        ))

        if timeout is None:
            timeout = self._client.timeout

        with session.send(prepared, timeout=timeout) as response:
            return response.content

    def do(self, timeout=None) -> Response:
        """Execute the request and decode the response envelope.

        Raises:
            DecodeError: the body is not a JSON envelope
        """
        return Response.from_bytes(self.do_raw(timeout=timeout))

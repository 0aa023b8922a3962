"""Client for a Hue bridge's CLIP API.

The client holds the bridge base URL, the ``requests.Session`` used as the
transport and the stored application key. Requests are built against it
with :meth:`Client.request`.
"""

import re
from urllib.parse import SplitResult, urlsplit

import requests
from requests.adapters import HTTPAdapter
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.errors import ConfigurationError, NotFoundError
from core.request import Request
from models.types import TYPE_LIGHT, Light

DEFAULT_SCHEME = 'https://'

# Seconds to wait when a call does not pass a timeout
DEFAULT_TIMEOUT = 5

_BAD_HOST_CHARS = re.compile(r'[\s\x00-\x1f\x7f]')

# Connection pool size and (connect, read) timeout for the insecure client
INSECURE_POOL_SIZE = 100
INSECURE_TIMEOUT = (30, 90)


class Client:
    """Composes and executes requests against one bridge."""

    def __init__(self, base_url: SplitResult, username: str = '',
                 session: requests.Session | None = None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.username = username
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def set_session(self, session: requests.Session) -> 'Client':
        """Replace the session used for HTTP calls."""
        self.session = session
        return self

    def set_username(self, key: str) -> 'Client':
        """Replace the stored application key used by later requests."""
        self.username = key
        return self

    def request(self) -> Request:
        """Create a new request bound to this client."""
        return Request(self)

    def get_lights(self, timeout=None) -> list[Light]:
        """Get all light resources."""
        response = (
            self.request()
            .verb('GET')
            .resource(TYPE_LIGHT)
            .do(timeout=timeout)
        )
        return response.into(list[Light])

    def get_light(self, light_id: str, timeout=None) -> Light:
        """Get a light resource by id.

        Raises:
            NotFoundError: if the bridge returns no light for the id
        """
        response = (
            self.request()
            .verb('GET')
            .resource(TYPE_LIGHT)
            .id(light_id)
            .do(timeout=timeout)
        )
        lights = response.into(list[Light])
        if not lights:
            raise NotFoundError(TYPE_LIGHT, light_id)
        return lights[0]


def _split(url: str) -> SplitResult | None:
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    return parts


def parse_host(host: str) -> SplitResult:
    """Parse a bridge host into a base URL.

    Accepts a full URL (``https://192.168.1.2``) or a bare host or
    ``host:port`` pair, which gets the default https scheme.

    Raises:
        ConfigurationError: if the host is empty or cannot be parsed
    """
    if not host:
        raise ConfigurationError("host must be a URL or a host:port pair")
    if _BAD_HOST_CHARS.search(host):
        raise ConfigurationError(f"invalid bridge host: {host!r}")

    parts = _split(host)
    if parts is None or not parts.scheme or not parts.netloc:
        parts = _split(f"{DEFAULT_SCHEME}{host}")
        if parts is None or not parts.netloc:
            raise ConfigurationError(f"invalid bridge host: {host!r}")
    return parts


def new_client(host: str, username: str) -> Client:
    """Create a client for the bridge at ``host``.

    Raises:
        ConfigurationError: if the host is empty or cannot be parsed
    """
    return Client(parse_host(host), username)


def new_insecure_client(host: str, username: str) -> Client:
    """Create a client that skips TLS certificate verification.

    Bridges serve a self-signed certificate, so this is the usual way to
    talk to one on a local network.
    """
    base_url = parse_host(host)

    requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

    session = requests.Session()
    session.verify = False
    adapter = HTTPAdapter(pool_connections=INSECURE_POOL_SIZE, pool_maxsize=INSECURE_POOL_SIZE)
    session.mount('https://', adapter)
    session.mount('http://', adapter)

    return Client(base_url, username, session=session, timeout=INSECURE_TIMEOUT)

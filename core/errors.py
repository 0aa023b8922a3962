"""Exception types raised by the Hue CLIP client.

Transport failures are not wrapped: they reach the caller as the
``requests.exceptions`` types raised by the session.
"""


class HueError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(HueError):
    """Client or request configuration is unusable (bad host, missing key)."""


class InvalidQueryError(ConfigurationError):
    """A raw query string could not be parsed."""

    def __init__(self, query: str, reason: str):
        super().__init__(f"invalid query {query!r}: {reason}")
        self.query = query
        self.reason = reason


class DecodeError(HueError):
    """A response body or data payload did not have the expected shape."""


class NotFoundError(HueError):
    """The bridge returned no resource for the requested id."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class BridgeError(HueError):
    """The bridge reported errors in the response envelope."""

    def __init__(self, errors: list):
        self.errors = errors
        descriptions = '; '.join(e.description for e in errors)
        super().__init__(f"bridge returned errors: {descriptions}")

"""Response envelope returned by the bridge.

Every CLIP v2 endpoint answers with the same shape::

    {"data": [...], "errors": [{"description": "..."}]}

:class:`Response` holds the decoded envelope and converts the ``data``
payload into a caller-supplied type with :meth:`Response.into`.
"""

import dataclasses
import json
import types
import typing
from dataclasses import dataclass, field
from typing import Any

from core.errors import BridgeError, DecodeError


@dataclass(frozen=True)
class APIError:
    """One entry of the envelope's error list."""
    description: str


@dataclass
class Response:
    """Decoded bridge response."""
    data: Any = None
    errors: list[APIError] = field(default_factory=list)
    data_raw: bytes = b''

    @classmethod
    def from_bytes(cls, body: bytes) -> 'Response':
        """Decode a raw response body into an envelope.

        Raises:
            DecodeError: if the body is not JSON or not an envelope object
        """
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"response body is not valid JSON: {e}") from e

        if payload is None:
            return cls(data_raw=body)
        if not isinstance(payload, dict):
            raise DecodeError(f"expected a JSON object envelope, got {type(payload).__name__}")

        raw_errors = payload.get('errors') or []
        if not isinstance(raw_errors, list):
            raise DecodeError("envelope 'errors' must be a list")

        errors = []
        for entry in raw_errors:
            if not isinstance(entry, dict):
                raise DecodeError("envelope error entries must be objects")
            description = entry.get('description', '')
            if not isinstance(description, str):
                raise DecodeError("error description must be a string")
            errors.append(APIError(description=description))

        return cls(data=payload.get('data'), errors=errors, data_raw=body)

    def into(self, target=None):
        """Convert the data payload into ``target``.

        ``target`` may be a dataclass, a builtin JSON type, or a
        ``list[...]``/``dict[str, ...]``/``Optional[...]`` of those. With no
        target the payload is returned as decoded.

        Raises:
            DecodeError: if the payload does not match ``target``
        """
        return _convert(self.data, target, 'data')

    def raise_for_errors(self) -> 'Response':
        """Raise BridgeError if the bridge reported any errors."""
        if self.errors:
            raise BridgeError(self.errors)
        return self


def _convert(value, target, where: str):
    if target is None or target is Any:
        return value

    origin = typing.get_origin(target)
    args = typing.get_args(target)

    if origin is typing.Union or origin is types.UnionType:
        if value is None and type(None) in args:
            return None
        members = [a for a in args if a is not type(None)]
        last_error = None
        for member in members:
            try:
                return _convert(value, member, where)
            except DecodeError as e:
                last_error = e
        raise last_error or DecodeError(f"{where}: no matching type")

    # null leaves an empty container, as for an absent value
    if value is None and (origin in (list, dict) or target in (list, dict)):
        return [] if list in (origin, target) else {}

    if origin is list:
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected list, got {type(value).__name__}")
        item_type = args[0] if args else None
        return [_convert(item, item_type, f"{where}[{i}]") for i, item in enumerate(value)]

    if origin is dict:
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected object, got {type(value).__name__}")
        value_type = args[1] if len(args) == 2 else None
        return {k: _convert(v, value_type, f"{where}.{k}") for k, v in value.items()}

    if dataclasses.is_dataclass(target) and isinstance(target, type):
        return _build_dataclass(value, target, where)

    if target is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if target is int and isinstance(value, bool):
        raise DecodeError(f"{where}: expected int, got bool")
    if isinstance(target, type):
        if not isinstance(value, target):
            raise DecodeError(f"{where}: expected {target.__name__}, got {type(value).__name__}")
        return value

    raise DecodeError(f"{where}: unsupported target type {target!r}")


def _build_dataclass(value, target: type, where: str):
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected object for {target.__name__}, got {type(value).__name__}")

    hints = typing.get_type_hints(target)
    kwargs = {}
    for f in dataclasses.fields(target):
        if not f.init:
            continue
        if value.get(f.name) is None and not _allows_none(hints.get(f.name)):
            # null on a non-optional field falls back to the field default
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise DecodeError(f"{where}: missing required field '{f.name}'")
            continue
        if f.name in value:
            kwargs[f.name] = _convert(value[f.name], hints.get(f.name), f"{where}.{f.name}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise DecodeError(f"{where}: missing required field '{f.name}'")
    return target(**kwargs)


def _allows_none(hint) -> bool:
    if hint is None or hint is Any:
        return True
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        return type(None) in typing.get_args(hint)
    return False

"""Type definitions for the Hue CLIP client.

Resource type names used in ``/clip/v2/resource/{type}`` paths, the light
resource dataclasses that envelope payloads are decoded into, and the
TypedDict used for stored credentials.
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict

TYPE_LIGHT = 'light'
TYPE_BRIDGE = 'bridge'


class AuthCredentials(TypedDict):
    """Bridge address and application key."""
    bridge_ip: str
    api_token: str


@dataclass
class ResourceIdentifier:
    """Reference to another resource (``rid``/``rtype`` pair)."""
    rid: str
    rtype: str


@dataclass
class LightMetadata:
    name: str = ''
    archetype: str = ''


@dataclass
class On:
    on: bool = False


@dataclass
class Dimming:
    brightness: float = 0.0
    min_dim_level: float | None = None


@dataclass
class ColorTemperature:
    mirek: int | None = None
    mirek_valid: bool = False


@dataclass
class XY:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Color:
    xy: XY = field(default_factory=XY)


@dataclass
class Light:
    """A light resource as returned by ``/clip/v2/resource/light``."""
    id: str
    type: str = TYPE_LIGHT
    id_v1: str = ''
    owner: ResourceIdentifier | None = None
    metadata: LightMetadata = field(default_factory=LightMetadata)
    on: On | None = None
    dimming: Dimming | None = None
    color_temperature: ColorTemperature | None = None
    color: Color | None = None
    mode: str = ''
    effects: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def is_on(self) -> bool:
        return bool(self.on and self.on.on)

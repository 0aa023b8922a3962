"""Configuration loading for the bridge host and application key.

Settings are resolved with this priority:
1. Explicit values (CLI options)
2. Environment variables (HUE_BRIDGE_HOST, HUE_APPLICATION_KEY, HUE_INSECURE)
3. User config file (~/.hue_clip/config.json)
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from core.errors import ConfigurationError
from models.types import AuthCredentials

# User configuration file location
USER_CONFIG_FILE = Path.home() / '.hue_clip' / 'config.json'

ENV_HOST = 'HUE_BRIDGE_HOST'
ENV_KEY = 'HUE_APPLICATION_KEY'
ENV_INSECURE = 'HUE_INSECURE'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


@dataclass
class Settings:
    """Resolved connection settings."""
    host: str
    api_key: str
    insecure: bool = True
    source: str = 'options'


def load_user_config(path: Path | None = None) -> dict:
    """Load the user config file.

    Returns:
        Dict with the file contents, or an empty dict if the file is missing

    Raises:
        ConfigurationError: if the file exists but is not a JSON object
    """
    path = path or USER_CONFIG_FILE
    if not path.exists():
        return {}

    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        raise ConfigurationError(f"Failed to load config from {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return config


def save_settings(bridge_ip: str, api_token: str, path: Path | None = None) -> Path:
    """Save bridge address and application key to the user config file.

    Creates the config directory if it doesn't exist and restricts the file
    to user read/write (600). Other keys already in the file are kept.
    """
    path = path or USER_CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    config = {}
    if path.exists():
        try:
            config = load_user_config(path)
        except ConfigurationError:
            # A corrupt file gets replaced
            config = {}

    credentials: AuthCredentials = {'bridge_ip': bridge_ip, 'api_token': api_token}
    config.update(credentials)

    with open(path, 'w') as f:
        json.dump(config, f, indent=2)
    os.chmod(path, 0o600)
    return path


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def load_settings(host: str | None = None, api_key: str | None = None,
                  insecure: bool | None = None, path: Path | None = None) -> Settings:
    """Resolve connection settings from options, environment and config file.

    Raises:
        ConfigurationError: if no bridge host or application key is found
    """
    env = os.environ
    file_config = load_user_config(path)

    if host:
        source = 'options'
    elif env.get(ENV_HOST):
        source = 'environment'
    else:
        source = str(path or USER_CONFIG_FILE)

    host = host or env.get(ENV_HOST) or file_config.get('bridge_ip')
    api_key = api_key or env.get(ENV_KEY) or file_config.get('api_token')

    if insecure is None:
        if ENV_INSECURE in env:
            insecure = _as_bool(env[ENV_INSECURE])
        else:
            insecure = _as_bool(file_config.get('insecure', True))

    if not host:
        raise ConfigurationError(
            f"No bridge host configured. Use --host, set {ENV_HOST}, "
            f"or add 'bridge_ip' to {path or USER_CONFIG_FILE}."
        )
    if not api_key:
        raise ConfigurationError(
            f"No application key configured. Use --key, set {ENV_KEY}, "
            f"or add 'api_token' to {path or USER_CONFIG_FILE}."
        )

    return Settings(host=host, api_key=api_key, insecure=insecure, source=source)

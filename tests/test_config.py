"""Tests for configuration functions in core/config.py

All file access goes to pytest's tmp_path; the real user config file is
never read or written.
"""

import json
import os
import stat
from pathlib import Path

import pytest

from core.config import (
    ENV_HOST,
    ENV_INSECURE,
    ENV_KEY,
    USER_CONFIG_FILE,
    load_settings,
    load_user_config,
    save_settings,
)
from core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove Hue settings from the environment."""
    for name in (ENV_HOST, ENV_KEY, ENV_INSECURE):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / 'config.json'


class TestConstants:

    def test_user_config_file_path(self):
        """USER_CONFIG_FILE should point to ~/.hue_clip/config.json."""
        assert isinstance(USER_CONFIG_FILE, Path)
        assert USER_CONFIG_FILE.name == 'config.json'
        assert '.hue_clip' in str(USER_CONFIG_FILE)


class TestLoadUserConfig:

    def test_missing_file(self, config_file):
        assert load_user_config(config_file) == {}

    def test_valid_file(self, config_file):
        config_file.write_text(json.dumps({'bridge_ip': '10.0.0.2', 'api_token': 'k'}))
        assert load_user_config(config_file)['bridge_ip'] == '10.0.0.2'

    def test_corrupt_file(self, config_file):
        config_file.write_text('{not json')
        with pytest.raises(ConfigurationError):
            load_user_config(config_file)

    def test_non_object(self, config_file):
        config_file.write_text('[1, 2]')
        with pytest.raises(ConfigurationError):
            load_user_config(config_file)


class TestSaveSettings:

    def test_writes_credentials(self, tmp_path):
        path = tmp_path / 'nested' / 'config.json'
        assert save_settings('10.0.0.2', 'key', path) == path
        assert json.loads(path.read_text()) == {'bridge_ip': '10.0.0.2', 'api_token': 'key'}

    def test_file_permissions(self, config_file):
        save_settings('10.0.0.2', 'key', config_file)
        assert stat.S_IMODE(os.stat(config_file).st_mode) == 0o600

    def test_keeps_other_keys(self, config_file):
        config_file.write_text(json.dumps({'insecure': False, 'api_token': 'old'}))
        save_settings('10.0.0.2', 'new', config_file)
        assert json.loads(config_file.read_text()) == {
            'insecure': False, 'bridge_ip': '10.0.0.2', 'api_token': 'new'
        }

    def test_replaces_corrupt_file(self, config_file):
        config_file.write_text('garbage')
        save_settings('10.0.0.2', 'key', config_file)
        assert json.loads(config_file.read_text())['api_token'] == 'key'


class TestLoadSettings:

    def test_explicit_values(self, config_file):
        settings = load_settings('10.0.0.2', 'key', path=config_file)
        assert settings.host == '10.0.0.2'
        assert settings.api_key == 'key'
        assert settings.insecure is True
        assert settings.source == 'options'

    def test_environment(self, config_file, monkeypatch):
        monkeypatch.setenv(ENV_HOST, 'env.local')
        monkeypatch.setenv(ENV_KEY, 'env-key')
        monkeypatch.setenv(ENV_INSECURE, 'false')
        settings = load_settings(path=config_file)
        assert settings.host == 'env.local'
        assert settings.api_key == 'env-key'
        assert settings.insecure is False
        assert settings.source == 'environment'

    def test_file(self, config_file):
        config_file.write_text(json.dumps({'bridge_ip': 'file.local', 'api_token': 'file-key', 'insecure': False}))
        settings = load_settings(path=config_file)
        assert settings.host == 'file.local'
        assert settings.api_key == 'file-key'
        assert settings.insecure is False
        assert settings.source == str(config_file)

    def test_options_override_environment(self, config_file, monkeypatch):
        monkeypatch.setenv(ENV_HOST, 'env.local')
        monkeypatch.setenv(ENV_KEY, 'env-key')
        settings = load_settings('opt.local', 'opt-key', insecure=False, path=config_file)
        assert (settings.host, settings.api_key, settings.insecure) == ('opt.local', 'opt-key', False)

    def test_missing_host(self, config_file):
        with pytest.raises(ConfigurationError, match='No bridge host'):
            load_settings(api_key='key', path=config_file)

    def test_missing_key(self, config_file):
        with pytest.raises(ConfigurationError, match='No application key'):
            load_settings(host='bridge.local', path=config_file)

"""Tests for CLI configuration file handling."""

import json

import pytest

from cli.config import Config
from service.config import Settings


def test_config_creates_default_file(temp_config_dir):
    """Test that a missing config file is created with defaults."""
    config_path = temp_config_dir / 'config.json'

    config = Config(config_path)

    assert config_path.exists()
    assert config.data == Config.DEFAULT_CONFIG
    assert json.loads(config_path.read_text()) == Config.DEFAULT_CONFIG


def test_config_creates_missing_directory(tmp_path):
    config_path = tmp_path / 'nested' / '.dedupcloud' / 'config.json'

    Config(config_path)

    assert config_path.exists()


def test_config_loads_existing_values(temp_config_dir):
    config_path = temp_config_dir / 'config.json'
    config_path.write_text(json.dumps({"chunk_size": 64, "log_level": "DEBUG"}))

    config = Config(config_path)

    assert config.data["chunk_size"] == 64
    assert config.data["addresser"] is None
    assert config.get_log_level() == "DEBUG"


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_corrupt_config_is_backed_up(temp_config_dir, content):
    """Test that an unreadable config falls back to defaults and keeps a backup."""
    config_path = temp_config_dir / 'config.json'
    config_path.write_text(content)

    config = Config(config_path)

    assert config.data == Config.DEFAULT_CONFIG
    assert (temp_config_dir / 'config.json.bak').read_text() == content


def test_set_value_persists(temp_config):
    temp_config.set_value("addresser", "blake2b")

    reloaded = Config(temp_config.config_path)
    assert reloaded.data["addresser"] == "blake2b"


def test_set_unknown_key_rejected(temp_config):
    with pytest.raises(KeyError):
        temp_config.set_value("server_url", "http://localhost")


def test_get_settings_applies_non_null_values(temp_config):
    temp_config.set_value("chunk_size", 128)
    temp_config.set_value("verify_on_dedup", True)
    base = Settings(chunk_size=50, addresser="polynomial", bcrypt_rounds=4)

    settings = temp_config.get_settings(base)

    assert settings.chunk_size == 128
    assert settings.verify_on_dedup is True
    assert settings.addresser == "polynomial"
    assert settings.bcrypt_rounds == 4


def test_get_settings_defaults_to_base(temp_config):
    base = Settings(storage_limit=42)

    assert temp_config.get_settings(base) == base


def test_log_level_defaults_to_info(temp_config):
    temp_config.set_value("log_level", None)

    assert temp_config.get_log_level() == "INFO"

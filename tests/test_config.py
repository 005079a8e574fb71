"""
Tests for configuration loading and validation.
"""

import json
import os

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from climate_bridge.config import ConfigError, load_config, load_config_from_file
from climate_bridge.models.config import BridgeConfig


def write_options(tmp_path, data) -> str:
    path = tmp_path / "options.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_config_defaults():
    """Test BridgeConfig defaults match the add-on defaults."""
    config = BridgeConfig(ha_url="http://supervisor/core", climate="climate.ac")

    assert config.name == "Air Conditioner"
    assert config.token == ""
    assert config.poll_interval == 5000
    assert config.poll_interval_seconds == 5.0
    assert config.homekit_username == "CC:22:3D:E3:CE:30"
    assert config.homekit_pincode == "031-45-154"
    assert config.homekit_port == 51826
    assert config.persist_path == "/data/homekit"
    assert config.status_port == 8099
    assert config.api_key is None
    assert config.sim_mode is False


def test_ha_url_trailing_slash_removed():
    """Test the hub URL is normalised."""
    config = BridgeConfig(ha_url="http://hass.local:8123/", climate="climate.ac")

    assert config.ha_url == "http://hass.local:8123"


def test_missing_ha_url_rejected():
    """Test the hub URL is required."""
    with pytest.raises(ValidationError):
        BridgeConfig(climate="climate.ac")


def test_missing_climate_rejected():
    """Test the entity id is required."""
    with pytest.raises(ValidationError):
        BridgeConfig(ha_url="http://hass.local:8123")


def test_invalid_pincode_rejected():
    """Test the HomeKit pincode format is enforced."""
    with pytest.raises(ValidationError):
        BridgeConfig(ha_url="http://h", climate="climate.ac", homekit_pincode="12345678")


def test_non_positive_poll_interval_rejected():
    """Test the poll interval must be positive."""
    with pytest.raises(ValidationError):
        BridgeConfig(ha_url="http://h", climate="climate.ac", poll_interval=0)


def test_config_validation_allows_extra_fields():
    """Test unknown add-on options are tolerated."""
    config = BridgeConfig(ha_url="http://h", climate="climate.ac", future_field="allowed")

    assert config.climate == "climate.ac"


def test_load_config_from_file(tmp_path):
    """Test loading a full options file."""
    path = write_options(tmp_path, {
        "ha_url": "http://supervisor/core",
        "token": "abc",
        "climate": "climate.bedroom",
        "name": "Bedroom AC",
        "poll_interval": 10000
    })

    config = load_config_from_file(path)

    assert config.climate == "climate.bedroom"
    assert config.name == "Bedroom AC"
    assert config.poll_interval_seconds == 10.0


def test_load_config_missing_file(tmp_path):
    """Test a missing options file is a configuration error."""
    with pytest.raises(ConfigError):
        load_config_from_file(str(tmp_path / "missing.json"))


def test_load_config_invalid_json(tmp_path):
    """Test unparseable options are a configuration error."""
    path = tmp_path / "options.json"
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        load_config_from_file(str(path))


def test_load_config_missing_required_keys(tmp_path):
    """Test missing ha_url or climate is a configuration error."""
    path = write_options(tmp_path, {"token": "abc", "climate": "climate.ac"})

    with pytest.raises(ConfigError) as exc_info:
        load_config_from_file(path)

    assert "ha_url" in str(exc_info.value)


def test_load_config_non_object(tmp_path):
    """Test a JSON array is rejected."""
    path = write_options(tmp_path, ["ha_url", "climate"])

    with pytest.raises(ConfigError):
        load_config_from_file(path)


def test_load_config_uses_options_path_env(tmp_path):
    """Test OPTIONS_PATH points at the options file."""
    path = write_options(tmp_path, {"ha_url": "http://h", "climate": "climate.ac"})

    with patch.dict(os.environ, {"OPTIONS_PATH": path}, clear=True):
        config = load_config()

    assert config.climate == "climate.ac"
    assert config.sim_mode is False


def test_load_config_sim_mode_env(tmp_path):
    """Test SIM_MODE=true forces sim mode."""
    path = write_options(tmp_path, {"ha_url": "http://h", "climate": "climate.ac"})

    with patch.dict(os.environ, {"OPTIONS_PATH": path, "SIM_MODE": "true"}, clear=True):
        config = load_config()

    assert config.sim_mode is True

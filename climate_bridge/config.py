"""
Configuration management for the bridge.
Loads the add-on options file and validates it.
"""

import json
import os

from pydantic import ValidationError

from climate_bridge.models.config import BridgeConfig

DEFAULT_OPTIONS_PATH = "/data/options.json"


class ConfigError(Exception):
    """Configuration is missing or invalid. Fatal at startup."""


def load_config_from_file(filepath: str) -> BridgeConfig:
    """
    Load and validate configuration from a JSON file.

    Args:
        filepath: Path to options.json

    Returns:
        Validated BridgeConfig instance

    Raises:
        ConfigError: If the file is missing, unreadable or fails validation
    """
    try:
        with open(filepath, 'r') as f:
            config_data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Options file not found: {filepath}") from e
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read options file {filepath}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigError(f"Options file {filepath} must contain a JSON object")

    try:
        return BridgeConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid options in {filepath}: {e}") from e


def load_config() -> BridgeConfig:
    """
    Load configuration from OPTIONS_PATH (default /data/options.json).

    SIM_MODE=true in the environment forces sim mode on.
    """
    config = load_config_from_file(os.getenv("OPTIONS_PATH", DEFAULT_OPTIONS_PATH))

    if os.getenv("SIM_MODE", "false").lower() == "true":
        config = config.model_copy(update={"sim_mode": True})

    return config

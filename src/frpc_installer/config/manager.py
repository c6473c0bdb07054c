"""Configuration file management and utilities."""

import json
from pathlib import Path
from typing import Dict, Any, Optional

from ..exceptions import ConfigurationError

CONFIG_KEYS = (
    "server",
    "port",
    "token",
    "version",
    "force",
    "docker",
    "clean",
    "image",
    "service_url",
    "services",
)


class ConfigManager:
    """Handles configuration file operations and management."""

    @staticmethod
    def load_config(config_path: Optional[str]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        if not config_path:
            return {}

        config_file = Path(config_path)
        if not config_file.exists():
            return {}

        try:
            with open(config_file, "r") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
        return config

    @staticmethod
    def merge_config_with_args(config: Dict[str, Any], **cli_args) -> Dict[str, Any]:
        """Merge configuration with CLI arguments, giving priority to CLI args."""
        merged = {}

        def add_if_not_none(key: str, value: Any) -> None:
            if value is not None:
                merged[key] = value

        for key in CONFIG_KEYS:
            cli_value = cli_args.get(key)
            # click reports unset flags as False, let the config file decide those
            if cli_value is False:
                cli_value = None
            add_if_not_none(key, cli_value if cli_value is not None else config.get(key))

        add_if_not_none("unknown_args", cli_args.get("unknown_args"))
        return merged

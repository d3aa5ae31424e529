"""Configuration management for the portfolio rebalancer.

This module provides YAML configuration loading, typed access to settings
and environment-variable overrides for the rebalance run.
"""

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from rebalancer.utils.exceptions import ConfigurationError

PACKAGE_DIR = Path(__file__).parent.parent
DATA_DIR = PACKAGE_DIR / "data"
DEFAULT_CONFIG_PATH = DATA_DIR / "default.yaml"

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "REBALANCER_LOG_LEVEL": "logging.level",
    "REBALANCER_LIMIT": "rebalance.limit",
    "REBALANCER_FRACTIONAL": "calculator.support_fractional_share",
    "REBALANCER_SLOT_SIZE": "calculator.slot_size",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class Config:
    """Configuration loader and accessor.

    Loads YAML configuration files and provides dict-like access to settings.

    Example:
        >>> config = Config.from_file("rebalancer/data/default.yaml")
        >>> slot_size = config.get_float("calculator.slot_size", 1.0)
    """

    def __init__(self, config_dict: dict[str, Any]) -> None:
        """Initialize with configuration dictionary.

        Args:
            config_dict: Configuration data as nested dictionary
        """
        self._config = config_dict

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            filepath: Path to YAML configuration file

        Returns:
            Config instance with loaded configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not a YAML mapping
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                config_dict = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {filepath}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(config_dict).__name__}"
            )

        return cls(config_dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("calculator.buy_price")
            'bid'
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Get a numeric setting as float.

        Raises:
            ConfigurationError: If the value cannot be converted
        """
        value = self.get(key, default)
        if value is None:
            return None
        if isinstance(value, bool):
            raise ConfigurationError(f"{key} must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from e

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean setting, accepting common string spellings.

        Raises:
            ConfigurationError: If the value is not a recognisable boolean
        """
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
        raise ConfigurationError(f"{key} must be a boolean, got {value!r}")

    def with_overrides(self, overrides: dict[str, Any]) -> "Config":
        """Return a new Config with dotted keys replaced.

        The receiver is left untouched.

        Args:
            overrides: Mapping of dotted key to new value

        Returns:
            New Config instance
        """
        data = copy.deepcopy(self._config)

        for key, value in overrides.items():
            node = data
            parts = key.split(".")
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[parts[-1]] = value

        return Config(data)

    def __getitem__(self, key: str) -> Any:
        """Get configuration value using bracket notation.

        Raises:
            KeyError: If key not found
        """
        value = self.get(key)
        if value is None:
            raise KeyError(f"Configuration key not found: {key}")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Get the full configuration as dictionary."""
        return copy.deepcopy(self._config)


def load_config(filepath: str | Path | None = None) -> Config:
    """Load configuration, defaulting to the bundled default.yaml.

    Args:
        filepath: Path to YAML configuration file. If None, uses default path.

    Returns:
        Config instance
    """
    if filepath is None:
        filepath = DEFAULT_CONFIG_PATH
    return Config.from_file(filepath)


def load_calculator_config(
    filepath: str | Path | None = None,
    env_file: str | Path | None = None,
) -> Config:
    """Load rebalance configuration with environment overrides.

    Reads the YAML configuration, then a .env file when one exists, then
    applies any REBALANCER_* variables found in the environment on top.

    Args:
        filepath: Path to YAML configuration file. If None, uses default path.
        env_file: Path to .env file. If None, uses .env in the working directory.

    Returns:
        Config instance with overrides applied

    Example:
        >>> os.environ["REBALANCER_LIMIT"] = "2500"
        >>> load_calculator_config().get_float("rebalance.limit")
        2500.0
    """
    config = load_config(filepath)

    env_path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    overrides = {
        key: os.environ[var]
        for var, key in ENV_OVERRIDES.items()
        if os.environ.get(var)
    }
    if not overrides:
        return config

    return config.with_overrides(overrides)

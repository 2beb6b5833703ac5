"""Configuration management for the portfolio simulator.

This module provides simple YAML configuration loading and access, with
environment overrides read from the process environment or a ``.env`` file.
"""

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = ROOT_DIR / "config" / "default.yaml"

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "PORTFOLIO_SIM_LOG_LEVEL": "logging.level",
    "PORTFOLIO_SIM_SEED": "engine.seed",
}


class Config:
    """Simple configuration loader and accessor.

    Loads YAML configuration files and provides dict-like access to settings.

    Example:
        >>> config = Config.from_file("config/default.yaml")
        >>> fraction = config.get("allocation.stock_fraction.moderate", 0.6)
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
            yaml.YAMLError: If YAML parsing fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            config_dict = {}

        return cls(config_dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Supports nested keys using dot notation (e.g., "logging.level").

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation.

        Intermediate sections are created as needed.
        """
        keys = key.split(".")
        section = self._config
        for k in keys[:-1]:
            if not isinstance(section.get(k), dict):
                section[k] = {}
            section = section[k]
        section[keys[-1]] = value

    def section(self, key: str) -> dict[str, Any]:
        """Get a nested section as a plain dict (empty if missing)."""
        value = self.get(key, {})
        return copy.deepcopy(value) if isinstance(value, dict) else {}

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
        return self._config.copy()


def apply_env_overrides(config: Config, env_file: str | Path | None = None) -> Config:
    """Apply environment variable overrides to a configuration.

    Loads ``env_file`` (default: ``.env`` at the project root) when it
    exists, then copies any variables listed in ``ENV_OVERRIDES`` into the
    configuration. ``PORTFOLIO_SIM_SEED`` is converted to an integer.

    Args:
        config: Configuration to update in place
        env_file: Optional path to a dotenv file

    Returns:
        The same Config instance

    Raises:
        ValueError: If PORTFOLIO_SIM_SEED is not an integer
    """
    env_path = Path(env_file) if env_file is not None else ROOT_DIR / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    for var, key in ENV_OVERRIDES.items():
        raw = os.getenv(var)
        if not raw:
            continue
        if key == "engine.seed":
            try:
                config.set(key, int(raw))
            except ValueError:
                raise ValueError(f"{var} must be an integer, got {raw!r}") from None
        else:
            config.set(key, raw)

    return config


def load_config(filepath: str | Path = None, use_env: bool = True) -> Config:
    """Helper function to load configuration.

    Args:
        filepath: Path to YAML configuration file. If None, uses default path.
        use_env: Apply environment overrides after loading

    Returns:
        Config instance
    """
    if filepath is None:
        filepath = DEFAULT_CONFIG_PATH
    config = Config.from_file(filepath)
    if use_env:
        apply_env_overrides(config)
    return config

"""
Configuration loader for the word-space engine.
Loads YAML config and resolves ${env:NAME} / ${env:NAME:-default} patterns.
"""

import os
import re
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/wordspace.yaml"

# Pattern to match ${env:NAME} and ${env:NAME:-default}
ENV_PATTERN = re.compile(r'\$\{env:([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}')


class Config:
    """
    Singleton config loader.

    Usage:
        config = Config.load("config/wordspace.yaml")
        store_path = config.get("store.path")
        composition = config.get_section("composition")
    """

    _instance: Optional["Config"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH, env: str = None) -> "Config":
        """
        Load config from YAML file.

        Args:
            config_path: Path to main config file
            env: Environment name (loads environments/{env}.yaml next to
                the main file as override)

        Returns:
            Config instance
        """
        instance = cls()

        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, "r") as f:
            instance._config = yaml.safe_load(f) or {}

        logger.info(f"Loaded config from {config_path}")

        if env:
            env_path = path.parent / "environments" / f"{env}.yaml"
            if env_path.exists():
                with open(env_path, "r") as f:
                    env_config = yaml.safe_load(f) or {}
                instance._config = instance._merge_configs(instance._config, env_config)
                logger.info(f"Applied environment override: {env}")
            else:
                logger.warning(f"Environment override not found: {env_path}")

        instance._config = instance._resolve_env(instance._config)
        return instance

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Load config from an in-memory dict (env patterns are resolved)."""
        instance = cls()
        instance._config = instance._resolve_env(data or {})
        return instance

    def _merge_configs(self, base: dict, override: dict) -> dict:
        """Deep merge override into base config."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _resolve_env(self, value: Any) -> Any:
        """Recursively substitute environment variables in string values."""
        if isinstance(value, dict):
            return {k: self._resolve_env(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_env(v) for v in value]
        if not isinstance(value, str):
            return value

        def replace(match):
            name, default = match.group(1), match.group(2)
            resolved = os.environ.get(name)
            if resolved is None:
                if default is None:
                    raise KeyError(f"Environment variable not set: {name}")
                return default
            return resolved

        return ENV_PATTERN.sub(replace, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value using dot notation.

        Example:
            config.get("store.path")               # Returns "data/wordspace"
            config.get("scan.max_workers", 4)      # Returns 4 if unset
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire config section as dict."""
        return self.get(section, {}) or {}

    @property
    def raw(self) -> Dict[str, Any]:
        """Get raw config dict."""
        return self._config

    @classmethod
    def reset(cls):
        """Reset singleton instance (useful for testing)."""
        cls._instance = None
        cls._config = {}

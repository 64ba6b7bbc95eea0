"""Configuration service for managing Deadline CLI configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json (created with defaults on first run)
- Reading and writing individual settings by dot-separated key
- Resolving the storage path
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from deadline_cli.models.config_models import AppConfig

logger = logging.getLogger(__name__)

APP_DIR_NAME = "deadline_cli"


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_DIR_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_DIR_NAME))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        logger.info("configuration reset to defaults")
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> Any:
        """Set a configuration value by dot-separated key and save.

        The whole configuration is re-validated, so invalid values are
        rejected before anything is written.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value fails validation
        """
        self.get(key)
        data = self.config.model_dump()
        parts = key.split(".")
        target = data
        for part in parts[:-1]:
            target = target[part]
        target[parts[-1]] = value

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e

        self.save_config()
        logger.info("config %s updated", key)
        return self.get(key)

    def flatten(self) -> dict[str, Any]:
        """Return every setting as a flat dot-separated mapping."""
        flat: dict[str, Any] = {}

        def _walk(prefix: str, node: dict[str, Any]) -> None:
            for name, value in node.items():
                path = f"{prefix}.{name}" if prefix else name
                if isinstance(value, dict):
                    _walk(path, value)
                else:
                    flat[path] = value

        _walk("", self.config.model_dump())
        return flat

    def get_db_path(self) -> Path:
        """Resolve the SQLite database path."""
        if self.config.storage.db_path:
            return Path(self.config.storage.db_path).expanduser()
        return self.data_dir / "deadlines.db"


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service

"""Thread-safe singleton configuration manager for ReddiList."""

import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml

from src.core.exceptions import ConfigError
from src.core.types import MAX_LIMIT, SortOrder, TimeWindow

logger = logging.getLogger(__name__)

# Environment variable that overrides reddit.access_token
ACCESS_TOKEN_ENV = "REDDILIST_ACCESS_TOKEN"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# Default configuration template
DEFAULT_CONFIG = {
    "app": {
        "version": "1.0.0",
        "log_level": "INFO",
    },
    "reddit": {
        "access_token": "",
        "user_agent": "",
        "timeout": 30,
    },
    "listing": {
        "default_sort": "new",
        "default_time": "all",
        "default_page_size": 25,
    },
    "security": {
        "mask_logs": True,
    },
}


class ConfigManager:
    """Thread-safe singleton configuration manager.

    Manages application configuration with:
    - Singleton pattern ensuring only one instance exists
    - Thread-safe operations using RLock
    - Automatic settings.yaml creation if missing
    - Dot-notation key access (e.g., "listing.default_sort")
    - Validation rules for critical settings
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        """Ensure singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize configuration manager."""
        # Prevent re-initialization
        if hasattr(self, '_initialized'):
            return

        with self._lock:
            if hasattr(self, '_initialized'):
                return

            self.PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
            self.CONFIG_PATH = self.PROJECT_ROOT / "config" / "settings.yaml"

            self._config = {}
            self._instance_lock = threading.RLock()

            self._load_or_create_config()

            self._initialized = True

    def _load_or_create_config(self):
        """Load settings.yaml or create it from defaults."""
        if self.CONFIG_PATH.exists():
            try:
                with open(self.CONFIG_PATH, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.CONFIG_PATH}")
            except yaml.YAMLError as e:
                logger.error(f"Failed to parse YAML at {self.CONFIG_PATH}: {e}")
                logger.warning("Using DEFAULT_CONFIG due to parse error")
                self._config = self._deep_copy(DEFAULT_CONFIG)
            except OSError as e:
                logger.error(f"Could not read config: {e}")
                logger.warning("Using DEFAULT_CONFIG")
                self._config = self._deep_copy(DEFAULT_CONFIG)
        else:
            logger.info(f"Config file not found at {self.CONFIG_PATH}")
            self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            self._config = self._deep_copy(DEFAULT_CONFIG)
            self.save()
            logger.info(f"Created default configuration at {self.CONFIG_PATH}")

    def get(self, key: str, default=None) -> Any:
        """Get configuration value using dot-notation key.

        Args:
            key: Dot-separated key path (e.g., "reddit.timeout")
            default: Value to return if key not found

        Example:
            >>> config.get("listing.default_sort")
            'new'
        """
        with self._instance_lock:
            parts = key.split('.')
            value = self._config

            for part in parts:
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return default

            return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot-notation key.

        Note: This does NOT save to disk. Use save() to persist changes.
        """
        with self._instance_lock:
            parts = key.split('.')
            target = self._config

            for part in parts[:-1]:
                if part not in target:
                    target[part] = {}
                target = target[part]

            target[parts[-1]] = value

    def update(self, changes: dict) -> None:
        """Batch update configuration from flat dict of dot-notation keys.

        Applies validation rules and saves to disk once after all updates.

        Validation Rules:
            - app.log_level: a logging level name
            - reddit.timeout: minimum 5
            - listing.default_page_size: clamped to 1-100
            - listing.default_sort / listing.default_time: valid tokens
        """
        with self._instance_lock:
            validated_changes = {}

            for key, value in changes.items():
                validated_value = self._validate_key_value(key, value)
                if validated_value is not None:
                    validated_changes[key] = validated_value

            for key, value in validated_changes.items():
                self.set(key, value)

            self.save()

    def _validate_key_value(self, key: str, value: Any) -> Any:
        """Apply validation rules to key-value pair.

        Returns:
            Validated value or None if invalid (will be ignored)
        """
        if key == "app.log_level":
            level = str(value).upper()
            if level not in LOG_LEVELS:
                logger.warning(f"Invalid log_level '{value}'. Ignoring.")
                return None
            return level

        if key == "reddit.timeout":
            try:
                timeout = int(value)
                if timeout < 5:
                    logger.warning(f"reddit timeout {timeout} < 5. Forcing to 5.")
                    return 5
                return timeout
            except (TypeError, ValueError):
                logger.warning(f"Invalid timeout '{value}'. Must be int. Ignoring.")
                return None

        if key == "listing.default_page_size":
            try:
                size = int(value)
            except (TypeError, ValueError):
                logger.warning(f"Invalid default_page_size '{value}'. Must be int. Ignoring.")
                return None
            clamped = min(max(size, 1), MAX_LIMIT)
            if clamped != size:
                logger.warning(f"default_page_size {size} out of range [1, {MAX_LIMIT}]. Forcing to {clamped}.")
            return clamped

        if key == "listing.default_sort":
            if value not in [s.value for s in SortOrder]:
                logger.warning(f"Invalid default_sort '{value}'. Ignoring.")
                return None
            return value

        if key == "listing.default_time":
            if value not in [t.value for t in TimeWindow]:
                logger.warning(f"Invalid default_time '{value}'. Ignoring.")
                return None
            return value

        return value

    def save(self) -> None:
        """Write current configuration to settings.yaml."""
        with self._instance_lock:
            try:
                self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
                with open(self.CONFIG_PATH, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
                logger.debug(f"Saved configuration to {self.CONFIG_PATH}")
            except OSError as e:
                logger.error(f"Failed to save configuration: {e}")
                raise ConfigError(f"Failed to save configuration: {e}") from e

    def get_access_token(self) -> str:
        """OAuth token from the environment, else from settings.yaml."""
        with self._instance_lock:
            return os.environ.get(ACCESS_TOKEN_ENV) or self.get("reddit.access_token", "") or ""

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    @staticmethod
    def _deep_copy(obj):
        """Create a deep copy of nested dict/list structures."""
        if isinstance(obj, dict):
            return {k: ConfigManager._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [ConfigManager._deep_copy(item) for item in obj]
        else:
            return obj

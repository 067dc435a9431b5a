"""Configuration management for DedupCloud CLI."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from service.config import Settings

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "chunk_size": None,
        "addresser": None,
        "storage_limit": None,
        "verify_on_dedup": None,
        "store_capacity": None,
        "log_level": "INFO",
    }

    SETTINGS_KEYS = ("chunk_size", "addresser", "storage_limit", "verify_on_dedup", "store_capacity")

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.dedupcloud/config.json).
                Keys left as null fall back to the DEDUP_* environment settings.
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.dedupcloud' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, ValueError, IOError) as e:
                logger.warning(f"Config file {self.config_path} is unreadable, using defaults: {e}")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config file: {copy_error}")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config file: {e}")
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not save config file: {e}")

    def get_log_level(self) -> str:
        return str(self.data.get('log_level') or 'INFO')

    def set_value(self, key: str, value) -> None:
        """
        Set a configuration value and save to file.

        Raises:
            KeyError: If key is not a known configuration key
        """
        if key not in self.DEFAULT_CONFIG:
            raise KeyError(key)
        self.data[key] = value
        self.save()

    def get_settings(self, base: Optional[Settings] = None) -> Settings:
        """
        Build service settings with this file's non-null values applied.

        Args:
            base: Settings to override (defaults to Settings.from_env())

        Returns:
            Settings instance
        """
        if base is None:
            base = Settings.from_env()
        overrides = {key: self.data.get(key) for key in self.SETTINGS_KEYS}
        return base.with_overrides(**overrides)

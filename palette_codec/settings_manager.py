"""
Settings manager for the palette codec
Holds configuration in memory, optionally backed by a JSON file
"""

import json
from pathlib import Path
from typing import Any, Optional

from .constants import MAX_PALETTE_FILE_SIZE, MAX_RECENT_FILES
from .logging_config import get_logger

logger = get_logger(__name__)


class SettingsManager:
    """
    Codec configuration with dotted key access.

    Settings live in memory. Only a manager created with a settings_file
    reads it on construction and writes it on save_settings().
    """

    def __init__(self, settings_file: Optional[Path] = None):
        self.settings_file = Path(settings_file) if settings_file is not None else None
        self.settings = self._load_settings()

    def _load_settings(self) -> dict[str, Any]:
        settings = self._get_default_settings()
        if self.settings_file is None or not self.settings_file.exists():
            return settings
        try:
            with open(self.settings_file) as f:
                settings.update(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
        return settings

    @staticmethod
    def _get_default_settings() -> dict[str, Any]:
        return {
            "default_palette": "",
            "max_palette_file_size": MAX_PALETTE_FILE_SIZE,
            "preferences": {
                "cache_palettes": True,
                "max_recent_files": MAX_RECENT_FILES,
            },
        }

    def save_settings(self) -> None:
        """
        Write the settings to the settings file.

        Raises:
            ValueError: If the manager has no settings file
            OSError: If the file cannot be written
        """
        if self.settings_file is None:
            raise ValueError("No settings file configured")
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_file, "w") as f:
            json.dump(self.settings, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value, nested keys are separated by dots"""
        value: Any = self.settings
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a setting value in memory"""
        *parents, leaf = key.split(".")
        target = self.settings
        for part in parents:
            target = target.setdefault(part, {})
        target[leaf] = value

    def reset_settings(self) -> None:
        self.settings = self._get_default_settings()


# Singleton instance
_settings_instance = None


def get_settings() -> SettingsManager:
    """Get the shared in-memory settings instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = SettingsManager()
    return _settings_instance

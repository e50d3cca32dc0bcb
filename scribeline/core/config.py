"""Configuration management for the Scribeline history engine."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from scribeline.core.logging import get_logger

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "scribeline"
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "settings" / "defaults.yaml"
USER_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"

DEFAULT_HISTORY_CAPACITY = 240
DEFAULT_VIEW_MODE = "authorship"

logger = get_logger(__name__)


class ConfigManager:
    """Loads default and user configuration and provides helpers to query values."""

    def __init__(self) -> None:
        self.defaults = self._load_yaml(DEFAULTS_PATH)
        if USER_SETTINGS_PATH.exists():
            self.user_settings = self._load_yaml(USER_SETTINGS_PATH)
        else:
            self.user_settings = {}
        self.settings = self._deep_merge(self.defaults, self.user_settings)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError:
                logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
                return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def save(self) -> None:
        USER_SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with USER_SETTINGS_PATH.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(self.settings, handle)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _history_settings(self) -> dict[str, Any]:
        history = self.settings.get("history")
        return history if isinstance(history, dict) else {}

    def history_capacity(self) -> int:
        """Number of snapshots a document timeline keeps before evicting."""

        value = self._history_settings().get("capacity", DEFAULT_HISTORY_CAPACITY)
        try:
            capacity = int(value)
        except (TypeError, ValueError):
            logger.warning("Invalid history.capacity %r, using %d", value, DEFAULT_HISTORY_CAPACITY)
            return DEFAULT_HISTORY_CAPACITY
        if capacity < 1:
            logger.warning("history.capacity must be positive, got %d", capacity)
            return DEFAULT_HISTORY_CAPACITY
        return capacity

    def default_view_mode(self) -> str:
        return str(self._history_settings().get("view_mode", DEFAULT_VIEW_MODE))

    def _logging_settings(self) -> dict[str, Any]:
        section = self.settings.get("logging")
        return section if isinstance(section, dict) else {}

    def log_level(self) -> int:
        name = str(self._logging_settings().get("level") or "INFO").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning("Unknown logging.level %r, using INFO", name)
            return logging.INFO
        return level

    def log_dir(self) -> Path:
        """Directory for the rotating log file; blank means ``CONFIG_DIR/logs``."""

        value = self._logging_settings().get("dir")
        if not value:
            return CONFIG_DIR / "logs"
        return Path(str(value)).expanduser()

"""Hierarchical settings loaded from JSON.

Three-level precedence: CLI overrides > project settings > global settings.
Global settings live in ``~/.elysh/settings.json``; project settings in
``<cwd>/.elysh/settings.json``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from elysh.edit.edit import WORD_CHARS
from elysh.edit.editor import LineEditor
from elysh.edit.history import History
from elysh.input.keybindings import EditorKeybindingsConfig, EditorKeybindingsManager

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".elysh"

DEFAULT_HISTORY_SIZE = 1000


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    Nested dicts merge key by key. Any other value in *overrides* replaces
    the base value outright; ``None`` values are skipped.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- SettingsManager ---


class SettingsManager:
    """Merges global and project settings files.

    Use factory methods (create, in_memory) instead of calling constructor directly.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._load_error = load_error

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager backed by the settings files."""
        cdir = config_dir or _default_config_dir()
        settings_path = os.path.join(cdir, "settings.json")
        project_settings_path = os.path.join(cwd, CONFIG_DIR_NAME, "settings.json")

        settings, error = _load_from_file(settings_path)
        return cls(
            settings_path=settings_path,
            project_settings_path=project_settings_path,
            initial_settings=settings,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
        )

    # --- Core operations ---

    def reload(self) -> None:
        """Reload all settings from disk."""
        if self._settings_path:
            self._global_settings, self._load_error = _load_from_file(self._settings_path)

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply CLI-level overrides on top of merged settings."""
        self._settings = deep_merge_settings(self._settings, overrides)

    def get_global_settings(self) -> dict[str, Any]:
        return dict(self._global_settings)

    def get_project_settings(self) -> dict[str, Any]:
        """Reload and return project-level settings."""
        return self._load_project_settings()

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings (read-only view)."""
        return self._settings

    @property
    def load_error(self) -> Exception | None:
        """Error hit while reading the global settings file, if any."""
        return self._load_error

    def _load_project_settings(self) -> dict[str, Any]:
        if not self._project_settings_path:
            return {}
        settings, _ = _load_from_file(self._project_settings_path)
        return settings

    # --- Getters ---

    def get_word_chars(self) -> frozenset[str]:
        """Boundary characters for word motion.

        Accepts a string (each character is a boundary) or a list of
        single characters.
        """
        value = self._settings.get("wordChars")
        if value is None:
            return WORD_CHARS
        if isinstance(value, str):
            return frozenset(value)
        if isinstance(value, list) and all(isinstance(c, str) and len(c) == 1 for c in value):
            return frozenset(value)
        raise ValueError(f"wordChars must be a string or a list of characters, got {value!r}")

    def get_keybindings(self) -> EditorKeybindingsConfig:
        value = self._settings.get("keybindings")
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError(f"keybindings must be an object, got {value!r}")
        return value

    def get_history_size(self) -> int:
        value = self._settings.get("historySize")
        if value is None:
            return DEFAULT_HISTORY_SIZE
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"historySize must be a non-negative integer, got {value!r}")
        return value

    # --- Construction ---

    def build_line_editor(self) -> LineEditor:
        """A ``LineEditor`` configured from these settings."""
        return LineEditor(
            word_chars=self.get_word_chars(),
            history=History(max_size=self.get_history_size()),
            keybindings=EditorKeybindingsManager(self.get_keybindings()),
        )


# --- File I/O helpers ---


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read settings from %s: %s", path, e)
        return {}, e
    if not isinstance(settings, dict):
        error = ValueError(f"{path} does not contain a JSON object")
        logger.warning("Could not read settings from %s: %s", path, error)
        return {}, error
    return settings, None


def _default_config_dir() -> str:
    """Default configuration directory (~/.elysh)."""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)

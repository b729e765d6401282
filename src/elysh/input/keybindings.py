"""Line editor keybindings manager."""

from __future__ import annotations

import logging
from typing import Literal

from elysh.input.keys import InputEvent, KeyId, normalize_key_id

logger = logging.getLogger(__name__)

EditorAction = Literal[
    # History
    "historyUp",
    "historyDown",
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteToLineEnd",
    "clearLine",
    # Session
    "submit",
    "exit",
]

EditorKeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_EDITOR_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    # History
    "historyUp": ["up", "ctrl+p"],
    "historyDown": ["down", "ctrl+n"],
    # Cursor movement
    "cursorLeft": "left",
    "cursorRight": "right",
    "cursorWordLeft": ["ctrl+left", "shift+left", "meta+b"],
    "cursorWordRight": ["ctrl+right", "shift+right", "meta+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "deleteWordBackward": "ctrl+w",
    "deleteToLineEnd": "ctrl+k",
    "clearLine": "ctrl+c",
    # Session
    "submit": "ctrl+m",
    "exit": "ctrl+d",
}


class EditorKeybindingsManager:
    """Maps decoded input events to editor actions."""

    def __init__(self, config: EditorKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, EditorAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditorKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            self._action_to_keys[action] = self._normalize(action, keys)

        # Override with user config
        for action, keys in config.items():
            if action not in DEFAULT_EDITOR_KEYBINDINGS:
                logger.warning("Ignoring keybinding for unknown action %r", action)
                continue
            self._action_to_keys[action] = self._normalize(action, keys)

        # A key bound to several actions resolves to the user's binding,
        # then to the first default listed.
        ordered = [a for a in config if a in self._action_to_keys]
        ordered += [a for a in self._action_to_keys if a not in config]
        for action in ordered:
            for key in self._action_to_keys[action]:
                self._key_to_action.setdefault(key, action)

    @staticmethod
    def _normalize(action: EditorAction, keys: KeyId | list[KeyId]) -> list[KeyId]:
        key_array = keys if isinstance(keys, list) else [keys]
        normalized: list[KeyId] = []
        for key in key_array:
            key_id = normalize_key_id(key)
            if key_id is None:
                logger.warning("Ignoring invalid key %r for %s", key, action)
                continue
            normalized.append(key_id)
        return normalized

    def matches(self, event: InputEvent, action: EditorAction) -> bool:
        """Check if an event triggers a specific action."""
        return event.key_id in self._action_to_keys.get(action, [])

    def action_for(self, event: InputEvent) -> EditorAction | None:
        """The action bound to *event*, if any."""
        return self._key_to_action.get(event.key_id)

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: EditorKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_editor_keybindings: EditorKeybindingsManager | None = None


def get_editor_keybindings() -> EditorKeybindingsManager:
    global _global_editor_keybindings
    if _global_editor_keybindings is None:
        _global_editor_keybindings = EditorKeybindingsManager()
    return _global_editor_keybindings


def set_editor_keybindings(manager: EditorKeybindingsManager) -> None:
    global _global_editor_keybindings
    _global_editor_keybindings = manager

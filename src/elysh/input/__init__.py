"""Terminal input: buffering, decoding and keybindings."""

from elysh.input.keybindings import (
    DEFAULT_EDITOR_KEYBINDINGS,
    EditorAction,
    EditorKeybindingsConfig,
    EditorKeybindingsManager,
    get_editor_keybindings,
    set_editor_keybindings,
)
from elysh.input.keys import (
    MODIFIERS,
    InputEvent,
    InputKind,
    KeyId,
    decode,
    format_key_id,
    normalize_key_id,
    parse_key_id,
)
from elysh.input.stdin_buffer import InputBuffer

__all__ = [
    # Keybindings
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditorAction",
    "EditorKeybindingsConfig",
    "EditorKeybindingsManager",
    "get_editor_keybindings",
    "set_editor_keybindings",
    # Keys
    "MODIFIERS",
    "InputEvent",
    "InputKind",
    "KeyId",
    "decode",
    "format_key_id",
    "normalize_key_id",
    "parse_key_id",
    # Input buffer
    "InputBuffer",
]

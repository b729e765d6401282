"""Terminal input decoding.

``decode`` maps one complete chunk of terminal input to an ``InputEvent``.
It dispatches on the chunk's length and content: single bytes, whole UTF-8
characters, ``ESC x`` meta keys, the fixed-length CSI/SS3 sequences for
arrows, Home, End and Delete, and bracketed paste envelopes. Anything else
decodes to ``None``; unknown input is never an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

InputKind = Literal[
    "up",
    "down",
    "left",
    "right",
    "backspace",
    "delete",
    "home",
    "end",
    "space",
    "key",
    "paste",
]

KeyId = str

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "meta": 2,
    "ctrl": 4,
}

# Order modifiers appear in a key id.
_MODIFIER_ORDER = ("ctrl", "shift", "meta")

# Accepted spellings when reading key ids from configuration.
_MODIFIER_ALIASES: dict[str, str] = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "shift": "shift",
    "meta": "meta",
    "alt": "meta",
}

ESC = 0x1B
DEL = 0x7F
SPACE = 0x20

BRACKETED_PASTE_START = b"\x1b[200~"
BRACKETED_PASTE_END = b"\x1b[201~"

# Final byte of ESC[x / ESC O x.
_CURSOR_FINALS: dict[int, InputKind] = {
    ord("A"): "up",
    ord("B"): "down",
    ord("C"): "right",
    ord("D"): "left",
    ord("H"): "home",
    ord("F"): "end",
}

# Parameter byte of ESC[n~.
_TILDE_KEYS: dict[int, InputKind] = {
    ord("1"): "home",
    ord("7"): "home",
    ord("4"): "end",
    ord("8"): "end",
    ord("3"): "delete",
}

# Modifier parameter of ESC[1;mX and ESC[3;m~.
_MODIFIER_CODES: dict[int, int] = {
    ord("2"): MODIFIERS["shift"],
    ord("3"): MODIFIERS["meta"],
    ord("4"): MODIFIERS["shift"] | MODIFIERS["meta"],
    ord("5"): MODIFIERS["shift"],
    ord("6"): MODIFIERS["ctrl"] | MODIFIERS["shift"],
    ord("7"): MODIFIERS["ctrl"] | MODIFIERS["meta"],
    ord("8"): MODIFIERS["ctrl"] | MODIFIERS["shift"] | MODIFIERS["meta"],
}

_ALL_MODIFIERS = MODIFIERS["shift"] | MODIFIERS["meta"] | MODIFIERS["ctrl"]


# ---------------------------------------------------------------------------
# InputEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InputEvent:
    """A decoded key press or paste.

    ``char`` is set only for ``key`` events and ``text`` only for ``paste``
    events. ``modifiers`` is a bit-set built from ``MODIFIERS``.
    """

    kind: InputKind
    char: str | None = None
    text: str | None = None
    modifiers: int = 0

    def __post_init__(self) -> None:
        if self.modifiers & ~_ALL_MODIFIERS:
            raise ValueError(f"Unknown modifier bits: {self.modifiers:#x}")
        if self.kind == "paste":
            if self.modifiers:
                raise ValueError("Paste events cannot carry modifiers")
            if self.text is None:
                raise ValueError("Paste events need text")
        elif self.text is not None:
            raise ValueError(f"{self.kind} events cannot carry text")
        if self.kind == "key":
            if not self.char or len(self.char) != 1:
                raise ValueError("Key events need exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.kind} events cannot carry a character")

    @classmethod
    def key(cls, char: str, modifiers: int = 0) -> InputEvent:
        return cls("key", char=char, modifiers=modifiers)

    @classmethod
    def paste(cls, text: str) -> InputEvent:
        return cls("paste", text=text)

    @property
    def ctrl(self) -> bool:
        return bool(self.modifiers & MODIFIERS["ctrl"])

    @property
    def meta(self) -> bool:
        return bool(self.modifiers & MODIFIERS["meta"])

    @property
    def shift(self) -> bool:
        return bool(self.modifiers & MODIFIERS["shift"])

    @property
    def none(self) -> bool:
        return self.modifiers == 0

    @property
    def key_id(self) -> KeyId:
        """Canonical name such as ``"ctrl+a"``, ``"meta+left"`` or ``"up"``."""
        base = self.char if self.kind == "key" else self.kind
        return format_key_id(self.modifiers, base)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Key ids
# ---------------------------------------------------------------------------


def format_key_id(modifiers: int, base: str) -> KeyId:
    parts = [name for name in _MODIFIER_ORDER if modifiers & MODIFIERS[name]]
    parts.append(base)
    return "+".join(parts)


def parse_key_id(key_id: str) -> tuple[int, str] | None:
    """Split ``"ctrl+shift+a"`` into ``(modifier bits, base key)``.

    Modifier names are case-insensitive and ``alt`` is accepted for ``meta``.
    A trailing ``+`` is the plus key itself. Returns ``None`` when no base
    key is left.
    """
    if not key_id:
        return None

    if key_id.endswith("+"):
        head, base = key_id[:-1], "+"
        parts = head.split("+") if head else []
        if parts and parts[-1] == "":
            parts.pop()
    else:
        *parts, base = key_id.split("+")

    modifiers = 0
    for part in parts:
        name = _MODIFIER_ALIASES.get(part.lower())
        if name is None:
            return None
        modifiers |= MODIFIERS[name]

    if not base:
        return None
    if len(base) > 1:
        base = base.lower()
    return modifiers, base


def normalize_key_id(key_id: str) -> KeyId | None:
    """Canonical spelling of *key_id*, or ``None`` if it cannot be parsed."""
    parsed = parse_key_id(key_id)
    if parsed is None:
        return None
    return format_key_id(*parsed)


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------


def _ctrl_letter(byte: int) -> str:
    # 0x00 -> "`", 0x01 -> "a", ..., 0x1a -> "z"
    return chr(0x60 + byte)


def _decode_byte(byte: int) -> InputEvent | None:
    if byte <= 0x1A:
        return InputEvent.key(_ctrl_letter(byte), MODIFIERS["ctrl"])
    if byte == DEL:
        return InputEvent("backspace")
    if byte == SPACE:
        return InputEvent("space")
    if 0x21 <= byte <= 0x7E:
        return InputEvent.key(chr(byte))
    return None


def _decode_char(data: bytes) -> InputEvent | None:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if len(text) != 1 or not text.isprintable():
        return None
    if text == " ":
        return InputEvent("space")
    return InputEvent.key(text)


def _decode_meta(byte: int) -> InputEvent | None:
    meta = MODIFIERS["meta"]
    if 0x21 <= byte <= 0x7E:
        return InputEvent.key(chr(byte), meta)
    if byte == DEL:
        return InputEvent("backspace", modifiers=meta)
    if byte == SPACE:
        return InputEvent("space", modifiers=meta)
    if 1 <= byte <= 0x1A:
        return InputEvent.key(_ctrl_letter(byte), MODIFIERS["ctrl"] | meta)
    return None


def _decode_escape(data: bytes) -> InputEvent | None:
    n = len(data)

    if n == 2:
        # Bare CSI or SS3 introducer: the rest of the sequence never arrived
        if data[1] in b"[O":
            return None
        return _decode_meta(data[1])

    if data[1] >= 0x80:
        event = _decode_char(data[1:])
        if event is None or event.kind != "key":
            return None
        return InputEvent.key(event.char, MODIFIERS["meta"])

    if n == 3 and data[1] in b"[O":
        kind = _CURSOR_FINALS.get(data[2])
        return InputEvent(kind) if kind else None

    if n == 4 and data[1] == ord("[") and data[3] == ord("~"):
        kind = _TILDE_KEYS.get(data[2])
        return InputEvent(kind) if kind else None

    if n == 6 and data[1] == ord("[") and data[3] == ord(";"):
        modifiers = _MODIFIER_CODES.get(data[4])
        if modifiers is None:
            return None
        if data[2] == ord("1"):
            kind = _CURSOR_FINALS.get(data[5])
            return InputEvent(kind, modifiers=modifiers) if kind else None
        if data[2] == ord("3") and data[5] == ord("~"):
            return InputEvent("delete", modifiers=modifiers)

    return None


def decode(data: bytes) -> InputEvent | None:
    """Decode one complete chunk of terminal input."""
    if (
        len(data) >= len(BRACKETED_PASTE_START) + len(BRACKETED_PASTE_END)
        and data.startswith(BRACKETED_PASTE_START)
        and data.endswith(BRACKETED_PASTE_END)
    ):
        payload = data[len(BRACKETED_PASTE_START) : -len(BRACKETED_PASTE_END)]
        return InputEvent.paste(payload.decode("utf-8", errors="replace"))

    if not data:
        return None

    if len(data) == 1:
        event = _decode_byte(data[0])
    elif data[0] == ESC:
        event = _decode_escape(data)
    else:
        event = _decode_char(data)

    if event is None:
        logger.debug("Ignoring unrecognised input %r", data)
    return event

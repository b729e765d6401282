"""Line-edit buffer: text plus a cursor, with quote-aware editing.

The cursor is an index into the buffer string and always satisfies
``0 <= cursor <= len(buffer)``. Every motion saturates at the buffer
boundaries; nothing here raises on out-of-range movement.
"""

from __future__ import annotations

from typing import Iterable

from elysh.edit.utils import visible_width
from elysh.syntax.args import first_arg, last_arg
from elysh.syntax.command import Command, parse_command
from elysh.syntax.quote import is_quote

WORD_CHARS: frozenset[str] = frozenset('/[&.;!]}:"| ')
"""Default boundary characters for word-wise motion and deletion."""


class Edit:
    """A single line of input being edited."""

    def __init__(self) -> None:
        self._buffer: str = ""
        self._cursor: int = 0

    @classmethod
    def from_string(cls, text: str) -> Edit:
        """Wrap *text* verbatim, cursor at the start."""
        edit = cls()
        edit._buffer = text
        return edit

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def as_str(self) -> str:
        return self._buffer

    def __str__(self) -> str:
        return self._buffer

    def __repr__(self) -> str:
        return f"Edit({self._buffer!r}, cursor={self._cursor})"

    def __len__(self) -> int:
        return len(self._buffer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edit):
            return NotImplemented
        return self._buffer == other._buffer and self._cursor == other._cursor

    def is_empty(self) -> bool:
        return not self._buffer

    @property
    def cursor(self) -> int:
        return self._cursor

    def is_at_start(self) -> bool:
        return self._cursor == 0

    def is_at_end(self) -> bool:
        return self._cursor == len(self._buffer)

    def start(self) -> str:
        """Text left of the cursor."""
        return self._buffer[: self._cursor]

    def end(self) -> str:
        """Text right of the cursor."""
        return self._buffer[self._cursor :]

    def split(self) -> tuple[str, str]:
        return self.start(), self.end()

    def first_char(self) -> str | None:
        return self._buffer[0] if self._buffer else None

    def last_char(self) -> str | None:
        return self._buffer[-1] if self._buffer else None

    def ends_with_space(self) -> bool:
        return self._buffer.endswith(" ")

    # ------------------------------------------------------------------
    # Cursor motion
    # ------------------------------------------------------------------

    def to_start(self) -> None:
        self._cursor = 0

    def to_end(self) -> None:
        self._cursor = len(self._buffer)

    def prev(self, n: int = 1) -> None:
        self._cursor = max(self._cursor - n, 0)

    def next(self, n: int = 1) -> None:
        self._cursor = min(self._cursor + n, len(self._buffer))

    def prev_word(self, chars: Iterable[str]) -> None:
        """Move to just after the nearest boundary char left of the cursor.

        The character directly left of the cursor is skipped so that
        repeated calls make progress past a boundary the cursor sits on.
        """
        boundary = set(chars)
        left = self.start()[:-1]
        for index in range(len(left) - 1, -1, -1):
            if left[index] in boundary:
                self._cursor = index + 1
                return
        self.to_start()

    def next_word(self, chars: Iterable[str]) -> None:
        """Move to just past the nearest boundary char right of the cursor."""
        boundary = set(chars)
        right = self.end()[1:]
        for index, char in enumerate(right):
            if char in boundary:
                self.next(index + 2)
                return
        self.to_end()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, ch: str) -> None:
        """Insert one character at the cursor.

        Typing a quote directly before the matching closing quote steps over
        it. Whitespace is dropped when either neighbouring arg is already a
        whitespace run.
        """
        if len(ch) != 1:
            raise ValueError(f"insert expects a single character, got {ch!r}")
        start, end = self.split()

        if is_quote(ch):
            last = last_arg(start)
            if last is not None and last.quote == ch and end.startswith(ch):
                self.next()
                return
        elif ch.isspace():
            last = last_arg(start)
            if last is not None and last.is_whitespace:
                return
            first = first_arg(end)
            if first is not None and first.is_whitespace:
                return

        self._buffer = start + ch + end
        self.next()

    def insert_str(self, text: str) -> None:
        for ch in text:
            self.insert(ch)

    def remove(self) -> None:
        """Backspace. Deletes both halves of an empty quote pair at once."""
        start, end = self.split()
        if start and end and start[-1] == end[0] and is_quote(end[0]):
            self.next()
            self._remove_internal()
        self._remove_internal()

    def _remove_internal(self) -> None:
        if self.is_empty() or self.is_at_end():
            self._buffer = self._buffer[:-1]
        elif self._cursor > 0:
            self._buffer = self._buffer[: self._cursor - 1] + self._buffer[self._cursor :]
        self.prev()

    def remove_next(self) -> None:
        """Forward delete. The cursor stays put."""
        if self._cursor < len(self._buffer):
            self._buffer = self._buffer[: self._cursor] + self._buffer[self._cursor + 1 :]

    def remove_word(self, chars: Iterable[str]) -> None:
        """Move back one word, then drop everything from there to the end."""
        self.prev_word(chars)
        self._buffer = self._buffer[: self._cursor]

    def remove_end(self) -> None:
        self._buffer = self._buffer[: self._cursor]

    def clear(self) -> None:
        self._buffer = ""
        self._cursor = 0

    def clear_end(self) -> None:
        self.remove_end()
        self.to_end()

    # ------------------------------------------------------------------
    # Parsing and render hints
    # ------------------------------------------------------------------

    def command(self) -> Command:
        """Parse the current buffer. Does not touch buffer or cursor."""
        return parse_command(self._buffer)

    def as_command(self) -> Command:
        return self.command()

    def shift(self) -> int:
        """Characters between the cursor and the end of the line."""
        return len(self._buffer) - self._cursor

    def shift_width(self) -> int:
        """Terminal columns between the cursor and the end of the line."""
        return visible_width(self.end())

"""Forward character cursor over a string.

``offset`` is the index of the next character to be returned and is always
a valid index into the string (``0 <= offset <= len(string)``), so every
slice taken from it lands on a character boundary.
"""

from __future__ import annotations


class Chars:
    """Character iterator that remembers where it is in the underlying string."""

    def __init__(self, string: str) -> None:
        self.string = string
        self._offset = 0
        self._last_offset = 0

    def __iter__(self) -> Chars:
        return self

    def __next__(self) -> str:
        char = self.next()
        if char is None:
            raise StopIteration
        return char

    def next(self) -> str | None:
        """Consume and return the next character, or ``None`` at the end."""
        self._last_offset = self._offset
        if self._offset >= len(self.string):
            return None
        char = self.string[self._offset]
        self._offset += 1
        return char

    @property
    def offset(self) -> int:
        """Position of the next character, or the string length once exhausted."""
        return self._offset

    def is_at_end(self) -> bool:
        return self._offset >= len(self.string)

    def start(self) -> str:
        """Everything before the offset."""
        return self.string[: self._offset]

    def end(self) -> str:
        """Everything from the offset onward."""
        return self.string[self._offset :]

    def split(self) -> tuple[str, str]:
        return self.start(), self.end()

    def current(self) -> str | None:
        """The character most recently returned by ``next``."""
        if self._last_offset >= len(self.string):
            return None
        return self.string[self._last_offset]

    def peek(self) -> str | None:
        """The next character, without advancing."""
        return self.peek_nth(0)

    def peek_nth(self, n: int) -> str | None:
        index = self._offset + n
        if index >= len(self.string):
            return None
        return self.string[index]

    def peek_back(self) -> str | None:
        """The character just before the offset."""
        return self.peek_nth_back(0)

    def peek_nth_back(self, n: int) -> str | None:
        index = self._offset - 1 - n
        if index < 0:
            return None
        return self.string[index]

"""Shared scanning engine behind ``Args`` and ``Vars``.

Callers read one character with ``next()`` to decide what kind of token
starts there, then hand over to one of the ``next_*`` methods. Those
methods therefore begin their span one character *behind* the current
offset; ``_dispatch_start`` is the only place that arithmetic lives.
"""

from __future__ import annotations

from typing import Callable

from elysh.syntax.chars import Chars
from elysh.syntax.quote import Quote, is_quote
from elysh.syntax.token import IncompleteQuoted, Quoted, Whitespace, Word


def is_word_stop(char: str) -> bool:
    """Characters that end an argument-level word."""
    return is_quote(char) or char.isspace()


class Scanner:
    """Consumes quoted strings, whitespace runs and words from a string."""

    def __init__(self, string: str) -> None:
        self.string = string
        self._chars = Chars(string)

    @property
    def offset(self) -> int:
        return self._chars.offset

    def is_at_end(self) -> bool:
        return self._chars.is_at_end()

    def next(self) -> str | None:
        return self._chars.next()

    def peek(self) -> str | None:
        return self._chars.peek()

    def _dispatch_start(self) -> int:
        # The dispatching character was already consumed by the caller.
        return max(self._chars.offset - 1, 0)

    def consume_while(self, keep: Callable[[str], bool]) -> None:
        """Advance while the next character satisfies *keep*."""
        chars = self._chars
        while True:
            char = chars.peek()
            if char is None or not keep(char):
                break
            chars.next()

    def take_dispatched(self, stop: Callable[[str], bool]) -> str:
        """Return the dispatch character plus everything up to the first *stop* char."""
        start = self._dispatch_start()
        self.consume_while(lambda char: not stop(char))
        return self.string[start : self._chars.offset]

    def next_string(self, quote: Quote) -> Quoted | IncompleteQuoted:
        """Consume a quoted string; the opening quote has already been read.

        The closing quote is the first matching quote not directly preceded
        by a backslash. No other escape processing happens.
        """
        chars = self._chars
        start = chars.offset
        terminated = False

        while True:
            char = chars.peek()
            if char is None:
                break
            if char == quote and chars.peek_back() != "\\":
                terminated = True
                break
            chars.next()

        content = self.string[start : chars.offset]

        if terminated:
            chars.next()
            return Quoted(quote, content)
        return IncompleteQuoted(quote, content)

    def next_whitespace(self) -> Whitespace:
        """Consume a whitespace run starting at the dispatch character."""
        return Whitespace(self.take_dispatched(lambda char: not char.isspace()))

    def next_word(self) -> Word:
        """Consume a word starting at the dispatch character."""
        return Word(self.take_dispatched(is_word_stop))

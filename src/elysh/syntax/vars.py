"""Tokenizer for ``KEY=value`` assignments that precede a command.

The stream stops at the first thing that is not an assignment. A key left
dangling (``KEY`` followed by whitespace, ``KEY=`` with no value) or a
quote where a key should be puts the stream into an error state: the
offending item is yielded once and iteration ends.
"""

from __future__ import annotations

from dataclasses import dataclass

from elysh.syntax.quote import Quote, is_quote
from elysh.syntax.scanner import Scanner
from elysh.syntax.token import Value, Whitespace


@dataclass(frozen=True)
class Pair:
    """A completed ``KEY=value`` assignment."""

    key: str
    value: Value

    @property
    def quote(self) -> Quote | None:
        return self.value.quote

    def as_str(self) -> str:
        return f"{self.key}={self.value.as_str()}"

    @property
    def is_incomplete(self) -> bool:
        """True when the value is an unterminated quote."""
        return self.value.is_incomplete

    @property
    def is_whitespace(self) -> bool:
        return False


@dataclass(frozen=True)
class IncompletePair:
    """A key with no value: ``KEY`` then whitespace, or ``KEY=`` then nothing."""

    key: str
    text: str

    def as_str(self) -> str:
        return self.text

    @property
    def is_incomplete(self) -> bool:
        return True

    @property
    def is_whitespace(self) -> bool:
        return False


@dataclass(frozen=True)
class UnexpectedChar:
    """A quote found where a key was expected."""

    char: str
    text: str

    def as_str(self) -> str:
        return self.text

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def is_whitespace(self) -> bool:
        return False


Var = Pair | IncompletePair | UnexpectedChar | Whitespace


def is_key_stop(char: str) -> bool:
    """Keys end at a quote, ``=`` or whitespace."""
    return is_quote(char) or char == "=" or char.isspace()


class Vars:
    """Iterates over the assignment prefix of a command line."""

    def __init__(self, string: str) -> None:
        self._scanner = Scanner(string)
        self._error = False

    @property
    def offset(self) -> int:
        """Characters consumed so far."""
        return self._scanner.offset

    @property
    def error(self) -> bool:
        return self._error

    def __iter__(self) -> Vars:
        return self

    def __next__(self) -> Var:
        if self._error:
            raise StopIteration

        scanner = self._scanner
        char = scanner.next()
        if char is None:
            raise StopIteration

        if is_quote(char):
            self._error = True
            return UnexpectedChar(char, char)
        if char.isspace():
            return scanner.next_whitespace()

        pair = self._next_pair()
        if pair is None:
            raise StopIteration
        return pair

    def _next_pair(self) -> Var | None:
        scanner = self._scanner
        key_start = max(scanner.offset - 1, 0)
        key = scanner.take_dispatched(is_key_stop)

        # A bare trailing word is the program name, not an assignment.
        if scanner.is_at_end():
            return None

        char = scanner.peek()

        if char == "=":
            scanner.next()
            char = scanner.next()

            if char is None or char.isspace():
                self._error = True
                text = scanner.string[key_start : scanner.offset]
                return IncompletePair(key, text)

            if is_quote(char):
                value = scanner.next_string(char)  # type: ignore[arg-type]
            else:
                value = scanner.next_word()
            return Pair(key, value)

        if char is not None and char.isspace():
            self._error = True
            return IncompletePair(key, key)

        # Only a quote can follow a key that stopped on neither "=" nor whitespace.
        scanner.next()
        self._error = True
        return UnexpectedChar(char, key + char)  # type: ignore[operator]


def tokenize_vars(string: str) -> list[Var]:
    """Collect the assignment-prefix tokens of *string*."""
    return list(Vars(string))

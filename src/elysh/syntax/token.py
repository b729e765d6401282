"""Lexical values and tokens produced by the shared scanner.

Every variant is a frozen dataclass. ``content`` never contains the
delimiting quotes, while ``as_str()`` returns the exact text that was
consumed from the input, so replaying ``as_str()`` over a token stream
reproduces the source.
"""

from __future__ import annotations

from dataclasses import dataclass

from elysh.syntax.quote import Quote


@dataclass(frozen=True)
class Quoted:
    """A terminated quoted value, e.g. ``"hello"``."""

    quote: Quote
    content: str

    def as_str(self) -> str:
        return f"{self.quote}{self.content}{self.quote}"

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def is_whitespace(self) -> bool:
        return False

    @property
    def is_value(self) -> bool:
        return True


@dataclass(frozen=True)
class IncompleteQuoted:
    """A quoted value whose closing quote was never found."""

    quote: Quote
    content: str

    def as_str(self) -> str:
        return f"{self.quote}{self.content}"

    @property
    def is_incomplete(self) -> bool:
        return True

    @property
    def is_whitespace(self) -> bool:
        return False

    @property
    def is_value(self) -> bool:
        return True


@dataclass(frozen=True)
class Word:
    """An unquoted run of characters."""

    content: str

    @property
    def quote(self) -> Quote | None:
        return None

    def as_str(self) -> str:
        return self.content

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def is_whitespace(self) -> bool:
        return False

    @property
    def is_value(self) -> bool:
        return True


@dataclass(frozen=True)
class Whitespace:
    """A maximal run of whitespace between values."""

    content: str

    @property
    def quote(self) -> Quote | None:
        return None

    def as_str(self) -> str:
        return self.content

    @property
    def is_incomplete(self) -> bool:
        return False

    @property
    def is_whitespace(self) -> bool:
        return True

    @property
    def is_value(self) -> bool:
        return False


Value = Quoted | IncompleteQuoted | Word

Token = Value | Whitespace


def is_quoted(value: Value) -> bool:
    """Is *value* a quoted string, terminated or not?"""
    return isinstance(value, (Quoted, IncompleteQuoted))

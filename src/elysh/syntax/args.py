"""Argument-level tokenizer."""

from __future__ import annotations

from elysh.syntax.quote import is_quote
from elysh.syntax.scanner import Scanner
from elysh.syntax.token import Token

# Arguments are plain tokens: a value or a whitespace run.
Arg = Token


class Args:
    """Iterates over a command line, yielding values and whitespace runs.

    One character of lookahead picks the branch: a quote starts a quoted
    string, whitespace starts a whitespace run, anything else a word.
    """

    def __init__(self, string: str) -> None:
        self._scanner = Scanner(string)

    @property
    def offset(self) -> int:
        """Characters consumed so far."""
        return self._scanner.offset

    def __iter__(self) -> Args:
        return self

    def __next__(self) -> Arg:
        scanner = self._scanner
        char = scanner.next()
        if char is None:
            raise StopIteration

        if is_quote(char):
            return scanner.next_string(char)  # type: ignore[arg-type]
        if char.isspace():
            return scanner.next_whitespace()
        return scanner.next_word()


def tokenize(string: str) -> list[Arg]:
    """Split *string* into a list of args, whitespace runs included."""
    return list(Args(string))


def last_arg(string: str) -> Arg | None:
    """The final arg of *string*, or ``None`` if it is empty."""
    arg = None
    for arg in Args(string):
        pass
    return arg


def first_arg(string: str) -> Arg | None:
    return next(Args(string), None)

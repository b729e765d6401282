"""Recoverable parse errors."""

from __future__ import annotations

from elysh.syntax.quote import Quote


class CommandError(ValueError):
    """A quote was opened but never closed."""

    kind = "incomplete"

    def __init__(self, quote: Quote, content: str) -> None:
        self.quote = quote
        self.content = content
        super().__init__(f"unterminated {self.kind} quote {quote}{content}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandError):
            return NotImplemented
        return (type(self), self.quote, self.content) == (type(other), other.quote, other.content)

    def __hash__(self) -> int:
        return hash((type(self), self.quote, self.content))


class IncompleteVar(CommandError):
    """The value of a ``KEY=value`` assignment is an unterminated quote."""

    kind = "variable"


class IncompleteArg(CommandError):
    """The program or an argument is an unterminated quote."""

    kind = "argument"

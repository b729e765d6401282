"""Command parser: ``(KEY=VALUE)* PROGRAM ARG*``.

Parsing runs in two phases over the same string. ``Vars`` greedily reads
well-formed assignments; everything from the end of the last good
assignment onward is handed to ``Args``. Nothing backtracks, and malformed
input never aborts the parse: an unterminated variable value is dropped
and recorded in ``Command.errors`` so the prompt keeps rendering while the
user is still typing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from elysh.syntax.args import Arg, Args
from elysh.syntax.errors import CommandError, IncompleteArg, IncompleteVar
from elysh.syntax.token import IncompleteQuoted, Word
from elysh.syntax.vars import Pair, Vars

logger = logging.getLogger(__name__)


@dataclass
class Command:
    """A parsed command line.

    ``offset`` is the index in the source string where assignment parsing
    stopped, i.e. just past the last accepted ``KEY=value`` pair.
    """

    vars: list[Pair] = field(default_factory=list)
    program: Arg = field(default_factory=lambda: Word(""))
    args: list[Arg] = field(default_factory=list)
    offset: int = 0
    errors: list[CommandError] = field(default_factory=list)

    @classmethod
    def parse(cls, string: str) -> Command:
        return parse_command(string)

    @classmethod
    def try_parse(cls, string: str) -> Command:
        return try_parse_command(string)

    @property
    def is_empty(self) -> bool:
        return not self.vars and not self.args and self.program.content == ""

    @property
    def env(self) -> dict[str, str]:
        """Assignments as a plain mapping, later keys winning."""
        return {pair.key: pair.value.content for pair in self.vars}

    @property
    def argv(self) -> list[str]:
        """Program followed by its arguments, quotes removed."""
        if self.program.content == "" and not self.args:
            return []
        return [self.program.content] + [arg.content for arg in self.args]


def parse_command(string: str) -> Command:
    """Parse *string* into a ``Command``. Never raises on user input."""
    errors: list[CommandError] = []
    pairs: list[Pair] = []
    offset = 0

    var_iter = Vars(string)
    for var in var_iter:
        if not isinstance(var, Pair):
            continue
        if isinstance(var.value, IncompleteQuoted):
            logger.debug("Dropping incomplete assignment %r at %d", var.key, offset)
            errors.append(IncompleteVar(var.value.quote, var.value.content))
            break
        pairs.append(var)
        offset = var_iter.offset

    values: list[Arg] = []
    for arg in Args(string[offset:]):
        if arg.is_whitespace:
            continue
        if isinstance(arg, IncompleteQuoted):
            errors.append(IncompleteArg(arg.quote, arg.content))
        values.append(arg)

    program: Arg = values.pop(0) if values else Word("")

    return Command(vars=pairs, program=program, args=values, offset=offset, errors=errors)


def try_parse_command(string: str) -> Command:
    """Strict variant of ``parse_command``: raise the first recorded error."""
    command = parse_command(string)
    if command.errors:
        raise command.errors[0]
    return command

"""CLI entry point for elysh. Uses Click for argument parsing.

Each command runs one piece of the line-editing pipeline on its arguments
and prints the result as JSON, which makes it easy to see how a given line
or byte sequence is understood.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any

import click

from elysh.edit.edit import Edit
from elysh.input.keys import InputEvent, decode
from elysh.settings import SettingsManager
from elysh.syntax.args import tokenize
from elysh.syntax.command import Command, parse_command, try_parse_command
from elysh.syntax.errors import CommandError
from elysh.syntax.vars import Pair, tokenize_vars

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------


def _token_json(token: Any) -> dict[str, Any]:
    if isinstance(token, Pair):
        return {"type": "Pair", "key": token.key, "value": _token_json(token.value), "text": token.as_str()}
    data = asdict(token)
    return {"type": type(token).__name__, **data, "text": token.as_str()}


def _command_json(command: Command) -> dict[str, Any]:
    return {
        "vars": [_token_json(pair) for pair in command.vars],
        "program": _token_json(command.program),
        "args": [_token_json(arg) for arg in command.args],
        "offset": command.offset,
        "errors": [str(error) for error in command.errors],
    }


def _event_json(event: InputEvent | None) -> dict[str, Any] | None:
    if event is None:
        return None
    data = {k: v for k, v in asdict(event).items() if v is not None}
    data["key_id"] = event.key_id
    return data


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
@click.option("--cwd", default=None, help="Project directory for settings lookup")
@click.pass_context
def main(ctx, log_level, cwd):
    """Inspect how elysh tokenizes, parses and decodes input."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)
    ctx.obj = SettingsManager.create(cwd or os.getcwd())
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Syntax
# ---------------------------------------------------------------------------


@main.command()
@click.argument("line")
def tokens(line):
    """Split LINE into argument tokens."""
    _echo_json([_token_json(token) for token in tokenize(line)])


@main.command("vars")
@click.argument("line")
def vars_cmd(line):
    """Split the KEY=value prefix of LINE into tokens."""
    _echo_json([_token_json(var) for var in tokenize_vars(line)])


@main.command()
@click.argument("line")
@click.option("--strict", is_flag=True, help="Fail on unterminated quotes")
def parse(line, strict):
    """Parse LINE into assignments, program and arguments."""
    if strict:
        try:
            command = try_parse_command(line)
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    else:
        command = parse_command(line)
    _echo_json(_command_json(command))


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@main.command("decode")
@click.argument("sequences", nargs=-1, required=True)
def decode_cmd(sequences):
    """Decode each hex-encoded byte SEQUENCE, e.g. 1b5b41."""
    results = []
    for sequence in sequences:
        try:
            data = bytes.fromhex(sequence)
        except ValueError:
            raise click.BadParameter(f"not a hex string: {sequence!r}", param_hint="SEQUENCES")
        results.append({"hex": data.hex(), "event": _event_json(decode(data))})
    _echo_json(results)


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


@main.command("edit")
@click.argument("text")
@click.option("--cursor", type=int, default=None, help="Move the cursor to this index")
@click.option("--word-left", "word_left", type=int, default=0, help="Move back this many words")
@click.pass_obj
def edit_cmd(settings, text, cursor, word_left):
    """Type TEXT into an edit buffer and show the result."""
    try:
        word_chars = settings.get_word_chars()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    edit = Edit()
    edit.insert_str(text)
    if cursor is not None:
        edit.to_start()
        edit.next(cursor)
    for _ in range(word_left):
        edit.prev_word(word_chars)

    _echo_json({
        "buffer": edit.as_str(),
        "cursor": edit.cursor,
        "shift": edit.shift(),
        "shift_width": edit.shift_width(),
        "command": _command_json(edit.command()),
    })


if __name__ == "__main__":
    main()

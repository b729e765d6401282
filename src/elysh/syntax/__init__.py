"""Command-line tokenizer and parser."""

# Vocabulary
from elysh.syntax.quote import QUOTE_NAMES, QUOTES, Quote, is_quote, quote_name
from elysh.syntax.token import (
    IncompleteQuoted,
    Quoted,
    Token,
    Value,
    Whitespace,
    Word,
    is_quoted,
)

# Scanning
from elysh.syntax.chars import Chars
from elysh.syntax.scanner import Scanner

# Tokenizers
from elysh.syntax.args import Arg, Args, first_arg, last_arg, tokenize
from elysh.syntax.vars import (
    IncompletePair,
    Pair,
    UnexpectedChar,
    Var,
    Vars,
    tokenize_vars,
)

# Command parser
from elysh.syntax.command import Command, parse_command, try_parse_command
from elysh.syntax.errors import CommandError, IncompleteArg, IncompleteVar

__all__ = [
    # Vocabulary
    "QUOTES",
    "QUOTE_NAMES",
    "IncompleteQuoted",
    "Quote",
    "Quoted",
    "Token",
    "Value",
    "Whitespace",
    "Word",
    "is_quote",
    "is_quoted",
    "quote_name",
    # Scanning
    "Chars",
    "Scanner",
    # Tokenizers
    "Arg",
    "Args",
    "IncompletePair",
    "Pair",
    "UnexpectedChar",
    "Var",
    "Vars",
    "first_arg",
    "last_arg",
    "tokenize",
    "tokenize_vars",
    # Command parser
    "Command",
    "CommandError",
    "IncompleteArg",
    "IncompleteVar",
    "parse_command",
    "try_parse_command",
]

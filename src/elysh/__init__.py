"""elysh: command-line tokenizer, line editor and terminal input decoder."""

from elysh.edit import Edit, History, LineEditor
from elysh.input import InputBuffer, InputEvent, decode
from elysh.settings import SettingsManager
from elysh.syntax import Command, parse_command, tokenize, tokenize_vars, try_parse_command

__version__ = "0.1.0"

__all__ = [
    "Command",
    "Edit",
    "History",
    "InputBuffer",
    "InputEvent",
    "LineEditor",
    "SettingsManager",
    "decode",
    "parse_command",
    "tokenize",
    "tokenize_vars",
    "try_parse_command",
]

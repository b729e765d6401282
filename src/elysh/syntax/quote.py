"""Quote characters recognised by the tokenizer and the line editor."""

from __future__ import annotations

from typing import Literal

Quote = Literal["`", '"', "'"]

QUOTES: frozenset[str] = frozenset({"`", '"', "'"})

QUOTE_NAMES: dict[str, str] = {
    "`": "backtick",
    '"': "double_quote",
    "'": "single_quote",
}


def is_quote(char: str | None) -> bool:
    """Return ``True`` if *char* is one of the three quote characters."""
    return char is not None and char in QUOTES


def quote_name(quote: Quote) -> str:
    return QUOTE_NAMES[quote]

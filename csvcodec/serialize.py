from __future__ import annotations

import logging
from typing import Optional, Sequence

from .models import SerializeConfig
from .rules import APOSTROPHE, BACKSLASH, NEWLINE, QUOTE_TRIGGER_WHITESPACE

logger = logging.getLogger("csv-codec")


def escape_quotes(item: str, quote: str) -> str:
    """Backslash-escape the quote character and apostrophes."""
    item = item.replace(quote, BACKSLASH + quote)
    if quote != APOSTROPHE:
        item = item.replace(APOSTROPHE, BACKSLASH + APOSTROPHE)
    return item


def quote_if_contains_white(item: str, quote: str) -> str:
    # Only the first character is checked for an existing quote.
    if any(ws in item for ws in QUOTE_TRIGGER_WHITESPACE) and item[:1] != quote:
        return quote + item + quote
    return item


def render_field(item: str, config: SerializeConfig) -> str:
    quote = config.quote

    if config.escape_quotes and (quote in item or APOSTROPHE in item):
        item = escape_quotes(item, quote)

    if config.quote_always:
        return quote + item + quote
    if quote in item or APOSTROPHE in item or config.separator in item:
        return quote + item + quote
    return quote_if_contains_white(item, quote)


def stringify(table: Sequence[Sequence[str]], config: Optional[SerializeConfig] = None) -> str:
    """
    Render a table as delimited text.

    Fields are joined by the separator (plus one space when
    `space_after_separator` is set) and rows by a newline, without a
    trailing newline. Never fails.
    """
    config = config or SerializeConfig()
    delimiter = config.delimiter

    lines = [delimiter.join(render_field(item, config) for item in row) for row in table]
    text = NEWLINE.join(lines)

    logger.debug("stringified %d row(s) into %d character(s)", len(lines), len(text))
    return text

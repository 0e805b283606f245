from __future__ import annotations

import logging
from typing import Optional

from .models import ParseConfig, Table
from .preprocess import preprocess
from .tokenizer import Tokenizer

logger = logging.getLogger("csv-codec")


def parse(text: str, source_label: str = "<string>", config: Optional[ParseConfig] = None) -> Table:
    """
    Parse delimited text into a table of rows.

    - `source_label` only annotates error messages.
    - Blank lines never produce rows; empty or all-blank text gives [].
    - A line that ended with the separator gets exactly one empty trailing
      field. With `skip_blank_last`, when every line ends with the separator
      one separator per line is treated as formatting and removed first.

    Raises MalformedRowError when a row cannot be tokenized.
    """
    config = config or ParseConfig()

    cleaned = preprocess(text, config.separator, skip_blank_last=config.skip_blank_last)
    if cleaned.is_empty:
        return []

    tokenizer = Tokenizer(
        separator=config.separator,
        quote=config.quote,
        escape=config.escape,
        skip_initial_space=config.skip_initial_space,
        source=source_label,
        line_numbers=cleaned.line_numbers,
    )

    table: Table = []
    for row in tokenizer.tokenize(cleaned.text):
        fields = list(row.fields)
        if row.line in cleaned.ending_lines:
            fields.append("")
        table.append(fields)

    logger.debug("parsed %s: %d row(s)", source_label, len(table))
    return table

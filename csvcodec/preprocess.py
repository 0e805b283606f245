"""
Input cleanup that runs before tokenization.

Responsibilities:
- drop blank (whitespace-only) lines
- trim trailing whitespace from the end of the text
- remember which lines ended with the separator
- optionally strip one trailing separator from every line, all-or-nothing
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple

from .rules import NEWLINE

logger = logging.getLogger("csv-codec")


@dataclass(frozen=True)
class Preprocessed:
    """Cleaned text plus the side table the tokenizer needs.

    Attributes:
        text: cleaned text, lines joined by a single newline
        ending_lines: indexes of cleaned lines that ended with the separator
        line_numbers: original 1-based line number of each cleaned line
        stripped: whether one trailing separator was removed from every line
    """
    text: str = ""
    ending_lines: FrozenSet[int] = field(default_factory=frozenset)
    line_numbers: Tuple[int, ...] = ()
    stripped: bool = False

    @property
    def is_empty(self) -> bool:
        return self.text == ""


def trim_trailing(text: str, separator: str) -> str:
    """Trim trailing whitespace, keeping a whitespace separator intact."""
    return text.rstrip(string.whitespace.replace(separator, ""))


def all_lines_end_with(lines: List[str], separator: str) -> bool:
    return all(line.endswith(separator) for line in lines)


def preprocess(text: str, separator: str, skip_blank_last: bool = False) -> Preprocessed:
    kept: List[str] = []
    numbers: List[int] = []
    for number, line in enumerate(text.split(NEWLINE), start=1):
        if line.strip():
            kept.append(line)
            numbers.append(number)

    if not kept:
        return Preprocessed()
    cleaned = trim_trailing(NEWLINE.join(kept), separator)

    dropped = text.count(NEWLINE) + 1 - len(kept)
    if dropped:
        logger.debug("dropped %d blank line(s)", dropped)

    lines = cleaned.split(NEWLINE)
    endings = frozenset(i for i, line in enumerate(lines) if line.endswith(separator))

    stripped = False
    if skip_blank_last and all_lines_end_with(lines, separator):
        lines = [line[: -len(separator)] for line in lines]
        cleaned = NEWLINE.join(lines)
        stripped = True
        logger.debug("stripped trailing separator from %d line(s)", len(lines))

    return Preprocessed(
        text=cleaned,
        ending_lines=endings,
        line_numbers=tuple(numbers),
        stripped=stripped,
    )

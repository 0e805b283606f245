from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Union

from .encoding import decode_csv_bytes
from .models import ParseConfig, SerializeConfig, Table
from .parser import parse
from .rules import OUTPUT_ENCODING
from .serialize import stringify

logger = logging.getLogger("csv-codec")

PathLike = Union[str, os.PathLike]


def read_text(path: PathLike) -> str:
    """Read a whole file as LF-only text, detecting its encoding."""
    text, report = decode_csv_bytes(Path(path).read_bytes())
    logger.debug("read %s as %s", path, report.decode_used)
    return text


def write_text(path: PathLike, text: str) -> str:
    """Write text as UTF-8 and return it unchanged."""
    with open(path, "w", encoding=OUTPUT_ENCODING, newline="") as fh:
        fh.write(text)
    return text


def read_all(
    path: PathLike,
    source_label: Optional[str] = None,
    config: Optional[ParseConfig] = None,
) -> Table:
    """Read and parse a file. `source_label` defaults to the path."""
    text = read_text(path).rstrip()
    return parse(text, source_label or str(path), config)


def write_all(
    path: PathLike,
    table: Sequence[Sequence[str]],
    config: Optional[SerializeConfig] = None,
) -> str:
    """Stringify a table, write it to `path` and return the text written."""
    return write_text(path, stringify(table, config))

"""
Bytes to text for the codec.

The tokenizer only understands "\n" line endings, so everything that comes
from a file or an upload goes through here first:
- encoding detection via charset-normalizer (best effort)
- UTF-8 BOM removal
- CRLF/CR -> LF
"""

from __future__ import annotations

import logging
from typing import Tuple

from charset_normalizer import from_bytes

from .models import DecodeReport
from .rules import NEWLINE

logger = logging.getLogger("csv-codec")

UTF8_BOM = b"\xef\xbb\xbf"


def normalize_newlines(text: str) -> Tuple[str, bool]:
    changed = "\r" in text
    return text.replace("\r\n", NEWLINE).replace("\r", NEWLINE), changed


def decode_csv_bytes(raw: bytes) -> Tuple[str, DecodeReport]:
    """
    Decode raw bytes into LF-only text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than kept as a character.
    - If decoding fails, try UTF-8, then decode with replacement characters
      and report the fallback.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        logger.warning("could not decode input as %s, fell back to %s", detected, decode_used)

    text, newlines_changed = normalize_newlines(text)

    report = DecodeReport(
        detected=detected,
        decode_used=decode_used,
        decode_fallback=decode_fallback,
        newlines_changed=newlines_changed,
    )
    return text, report

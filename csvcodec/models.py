from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .rules import DEFAULT_QUOTE, DEFAULT_SEPARATOR, DISABLED_ESCAPES, NEWLINE

Row = List[str]
Table = List[Row]


class ParseConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1, max_length=1)
    quote: str = Field(default=DEFAULT_QUOTE, min_length=1, max_length=1)
    escape: Optional[str] = Field(default=None, max_length=1, examples=[None, "\\"])
    skip_initial_space: bool = False
    skip_blank_last: bool = False

    @field_validator("escape")
    @classmethod
    def _disabled_escape_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v in DISABLED_ESCAPES:
            return None
        if v == NEWLINE:
            raise ValueError("escape character cannot be a newline")
        return v

    @model_validator(mode="after")
    def _distinct_characters(self) -> "ParseConfig":
        if NEWLINE in (self.separator, self.quote):
            raise ValueError("separator and quote cannot be a newline")
        if self.separator == self.quote:
            raise ValueError("separator and quote must differ")
        if self.escape == self.separator:
            raise ValueError("separator and escape must differ")
        return self


class SerializeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1)
    quote: str = Field(default=DEFAULT_QUOTE, min_length=1, max_length=1)
    escape_quotes: bool = True
    quote_always: bool = False
    space_after_separator: bool = False

    @property
    def delimiter(self) -> str:
        if self.space_after_separator:
            return self.separator + " "
        return self.separator


class TableSummary(BaseModel):
    rows: int = 0
    max_columns: int = 0
    ragged: bool = False


class DecodeReport(BaseModel):
    detected: Optional[str] = Field(default=None, examples=["utf-8"])
    decode_used: str = "utf-8"
    decode_fallback: bool = False
    newlines_changed: bool = False


class ParseRequest(BaseModel):
    text: str
    source_label: str = "<request>"
    config: ParseConfig = Field(default_factory=ParseConfig)


class ParseResponse(BaseModel):
    rows: Table
    summary: TableSummary
    decoding: Optional[DecodeReport] = None


class StringifyRequest(BaseModel):
    rows: Table
    config: SerializeConfig = Field(default_factory=SerializeConfig)


class StringifyResponse(BaseModel):
    text: str
    sha256: str


class HealthResponse(BaseModel):
    ok: bool = True


def summarize(table: Table) -> TableSummary:
    widths = {len(row) for row in table}
    return TableSummary(
        rows=len(table),
        max_columns=max(widths, default=0),
        ragged=len(widths) > 1,
    )

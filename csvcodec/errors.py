from __future__ import annotations

from typing import Optional


class CsvCodecError(Exception):
    """Base class for errors raised by csvcodec."""


class MalformedInputError(CsvCodecError, ValueError):
    """
    The tokenizer could not split the input into fields.

    `line` is the 1-based line number in the caller's text (blank lines
    included), `column` is 1-based as well.
    """

    def __init__(
        self,
        message: str,
        source: str = "<string>",
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.source
        if self.line is not None:
            where += f"({self.line}"
            if self.column is not None:
                where += f", {self.column}"
            where += ")"
        return f"{where}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "source": self.source,
            "line": self.line,
            "column": self.column,
        }


class MalformedRowError(MalformedInputError):
    """A single row could not be tokenized. `row` is its 0-based index."""

    def __init__(
        self,
        message: str,
        source: str = "<string>",
        line: Optional[int] = None,
        column: Optional[int] = None,
        row: Optional[int] = None,
    ):
        self.row = row
        super().__init__(message, source=source, line=line, column=column)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["row"] = self.row
        return data

"""
Character-level CSV tokenizer.

The tokenizer is a finite-state machine. Every input character is assigned a
class (separator, quote, escape, newline, initial space, other) and dispatched
to the transition method for that class; the method decides what to do based
on the current state. End of input has its own handler.

States:
- FIELD_START: nothing consumed for the current field yet
- UNQUOTED: inside a field that did not start with the quote character
- QUOTED: inside a quoted span
- ESCAPE_PENDING: the escape character was seen inside a quoted span
- CLOSING_QUOTE: a quote was seen inside a quoted span; it either closed the
  span or, when no escape character is configured, starts a doubled quote

A separator directly followed by the end of the row does not open a new
field. Callers that need to distinguish a deliberately blank trailing field
use the preprocessor's ending flags (see csvcodec.parser).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Sequence

from .errors import MalformedRowError
from .rules import DEFAULT_QUOTE, DEFAULT_SEPARATOR, INITIAL_SPACE, NEWLINE


class State(Enum):
    FIELD_START = auto()
    UNQUOTED = auto()
    QUOTED = auto()
    ESCAPE_PENDING = auto()
    CLOSING_QUOTE = auto()


class CharClass(Enum):
    SEPARATOR = auto()
    QUOTE = auto()
    ESCAPE = auto()
    NEWLINE = auto()
    INITIAL_SPACE = auto()
    OTHER = auto()


class TokenizedRow(NamedTuple):
    fields: List[str]
    line: int  # 0-based index of the line the row ends on


class Tokenizer:
    """
    Split text into rows of fields.

    Args:
        separator: field separator character
        quote: quote character
        escape: escape character usable inside quoted spans; None disables it
            and enables doubled quotes instead
        skip_initial_space: discard spaces and tabs at the start of a field
        source: label used in error messages
        line_numbers: original 1-based line numbers of the text's lines, used
            to report errors against the caller's text
    """

    def __init__(
        self,
        separator: str = DEFAULT_SEPARATOR,
        quote: str = DEFAULT_QUOTE,
        escape: Optional[str] = None,
        skip_initial_space: bool = False,
        source: str = "<string>",
        line_numbers: Sequence[int] = (),
    ):
        self.separator = separator
        self.quote = quote
        # An escape equal to the quote is the doubled-quote convention.
        self.escape = None if escape == quote else escape
        self.skip_initial_space = skip_initial_space
        self.source = source
        self.line_numbers = tuple(line_numbers)

        self._transitions: Dict[CharClass, Callable[[str], None]] = {
            CharClass.SEPARATOR: self.on_separator,
            CharClass.QUOTE: self.on_quote,
            CharClass.ESCAPE: self.on_escape,
            CharClass.NEWLINE: self.on_newline,
            CharClass.INITIAL_SPACE: self.on_initial_space,
            CharClass.OTHER: self.on_other,
        }
        self._reset()

    # ------------------------------------------------------------------
    # driving loop
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.state = State.FIELD_START
        self._buf: List[str] = []
        self._fields: List[str] = []
        self._skipped_space = False
        self._completed: List[TokenizedRow] = []
        self._rows_done = 0
        self._line = 0
        self._col = 0
        self._quote_at = (0, 0)

    def classify(self, ch: str) -> CharClass:
        if ch == self.separator:
            return CharClass.SEPARATOR
        if ch == self.quote:
            return CharClass.QUOTE
        if ch == self.escape:
            return CharClass.ESCAPE
        if ch == NEWLINE:
            return CharClass.NEWLINE
        if self.skip_initial_space and ch in INITIAL_SPACE:
            return CharClass.INITIAL_SPACE
        return CharClass.OTHER

    def tokenize(self, text: str) -> Iterator[TokenizedRow]:
        self._reset()
        for ch in text:
            self._transitions[self.classify(ch)](ch)
            if ch == NEWLINE:
                self._line += 1
                self._col = 0
            else:
                self._col += 1
            if self._completed:
                yield from self._completed
                self._completed = []
        self.on_end()
        yield from self._completed
        self._completed = []

    # ------------------------------------------------------------------
    # transitions, one per character class
    # ------------------------------------------------------------------

    def on_separator(self, ch: str) -> None:
        if self.state in (State.QUOTED, State.ESCAPE_PENDING):
            self._take(ch)
            self.state = State.QUOTED
        else:
            self._end_field()

    def on_quote(self, ch: str) -> None:
        if self.state is State.FIELD_START:
            self._quote_at = (self._line, self._col)
            self.state = State.QUOTED
        elif self.state is State.UNQUOTED:
            self._take(ch)
        elif self.state is State.QUOTED:
            self.state = State.CLOSING_QUOTE
        elif self.state is State.ESCAPE_PENDING:
            self._take(ch)
            self.state = State.QUOTED
        elif self.escape is None:
            # doubled quote
            self._take(ch)
            self.state = State.QUOTED
        else:
            self._fail(f"{self.separator!r} expected after closing quote")

    def on_escape(self, ch: str) -> None:
        if self.state is State.QUOTED:
            self.state = State.ESCAPE_PENDING
        elif self.state is State.CLOSING_QUOTE:
            self._fail(f"{self.separator!r} expected after closing quote")
        else:
            self.on_other(ch)

    def on_newline(self, ch: str) -> None:
        if self.state in (State.QUOTED, State.ESCAPE_PENDING):
            self._take(ch)
            self.state = State.QUOTED
        else:
            self._end_row()

    def on_initial_space(self, ch: str) -> None:
        if self.state is State.FIELD_START:
            self._skipped_space = True
        else:
            self.on_other(ch)

    def on_other(self, ch: str) -> None:
        if self.state is State.CLOSING_QUOTE:
            self._fail(f"{self.separator!r} expected after closing quote")
        self._take(ch)
        if self.state is State.FIELD_START:
            self.state = State.UNQUOTED
        elif self.state is State.ESCAPE_PENDING:
            self.state = State.QUOTED

    def on_end(self) -> None:
        if self.state is State.QUOTED:
            line, col = self._quote_at
            self._fail("unterminated quoted field", line=line, col=col)
        if self.state is State.ESCAPE_PENDING:
            self._fail("escape character at end of input")
        self._end_row()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _take(self, ch: str) -> None:
        self._buf.append(ch)

    def _end_field(self) -> None:
        self._fields.append("".join(self._buf))
        self._buf = []
        self._skipped_space = False
        self.state = State.FIELD_START

    def _end_row(self) -> None:
        # A bare separator at the end of the row opens no field.
        if self.state is not State.FIELD_START or self._skipped_space:
            self._end_field()
        if self._fields:
            self._completed.append(TokenizedRow(self._fields, self._line))
            self._rows_done += 1
        self._fields = []
        self._buf = []
        self._skipped_space = False
        self.state = State.FIELD_START

    def _original_line(self, index: int) -> int:
        if 0 <= index < len(self.line_numbers):
            return self.line_numbers[index]
        return index + 1

    def _fail(self, message: str, line: Optional[int] = None, col: Optional[int] = None) -> None:
        line = self._line if line is None else line
        col = self._col if col is None else col
        raise MalformedRowError(
            message,
            source=self.source,
            line=self._original_line(line),
            column=col + 1,
            row=self._rows_done,
        )

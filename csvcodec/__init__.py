from .errors import CsvCodecError, MalformedInputError, MalformedRowError
from .fileio import read_all, read_text, write_all, write_text
from .models import ParseConfig, SerializeConfig, Table
from .parser import parse
from .serialize import stringify

__all__ = [
    "CsvCodecError",
    "MalformedInputError",
    "MalformedRowError",
    "ParseConfig",
    "SerializeConfig",
    "Table",
    "parse",
    "read_all",
    "read_text",
    "stringify",
    "write_all",
    "write_text",
]

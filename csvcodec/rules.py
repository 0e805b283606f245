"""
Default dialect rules.

Every configurable knob of the codec starts from these values.
"""

DEFAULT_SEPARATOR = ","
DEFAULT_QUOTE = '"'
NEWLINE = "\n"

# Characters skipped at the start of a field when skip_initial_space is on.
INITIAL_SPACE = (" ", "\t")

# Whitespace that makes the serializer quote a field.
QUOTE_TRIGGER_WHITESPACE = (" ", "\t")

APOSTROPHE = "'"
BACKSLASH = "\\"

# Escape values that mean "escaping disabled".
DISABLED_ESCAPES = ("", "\0")

ACCEPTED_UPLOAD_SUFFIXES = (".csv", ".tsv", ".txt")
OUTPUT_ENCODING = "utf-8"

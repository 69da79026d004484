"""
Common constants and character classes used across the jsonsax parser.
"""

import regex

# Sentinel returned by the scanner once the input is exhausted.
END_OF_INPUT = "\0"

# Short escape sequences accepted after a backslash inside a string.
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Bare-word literals, keyed by their first character.
KEYWORDS = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", None),
}

DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"
NUMBER_START = "-" + DIGITS

HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)
REPLACEMENT_CHARACTER = 0xFFFD
MAX_CODE_POINT = 0x10FFFF
# (high << 10) + low - SURROGATE_OFFSET combines a surrogate pair.
SURROGATE_OFFSET = 0x35FDC00

WHITESPACE_RUN = regex.compile(r"[ \t\n\r]*")
LINE_BREAK = regex.compile(r"\r\n|\r|\n")
# Characters a string body may contain verbatim: no quote, backslash or control.
PLAIN_STRING_RUN = regex.compile(r'[^"\\\x00-\x1f\x7f]+')
DIGIT_RUN = regex.compile(r"[0-9]*")
# Identifier-like run quoted in suggestions for misspelled literals.
BARE_WORD = regex.compile(r"[A-Za-z_][A-Za-z0-9_]*")

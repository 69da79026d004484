"""
Pretty-printer for ``Value`` trees.

Output is tab-indented, one property or element per line. Strings are
written byte by byte from their UTF-8 encoding: the usual short escapes for
quote, backslash, slash and the whitespace controls, ``\\xHH`` for every
non-ASCII byte.
"""

import io
import json
import math
from typing import TextIO

from ..core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Value,
)

_BYTE_ESCAPES = {
    ord('"'): '\\"',
    ord("\\"): "\\\\",
    ord("/"): "\\/",
    ord("\b"): "\\b",
    ord("\f"): "\\f",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
}


def format_string(text: str) -> str:
    """Quote and escape ``text``."""
    parts = ['"']
    for byte in text.encode("utf-8"):
        if byte in _BYTE_ESCAPES:
            parts.append(_BYTE_ESCAPES[byte])
        elif byte < 0x80:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02X}")
    parts.append('"')
    return "".join(parts)


def _write(value: Value, out: TextIO, depth: int) -> None:
    if isinstance(value, JsonString):
        out.write(format_string(value.value))
    elif isinstance(value, JsonNumber):
        out.write(f"{value.value:f}")
    elif isinstance(value, JsonBoolean):
        out.write("true" if value.value else "false")
    elif isinstance(value, JsonNull):
        out.write("null")
    elif isinstance(value, JsonObject):
        out.write("{\n")
        for prop in value.properties:
            out.write("\t" * (depth + 1))
            out.write(format_string(prop.name))
            out.write(" : ")
            _write(prop.value, out, depth + 1)
            out.write("\n")
        out.write("\t" * depth + "}")
    elif isinstance(value, JsonArray):
        out.write("[\n")
        last = len(value.values) - 1
        for index, item in enumerate(value.values):
            out.write("\t" * (depth + 1))
            _write(item, out, depth + 1)
            out.write(",\n" if index != last else "\n")
        out.write("\t" * depth + "]")
    else:
        raise TypeError(f"cannot format {type(value).__name__}")


def dump_value(value: Value, stream: TextIO) -> None:
    """Write the pretty-printed form of ``value`` to ``stream``."""
    _write(value, stream, 0)


def format_value(value: Value) -> str:
    """Return the pretty-printed form of ``value``."""
    out = io.StringIO()
    dump_value(value, out)
    return out.getvalue()


def _string_to_json(text: str) -> str:
    # ensure_ascii also escapes DEL, which the decoder rejects unescaped.
    return json.dumps(text, ensure_ascii=True)


def _number_to_json(number: float) -> str:
    if math.isinf(number):
        # Out-of-range literals decode to infinity; write one back.
        return "1e999" if number > 0 else "-1e999"
    if number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


def dumps(value: Value) -> str:
    """Serialize ``value`` as compact JSON, keeping duplicate keys.

    String escaping is delegated to the standard ``json`` module.
    """
    if isinstance(value, JsonString):
        return _string_to_json(value.value)
    if isinstance(value, JsonNumber):
        return _number_to_json(value.value)
    if isinstance(value, JsonBoolean):
        return "true" if value.value else "false"
    if isinstance(value, JsonNull):
        return "null"
    if isinstance(value, JsonObject):
        members = (
            f"{_string_to_json(prop.name)}:{dumps(prop.value)}" for prop in value.properties
        )
        return "{" + ",".join(members) + "}"
    if isinstance(value, JsonArray):
        return "[" + ",".join(dumps(item) for item in value.values) + "]"
    raise TypeError(f"cannot serialize {type(value).__name__}")

"""
jsonsax - strict JSON decoding with event (SAX) and tree (DOM) interfaces.

Both interfaces run the same recursive-descent engine. The SAX form reports
each value to an ``EventSink`` as it is recognised; the DOM form plugs a
tree-building sink into the same engine and hands back a ``Value`` tree.

Quick Start:
    import jsonsax

    # Plain Python data
    data = jsonsax.loads('{"name": "jsonsax", "tags": ["json", "sax"]}')

    # Tree of Value nodes, duplicate keys preserved
    with jsonsax.Parser() as parser:
        tree = parser.parse_tree('{"a": 1, "a": 2}', on_error=print)

    # Events
    class Counter(jsonsax.EventSink):
        def __init__(self):
            self.numbers = 0

        def on_number(self, value):
            self.numbers += 1

    with jsonsax.Parser() as parser:
        parser.parse_events('[1, 2, 3]', Counter())
"""

from .core.engine import (
    Parser,
    create_parser,
    destroy_parser,
    load,
    loads,
    parse_events,
    parse_tree,
)
from .core.interfaces import CallbackSink, EventRecorder, EventSink
from .core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Property,
    Value,
    ValueType,
)
from .security.exceptions import (
    ErrorKind,
    InternalParserError,
    JSONDecodeError,
    ParseError,
    SecurityError,
)
from .utils.config import ParseConfig, ParseLimits
from .utils.printer import dump_value, dumps, format_value

__version__ = "0.1.0"
__author__ = "jsonsax contributors"

__all__ = [
    # Parser lifecycle and entry points
    "Parser", "create_parser", "destroy_parser", "parse_events", "parse_tree",
    "loads", "load",
    # Event sinks
    "EventSink", "CallbackSink", "EventRecorder",
    # Tree values
    "Value", "ValueType", "JsonNull", "JsonBoolean", "JsonNumber", "JsonString",
    "JsonArray", "JsonObject", "Property",
    # Configuration classes
    "ParseConfig", "ParseLimits",
    # Exception classes
    "ErrorKind", "ParseError", "SecurityError", "JSONDecodeError",
    "InternalParserError",
    # Output
    "format_value", "dump_value", "dumps",
]

"""
jsonsax Core Parsing Engine.

This module provides the scanner, decoders, grammar engine and the SAX/DOM
bridging shared by every entry point.
"""

from .arena import Arena, Block
from .engine import GrammarEngine, Parser
from .interfaces import CallbackSink, EventRecorder, EventSink
from .scanner import Position, Scanner
from .tree_builder import TreeBuilder
from .values import (
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

__all__ = [
    'Arena', 'Block',
    'GrammarEngine', 'Parser',
    'CallbackSink', 'EventRecorder', 'EventSink',
    'Position', 'Scanner',
    'TreeBuilder',
    'JsonArray', 'JsonBoolean', 'JsonNull', 'JsonNumber', 'JsonObject',
    'JsonString', 'Property', 'Value', 'ValueType',
]

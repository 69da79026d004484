"""
DOM construction on top of the event stream.

``TreeBuilder`` is an ``EventSink`` that turns events back into a tree of
``Value`` nodes. It keeps an explicit stack of construction frames, one per
open container; the frame on top is the container currently being filled.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..security.exceptions import InternalParserError
from .arena import Arena, Block
from .interfaces import EventSink
from .values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Property,
    Value,
)

Container = Union[JsonArray, JsonObject]


@dataclass
class ConstructionFrame:
    """An open container, its child storage and a pending object key."""

    container: Container
    children: Block
    count: int = 0
    pending_key: Optional[str] = None


class TreeBuilder(EventSink):
    """Builds a ``Value`` tree from parse events.

    All nodes and child lists are allocated from ``arena``; the builder only
    holds references to the containers still open.
    """

    def __init__(self, arena: Arena) -> None:
        self.arena = arena
        self.stack: list[ConstructionFrame] = []
        self.root: Optional[Value] = None

    @property
    def current(self) -> Optional[ConstructionFrame]:
        """Frame of the innermost open container, None at document level."""
        return self.stack[-1] if self.stack else None

    def _attach(self, value: Value) -> None:
        self.arena.adopt(value)
        frame = self.current
        if frame is None:
            self.root = value
            return

        if isinstance(frame.container, JsonArray):
            item: Union[Value, Property] = value
        elif frame.pending_key is not None:
            item = Property(frame.pending_key, value)
            frame.pending_key = None
        else:
            raise InternalParserError("object value arrived without a key")

        frame.children = self.arena.reallocate(frame.children, frame.count + 1)
        frame.children.data[frame.count] = item
        frame.count += 1

    def _open(self, container: Container) -> None:
        children = self.arena.allocate_list()
        if isinstance(container, JsonArray):
            container.values = children.data
        else:
            container.properties = children.data
        self._attach(container)
        self.stack.append(ConstructionFrame(container, children))

    def _close(self, kind: type) -> None:
        frame = self.current
        if frame is None or not isinstance(frame.container, kind):
            raise InternalParserError(f"no open {kind.__name__} to close")
        if frame.pending_key is not None:
            raise InternalParserError(f"key {frame.pending_key!r} has no value")
        self.stack.pop()

    def on_null(self) -> None:
        self._attach(JsonNull())

    def on_boolean(self, value: bool) -> None:
        self._attach(JsonBoolean(value))

    def on_number(self, value: float) -> None:
        self._attach(JsonNumber(value))

    def on_string(self, text: str) -> None:
        self._attach(JsonString(text))

    def on_array_start(self) -> None:
        self._open(JsonArray())

    def on_array_end(self) -> None:
        self._close(JsonArray)

    def on_object_start(self) -> None:
        self._open(JsonObject())

    def on_key(self, text: str) -> None:
        frame = self.current
        if frame is None or not isinstance(frame.container, JsonObject):
            raise InternalParserError("key outside of an object")
        if frame.pending_key is not None:
            raise InternalParserError(f"key {frame.pending_key!r} has no value")
        frame.pending_key = text

    def result(self) -> Value:
        """The finished tree; only valid after a successful parse."""
        if self.root is None or self.stack:
            raise InternalParserError("parse succeeded without a complete root value")
        return self.root

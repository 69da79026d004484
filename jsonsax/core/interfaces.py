"""
Event sink interfaces for SAX-style parsing.

The grammar engine reports everything it recognises through an
``EventSink``: one method per event, called in source order. ``on_error`` is
called at most once per parse, after which no further events follow.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .arena import Arena, Block


class EventSink:
    """Receives parse events. Every method is a no-op by default."""

    def on_error(self, line: int, message: str) -> None:
        """The parse failed at ``line``."""

    def on_null(self) -> None:
        """A ``null`` literal."""

    def on_boolean(self, value: bool) -> None:
        """A ``true`` or ``false`` literal."""

    def on_number(self, value: float) -> None:
        """A number literal."""

    def on_string(self, text: str) -> None:
        """A string value (object keys are reported through ``on_key``)."""

    def on_array_start(self) -> None:
        """An array was opened."""

    def on_array_end(self) -> None:
        """The innermost open array was closed."""

    def on_object_start(self) -> None:
        """An object was opened."""

    def on_key(self, text: str) -> None:
        """The name of the next property of the innermost open object."""

    def on_object_end(self) -> None:
        """The innermost open object was closed."""


@dataclass
class CallbackSink(EventSink):
    """A record of optional callback slots sharing one user context.

    Each slot is called as ``slot(context, *event_args)``; empty slots are
    skipped.
    """

    context: Any = None
    error: Optional[Callable[[Any, int, str], None]] = None
    null: Optional[Callable[[Any], None]] = None
    boolean: Optional[Callable[[Any, bool], None]] = None
    number: Optional[Callable[[Any, float], None]] = None
    string: Optional[Callable[[Any, str], None]] = None
    array_start: Optional[Callable[[Any], None]] = None
    array_end: Optional[Callable[[Any], None]] = None
    object_start: Optional[Callable[[Any], None]] = None
    key: Optional[Callable[[Any, str], None]] = None
    object_end: Optional[Callable[[Any], None]] = None

    def _call(self, slot: Optional[Callable[..., None]], *args: Any) -> None:
        if slot is not None:
            slot(self.context, *args)

    def on_error(self, line: int, message: str) -> None:
        self._call(self.error, line, message)

    def on_null(self) -> None:
        self._call(self.null)

    def on_boolean(self, value: bool) -> None:
        self._call(self.boolean, value)

    def on_number(self, value: float) -> None:
        self._call(self.number, value)

    def on_string(self, text: str) -> None:
        self._call(self.string, text)

    def on_array_start(self) -> None:
        self._call(self.array_start)

    def on_array_end(self) -> None:
        self._call(self.array_end)

    def on_object_start(self) -> None:
        self._call(self.object_start)

    def on_key(self, text: str) -> None:
        self._call(self.key, text)

    def on_object_end(self) -> None:
        self._call(self.object_end)


Event = tuple[str, tuple[Any, ...]]


class EventRecorder(EventSink):
    """Records value events as ``(name, args)`` pairs for later replay.

    Names are the sink method names without the ``on_`` prefix. With an
    ``arena`` the log lives in an arena block and disappears with it.
    Errors are not recorded.
    """

    def __init__(self, arena: Optional[Arena] = None) -> None:
        self.arena = arena
        self._block: Optional[Block] = None
        self._events: list[Event] = []
        self._count = 0

    @property
    def events(self) -> list[Event]:
        """Recorded events, oldest first."""
        return self._events[:self._count]

    def _record(self, name: str, *args: Any) -> None:
        if self.arena is None:
            self._events.append((name, args))
        else:
            self._block = self.arena.reallocate(self._block, self._count + 1)
            self._events = self._block.data
            self._events[self._count] = (name, args)
        self._count += 1

    def replay(self, sink: EventSink) -> None:
        """Deliver every recorded event to ``sink`` in order."""
        for name, args in self.events:
            getattr(sink, f"on_{name}")(*args)

    def on_null(self) -> None:
        self._record("null")

    def on_boolean(self, value: bool) -> None:
        self._record("boolean", value)

    def on_number(self, value: float) -> None:
        self._record("number", value)

    def on_string(self, text: str) -> None:
        self._record("string", text)

    def on_array_start(self) -> None:
        self._record("array_start")

    def on_array_end(self) -> None:
        self._record("array_end")

    def on_object_start(self) -> None:
        self._record("object_start")

    def on_key(self, text: str) -> None:
        self._record("key", text)

    def on_object_end(self) -> None:
        self._record("object_end")

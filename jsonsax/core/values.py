"""
Tree values produced by DOM parsing.

``Value`` is a closed set of variants, one per JSON kind. Objects keep their
properties as an ordered list so duplicate names survive in source order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Optional


class ValueType(Enum):
    """The six JSON value kinds."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class Value:
    """Base class of every tree node."""

    type: ValueType

    def to_python(self) -> Any:
        """Convert to plain Python data (dict, list, str, float, bool, None)."""
        raise NotImplementedError


@dataclass
class JsonNull(Value):
    type = ValueType.NULL

    def to_python(self) -> None:
        return None


@dataclass
class JsonBoolean(Value):
    value: bool
    type = ValueType.BOOLEAN

    def to_python(self) -> bool:
        return self.value


@dataclass
class JsonNumber(Value):
    value: float
    type = ValueType.NUMBER

    def to_python(self) -> float:
        return self.value


@dataclass
class JsonString(Value):
    value: str
    type = ValueType.STRING

    def to_python(self) -> str:
        return self.value


@dataclass
class JsonArray(Value):
    values: list[Value] = field(default_factory=list)
    type = ValueType.ARRAY

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Value:
        return self.values[index]

    def to_python(self) -> list[Any]:
        return [value.to_python() for value in self.values]


class Property(NamedTuple):
    """One name/value pair of an object."""

    name: str
    value: Value


@dataclass
class JsonObject(Value):
    properties: list[Property] = field(default_factory=list)
    type = ValueType.OBJECT

    def __len__(self) -> int:
        return len(self.properties)

    def keys(self) -> list[str]:
        """Property names in source order, duplicates included."""
        return [prop.name for prop in self.properties]

    def get(self, name: str, default: Optional[Value] = None) -> Optional[Value]:
        """Return the value of the first property called ``name``."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return default

    def to_python(self) -> dict[str, Any]:
        """Convert to a dict; for duplicate names the last value wins."""
        return {prop.name: prop.value.to_python() for prop in self.properties}

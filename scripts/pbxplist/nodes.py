"""Value tree for parsed plist documents."""

import math
from typing import Any, Literal
from pydantic import BaseModel, Field


class PlistNull(BaseModel):
    kind: Literal["null"] = "null"


class PlistNumber(BaseModel):
    kind: Literal["number"] = "number"
    value: float


class PlistString(BaseModel):
    kind: Literal["string"] = "string"
    value: str


class PlistArray(BaseModel):
    kind: Literal["array"] = "array"
    items: list["PlistValue"] = Field(default_factory=list)


class PlistDictionary(BaseModel):
    kind: Literal["dictionary"] = "dictionary"
    entries: dict[str, "PlistValue"] = Field(default_factory=dict)

    def get(self, key: str, default: "PlistValue | None" = None) -> "PlistValue | None":
        return self.entries.get(key, default)


PlistValue = PlistNull | PlistNumber | PlistString | PlistArray | PlistDictionary

PlistArray.model_rebuild()
PlistDictionary.model_rebuild()


def from_python(obj: Any) -> PlistValue:
    """Build a value tree from ``None``, numbers, strings, lists and dicts."""
    match obj:
        case PlistNull() | PlistNumber() | PlistString() | PlistArray() | PlistDictionary():
            return obj
        case None:
            return PlistNull()
        case bool():
            raise TypeError("Booleans have no plist representation")
        case float() if not math.isfinite(obj):
            raise ValueError(f"Non-finite number {obj!r} has no plist representation")
        case int() | float():
            return PlistNumber(value=obj)
        case str():
            return PlistString(value=obj)
        case list() | tuple():
            return PlistArray(items=[from_python(item) for item in obj])
        case dict():
            return PlistDictionary(entries={str(key): from_python(value) for key, value in obj.items()})
    raise TypeError(f"Cannot convert {type(obj).__name__} to a plist value")


def to_python(value: PlistValue | None) -> Any:
    match value:
        case None | PlistNull():
            return None
        case PlistNumber(value=number):
            return number
        case PlistString(value=text):
            return text
        case PlistArray(items=items):
            return [to_python(item) for item in items]
        case PlistDictionary(entries=entries):
            return {key: to_python(item) for key, item in entries.items()}
    raise TypeError(f"Not a plist value: {value!r}")


__all__ = [
    "PlistNull",
    "PlistNumber",
    "PlistString",
    "PlistArray",
    "PlistDictionary",
    "PlistValue",
    "from_python",
    "to_python",
]

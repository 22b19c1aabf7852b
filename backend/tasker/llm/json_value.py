"""Tagged-union representation of parsed JSON.

Decoding code matches on these classes instead of probing raw ``dict``/``list``
values, so every branch states which JSON kinds it accepts.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class JsonNull:
    pass


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    value: Union[int, float]


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: Tuple["JsonValue", ...] = ()

    def __iter__(self) -> Iterator["JsonValue"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class JsonObject:
    fields: Dict[str, "JsonValue"] = field(default_factory=dict)

    def get(self, key: str) -> Optional["JsonValue"]:
        return self.fields.get(key)

    def keys(self):
        return self.fields.keys()

    def items(self):
        return self.fields.items()

    def values(self):
        return self.fields.values()

    def __contains__(self, key: object) -> bool:
        return key in self.fields


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]


def parse_json(text: str) -> JsonValue:
    """Parse JSON text into a JsonValue; raises ValueError on invalid or too deeply nested input."""
    try:
        return from_python(json.loads(text))
    except RecursionError as exc:
        raise ValueError("JSON nesting is too deep") from exc


def from_python(raw: Any) -> JsonValue:
    if raw is None:
        return JsonNull()
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(raw, bool):
        return JsonBool(raw)
    if isinstance(raw, (int, float)):
        return JsonNumber(raw)
    if isinstance(raw, str):
        return JsonString(raw)
    if isinstance(raw, (list, tuple)):
        return JsonArray(tuple(from_python(item) for item in raw))
    if isinstance(raw, dict):
        return JsonObject({str(key): from_python(value) for key, value in raw.items()})
    raise TypeError(f"Unsupported JSON type: {type(raw).__name__}")


def to_python(value: JsonValue) -> Any:
    match value:
        case JsonNull():
            return None
        case JsonBool(value=flag):
            return flag
        case JsonNumber(value=number):
            return number
        case JsonString(value=text):
            return text
        case JsonArray(items=items):
            return [to_python(item) for item in items]
        case JsonObject(fields=fields):
            return {key: to_python(item) for key, item in fields.items()}
    raise TypeError(f"Not a JsonValue: {value!r}")


def is_null(value: Optional[JsonValue]) -> bool:
    return value is None or isinstance(value, JsonNull)

"""Per-field cleanup applied to loosely typed model output."""
from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Dict, Optional, Tuple, TypeVar

from tasker.llm.json_value import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    from_python,
)
from tasker.llm.records import (
    DEFAULT_ESTIMATED_MINUTES,
    INT16_MAX,
    INT16_MIN,
    FieldType,
    Priority,
    QuestionKind,
)

E = TypeVar("E")

_JSON_TYPES = (JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject)
_SEPARATORS = re.compile(r"[\s_\-]+")
_NON_DIGITS = re.compile(r"[^0-9]")
_SLUG_INVALID = re.compile(r"[^0-9a-z]+")
# Six significant digits are already far beyond the int16 range.
_MAX_DIGITS = 6

QUESTION_KIND_ALIASES: Dict[str, QuestionKind] = {
    "freetext": QuestionKind.FREE_TEXT,
    "text": QuestionKind.FREE_TEXT,
    "string": QuestionKind.FREE_TEXT,
    "open": QuestionKind.FREE_TEXT,
    "openended": QuestionKind.FREE_TEXT,
    "multiplechoice": QuestionKind.MULTIPLE_CHOICE,
    "choice": QuestionKind.MULTIPLE_CHOICE,
    "singlechoice": QuestionKind.MULTIPLE_CHOICE,
    "select": QuestionKind.MULTIPLE_CHOICE,
    "date": QuestionKind.DATE,
    "datetime": QuestionKind.DATE,
    "number": QuestionKind.NUMBER,
    "numeric": QuestionKind.NUMBER,
    "integer": QuestionKind.NUMBER,
}

PRIORITY_ALIASES: Dict[str, Priority] = {
    "high": Priority.HIGH,
    "urgent": Priority.HIGH,
    "critical": Priority.HIGH,
    "medium": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "normal": Priority.MEDIUM,
    "moderate": Priority.MEDIUM,
    "low": Priority.LOW,
    "minor": Priority.LOW,
}

FIELD_TYPE_ALIASES: Dict[str, FieldType] = {
    "text": FieldType.TEXT,
    "string": FieldType.TEXT,
    "textarea": FieldType.TEXT,
    "number": FieldType.NUMBER,
    "numeric": FieldType.NUMBER,
    "integer": FieldType.NUMBER,
    "int": FieldType.NUMBER,
    "float": FieldType.NUMBER,
    "currency": FieldType.CURRENCY,
    "money": FieldType.CURRENCY,
    "price": FieldType.CURRENCY,
    "date": FieldType.DATE,
    "datetime": FieldType.DATE,
    "time": FieldType.DATE,
    "checkbox": FieldType.CHECKBOX,
    "toggle": FieldType.CHECKBOX,
    "boolean": FieldType.CHECKBOX,
    "bool": FieldType.CHECKBOX,
    "list": FieldType.LIST,
    "array": FieldType.LIST,
}

TRUE_STRINGS = {"true", "yes", "y", "1", "required"}


def as_json(value: Any) -> Optional[JsonValue]:
    """Accept either a JsonValue or a plain Python value."""
    if value is None or isinstance(value, _JSON_TYPES):
        return value
    return from_python(value)


def normalize_string(value: Any) -> Optional[str]:
    """Trimmed string, or None when the value is not a string or is blank."""
    match as_json(value):
        case JsonString(value=text):
            cleaned = text.strip()
            return cleaned or None
        case _:
            return None


def canonical_token(text: str) -> str:
    return _SEPARATORS.sub("", text).lower()


def normalize_enum(value: Any, aliases: Dict[str, E], default: E) -> E:
    text = normalize_string(value)
    if text is None:
        return default
    return aliases.get(canonical_token(text), default)


def normalize_question_kind(value: Any) -> QuestionKind:
    return normalize_enum(value, QUESTION_KIND_ALIASES, QuestionKind.FREE_TEXT)


def normalize_priority(value: Any) -> Priority:
    return normalize_enum(value, PRIORITY_ALIASES, Priority.MEDIUM)


def normalize_field_type(value: Any) -> FieldType:
    return normalize_enum(value, FIELD_TYPE_ALIASES, FieldType.TEXT)


def clamp_int16(number: int) -> int:
    return max(INT16_MIN, min(INT16_MAX, number))


def _round_half_away_from_zero(number: float) -> int:
    magnitude = math.floor(abs(number) + 0.5)
    return int(magnitude) if number >= 0 else -int(magnitude)


def _parse_number_text(text: str) -> Optional[int]:
    cleaned = text.strip()
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        number = math.nan
    if math.isinf(number):
        return INT16_MAX if number > 0 else INT16_MIN
    if math.isfinite(number):
        return _round_half_away_from_zero(number)

    raw_digits = _NON_DIGITS.sub("", cleaned)
    if not raw_digits:
        return None
    digits = raw_digits.lstrip("0")
    if len(digits) > _MAX_DIGITS:
        return INT16_MAX
    return int(digits or "0")


def parse_integer(value: Any) -> Optional[int]:
    """Integer reading of a JSON number or numeric-looking string, else None."""
    match as_json(value):
        case JsonNumber(value=number) if isinstance(number, int):
            return number
        case JsonNumber(value=number):
            if not math.isfinite(number):
                return None
            return _round_half_away_from_zero(number)
        case JsonString(value=text):
            return _parse_number_text(text)
        case _:
            return None


def coerce_minutes(value: Any, default: int = DEFAULT_ESTIMATED_MINUTES) -> int:
    parsed = parse_integer(value)
    if parsed is None:
        return default
    return clamp_int16(parsed)


def coerce_order(value: Any, index: int) -> int:
    parsed = parse_integer(value)
    if parsed is None:
        return max(0, index)
    return max(0, min(INT16_MAX, parsed))


def coerce_bool(value: Any, default: bool = False) -> bool:
    match as_json(value):
        case JsonBool(value=flag):
            return flag
        case JsonNumber(value=number):
            return number != 0
        case JsonString(value=text):
            return text.strip().lower() in TRUE_STRINGS
        case _:
            return default


def normalize_options(value: Any) -> Optional[Tuple[str, ...]]:
    match as_json(value):
        case JsonArray(items=items):
            cleaned = tuple(option for option in (normalize_string(item) for item in items) if option)
            return cleaned or None
        case _:
            return None


def slugify(label: str) -> str:
    ascii_label = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode("ascii")
    return _SLUG_INVALID.sub("_", ascii_label.lower()).strip("_")

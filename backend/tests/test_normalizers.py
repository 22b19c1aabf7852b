from __future__ import annotations

import math

import pytest

from tasker.llm.json_value import JsonNull
from tasker.llm.normalizers import (
    coerce_bool,
    coerce_minutes,
    coerce_order,
    normalize_field_type,
    normalize_options,
    normalize_priority,
    normalize_question_kind,
    normalize_string,
    parse_integer,
    slugify,
)
from tasker.llm.records import INT16_MAX, INT16_MIN, FieldType, Priority, QuestionKind


@pytest.mark.parametrize(
    "raw",
    ["multipleChoice", "MULTIPLE_CHOICE", "multiple choice", "Multiple-Choice", " multiplechoice "],
)
def test_question_kind_tolerates_case_and_separators(raw: str) -> None:
    assert normalize_question_kind(raw) is QuestionKind.MULTIPLE_CHOICE


def test_question_kind_defaults_to_free_text() -> None:
    assert normalize_question_kind("essay") is QuestionKind.FREE_TEXT
    assert normalize_question_kind(None) is QuestionKind.FREE_TEXT
    assert normalize_question_kind(3) is QuestionKind.FREE_TEXT


def test_priority_aliases_and_default() -> None:
    assert normalize_priority("HIGH") is Priority.HIGH
    assert normalize_priority("urgent") is Priority.HIGH
    assert normalize_priority("Low") is Priority.LOW
    assert normalize_priority("someday") is Priority.MEDIUM
    assert normalize_priority(JsonNull()) is Priority.MEDIUM


def test_field_type_aliases_and_default() -> None:
    assert normalize_field_type("toggle") is FieldType.CHECKBOX
    assert normalize_field_type("Money") is FieldType.CURRENCY
    assert normalize_field_type("array") is FieldType.LIST
    assert normalize_field_type("color") is FieldType.TEXT


def test_enum_normalization_is_idempotent() -> None:
    for kind in QuestionKind:
        assert normalize_question_kind(kind.value) is kind
    for priority in Priority:
        assert normalize_priority(priority.value) is priority
    for field_type in FieldType:
        assert normalize_field_type(field_type.value) is field_type


def test_normalize_string_trims_and_rejects_blank() -> None:
    assert normalize_string("  Book venue ") == "Book venue"
    assert normalize_string("   ") is None
    assert normalize_string(42) is None
    assert normalize_string(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        (45, 45),
        (45.5, 46),
        (-2.5, -3),
        ("45", 45),
        ("  90.4 ", 90),
        ("45 minutes", 45),
        ("1.5 hours", 15),
        (100000, INT16_MAX),
        (-100000, INT16_MIN),
        ("99999999999", INT16_MAX),
        ("1e400", INT16_MAX),
        ("-1e400", INT16_MIN),
        ("1e5", INT16_MAX),
    ],
)
def test_coerce_minutes(raw, expected: int) -> None:
    assert coerce_minutes(raw) == expected


@pytest.mark.parametrize("raw", [None, True, "soon", "", [30], {"minutes": 30}, math.inf, math.nan])
def test_coerce_minutes_falls_back_to_default(raw) -> None:
    assert coerce_minutes(raw) == 30


def test_coerce_minutes_result_always_in_range() -> None:
    for raw in (1e12, -1e12, "123456789012345", 32767, -32768, 0):
        assert INT16_MIN <= coerce_minutes(raw) <= INT16_MAX


def test_parse_integer_rejects_non_numbers() -> None:
    assert parse_integer("abc") is None
    assert parse_integer(False) is None


def test_coerce_order_uses_index_and_never_negative() -> None:
    assert coerce_order(None, 3) == 3
    assert coerce_order("2", 0) == 2
    assert coerce_order(-5, 1) == 0


def test_coerce_bool_variants() -> None:
    assert coerce_bool(True) is True
    assert coerce_bool("Yes") is True
    assert coerce_bool("required") is True
    assert coerce_bool("no") is False
    assert coerce_bool(1) is True
    assert coerce_bool(0) is False
    assert coerce_bool(None) is False


def test_normalize_options_keeps_non_blank_strings() -> None:
    assert normalize_options(["Birthday", " ", "Wedding", 3]) == ("Birthday", "Wedding")
    assert normalize_options([]) is None
    assert normalize_options("Birthday, Wedding") is None


def test_slugify() -> None:
    assert slugify("Venue Name") == "venue_name"
    assert slugify("Check-in Date!") == "check_in_date"
    assert slugify("Café") == "cafe"
    assert slugify("!!!") == ""


@pytest.mark.parametrize("raw", [0, 45, -45, 32767, -32768, 1e9, -1e9, "12 min", 2.5])
def test_coerce_minutes_is_idempotent(raw) -> None:
    once = coerce_minutes(raw)

    assert coerce_minutes(once) == once

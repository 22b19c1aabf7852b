from __future__ import annotations

from tasker.llm import synonyms
from tasker.llm.json_value import JsonNumber, JsonString, from_python


def test_resolve_prefers_earlier_candidates() -> None:
    obj = from_python({"name": "Second", "title": "First"})

    assert synonyms.resolve(obj, synonyms.TASK_TITLE) == JsonString("First")


def test_resolve_skips_null_values() -> None:
    obj = from_python({"title": None, "name": "Fallback"})

    assert synonyms.resolve(obj, synonyms.TASK_TITLE) == JsonString("Fallback")


def test_resolve_folds_case_and_separators() -> None:
    obj = from_python({"estimated_time": 45, "Input-Fields": []})

    assert synonyms.resolve(obj, synonyms.TASK_MINUTES) == JsonNumber(45)
    assert synonyms.resolve(obj, synonyms.TASK_FIELDS) is not None


def test_resolve_returns_none_when_absent() -> None:
    obj = from_python({"unrelated": "value"})

    assert synonyms.resolve(obj, synonyms.QUESTION_TEXT) is None
    assert not synonyms.has_any(obj, synonyms.QUESTION_TEXT)


def test_exact_key_wins_over_folded_duplicate() -> None:
    obj = from_python({"Duration": 90, "duration": 15})

    assert synonyms.resolve(obj, ("duration",)) == JsonNumber(15)

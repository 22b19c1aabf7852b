"""Resolve alternate key names onto canonical fields."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from tasker.llm.json_value import JsonObject, JsonValue, is_null
from tasker.llm.normalizers import canonical_token

Candidates = Tuple[str, ...]

QUESTION_TEXT: Candidates = ("question", "text", "prompt")
QUESTION_KIND: Candidates = ("type", "questionType")
QUESTION_OPTIONS: Candidates = ("options", "choices")

TASK_TITLE: Candidates = ("title", "name")
TASK_DESCRIPTION: Candidates = ("description", "details", "summary")
TASK_MINUTES: Candidates = ("estimatedTime", "duration", "time", "minutes", "estimatedMinutes")
TASK_PRIORITY: Candidates = ("priority", "importance")
TASK_FIELDS: Candidates = ("fields", "inputFields")

FIELD_LABEL: Candidates = ("label", "fieldName", "displayName")
FIELD_NAME: Candidates = ("name", "key", "fieldKey")
FIELD_TYPE: Candidates = ("type", "fieldType", "inputType")
FIELD_REQUIRED: Candidates = ("required", "isRequired")
FIELD_ORDER: Candidates = ("order", "fieldOrder", "position")

PROJECT_TITLE: Candidates = ("projectTitle", "projectName")
PROJECT_DESCRIPTION: Candidates = ("projectDescription", "projectSummary")


def _folded_index(obj: JsonObject) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for key in obj.keys():
        index.setdefault(canonical_token(key), key)
    return index


def resolve(obj: JsonObject, candidates: Candidates) -> Optional[JsonValue]:
    """Return the value of the first candidate key that is present and not null.

    Each candidate is tried verbatim first, then case- and separator-insensitively,
    so ``estimated_time`` is accepted for ``estimatedTime``.
    """
    folded: Optional[Dict[str, str]] = None
    for candidate in candidates:
        value = obj.get(candidate)
        if not is_null(value):
            return value
        if folded is None:
            folded = _folded_index(obj)
        actual_key = folded.get(canonical_token(candidate))
        if actual_key is not None and actual_key != candidate:
            value = obj.get(actual_key)
            if not is_null(value):
                return value
    return None


def has_any(obj: JsonObject, candidates: Candidates) -> bool:
    return resolve(obj, candidates) is not None

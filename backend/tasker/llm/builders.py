"""Assemble domain records from resolved, normalized fields."""
from __future__ import annotations

from typing import List, Optional

from tasker.llm import synonyms
from tasker.llm.json_value import JsonArray, JsonObject
from tasker.llm.normalizers import (
    coerce_bool,
    coerce_minutes,
    coerce_order,
    normalize_field_type,
    normalize_options,
    normalize_priority,
    normalize_question_kind,
    normalize_string,
    slugify,
)
from tasker.llm.records import (
    ClarifyingQuestion,
    GeneratedTask,
    InputFieldDefinition,
    QuestionKind,
)


def build_question(obj: JsonObject, index: int = 0) -> Optional[ClarifyingQuestion]:
    text = normalize_string(synonyms.resolve(obj, synonyms.QUESTION_TEXT))
    if text is None:
        return None

    kind = normalize_question_kind(synonyms.resolve(obj, synonyms.QUESTION_KIND))
    options = None
    if kind is QuestionKind.MULTIPLE_CHOICE:
        options = normalize_options(synonyms.resolve(obj, synonyms.QUESTION_OPTIONS))
    return ClarifyingQuestion(question=text, kind=kind, options=options)


def build_field(obj: JsonObject, index: int = 0) -> Optional[InputFieldDefinition]:
    label = normalize_string(synonyms.resolve(obj, synonyms.FIELD_LABEL))
    name = normalize_string(synonyms.resolve(obj, synonyms.FIELD_NAME))
    if label is None and name is None:
        return None
    if name is None:
        name = slugify(label) or f"field_{index + 1}"
    if label is None:
        label = name

    return InputFieldDefinition(
        name=name,
        label=label,
        type=normalize_field_type(synonyms.resolve(obj, synonyms.FIELD_TYPE)),
        required=coerce_bool(synonyms.resolve(obj, synonyms.FIELD_REQUIRED)),
        order=coerce_order(synonyms.resolve(obj, synonyms.FIELD_ORDER), index),
    )


def build_fields(value) -> List[InputFieldDefinition]:
    if not isinstance(value, JsonArray):
        return []
    built: List[InputFieldDefinition] = []
    for index, entry in enumerate(value):
        if isinstance(entry, JsonObject):
            definition = build_field(entry, index)
            if definition is not None:
                built.append(definition)
    return built


def build_task(obj: JsonObject, index: int = 0) -> Optional[GeneratedTask]:
    title = normalize_string(synonyms.resolve(obj, synonyms.TASK_TITLE))
    if title is None:
        return None

    return GeneratedTask(
        title=title,
        description=normalize_string(synonyms.resolve(obj, synonyms.TASK_DESCRIPTION)),
        estimated_minutes=coerce_minutes(synonyms.resolve(obj, synonyms.TASK_MINUTES)),
        priority=normalize_priority(synonyms.resolve(obj, synonyms.TASK_PRIORITY)),
        fields=tuple(build_fields(synonyms.resolve(obj, synonyms.TASK_FIELDS))),
    )

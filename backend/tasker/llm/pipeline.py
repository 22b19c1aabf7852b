"""Multi-strategy decoding of model output into domain records.

The model is asked for one canonical JSON shape but does not reliably honor it.
``DecodePipeline`` tries a fixed sequence of interpretations and returns the
records from the first one that yields anything:

1. ``strict_array``: a JSON array whose entries carry the canonical field names.
2. ``named_container``: an object holding that array under a known container key.
3. ``generic_array``: an array of objects read through the synonym tables;
   malformed entries are dropped one by one.
4. ``single_object``: a lone object that looks like one record.
5. ``nested_arrays``: the first array-valued entry of a top-level object that
   yields records under strategy 3.

Nothing is blended across strategies. If every strategy comes back empty,
``UnrecognizedShapeError`` is raised with the original text attached.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from tasker.llm import synonyms
from tasker.llm.builders import build_question, build_task
from tasker.llm.errors import UnrecognizedShapeError, preview
from tasker.llm.json_value import (
    JsonArray,
    JsonObject,
    JsonValue,
    from_python,
    parse_json,
    to_python,
)
from tasker.llm.normalizers import normalize_string
from tasker.llm.records import ClarifyingQuestion, GeneratedTask, TaskPlan

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", flags=re.DOTALL | re.IGNORECASE)
_JSON_START = re.compile(r"[\[{]")
_MAX_EMBEDDED_ATTEMPTS = 32


class RecordKind(str, Enum):
    QUESTIONS = "questions"
    TASKS = "tasks"


# Strict DTOs gate the canonical shape; records are still built from the parsed entries.
class StrictQuestion(BaseModel):
    question: str
    type: str
    options: Optional[List[str]] = None


class StrictField(BaseModel):
    name: str
    label: str
    type: str
    required: bool = False
    order: Optional[int] = None


class StrictTask(BaseModel):
    title: str
    description: Optional[str] = None
    estimatedTime: Optional[Union[int, float, str]] = None
    priority: Optional[str] = None
    fields: List[StrictField] = Field(default_factory=list)


@dataclass(frozen=True)
class RecordKindConfig:
    """Everything the pipeline needs to know about one record kind."""

    kind: RecordKind
    container_keys: Tuple[str, ...]
    marker_keys: synonyms.Candidates
    strict_adapter: TypeAdapter
    build: Callable[[JsonObject, int], Optional[Any]]


QUESTIONS_CONFIG = RecordKindConfig(
    kind=RecordKind.QUESTIONS,
    container_keys=("questions", "items", "prompts", "data"),
    marker_keys=synonyms.QUESTION_TEXT,
    strict_adapter=TypeAdapter(List[StrictQuestion]),
    build=build_question,
)

TASKS_CONFIG = RecordKindConfig(
    kind=RecordKind.TASKS,
    container_keys=("tasks", "items", "data", "results", "taskList"),
    marker_keys=synonyms.TASK_TITLE,
    strict_adapter=TypeAdapter(List[StrictTask]),
    build=build_task,
)

DEFAULT_KIND_CONFIGS: Mapping[RecordKind, RecordKindConfig] = {
    RecordKind.QUESTIONS: QUESTIONS_CONFIG,
    RecordKind.TASKS: TASKS_CONFIG,
}


@dataclass
class DecodeResult:
    records: List[Any]
    strategy: str
    payload: JsonValue

    @property
    def project_title(self) -> Optional[str]:
        return _project_text(self.payload, synonyms.PROJECT_TITLE)

    @property
    def project_description(self) -> Optional[str]:
        return _project_text(self.payload, synonyms.PROJECT_DESCRIPTION)


def _project_text(payload: JsonValue, candidates: synonyms.Candidates) -> Optional[str]:
    if not isinstance(payload, JsonObject):
        return None
    return normalize_string(synonyms.resolve(payload, candidates))


Strategy = Callable[[str, JsonValue, RecordKindConfig], List[Any]]


def _build_all(config: RecordKindConfig, entries: Sequence[JsonValue]) -> List[Any]:
    records: List[Any] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, JsonObject):
            continue
        record = config.build(entry, index)
        if record is not None:
            records.append(record)
    return records


def strict_array(text: str, value: JsonValue, config: RecordKindConfig) -> List[Any]:
    match value:
        case JsonArray():
            try:
                config.strict_adapter.validate_json(text)
            except ValidationError:
                return []
            return _build_all(config, value.items)
        case _:
            return []


def named_container(text: str, value: JsonValue, config: RecordKindConfig) -> List[Any]:
    match value:
        case JsonObject():
            for key in config.container_keys:
                candidate = value.get(key)
                if not isinstance(candidate, JsonArray):
                    continue
                try:
                    config.strict_adapter.validate_python(to_python(candidate))
                except ValidationError:
                    continue
                records = _build_all(config, candidate.items)
                if records:
                    return records
            return []
        case _:
            return []


def generic_array(text: str, value: JsonValue, config: RecordKindConfig) -> List[Any]:
    match value:
        case JsonArray(items=items):
            return _build_all(config, items)
        case _:
            return []


def single_object(text: str, value: JsonValue, config: RecordKindConfig) -> List[Any]:
    match value:
        case JsonObject() if synonyms.has_any(value, config.marker_keys):
            record = config.build(value, 0)
            return [record] if record is not None else []
        case _:
            return []


def nested_arrays(text: str, value: JsonValue, config: RecordKindConfig) -> List[Any]:
    match value:
        case JsonObject():
            for nested in value.values():
                records = generic_array(text, nested, config)
                if records:
                    return records
            return []
        case _:
            return []


DEFAULT_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("strict_array", strict_array),
    ("named_container", named_container),
    ("generic_array", generic_array),
    ("single_object", single_object),
    ("nested_arrays", nested_arrays),
)


def extract_payload(content: str) -> Optional[Tuple[str, JsonValue]]:
    """Locate the JSON value in model output, tolerating fences and stray prose."""
    text = content.strip()
    if not text:
        return None

    try:
        return text, parse_json(text)
    except ValueError:
        pass

    fenced = _CODE_FENCE.search(text)
    if fenced:
        inner = fenced.group(1).strip()
        try:
            return inner, parse_json(inner)
        except ValueError:
            text = inner

    decoder = json.JSONDecoder()
    for attempt, match in enumerate(_JSON_START.finditer(text)):
        if attempt >= _MAX_EMBEDDED_ATTEMPTS:
            break
        try:
            raw, end = decoder.raw_decode(text, match.start())
            value = from_python(raw)
        except (ValueError, RecursionError):
            continue
        return text[match.start():end], value
    return None


class DecodePipeline:
    """Stateless decoder; safe to share between threads."""

    def __init__(
        self,
        kind_configs: Optional[Mapping[RecordKind, RecordKindConfig]] = None,
        strategies: Sequence[Tuple[str, Strategy]] = DEFAULT_STRATEGIES,
    ) -> None:
        self._kind_configs = dict(kind_configs or DEFAULT_KIND_CONFIGS)
        self._strategies = tuple(strategies)

    @property
    def strategy_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._strategies)

    def decode_detailed(self, content: str, kind: RecordKind) -> DecodeResult:
        config = self._kind_configs[kind]
        extracted = extract_payload(content)
        if extracted is not None:
            text, value = extracted
            for name, strategy in self._strategies:
                records = strategy(text, value, config)
                if records:
                    logger.debug("Decoded %d %s via %s", len(records), kind.value, name)
                    return DecodeResult(
                        records=records,
                        strategy=name,
                        payload=value,
                    )

        logger.warning("Unrecognized %s payload: %s", kind.value, preview(content))
        raise UnrecognizedShapeError(content, record_kind=kind.value)

    def decode(self, content: str, kind: RecordKind) -> List[Any]:
        return self.decode_detailed(content, kind).records

    def decode_questions(self, content: str) -> List[ClarifyingQuestion]:
        return self.decode(content, RecordKind.QUESTIONS)

    def decode_tasks(self, content: str) -> List[GeneratedTask]:
        return self.decode(content, RecordKind.TASKS)

    def decode_task_plan(self, content: str) -> TaskPlan:
        result = self.decode_detailed(content, RecordKind.TASKS)
        return task_plan_from_result(result)


def task_plan_from_result(result: DecodeResult) -> TaskPlan:
    return TaskPlan(
        tasks=tuple(result.records),
        project_title=result.project_title,
        project_description=result.project_description,
    )

"""Domain records produced from model output."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

INT16_MIN = -32768
INT16_MAX = 32767
DEFAULT_ESTIMATED_MINUTES = 30


class QuestionKind(str, Enum):
    FREE_TEXT = "freeText"
    MULTIPLE_CHOICE = "multipleChoice"
    DATE = "date"
    NUMBER = "number"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    CHECKBOX = "checkbox"
    LIST = "list"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class ClarifyingQuestion(_Record):
    question: str = Field(..., min_length=1)
    kind: QuestionKind = QuestionKind.FREE_TEXT
    options: Optional[Tuple[str, ...]] = None

    @field_validator("options")
    @classmethod
    def options_only_for_choices(
        cls, options: Optional[Tuple[str, ...]], info: ValidationInfo
    ) -> Optional[Tuple[str, ...]]:
        if info.data.get("kind") is not QuestionKind.MULTIPLE_CHOICE or not options:
            return None
        return options

    def to_payload(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "type": self.kind.value,
            "options": list(self.options) if self.options is not None else None,
        }


class InputFieldDefinition(_Record):
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    order: int = Field(default=0, ge=0)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "order": self.order,
        }


class GeneratedTask(_Record):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    estimated_minutes: int = Field(default=DEFAULT_ESTIMATED_MINUTES, ge=INT16_MIN, le=INT16_MAX)
    priority: Priority = Priority.MEDIUM
    fields: Tuple[InputFieldDefinition, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "estimatedTime": self.estimated_minutes,
            "priority": self.priority.value,
            "fields": [item.to_payload() for item in self.fields],
        }


class TaskPlan(_Record):
    """Tasks plus the optional project framing the model returned alongside them."""

    tasks: Tuple[GeneratedTask, ...]
    project_title: Optional[str] = None
    project_description: Optional[str] = None

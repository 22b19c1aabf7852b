"""Schemas for the planning API."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from tasker.llm.records import ClarifyingQuestion, GeneratedTask, InputFieldDefinition

GOAL_MIN_LENGTH = 3
GOAL_MAX_LENGTH = 1000


class _GoalRequest(BaseModel):
    goal: str = Field(..., min_length=GOAL_MIN_LENGTH, max_length=GOAL_MAX_LENGTH)

    @field_validator("goal")
    @classmethod
    def trim_and_validate_goal(cls, value: str) -> str:
        cleaned = value.strip()
        if len(cleaned) < GOAL_MIN_LENGTH:
            raise ValueError(f"goal must be at least {GOAL_MIN_LENGTH} characters after trimming")
        return cleaned


class QuestionsRequest(_GoalRequest):
    pass


class QuestionPayload(BaseModel):
    question: str
    type: Literal["freeText", "multipleChoice", "date", "number"]
    options: Optional[List[str]] = None

    @classmethod
    def from_record(cls, record: ClarifyingQuestion) -> "QuestionPayload":
        return cls.model_validate(record.to_payload())


class QuestionsResponse(BaseModel):
    questions: List[QuestionPayload]
    request_id: str


class TasksFromAnswersRequest(_GoalRequest):
    answers: Dict[str, str] = Field(default_factory=dict)


class FieldPayload(BaseModel):
    name: str
    label: str
    type: Literal["text", "number", "currency", "date", "checkbox", "list"]
    required: bool
    order: int

    @classmethod
    def from_record(cls, record: InputFieldDefinition) -> "FieldPayload":
        return cls.model_validate(record.to_payload())


class TaskPayload(BaseModel):
    title: str
    description: Optional[str]
    estimated_minutes: int
    priority: Literal["high", "medium", "low"]
    fields: List[FieldPayload]

    @classmethod
    def from_record(cls, record: GeneratedTask) -> "TaskPayload":
        return cls(
            title=record.title,
            description=record.description,
            estimated_minutes=record.estimated_minutes,
            priority=record.priority.value,
            fields=[FieldPayload.from_record(item) for item in record.fields],
        )


class PlanResponse(BaseModel):
    project_id: UUID
    project_title: str
    project_description: Optional[str]
    category: str
    tasks: List[TaskPayload]
    request_id: str


class QuickTasksRequest(_GoalRequest):
    time_available_hours: int = Field(default=2, ge=1, le=168)
    category: str = Field(default="general", min_length=1, max_length=50)
    priority: Literal["high", "medium", "low"] = "medium"


class QuickTasksResponse(BaseModel):
    tasks: List[TaskPayload]
    request_id: str

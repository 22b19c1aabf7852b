"""Schemas for stored projects."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProjectSummary(BaseModel):
    id: UUID
    title: str
    description: Optional[str]
    goal: str
    category: str
    status: str
    task_count: int
    created_at: datetime


class TaskFieldSummary(BaseModel):
    id: UUID
    name: str
    label: str
    type: str
    required: bool
    order: int
    value: Optional[str]


class ProjectTaskSummary(BaseModel):
    id: UUID
    title: str
    description: Optional[str]
    estimated_minutes: int
    priority: str
    position: int
    status: str
    fields: List[TaskFieldSummary]


class ProjectDetail(ProjectSummary):
    answers: Dict[str, str]
    tasks: List[ProjectTaskSummary]
    request_id: str


class TaskStatusUpdateRequest(BaseModel):
    status: Literal["todo", "done"]


class FieldValueUpdateRequest(BaseModel):
    value: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("value")
    @classmethod
    def blank_value_clears(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

"""Schemas for runtime settings."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class SettingsResponse(BaseModel):
    model: str
    base_url: str
    task_style: str
    question_count: int
    json_mode: bool
    api_key_configured: bool
    request_id: str


class SettingsUpdateRequest(BaseModel):
    model: Optional[str] = Field(default=None, max_length=100)
    task_style: Optional[Literal["brief", "detailed"]] = None

    @field_validator("model")
    @classmethod
    def strip_model(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("model must not be blank")
        return cleaned


class ApiKeyUpdateRequest(BaseModel):
    api_key: str = Field(..., min_length=1, max_length=500)

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("api_key must not be blank")
        return cleaned


class ApiKeyStatusResponse(BaseModel):
    api_key_configured: bool
    request_id: str

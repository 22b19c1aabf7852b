"""Runtime settings API routes."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from tasker.api.schemas.settings import (
    ApiKeyStatusResponse,
    ApiKeyUpdateRequest,
    SettingsResponse,
    SettingsUpdateRequest,
)
from tasker.core.config import get_settings
from tasker.services.credentials import OPENAI_API_KEY_SECRET, CredentialStore, get_credential_store
from tasker.services.preferences import PreferenceStore, get_preference_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _has_key(credentials: CredentialStore) -> bool:
    return bool((credentials.get_secret(OPENAI_API_KEY_SECRET) or "").strip())


def _settings_response(
    http_request: Request,
    credentials: CredentialStore,
    preferences: PreferenceStore,
) -> SettingsResponse:
    app_settings = get_settings()
    current = preferences.current()
    return SettingsResponse(
        model=current.model,
        base_url=app_settings.openai_base_url,
        task_style=current.task_style,
        question_count=app_settings.question_count,
        json_mode=app_settings.openai_json_mode,
        api_key_configured=_has_key(credentials),
        request_id=getattr(http_request.state, "request_id", None) or "",
    )


@router.get("", response_model=SettingsResponse)
def read_settings(
    http_request: Request,
    credentials: CredentialStore = Depends(get_credential_store),
    preferences: PreferenceStore = Depends(get_preference_store),
) -> SettingsResponse:
    """Expose model settings; the API key itself is never returned."""
    return _settings_response(http_request, credentials, preferences)


@router.put("", response_model=SettingsResponse)
def update_settings(
    payload: SettingsUpdateRequest,
    http_request: Request,
    credentials: CredentialStore = Depends(get_credential_store),
    preferences: PreferenceStore = Depends(get_preference_store),
) -> SettingsResponse:
    """Switch the model or task style used by later planning calls."""
    updated = preferences.update(model=payload.model, task_style=payload.task_style)
    logger.info("Planner preferences updated: model=%s task_style=%s", updated.model, updated.task_style)
    return _settings_response(http_request, credentials, preferences)


@router.put("/api-key", response_model=ApiKeyStatusResponse)
def update_api_key(
    payload: ApiKeyUpdateRequest,
    http_request: Request,
    credentials: CredentialStore = Depends(get_credential_store),
) -> ApiKeyStatusResponse:
    credentials.set_secret(OPENAI_API_KEY_SECRET, payload.api_key)
    logger.info("OpenAI API key updated")
    return ApiKeyStatusResponse(
        api_key_configured=True,
        request_id=getattr(http_request.state, "request_id", None) or "",
    )


@router.delete("/api-key", response_model=ApiKeyStatusResponse)
def delete_api_key(
    http_request: Request,
    credentials: CredentialStore = Depends(get_credential_store),
) -> ApiKeyStatusResponse:
    credentials.delete_secret(OPENAI_API_KEY_SECRET)
    logger.info("OpenAI API key removed")
    return ApiKeyStatusResponse(
        api_key_configured=_has_key(credentials),
        request_id=getattr(http_request.state, "request_id", None) or "",
    )

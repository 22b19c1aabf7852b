"""FastAPI dependencies for the planning flow."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from tasker.core.config import get_settings
from tasker.db.deps import get_db
from tasker.llm.transport import OpenAITransport
from tasker.services.credentials import CredentialStore, get_credential_store
from tasker.services.persistence import SqlAlchemyTaskSink, TaskSink
from tasker.services.planner import PlannerConfig, TaskPlanner
from tasker.services.preferences import PreferenceStore, get_preference_store


def get_planner(
    credentials: CredentialStore = Depends(get_credential_store),
    preferences: PreferenceStore = Depends(get_preference_store),
) -> TaskPlanner:
    app_settings = get_settings()
    transport = OpenAITransport(
        timeout_s=app_settings.openai_timeout_s,
        max_retries=app_settings.openai_max_retries,
    )
    config = preferences.apply(PlannerConfig.from_settings(app_settings))
    return TaskPlanner(config, credentials, transport)


def get_task_sink(db: Session = Depends(get_db)) -> TaskSink:
    return SqlAlchemyTaskSink(db)

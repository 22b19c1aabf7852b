"""Runtime overrides for the model and task style chosen through the settings API."""
from __future__ import annotations

from dataclasses import dataclass, replace
from functools import lru_cache
from threading import Lock
from typing import Optional

from tasker.core.config import Settings, get_settings
from tasker.services.planner import PlannerConfig

TASK_STYLES = ("brief", "detailed")


@dataclass(frozen=True)
class PlannerPreferences:
    model: str
    task_style: str


class PreferenceStore:
    """Holds the user's choices on top of the environment defaults."""

    def __init__(self, defaults: PlannerPreferences) -> None:
        self._lock = Lock()
        self._current = defaults

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "PreferenceStore":
        return cls(PlannerPreferences(model=app_settings.openai_model, task_style=app_settings.task_style))

    def current(self) -> PlannerPreferences:
        with self._lock:
            return self._current

    def update(self, *, model: Optional[str] = None, task_style: Optional[str] = None) -> PlannerPreferences:
        if task_style is not None and task_style not in TASK_STYLES:
            raise ValueError(f"task_style must be one of {', '.join(TASK_STYLES)}")
        with self._lock:
            self._current = replace(
                self._current,
                model=model if model is not None else self._current.model,
                task_style=task_style if task_style is not None else self._current.task_style,
            )
            return self._current

    def apply(self, config: PlannerConfig) -> PlannerConfig:
        preferences = self.current()
        return replace(config, model=preferences.model, task_style=preferences.task_style)


@lru_cache
def get_preference_store() -> PreferenceStore:
    return PreferenceStore.from_settings(get_settings())

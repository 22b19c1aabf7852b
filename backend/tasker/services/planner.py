"""Question and task generation against the model provider."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Event
from time import perf_counter
from typing import List, Mapping, Optional

from tasker.core.config import Settings
from tasker.core.context import get_request_id
from tasker.llm.envelope import unwrap_envelope
from tasker.llm.errors import (
    MissingCredentialError,
    RequestCancelledError,
    UnrecognizedShapeError,
    UpstreamError,
)
from tasker.llm.pipeline import DecodePipeline, DecodeResult, RecordKind, task_plan_from_result
from tasker.llm.prompts import (
    ChatRequest,
    compose_questions_request,
    compose_quick_tasks_request,
    compose_tasks_request,
)
from tasker.llm.records import ClarifyingQuestion, GeneratedTask, TaskPlan
from tasker.llm.transport import ChatTransport
from tasker.observability.metrics import log_metric
from tasker.observability.tracing import annotate, trace
from tasker.services.credentials import OPENAI_API_KEY_SECRET, CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerConfig:
    endpoint: str
    model: str
    temperature: float = 0.7
    task_style: str = "detailed"
    question_count: int = 5
    json_mode: bool = True
    credential_name: str = OPENAI_API_KEY_SECRET

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "PlannerConfig":
        return cls(
            endpoint=app_settings.openai_base_url,
            model=app_settings.openai_model,
            temperature=app_settings.openai_temperature,
            task_style=app_settings.task_style,
            question_count=app_settings.question_count,
            json_mode=app_settings.openai_json_mode,
        )


class CancellationToken:
    """Cooperative cancellation flag checked between planner steps."""

    def __init__(self) -> None:
        self._event = Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError()


class TaskPlanner:
    """Composes a request, sends it, and decodes the reply into records."""

    def __init__(
        self,
        config: PlannerConfig,
        credentials: CredentialStore,
        transport: ChatTransport,
        pipeline: Optional[DecodePipeline] = None,
    ) -> None:
        self.config = config
        self.credentials = credentials
        self.transport = transport
        self.pipeline = pipeline or DecodePipeline()

    def generate_questions(
        self,
        goal: str,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[ClarifyingQuestion]:
        _require_goal(goal)
        request = compose_questions_request(
            goal,
            model=self.config.model,
            temperature=self.config.temperature,
            question_count=self.config.question_count,
            json_mode=self.config.json_mode,
        )
        result = self._run("questions", request, RecordKind.QUESTIONS, cancel_token)
        return list(result.records)

    def generate_tasks_from_answers(
        self,
        goal: str,
        answers: Mapping[str, str],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> TaskPlan:
        _require_goal(goal)
        request = compose_tasks_request(
            goal,
            answers,
            model=self.config.model,
            temperature=self.config.temperature,
            json_mode=self.config.json_mode,
        )
        result = self._run("tasks", request, RecordKind.TASKS, cancel_token)
        return task_plan_from_result(result)

    def generate_tasks(
        self,
        goal: str,
        *,
        time_available_hours: int,
        category: str,
        priority: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[GeneratedTask]:
        _require_goal(goal)
        request = compose_quick_tasks_request(
            goal,
            time_available_hours=time_available_hours,
            category=category,
            priority=priority,
            task_style=self.config.task_style,
            model=self.config.model,
            temperature=self.config.temperature,
            json_mode=self.config.json_mode,
        )
        result = self._run("quick_tasks", request, RecordKind.TASKS, cancel_token)
        return list(result.records)

    def _run(
        self,
        operation: str,
        request: ChatRequest,
        kind: RecordKind,
        cancel_token: Optional[CancellationToken],
    ) -> DecodeResult:
        token = cancel_token or CancellationToken()
        token.raise_if_cancelled()

        api_key = self.credentials.get_secret(self.config.credential_name)
        if not api_key or not api_key.strip():
            raise MissingCredentialError(self.config.credential_name)

        metadata = {"operation": operation, "model": self.config.model}
        with trace(f"llm.{operation}", metadata=metadata, request_id=get_request_id()) as span:
            started = perf_counter()
            response = self.transport.send(request, endpoint=self.config.endpoint, api_key=api_key)
            latency_ms = int((perf_counter() - started) * 1000)
            token.raise_if_cancelled()

            if not response.ok:
                logger.warning("%s request failed with status %s", operation, response.status_code)
                log_metric("llm.upstream_error", 1, {"operation": operation, "status": response.status_code})
                raise UpstreamError(response.status_code, response.body_snippet())

            content = unwrap_envelope(response.body)
            try:
                result = self.pipeline.decode_detailed(content, kind)
            except UnrecognizedShapeError:
                log_metric("llm.decode.unrecognized", 1, {"operation": operation})
                raise

            annotate(span, strategy=result.strategy, records=len(result.records), latency_ms=latency_ms)

        log_metric("llm.decode.records", len(result.records), {"operation": operation, "strategy": result.strategy})
        logger.info(
            "%s: decoded %d %s via %s in %dms",
            operation,
            len(result.records),
            kind.value,
            result.strategy,
            latency_ms,
        )
        return result


def _require_goal(goal: str) -> None:
    if not goal or not goal.strip():
        raise ValueError("goal must not be empty")

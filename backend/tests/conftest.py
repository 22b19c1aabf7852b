"""Shared fixtures: isolated settings plus fake model-provider plumbing."""
from __future__ import annotations

import json
import os
from typing import Any, Callable, List, Optional, Tuple

# Must run before any tasker module reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPIK_ENABLED"] = "false"
os.environ.pop("OPENAI_API_KEY", None)

import pytest

from tasker.llm.prompts import ChatRequest
from tasker.llm.transport import TransportResponse
from tasker.services.credentials import OPENAI_API_KEY_SECRET, InMemoryCredentialStore
from tasker.services.planner import PlannerConfig, TaskPlanner


def chat_body(content: Optional[str], finish_reason: str = "stop") -> bytes:
    """Wrap content in a chat-completion envelope as the provider would."""
    return json.dumps(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": finish_reason,
                }
            ],
        }
    ).encode("utf-8")


class FakeTransport:
    def __init__(self, body: bytes = b"", status_code: int = 200, on_send: Optional[Callable[[], None]] = None):
        self.body = body
        self.status_code = status_code
        self.on_send = on_send
        self.calls: List[Tuple[ChatRequest, str, str]] = []

    def send(self, request: ChatRequest, *, endpoint: str, api_key: str) -> TransportResponse:
        self.calls.append((request, endpoint, api_key))
        if self.on_send:
            self.on_send()
        return TransportResponse(status_code=self.status_code, body=self.body)


@pytest.fixture()
def make_planner() -> Callable[..., Tuple[TaskPlanner, FakeTransport]]:
    def _factory(
        content: Any = None,
        *,
        status_code: int = 200,
        body: Optional[bytes] = None,
        api_key: Optional[str] = "sk-test",
        on_send: Optional[Callable[[], None]] = None,
    ) -> Tuple[TaskPlanner, FakeTransport]:
        if body is None:
            text = content if isinstance(content, str) or content is None else json.dumps(content)
            body = chat_body(text)
        transport = FakeTransport(body=body, status_code=status_code, on_send=on_send)
        credentials = InMemoryCredentialStore({OPENAI_API_KEY_SECRET: api_key} if api_key else None)
        config = PlannerConfig(endpoint="https://api.example.test/v1", model="gpt-test")
        return TaskPlanner(config, credentials, transport), transport

    return _factory

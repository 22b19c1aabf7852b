"""Network transport for chat-completion requests."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import openai

from tasker.llm.errors import TransportError
from tasker.llm.prompts import ChatRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def body_snippet(self, limit: int = 500) -> str:
        return self.body[:limit].decode("utf-8", errors="replace")


class ChatTransport(Protocol):
    """Sends a request and returns the raw status and body.

    Network failures raise ``TransportError``; non-2xx statuses are returned, not raised.
    """

    def send(self, request: ChatRequest, *, endpoint: str, api_key: str) -> TransportResponse:
        ...


class OpenAITransport:
    """Transport backed by the OpenAI SDK; the body is handed back unparsed."""

    def __init__(self, *, timeout_s: float = 60.0, max_retries: int = 2) -> None:
        self.timeout_s = timeout_s
        self.max_retries = max_retries

    def send(self, request: ChatRequest, *, endpoint: str, api_key: str) -> TransportResponse:
        with openai.OpenAI(
            api_key=api_key,
            base_url=endpoint,
            timeout=self.timeout_s,
            max_retries=self.max_retries,
        ) as client:
            try:
                raw = client.chat.completions.with_raw_response.create(**request.to_payload())
            except openai.APIStatusError as exc:
                logger.info("Model provider returned status %s", exc.status_code)
                return TransportResponse(status_code=exc.status_code, body=exc.response.content)
            except openai.APIConnectionError as exc:
                raise TransportError(str(exc) or type(exc).__name__, cause=exc) from exc

        return TransportResponse(status_code=raw.status_code, body=raw.http_response.content)

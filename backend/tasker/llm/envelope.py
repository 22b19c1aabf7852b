"""Unwrap the chat-completion envelope returned by the model provider."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from tasker.llm.errors import EmptyPayloadError, NoContentError

logger = logging.getLogger(__name__)


class EnvelopeMessage(BaseModel):
    role: Optional[str] = None
    content: Any = None


class EnvelopeChoice(BaseModel):
    index: Optional[int] = None
    message: Optional[EnvelopeMessage] = None
    finish_reason: Optional[str] = None


class ChatEnvelope(BaseModel):
    """Only `choices[0].message.content` is consumed; everything else is ignored."""

    choices: List[EnvelopeChoice]


def unwrap_envelope(body: bytes | str) -> str:
    """Return the first choice's message content from a transport response body."""
    if not body or not body.strip():
        raise EmptyPayloadError()

    try:
        envelope = ChatEnvelope.model_validate_json(body)
    except ValidationError as exc:
        logger.warning("Response body is not a chat-completion envelope: %s", exc.errors()[:1])
        raise EmptyPayloadError("Invalid response from API") from exc

    if not envelope.choices:
        raise NoContentError()

    message = envelope.choices[0].message
    if message is None or not isinstance(message.content, str):
        raise NoContentError()

    if envelope.choices[0].finish_reason == "length":
        logger.info("Completion was truncated at the token limit; decoding what arrived.")
    return message.content

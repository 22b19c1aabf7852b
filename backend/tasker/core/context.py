"""Per-request context utilities."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the current request id if available."""
    return request_id_ctx_var.get()


def new_request_id() -> str:
    return str(uuid4())


@contextmanager
def bind_request_id(request_id: str | None) -> Iterator[str]:
    """Bind a request id for the duration of the block, generating one if missing."""
    bound = request_id or new_request_id()
    token = request_id_ctx_var.set(bound)
    try:
        yield bound
    finally:
        request_id_ctx_var.reset(token)

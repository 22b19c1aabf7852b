"""Error taxonomy for talking to the model provider and decoding its output."""
from __future__ import annotations

RAW_TEXT_PREVIEW_CHARS = 200


class PlannerError(RuntimeError):
    """Base error for every failure surfaced by the planning flow."""

    kind = "planner_error"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingCredentialError(PlannerError):
    kind = "missing_credential"

    def __init__(self, secret_name: str) -> None:
        super().__init__("OpenAI API key not configured. Add your API key in settings.")
        self.secret_name = secret_name


class TransportError(PlannerError):
    """Network-level failure (DNS, timeout, connection reset)."""

    kind = "transport_error"
    retryable = True

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(f"Network error: {message}")
        self.cause = cause


class UpstreamError(PlannerError):
    kind = "upstream_error"

    def __init__(self, status_code: int, body_snippet: str = "") -> None:
        super().__init__(f"API error: status code {status_code}")
        self.status_code = status_code
        self.body_snippet = body_snippet
        self.retryable = status_code == 429 or status_code >= 500


class EmptyPayloadError(PlannerError):
    kind = "empty_payload"
    retryable = True

    def __init__(self, detail: str = "No data received from API") -> None:
        super().__init__(detail)


class NoContentError(PlannerError):
    kind = "no_content"
    retryable = True

    def __init__(self) -> None:
        super().__init__("No content in API response")


class UnrecognizedShapeError(PlannerError):
    """None of the decode strategies produced a record; keeps the raw text."""

    kind = "unrecognized_shape"
    retryable = True

    def __init__(self, raw_text: str, record_kind: str = "records") -> None:
        super().__init__(f"Unexpected {record_kind} JSON format: {preview(raw_text)}")
        self.raw_text = raw_text
        self.record_kind = record_kind


class RequestCancelledError(PlannerError):
    kind = "cancelled"

    def __init__(self) -> None:
        super().__init__("Request was cancelled")


def preview(text: str, limit: int = RAW_TEXT_PREVIEW_CHARS) -> str:
    snippet = text.strip().replace("\n", " ")
    return (snippet[:limit] + "...") if len(snippet) > limit else snippet

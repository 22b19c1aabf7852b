"""Tests ensuring observability wiring is safe by default."""
from __future__ import annotations

import importlib

from tasker.observability import client as client_module
from tasker.observability import tracing


def test_app_import_succeeds_when_opik_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("OPIK_ENABLED", "false")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import tasker.core.config as core_config
    import tasker.main as main_module

    importlib.reload(core_config)
    importlib.reload(client_module)
    reloaded_app = importlib.reload(main_module)

    assert hasattr(reloaded_app, "app")


def test_trace_is_noop_without_client(monkeypatch) -> None:
    monkeypatch.setattr(tracing, "get_opik_client", lambda: None)

    with tracing.trace("llm.questions", metadata={"operation": "questions"}) as span:
        assert span is None
    tracing.annotate(span, strategy="strict_array")


def test_init_opik_skips_without_api_key(monkeypatch) -> None:
    monkeypatch.setattr(client_module.settings, "opik_enabled", True)
    monkeypatch.setattr(client_module.settings, "opik_api_key", None)
    client_module.reset_opik_client()
    try:
        assert client_module.init_opik() is None
    finally:
        client_module.reset_opik_client()


class _RecordingTrace:
    def __init__(self, metadata):
        self.metadata = metadata or {}
        self.updates = []
        self.ended = False

    def update(self, **kwargs):
        self.updates.append(kwargs)

    def end(self):
        self.ended = True


class _RecordingClient:
    def __init__(self):
        self.traces = []

    def trace(self, name, metadata=None):
        recorded = _RecordingTrace(metadata)
        self.traces.append(recorded)
        return recorded


def test_trace_records_error_and_request_id(monkeypatch) -> None:
    recording = _RecordingClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: recording)

    try:
        with tracing.trace("llm.tasks", metadata={"operation": "tasks"}, request_id="req-1"):
            raise ValueError("boom")
    except ValueError:
        pass

    opik_trace = recording.traces[0]
    assert opik_trace.metadata["request_id"] == "req-1"
    assert opik_trace.updates[0]["error_info"]["type"] == "ValueError"
    assert opik_trace.ended is True

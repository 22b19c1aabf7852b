"""Readiness probe and request-id propagation."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasker.observability import tracing


@pytest.fixture()
def client() -> TestClient:
    from tasker.main import app

    return TestClient(app)


def test_health_endpoint_returns_ok(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers.get("X-Request-Id")


def test_request_id_echoed_from_header(client) -> None:
    response = client.get("/health", headers={"X-Request-Id": "planner-request-42"})

    assert response.headers.get("X-Request-Id") == "planner-request-42"


def test_each_request_gets_its_own_id(client) -> None:
    first = client.get("/health").headers["X-Request-Id"]
    second = client.get("/health").headers["X-Request-Id"]

    assert first != second


def test_unknown_route_still_carries_request_id(client) -> None:
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.headers.get("X-Request-Id")


def test_health_trace_carries_request_id(client, monkeypatch) -> None:
    seen = []

    class _Trace:
        def end(self) -> None:
            pass

    class _Client:
        def trace(self, name, metadata=None):
            seen.append((name, metadata))
            return _Trace()

    monkeypatch.setattr(tracing, "get_opik_client", lambda: _Client())

    response = client.get("/health", headers={"X-Request-Id": "health-1"})

    assert response.status_code == 200
    assert seen == [("http.health_check", {"route": "/health", "request_id": "health-1"})]

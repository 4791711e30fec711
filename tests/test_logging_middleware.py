# tests/test_logging_middleware.py
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from site_api.middleware.logging import LoggingMiddleware, filter_headers, resolve_request_id


def test_request_id_prefers_explicit_header():
    assert resolve_request_id({"x-request-id": "abc", "x-correlation-id": "def"}) == "abc"
    assert resolve_request_id({"x-correlation-id": "def"}) == "def"


def test_request_id_from_traceparent():
    traceparent = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"
    assert resolve_request_id({"traceparent": traceparent}) == "4bf92f3577b34da6a3ce929d0e0e4736"


def test_request_id_generated_when_absent():
    first = resolve_request_id({})
    second = resolve_request_id({})
    assert first and second and first != second


def test_sensitive_headers_redacted():
    out = filter_headers({"Authorization": "Bearer x", "Cookie": "a=b", "User-Agent": "pytest"})
    assert out == {"Authorization": "[REDACTED]", "Cookie": "[REDACTED]", "User-Agent": "pytest"}


def _echo_app():
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)

    @app.get("/echo")
    async def echo():
        return structlog.contextvars.get_contextvars()

    return app


def test_request_id_bound_to_log_context():
    client = TestClient(_echo_app())

    response = client.get("/echo", headers={"X-Request-ID": "req-42"})

    assert response.json()["request_id"] == "req-42"
    assert response.headers["X-Request-ID"] == "req-42"


def test_each_request_gets_its_own_id():
    client = TestClient(_echo_app())

    first = client.get("/echo")
    second = client.get("/echo")

    assert first.json()["request_id"] == first.headers["X-Request-ID"]
    assert second.json()["request_id"] == second.headers["X-Request-ID"]
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

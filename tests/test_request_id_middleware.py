from __future__ import annotations

from fastapi.testclient import TestClient

from ratekey.main import app


client = TestClient(app)


def test_preserves_incoming_request_id_header():
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing():
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert isinstance(generated, str)

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None


def test_request_id_is_echoed_in_error_body():
    resp = client.get(
        "/v1/rate-limit/key",
        params={"category": "not-a-category"},
        headers={"X-Request-ID": "req-err-1"},
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["request_id"] == "req-err-1"
    assert resp.headers.get("X-Request-ID") == "req-err-1"


def test_unhandled_exception_keeps_request_id():
    from ratekey.core.app_factory import create_app

    failing_app = create_app()

    @failing_app.get("/boom")
    def boom():
        raise RuntimeError("redis connection string leaked")

    failing_client = TestClient(failing_app, raise_server_exceptions=False)
    resp = failing_client.get("/boom", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "internal_server_error"
    assert body["error"]["request_id"] == "req-500"
    assert resp.headers.get("X-Request-ID") == "req-500"
    assert "redis" not in resp.text

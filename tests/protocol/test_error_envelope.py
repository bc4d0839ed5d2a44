from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from chessrules.protocol.http.app import create_app
from chessrules.protocol.http.error import ApiError


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    body = r.json()
    assert "error" in body
    err = body["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_api_error_keeps_explicit_code() -> None:
    app: FastAPI = create_app()

    @app.get("/conflict")
    def conflict():  # type: ignore[no-redef]
        raise ApiError(409, "busy", code="too_many_games")

    client = TestClient(app)
    r = client.get("/conflict", headers={"x-request-id": "rid-1"})
    assert r.status_code == 409
    err = r.json()["error"]
    assert err["code"] == "too_many_games"
    assert err["request_id"] == "rid-1"


def test_unknown_route_uses_envelope() -> None:
    client = TestClient(create_app())
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"

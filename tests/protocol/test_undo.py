from __future__ import annotations

from fastapi.testclient import TestClient

from chessrules.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def test_undo_without_moves_returns_400() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    r_undo = client.post(f"/api/games/{game_id}/undo")
    assert r_undo.status_code == 400
    body = r_undo.json()
    assert body["error"]["code"] == "nothing_to_undo"
    assert "no moves" in body["error"]["message"].lower()


def test_undo_restores_prior_state() -> None:
    client = _client()
    start = client.post("/api/games").json()
    game_id = start["game_id"]

    move = {"from_row": 6, "from_col": 4, "to_row": 4, "to_col": 4}
    r_move = client.post(f"/api/games/{game_id}/move", json=move)
    assert r_move.status_code == 200
    assert r_move.json()["current_player"] == "black"

    r_undo = client.post(f"/api/games/{game_id}/undo")
    assert r_undo.status_code == 200
    state = r_undo.json()
    assert state == start
    assert state["last_move"] is None
    assert state["move_history"] == []


def test_undo_unknown_game_404() -> None:
    r = _client().post("/api/games/missing/undo")
    assert r.status_code == 404

from __future__ import annotations

from typing import Any, Dict

from fastapi.testclient import TestClient

from chessrules.protocol.http.app import create_app
from chessrules.protocol.http.config import ServerSettings


def _client(**settings: Any) -> TestClient:
    return TestClient(create_app(ServerSettings(**settings)))


def _move(fr: int, fc: int, tr: int, tc: int, **extra: Any) -> Dict[str, Any]:
    return {"from_row": fr, "from_col": fc, "to_row": tr, "to_col": tc, **extra}


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    game_id = body["game_id"]
    assert isinstance(game_id, str) and game_id
    assert body["board"][7] == "RNBQKBNR"
    assert body["current_player"] == "white"
    assert body["variant"] is False and body["position_id"] is None
    assert len(body["legal_moves"]) == 20
    assert body["castling"]["white"] == {"kingside": True, "queenside": True}

    r2 = client.get(f"/api/games/{game_id}/state")
    assert r2.status_code == 200
    assert r2.json() == body


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_legal_move_updates_state() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    r = client.post(f"/api/games/{game_id}/move", json=_move(6, 4, 4, 4))

    assert r.status_code == 200
    state = r.json()
    assert state["current_player"] == "black"
    assert state["en_passant"] == "e3"
    assert state["board"][4] == "....P..."
    assert state["last_move"] == {
        "from": "e2",
        "to": "e4",
        "piece": "pawn",
        "captured": None,
        "kind": "normal",
        "notation": "White Pawn moves to e4",
        "move_number": 1,
        "player": "white",
    }
    assert state["move_history"] == [state["last_move"]]


def test_illegal_move_rejected() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    r = client.post(f"/api/games/{game_id}/move", json=_move(6, 4, 3, 4))

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "illegal_move"
    state = client.get(f"/api/games/{game_id}/state").json()
    assert state["current_player"] == "white"
    assert state["move_history"] == []


def test_move_validation_errors() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    r = client.post(f"/api/games/{game_id}/move", json=_move(9, 4, 4, 4))
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any("from_row" in fe["field"] for fe in err["field_errors"])

    r = client.post(f"/api/games/{game_id}/move", json=_move(6, 4, 4, 4, promotion="king"))
    assert r.status_code == 422


def test_variant_game_creation() -> None:
    client = _client()
    r = client.post("/api/games", json={"variant": 0})
    assert r.status_code == 200
    body = r.json()
    assert body["variant"] is True and body["position_id"] == 0
    assert body["board"][7] == "BBQNNRKR"

    r = client.post("/api/games", json={"variant": "random"})
    assert r.status_code == 200
    assert r.json()["variant"] is True

    assert client.post("/api/games", json={"variant": 960}).status_code == 422
    assert client.post("/api/games", json={"variant": "chaos"}).status_code == 422


def test_reset_endpoint() -> None:
    client = _client()
    game_id = client.post("/api/games", json={"variant": 0}).json()["game_id"]
    client.post(f"/api/games/{game_id}/move", json=_move(6, 0, 5, 0))

    # Without a body the game's own mode is kept
    r = client.post(f"/api/games/{game_id}/reset")
    assert r.status_code == 200
    assert r.json()["position_id"] == 0
    assert r.json()["move_history"] == []

    r = client.post(f"/api/games/{game_id}/reset", json={"variant": "standard"})
    assert r.json()["board"][7] == "RNBQKBNR"
    assert r.json()["variant"] is False


def test_delete_game() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    assert client.delete(f"/api/games/{game_id}").status_code == 204
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_session_limit() -> None:
    client = _client(max_games=1)
    assert client.post("/api/games").status_code == 200
    r = client.post("/api/games")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "too_many_games"


def test_sessions_are_isolated() -> None:
    client = _client()
    a = client.post("/api/games").json()["game_id"]
    b = client.post("/api/games").json()["game_id"]
    client.post(f"/api/games/{a}/move", json=_move(6, 4, 4, 4))
    assert client.get(f"/api/games/{b}/state").json()["move_history"] == []


def test_fools_mate_over_http() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    for m in (_move(6, 5, 5, 5), _move(1, 4, 3, 4), _move(6, 6, 4, 6)):
        assert client.post(f"/api/games/{game_id}/move", json=m).status_code == 200

    r = client.post(f"/api/games/{game_id}/move", json=_move(0, 3, 4, 7))

    state = r.json()
    assert state["checkmate"] is True
    assert state["game_over"] is True
    assert state["legal_moves"] == []
    assert state["last_move"]["notation"] == "Black Queen moves to h4 - Checkmate!"
    r = client.post(f"/api/games/{game_id}/move", json=_move(6, 0, 5, 0))
    assert r.status_code == 400

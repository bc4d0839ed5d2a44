from __future__ import annotations

import pytest
from pydantic import ValidationError

from chessrules.cli.main import parse_settings
from chessrules.protocol.http.config import ServerSettings


def test_defaults() -> None:
    s = ServerSettings.from_env({})
    assert s.host == "127.0.0.1"
    assert s.port == 8000
    assert s.log_level == "info"
    assert s.max_games == 1000


def test_from_env_mapping() -> None:
    s = ServerSettings.from_env(
        {"CHESSRULES_PORT": "9001", "CHESSRULES_MAX_GAMES": "5", "CHESSRULES_HOST": ""}
    )
    assert s.port == 9001
    assert s.max_games == 5
    assert s.host == "127.0.0.1"


def test_invalid_env_value_rejected() -> None:
    with pytest.raises(ValidationError):
        ServerSettings.from_env({"CHESSRULES_PORT": "0"})


def test_flags_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESSRULES_PORT", "9100")
    monkeypatch.setenv("CHESSRULES_LOG_LEVEL", "debug")

    s = parse_settings(["--host", "0.0.0.0"])
    assert s.host == "0.0.0.0"
    assert s.port == 9100
    assert s.log_level == "debug"

    s = parse_settings(["--port", "8123", "--max-games", "2"])
    assert s.port == 8123
    assert s.max_games == 2

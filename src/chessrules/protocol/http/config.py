from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field


ENV_PREFIX = "CHESSRULES_"


class ServerSettings(BaseModel):
    """Runtime settings for the HTTP service and its launcher."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "info"
    max_games: int = Field(default=1000, ge=1, description="Concurrent game sessions kept")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        """Read ``CHESSRULES_<FIELD>`` variables; unset ones keep defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)

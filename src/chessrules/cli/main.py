from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from ..protocol.http.app import create_app
from ..protocol.http.config import ServerSettings


def parse_settings(argv: Optional[List[str]] = None) -> ServerSettings:
    """Build settings from environment variables, overridden by flags."""
    defaults = ServerSettings.from_env()
    parser = argparse.ArgumentParser(description="Serve the chess rules engine over HTTP")
    parser.add_argument(
        "--host", default=defaults.host, help=f"Bind address (default: {defaults.host})"
    )
    parser.add_argument(
        "--port", type=int, default=defaults.port, help=f"Port (default: {defaults.port})"
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["critical", "error", "warning", "info", "debug"],
        help=f"Log level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--max-games",
        type=int,
        default=defaults.max_games,
        help=f"Maximum concurrent games (default: {defaults.max_games})",
    )
    args = parser.parse_args(argv)
    return ServerSettings(
        host=args.host, port=args.port, log_level=args.log_level, max_games=args.max_games
    )


def main(argv: Optional[List[str]] = None) -> None:
    settings = parse_settings(argv)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()

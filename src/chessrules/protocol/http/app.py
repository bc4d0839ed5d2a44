from __future__ import annotations

import logging
from typing import Annotated, Dict, List, Literal, Optional, Union

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ServerSettings
from .error import (
    ApiError,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore, SessionLimitError
from ...engine.game import GameState
from ...engine.move import Move, square_to_str
from ...engine.recorder import MoveRecord
from ...engine.variant import POSITION_COUNT


logger = logging.getLogger(__name__)

PositionId = Annotated[int, Field(ge=0, lt=POSITION_COUNT)]
Coordinate = Annotated[int, Field(ge=0, le=7)]


class VariantRequest(BaseModel):
    variant: Union[Literal["standard", "random"], PositionId] = Field(
        default="standard", description='"standard", "random" or a position id'
    )


class MoveRequest(BaseModel):
    from_row: Coordinate
    from_col: Coordinate
    to_row: Coordinate
    to_col: Coordinate
    promotion: Literal["queen", "rook", "bishop", "knight"] = "queen"


class MoveModel(BaseModel):
    from_row: int
    from_col: int
    to_row: int
    to_col: int
    kind: str

    @classmethod
    def of(cls, move: Move) -> "MoveModel":
        return cls(
            from_row=move.from_sq[0],
            from_col=move.from_sq[1],
            to_row=move.to_sq[0],
            to_col=move.to_sq[1],
            kind=move.kind.value,
        )


class MoveRecordModel(BaseModel):
    from_square: str = Field(..., alias="from")
    to_square: str = Field(..., alias="to")
    piece: str
    captured: Optional[str]
    kind: str
    notation: str
    move_number: int
    player: str

    @classmethod
    def of(cls, record: MoveRecord) -> "MoveRecordModel":
        return cls(**record.to_dict())


class GameStateModel(BaseModel):
    game_id: str
    board: List[str]
    current_player: str
    castling: Dict[str, Dict[str, bool]]
    en_passant: Optional[str]
    halfmove_clock: int
    fullmove_number: int
    variant: bool
    position_id: Optional[int]
    legal_moves: List[MoveModel]
    in_check: bool
    checkmate: bool
    stalemate: bool
    game_over: bool
    last_move: Optional[MoveRecordModel]
    move_history: List[MoveRecordModel]


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    settings = settings or ServerSettings()
    app = FastAPI(title="Chess Rules API", version="0.1.0")

    logging.basicConfig(level=settings.log_level.upper())

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore(max_games=settings.max_games)
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    # Game endpoints are sync so they run in the threadpool; each one works
    # on its game only while holding that session's lock.

    @app.post("/api/games", response_model=GameStateModel)
    def create_game(req: Optional[VariantRequest] = None) -> GameStateModel:
        variant = req.variant if req is not None else "standard"
        try:
            game_id = store.create(GameState.new(variant))
        except SessionLimitError as e:
            raise ApiError(409, str(e), code="too_many_games")
        with store.locked(game_id) as game:
            return _state(game_id, _require(game))

    @app.get("/api/games/{game_id}/state", response_model=GameStateModel)
    def get_state(game_id: str) -> GameStateModel:
        with store.locked(game_id) as game:
            return _state(game_id, _require(game))

    @app.post("/api/games/{game_id}/move", response_model=GameStateModel)
    def make_move(game_id: str, req: MoveRequest) -> GameStateModel:
        with store.locked(game_id) as game:
            game = _require(game)
            record = game.apply_move(
                req.from_row, req.from_col, req.to_row, req.to_col, promotion=req.promotion
            )
            if record is None:
                raise ApiError(400, "illegal move", code="illegal_move")
            logger.info("move applied", extra={"game_id": game_id, "notation": record.notation})
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameStateModel)
    def undo(game_id: str) -> GameStateModel:
        with store.locked(game_id) as game:
            game = _require(game)
            if game.undo_move() is None:
                raise ApiError(400, "no moves to undo", code="nothing_to_undo")
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameStateModel)
    def reset(game_id: str, req: Optional[VariantRequest] = None) -> GameStateModel:
        with store.locked(game_id) as game:
            game = _require(game)
            game.reset(req.variant if req is not None else None)
            return _state(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise ApiError(404, "game not found")
        return Response(status_code=204)

    return app


def _require(game: Optional[GameState]) -> GameState:
    if game is None:
        raise ApiError(404, "game not found")
    return game


def _state(game_id: str, game: GameState) -> GameStateModel:
    legal = game.get_all_legal_moves(game.current_player)
    in_check = game.is_in_check(game.current_player)
    history = [MoveRecordModel.of(r) for r in game.history]
    return GameStateModel(
        game_id=game_id,
        board=game.board.to_diagram(),
        current_player=game.current_player,
        castling=game.castling.as_dict(),
        en_passant=square_to_str(game.en_passant) if game.en_passant else None,
        halfmove_clock=game.halfmove_clock,
        fullmove_number=game.fullmove_number,
        variant=game.variant,
        position_id=game.position_id,
        legal_moves=[MoveModel.of(m) for m in legal],
        in_check=in_check,
        checkmate=in_check and not legal,
        stalemate=(not in_check) and not legal,
        game_over=game.game_over,
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()

"""
FastAPI web application for playing against the engine.

Exposes three REST endpoints:
    POST /api/move      — the engine's reply at a chosen difficulty
    POST /api/undo      — take back moves until the human is on move again
    POST /api/evaluate  — static evaluation and terminal status

Architecture notes:
- Async endpoint for /api/move: the search is a coroutine that suspends to
  the event loop every few hundred nodes, so one slow grandmaster search
  does not stall other requests. No worker threads are involved.
- Stateless per request: the client sends the starting FEN and the moves
  played since, every time. Replaying the moves gives python-chess the
  history it needs for threefold repetition; a bare FEN would lose it.
- The engine always plays the side to move when /api/move is called. The
  human is the other side, which decides the status text.
"""

import logging
from typing import Literal

import chess
import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from engine.difficulty import Difficulty, select_move
from engine.errors import EngineError
from engine.evaluate import evaluate
from engine.rules import GameStatus, game_status

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="QuickChess", version="1.0.0")

_COLORS: dict[str, chess.Color] = {"white": chess.WHITE, "black": chess.BLACK}

_DRAW_MESSAGES: dict[GameStatus, str] = {
    GameStatus.STALEMATE: "STALEMATE - DRAW",
    GameStatus.THREEFOLD_REPETITION: "DRAW - THREEFOLD REPETITION",
    GameStatus.INSUFFICIENT_MATERIAL: "DRAW - INSUFFICIENT MATERIAL",
    GameStatus.FIFTY_MOVES: "DRAW - 50 MOVE RULE",
}


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """
    A game as the client knows it.

    Fields:
        fen:   Position the game started from (standard start by default).
        moves: Moves played since, in UCI notation (e.g. "e2e4", "e7e8q").
    """

    fen: str = chess.STARTING_FEN
    moves: list[str] = Field(default_factory=list)

    def to_board(self) -> chess.Board:
        """Rebuild the game. Raises ValueError for a bad FEN or illegal move."""
        board = chess.Board(self.fen)
        for uci in self.moves:
            move = chess.Move.from_uci(uci)
            if not board.is_legal(move):
                raise ValueError(f"illegal move {uci} in position {board.fen()}")
            board.push(move)
        return board


class MoveRequest(PositionRequest):
    """Client request for the engine's reply. Difficulty defaults to easy."""

    difficulty: Difficulty = Difficulty.EASY

    @field_validator("difficulty", mode="before")
    @classmethod
    def parse_difficulty(cls, v: object) -> Difficulty:
        """Accept any casing and the "elite" alias."""
        return Difficulty(v)


class UndoRequest(PositionRequest):
    human_color: Literal["white", "black"] = "white"


class EvaluateRequest(PositionRequest):
    engine_color: Literal["white", "black"] = "black"


class GameResponse(BaseModel):
    """
    The game after a request was handled.

    Fields:
        fen:       Current position.
        moves:     Full move list from the starting FEN, in UCI.
        status:    Status line for the human player.
        game_over: True once the game has ended.
    """

    fen: str
    moves: list[str]
    status: str
    game_over: bool


class MoveResponse(GameResponse):
    move: str
    difficulty: Difficulty


class EvaluateResponse(BaseModel):
    """
    Fields:
        score:  Evaluation in centipawns from engine_color's perspective.
        status: Terminal status name, or None while the game goes on.
    """

    score: float
    status: str | None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_board(request: PositionRequest) -> chess.Board:
    try:
        return request.to_board()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid position: {exc}") from exc


def status_text(board: chess.Board, human_color: chess.Color) -> str:
    """Status line for the human, e.g. "CHECK - Your turn" or "CHECKMATE - AI WINS"."""
    status = game_status(board)
    human_to_move = board.turn == human_color

    if status is GameStatus.CHECKMATE:
        return "CHECKMATE - AI WINS" if human_to_move else "CHECKMATE - YOU WIN!"
    if status is not None:
        return _DRAW_MESSAGES[status]

    turn = "Your turn" if human_to_move else "AI turn"
    return f"CHECK - {turn}" if board.is_check() else turn


def _game_response(board: chess.Board, human_color: chess.Color) -> GameResponse:
    return GameResponse(
        fen=board.fen(),
        moves=[move.uci() for move in board.move_stack],
        status=status_text(board, human_color),
        game_over=game_status(board) is not None,
    )


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
async def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute and play the engine's move for the side to move.

    Raises:
        HTTPException 400: Malformed FEN, illegal move history, or game over.
        HTTPException 500: Engine failure, or no move in a live position.
    """
    board = _load_board(request)

    status = game_status(board)
    if status is not None:
        raise HTTPException(status_code=400, detail=f"Game is already over: {status.value}")

    human_color = not board.turn
    try:
        move = await select_move(request.difficulty, board)
    except EngineError as exc:
        _log.exception("Engine failed for FEN=%s", board.fen())
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s difficulty=%s ply=%d fen=%s",
        move.uci(),
        request.difficulty.value,
        board.ply(),
        board.fen()[:40],
    )

    board.push(move)
    game = _game_response(board, human_color)
    return MoveResponse(**game.model_dump(), move=move.uci(), difficulty=request.difficulty)


@app.post("/api/undo", response_model=GameResponse)
def api_undo(request: UndoRequest) -> GameResponse:
    """
    Take back the last move, and the one before it if that leaves the
    engine on move, so the human can replay their turn. An empty history is
    returned unchanged.
    """
    board = _load_board(request)
    human_color = _COLORS[request.human_color]

    if board.move_stack:
        board.pop()
        if board.move_stack and board.turn != human_color:
            board.pop()

    return _game_response(board, human_color)


@app.post("/api/evaluate", response_model=EvaluateResponse)
def api_evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Static evaluation of the position, without any search."""
    board = _load_board(request)
    status = game_status(board)
    return EvaluateResponse(
        score=evaluate(board, _COLORS[request.engine_color]),
        status=status.value if status else None,
    )


def main(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()

"""
FastAPI web application for the minimax chess engine.

Exposes two JSON endpoints:

    POST /api/move        : run the engine on a FEN position and return its move
    POST /api/legal-moves : list the legal moves and the result of a position

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like engine search.
- Stateless per request: the client sends the full FEN each time; no server-
  side board state is maintained between requests.
- Only the placement and side-to-move FEN fields matter; castling and en
  passant are not part of the rules the engine implements.

Run with: uvicorn web.app:app
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from minimax_chess.board import Board, GameResult, MissingKingError
from minimax_chess.constants import DEFAULT_ALGORITHM, DEFAULT_DEPTH, MAX_WEB_DEPTH
from minimax_chess.pieces import color_name
from minimax_chess.search import SEARCH_ALGORITHMS, create_search

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Minimax Chess", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """A position to inspect, as a FEN string."""

    fen: str


class MoveRequest(PositionRequest):
    """
    Client request to the engine.

    Fields:
        fen:       Position to move from.
        depth:     Search depth in plies, clamped to [1, MAX_WEB_DEPTH] so a
                   single request cannot tie up a worker indefinitely.
        algorithm: "alphabeta" or "minimax".
    """

    depth: int = DEFAULT_DEPTH
    algorithm: str = DEFAULT_ALGORITHM

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(1, min(v, MAX_WEB_DEPTH))

    @field_validator("algorithm")
    @classmethod
    def known_algorithm(cls, v: str) -> str:
        name = v.lower()
        if name not in SEARCH_ALGORITHMS:
            raise ValueError(f"algorithm must be one of {sorted(SEARCH_ALGORITHMS)}")
        return name


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move:   Best move in coordinate notation (e.g. "e2e4").
        coords: The same move as "originFile originRank destFile destRank".
        fen:    Board FEN after the engine's move is applied.
        score:  Value of the move from the engine's side, in pawn units.
        nodes:  Positions visited by the search.
        depth:  Search depth used.
        result: Game result after the move ("*", "1-0", "0-1", "1/2-1/2").
    """

    move: str
    coords: str
    fen: str
    score: float
    nodes: int
    depth: int
    result: str


class PositionResponse(BaseModel):
    fen: str
    turn: str
    legal_moves: list[str]
    in_check: bool
    result: str
    board: str


def _parse_board(fen: str) -> Board:
    """Parse a request FEN; a malformed FEN or a missing king is a 400."""
    try:
        board = Board.from_fen(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc
    try:
        board.require_kings()
    except MissingKingError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return board


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's best move for the given position.

    Raises:
        HTTPException 400: Malformed FEN, a missing king, or game already over.
        HTTPException 500: Unexpected engine failure.
    """
    board = _parse_board(request.fen)

    result = board.result()
    if result is not GameResult.ONGOING:
        raise HTTPException(status_code=400, detail=f"Game is already over: {result.value}")

    engine = create_search(request.algorithm, board.turn, request.depth)
    try:
        found = engine.search_root(board)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    _log.info(
        "Move=%s score=%s depth=%d nodes=%d fen=%s",
        found.move.to_uci(),
        found.score,
        found.depth,
        found.nodes,
        request.fen[:40],
    )

    after = board.push(found.move)
    return MoveResponse(
        move=found.move.to_uci(),
        coords=str(found.move),
        fen=after.fen(),
        score=found.score,
        nodes=found.nodes,
        depth=found.depth,
        result=after.result().value,
    )


@app.post("/api/legal-moves", response_model=PositionResponse)
def api_legal_moves(request: PositionRequest) -> PositionResponse:
    """Describe a position: side to move, legal moves, check and result."""
    board = _parse_board(request.fen)
    return PositionResponse(
        fen=board.fen(),
        turn=color_name(board.turn),
        legal_moves=[move.to_uci() for move in board.legal_moves()],
        in_check=board.is_check(),
        result=board.result().value,
        board=board.render(),
    )

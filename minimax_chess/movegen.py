"""
Reachability rules and pseudo-legal move generation.

This module is the single source of truth for "can the piece on this square
get to that square": the board uses it both to enumerate candidate moves and
to decide whether a king is attacked.

A move is *reachable* (pseudo-legal) when it follows the piece's movement
rule, every square strictly between origin and destination is empty for
sliding pieces, and the destination does not hold a piece of the mover's own
colour. Whose turn it is and whether the move leaves the mover's king in check
are deliberately NOT considered here; board.Board layers those on top.

Rules implemented (no castling, en passant, or promotion):
    Pawn:   one step forward onto an empty square, two steps from the start
            rank through two empty squares, or one step diagonally forward
            onto an enemy piece.
    Rook:   along a file or rank, path clear.
    Bishop: along a diagonal, path clear.
    Queen:  rook or bishop rule.
    King:   to any of the 8 neighbouring squares.
    Knight: (±1, ±2) or (±2, ±1) jump, never obstructed.
"""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import chess

from minimax_chess.moves import Move
from minimax_chess.pieces import Square, pattern, pawn_direction, pawn_start_rank

if TYPE_CHECKING:
    from minimax_chess.board import Board


def can_reach(board: "Board", origin: Square, destination: Square) -> bool:
    """
    Return True if the piece on ``origin`` can move to ``destination``.

    Obstruction and same-colour captures are taken into account; turn order
    and self-check are not. An empty origin can reach nothing, and no piece
    can reach its own square.

    Args:
        board: The position to inspect. Not modified.
        origin: (file, rank) of the moving piece.
        destination: (file, rank) candidate target. Must be on the board.

    Returns:
        True if the move is pseudo-legal.
    """
    if origin == destination:
        return False
    piece = board.piece_at(origin)
    if piece is None:
        return False
    target = board.piece_at(destination)
    if target is not None and target.color == piece.color:
        return False
    return _RULES[piece.piece_type](board, piece, origin, destination, target)


def pseudo_legal_moves(board: "Board", color: chess.Color | None = None) -> Iterator[Move]:
    """
    Yield every reachable move for ``color`` (default: the side to move).

    Origins are scanned file-major then by rank, and each piece's destinations
    come in pattern order, so the sequence is identical for equal boards.
    """
    if color is None:
        color = board.turn
    for origin, piece in board.pieces(color):
        for destination in pattern(piece, origin):
            if can_reach(board, origin, destination):
                yield Move(origin, destination)


def attacks(board: "Board", square: Square, by_color: chess.Color) -> bool:
    """Return True if any ``by_color`` piece can reach ``square``."""
    return any(
        can_reach(board, origin, square)
        for origin, _ in board.pieces(by_color)
    )


# ---------------------------------------------------------------------------
# Per-piece rules
# ---------------------------------------------------------------------------
# Each rule receives the already-validated piece and target (target is None
# or an enemy piece) and only checks geometry and obstruction.


def _pawn_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    step = pawn_direction(piece.color)
    file_delta = destination[0] - origin[0]
    rank_delta = destination[1] - origin[1]

    # Diagonal moves are captures only.
    if abs(file_delta) == 1 and rank_delta == step:
        return target is not None
    if file_delta != 0 or target is not None:
        return False
    if rank_delta == step:
        return True
    if rank_delta == 2 * step and origin[1] == pawn_start_rank(piece.color):
        return board.piece_at((origin[0], origin[1] + step)) is None
    return False


def _rook_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    if origin[0] != destination[0] and origin[1] != destination[1]:
        return False
    return _path_clear(board, origin, destination)


def _bishop_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    if abs(destination[0] - origin[0]) != abs(destination[1] - origin[1]):
        return False
    return _path_clear(board, origin, destination)


def _queen_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    return _rook_reach(board, piece, origin, destination, target) or _bishop_reach(
        board, piece, origin, destination, target
    )


def _king_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    return abs(destination[0] - origin[0]) <= 1 and abs(destination[1] - origin[1]) <= 1


def _knight_reach(
    board: "Board",
    piece: chess.Piece,
    origin: Square,
    destination: Square,
    target: chess.Piece | None,
) -> bool:
    deltas = {abs(destination[0] - origin[0]), abs(destination[1] - origin[1])}
    return deltas == {1, 2}


def _path_clear(board: "Board", origin: Square, destination: Square) -> bool:
    """
    True if every square strictly between ``origin`` and ``destination`` is
    empty. The two squares must share a file, rank, or diagonal.
    """
    file_step = (destination[0] > origin[0]) - (destination[0] < origin[0])
    rank_step = (destination[1] > origin[1]) - (destination[1] < origin[1])
    file, rank = origin[0] + file_step, origin[1] + rank_step
    while (file, rank) != destination:
        if board.piece_at((file, rank)) is not None:
            return False
        file += file_step
        rank += rank_step
    return True


_Rule = Callable[["Board", chess.Piece, Square, Square, "chess.Piece | None"], bool]

_RULES: dict[int, _Rule] = {
    chess.PAWN:   _pawn_reach,
    chess.KNIGHT: _knight_reach,
    chess.BISHOP: _bishop_reach,
    chess.ROOK:   _rook_reach,
    chess.QUEEN:  _queen_reach,
    chess.KING:   _king_reach,
}

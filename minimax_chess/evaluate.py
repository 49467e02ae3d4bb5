"""
Static evaluation: material balance with a terminal override.

The score is always from White's point of view: positive favours White,
negative favours Black. The search engine converts it to its own colour.

Material counts each piece at its value from constants.PIECE_VALUES (the king
counts zero). When the position is already decided, the material sum is
replaced by a fixed score so that a checkmate outweighs any amount of
material in the search's comparisons:

    WHITE_WIN -> +WIN_SCORE
    BLACK_WIN -> -WIN_SCORE
    DRAW      ->  DRAW_SCORE

Both functions are pure; the board is never modified.
"""

import chess

from minimax_chess.board import Board, GameResult
from minimax_chess.constants import DRAW_SCORE, PIECE_VALUES, WIN_SCORE

_TERMINAL_SCORES: dict[GameResult, int] = {
    GameResult.WHITE_WIN: WIN_SCORE,
    GameResult.BLACK_WIN: -WIN_SCORE,
    GameResult.DRAW: DRAW_SCORE,
}


def material(board: Board) -> int:
    """White material minus Black material, in pawn units."""
    score = 0
    for _, piece in board.pieces():
        value = PIECE_VALUES[piece.piece_type]
        score += value if piece.color == chess.WHITE else -value
    return score


def evaluate(board: Board) -> int:
    """
    White-relative score of ``board``.

    Args:
        board: The position to score. Not modified.

    Returns:
        The terminal score if the game is decided or drawn, otherwise the
        material balance.

    Example:
        >>> evaluate(Board.new())
        0
    """
    result = board.result()
    if result is not GameResult.ONGOING:
        return _TERMINAL_SCORES[result]
    return material(board)

"""Board-building shortcuts shared by the test modules."""

import chess

from minimax_chess.board import Board


def place(pieces: dict[tuple[int, int], str], turn: chess.Color = chess.WHITE) -> Board:
    """Build a board from {(file, rank): "K"} using FEN piece letters."""
    return Board.from_pieces(
        {square: chess.Piece.from_symbol(symbol) for square, symbol in pieces.items()},
        turn,
    )


def play(board: Board, *moves: tuple[int, int, int, int]) -> Board:
    """Apply (sx, sy, ex, ey) moves mechanically, without legality checks."""
    for sx, sy, ex, ey in moves:
        board = board.apply_move((sx, sy), (ex, ey))
    return board

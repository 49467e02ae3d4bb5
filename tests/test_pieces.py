import chess
import pytest

from minimax_chess.pieces import (
    color_name,
    on_board,
    opposing,
    parse_color,
    pattern,
)

ALL_SQUARES = [(file, rank) for file in range(8) for rank in range(8)]
ALL_PIECES = [
    chess.Piece(piece_type, color)
    for piece_type in chess.PIECE_TYPES
    for color in chess.COLORS
]


def test_patterns_stay_on_board_and_exclude_origin() -> None:
    for piece in ALL_PIECES:
        for square in ALL_SQUARES:
            destinations = pattern(piece, square)
            assert square not in destinations, (piece, square)
            assert all(on_board(dest) for dest in destinations), (piece, square)
            assert len(set(destinations)) == len(destinations), (piece, square)


def test_knight_in_corner_has_two_destinations() -> None:
    knight = chess.Piece(chess.KNIGHT, chess.WHITE)
    assert set(pattern(knight, (0, 0))) == {(1, 2), (2, 1)}


def test_king_pattern_sizes() -> None:
    king = chess.Piece(chess.KING, chess.BLACK)
    assert len(pattern(king, (0, 0))) == 3
    assert len(pattern(king, (0, 4))) == 5
    assert len(pattern(king, (4, 4))) == 8


def test_slider_pattern_sizes() -> None:
    rook = chess.Piece(chess.ROOK, chess.WHITE)
    bishop = chess.Piece(chess.BISHOP, chess.WHITE)
    queen = chess.Piece(chess.QUEEN, chess.WHITE)
    for square in ALL_SQUARES:
        assert len(pattern(rook, square)) == 14
    assert len(pattern(bishop, (0, 0))) == 7
    assert len(pattern(bishop, (3, 3))) == 13
    assert len(pattern(queen, (3, 3))) == 27


def test_white_pawn_pattern() -> None:
    pawn = chess.Piece(chess.PAWN, chess.WHITE)
    assert set(pattern(pawn, (4, 1))) == {(4, 2), (4, 3), (3, 2), (5, 2)}
    assert set(pattern(pawn, (4, 2))) == {(4, 3), (3, 3), (5, 3)}
    assert pattern(pawn, (3, 7)) == ()


def test_black_pawn_pattern_moves_down_the_board() -> None:
    pawn = chess.Piece(chess.PAWN, chess.BLACK)
    assert set(pattern(pawn, (0, 6))) == {(0, 5), (0, 4), (1, 5)}
    assert set(pattern(pawn, (7, 3))) == {(7, 2), (6, 2)}


def test_colour_helpers() -> None:
    assert opposing(chess.WHITE) is chess.BLACK
    assert opposing(chess.BLACK) is chess.WHITE
    assert color_name(chess.WHITE) == "white"
    assert parse_color(" White ") is chess.WHITE
    assert parse_color("BLACK") is chess.BLACK


def test_parse_color_rejects_non_players() -> None:
    with pytest.raises(ValueError):
        parse_color("empty")

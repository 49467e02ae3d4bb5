"""
Piece kinds, player colours, and geometric move patterns.

Colours and piece kinds reuse python-chess's value types: a player colour is
``chess.WHITE`` or ``chess.BLACK`` (a plain bool, so there is no "empty"
colour to guard against), and a square's occupant is a ``chess.Piece`` or
``None`` for an empty square.

A *pattern* is the set of squares a piece could move to from a given square
on an otherwise empty board. It ignores occupancy and obstruction entirely;
movegen.can_reach() applies those rules on top. Patterns only bound the set of
destinations worth checking, they never decide legality on their own.
"""

from functools import lru_cache

import chess

from minimax_chess.constants import BOARD_SIZE

# A square is addressed by (file, rank), both in [0, 8).
Square = tuple[int, int]

KNIGHT_OFFSETS: tuple[Square, ...] = (
    (1, 2), (2, 1), (2, -1), (1, -2),
    (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)

KING_OFFSETS: tuple[Square, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

ROOK_DIRECTIONS: tuple[Square, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRECTIONS: tuple[Square, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))

_COLORS_BY_NAME: dict[str, chess.Color] = {"white": chess.WHITE, "black": chess.BLACK}


def on_board(square: Square) -> bool:
    """Return True if both coordinates of ``square`` lie in [0, 8)."""
    file, rank = square
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def opposing(color: chess.Color) -> chess.Color:
    """Return the other player's colour."""
    return not color


def color_name(color: chess.Color) -> str:
    return chess.COLOR_NAMES[color]


def parse_color(name: str) -> chess.Color:
    """
    Convert "white" / "black" (any case) to a python-chess colour.

    Raises:
        ValueError: if ``name`` is not a player colour.
    """
    try:
        return _COLORS_BY_NAME[name.strip().lower()]
    except KeyError:
        raise ValueError(f"not a player colour: {name!r}") from None


def pawn_direction(color: chess.Color) -> int:
    """Rank delta of a single pawn step: +1 for White, -1 for Black."""
    return 1 if color == chess.WHITE else -1


def pawn_start_rank(color: chess.Color) -> int:
    return 1 if color == chess.WHITE else 6


def pattern(piece: chess.Piece, square: Square) -> tuple[Square, ...]:
    """
    Return the geometric destinations of ``piece`` standing on ``square``.

    The result never contains ``square`` itself and never contains an
    off-board coordinate. Order is fixed for a given piece and square, which
    keeps legal-move enumeration (and therefore search) reproducible.

    Args:
        piece: The piece to move.
        square: Its (file, rank) origin.

    Returns:
        Tuple of (file, rank) destinations.
    """
    return _pattern(piece.piece_type, piece.color, square[0], square[1])


@lru_cache(maxsize=None)
def _pattern(piece_type: int, color: chess.Color, file: int, rank: int) -> tuple[Square, ...]:
    if piece_type == chess.PAWN:
        return _pawn_pattern(color, file, rank)
    if piece_type == chess.KNIGHT:
        return _step_pattern(KNIGHT_OFFSETS, file, rank)
    if piece_type == chess.KING:
        return _step_pattern(KING_OFFSETS, file, rank)
    if piece_type == chess.ROOK:
        return _slide_pattern(ROOK_DIRECTIONS, file, rank)
    if piece_type == chess.BISHOP:
        return _slide_pattern(BISHOP_DIRECTIONS, file, rank)
    if piece_type == chess.QUEEN:
        return _slide_pattern(ROOK_DIRECTIONS + BISHOP_DIRECTIONS, file, rank)
    raise ValueError(f"unknown piece type: {piece_type!r}")


def _pawn_pattern(color: chess.Color, file: int, rank: int) -> tuple[Square, ...]:
    step = pawn_direction(color)
    candidates = [(file, rank + step)]
    if rank == pawn_start_rank(color):
        candidates.append((file, rank + 2 * step))
    candidates.extend([(file - 1, rank + step), (file + 1, rank + step)])
    return tuple(sq for sq in candidates if on_board(sq))


def _step_pattern(offsets: tuple[Square, ...], file: int, rank: int) -> tuple[Square, ...]:
    candidates = ((file + df, rank + dr) for df, dr in offsets)
    return tuple(sq for sq in candidates if on_board(sq))


def _slide_pattern(directions: tuple[Square, ...], file: int, rank: int) -> tuple[Square, ...]:
    squares: list[Square] = []
    for df, dr in directions:
        f, r = file + df, rank + dr
        while on_board((f, r)):
            squares.append((f, r))
            f += df
            r += dr
    return tuple(squares)

"""
Immutable chess board: position state, legal moves, check, and game result.

A Board is a value: 64 square states plus the colour to move. Every operation
that changes the position (apply_move, push, with_piece, with_turn) returns a
new Board and leaves the original untouched, so a search can hand the same
board to any number of sibling branches without copying or undoing moves.

Squares are addressed by (file, rank) tuples with both coordinates in [0, 8).
File 0 is the a-file and rank 0 is White's back rank. Internally the squares
are stored in python-chess square order (index = rank * 8 + file), which is
also what makes FEN conversion a direct mapping.

Legality is layered:
    1. movegen.can_reach():    geometry, obstruction, no same-colour capture
    2. Board.is_legal_move(): right side to move, and the mover's own king
                              is not attacked after the move (no self-check)
"""

import enum
from collections.abc import Iterable, Iterator, Mapping

import chess

from minimax_chess import movegen
from minimax_chess.constants import BACK_RANK, BOARD_SIZE
from minimax_chess.moves import Move
from minimax_chess.pieces import Square, color_name, on_board, opposing

EMPTY_GLYPH: str = "."
EMPTY_UNICODE_GLYPH: str = "·"


class GameResult(enum.Enum):
    """Outcome of a position, valued with the PGN result strings."""

    ONGOING = "*"
    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"


class MissingKingError(LookupError):
    """Raised when check detection needs a king that is not on the board."""


class Board:
    """
    An immutable 8x8 chess position with the colour to move.

    Construct positions with Board.new(), Board.empty(), Board.from_pieces()
    or Board.from_fen(); derive new ones with apply_move() / push().

    Attributes:
        turn: The colour to move next (chess.WHITE or chess.BLACK).

    Raises:
        ValueError: if the colour to move is not chess.WHITE or chess.BLACK.
    """

    __slots__ = ("_squares", "_turn", "_legal_moves")

    def __init__(
        self,
        squares: Iterable[chess.Piece | None],
        turn: chess.Color = chess.WHITE,
    ) -> None:
        self._squares: tuple[chess.Piece | None, ...] = tuple(squares)
        if len(self._squares) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"a board needs 64 squares, got {len(self._squares)}")
        if turn is not chess.WHITE and turn is not chess.BLACK:
            raise ValueError(f"the side to move must be white or black, got {turn!r}")
        self._turn: chess.Color = turn
        # Filled lazily by legal_moves(); safe because the position never changes.
        self._legal_moves: tuple[Move, ...] | None = None

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def new(cls) -> "Board":
        """The standard initial position, White to move."""
        squares: list[chess.Piece | None] = [None] * 64
        for file, piece_type in enumerate(BACK_RANK):
            squares[chess.square(file, 0)] = chess.Piece(piece_type, chess.WHITE)
            squares[chess.square(file, 1)] = chess.Piece(chess.PAWN, chess.WHITE)
            squares[chess.square(file, 6)] = chess.Piece(chess.PAWN, chess.BLACK)
            squares[chess.square(file, 7)] = chess.Piece(piece_type, chess.BLACK)
        return cls(squares, chess.WHITE)

    @classmethod
    def empty(cls) -> "Board":
        """A board with no pieces, White to move."""
        return cls([None] * 64, chess.WHITE)

    @classmethod
    def from_pieces(
        cls,
        pieces: Mapping[Square, chess.Piece],
        turn: chess.Color = chess.WHITE,
    ) -> "Board":
        """
        Build a position from a {(file, rank): piece} mapping.

        Example:
            >>> Board.from_pieces({
            ...     (2, 2): chess.Piece(chess.KING, chess.WHITE),
            ...     (0, 0): chess.Piece(chess.KING, chess.BLACK),
            ... })
        """
        squares: list[chess.Piece | None] = [None] * 64
        for square, piece in pieces.items():
            if not on_board(square):
                raise ValueError(f"square off the board: {square!r}")
            squares[chess.square(*square)] = piece
        return cls(squares, turn)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """
        Build a position from a FEN string.

        Only the piece placement and side-to-move fields are used; castling
        rights, en passant square and move counters are ignored because those
        rules are not implemented.

        Raises:
            ValueError: if python-chess rejects the FEN.
        """
        parsed = chess.Board(fen)
        return cls((parsed.piece_at(sq) for sq in chess.SQUARES), parsed.turn)

    # -----------------------------------------------------------------------
    # Accessors and derived boards
    # -----------------------------------------------------------------------

    @property
    def turn(self) -> chess.Color:
        return self._turn

    def piece_at(self, square: Square) -> chess.Piece | None:
        file, rank = square
        return self._squares[rank * BOARD_SIZE + file]

    def pieces(self, color: chess.Color | None = None) -> Iterator[tuple[Square, chess.Piece]]:
        """Yield (square, piece) for occupied squares, file-major then rank."""
        for file in range(BOARD_SIZE):
            for rank in range(BOARD_SIZE):
                piece = self._squares[rank * BOARD_SIZE + file]
                if piece is not None and (color is None or piece.color == color):
                    yield (file, rank), piece

    def with_piece(self, square: Square, piece: chess.Piece | None) -> "Board":
        """Return a copy with ``square`` set to ``piece`` (None clears it)."""
        squares = list(self._squares)
        squares[chess.square(*square)] = piece
        return Board(squares, self._turn)

    def with_turn(self, color: chess.Color) -> "Board":
        return Board(self._squares, color)

    def apply_move(self, origin: Square, destination: Square) -> "Board":
        """
        Return the board after moving the occupant of ``origin`` to
        ``destination``.

        Whatever stood on the destination is discarded (that is how captures
        happen), the origin becomes empty, and the turn passes to the other
        side. No legality or bounds checking is done here: search and tests
        rely on applying arbitrary moves, and callers validate coordinates.
        """
        squares = list(self._squares)
        squares[destination[1] * BOARD_SIZE + destination[0]] = squares[
            origin[1] * BOARD_SIZE + origin[0]
        ]
        squares[origin[1] * BOARD_SIZE + origin[0]] = None
        return Board(squares, opposing(self._turn))

    def push(self, move: Move) -> "Board":
        """apply_move() for a Move value."""
        return self.apply_move(move.origin, move.destination)

    # -----------------------------------------------------------------------
    # Legality
    # -----------------------------------------------------------------------

    def is_legal_move(self, origin: Square, destination: Square) -> bool:
        """
        Return True if the side to move may play ``origin`` -> ``destination``.

        The origin must hold a piece of the side to move, the piece must be
        able to reach the destination (see movegen.can_reach), and the
        resulting position must not leave the mover's own king attacked.
        Off-board coordinates are reported as illegal rather than raising.
        """
        if not (on_board(origin) and on_board(destination)):
            return False
        piece = self.piece_at(origin)
        if piece is None or piece.color != self._turn:
            return False
        if not movegen.can_reach(self, origin, destination):
            return False
        return not self.apply_move(origin, destination).is_check(piece.color)

    def is_legal(self, move: Move) -> bool:
        return self.is_legal_move(move.origin, move.destination)

    def legal_moves(self) -> list[Move]:
        """
        Every legal move for the side to move, in a fixed order.

        Origins are scanned file-major then by rank, destinations in pattern
        order; the order never changes for a given position, which keeps
        search results reproducible.
        """
        if self._legal_moves is None:
            self._legal_moves = tuple(self._iter_legal_moves())
        return list(self._legal_moves)

    def has_legal_move(self) -> bool:
        """Like bool(legal_moves()) but stops at the first legal move found."""
        if self._legal_moves is not None:
            return bool(self._legal_moves)
        return any(True for _ in self._iter_legal_moves())

    def _iter_legal_moves(self) -> Iterator[Move]:
        mover = self._turn
        for move in movegen.pseudo_legal_moves(self, mover):
            if not self.push(move).is_check(mover):
                yield move

    # -----------------------------------------------------------------------
    # Check and game result
    # -----------------------------------------------------------------------

    def king_square(self, color: chess.Color) -> Square:
        """
        Locate the king of ``color``.

        Raises:
            MissingKingError: if there is no such king. Every position that
                check detection runs on must hold both kings.
        """
        for square, piece in self.pieces(color):
            if piece.piece_type == chess.KING:
                return square
        raise MissingKingError(f"no {color_name(color)} king on the board")

    def require_kings(self) -> None:
        """
        Check that both kings are on the board.

        Raises:
            MissingKingError: naming the first colour without a king.
        """
        for color in chess.COLORS:
            self.king_square(color)

    def is_check(self, color: chess.Color | None = None) -> bool:
        """
        Return True if the king of ``color`` (default: side to move) is attacked.

        Attacks use raw reachability: an enemy piece gives check even if
        moving it would expose its own king.
        """
        if color is None:
            color = self._turn
        return movegen.attacks(self, self.king_square(color), opposing(color))

    def result(self) -> GameResult:
        """
        Classify the position.

        ONGOING while the side to move has a legal move. Otherwise the side to
        move is checkmated (the opponent wins) if it is in check, and
        stalemated (DRAW) if it is not.
        """
        if self.has_legal_move():
            return GameResult.ONGOING
        if self.is_check(self._turn):
            return GameResult.BLACK_WIN if self._turn == chess.WHITE else GameResult.WHITE_WIN
        return GameResult.DRAW

    def is_game_over(self) -> bool:
        return self.result() is not GameResult.ONGOING

    # -----------------------------------------------------------------------
    # Text formats
    # -----------------------------------------------------------------------

    def fen(self) -> str:
        """FEN of the position; castling and en passant fields are always '-'."""
        exported = chess.Board(None)
        exported.set_piece_map({
            sq: piece for sq, piece in enumerate(self._squares) if piece is not None
        })
        exported.turn = self._turn
        return exported.fen()

    def render(self, unicode: bool = False) -> str:
        """
        Render the board as 8 lines of space-separated glyphs.

        Rank 7 comes first so White's back rank prints last; files run left
        to right. ASCII glyphs are the usual piece letters (uppercase White,
        lowercase Black) and '.' for an empty square.
        """
        rows = []
        for rank in reversed(range(BOARD_SIZE)):
            glyphs = []
            for file in range(BOARD_SIZE):
                piece = self.piece_at((file, rank))
                if piece is None:
                    glyphs.append(EMPTY_UNICODE_GLYPH if unicode else EMPTY_GLYPH)
                else:
                    glyphs.append(piece.unicode_symbol() if unicode else piece.symbol())
            rows.append(" ".join(glyphs))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board({self.fen()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._turn == other._turn and self._squares == other._squares

    def __hash__(self) -> int:
        return hash((
            self._turn,
            tuple(None if p is None else (p.piece_type, p.color) for p in self._squares),
        ))

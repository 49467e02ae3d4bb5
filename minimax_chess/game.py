"""
Game wrapper: the current position plus the moves that led to it.

This is the object the CLI, UCI and web layers talk to. It owns the only
mutable state in the package (which Board is current); the boards themselves
stay immutable.
"""

from minimax_chess.board import Board, GameResult
from minimax_chess.moves import Move


class IllegalMoveError(ValueError):
    """Raised by Game.make_move() for a move that is not legal right now."""


class Game:
    """
    A game in progress.

    Attributes:
        board:   The current position.
        history: Moves played so far, oldest first.
    """

    def __init__(self, board: Board | None = None) -> None:
        self.board: Board = board if board is not None else Board.new()
        self.history: list[Move] = []

    def is_legal(self, move: Move) -> bool:
        """Is ``move`` legal for the side to move in the current position?"""
        return self.board.is_legal(move)

    def make_move(self, move: Move) -> Board:
        """
        Play ``move`` and advance the turn.

        Raises:
            IllegalMoveError: if the move is not legal in the current position.
        """
        if not self.board.is_legal(move):
            raise IllegalMoveError(f"illegal move: {move}")
        return self.apply_unchecked(move)

    def apply_unchecked(self, move: Move) -> Board:
        """Play ``move`` without a legality check (used for engine moves)."""
        self.board = self.board.push(move)
        self.history.append(move)
        return self.board

    def result(self) -> GameResult:
        return self.board.result()

    def is_over(self) -> bool:
        return self.board.is_game_over()

    def render(self, unicode: bool = False) -> str:
        return self.board.render(unicode=unicode)

    def __str__(self) -> str:
        return self.render()

"""
The Move value type and its two text formats.

The native format is four whitespace-separated integers,
``"originFile originRank destFile destRank"``, each in [0, 7]. Coordinate
notation (``"e2e4"``) is also accepted for the UCI and web layers.

Parsing never raises: malformed text yields ``None`` so interactive callers
can simply re-prompt.
"""

from dataclasses import dataclass

import chess

from minimax_chess.pieces import Square, on_board


@dataclass(frozen=True)
class Move:
    """A move from ``origin`` to ``destination``, both (file, rank) tuples."""

    origin: Square
    destination: Square

    @classmethod
    def parse(cls, text: str) -> "Move | None":
        """
        Parse the four-integer format.

        Returns None when the token count is not exactly 4, any token is not
        a non-negative decimal integer, or any value falls outside [0, 7].
        """
        tokens = text.split()
        if len(tokens) != 4:
            return None
        if not all(token.isascii() and token.isdigit() for token in tokens):
            return None
        sx, sy, ex, ey = (int(token) for token in tokens)
        origin, destination = (sx, sy), (ex, ey)
        if not (on_board(origin) and on_board(destination)):
            return None
        return cls(origin, destination)

    @classmethod
    def from_uci(cls, text: str) -> "Move | None":
        """
        Parse coordinate notation such as ``"e2e4"``.

        Promotions, drops and the null move are rejected (returns None),
        since promotion is not part of the rules implemented here.
        """
        try:
            uci_move = chess.Move.from_uci(text.strip())
        except ValueError:
            return None
        if not uci_move or uci_move.promotion is not None or uci_move.drop is not None:
            return None
        return cls.from_chess(uci_move)

    @classmethod
    def from_chess(cls, uci_move: chess.Move) -> "Move":
        return cls(
            (chess.square_file(uci_move.from_square), chess.square_rank(uci_move.from_square)),
            (chess.square_file(uci_move.to_square), chess.square_rank(uci_move.to_square)),
        )

    def to_uci(self) -> str:
        """Coordinate notation, e.g. ``Move((4, 1), (4, 3)).to_uci() == "e2e4"``."""
        return chess.square_name(chess.square(*self.origin)) + chess.square_name(
            chess.square(*self.destination)
        )

    def __str__(self) -> str:
        sx, sy = self.origin
        ex, ey = self.destination
        return f"{sx} {sy} {ex} {ey}"


def parse_move(text: str) -> Move | None:
    """Accept either the four-integer format or coordinate notation."""
    return Move.parse(text) or Move.from_uci(text)

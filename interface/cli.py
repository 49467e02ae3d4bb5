"""
Interactive command-line game against the engine.

The human types moves, the engine answers, and the board is printed after
every exchange. Moves are accepted in either format:

    4 1 4 3     originFile originRank destFile destRank (0-7 each)
    e2e4        coordinate notation

Malformed or illegal input is reported and the prompt repeats; it never ends
the game. The loop stops when the game is over, on "quit", or at end of input.

Usage:
    python -m interface.cli [--color black] [--depth 3] [--algorithm alphabeta]

Output rule: stdout carries only the game itself (board, prompts, moves).
Diagnostics go through logging, which writes to stderr.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from minimax_chess.board import Board, MissingKingError
from minimax_chess.constants import DEFAULT_ALGORITHM, DEFAULT_DEPTH
from minimax_chess.game import Game
from minimax_chess.moves import parse_move
from minimax_chess.pieces import color_name, parse_color
from minimax_chess.search import SEARCH_ALGORITHMS, Search, create_search

_log = logging.getLogger(__name__)

PROMPT = "Please enter the next move: "
QUIT_COMMANDS = frozenset({"quit", "exit"})


class CliSession:
    """
    One interactive game: a Game, the engine playing one side, and the
    output stream the game is printed to.
    """

    def __init__(
        self,
        engine: Search,
        game: Game | None = None,
        out: TextIO | None = None,
        unicode: bool = False,
    ) -> None:
        self.engine = engine
        self.game = game if game is not None else Game()
        self.out = out if out is not None else sys.stdout
        self.unicode = unicode

    def _send(self, line: str = "") -> None:
        print(line, file=self.out, flush=True)

    def show_board(self) -> None:
        self._send(self.game.render(unicode=self.unicode))
        self._send()

    def engine_turn(self) -> None:
        """Let the engine choose and play a move for its colour."""
        move = self.engine.find_best_move(self.game.board)
        self.game.apply_unchecked(move)
        self._send(f"Engine plays: {move} ({move.to_uci()})")

    def handle_line(self, line: str) -> bool:
        """
        Process one line of human input.

        Returns:
            False when the session should end (quit or game over), else True.
        """
        text = line.strip()
        if not text:
            return True
        if text.lower() in QUIT_COMMANDS:
            return False

        move = parse_move(text)
        if move is None:
            self._send("Incorrect move format, expected e.g. '4 1 4 3' or 'e2e4'")
            return True
        if not self.game.is_legal(move):
            self._send(f"Illegal move: {move}")
            return True

        self.game.make_move(move)
        if not self.game.is_over():
            self.engine_turn()
        self.show_board()
        return not self._report_if_over()

    def _report_if_over(self) -> bool:
        if not self.game.is_over():
            return False
        self._send(f"Game over: {self.game.result().value}")
        return True

    def run(self, lines: Iterable[str]) -> None:
        """Play until the game ends, the user quits, or ``lines`` runs out."""
        if self.game.board.turn == self.engine.color and not self.game.is_over():
            self.engine_turn()
        self.show_board()
        if self._report_if_over():
            return

        self.out.write(PROMPT)
        self.out.flush()
        for line in lines:
            if not self.handle_line(line):
                return
            self.out.write(PROMPT)
            self.out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play chess against a minimax / alpha-beta engine.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--color",
        type=parse_color,
        default="black",
        help="Colour the engine plays (white or black).",
    )
    parser.add_argument(
        "--depth", type=int, default=DEFAULT_DEPTH, help="Search depth in plies."
    )
    parser.add_argument(
        "--algorithm",
        choices=sorted(SEARCH_ALGORITHMS),
        default=DEFAULT_ALGORITHM,
        help="Search algorithm.",
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="Threads used to search root moves."
    )
    parser.add_argument(
        "--fen", default=None, help="Start from this FEN instead of the initial position."
    )
    parser.add_argument(
        "--unicode", action="store_true", help="Draw the board with chess figurines."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = create_search(args.algorithm, args.color, args.depth, workers=args.workers)
    except ValueError as exc:
        _log.error("invalid engine settings: %s", exc)
        return 2

    game = Game()
    if args.fen:
        try:
            board = Board.from_fen(args.fen)
            board.require_kings()
        except (ValueError, MissingKingError) as exc:
            _log.error("invalid FEN %r: %s", args.fen, exc)
            return 2
        game = Game(board)

    _log.info("engine %r plays %s", engine, color_name(engine.color))
    CliSession(engine, game, unicode=args.unicode).run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())

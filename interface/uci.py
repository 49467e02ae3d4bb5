"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately; GUI programs won't block waiting for a newline.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, position, go, stop, setoption, quit
    Engine → GUI: id name, id author, option, uciok, readyok, info, bestmove

The engine only knows the rules implemented in minimax_chess: a castling,
en passant or promotion move in a "position" command is illegal here, so the
replay stops at that move and the problem is logged to stderr.

Threading model:
    The UCI loop runs on the main thread and must never block on the search.
    When the GUI sends "go", a daemon thread runs the fixed-depth search.
    The search has no cancellation point, so "stop" waits for it to finish;
    the thread always answers with a "bestmove" line.

Critical rule: NEVER print to stdout except for valid UCI responses.
Debug output goes through logging, which writes to stderr.

Usage:
    python -m interface.uci
"""

import logging
import sys
import threading
import time

from minimax_chess.board import Board, MissingKingError
from minimax_chess.constants import DEFAULT_ALGORITHM, DEFAULT_DEPTH
from minimax_chess.moves import Move
from minimax_chess.search import SEARCH_ALGORITHMS, create_search

_log = logging.getLogger(__name__)

MAX_UCI_DEPTH: int = 8


def _send(line: str) -> None:
    """Print one protocol line and flush, so a GUI reading line by line sees it now."""
    print(line, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Holds the current board position and the engine settings, and manages the
    search thread lifecycle. The main UCI loop creates one instance and
    dispatches commands to it.

    Attributes:
        board:         The current position, replaced by "position" commands.
        depth:         Search depth used by "go" without a depth argument.
        algorithm:     Search algorithm name ("alphabeta" or "minimax").
        search_thread: The active search thread, or None.
    """

    def __init__(self) -> None:
        self.board: Board = Board.new()
        self.depth: int = DEFAULT_DEPTH
        self.algorithm: str = DEFAULT_ALGORITHM
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and list its options, then send "uciok"."""
        _send("id name MinimaxChess")
        _send("id author Minimax Chess Project")
        _send(
            f"option name Depth type spin default {DEFAULT_DEPTH} min 1 max {MAX_UCI_DEPTH}"
        )
        variants = " ".join(f"var {name}" for name in sorted(SEARCH_ALGORITHMS))
        _send(f"option name Algorithm type combo default {DEFAULT_ALGORITHM} {variants}")
        _send("uciok")

    def handle_isready(self) -> None:
        """Respond to "isready". There is no lazy initialization to wait for."""
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Wait for any running search, then reset to the starting position."""
        self._wait_for_search()
        self.board = Board.new()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = Board.new()
            move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        elif tokens[0] == "fen":
            # FEN strings have 6 space-separated fields; find where "moves" appears
            if "moves" in tokens:
                moves_idx = tokens.index("moves")
                fen = " ".join(tokens[1:moves_idx])
                move_tokens = tokens[moves_idx + 1:]
            else:
                fen = " ".join(tokens[1:])
                move_tokens = []
            try:
                board = Board.from_fen(fen)
                board.require_kings()
            except (ValueError, MissingKingError) as exc:
                _log.error("uci: invalid FEN in position command: %s", exc)
                return
        else:
            _log.warning("uci: unknown position type: %s", tokens[0])
            return

        # Replay the move list to reach the current position.
        for uci_move in move_tokens:
            move = Move.from_uci(uci_move)
            if move is None or not board.is_legal(move):
                _log.warning("uci: illegal move in position command: %s", uci_move)
                break
            board = board.push(move)

        self.board = board

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply "setoption name <Name> value <Value>".

        Supported options: Depth (1..MAX_UCI_DEPTH) and Algorithm.
        Invalid values are logged and ignored.
        """
        if "name" not in tokens or "value" not in tokens:
            _log.warning("uci: malformed setoption: %s", " ".join(tokens))
            return
        name_idx, value_idx = tokens.index("name"), tokens.index("value")
        name = " ".join(tokens[name_idx + 1:value_idx]).lower()
        value = " ".join(tokens[value_idx + 1:])

        if name == "depth":
            try:
                depth = int(value)
            except ValueError:
                _log.warning("uci: depth must be an integer, got %r", value)
                return
            if not 1 <= depth <= MAX_UCI_DEPTH:
                _log.warning("uci: depth out of range: %d", depth)
                return
            self.depth = depth
        elif name == "algorithm":
            if value.lower() not in SEARCH_ALGORITHMS:
                _log.warning("uci: unknown algorithm %r", value)
                return
            self.algorithm = value.lower()
        else:
            _log.warning("uci: unknown option %r", name)

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start a fixed-depth search for the side to move in a background thread.

        "go depth N" overrides the configured depth for this search; time
        control arguments are accepted and ignored.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        self._wait_for_search()
        depth = self._parse_go_depth(tokens)
        board = self.board
        engine = create_search(self.algorithm, board.turn, depth)

        def search_and_reply() -> None:
            """
            Run the search and emit the UCI info + bestmove lines.

            This closure runs in a daemon thread. The GUI will not make its
            next move until it receives the "bestmove" line, so one is sent
            on every path, including errors.
            """
            try:
                if not board.has_legal_move():
                    # No legal moves: the game is over (checkmate or stalemate).
                    _send("bestmove (none)")
                    return

                start = time.monotonic()
                result = engine.search_root(board)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
                nps = max(1, result.nodes * 1000 // elapsed_ms)
                # Scores are in pawn units; UCI expects centipawns.
                score_cp = int(round(result.score * 100))
                _send(
                    f"info depth {result.depth} score cp {score_cp} "
                    f"nodes {result.nodes} nps {nps} time {elapsed_ms}"
                )
                _send(f"bestmove {result.move.to_uci()}")

            except Exception:
                _log.exception("search error")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Wait for the running search; it sends its own "bestmove" line."""
        self._wait_for_search()

    def handle_quit(self) -> None:
        """Finish any search and exit the process without replying."""
        self._wait_for_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _wait_for_search(self) -> None:
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """Return the depth from "go depth N", clamped to 1..MAX_UCI_DEPTH."""
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return max(1, min(int(tokens[idx + 1]), MAX_UCI_DEPTH))
            except (ValueError, IndexError):
                _log.warning("uci: ignoring malformed depth in go command")
        return self.depth


def run_uci_loop() -> None:
    """
    Read UCI commands from stdin until "quit" or end of input.

    A failing command is logged to stderr and skipped; the engine keeps
    answering later commands.
    """
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Unknown commands are ignored, as the UCI protocol requires.
                _log.info("uci: ignoring unknown command: %r", command)

        except Exception:
            _log.exception("uci: unhandled error for command %r", command)

    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()

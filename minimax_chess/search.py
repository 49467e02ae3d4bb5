"""
Move selection: fixed-depth minimax and alpha-beta search.

Both engines search a fixed number of plies from the root and score leaves
with evaluate.evaluate(), converted to the engine's own colour: the engine is
always the maximizing player, its opponent always the minimizing one. The
public interface is the same for both:

    engine = AlphaBetaSearch(chess.BLACK, depth=3)
    move = engine.find_best_move(board)

Scoring conventions:
    - Leaves (depth exhausted or game over) return the engine-relative
      evaluation plus the remaining depth, so a result reached with more
      depth left over (i.e. sooner) scores higher.
    - A new value only counts as better when it beats the current one by
      more than constants.EPSILON. At the root this makes the first move
      found win ties, and both engines share the rule so they always agree
      on the chosen move.

Alpha-beta passes alpha and beta down the recursion by value. Each call
returns its value normally; nothing is shared between sibling calls except
the node counter in SearchState.

Threading model:
    With ``workers > 1`` the root moves are searched on a thread pool. Each
    worker owns its boards (boards are immutable), and the best (value, move)
    pair is read, compared and written under one lock, with ties going to
    the lower root index, so the chosen move is identical to a sequential
    search.
"""

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import chess

from minimax_chess.board import Board, GameResult
from minimax_chess.constants import EPSILON
from minimax_chess.evaluate import evaluate
from minimax_chess.moves import Move
from minimax_chess.pieces import color_name

_log = logging.getLogger(__name__)


class GameOverError(RuntimeError):
    """Raised when a best move is requested for a position with no legal moves."""


@dataclass
class SearchState:
    """
    Per-search bookkeeping.

    Attributes:
        nodes: Number of positions visited (one per call to search()).
    """

    nodes: int = 0


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move:         The chosen move.
        score:        Its value from the engine's perspective.
        nodes:        Positions visited during the whole search.
        depth:        The configured search depth in plies.
        scored_moves: (move, value) for every root move in legal-move order.
                      Alpha-beta values of non-best moves may be bounds
                      rather than exact scores.
    """

    move: Move
    score: float
    nodes: int
    depth: int
    scored_moves: list[tuple[Move, float]] = field(default_factory=list)


@dataclass
class _RootBest:
    """Best root move found so far by the parallel search (guarded by a lock)."""

    index: int | None = None
    value: float = -math.inf
    nodes: int = 0


def improves(current: float, candidate: float) -> bool:
    """True if ``candidate`` is better for the maximizer than ``current``."""
    return candidate - current > EPSILON


def lowers(current: float, candidate: float) -> bool:
    """True if ``candidate`` is better for the minimizer than ``current``."""
    return current - candidate > EPSILON


class Search:
    """
    Base class for the fixed-depth search engines.

    Args:
        color:   The colour the engine plays (chess.WHITE or chess.BLACK).
        depth:   Search depth in plies; must be at least 1.
        workers: Threads used to search root moves. 1 searches sequentially.

    Raises:
        ValueError: for a depth below 1, a non-player colour, or fewer than
            one worker.
    """

    name: str = "search"

    def __init__(self, color: chess.Color, depth: int, workers: int = 1) -> None:
        if color is not chess.WHITE and color is not chess.BLACK:
            raise ValueError(f"the engine must play white or black, got {color!r}")
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth!r}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers!r}")
        self.color: chess.Color = color
        self.depth: int = depth
        self.workers: int = workers

    def __repr__(self) -> str:
        return f"{type(self).__name__}({color_name(self.color)}, depth={self.depth})"

    # -----------------------------------------------------------------------
    # Evaluation
    # -----------------------------------------------------------------------

    def evaluate(self, board: Board) -> float:
        """Evaluator score of ``board`` from this engine's colour."""
        score = evaluate(board)
        return float(score if self.color == chess.WHITE else -score)

    def _leaf_value(self, board: Board, depth: int) -> float | None:
        """Return the leaf score, or None if the node must be expanded."""
        if depth == 0 or board.result() is not GameResult.ONGOING:
            return self.evaluate(board) + depth
        return None

    # -----------------------------------------------------------------------
    # Root move selection
    # -----------------------------------------------------------------------

    def find_best_move(self, board: Board) -> Move:
        """
        Return the move with the best value for this engine's colour.

        Raises:
            GameOverError: if ``board`` has no legal moves.
        """
        return self.search_root(board).move

    def search_root(self, board: Board) -> SearchResult:
        """
        Search every legal root move and return the best one with its score.

        Each root move is applied and its reply subtree searched one ply
        shorter, starting with the opponent (minimizing) to move. The best
        move is only replaced on a strict improvement, so the first move
        found wins ties.

        Raises:
            GameOverError: if ``board`` has no legal moves. Callers must not
                ask for a move once the game has ended.
        """
        moves = board.legal_moves()
        if not moves:
            raise GameOverError("no legal moves: the game is already over")

        if self.workers > 1 and len(moves) > 1:
            result = self._search_root_parallel(board, moves)
        else:
            result = self._search_root_sequential(board, moves)

        _log.info(
            "%r picked the move %s with value %s (%d nodes)",
            self, result.move, result.score, result.nodes,
        )
        return result

    def _search_root_sequential(self, board: Board, moves: list[Move]) -> SearchResult:
        state = SearchState()
        best_move: Move | None = None
        best_value = -math.inf
        scored_moves: list[tuple[Move, float]] = []

        for move in moves:
            value = self._root_child_value(board.push(move), state, best_value)
            scored_moves.append((move, value))
            _log.debug("root move %s -> %s", move, value)
            if best_move is None or improves(best_value, value):
                best_move = move
                best_value = value

        return SearchResult(best_move, best_value, state.nodes, self.depth, scored_moves)

    def _search_root_parallel(self, board: Board, moves: list[Move]) -> SearchResult:
        lock = threading.Lock()
        scored: list[tuple[Move, float] | None] = [None] * len(moves)
        best = _RootBest()

        def search_move(index: int, move: Move) -> None:
            state = SearchState()
            # Workers cannot see each other's results, so each searches with
            # a full window; only the aggregation below is shared.
            value = self._root_child_value(board.push(move), state, -math.inf)
            with lock:
                scored[index] = (move, value)
                best.nodes += state.nodes
                best_index = best.index
                if (
                    best_index is None
                    or improves(best.value, value)
                    or (not lowers(best.value, value) and index < best_index)
                ):
                    best.index = index
                    best.value = value

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = [pool.submit(search_move, i, m) for i, m in enumerate(moves)]
            for future in futures:
                future.result()

        return SearchResult(
            moves[best.index],
            best.value,
            best.nodes,
            self.depth,
            [entry for entry in scored if entry is not None],
        )

    def _root_child_value(self, child: Board, state: SearchState, best_value: float) -> float:
        """Value of a root child, searched by the concrete engine."""
        raise NotImplementedError


class MinimaxSearch(Search):
    """Plain minimax: every node is expanded to the full depth."""

    name = "minimax"

    def search(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        state: SearchState | None = None,
    ) -> float:
        """
        Minimax value of ``board`` searched ``depth`` plies deep.

        Args:
            board:      Position to score. Never modified.
            depth:      Remaining plies.
            maximizing: True when the engine's colour is to move.
            state:      Optional node counter shared across the search.

        Returns:
            Engine-relative value.
        """
        if state is None:
            state = SearchState()
        state.nodes += 1

        leaf = self._leaf_value(board, depth)
        if leaf is not None:
            return leaf

        if maximizing:
            value = -math.inf
            for move in board.legal_moves():
                child = self.search(board.push(move), depth - 1, False, state)
                if improves(value, child):
                    value = child
        else:
            value = math.inf
            for move in board.legal_moves():
                child = self.search(board.push(move), depth - 1, True, state)
                if lowers(value, child):
                    value = child
        return value

    def _root_child_value(self, child: Board, state: SearchState, best_value: float) -> float:
        return self.search(child, self.depth - 1, False, state)


class AlphaBetaSearch(Search):
    """
    Minimax with alpha-beta pruning.

    Visits no more nodes than MinimaxSearch at the same depth and always picks
    the same root move.
    """

    name = "alphabeta"

    def search(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        state: SearchState | None = None,
        alpha: float = -math.inf,
        beta: float = math.inf,
    ) -> float:
        """
        Alpha-beta value of ``board`` searched ``depth`` plies deep.

        alpha is the value the maximizer can already guarantee elsewhere in
        the tree, beta the value the minimizer can. A maximizing node stops
        once its value reaches beta and a minimizing node once its value
        drops to alpha: the opponent would never allow that line, so the
        remaining siblings cannot change the result.

        The return value is exact when it lies strictly inside (alpha, beta);
        otherwise it is a bound on the true value on the failing side.
        """
        if state is None:
            state = SearchState()
        state.nodes += 1

        leaf = self._leaf_value(board, depth)
        if leaf is not None:
            return leaf

        if maximizing:
            value = -math.inf
            for move in board.legal_moves():
                child = self.search(board.push(move), depth - 1, False, state, alpha, beta)
                if improves(value, child):
                    value = child
                if value >= beta:
                    break
                alpha = max(alpha, value)
        else:
            value = math.inf
            for move in board.legal_moves():
                child = self.search(board.push(move), depth - 1, True, state, alpha, beta)
                if lowers(value, child):
                    value = child
                if value <= alpha:
                    break
                beta = min(beta, value)
        return value

    def _root_child_value(self, child: Board, state: SearchState, best_value: float) -> float:
        # The best root value so far is the root's alpha: replies that cannot
        # beat it are cut off as soon as that is proven.
        return self.search(child, self.depth - 1, False, state, best_value, math.inf)


SEARCH_ALGORITHMS: dict[str, type[Search]] = {
    MinimaxSearch.name: MinimaxSearch,
    AlphaBetaSearch.name: AlphaBetaSearch,
}


def create_search(algorithm: str, color: chess.Color, depth: int, workers: int = 1) -> Search:
    """
    Build a search engine by name ("minimax" or "alphabeta").

    Raises:
        ValueError: for an unknown algorithm name or invalid engine settings.
    """
    try:
        engine_class = SEARCH_ALGORITHMS[algorithm.lower()]
    except KeyError:
        known = ", ".join(sorted(SEARCH_ALGORITHMS))
        raise ValueError(f"unknown search algorithm {algorithm!r} (expected one of: {known})") from None
    return engine_class(color, depth, workers=workers)

#!/usr/bin/env python3
"""
Benchmark: move generation speed and minimax vs alpha-beta node counts.

Run before and after a change to the board or search code to quantify the
effect. For each position both search variants run at the same depth; they
must pick the same move, and alpha-beta should visit far fewer nodes.

Usage: python3 tools/bench.py
"""
import os
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from minimax_chess.board import Board  # noqa: E402
from minimax_chess.search import AlphaBetaSearch, MinimaxSearch  # noqa: E402

MOVEGEN_ITERATIONS = 200
SEARCH_DEPTH = 2

# Fixed positions, kept identical across versions so results stay comparable.
POSITIONS = [
    ("Start",        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"),
    ("Scholar trap", "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5Q2/PPPP1PPP/RNB1K1NR b - - 0 1"),
    ("Mate in one",  "8/8/8/8/8/2K5/2Q5/k7 w - - 0 1"),
    ("Free queen",   "7k/8/8/8/8/8/2q5/1K6 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
]


def bench_movegen() -> None:
    """Time legal-move generation on the initial position."""
    start = time.perf_counter()
    for _ in range(MOVEGEN_ITERATIONS):
        # A fresh board each time: legal moves are cached per instance.
        Board.new().legal_moves()
    elapsed = time.perf_counter() - start
    per_call_ms = elapsed * 1000 / MOVEGEN_ITERATIONS
    print(f"Move generation (initial position): {per_call_ms:.3f} ms per call")
    print()


def run_position(label: str, fen: str) -> dict:
    """
    Search one position with both engines and return their metrics.

    Returns:
        Dict with keys: label, move, agree, mm_nodes, ab_nodes, mm_ms, ab_ms.
    """
    board = Board.from_fen(fen)

    start = time.perf_counter()
    mm = MinimaxSearch(board.turn, SEARCH_DEPTH).search_root(board)
    mm_ms = int((time.perf_counter() - start) * 1000)

    start = time.perf_counter()
    ab = AlphaBetaSearch(board.turn, SEARCH_DEPTH).search_root(board)
    ab_ms = int((time.perf_counter() - start) * 1000)

    return {
        "label": label,
        "move": ab.move.to_uci(),
        "agree": mm.move == ab.move,
        "mm_nodes": mm.nodes,
        "ab_nodes": ab.nodes,
        "mm_ms": mm_ms,
        "ab_ms": ab_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    print(f"Minimax chess benchmark ({sys.executable})")
    print()
    bench_movegen()

    print(f"Search depth {SEARCH_DEPTH}")
    print(
        f"{'Position':<14} {'Move':<6} {'Same':>4} {'MM nodes':>9} "
        f"{'AB nodes':>9} {'MM ms':>7} {'AB ms':>7}"
    )
    print("-" * 62)

    results = []
    for label, fen in POSITIONS:
        r = run_position(label, fen)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<6} {'yes' if r['agree'] else 'NO':>4} "
            f"{r['mm_nodes']:>9,} {r['ab_nodes']:>9,} {r['mm_ms']:>7,} {r['ab_ms']:>7,}"
        )

    total_mm = sum(r["mm_nodes"] for r in results)
    total_ab = sum(r["ab_nodes"] for r in results)
    print("-" * 62)
    print(f"{'TOTAL':<14} {'':<6} {'':>4} {total_mm:>9,} {total_ab:>9,}")
    if total_mm:
        print(f"Alpha-beta visits {100 * total_ab / total_mm:.1f}% of minimax nodes.")


if __name__ == "__main__":
    main()

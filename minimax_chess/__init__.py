"""
Minimax chess package.

This package implements a self-contained chess rules engine and a game-tree
search opponent. Move legality is computed by the package itself; python-chess
is only used for its colour/piece value types, square names and FEN parsing.

Modules:
    constants: Piece values, terminal scores, and search parameters
    pieces   : Piece kinds, colours, and geometric move patterns
    moves    : The Move value type and its text formats
    movegen  : Obstruction-aware reachability and pseudo-legal moves
    board    : Immutable board, legal moves, check and game result
    evaluate : Static material evaluation
    search   : Minimax and alpha-beta move selection
    game     : Game wrapper used by the CLI, UCI and web layers
"""

from minimax_chess.board import Board, GameResult, MissingKingError
from minimax_chess.game import Game, IllegalMoveError
from minimax_chess.moves import Move
from minimax_chess.search import (
    AlphaBetaSearch,
    GameOverError,
    MinimaxSearch,
    SearchResult,
    create_search,
)

__all__ = [
    "AlphaBetaSearch",
    "Board",
    "Game",
    "GameOverError",
    "GameResult",
    "IllegalMoveError",
    "MinimaxSearch",
    "MissingKingError",
    "Move",
    "SearchResult",
    "create_search",
]

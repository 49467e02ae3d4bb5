import chess
import pytest

from helpers import place
from minimax_chess.board import Board, GameResult
from minimax_chess.moves import Move
from minimax_chess.search import (
    AlphaBetaSearch,
    GameOverError,
    MinimaxSearch,
    create_search,
    improves,
    lowers,
)

ENGINES = [MinimaxSearch, AlphaBetaSearch]

SCHOLAR_TRAP = "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5Q2/PPPP1PPP/RNB1K1NR b - - 0 1"

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("engine_class", ENGINES)
@pytest.mark.parametrize("depth", [0, -1, True, 2.0])
def test_invalid_depth_is_rejected(engine_class, depth) -> None:
    with pytest.raises(ValueError):
        engine_class(chess.WHITE, depth)


@pytest.mark.parametrize("engine_class", ENGINES)
@pytest.mark.parametrize("color", [None, 1, "white"])
def test_engine_must_play_a_colour(engine_class, color) -> None:
    with pytest.raises(ValueError):
        engine_class(color, 3)


def test_workers_must_be_positive() -> None:
    with pytest.raises(ValueError):
        AlphaBetaSearch(chess.WHITE, 2, workers=0)


def test_create_search_by_name() -> None:
    engine = create_search("MiniMax", chess.BLACK, 2)
    assert isinstance(engine, MinimaxSearch)
    assert engine.color == chess.BLACK
    assert engine.depth == 2
    assert isinstance(create_search("alphabeta", chess.WHITE, 1, workers=2), AlphaBetaSearch)
    with pytest.raises(ValueError):
        create_search("negamax", chess.WHITE, 2)


# ---------------------------------------------------------------------------
# Comparisons and leaf scores
# ---------------------------------------------------------------------------


def test_improvement_needs_more_than_epsilon() -> None:
    assert improves(0.0, 5.0)
    assert not improves(5.0, 0.0)
    assert not improves(1.0, 1.0 + 1e-7)
    assert lowers(5.0, 0.0)
    assert not lowers(0.0, 5.0)
    assert not lowers(1.0, 1.0 - 1e-7)


def test_evaluate_is_relative_to_the_engine_colour() -> None:
    board = place({(4, 0): "K", (4, 7): "k", (0, 1): "Q"})
    assert MinimaxSearch(chess.WHITE, 1).evaluate(board) == 9.0
    assert MinimaxSearch(chess.BLACK, 1).evaluate(board) == -9.0


def test_terminal_leaf_gets_remaining_depth_bonus(scholars_mate: Board) -> None:
    assert MinimaxSearch(chess.WHITE, 3).search(scholars_mate, 2, False) == 202.0
    assert AlphaBetaSearch(chess.BLACK, 3).search(scholars_mate, 2, True) == -198.0


# ---------------------------------------------------------------------------
# Move choice
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("engine_class", ENGINES)
def test_white_finds_mate_in_one(engine_class, mate_in_one: Board) -> None:
    result = engine_class(chess.WHITE, 3).search_root(mate_in_one)
    assert result.move == Move.parse("2 1 1 1")
    assert result.score == 202.0
    assert mate_in_one.push(result.move).result() is GameResult.WHITE_WIN


@pytest.mark.parametrize("engine_class", ENGINES)
def test_black_finds_mate_in_one(engine_class, black_mate_in_one: Board) -> None:
    move = engine_class(chess.BLACK, 3).find_best_move(black_mate_in_one)
    assert move == Move.parse("2 1 1 1")


@pytest.mark.parametrize("engine_class", ENGINES)
def test_king_takes_free_queen(engine_class, free_queen: Board) -> None:
    result = engine_class(chess.WHITE, 3).search_root(free_queen)
    assert result.move == Move.parse("1 0 2 1")
    assert result.score == 0.0


@pytest.mark.parametrize("engine_class", ENGINES)
def test_first_move_wins_ties(engine_class) -> None:
    result = engine_class(chess.WHITE, 1).search_root(Board.new())
    assert result.move == Move((0, 1), (0, 2))
    assert result.nodes == 20
    assert [move for move, _ in result.scored_moves] == Board.new().legal_moves()


@pytest.mark.parametrize("engine_class", ENGINES)
def test_no_legal_moves_raises(engine_class, scholars_mate: Board, stalemate: Board) -> None:
    with pytest.raises(GameOverError):
        engine_class(chess.BLACK, 2).find_best_move(scholars_mate)
    with pytest.raises(GameOverError):
        engine_class(chess.WHITE, 2).find_best_move(stalemate)


def test_search_leaves_the_board_untouched(mate_in_one: Board) -> None:
    snapshot = mate_in_one.fen()
    AlphaBetaSearch(chess.WHITE, 3).find_best_move(mate_in_one)
    assert mate_in_one.fen() == snapshot


def test_black_avoids_scholars_mate() -> None:
    board = Board.from_fen(SCHOLAR_TRAP)
    reply = AlphaBetaSearch(chess.BLACK, 2).find_best_move(board)
    after = board.push(reply)
    for move in after.legal_moves():
        assert after.push(move).result() is not GameResult.WHITE_WIN, move


@pytest.mark.slow
@pytest.mark.parametrize("engine_class", ENGINES)
def test_black_avoids_scholars_mate_at_depth_three(engine_class) -> None:
    board = Board.from_fen(SCHOLAR_TRAP)
    reply = engine_class(chess.BLACK, 3).find_best_move(board)
    after = board.push(reply)
    for move in after.legal_moves():
        assert after.push(move).result() is not GameResult.WHITE_WIN, move


# ---------------------------------------------------------------------------
# Alpha-beta agreement and parallel root
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("fixture_name", ["mate_in_one", "black_mate_in_one", "free_queen"])
def test_alphabeta_agrees_with_minimax(fixture_name: str, request: pytest.FixtureRequest) -> None:
    board = request.getfixturevalue(fixture_name)
    mm = MinimaxSearch(board.turn, 3).search_root(board)
    ab = AlphaBetaSearch(board.turn, 3).search_root(board)
    assert ab.move == mm.move
    assert ab.score == pytest.approx(mm.score)
    assert ab.nodes <= mm.nodes


def test_alphabeta_prunes(free_queen: Board) -> None:
    mm = MinimaxSearch(chess.WHITE, 3).search_root(free_queen)
    ab = AlphaBetaSearch(chess.WHITE, 3).search_root(free_queen)
    assert ab.nodes < mm.nodes


def test_small_position_agreement() -> None:
    board = Board.from_fen("4k3/8/8/3q4/8/2N5/8/4K3 w - - 0 1")
    mm = MinimaxSearch(chess.WHITE, 2).search_root(board)
    ab = AlphaBetaSearch(chess.WHITE, 2).search_root(board)
    assert ab.move == mm.move
    assert ab.score == pytest.approx(mm.score)


@pytest.mark.parametrize("engine_class", ENGINES)
def test_parallel_root_matches_sequential(engine_class, mate_in_one: Board, free_queen: Board) -> None:
    for board in (mate_in_one, free_queen):
        sequential = engine_class(chess.WHITE, 3).search_root(board)
        parallel = engine_class(chess.WHITE, 3, workers=4).search_root(board)
        assert parallel.move == sequential.move
        assert parallel.score == pytest.approx(sequential.score)
        assert [m for m, _ in parallel.scored_moves] == board.legal_moves()


def test_parallel_minimax_scores_every_move_exactly(mate_in_one: Board) -> None:
    sequential = MinimaxSearch(chess.WHITE, 2).search_root(mate_in_one)
    parallel = MinimaxSearch(chess.WHITE, 2, workers=3).search_root(mate_in_one)
    assert parallel.scored_moves == sequential.scored_moves
    assert parallel.nodes == sequential.nodes

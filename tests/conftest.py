import pytest

from helpers import place, play
from minimax_chess.board import Board


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.slow (full-board searches)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="use --runslow to enable slow searches")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def mate_in_one() -> Board:
    """White: K(2,2) Q(2,1); Black: K(0,0). White mates with Q to (1,1)."""
    return place({(2, 2): "K", (2, 1): "Q", (0, 0): "k"})


@pytest.fixture
def black_mate_in_one() -> Board:
    """Mirror of mate_in_one with colours swapped and Black to move."""
    board = place({(1, 0): "K", (2, 2): "k", (2, 1): "q"})
    return board.apply_move((1, 0), (0, 0))


@pytest.fixture
def free_queen() -> Board:
    """White king on (1,0) can take an undefended black queen on (2,1)."""
    return place({(1, 0): "K", (7, 7): "k", (2, 1): "q"})


@pytest.fixture
def stalemate() -> Board:
    """White to move, not in check, with no legal move."""
    return place({(0, 0): "K", (0, 5): "k", (2, 1): "q"})


@pytest.fixture
def scholars_mate() -> Board:
    """White queen has just taken f7: Black is checkmated."""
    board = play(
        Board.new(),
        (4, 1, 5, 2), (1, 7, 0, 5),
        (3, 0, 5, 2), (0, 5, 1, 7),
        (5, 0, 2, 3), (1, 7, 0, 5),
    )
    return board.apply_move((5, 2), (5, 6))

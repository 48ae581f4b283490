"""
Pytest configuration and shared fixtures.
"""
import random
from typing import List, Optional, Sequence, Tuple

import pytest

from minefield import Board, BoardConfig, Cell, Minesweeper


# ============================================================================
# Deterministic Collaborators
# ============================================================================

class FixedLayoutRandom(random.Random):
    """Random source whose sample() always returns a fixed mine layout."""

    def __init__(self, mines: Sequence[Tuple[int, int]]) -> None:
        super().__init__(0)
        self.mines = list(mines)
        self.populations: List[list] = []

    def sample(self, population, k, **kwargs):
        self.populations.append(list(population))
        assert k == len(self.mines)
        for position in self.mines:
            assert position in population
        return list(self.mines)


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_board(
    width: int, height: int, mines: Sequence[Tuple[int, int]]
) -> Board:
    """Build a board whose first reveal lays out exactly ``mines``."""
    return Board(
        BoardConfig(width, height, len(mines)), FixedLayoutRandom(mines)
    )


def make_game(
    width: int,
    height: int,
    mines: Sequence[Tuple[int, int]],
    clock: Optional[FakeClock] = None,
) -> Minesweeper:
    """Build an engine whose first reveal lays out exactly ``mines``."""
    return Minesweeper(
        BoardConfig(width, height, len(mines)),
        rng=FixedLayoutRandom(mines),
        clock=clock or FakeClock(),
    )


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a seeded 9x9 board with 10 mines."""
    return Board(BoardConfig(9, 9, 10), random.Random(1234))


@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with its single mine in the (2, 2) corner."""
    return make_board(3, 3, [(2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def board_factory():
    """Build boards with a fixed mine layout."""
    return make_board


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def game_factory(clock: FakeClock):
    """Build engines with a fixed mine layout sharing the test clock."""
    def factory(width, height, mines):
        return make_game(width, height, mines, clock)
    return factory


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def small_game(clock: FakeClock) -> Minesweeper:
    """Create a 3x3 engine with its single mine at (2, 2)."""
    return make_game(3, 3, [(2, 2)], clock)


@pytest.fixture
def beginner_game(clock: FakeClock) -> Minesweeper:
    """Create a seeded beginner engine."""
    return Minesweeper(BoardConfig(9, 9, 10), seed=42, clock=clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)

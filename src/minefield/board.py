"""
Board module for the Minesweeper engine.

Implements the game board with lazy mine placement, cell revealing
with flood fill, flag toggling, and win/lose detection.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, CellView


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 16
    height: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that do not hold a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Positions are ``(x, y)`` with ``x`` the
    column and ``y`` the row; the grid itself is stored row-major.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, avoid_x: int, avoid_y: int) -> None:
        """
        Place mines randomly, keeping one cell mine-free.

        Every layout of ``num_mines`` cells that excludes the avoided
        cell is equally likely.

        Args:
            avoid_x: Column of the first reveal.
            avoid_y: Row of the first reveal.

        Raises:
            RuntimeError: If mines were already placed in this game.
        """
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed for this game")

        positions = self._get_valid_mine_positions((avoid_x, avoid_y))
        mine_positions = self.rng.sample(positions, self.config.num_mines)
        for x, y in mine_positions:
            self._grid[y][x].is_mine = True

        self._calculate_adjacent_mines()
        self._mines_placed = True
        logger.debug(
            "Placed %d mines avoiding (%d, %d)",
            self.config.num_mines, avoid_x, avoid_y,
        )

    def _get_valid_mine_positions(self, exclude: Position) -> List[Position]:
        """Get all valid positions for mine placement."""
        positions = []
        for y in range(self.config.height):
            for x in range(self.config.width):
                if (x, y) != exclude:
                    positions.append((x, y))
        return positions

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                if not self._grid[y][x].is_mine:
                    self._grid[y][x].adjacent_mines = (
                        self._count_adjacent_mines(x, y)
                    )

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_x, neighbor_y in self.get_neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first reveal of a game, places mines avoiding this cell.
        If cell is empty (0 adjacent mines), flood fills its region.
        If cell is a mine, game is lost and every mine is shown.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if the cell was revealed, False for a no-op.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self.is_valid_position(x, y):
            return False

        if not self._mines_placed:
            self.place_mines(x, y)

        return self._reveal_cell(x, y)

    def _reveal_cell(self, x: int, y: int) -> bool:
        """Reveal a single cell and handle consequences."""
        cell = self._grid[y][x]
        if not cell.reveal():
            return False

        if cell.is_mine:
            self._game_state = GameState.LOST
            self._reveal_all_mines()
            return True

        if cell.adjacent_mines == 0:
            self._flood_fill(x, y)

        self._check_win_condition()
        return True

    def _flood_fill(self, x: int, y: int) -> None:
        """Reveal the zero region around (x, y) and its numbered border."""
        stack = [(x, y)]
        while stack:
            current_x, current_y = stack.pop()
            for neighbor_x, neighbor_y in self.get_neighbors(current_x, current_y):
                neighbor = self._grid[neighbor_y][neighbor_x]
                if not neighbor.reveal():
                    continue
                if neighbor.adjacent_mines == 0:
                    stack.append((neighbor_x, neighbor_y))

    def _reveal_all_mines(self) -> None:
        """Show every mine, flagged ones included."""
        for row in self._grid:
            for cell in row:
                if cell.is_mine:
                    cell.state = CellState.REVEALED

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        for row in self._grid:
            for cell in row:
                if not cell.is_mine and not cell.is_revealed:
                    return
        self._game_state = GameState.WON

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            x: Column.
            y: Row.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self.is_valid_position(x, y):
            return False
        return self._grid[y][x].toggle_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mines_placed(self) -> bool:
        """Whether the first reveal has laid out the mines."""
        return self._mines_placed

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def cell_view(self, x: int, y: int) -> Optional[CellView]:
        """Get the driver-facing view of a cell, or None if invalid."""
        if not self.is_valid_position(x, y):
            return None
        return self._grid[y][x].view()

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (x, y, cell) for every cell in row-major order."""
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                yield x, y, cell

    def count_state(self, state: CellState) -> int:
        """Count cells currently in the given state."""
        return sum(1 for _, _, cell in self.iter_cells() if cell.state == state)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for x, y, cell in self.iter_cells():
            obs[y, x] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of valid cells to reveal.

        Returns:
            List of (x, y) positions that are still hidden.
        """
        return [(x, y) for x, y, cell in self.iter_cells() if cell.is_hidden]

    def seed(self, value: Optional[int]) -> None:
        """Reseed the random source used for mine placement."""
        self.rng.seed(value)

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._game_state = GameState.PLAYING
        self._mines_placed = False

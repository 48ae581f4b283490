"""
Board engine facade.

Combines a Board with its Session and exposes the input and output
contracts a driver (terminal loop, GUI, RL environment) works with.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, NamedTuple, Optional, Tuple

from .board import Board, BoardConfig, GameState
from .cell import CellView
from .session import Session


logger = logging.getLogger(__name__)


# ============================================================================
# Driver Contracts
# ============================================================================

class ClickKind(Enum):
    """Gesture kinds a driver translates raw input into."""

    REVEAL = auto()
    FLAG = auto()
    RESET = auto()


class Snapshot(NamedTuple):
    """Everything a driver needs to draw one frame."""

    width: int
    height: int
    game_state: GameState
    mines_left: int
    elapsed_seconds: int
    cells: Tuple[Tuple[CellView, ...], ...]

    def cell(self, x: int, y: int) -> CellView:
        """Get the view at (x, y)."""
        return self.cells[y][x]


# ============================================================================
# Engine
# ============================================================================

class Minesweeper:
    """
    Single-player Minesweeper engine.

    Mines are placed lazily on the first reveal so the first click is
    never a mine. Once the game is won or lost, reveal and flag requests
    are ignored until ``reset``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Board configuration (default: 16x16 with 40 mines).
            rng: Random source for mine placement.
            clock: Zero-argument callable returning seconds.
            seed: Seed for a fresh random source when ``rng`` is omitted.
        """
        self.config = config or BoardConfig()
        self._clock = clock
        self._board = Board(self.config, rng or random.Random(seed))
        self._session = self._new_session()

    def _new_session(self) -> Session:
        return Session(mines_left=self.config.num_mines, clock=self._clock)

    # ========================================================================
    # Input Contract
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at (x, y).

        The first in-bounds reveal of a game places the mines around it
        and starts the clock.

        Returns:
            True if at least the target cell was revealed.
        """
        if not self._board.is_playing:
            return False
        if not self._board.is_valid_position(x, y):
            return False

        if not self._session.first_click_done:
            if not self._board.mines_placed:
                self._board.place_mines(x, y)
            self._session.start()
            logger.debug("Game started with first reveal at (%d, %d)", x, y)

        revealed = self._board.reveal(x, y)
        if revealed and not self._board.is_playing:
            self._finish()
        return revealed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Flag or unflag the cell at (x, y).

        Returns:
            True if the flag was toggled.
        """
        if not self._board.toggle_flag(x, y):
            return False
        if self._board.get_cell(x, y).is_flagged:
            self._session.flag_placed()
        else:
            self._session.flag_removed()
        return True

    def reset(self) -> None:
        """Start a new game with the same configuration and random source."""
        self._board.reset()
        self._session = self._new_session()
        logger.debug("Board reset")

    def click(self, kind: ClickKind, x: int = 0, y: int = 0) -> bool:
        """
        Apply a driver gesture.

        Args:
            kind: What the gesture means.
            x: Column (ignored for RESET).
            y: Row (ignored for RESET).

        Returns:
            True if the engine state changed.
        """
        if kind == ClickKind.REVEAL:
            return self.reveal(x, y)
        if kind == ClickKind.FLAG:
            return self.toggle_flag(x, y)
        self.reset()
        return True

    def seed(self, value: Optional[int]) -> None:
        """Reseed the random source used for future mine placement."""
        self._board.seed(value)

    def _finish(self) -> None:
        self._session.stop()
        logger.info(
            "Game %s after %d seconds",
            self._board.game_state.name.lower(),
            self._session.elapsed_seconds,
        )

    # ========================================================================
    # Output Contract
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def game_state(self) -> GameState:
        return self._board.game_state

    @property
    def mines_left(self) -> int:
        return self._session.mines_left

    @property
    def first_click_done(self) -> bool:
        return self._session.first_click_done

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the first reveal, 0..999, frozen at game end."""
        return self._session.tick()

    def tick(self) -> int:
        """Advance the clock for this frame and return elapsed seconds."""
        return self._session.tick()

    def cell_view(self, x: int, y: int) -> Optional[CellView]:
        """Get the view of (x, y), or None if out of bounds."""
        return self._board.cell_view(x, y)

    def snapshot(self) -> Snapshot:
        """Capture the published state for one frame."""
        cells = tuple(
            tuple(self._board.cell_view(x, y) for x in range(self.width))
            for y in range(self.height)
        )
        return Snapshot(
            width=self.width,
            height=self.height,
            game_state=self.game_state,
            mines_left=self.mines_left,
            elapsed_seconds=self.tick(),
            cells=cells,
        )

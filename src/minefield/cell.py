"""
Cell module for the Minesweeper engine.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number), plus the
read-only view handed to drivers for rendering.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import NamedTuple, Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


class CellView(NamedTuple):
    """
    What a driver is allowed to see of a cell.

    Attributes:
        state: Current visual state.
        is_mine: Mine flag, or None while the cell is not revealed.
        adjacent_mines: Neighbour count for a revealed non-mine cell,
            None otherwise.
    """

    state: CellState
    is_mine: Optional[bool] = None
    adjacent_mines: Optional[int] = None


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def view(self) -> CellView:
        """
        Build the driver-facing view of this cell.

        Mine and count information is only exposed once the cell is
        revealed, so unrevealed content never reaches the renderer.
        """
        if self.state != CellState.REVEALED:
            return CellView(self.state)
        if self.is_mine:
            return CellView(self.state, True, None)
        return CellView(self.state, False, self.adjacent_mines)

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines

"""
Minesweeper board engine.

Provides core game logic including board management, cell state,
the game clock, and drivers built on top of them.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameState,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .session import Session, MAX_DISPLAY_SECONDS
from .engine import ClickKind, Minesweeper, Snapshot
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameState",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "Session",
    "MAX_DISPLAY_SECONDS",
    "ClickKind",
    "Minesweeper",
    "Snapshot",
    "MinesweeperEnv",
]

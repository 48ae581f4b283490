"""
Text rendering of engine snapshots for terminal drivers.
"""
from typing import List

from .board import GameState
from .cell import CellState, CellView
from .engine import Snapshot


FACES = {
    GameState.PLAYING: ":)",
    GameState.WON: "B)",
    GameState.LOST: "X(",
}


def format_counter(value: int) -> str:
    """
    Format a value for a three-character counter display.

    Values are clamped to -99..999, so an over-flagged board shows
    ``-05`` rather than growing wider.
    """
    value = max(-99, min(value, 999))
    return f"{value:03d}"


def face_for(game_state: GameState) -> str:
    """Get the status face for a game state."""
    return FACES[game_state]


def render_cell(view: CellView) -> str:
    """Render a single cell as one character."""
    if view.state == CellState.HIDDEN:
        return "."
    if view.state == CellState.FLAGGED:
        return "F"
    if view.is_mine:
        return "*"
    if view.adjacent_mines == 0:
        return " "
    return str(view.adjacent_mines)


def render_board(snapshot: Snapshot) -> str:
    """Render the board grid, one line per row."""
    lines = []
    for row in snapshot.cells:
        lines.append(" ".join(render_cell(view) for view in row))
    return "\n".join(lines)


def render_snapshot(snapshot: Snapshot) -> str:
    """Render the counter/face/timer header followed by the board."""
    header: List[str] = [
        format_counter(snapshot.mines_left),
        face_for(snapshot.game_state),
        format_counter(snapshot.elapsed_seconds),
    ]
    return " ".join(header) + "\n" + render_board(snapshot)

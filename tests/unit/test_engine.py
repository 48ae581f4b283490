"""
Unit tests for the Minesweeper engine facade.

Tests the first-click lifecycle, the clock, the mine counter, the
driver input/output contracts, and reset.
"""
import logging

import pytest
from minefield import (
    BoardConfig,
    CellState,
    CellView,
    ClickKind,
    GameState,
    Minesweeper,
)


WALL = [(2, 0), (2, 1), (2, 2)]


# ============================================================================
# Lifecycle Tests
# ============================================================================

class TestInitialState:
    """Test a freshly created engine."""

    def test_new_engine_state(self, beginner_game: Minesweeper) -> None:
        """Playing, full counter, idle clock, nothing visible."""
        assert beginner_game.game_state == GameState.PLAYING
        assert beginner_game.mines_left == 10
        assert beginner_game.elapsed_seconds == 0
        assert beginner_game.first_click_done is False

        snapshot = beginner_game.snapshot()
        assert (snapshot.width, snapshot.height) == (9, 9)
        for row in snapshot.cells:
            for view in row:
                assert view == CellView(CellState.HIDDEN)

    def test_invalid_config_rejected_at_construction(self) -> None:
        """Too many mines is a startup error."""
        with pytest.raises(ValueError):
            Minesweeper(BoardConfig(2, 2, 4))


class TestFirstClick:
    """Test lazy mine placement and clock start."""

    def test_first_reveal_places_mines_and_starts_clock(
        self, beginner_game: Minesweeper, clock
    ) -> None:
        """The first reveal is safe and starts the timer."""
        clock.advance(20)
        assert beginner_game.reveal(4, 4) is True

        assert beginner_game.first_click_done is True
        assert beginner_game.board.mines_placed is True
        assert beginner_game.cell_view(4, 4).is_mine is False
        assert beginner_game.elapsed_seconds == 0

    def test_out_of_bounds_first_reveal_does_not_start(
        self, beginner_game: Minesweeper
    ) -> None:
        """Unchecked driver coordinates are ignored."""
        assert beginner_game.reveal(9, 9) is False
        assert beginner_game.first_click_done is False
        assert beginner_game.board.mines_placed is False

    def test_mines_placed_directly_are_kept(self, small_game: Minesweeper) -> None:
        """A layout placed before the first reveal is not replaced."""
        small_game.board.place_mines(0, 0)
        small_game.reveal(2, 2)

        assert small_game.game_state == GameState.LOST
        assert small_game.first_click_done is True


# ============================================================================
# Concrete Scenarios
# ============================================================================

class TestCornerScenarios:
    """3x3 board with a single mine at (2, 2)."""

    def test_reveal_far_corner_wins(self, small_game: Minesweeper) -> None:
        """One reveal at (0, 0) floods every safe cell and wins."""
        small_game.reveal(0, 0)

        assert small_game.game_state == GameState.WON
        snapshot = small_game.snapshot()
        hidden = [
            (x, y)
            for y in range(3)
            for x in range(3)
            if snapshot.cell(x, y).state == CellState.HIDDEN
        ]
        assert hidden == [(2, 2)]

    def test_flag_after_win_has_no_effect(self, small_game: Minesweeper) -> None:
        """Finished games ignore flags and keep their counter."""
        small_game.reveal(0, 0)

        assert small_game.toggle_flag(2, 2) is False
        assert small_game.mines_left == 1
        assert small_game.game_state == GameState.WON
        assert small_game.cell_view(2, 2).state == CellState.HIDDEN

    def test_reveal_mine_loses_with_only_the_mine_shown(
        self, small_game: Minesweeper
    ) -> None:
        """Only (2, 2) is revealed, and it shows as a mine."""
        small_game.board.place_mines(0, 0)
        small_game.reveal(2, 2)

        assert small_game.game_state == GameState.LOST
        snapshot = small_game.snapshot()
        for y in range(3):
            for x in range(3):
                view = snapshot.cell(x, y)
                if (x, y) == (2, 2):
                    assert view == CellView(CellState.REVEALED, True, None)
                else:
                    assert view == CellView(CellState.HIDDEN)


# ============================================================================
# Clock Tests
# ============================================================================

class TestClock:
    """Test elapsed time through the engine."""

    def test_clock_freezes_when_game_ends(self, game_factory, clock) -> None:
        """The timer stops at the losing click."""
        game = game_factory(5, 3, WALL)
        game.reveal(0, 0)
        clock.advance(12.25)
        assert game.tick() == 12
        clock.advance(3)
        game.reveal(2, 0)

        clock.advance(40)
        assert game.game_state == GameState.LOST
        assert game.elapsed_seconds == 15
        assert game.snapshot().elapsed_seconds == 15

    def test_clock_caps_at_999(self, game_factory, clock) -> None:
        """The display never exceeds three digits."""
        game = game_factory(5, 3, WALL)
        game.reveal(0, 0)
        clock.advance(12345)
        assert game.game_state == GameState.PLAYING
        assert game.elapsed_seconds == 999


# ============================================================================
# Flag Counter Tests
# ============================================================================

class TestMineCounter:
    """Test mines_left bookkeeping."""

    def test_toggle_flag_is_its_own_inverse(
        self, beginner_game: Minesweeper
    ) -> None:
        """Flag then unflag restores both the cell and the counter."""
        before = beginner_game.cell_view(3, 3)
        assert beginner_game.toggle_flag(3, 3) is True
        assert beginner_game.mines_left == 9
        assert beginner_game.cell_view(3, 3).state == CellState.FLAGGED
        assert beginner_game.toggle_flag(3, 3) is True
        assert beginner_game.mines_left == 10
        assert beginner_game.cell_view(3, 3) == before

    def test_counter_goes_negative(self, small_game: Minesweeper) -> None:
        """Over-flagging is allowed and shown as a negative count."""
        for x in range(3):
            small_game.toggle_flag(x, 0)
        assert small_game.mines_left == -2

    def test_flag_does_not_start_clock(self, beginner_game: Minesweeper) -> None:
        """Flags before the first reveal leave the game unstarted."""
        beginner_game.toggle_flag(0, 0)
        assert beginner_game.first_click_done is False
        assert beginner_game.board.mines_placed is False

    def test_rejected_flags_leave_counter_alone(
        self, beginner_game: Minesweeper
    ) -> None:
        """Revealed and out-of-bounds cells cannot be flagged."""
        beginner_game.reveal(4, 4)
        assert beginner_game.toggle_flag(4, 4) is False
        assert beginner_game.toggle_flag(-1, 0) is False
        assert beginner_game.mines_left == 10


# ============================================================================
# Driver Contract Tests
# ============================================================================

class TestDriverContract:
    """Test click dispatch and published state."""

    def test_click_dispatches_gestures(self, game_factory) -> None:
        """REVEAL, FLAG and RESET map onto engine operations."""
        game = game_factory(5, 3, WALL)
        assert game.click(ClickKind.FLAG, 4, 2) is True
        assert game.mines_left == 2
        assert game.click(ClickKind.REVEAL, 0, 0) is True
        assert game.cell_view(0, 0).state == CellState.REVEALED
        assert game.click(ClickKind.RESET) is True
        assert game.mines_left == 3
        assert game.cell_view(0, 0).state == CellState.HIDDEN

    def test_cell_view_out_of_bounds(self, beginner_game: Minesweeper) -> None:
        """Views outside the board are None."""
        assert beginner_game.cell_view(-1, 0) is None
        assert beginner_game.cell_view(0, 9) is None

    def test_unrevealed_cells_do_not_leak(self, game_factory) -> None:
        """Hidden and flagged mines look like any other cell."""
        game = game_factory(5, 3, WALL)
        game.toggle_flag(2, 0)
        game.reveal(0, 0)

        assert game.cell_view(2, 0) == CellView(CellState.FLAGGED)
        assert game.cell_view(2, 1) == CellView(CellState.HIDDEN)
        assert game.cell_view(1, 1) == CellView(CellState.REVEALED, False, 3)

    def test_win_and_loss_are_logged(self, small_game: Minesweeper, caplog) -> None:
        """Game end is reported at INFO."""
        with caplog.at_level(logging.INFO, logger="minefield.engine"):
            small_game.reveal(0, 0)
        assert "Game won" in caplog.text


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test returning to the initial state."""

    def test_reset_from_lost_matches_fresh_engine(
        self, game_factory, clock
    ) -> None:
        """Reset restores exactly the initial published state."""
        fresh = game_factory(5, 3, WALL).snapshot()

        game = game_factory(5, 3, WALL)
        game.toggle_flag(4, 2)
        game.reveal(0, 0)
        clock.advance(9)
        game.reveal(2, 1)
        game.reset()

        assert game.snapshot() == fresh
        assert game.first_click_done is False
        clock.advance(9)
        assert game.elapsed_seconds == 0

    def test_reset_is_idempotent(self, beginner_game: Minesweeper) -> None:
        """Two resets equal one."""
        beginner_game.reveal(1, 1)
        beginner_game.reset()
        once = beginner_game.snapshot()
        beginner_game.reset()
        assert beginner_game.snapshot() == once

    def test_seeded_engines_replay_the_same_games(self) -> None:
        """Reset keeps the random source, so seeded sequences repeat."""
        first = Minesweeper(BoardConfig(9, 9, 10), seed=5)
        second = Minesweeper(BoardConfig(9, 9, 10), seed=5)
        for _ in range(3):
            first.reveal(0, 0)
            second.reveal(0, 0)
            assert first.board.get_observation().tolist() == (
                second.board.get_observation().tolist()
            )
            assert [
                cell.is_mine for _, _, cell in first.board.iter_cells()
            ] == [cell.is_mine for _, _, cell in second.board.iter_cells()]
            first.reset()
            second.reset()

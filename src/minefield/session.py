"""
Per-game session state: the clock and the remaining-mine counter.
"""
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


MAX_DISPLAY_SECONDS = 999


@dataclass
class Session:
    """
    Ephemeral bookkeeping for one game.

    Attributes:
        mines_left: Mines minus flags placed; may go negative.
        clock: Zero-argument callable returning seconds.
        first_click_done: Whether the first reveal has happened.
        start_time: Clock reading at the first reveal.
        elapsed_seconds: Last computed whole seconds, capped at 999.
    """

    mines_left: int = 0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    first_click_done: bool = False
    start_time: Optional[float] = None
    elapsed_seconds: int = 0
    _running: bool = False

    def start(self) -> None:
        """Mark the first click and start the clock."""
        self.first_click_done = True
        self.start_time = self.clock()
        self.elapsed_seconds = 0
        self._running = True

    def tick(self) -> int:
        """
        Recompute elapsed time while the clock runs.

        Returns:
            Elapsed whole seconds, frozen once the clock is stopped.
        """
        if self._running and self.start_time is not None:
            seconds = math.floor(self.clock() - self.start_time)
            self.elapsed_seconds = max(0, min(seconds, MAX_DISPLAY_SECONDS))
        return self.elapsed_seconds

    def stop(self) -> None:
        """Take a final reading and freeze the clock."""
        self.tick()
        self._running = False

    @property
    def running(self) -> bool:
        """Whether elapsed time still advances."""
        return self._running

    def flag_placed(self) -> None:
        self.mines_left -= 1

    def flag_removed(self) -> None:
        self.mines_left += 1

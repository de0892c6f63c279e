"""Tracks the move counter and tick clock of a round in progress."""

from __future__ import annotations


class GameState:
    """Holds the move counter and elapsed clock ticks.

    The clock is idle until ``start()`` (the first accepted interaction),
    then advances once per ``tick()`` until ``stop()`` freezes it for good.
    """

    def __init__(self) -> None:
        self.moves: int = 0
        self.elapsed: int = 0
        self._started: bool = False
        self._stopped: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._started

    @property
    def running(self) -> bool:
        return self._started and not self._stopped

    def start(self) -> None:
        if not self._stopped:
            self._started = True

    def stop(self) -> None:
        self._stopped = True

    def tick(self) -> bool:
        """Advance the clock by one tick.  Returns False when idle or stopped."""
        if not self.running:
            return False
        self.elapsed += 1
        return True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}"

"""Cancellable delayed callbacks driven by the caller's event loop."""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimerToken:
    """Handle for a scheduled callback.  ``cancel()`` guarantees it never runs."""

    __slots__ = ("deadline", "callback", "_cancelled", "_fired")

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self._cancelled = False
        self._fired = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def _fire(self) -> None:
        self._fired = True
        self.callback()


class Scheduler:
    """A cooperative scheduler whose clock only moves in ``advance()``.

    Frontends call ``advance(dt)`` from their main loop with the real time
    that passed; tests advance it by hand.  Callbacks run synchronously,
    in deadline order, on the caller's stack.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: list[tuple[float, int, TimerToken]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerToken:
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}.")
        token = TimerToken(self.now + delay, callback)
        heapq.heappush(self._queue, (token.deadline, next(self._seq), token))
        return token

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback now due.

        Returns the number of callbacks that ran.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}).")
        return self.advance_to(self.now + seconds)

    def advance_to(self, when: float) -> int:
        """Like ``advance`` but to an absolute time; earlier times only fire what is due."""
        self.now = max(self.now, when)
        fired = 0
        while self._queue and self._queue[0][0] <= self.now:
            _, _, token = heapq.heappop(self._queue)
            if token.cancelled:
                logger.debug("Skipping cancelled timer due at %.2f", token.deadline)
                continue
            token._fire()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, token in self._queue if token.pending)

    @property
    def next_deadline(self) -> float | None:
        """Deadline of the earliest live callback, or None when idle."""
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

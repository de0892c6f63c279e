"""The generic slot-arrangement engine shared by all four games."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from photogames.backend.engine.gamestate import GameState, Scheduler, TimerToken
from photogames.backend.models.board import Board

if TYPE_CHECKING:
    from photogames.backend.engine.gameplay.policies import MovePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundOutcome:
    """Terminal result of a round, computed exactly once."""

    won: bool
    score: int
    stars: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a round handed to frontends."""

    slots: tuple[int, ...]
    columns: int
    selection: tuple[int, ...]
    revealed: frozenset[int]
    matched: frozenset[int]
    moves: int
    elapsed: int
    locked: bool
    correct: int
    outcome: RoundOutcome | None
    choices: tuple[int, ...] = ()

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def won(self) -> bool:
        return self.outcome is not None and self.outcome.won

    @property
    def rows(self) -> int:
        return len(self.slots) // self.columns


class Round:
    """One round: arrangement, selection and progress metrics as a unit.

    All rule decisions are delegated to ``policy``; this class enforces
    the guards every game shares (bounds, lock, finished) and owns the
    round's single pending timer.
    """

    def __init__(self, board: Board, policy: MovePolicy, scheduler: Scheduler) -> None:
        self.board = board
        self.initial = board.copy()
        self.policy = policy
        self.scheduler = scheduler
        self.state = GameState()
        self.selection: list[int] = []
        self.revealed: set[int] = set()
        self.matched: set[int] = set()
        self.locked = False
        self.outcome: RoundOutcome | None = None
        self._timer: TimerToken | None = None

    # -- input ----------------------------------------------------------------

    def click(self, slot: int) -> bool:
        """Apply a click on *slot*.  Returns False when it was ignored."""
        if self.outcome is not None:
            logger.debug("Ignoring click on %d: round finished", slot)
            return False
        if self.locked:
            logger.debug("Ignoring click on %d: resolution pending", slot)
            return False
        if not self.board.contains(slot):
            logger.debug("Ignoring click on %d: out of range", slot)
            return False

        accepted = self.policy.on_click(self, slot)
        if accepted:
            self.state.start()
        else:
            logger.debug("Ignoring click on %d: rejected by %s", slot, type(self.policy).__name__)
        return accepted

    # -- transitions used by policies -----------------------------------------

    def commit(self) -> None:
        """Count one committed interaction."""
        self.state.increment_moves()

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerToken:
        """Run *callback* after *delay*, replacing any pending timer."""
        self.cancel_timer()
        self._timer = self.scheduler.call_later(delay, callback)
        return self._timer

    def cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def evaluate(self) -> bool:
        """Check the win predicate; finishes the round the first time it holds."""
        if self.outcome is not None:
            return self.outcome.won
        if not self.policy.is_won(self):
            return False
        stars = self.policy.stars(self)
        self.finish(won=True, score=stars, stars=stars)
        return True

    def finish(self, *, won: bool, score: int, stars: int | None = None) -> RoundOutcome:
        """Freeze the round with a terminal outcome (idempotent)."""
        if self.outcome is not None:
            return self.outcome
        self.state.stop()
        self.cancel_timer()
        self.locked = False
        self.selection.clear()
        if stars is None:
            stars = self.policy.stars(self) if won else 0
        self.outcome = RoundOutcome(won=won, score=score, stars=stars)
        logger.info(
            "Round finished: won=%s score=%d stars=%d moves=%d time=%ds",
            won, score, stars, self.state.moves, self.state.elapsed,
        )
        return self.outcome

    # -- time -----------------------------------------------------------------

    def tick(self) -> bool:
        return self.state.tick()

    # -- queries --------------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def snapshot(self, choices: tuple[int, ...] = ()) -> Snapshot:
        return Snapshot(
            slots=tuple(self.board.slots),
            columns=self.board.columns,
            selection=tuple(self.selection),
            revealed=frozenset(self.revealed),
            matched=frozenset(self.matched),
            moves=self.state.moves,
            elapsed=self.state.elapsed,
            locked=self.locked,
            correct=self.policy.correct(self),
            outcome=self.outcome,
            choices=choices,
        )

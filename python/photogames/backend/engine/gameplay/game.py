"""Game sessions: each owns the current round and replaces it on reset."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay.policies import MovePolicy
from photogames.backend.engine.gameplay.round import Round, Snapshot
from photogames.backend.engine.gamestate import Scheduler
from photogames.backend.models.board import Board
from photogames.backend.models.photo import Photo, PhotoLibrary
from photogames.config import GameConfig

logger = logging.getLogger(__name__)


class GamePlay(ABC):
    """Orchestrates the rounds of one game session.

    Frontends only talk to this surface: ``click``/``advance`` in,
    ``Snapshot`` out.  ``new_round`` swaps in a fresh ``Round`` as a unit
    and cancels anything the old one still had pending.
    """

    title: ClassVar[str] = "Game"

    def __init__(
        self,
        library: PhotoLibrary,
        *,
        config: GameConfig | None = None,
        generator: GameGenerator | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.library = library
        self.config = config or GameConfig()
        self.generator = generator or GameGenerator.seeded(self.config.seed)
        self.scheduler = scheduler or Scheduler()
        self.round: Round | None = None
        self._tick_carry = 0.0

    @abstractmethod
    def _create_round(self) -> Round:
        """Build a fresh round from the generator."""

    # -- lifecycle ------------------------------------------------------------

    def new_round(self) -> Snapshot:
        if self.round is not None:
            self.round.cancel_timer()
        self.round = self._create_round()
        self._tick_carry = 0.0
        logger.info("%s: new round (%d slots)", self.title, self.round.board.size)
        return self.snapshot()

    def close(self) -> None:
        """Cancel any pending timer of the current round."""
        if self.round is not None:
            self.round.cancel_timer()

    # -- input ----------------------------------------------------------------

    def click(self, slot: int) -> Snapshot:
        self.current.click(slot)
        return self.snapshot()

    def advance(self, seconds: float) -> Snapshot:
        """Let *seconds* of real time pass: fire timers, tick the clock.

        The clock is ticked up to each timer's deadline before the timer
        runs, so a round won by a timer keeps the time spent waiting on it.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}).")
        target = self.scheduler.now + seconds
        due = self.scheduler.next_deadline
        while due is not None and due <= target:
            self._run_clock(due - self.scheduler.now)
            self.scheduler.advance_to(due)
            due = self.scheduler.next_deadline
        self._run_clock(target - self.scheduler.now)
        self.scheduler.advance_to(target)
        return self.snapshot()

    def _run_clock(self, seconds: float) -> None:
        rnd = self.current
        if not rnd.state.running:
            self._tick_carry = 0.0
            return
        self._tick_carry += max(seconds, 0.0)
        while self._tick_carry >= self.config.tick_seconds:
            self._tick_carry -= self.config.tick_seconds
            rnd.tick()

    # -- queries --------------------------------------------------------------

    @property
    def current(self) -> Round:
        if self.round is None:
            raise RuntimeError(f"{self.title} has no active round.")
        return self.round

    def snapshot(self) -> Snapshot:
        return self.current.snapshot()

    @property
    def is_won(self) -> bool:
        return self.snapshot().won

    @property
    def finished(self) -> bool:
        return self.current.finished


class GridGame(GamePlay):
    """Base for the 3×3 photo puzzles: one photo cut into square pieces."""

    def __init__(
        self,
        library: PhotoLibrary,
        photo_id: int,
        *,
        board: Board | None = None,
        **kwargs,
    ) -> None:
        super().__init__(library, **kwargs)
        self.photo: Photo = library.get(photo_id)
        self.size = board.columns if board is not None else self.config.grid_size
        if board is not None and board.rows != board.columns:
            raise ValueError(f"Puzzle boards must be square, got {board.rows}x{board.columns}.")
        self._preset = board
        self.new_round()

    @classmethod
    def from_board(
        cls,
        board: Board,
        library: PhotoLibrary | None = None,
        photo_id: int = 0,
        **kwargs,
    ) -> GridGame:
        """Create a session whose first round starts from *board*."""
        return cls(library or PhotoLibrary.builtin(), photo_id, board=board, **kwargs)

    def _create_round(self) -> Round:
        if self._preset is not None:
            board, self._preset = self._preset, None
        else:
            board = self._scramble()
        return Round(board, self._policy(), self.scheduler)

    @abstractmethod
    def _scramble(self) -> Board: ...

    @abstractmethod
    def _policy(self) -> MovePolicy: ...

"""Photo Reveal: remove cover blocks, then guess which photo is underneath."""

from __future__ import annotations

import logging

from photogames.backend.engine.gameplay.game import GamePlay
from photogames.backend.engine.gameplay.policies import RevealPolicy
from photogames.backend.engine.gameplay.round import Round, Snapshot
from photogames.backend.engine.gamestate import reveal_score
from photogames.backend.models.board import Board
from photogames.backend.models.photo import Photo, PhotoLibrary

logger = logging.getLogger(__name__)


class RevealGame(GamePlay):
    """Consecutive reveal rounds with a running total score.

    Every new round hides a different photo than the one before.
    """

    title = "Photo Reveal"

    def __init__(self, library: PhotoLibrary, **kwargs) -> None:
        super().__init__(library, **kwargs)
        library.require(self.config.reveal_choices, self.title)
        self.round_number = 0
        self.total_score = 0
        self.target: int | None = None
        self.choices: list[int] = []
        self.new_round()

    def _create_round(self) -> Round:
        ids = self.library.ids
        self.target = self.generator.pick_target(ids, exclude=self.target)
        self.choices = self.generator.choices(ids, self.target, self.config.reveal_choices)
        self.round_number += 1
        board = Board.solved(self.config.reveal_grid)
        return Round(board, RevealPolicy(), self.scheduler)

    # -- input ----------------------------------------------------------------

    def guess(self, photo_id: int) -> Snapshot:
        """Finalize the round with a guess; ignored once the round is over."""
        rnd = self.current
        if rnd.finished:
            logger.debug("Ignoring guess %d: round finished", photo_id)
            return self.snapshot()
        if photo_id not in self.choices:
            logger.debug("Ignoring guess %d: not one of %s", photo_id, self.choices)
            return self.snapshot()

        correct = photo_id == self.target
        outcome = rnd.finish(won=correct, score=reveal_score(self.hidden_blocks, correct))
        self.total_score += outcome.score
        return self.snapshot()

    # -- queries --------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self.current.snapshot(choices=tuple(self.choices))

    @property
    def target_photo(self) -> Photo:
        assert self.target is not None
        return self.library.get(self.target)

    @property
    def hidden_blocks(self) -> int:
        rnd = self.current
        return rnd.board.size - len(rnd.revealed)

    @property
    def revealed_percent(self) -> int:
        rnd = self.current
        return round(len(rnd.revealed) / rnd.board.size * 100)

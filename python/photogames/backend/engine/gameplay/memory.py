"""Memory Match: flip two cards at a time and find every pair."""

from __future__ import annotations

import math

from photogames.backend.engine.gameplay.game import GamePlay
from photogames.backend.engine.gameplay.policies import PairPolicy
from photogames.backend.engine.gameplay.round import Round
from photogames.backend.models.board import Board
from photogames.backend.models.photo import Photo, PhotoLibrary


def columns_for(count: int) -> int:
    """Narrowest column count that divides *count* and is at least as wide as tall."""
    cols = math.isqrt(count)
    if cols * cols < count:
        cols += 1
    while count % cols:
        cols += 1
    return cols


class MemoryGame(GamePlay):
    title = "Memory Match"

    def __init__(self, library: PhotoLibrary, *, pairs: int | None = None, **kwargs) -> None:
        super().__init__(library, **kwargs)
        self.pairs = self.config.memory_pairs if pairs is None else pairs
        self.new_round()

    def _create_round(self) -> Round:
        pair_photos, layout = self.generator.deck(self.library, self.pairs)
        policy = PairPolicy(
            pair_photos,
            match_delay=self.config.match_delay,
            mismatch_delay=self.config.mismatch_delay,
        )
        board = Board(columns=columns_for(len(layout)), slots=layout)
        return Round(board, policy, self.scheduler)

    @property
    def policy(self) -> PairPolicy:
        return self.current.policy  # type: ignore[return-value]

    def photo_at(self, slot: int) -> Photo:
        """The photo printed on the card in *slot* (whether face-up or not)."""
        return self.library.get(self.policy.photo_of(self.current.board.get(slot)))

    @property
    def matched_pairs(self) -> int:
        return len(self.current.matched) // 2

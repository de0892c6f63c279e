"""Move policies: how a click changes a round, and when it is won.

Each game plugs one policy into the generic ``Round``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gamesolver import Solver
from photogames.backend.engine.gamestate import star_rating

if TYPE_CHECKING:
    from photogames.backend.engine.gameplay.round import Round

logger = logging.getLogger(__name__)


class MovePolicy(ABC):
    """Strategy interface for a game's rules."""

    @abstractmethod
    def on_click(self, rnd: Round, slot: int) -> bool:
        """Apply a click that passed the shared guards.  False means no-op."""

    def is_won(self, rnd: Round) -> bool:
        return rnd.board.is_solved()

    def par(self, rnd: Round) -> int:
        return rnd.board.size

    def stars(self, rnd: Round) -> int:
        return star_rating(rnd.state.moves, self.par(rnd))

    def correct(self, rnd: Round) -> int:
        return rnd.board.correct_count()


class SwapPolicy(MovePolicy):
    """Tap one piece, then another, to exchange them."""

    def on_click(self, rnd: Round, slot: int) -> bool:
        if not rnd.selection:
            rnd.selection.append(slot)
            return True

        first = rnd.selection[0]
        rnd.selection.clear()
        if first == slot:
            return True

        rnd.board.swap(first, slot)
        rnd.commit()
        rnd.evaluate()
        return True

    def par(self, rnd: Round) -> int:
        return GameGenerator.min_swaps(rnd.initial)


class SlidePolicy(MovePolicy):
    """Slide a tile orthogonally adjacent to the blank into it."""

    def __init__(self, blank: int) -> None:
        self.blank = blank

    def on_click(self, rnd: Round, slot: int) -> bool:
        hole = rnd.board.find(self.blank)
        if not rnd.board.are_adjacent(slot, hole):
            return False

        rnd.board.swap(slot, hole)
        rnd.commit()
        rnd.evaluate()
        return True

    def par(self, rnd: Round) -> int:
        optimal = len(Solver.solve(rnd.initial, self.blank))
        return optimal or rnd.board.size * 3


class PairPolicy(MovePolicy):
    """Flip two cards; after a settle delay they match or turn back over.

    Slots hold card ids; card ``c`` shows photo ``pair_photos[c // 2]``.
    """

    def __init__(
        self,
        pair_photos: Sequence[int],
        match_delay: float,
        mismatch_delay: float,
    ) -> None:
        self.pair_photos = list(pair_photos)
        self.match_delay = match_delay
        self.mismatch_delay = mismatch_delay

    @property
    def pairs(self) -> int:
        return len(self.pair_photos)

    def photo_of(self, card: int) -> int:
        return self.pair_photos[card // 2]

    def on_click(self, rnd: Round, slot: int) -> bool:
        if slot in rnd.revealed or slot in rnd.matched or slot in rnd.selection:
            return False

        rnd.revealed.add(slot)
        rnd.selection.append(slot)
        if len(rnd.selection) < 2:
            return True

        rnd.commit()
        rnd.locked = True
        first, second = rnd.selection
        same = self.photo_of(rnd.board.get(first)) == self.photo_of(rnd.board.get(second))
        delay = self.match_delay if same else self.mismatch_delay
        rnd.schedule(delay, lambda: self._resolve(rnd, first, second, same))
        return True

    def _resolve(self, rnd: Round, first: int, second: int, same: bool) -> None:
        if rnd.finished:
            return
        if same:
            rnd.matched.update((first, second))
        else:
            rnd.revealed.difference_update((first, second))
        logger.debug("Resolved cards %d/%d: %s", first, second, "match" if same else "miss")
        rnd.selection.clear()
        rnd.locked = False
        rnd.evaluate()

    def is_won(self, rnd: Round) -> bool:
        return len(rnd.matched) // 2 == self.pairs

    def par(self, rnd: Round) -> int:
        return self.pairs

    def correct(self, rnd: Round) -> int:
        return len(rnd.matched) // 2


class RevealPolicy(MovePolicy):
    """Remove cover blocks one at a time; the round ends with a guess."""

    def on_click(self, rnd: Round, slot: int) -> bool:
        if slot in rnd.revealed:
            return False
        rnd.revealed.add(slot)
        rnd.commit()
        return True

    def is_won(self, rnd: Round) -> bool:
        return False

    def par(self, rnd: Round) -> int:
        return rnd.board.size // 3

    def correct(self, rnd: Round) -> int:
        return len(rnd.revealed)

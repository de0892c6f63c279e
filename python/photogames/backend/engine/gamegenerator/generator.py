"""Generates shuffled arrangements, decks and guess choices."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from photogames.backend.models.board import Board
from photogames.backend.models.photo import PhotoLibrary

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_PAIRS = 2
MAX_PAIRS = 8


class GameGenerator:
    """Creates randomized rounds from an injected random source.

    Passing a seeded ``random.Random`` makes every shuffle reproducible.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: int | None) -> GameGenerator:
        return cls(random.Random(seed))

    # -- shuffling ------------------------------------------------------------

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a uniformly shuffled copy of *items* (Fisher-Yates)."""
        arr = list(items)
        for i in range(len(arr) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    def permutation(self, n: int, *, blank: int | None = None, columns: int | None = None) -> list[int]:
        """Return a permutation of ``0..n-1`` that is not the identity.

        With *blank* set, the permutation is additionally solvable by
        sliding *blank* around a grid of *columns* columns.
        """
        if n < 2:
            raise ValueError(f"Cannot shuffle {n} item(s); need at least 2.")
        if blank is not None and columns is None:
            raise ValueError("Sliding permutations need a column count.")

        home = list(range(n))
        attempts = 0
        while True:
            attempts += 1
            candidate = self.shuffle(home)
            if candidate == home:
                continue
            if blank is not None and not self.is_solvable(candidate, columns, blank):
                continue
            logger.debug("Shuffled %d items in %d attempt(s)", n, attempts)
            return candidate

    def scrambled(self, columns: int, *, blank: int | None = None) -> Board:
        """Return a shuffled square board that is not already solved."""
        n = columns * columns
        return Board(columns=columns, slots=self.permutation(n, blank=blank, columns=columns))

    # -- photo selection ------------------------------------------------------

    def deck(self, library: PhotoLibrary, pairs: int) -> tuple[list[int], list[int]]:
        """Pick *pairs* photos and lay out ``2 * pairs`` cards.

        Returns ``(pair_photos, layout)`` where ``pair_photos[p]`` is the
        photo id of pair ``p`` and ``layout`` holds card ids; card ``c``
        belongs to pair ``c // 2``.
        """
        if not MIN_PAIRS <= pairs <= MAX_PAIRS:
            raise ValueError(
                f"Memory needs between {MIN_PAIRS} and {MAX_PAIRS} pairs, got {pairs}."
            )
        library.require(pairs, "Memory Match")
        pair_photos = self.shuffle(library.ids)[:pairs]
        return pair_photos, self.permutation(pairs * 2)

    def pick_target(self, ids: Sequence[int], exclude: int | None = None) -> int:
        """Pick a random photo id, avoiding *exclude* when there is a choice."""
        if not ids:
            raise ValueError("Cannot pick a photo from an empty library.")
        candidates = [i for i in ids if i != exclude] or list(ids)
        return self.rng.choice(candidates)

    def choices(self, ids: Sequence[int], target: int, k: int = 4) -> list[int]:
        """Return *k* distinct ids, always including *target*, in random order."""
        if target not in ids:
            raise ValueError(f"Target photo {target} is not in the library.")
        if len(ids) < k:
            raise ValueError(f"Need at least {k} photos for {k} choices, got {len(ids)}.")
        others = self.rng.sample([i for i in ids if i != target], k - 1)
        return self.shuffle([target, *others])

    # -- analysis -------------------------------------------------------------

    @staticmethod
    def inversion_count(seq: Sequence[int], blank: int | None = None) -> int:
        """Count pairs out of natural order, ignoring the *blank* identity."""
        values = [v for v in seq if v != blank]
        count = 0
        for i in range(len(values)):
            for j in range(i + 1, len(values)):
                if values[i] > values[j]:
                    count += 1
        return count

    @staticmethod
    def is_solvable(seq: Sequence[int], columns: int, blank: int) -> bool:
        """True if *seq* can reach the home arrangement by sliding *blank*.

        The blank's home is slot ``blank``; for the usual layout that is
        the bottom-right corner.
        """
        inversions = GameGenerator.inversion_count(seq, blank)
        if columns % 2:
            return inversions % 2 == 0
        blank_row = list(seq).index(blank) // columns
        home_row = blank // columns
        return (inversions + abs(home_row - blank_row)) % 2 == 0

    @staticmethod
    def min_swaps(board: Board) -> int:
        """Fewest two-slot exchanges that solve *board* (``n - cycles``)."""
        seen = [False] * board.size
        cycles = 0
        for start in range(board.size):
            if seen[start]:
                continue
            cycles += 1
            slot = start
            while not seen[slot]:
                seen[slot] = True
                slot = board.slots[slot]
        return board.size - cycles

"""Star ratings and reveal points."""

from __future__ import annotations

import math

MAX_STARS = 3

REVEAL_POINTS_PER_BLOCK = 10
REVEAL_MIN_SCORE = 10


def star_rating(moves: int, par: int) -> int:
    """Rate a finished round from its final move count.

    3 stars within 125% of *par*, 2 stars within twice *par*, else 1.
    """
    par = max(par, 1)
    if moves <= math.ceil(par * 5 / 4):
        return 3
    if moves <= par * 2:
        return 2
    return 1


def reveal_score(hidden_blocks: int, correct: bool) -> int:
    """Points for a reveal guess: more blocks still hidden, more points."""
    if not correct:
        return 0
    return max(REVEAL_MIN_SCORE, hidden_blocks * REVEAL_POINTS_PER_BLOCK)

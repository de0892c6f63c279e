from __future__ import annotations

import pytest

from photogames.backend.engine.gamestate import reveal_score, star_rating


@pytest.mark.parametrize(
    "moves, stars",
    [(8, 3), (10, 3), (11, 2), (16, 2), (17, 1), (40, 1)],
)
def test_memory_thresholds_at_eight_pairs(moves: int, stars: int) -> None:
    assert star_rating(moves, par=8) == stars


def test_perfect_play_is_three_stars() -> None:
    for par in range(1, 20):
        assert star_rating(par, par) == 3


def test_zero_par_is_treated_as_one() -> None:
    assert star_rating(0, 0) == star_rating(0, 1) == 3
    assert star_rating(3, 0) == star_rating(3, 1) == 1


@pytest.mark.parametrize(
    "hidden, correct, points",
    [(25, True, 250), (13, True, 130), (1, True, 10), (0, True, 10), (25, False, 0), (0, False, 0)],
)
def test_reveal_score(hidden: int, correct: bool, points: int) -> None:
    assert reveal_score(hidden, correct) == points

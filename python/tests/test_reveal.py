from __future__ import annotations

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay import RevealGame
from photogames.backend.models.photo import PhotoLibrary

# -- helpers ------------------------------------------------------------------


def _game(library: PhotoLibrary, seed: int = 5) -> RevealGame:
    return RevealGame(library, generator=GameGenerator.seeded(seed))


def _wrong(game: RevealGame) -> int:
    return next(pid for pid in game.choices if pid != game.target)


# -- tests --------------------------------------------------------------------


def test_round_setup(library: PhotoLibrary) -> None:
    game = _game(library)
    snap = game.snapshot()
    assert len(snap.slots) == 25
    assert snap.columns == 5
    assert len(snap.choices) == 4
    assert game.target in snap.choices
    assert game.round_number == 1
    assert game.hidden_blocks == 25


def test_instant_correct_guess_scores_most(library: PhotoLibrary) -> None:
    game = _game(library)
    snap = game.guess(game.target)
    assert snap.finished and snap.won
    assert snap.outcome.score == 250
    assert game.total_score == 250


def test_last_block_still_earns_minimum(library: PhotoLibrary) -> None:
    game = _game(library)
    for slot in range(24):
        game.click(slot)
    assert game.hidden_blocks == 1
    assert game.revealed_percent == 96
    assert game.guess(game.target).outcome.score == 10


def test_fully_revealed_correct_guess(library: PhotoLibrary) -> None:
    game = _game(library)
    for slot in range(25):
        game.click(slot)
    assert game.guess(game.target).outcome.score == 10


def test_wrong_guess_scores_nothing(library: PhotoLibrary) -> None:
    game = _game(library)
    snap = game.guess(_wrong(game))
    assert snap.finished
    assert not snap.won
    assert snap.outcome.score == 0
    assert game.total_score == 0


def test_removing_a_block_counts_once(library: PhotoLibrary) -> None:
    game = _game(library)
    game.click(12)
    snap = game.click(12)
    assert snap.revealed == {12}
    assert snap.moves == 1
    assert snap.correct == 1


def test_round_is_terminal_after_guess(library: PhotoLibrary) -> None:
    game = _game(library)
    game.guess(game.target)
    snap = game.click(0)
    assert snap.revealed == frozenset()
    again = game.guess(game.target)
    assert again.outcome.score == 250
    assert game.total_score == 250


def test_guess_outside_choices_is_ignored(library: PhotoLibrary) -> None:
    game = _game(library)
    outsider = next(pid for pid in library.ids if pid not in game.choices)
    assert not game.guess(outsider).finished


def test_next_round_hides_a_different_photo(library: PhotoLibrary) -> None:
    game = _game(library)
    total = 0
    for expected_round in range(1, 21):
        assert game.round_number == expected_round
        previous = game.target
        total += game.guess(game.target).outcome.score
        game.new_round()
        assert game.target != previous
        assert game.target in game.choices
    assert game.total_score == total == 20 * 250


def test_smallest_library_offers_every_photo(small_library: PhotoLibrary) -> None:
    game = _game(small_library)
    assert sorted(game.choices) == [0, 1, 2, 3]


def test_needs_enough_photos_for_choices() -> None:
    three = PhotoLibrary(list(PhotoLibrary.builtin())[:3])
    with pytest.raises(ValueError):
        RevealGame(three)

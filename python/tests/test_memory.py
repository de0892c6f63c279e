"""Memory Match: pairing, settle delays and the input lock."""

from __future__ import annotations

from collections import defaultdict

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay import MemoryGame
from photogames.backend.engine.gameplay.memory import columns_for
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig

# -- helpers ------------------------------------------------------------------


def _game(library: PhotoLibrary, pairs: int = 4) -> MemoryGame:
    return MemoryGame(
        library,
        config=GameConfig(memory_pairs=pairs, match_delay=0.5, mismatch_delay=0.9),
        generator=GameGenerator.seeded(3),
    )


def _pairs(game: MemoryGame) -> list[tuple[int, int]]:
    """Slots grouped by the photo they show."""
    by_photo: dict[int, list[int]] = defaultdict(list)
    for slot in range(game.current.board.size):
        by_photo[game.photo_at(slot).id].append(slot)
    return [(a, b) for a, b in by_photo.values()]


def _mismatch(game: MemoryGame) -> tuple[int, int]:
    (a, _), (c, _) = _pairs(game)[:2]
    return a, c


# -- layout -------------------------------------------------------------------


@pytest.mark.parametrize("cards, columns", [(4, 2), (6, 3), (8, 4), (12, 4), (16, 4)])
def test_columns_for(cards: int, columns: int) -> None:
    assert columns_for(cards) == columns


def test_deck_has_two_cards_per_photo(library: PhotoLibrary) -> None:
    game = _game(library, pairs=8)
    snap = game.snapshot()
    assert len(snap.slots) == 16
    assert snap.columns == 4
    pairs = _pairs(game)
    assert len(pairs) == 8
    assert game.pairs == 8


# -- pairing ------------------------------------------------------------------


def test_matching_pair_stays_face_up(library: PhotoLibrary) -> None:
    game = _game(library)
    a, b = _pairs(game)[0]

    game.click(a)
    snap = game.click(b)
    assert snap.locked
    assert snap.revealed == {a, b}
    assert snap.moves == 1

    assert game.advance(0.3).locked
    snap = game.advance(1.0)
    assert not snap.locked
    assert snap.matched == {a, b}
    assert snap.revealed == {a, b}
    assert snap.selection == ()
    assert game.matched_pairs == 1


def test_mismatch_turns_back_over(library: PhotoLibrary) -> None:
    game = _game(library)
    a, c = _mismatch(game)

    game.click(a)
    game.click(c)
    # Still showing at the match delay; mismatches settle later.
    assert game.advance(0.6).revealed == {a, c}

    snap = game.advance(0.5)
    assert snap.revealed == frozenset()
    assert snap.matched == frozenset()
    assert not snap.locked
    assert snap.moves == 1


def test_clicks_ignored_while_locked(library: PhotoLibrary) -> None:
    game = _game(library)
    (a, b), (c, _) = _pairs(game)[:2]
    game.click(a)
    game.click(b)
    snap = game.click(c)
    assert c not in snap.revealed
    assert snap.moves == 1


def test_face_up_card_cannot_be_flipped_again(library: PhotoLibrary) -> None:
    game = _game(library)
    a, b = _pairs(game)[0]
    game.click(a)
    snap = game.click(a)
    assert snap.selection == (a,)
    assert snap.moves == 0

    game.click(b)
    game.advance(1.0)
    assert game.click(a).moves == 1


def test_finding_every_pair_wins(library: PhotoLibrary) -> None:
    game = _game(library)
    for a, b in _pairs(game):
        game.click(a)
        game.click(b)
        game.advance(1.0)

    snap = game.snapshot()
    assert snap.won
    assert snap.moves == 4
    assert snap.correct == 4
    assert snap.outcome.stars == 3
    assert snap.outcome.score == 3


def test_new_round_cancels_pending_resolution(library: PhotoLibrary) -> None:
    game = _game(library)
    a, c = _mismatch(game)
    game.click(a)
    game.click(c)
    assert game.scheduler.pending == 1

    snap = game.new_round()
    assert game.scheduler.pending == 0
    assert snap.revealed == frozenset()
    assert not snap.locked
    assert snap.moves == 0

    # The old timer must not touch the new round.
    game.advance(5.0)
    snap = game.snapshot()
    assert snap.revealed == frozenset()
    assert snap.elapsed == 0


def test_clock_starts_on_first_flip(library: PhotoLibrary) -> None:
    game = _game(library)
    game.advance(5.0)
    assert game.snapshot().elapsed == 0

    a, _ = _pairs(game)[0]
    game.click(a)
    game.advance(3.0)
    assert game.snapshot().elapsed == 3


def test_winning_resolution_keeps_waiting_time(library: PhotoLibrary) -> None:
    game = _game(library, pairs=2)
    (a, b), (c, d) = _pairs(game)
    game.click(a)
    game.click(b)
    game.advance(0.5)

    game.click(c)
    game.click(d)
    # Resolves at 1.0s, part way through this step.
    snap = game.advance(0.6)
    assert snap.won
    assert snap.elapsed == 1

    assert game.advance(5.0).elapsed == 1


def test_needs_enough_photos(small_library: PhotoLibrary) -> None:
    with pytest.raises(ValueError):
        _game(small_library, pairs=5)

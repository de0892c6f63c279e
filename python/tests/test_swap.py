from __future__ import annotations

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay import SwapGame
from photogames.backend.models.board import Board
from photogames.backend.models.photo import PhotoLibrary

# -- helpers ------------------------------------------------------------------


def _one_swap_from_solved() -> SwapGame:
    return SwapGame.from_board(Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8]))


# -- tests --------------------------------------------------------------------


def test_single_exchange_solves() -> None:
    game = _one_swap_from_solved()
    assert game.snapshot().correct == 7

    game.click(0)
    assert game.selected == 0
    snap = game.click(1)

    assert snap.won
    assert snap.moves == 1
    assert snap.selection == ()
    assert snap.correct == 9
    assert snap.outcome.stars == 3


def test_clicking_selection_again_deselects() -> None:
    game = _one_swap_from_solved()
    game.click(4)
    snap = game.click(4)
    assert snap.selection == ()
    assert snap.moves == 0
    assert not snap.finished


def test_only_completed_exchanges_count() -> None:
    game = _one_swap_from_solved()
    game.click(3)
    game.click(5)
    game.click(5)
    snap = game.click(3)
    # Two exchanges of the same pair restore the starting board.
    assert snap.moves == 2
    assert snap.slots == (1, 0, 2, 3, 4, 5, 6, 7, 8)


def test_finished_round_ignores_clicks() -> None:
    game = _one_swap_from_solved()
    game.click(0)
    game.click(1)
    before = game.snapshot()
    after = game.click(3)
    assert after == before


def test_win_check_after_win_changes_nothing() -> None:
    game = _one_swap_from_solved()
    game.click(0)
    game.click(1)
    before = game.snapshot()

    assert game.current.evaluate() is True
    outcome = game.current.finish(won=False, score=0)
    assert outcome == before.outcome
    assert game.snapshot() == before


def test_out_of_range_click_is_ignored() -> None:
    game = _one_swap_from_solved()
    assert game.click(9).selection == ()
    assert game.click(-1).selection == ()
    assert not game.current.state.started


def test_scrambled_round_is_unsolved(library: PhotoLibrary, generator: GameGenerator) -> None:
    game = SwapGame(library, 2, generator=generator)
    snap = game.snapshot()
    assert game.photo.label == "Garden"
    assert len(snap.slots) == 9
    assert not snap.finished
    assert snap.correct < 9


def test_new_round_reshuffles(library: PhotoLibrary, generator: GameGenerator) -> None:
    game = SwapGame(library, 0, generator=generator)
    game.click(0)
    game.click(1)
    snap = game.new_round()
    assert snap.moves == 0
    assert snap.selection == ()
    assert not snap.finished


def test_rating_uses_fewest_swaps() -> None:
    # Three-cycle: two swaps is perfect, four is still within twice par.
    game = SwapGame.from_board(Board.from_flat(2, [1, 2, 0, 3]))
    game.click(0)
    game.click(1)
    game.click(0)
    game.click(1)
    game.click(0)
    game.click(1)
    game.click(0)
    snap = game.click(2)
    assert snap.moves == 4
    assert snap.won
    assert snap.outcome.stars == 2


def test_unknown_photo_is_rejected(library: PhotoLibrary) -> None:
    with pytest.raises(ValueError):
        SwapGame(library, 42)

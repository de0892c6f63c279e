"""Key handling shared by the terminal frontends."""

from __future__ import annotations

import pytest

from photogames.backend.engine.gameplay import GameKind, RevealGame
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig
from photogames.frontend.cli.controller import Cursor, GameController, reveal_fragment


def test_cursor_wraps_around() -> None:
    cursor = Cursor(rows=3, columns=3)
    cursor.move("up")
    cursor.move("left")
    assert cursor.slot == 8
    cursor.move("down")
    cursor.move("right")
    assert cursor.slot == 0


def test_reveal_fragment_tiles_the_label() -> None:
    assert reveal_fragment("Beach", 0) == "B"
    assert reveal_fragment("Beach", 5) == "·"
    assert reveal_fragment("Beach", 6) == "B"
    assert reveal_fragment("Big Dog", 3) == "D"


def test_grid_games_need_a_photo(library: PhotoLibrary, config: GameConfig) -> None:
    with pytest.raises(ValueError):
        GameController(GameKind.swap, library, config)


def test_quit_leaves(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.memory, library, config)
    assert ctrl.handle("quit") is False


def test_select_clicks_under_cursor(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.swap, library, config, photo_id=0)
    ctrl.handle("right")
    assert ctrl.handle("select")
    assert ctrl.snapshot.selection == (1,)
    assert ctrl.label_at(1) == str(ctrl.snapshot.slots[1] + 1)


def test_reference_toggle(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.swap, library, config, photo_id=0)
    ctrl.handle("reference")
    assert ctrl.show_reference
    ctrl.handle("restart")
    assert not ctrl.show_reference
    assert ctrl.status == "Shuffled!"


def test_sliding_arrows_move_tiles(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.sliding, library, config, photo_id=1)
    for action in ("up", "down", "left", "right"):
        ctrl.handle(action)
    assert ctrl.snapshot.moves >= 1


def test_sliding_hint_makes_a_move(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.sliding, library, config, photo_id=1)
    ctrl.handle("hint")
    assert ctrl.status.startswith("Hint: moved")
    assert ctrl.snapshot.moves == 1


def test_memory_resolution_is_reported(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.memory, library, config)
    ctrl.handle("select")
    ctrl.handle("right")
    ctrl.handle("select")
    assert ctrl.snapshot.locked

    assert ctrl.advance(2.0) is True
    assert not ctrl.snapshot.locked
    assert ctrl.advance(2.0) is False


def test_reveal_digits_guess(library: PhotoLibrary, config: GameConfig) -> None:
    ctrl = GameController(GameKind.reveal, library, config)
    game = ctrl.game
    assert isinstance(game, RevealGame)

    ctrl.handle("restart")
    assert ctrl.status == "Make a guess first!"
    assert game.round_number == 1

    ctrl.handle("9")  # no ninth choice
    assert not ctrl.snapshot.finished

    number = game.choices.index(game.target) + 1
    ctrl.handle(str(number))
    assert ctrl.snapshot.won
    assert ctrl.status == "Correct! +250 points"

    ctrl.handle("select")
    assert game.round_number == 2
    assert ctrl.status == "Round 2"

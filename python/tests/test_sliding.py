from __future__ import annotations

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay import SlidingGame
from photogames.backend.engine.gamesolver import Solver
from photogames.backend.models.board import Board, Direction
from photogames.backend.models.photo import PhotoLibrary

# -- helpers ------------------------------------------------------------------


def _one_slide_from_solved() -> SlidingGame:
    # Blank (identity 8) in slot 7, piece 7 in slot 8.
    return SlidingGame.from_board(Board.from_flat(3, [0, 1, 2, 3, 4, 5, 6, 8, 7]))


# -- tests --------------------------------------------------------------------


def test_non_adjacent_click_is_a_no_op() -> None:
    game = _one_slide_from_solved()
    snap = game.click(0)
    assert snap.moves == 0
    assert snap.slots == (0, 1, 2, 3, 4, 5, 6, 8, 7)
    assert not game.current.state.started


def test_clicking_the_blank_is_a_no_op() -> None:
    game = _one_slide_from_solved()
    assert game.click(7).moves == 0


def test_adjacent_click_slides_and_solves() -> None:
    game = _one_slide_from_solved()
    snap = game.click(8)
    assert snap.won
    assert snap.moves == 1
    assert snap.outcome.stars == 3
    assert game.blank_slot == 8


def test_win_rates_with_a_single_search(monkeypatch: pytest.MonkeyPatch) -> None:
    game = _one_slide_from_solved()
    searched: list[Board] = []
    solve = Solver.solve

    def counting(board: Board, *args, **kwargs):
        searched.append(board)
        return solve(board, *args, **kwargs)

    monkeypatch.setattr(Solver, "solve", staticmethod(counting))
    snap = game.click(8)
    assert snap.outcome.stars == 3
    assert len(searched) == 1


def test_move_by_direction() -> None:
    game = _one_slide_from_solved()
    assert game.blank == 8
    assert not game.move(Direction.UP)  # nothing below the bottom row
    assert game.move(Direction.DOWN)  # piece 4 drops into the gap
    assert game.blank_slot == 4
    assert game.snapshot().moves == 1
    assert game.move(Direction.UP)
    assert game.move(Direction.LEFT)
    assert game.is_won


def test_hint_points_towards_solution() -> None:
    game = _one_slide_from_solved()
    assert game.hint() is Direction.LEFT
    game.move(Direction.LEFT)
    assert game.hint() is None


def test_scrambled_rounds_are_solvable(library: PhotoLibrary, generator: GameGenerator) -> None:
    game = SlidingGame(library, 0, generator=generator)
    for _ in range(10):
        board = game.current.board
        assert not board.is_solved()
        assert GameGenerator.is_solvable(board.slots, 3, game.blank)
        game.new_round()


def test_clock_starts_on_first_accepted_move() -> None:
    game = _one_slide_from_solved()
    game.advance(3.0)
    assert game.snapshot().elapsed == 0

    game.move(Direction.DOWN)
    game.advance(2.5)
    assert game.snapshot().elapsed == 2

    game.move(Direction.UP)
    game.move(Direction.LEFT)
    game.advance(10.0)
    assert game.snapshot().elapsed == 2

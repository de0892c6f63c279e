"""Solver tests over seeded 3x3 scrambles.

Every test is hard-killed after a few seconds by ``pytest-timeout``
(configured in ``pyproject.toml``).  If the solver returns in time, the
move list is replayed through the real game engine to verify
correctness.
"""

from __future__ import annotations

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay import SlidingGame
from photogames.backend.engine.gamesolver import Solver
from photogames.backend.models.board import Board, Direction

# -- helpers ------------------------------------------------------------------


def _scrambled(seed: int) -> Board:
    return GameGenerator.seeded(seed).scrambled(3, blank=8)


def _assert_solve(board: Board) -> list[Direction]:
    """Solve the board and verify the returned moves reach the goal state."""
    moves = Solver.solve(board)

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(moves, list), "solve() must return a list of Direction"
    assert len(moves) > 0, "Solvable board returned 0 moves"
    assert all(isinstance(m, Direction) for m in moves), (
        "Every element must be a Direction"
    )

    # ---- apply moves via the real game engine and check win -----------------
    game = SlidingGame.from_board(board.copy())
    for i, direction in enumerate(moves):
        ok = game.move(direction)
        assert ok, f"Move {i} ({direction.value}) was invalid at blank {game.blank_slot}"

    assert game.is_won, f"Board not solved after {len(moves)} moves"
    return moves


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(12))
def test_solve_3x3(seed: int) -> None:
    _assert_solve(_scrambled(seed))


def test_solution_is_optimal() -> None:
    board = Board.from_flat(3, [0, 1, 2, 3, 4, 5, 8, 6, 7])
    assert _assert_solve(board) == [Direction.LEFT, Direction.LEFT]


def test_solved_board_needs_no_moves() -> None:
    board = Board.solved(3)
    assert Solver.solve(board) == []
    assert Solver.hint(board) is None


def test_unsolvable_board() -> None:
    board = Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
    assert not Solver.is_solvable(board)
    assert Solver.solve(board) == []
    assert Solver.hint(board) is None


def test_gives_up_past_expansion_limit() -> None:
    board = Board.from_flat(3, [0, 1, 2, 3, 4, 5, 8, 6, 7])
    assert Solver.solve(board, max_expansions=1) == []


def test_custom_blank_identity() -> None:
    # Blank is identity 0, currently in slot 1.
    board = Board.from_flat(2, [1, 0, 2, 3])
    assert Solver.solve(board, blank=0) == [Direction.RIGHT]

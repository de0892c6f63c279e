"""Sliding Puzzle: slide pieces into the gap until the photo is whole."""

from __future__ import annotations

from photogames.backend.engine.gameplay.game import GridGame
from photogames.backend.engine.gameplay.policies import SlidePolicy
from photogames.backend.engine.gamesolver import Solver
from photogames.backend.models.board import Board, Direction

# Direction -> offset from the blank to the tile that slides into it.
# UP   -> tile below the blank moves up
# DOWN -> tile above the blank moves down
# LEFT -> tile right of the blank moves left
# RIGHT-> tile left of the blank moves right
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class SlidingGame(GridGame):
    """The last piece (home slot bottom-right) is the blank."""

    title = "Sliding Puzzle"

    @property
    def blank(self) -> int:
        return self.size * self.size - 1

    @property
    def blank_slot(self) -> int:
        return self.current.board.find(self.blank)

    def _scramble(self) -> Board:
        return self.generator.scrambled(self.size, blank=self.blank)

    def _policy(self) -> SlidePolicy:
        return SlidePolicy(self.blank)

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> bool:
        """Slide the tile next to the blank in *direction*.

        Returns True if the move was valid.
        """
        board = self.current.board
        br, bc = board.position(self.blank_slot)
        dr, dc = _OFFSETS[direction]
        tr, tc = br + dr, bc + dc
        if not (0 <= tr < board.rows and 0 <= tc < board.columns):
            return False
        return self.current.click(board.index(tr, tc))

    def hint(self) -> Direction | None:
        """Best next move, or None once solved."""
        if self.current.finished:
            return None
        return Solver.hint(self.current.board, self.blank)

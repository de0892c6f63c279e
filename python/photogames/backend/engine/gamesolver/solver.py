"""Sliding puzzle solver."""

from __future__ import annotations

import heapq
import itertools
import logging

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.models.board import Board, Direction

logger = logging.getLogger(__name__)

# Upper bound on A* node expansions; every 3x3 board solves well below it.
MAX_EXPANSIONS = 400_000

# Blank offset -> direction the tile moves when it slides into the blank.
_OFFSETS: dict[tuple[int, int], Direction] = {
    (1, 0): Direction.UP,
    (-1, 0): Direction.DOWN,
    (0, 1): Direction.LEFT,
    (0, -1): Direction.RIGHT,
}


class Solver:
    """A* search over sliding boards; every method is static."""

    @staticmethod
    def solve(
        board: Board,
        blank: int | None = None,
        *,
        max_expansions: int = MAX_EXPANSIONS,
    ) -> list[Direction]:
        """Return an optimal move sequence that solves *board*.

        Returns ``[]`` if the board is solved, unsolvable, or the search
        exceeds *max_expansions*.  *blank* defaults to the last identity.
        """
        blank = board.size - 1 if blank is None else blank
        if board.is_solved():
            return []

        if not Solver.is_solvable(board, blank):
            return []

        cols = board.columns
        goal = tuple(range(board.size))
        moves = Solver._moves_table(board)

        def distance(slot: int, identity: int) -> int:
            r1, c1 = divmod(slot, cols)
            r2, c2 = divmod(identity, cols)
            return abs(r1 - r2) + abs(c1 - c2)

        start = tuple(board.slots)
        h0 = sum(distance(i, v) for i, v in enumerate(start) if v != blank)
        counter = itertools.count()
        frontier: list[tuple[int, int, int, tuple[int, ...], int, int]] = [
            (h0, next(counter), 0, start, start.index(blank), h0)
        ]
        parents: dict[tuple[int, ...], tuple[tuple[int, ...], Direction] | None] = {start: None}
        best_g: dict[tuple[int, ...], int] = {start: 0}
        expansions = 0

        while frontier:
            _, _, g, state, hole, h = heapq.heappop(frontier)
            if state == goal:
                return Solver._path(parents, state)
            if g > best_g.get(state, g):
                continue

            expansions += 1
            if expansions > max_expansions:
                logger.warning("Solver gave up after %d expansions", expansions)
                return []

            for target, direction in moves[hole]:
                tile = state[target]
                cells = list(state)
                cells[hole], cells[target] = tile, blank
                nxt = tuple(cells)
                ng = g + 1
                if ng >= best_g.get(nxt, ng + 1):
                    continue
                best_g[nxt] = ng
                parents[nxt] = (state, direction)
                nh = h - distance(target, tile) + distance(hole, tile)
                heapq.heappush(frontier, (ng + nh, next(counter), ng, nxt, target, nh))

        return []

    @staticmethod
    def hint(board: Board, blank: int | None = None) -> Direction | None:
        """Return the single best next move, or ``None`` if solved / unsolvable."""
        if board.is_solved():
            return None

        moves = Solver.solve(board, blank)
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(board: Board, blank: int | None = None) -> bool:
        """Return True if *board* can reach the goal state."""
        blank = board.size - 1 if blank is None else blank
        return GameGenerator.is_solvable(board.slots, board.columns, blank)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _moves_table(board: Board) -> list[list[tuple[int, Direction]]]:
        """For every blank slot, the tiles that can slide into it."""
        table: list[list[tuple[int, Direction]]] = []
        for hole in range(board.size):
            br, bc = board.position(hole)
            entries: list[tuple[int, Direction]] = []
            for target in board.neighbors(hole):
                tr, tc = board.position(target)
                entries.append((target, _OFFSETS[(tr - br, tc - bc)]))
            table.append(entries)
        return table

    @staticmethod
    def _path(parents: dict, state: tuple[int, ...]) -> list[Direction]:
        path: list[Direction] = []
        link = parents[state]
        while link is not None:
            state, direction = link
            path.append(direction)
            link = parents[state]
        path.reverse()
        return path

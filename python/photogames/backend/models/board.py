"""Board model shared by every photo game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Board:
    """A slot-indexed arrangement of identities laid out row-major.

    ``slots[i]`` is the identity currently sitting in slot ``i``.  The
    solved (home) arrangement is ``slots[i] == i`` for every slot.
    """

    columns: int
    slots: list[int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, columns: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major identity list.

        Example::

            Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
        """
        if columns < 1:
            raise ValueError(f"A board needs at least one column, got {columns}.")
        if not flat or len(flat) % columns:
            raise ValueError(
                f"Expected a multiple of {columns} identities, got {len(flat)}."
            )
        if sorted(flat) != list(range(len(flat))):
            raise ValueError(
                f"Identities must be a permutation of 0..{len(flat) - 1}."
            )
        return cls(columns=columns, slots=list(flat))

    @classmethod
    def solved(cls, columns: int, size: int | None = None) -> Board:
        """Return the home arrangement (defaults to a square grid)."""
        size = columns * columns if size is None else size
        return cls.from_flat(columns, list(range(size)))

    # -- geometry -------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.slots)

    @property
    def rows(self) -> int:
        return len(self.slots) // self.columns

    def position(self, slot: int) -> tuple[int, int]:
        """Return ``(row, col)`` of *slot*."""
        return divmod(slot, self.columns)

    def index(self, row: int, col: int) -> int:
        return row * self.columns + col

    def contains(self, slot: int) -> bool:
        return 0 <= slot < len(self.slots)

    def are_adjacent(self, a: int, b: int) -> bool:
        """True if *a* and *b* share a row or column at distance 1."""
        ar, ac = self.position(a)
        br, bc = self.position(b)
        return abs(ar - br) + abs(ac - bc) == 1

    def neighbors(self, slot: int) -> list[int]:
        row, col = self.position(slot)
        result: list[int] = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.columns:
                result.append(self.index(nr, nc))
        return result

    # -- queries --------------------------------------------------------------

    def get(self, slot: int) -> int:
        return self.slots[slot]

    def find(self, identity: int) -> int:
        """Return the slot currently holding *identity*."""
        return self.slots.index(identity)

    def is_solved(self) -> bool:
        """Check if every identity sits in its home slot."""
        return all(v == i for i, v in enumerate(self.slots))

    def is_slot_correct(self, slot: int) -> bool:
        return self.slots[slot] == slot

    def correct_count(self) -> int:
        return sum(1 for i, v in enumerate(self.slots) if v == i)

    def grid(self) -> list[list[int]]:
        """Return the slots as a list of rows (for rendering)."""
        c = self.columns
        return [self.slots[r * c : (r + 1) * c] for r in range(self.rows)]

    # -- mutation -------------------------------------------------------------

    def swap(self, a: int, b: int) -> None:
        self.slots[a], self.slots[b] = self.slots[b], self.slots[a]

    def copy(self) -> Board:
        return Board(columns=self.columns, slots=self.slots[:])

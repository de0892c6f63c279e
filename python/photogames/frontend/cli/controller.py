"""Key-driven game control shared by the vanilla and Rich frontends.

The frontends only differ in how they draw; everything that turns a
keypress into an engine call lives here.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from photogames.backend.engine.gameplay import (
    GameKind,
    GamePlay,
    MemoryGame,
    RevealGame,
    SlidingGame,
    Snapshot,
    SwapGame,
    create_game,
)
from photogames.backend.models.board import Direction
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig
from photogames.frontend.cli.input_handler import SELECT_ACTIONS, get_key, get_key_timeout

_DIRECTIONS = {"up", "down", "left", "right"}

HELP: dict[GameKind, str] = {
    GameKind.memory: "Arrows/WASD move, Space flips a card, R new game, Q back",
    GameKind.sliding: "Arrows/WASD slide a tile into the gap, N hint, R shuffle, Q back",
    GameKind.swap: "Arrows/WASD move, Space picks/swaps a piece, T reference, R shuffle, Q back",
    GameKind.reveal: "Arrows/WASD move, Space removes a block, 1-4 guess, R next round, Q back",
}


class Cursor:
    """Row/column cursor over a grid of slots."""

    def __init__(self, rows: int, columns: int) -> None:
        self.rows = rows
        self.columns = columns
        self.row = 0
        self.col = 0

    @property
    def slot(self) -> int:
        return self.row * self.columns + self.col

    def move(self, action: str) -> None:
        if action == "up":
            self.row = (self.row - 1) % self.rows
        elif action == "down":
            self.row = (self.row + 1) % self.rows
        elif action == "left":
            self.col = (self.col - 1) % self.columns
        elif action == "right":
            self.col = (self.col + 1) % self.columns


class GameController:
    """One running game plus the UI-only state around it."""

    def __init__(
        self,
        kind: GameKind,
        library: PhotoLibrary,
        config: GameConfig,
        photo_id: int | None = None,
    ) -> None:
        self.kind = kind
        self.library = library
        self.game: GamePlay = create_game(kind, library, config, photo_id=photo_id)
        snap = self.game.snapshot()
        self.cursor = Cursor(snap.rows, snap.columns)
        self.status = ""
        self.show_reference = False
        self._seen = self._visual(snap)

    @property
    def snapshot(self) -> Snapshot:
        return self.game.snapshot()

    # -- input ----------------------------------------------------------------

    def handle(self, action: str) -> bool:
        """Apply one key action.  Returns False when the player leaves."""
        self.status = ""
        snap = self.game.snapshot()

        if action == "quit":
            self.game.close()
            return False
        if action == "help":
            self.status = HELP[self.kind]
        elif action == "restart":
            self._restart(snap)
        elif isinstance(self.game, SlidingGame) and action in _DIRECTIONS:
            self.game.move(Direction(action))
        elif action in _DIRECTIONS:
            self.cursor.move(action)
        elif action in SELECT_ACTIONS:
            if snap.finished:
                self._restart(snap)
            elif not isinstance(self.game, SlidingGame):
                self.game.click(self.cursor.slot)
        elif action == "hint" and isinstance(self.game, SlidingGame):
            self._hint()
        elif action == "reference" and isinstance(self.game, SwapGame):
            self.show_reference = not self.show_reference
        elif isinstance(self.game, RevealGame) and action.isdigit():
            self._guess(int(action))

        self._seen = self._visual(self.game.snapshot())
        return True

    def advance(self, seconds: float) -> bool:
        """Let time pass.  Returns True if the board changed (not just the clock)."""
        visual = self._visual(self.game.advance(seconds))
        changed = visual != self._seen
        self._seen = visual
        return changed

    # -- actions --------------------------------------------------------------

    def _restart(self, snap: Snapshot) -> None:
        if isinstance(self.game, RevealGame) and not snap.finished:
            self.status = "Make a guess first!"
            return
        self.game.new_round()
        self.show_reference = False
        if isinstance(self.game, RevealGame):
            self.status = f"Round {self.game.round_number}"
        else:
            self.status = "Shuffled!" if self.kind.needs_photo else "New game!"

    def _hint(self) -> None:
        assert isinstance(self.game, SlidingGame)
        hint = self.game.hint()
        if hint is None:
            self.status = "Already solved!" if self.game.finished else "No hint available."
            return
        self.game.move(hint)
        self.status = f"Hint: moved {hint.value}"

    def _guess(self, number: int) -> None:
        assert isinstance(self.game, RevealGame)
        choices = self.game.choices
        if not 1 <= number <= len(choices):
            return
        snap = self.game.guess(choices[number - 1])
        if snap.finished:
            self.status = (
                f"Correct! +{snap.outcome.score} points" if snap.won
                else f"Not quite! It was {self.game.target_photo.label}."
            )

    # -- rendering helpers ----------------------------------------------------

    def label_at(self, slot: int) -> str:
        """Text for a face-up card, a puzzle piece or an uncovered block."""
        game = self.game
        if isinstance(game, MemoryGame):
            return game.photo_at(slot).glyph
        if isinstance(game, RevealGame):
            return reveal_fragment(game.target_photo.label, slot)
        return str(game.current.board.get(slot) + 1)

    @staticmethod
    def _visual(snap: Snapshot) -> tuple:
        return (snap.slots, snap.selection, snap.revealed, snap.matched, snap.locked, snap.outcome)


def reveal_fragment(label: str, slot: int) -> str:
    """One letter of the hidden photo's label, tiled across the cover."""
    text = label.upper().replace(" ", "") + "·"
    return text[slot % len(text)]


# -- loops --------------------------------------------------------------------


def play_loop(
    controller: GameController,
    draw: Callable[[GameController], None],
    update_clock: Callable[[GameController], None],
    *,
    poll: float = 0.1,
) -> None:
    """Drive *controller* until the player leaves.

    Waits for keys with a short timeout so the clock keeps ticking and
    settle delays resolve without input.
    """
    last = time.monotonic()
    while True:
        draw(controller)
        while True:
            key = get_key_timeout(poll)
            now = time.monotonic()
            changed = controller.advance(now - last)
            last = now
            if key is not None or changed:
                break
            update_clock(controller)
        if key is not None and not controller.handle(key):
            return


def pick_photo(
    library: PhotoLibrary,
    draw: Callable[[PhotoLibrary, int], None],
) -> int | None:
    """Let the player choose a photo.  Returns its id, or None to go back."""
    index = 0
    while True:
        draw(library, index)
        key = get_key()
        if key == "quit":
            return None
        if key in ("up", "left"):
            index = (index - 1) % len(library)
        elif key in ("down", "right"):
            index = (index + 1) % len(library)
        elif key in SELECT_ACTIONS:
            return library[index].id
        elif key.isdigit() and 1 <= int(key) <= min(len(library), 9):
            return library[int(key) - 1].id

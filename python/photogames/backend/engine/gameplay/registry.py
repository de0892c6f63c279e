"""Name -> game session factory, shared by the CLI and every frontend."""

from __future__ import annotations

from enum import StrEnum

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.engine.gameplay.game import GamePlay
from photogames.backend.engine.gameplay.memory import MemoryGame
from photogames.backend.engine.gameplay.reveal import RevealGame
from photogames.backend.engine.gameplay.sliding import SlidingGame
from photogames.backend.engine.gameplay.swap import SwapGame
from photogames.backend.engine.gamestate import Scheduler
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig


class GameKind(StrEnum):
    memory = "memory"
    sliding = "sliding"
    swap = "swap"
    reveal = "reveal"

    @property
    def needs_photo(self) -> bool:
        """Grid puzzles start from a photo the player picks."""
        return self in (GameKind.sliding, GameKind.swap)


DESCRIPTIONS: dict[GameKind, str] = {
    GameKind.memory: "Flip cards and find matching pairs!",
    GameKind.sliding: "Slide tiles to rebuild the picture!",
    GameKind.swap: "Swap scrambled pieces back in place!",
    GameKind.reveal: "Uncover the hidden photo and guess!",
}

_CLASSES: dict[GameKind, type[GamePlay]] = {
    GameKind.memory: MemoryGame,
    GameKind.sliding: SlidingGame,
    GameKind.swap: SwapGame,
    GameKind.reveal: RevealGame,
}


def title_of(kind: GameKind) -> str:
    return _CLASSES[kind].title


def create_game(
    kind: GameKind,
    library: PhotoLibrary,
    config: GameConfig,
    *,
    photo_id: int | None = None,
    generator: GameGenerator | None = None,
    scheduler: Scheduler | None = None,
) -> GamePlay:
    """Start a session of *kind*.  Grid puzzles require *photo_id*."""
    kwargs = {"config": config, "generator": generator, "scheduler": scheduler}
    if kind.needs_photo:
        if photo_id is None:
            raise ValueError(f"{title_of(kind)} needs a photo to be chosen first.")
        return _CLASSES[kind](library, photo_id, **kwargs)
    return _CLASSES[kind](library, **kwargs)

"""Game tunables shared by the CLI, the frontends and the engines."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from photogames.backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS


@dataclass(frozen=True)
class GameConfig:
    """Tunables for one play session.

    Defaults reproduce the classic family edition: eight memory pairs,
    3×3 grid puzzles, a 5×5 reveal cover and four guess choices.
    """

    memory_pairs: int = 8
    match_delay: float = 0.5
    mismatch_delay: float = 0.9
    grid_size: int = 3
    reveal_grid: int = 5
    reveal_choices: int = 4
    tick_seconds: float = 1.0
    seed: int | None = None
    photos_dir: Path | None = None

    def __post_init__(self) -> None:
        if not MIN_PAIRS <= self.memory_pairs <= MAX_PAIRS:
            raise ValueError(
                f"memory_pairs must be {MIN_PAIRS}-{MAX_PAIRS}, got {self.memory_pairs}."
            )
        if self.match_delay < 0 or self.mismatch_delay < 0:
            raise ValueError("Settle delays must be non-negative.")
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}.")
        if self.reveal_grid < 2:
            raise ValueError(f"reveal_grid must be at least 2, got {self.reveal_grid}.")
        if self.reveal_choices < 2:
            raise ValueError(f"reveal_choices must be at least 2, got {self.reveal_choices}.")
        if self.tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}.")

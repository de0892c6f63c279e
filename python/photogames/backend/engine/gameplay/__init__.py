from photogames.backend.engine.gameplay.game import GamePlay, GridGame
from photogames.backend.engine.gameplay.memory import MemoryGame
from photogames.backend.engine.gameplay.policies import (
    MovePolicy,
    PairPolicy,
    RevealPolicy,
    SlidePolicy,
    SwapPolicy,
)
from photogames.backend.engine.gameplay.reveal import RevealGame
from photogames.backend.engine.gameplay.registry import DESCRIPTIONS, GameKind, create_game, title_of
from photogames.backend.engine.gameplay.round import Round, RoundOutcome, Snapshot
from photogames.backend.engine.gameplay.sliding import SlidingGame
from photogames.backend.engine.gameplay.swap import SwapGame

__all__ = [
    "DESCRIPTIONS",
    "GamePlay",
    "GameKind",
    "GridGame",
    "MemoryGame",
    "MovePolicy",
    "PairPolicy",
    "RevealGame",
    "RevealPolicy",
    "Round",
    "RoundOutcome",
    "SlidePolicy",
    "SlidingGame",
    "Snapshot",
    "SwapGame",
    "SwapPolicy",
    "create_game",
    "title_of",
]

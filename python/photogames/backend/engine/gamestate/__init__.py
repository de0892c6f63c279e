from photogames.backend.engine.gamestate.scoring import MAX_STARS, reveal_score, star_rating
from photogames.backend.engine.gamestate.state import GameState, format_time
from photogames.backend.engine.gamestate.timers import Scheduler, TimerToken

__all__ = [
    "GameState",
    "MAX_STARS",
    "Scheduler",
    "TimerToken",
    "format_time",
    "reveal_score",
    "star_rating",
]

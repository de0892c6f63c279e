from photogames.backend.engine.gamegenerator.generator import MAX_PAIRS, MIN_PAIRS, GameGenerator

__all__ = ["GameGenerator", "MAX_PAIRS", "MIN_PAIRS"]

"""Photo Games: four casual photo mini-games for the family."""

__version__ = "0.1.0"

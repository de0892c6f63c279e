"""Shared fixtures: a seeded generator, the built-in photos and a config."""

from __future__ import annotations

import pytest

from photogames.backend.engine.gamegenerator import GameGenerator
from photogames.backend.models.photo import Photo, PhotoLibrary
from photogames.config import GameConfig


@pytest.fixture
def library() -> PhotoLibrary:
    return PhotoLibrary.builtin()


@pytest.fixture
def small_library() -> PhotoLibrary:
    """Exactly four photos: the fewest Photo Reveal accepts."""
    return PhotoLibrary(Photo(id=i, label=f"Photo {i}", glyph=str(i)) for i in range(4))


@pytest.fixture
def generator() -> GameGenerator:
    return GameGenerator.seeded(1234)


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(seed=7)

from photogames.backend.models.board import Board, Direction
from photogames.backend.models.photo import Photo, PhotoLibrary

__all__ = ["Board", "Direction", "Photo", "PhotoLibrary"]

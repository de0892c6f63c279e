"""Puzzle Swap: tap two pieces to exchange them until the photo is whole."""

from __future__ import annotations

from photogames.backend.engine.gameplay.game import GridGame
from photogames.backend.engine.gameplay.policies import SwapPolicy
from photogames.backend.models.board import Board


class SwapGame(GridGame):
    title = "Puzzle Swap"

    def _scramble(self) -> Board:
        return self.generator.scrambled(self.size)

    def _policy(self) -> SwapPolicy:
        return SwapPolicy()

    @property
    def selected(self) -> int | None:
        selection = self.current.selection
        return selection[0] if selection else None

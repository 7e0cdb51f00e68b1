"""The solo ruleset, following the official Battlesnake solo rules."""

from __future__ import annotations

from snek.board import Board
from snek.ruleset.standard import StandardRuleset


class SoloRuleset(StandardRuleset):
    """Single-player rules: play continues until no snake is left alive."""

    def done(self, board: Board) -> bool:
        return board.alive_snakes_remaining() <= 0

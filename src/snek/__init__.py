"""Snek — deterministic turn-based simulation of Battlesnake games."""

from snek.board import Board
from snek.config import RulesetConfig
from snek.errors import (
    NotEnoughSpaceError,
    NotEnoughSpaceForApplesError,
    OccupiedError,
    SnekError,
)
from snek.point import Direction, Point
from snek.ruleset import Ruleset, SoloRuleset, StandardRuleset
from snek.size import Size
from snek.snake import ALIVE, Alive, Eliminated, EliminationCause, Snake

__all__ = [
    "ALIVE",
    "Alive",
    "Board",
    "Direction",
    "Eliminated",
    "EliminationCause",
    "NotEnoughSpaceError",
    "NotEnoughSpaceForApplesError",
    "OccupiedError",
    "Point",
    "Ruleset",
    "RulesetConfig",
    "Size",
    "Snake",
    "SnekError",
    "SoloRuleset",
    "StandardRuleset",
]

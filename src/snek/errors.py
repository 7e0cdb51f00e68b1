"""Exceptions raised while setting up board positions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snek.point import Point


class SnekError(Exception):
    """Base class for all board setup errors."""


class OccupiedError(SnekError):
    """A spawn targeted a point already taken by an apple or a snake."""

    def __init__(self, point: Point) -> None:
        super().__init__(f"Point ({point.x}, {point.y}) is occupied.")
        self.point = point


class NotEnoughSpaceError(SnekError):
    """The board has too few start points for the requested snakes."""


class NotEnoughSpaceForApplesError(SnekError):
    """Starting apples could not be placed on the board."""

"""Grid points and movement directions."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows toward the south, so ``UP`` decreases it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """Interpret *value* as a direction, or return ``None``.

        Accepts members, their lowercase names, and the compass aliases
        ``north``, ``south``, ``east`` and ``west``.
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            return _DIRECTION_NAMES.get(value.strip().lower())
        return None


_DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "north": Direction.UP,
    "south": Direction.DOWN,
    "west": Direction.LEFT,
    "east": Direction.RIGHT,
}


@dataclass(frozen=True, order=True)
class Point:
    """An integer coordinate on (or off) a board.

    Points double as relative vectors: the difference of two points is
    the step taken from one to the other.
    """

    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    @classmethod
    def vector(cls, direction: Direction) -> Point:
        """Return the unit vector for *direction*."""
        dx, dy = direction.value
        return cls(dx, dy)

    def step(self, direction: Direction) -> Point:
        """Return the point one step toward *direction*."""
        return self + Point.vector(direction)

    def rotate_clockwise(self) -> Point:
        """Rotate this vector a quarter turn clockwise."""
        return Point(-self.y, self.x)

    def rotate_counterclockwise(self) -> Point:
        """Rotate this vector a quarter turn counterclockwise."""
        return Point(self.y, -self.x)

    def adjacent_neighbors(self) -> list[Point]:
        """Return the four cardinal neighbors: up, down, right, left."""
        return [
            self.step(Direction.UP),
            self.step(Direction.DOWN),
            self.step(Direction.RIGHT),
            self.step(Direction.LEFT),
        ]

    def diagonal_neighbors(self) -> list[Point]:
        """Return the four diagonal neighbors.

        Ordered northwest, northeast, southeast, southwest.
        """
        neighbors = []
        for direction in (Direction.UP, Direction.DOWN):
            v = Point.vector(direction)
            ahead = self + v
            neighbors.append(ahead + v.rotate_counterclockwise())
            neighbors.append(ahead + v.rotate_clockwise())
        return neighbors

    def manhattan_distance(self, other: Point) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_even(self) -> bool:
        """Whether the point falls on an even checkerboard square."""
        return (self.x + self.y) % 2 == 0

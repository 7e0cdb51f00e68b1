"""Snake representation, elimination state, and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any

from snek.point import Direction, Point

SnakeId = Any
"""Opaque snake identity. Ids on one board must be mutually comparable."""

SNAKE_DEFAULT_LENGTH = 3
SNAKE_MAX_HEALTH = 100


class EliminationCause(enum.Enum):
    """Why a snake was removed from play."""

    STARVATION = "starvation"
    OUT_OF_BOUNDS = "out_of_bounds"
    SELF_COLLISION = "self_collision"
    COLLISION = "collision"
    HEAD_TO_HEAD = "head_to_head"


# Causes that blame another snake and therefore carry its id.
_CAUSES_WITH_OPPONENT = frozenset(
    {EliminationCause.COLLISION, EliminationCause.HEAD_TO_HEAD}
)


@dataclass(frozen=True)
class Alive:
    """State of a snake still in play."""


@dataclass(frozen=True)
class Eliminated:
    """Terminal state of a snake, with the cause and any opponent blamed."""

    cause: EliminationCause
    by: SnakeId | None = None

    def __post_init__(self) -> None:
        if self.cause in _CAUSES_WITH_OPPONENT and self.by is None:
            raise ValueError(f"{self.cause.value} elimination requires 'by'.")
        if self.cause not in _CAUSES_WITH_OPPONENT and self.by is not None:
            raise ValueError(f"{self.cause.value} elimination takes no 'by'.")


ALIVE = Alive()

SnakeState = Alive | Eliminated


@dataclass(frozen=True)
class Snake:
    """A snake on a board.

    The body is ordered head first. Body parts may be stacked on the same
    point: a freshly spawned snake has all of its parts on the spawn
    point, and growth duplicates the tail until the snake moves on.
    """

    id: SnakeId
    state: SnakeState = ALIVE
    health: int = SNAKE_MAX_HEALTH
    body: tuple[Point, ...] = ()

    @classmethod
    def spawn(
        cls,
        snake_id: SnakeId,
        head: Point,
        length: int = SNAKE_DEFAULT_LENGTH,
        health: int = SNAKE_MAX_HEALTH,
    ) -> Snake:
        """Create a live snake with *length* parts stacked on *head*."""
        return cls(id=snake_id, state=ALIVE, health=health, body=(head,) * length)

    @property
    def head(self) -> Point | None:
        """Return the head, or ``None`` for an empty body."""
        return self.body[0] if self.body else None

    @property
    def neck(self) -> Point | None:
        return self.body[1] if len(self.body) > 1 else None

    @property
    def tail(self) -> Point | None:
        return self.body[-1] if self.body else None

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def alive(self) -> bool:
        return isinstance(self.state, Alive)

    @property
    def eliminated(self) -> bool:
        return isinstance(self.state, Eliminated)

    def move(self, direction: Direction | str | None) -> Snake:
        """Move one step, keeping the body length unchanged.

        Without a valid direction the snake keeps going the way it last
        moved, judged from its head and neck. A snake whose head and neck
        coincide cannot tell and heads up instead.

        Eliminated snakes and empty bodies are returned unchanged.
        """
        if not self.alive or not self.body:
            return self

        head = self.body[0]
        direction = Direction.parse(direction)
        if direction is not None:
            new_head = head.step(direction)
        elif self.neck is not None and self.neck != head:
            new_head = head + (head - self.neck)
        else:
            new_head = head.step(Direction.UP)

        return replace(self, body=(new_head,) + self.body[:-1])

    def hurt(self) -> Snake:
        """Lose one point of health. Health is not clamped at zero."""
        return replace(self, health=self.health - 1)

    def feed(self, health: int = SNAKE_MAX_HEALTH) -> Snake:
        """Restore health to *health* and grow by one tail part."""
        return replace(self, health=health).grow()

    def grow(self) -> Snake:
        """Duplicate the tail part. Health is left alone."""
        if not self.body:
            return self
        return replace(self, body=self.body + (self.body[-1],))

    def eliminate(
        self, cause: EliminationCause, by: SnakeId | None = None,
    ) -> Snake:
        """Return this snake eliminated for *cause*.

        Already-eliminated snakes keep their original state.
        """
        if self.eliminated:
            return self
        return replace(self, state=Eliminated(cause, by))

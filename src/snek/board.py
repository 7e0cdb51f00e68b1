"""Immutable board positions and the per-turn state transitions."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from snek.errors import OccupiedError
from snek.point import Direction, Point
from snek.size import Size
from snek.snake import (
    SNAKE_DEFAULT_LENGTH,
    SNAKE_MAX_HEALTH,
    EliminationCause,
    Snake,
    SnakeId,
)

logger = logging.getLogger(__name__)

Move = Direction | str | None
Moves = Mapping[SnakeId, Move] | Iterable[tuple[SnakeId, Move]]


@dataclass(frozen=True)
class Board:
    """A board position: its size, the apples on it, and its snakes.

    Boards are values. Every operation returns a new board and leaves the
    original untouched, so earlier turns stay valid for replay and
    analysis. Eliminated snakes stay on the board with their final body.
    """

    size: Size
    apples: tuple[Point, ...] = ()
    snakes: tuple[Snake, ...] = ()

    @classmethod
    def new(cls, size: Size) -> Board:
        """Return an empty board of the given size."""
        return cls(size=size)

    @property
    def is_empty(self) -> bool:
        """Whether the board has neither apples nor snakes."""
        return not self.apples and not self.snakes

    def center_point(self) -> Point:
        """Return the center, rounded toward the origin on even sides."""
        return Point((self.size.width - 1) // 2, (self.size.height - 1) // 2)

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def spawn_apple(self, point: Point) -> Board:
        """Add an apple at *point*.

        Raises :class:`OccupiedError` if the point is taken.
        """
        if self.occupied(point):
            raise OccupiedError(point)
        return self.spawn_apple_unchecked(point)

    def spawn_apple_unchecked(self, point: Point) -> Board:
        """Add an apple without checking whether *point* is free."""
        return replace(self, apples=(point,) + self.apples)

    def spawn_apple_at_center(self) -> Board:
        return self.spawn_apple(self.center_point())

    def spawn_apples(self, points: Iterable[Point]) -> Board:
        """Add an apple at each point, or none at all.

        Points are checked against the current board only, not against
        each other.
        """
        points = tuple(points)
        for point in points:
            if self.occupied(point):
                raise OccupiedError(point)
        return self.spawn_apples_unchecked(points)

    def spawn_apples_unchecked(self, points: Iterable[Point]) -> Board:
        return replace(self, apples=tuple(points) + self.apples)

    def spawn_snake(
        self,
        snake_id: SnakeId,
        head: Point,
        length: int = SNAKE_DEFAULT_LENGTH,
        health: int = SNAKE_MAX_HEALTH,
    ) -> Board:
        """Add a snake with *length* body parts stacked on *head*.

        Raises :class:`OccupiedError` if the point is taken.
        """
        if self.occupied(head):
            raise OccupiedError(head)
        snake = Snake.spawn(snake_id, head, length=length, health=health)
        return replace(self, snakes=(snake,) + self.snakes)

    def spawn_snake_at_center(
        self,
        snake_id: SnakeId,
        length: int = SNAKE_DEFAULT_LENGTH,
        health: int = SNAKE_MAX_HEALTH,
    ) -> Board:
        return self.spawn_snake(
            snake_id, self.center_point(), length=length, health=health,
        )

    def spawn_snakes(
        self,
        ids_and_heads: Iterable[tuple[SnakeId, Point]],
        length: int = SNAKE_DEFAULT_LENGTH,
        health: int = SNAKE_MAX_HEALTH,
    ) -> Board:
        """Spawn snakes one after another, failing as a whole on conflict."""
        board = self
        for snake_id, head in ids_and_heads:
            board = board.spawn_snake(snake_id, head, length=length, health=health)
        return board

    # ------------------------------------------------------------------
    # Occupancy and geometry
    # ------------------------------------------------------------------

    def occupied(self, point: Point) -> bool:
        """Whether an apple or any snake body part, dead or alive, is on *point*."""
        return self.occupied_by_apple(point) or self.occupied_by_snake(point)

    def occupied_by_apple(self, point: Point) -> bool:
        return point in self.apples

    def occupied_by_snake(self, point: Point) -> bool:
        return any(point in snake.body for snake in self.snakes)

    def _occupancy(self) -> set[Point]:
        taken = set(self.apples)
        for snake in self.snakes:
            taken.update(snake.body)
        return taken

    def all_points(self) -> list[Point]:
        """Return every point on the board, by increasing x then y."""
        return [
            Point(x, y)
            for x in range(self.size.width)
            for y in range(self.size.height)
        ]

    def all_even_points(self) -> list[Point]:
        return [p for p in self.all_points() if p.is_even()]

    def occupied_points(self) -> list[Point]:
        taken = self._occupancy()
        return [p for p in self.all_points() if p in taken]

    def unoccupied_points(self) -> list[Point]:
        taken = self._occupancy()
        return [p for p in self.all_points() if p not in taken]

    def within_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.size.width and 0 <= point.y < self.size.height

    def out_of_bounds(self, point: Point) -> bool:
        return not self.within_bounds(point)

    def adjacent_neighbors(self, origin: Point) -> list[Point]:
        """Return in-bounds cardinal neighbors of *origin*."""
        return [p for p in origin.adjacent_neighbors() if self.within_bounds(p)]

    def diagonal_neighbors(self, origin: Point) -> list[Point]:
        """Return in-bounds diagonal neighbors of *origin*."""
        return [p for p in origin.diagonal_neighbors() if self.within_bounds(p)]

    def unoccupied_adjacent_neighbors(self, origin: Point) -> list[Point]:
        return [p for p in self.adjacent_neighbors(origin) if not self.occupied(p)]

    def unoccupied_diagonal_neighbors(self, origin: Point) -> list[Point]:
        return [p for p in self.diagonal_neighbors(origin) if not self.occupied(p)]

    # ------------------------------------------------------------------
    # Snakes
    # ------------------------------------------------------------------

    def get_snake(self, snake_id: SnakeId) -> Snake | None:
        for snake in self.snakes:
            if snake.id == snake_id:
                return snake
        return None

    def alive_snakes(self) -> list[Snake]:
        return [snake for snake in self.snakes if snake.alive]

    def alive_snakes_remaining(self) -> int:
        """Return how many snakes have not been eliminated."""
        return sum(1 for snake in self.snakes if snake.alive)

    # ------------------------------------------------------------------
    # Turn transitions
    # ------------------------------------------------------------------

    def move_snake(self, snake_id: SnakeId, direction: Move) -> Board:
        """Move a single snake. Unknown ids leave the board unchanged."""
        return self.move_snakes({snake_id: direction})

    def move_snakes(self, moves: Moves) -> Board:
        """Move every snake named in *moves*.

        *moves* maps snake ids to directions, or is an iterable of
        ``(id, direction)`` pairs. Each snake only reads its own body, so
        the order of moves does not matter.
        """
        moves = dict(moves)
        snakes = tuple(
            snake.move(moves[snake.id]) if snake.id in moves else snake
            for snake in self.snakes
        )
        return replace(self, snakes=snakes)

    def reduce_snake_healths(self) -> Board:
        """Take one point of health from every live snake."""
        snakes = tuple(
            snake.hurt() if snake.alive else snake for snake in self.snakes
        )
        return replace(self, snakes=snakes)

    def maybe_feed_snakes(self, health: int = SNAKE_MAX_HEALTH) -> Board:
        """Let live snakes eat the apples under their heads.

        Each apple is eaten by every live snake whose head is on it, and
        then removed. Eaters get *health* back and grow by one.
        """
        snakes = list(self.snakes)
        remaining: list[Point] = []
        for apple in self.apples:
            eaters = [
                i for i, snake in enumerate(snakes)
                if snake.alive and snake.body and snake.head == apple
            ]
            if not eaters:
                remaining.append(apple)
                continue
            for i in eaters:
                snakes[i] = snakes[i].feed(health)
                logger.debug(
                    "Snake %r ate the apple at (%d, %d).",
                    snakes[i].id, apple.x, apple.y,
                )
        return replace(self, apples=tuple(remaining), snakes=tuple(snakes))

    def maybe_eliminate_snakes(self) -> Board:
        """Eliminate live snakes that starved, left the board, or collided.

        Every snake is judged against the same pre-elimination position,
        so simultaneous collisions eliminate all parties. Snakes that were
        already eliminated are inert: they neither get judged nor cause
        eliminations.
        """
        alive = [snake for snake in self.snakes if snake.alive]
        # Blame order for collisions: shortest first, then by id.
        ranked = sorted(alive, key=lambda s: (s.length, s.id))
        snakes = tuple(
            self._judge(snake, ranked) if snake.alive else snake
            for snake in self.snakes
        )
        return replace(self, snakes=snakes)

    def _judge(self, snake: Snake, ranked: list[Snake]) -> Snake:
        cause, by = self._elimination_cause(snake, ranked)
        if cause is None:
            return snake
        logger.debug("Snake %r eliminated: %s (by %r).", snake.id, cause.value, by)
        return snake.eliminate(cause, by)

    def _elimination_cause(
        self, snake: Snake, ranked: list[Snake],
    ) -> tuple[EliminationCause | None, SnakeId | None]:
        if snake.health <= 0:
            return EliminationCause.STARVATION, None
        if not snake.body:
            return None, None
        if any(self.out_of_bounds(part) for part in snake.body):
            return EliminationCause.OUT_OF_BOUNDS, None

        head = snake.body[0]
        if head in snake.body[1:]:
            return EliminationCause.SELF_COLLISION, None

        others = [other for other in ranked if other is not snake and other.body]
        for other in others:
            if head in other.body[1:]:
                return EliminationCause.COLLISION, other.id
        for other in others:
            if other.body[0] == head and snake.length <= other.length:
                return EliminationCause.HEAD_TO_HEAD, other.id
        return None, None

"""The standard ruleset, following the official Battlesnake rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from snek.board import Board, Move, Moves
from snek.errors import (
    NotEnoughSpaceError,
    NotEnoughSpaceForApplesError,
    OccupiedError,
)
from snek.point import Point
from snek.ruleset.base import Ruleset
from snek.size import Size
from snek.snake import SnakeId

logger = logging.getLogger(__name__)


class StandardRuleset(Ruleset):
    """Multi-snake rules: the game ends once at most one snake is left.

    Each turn runs a fixed pipeline: move every live snake, decay health,
    feed, maybe spawn an apple, then eliminate. Feeding comes before
    elimination so a snake reaching food on its last point of health
    survives, and snakes meeting head to head on food both eat it.
    """

    def init(
        self,
        size: Size,
        snake_ids: Iterable[SnakeId],
        *,
        rng: np.random.Generator | None = None,
    ) -> Board:
        """Place snakes and starting apples on an empty board.

        Standard sizes use eight fixed, symmetric start points with an
        apple in the center and one diagonal to each snake. Other sizes
        start snakes on even squares and scatter apples at random.

        Raises :class:`NotEnoughSpaceError` when there are more snakes
        than start points, and :class:`NotEnoughSpaceForApplesError` when
        the starting apples do not fit.
        """
        rng = self._rng(rng)
        ids = list(dict.fromkeys(snake_ids))
        board = self._spawn_snakes(Board.new(size), ids, rng)
        board = self._spawn_apples(board, rng)
        logger.info(
            "Initialised %dx%d board with %d snake(s) and %d apple(s).",
            size.width, size.height, len(board.snakes), len(board.apples),
        )
        return board

    def next_turn(
        self,
        board: Board,
        moves: Moves,
        apple_spawn_chance: float | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> Board:
        """Apply *moves* and return the next board position.

        Live snakes missing from *moves* carry on in their current
        direction. Unknown ids and unrecognised moves are ignored.
        """
        rng = self._rng(rng)
        if apple_spawn_chance is None:
            apple_spawn_chance = self.config.apple_spawn_chance

        board = (
            board.move_snakes(self._all_snake_moves(board, moves))
            .reduce_snake_healths()
            .maybe_feed_snakes(self.config.snake_max_health)
        )
        board = self._maybe_spawn_apple(board, apple_spawn_chance, rng)
        return board.maybe_eliminate_snakes()

    def done(self, board: Board) -> bool:
        return board.alive_snakes_remaining() <= 1

    @staticmethod
    def _all_snake_moves(board: Board, moves: Moves) -> dict[SnakeId, Move]:
        all_moves: dict[SnakeId, Move] = {
            snake.id: None for snake in board.alive_snakes()
        }
        all_moves.update(dict(moves))
        return all_moves

    # ------------------------------------------------------------------
    # Snake placement
    # ------------------------------------------------------------------

    def _spawn_snakes(
        self, board: Board, ids: list[SnakeId], rng: np.random.Generator,
    ) -> Board:
        start_points = self._start_points(board)
        if len(ids) > len(start_points):
            raise NotEnoughSpaceError(
                f"{len(ids)} snakes requested but only {len(start_points)} "
                f"start points on a {board.size.width}x{board.size.height} board."
            )
        if not ids:
            return board

        picks = rng.choice(len(start_points), size=len(ids), replace=False)
        heads = [start_points[i] for i in picks]
        ordered = sorted(ids)
        shuffled = [ordered[i] for i in rng.permutation(len(ordered))]

        try:
            return board.spawn_snakes(
                zip(shuffled, heads, strict=True),
                length=self.config.snake_start_length,
                health=self.config.snake_max_health,
            )
        except OccupiedError as exc:
            raise NotEnoughSpaceError(str(exc)) from exc

    @staticmethod
    def _start_points(board: Board) -> list[Point]:
        if board.size.is_standard:
            return _fixed_start_points(board.size)
        return board.all_even_points()

    # ------------------------------------------------------------------
    # Apple placement
    # ------------------------------------------------------------------

    def _spawn_apples(self, board: Board, rng: np.random.Generator) -> Board:
        try:
            if board.size.is_standard:
                return self._spawn_apples_fixed(board, rng)
            return self._spawn_apples_randomly(board, rng)
        except OccupiedError as exc:
            raise NotEnoughSpaceForApplesError(str(exc)) from exc

    @staticmethod
    def _spawn_apples_fixed(board: Board, rng: np.random.Generator) -> Board:
        board = board.spawn_apple_at_center()

        # One apple two moves away from each snake, where there is room.
        near_snakes: list[Point] = []
        for snake in board.snakes:
            candidates = sorted(board.unoccupied_diagonal_neighbors(snake.head))
            if candidates:
                near_snakes.append(candidates[rng.integers(len(candidates))])

        return board.spawn_apples(near_snakes)

    @staticmethod
    def _spawn_apples_randomly(board: Board, rng: np.random.Generator) -> Board:
        unoccupied = board.unoccupied_points()
        count = min(len(board.snakes), len(unoccupied))
        if count == 0:
            return board
        picks = rng.choice(len(unoccupied), size=count, replace=False)
        return board.spawn_apples(unoccupied[i] for i in picks)

    @staticmethod
    def _maybe_spawn_apple(
        board: Board, apple_spawn_chance: float, rng: np.random.Generator,
    ) -> Board:
        if apple_spawn_chance == 0.0:
            return board
        if board.apples and rng.random() > apple_spawn_chance:
            return board

        unoccupied = board.unoccupied_points()
        if not unoccupied:
            logger.warning("No unoccupied points available for apple spawning.")
            return board
        apple = unoccupied[rng.integers(len(unoccupied))]
        return board.spawn_apple_unchecked(apple)


def _fixed_start_points(size: Size) -> list[Point]:
    """Eight symmetric start points one square in from the edges."""
    mn = 1
    md = (size.width - 1) // 2
    mx = size.width - 2
    return [
        Point(mn, mn),
        Point(mn, md),
        Point(mn, mx),
        Point(md, mn),
        Point(md, mx),
        Point(mx, mn),
        Point(mx, md),
        Point(mx, mx),
    ]

"""Performance benchmarking utilities for turn throughput."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snek.board import Board
from snek.config import RulesetConfig
from snek.point import Direction, Point
from snek.ruleset import SoloRuleset, StandardRuleset
from snek.size import Size

logger = logging.getLogger(__name__)

_DIRECTIONS: list[Direction] = list(Direction)

# Fixed tour of the small board used by the static cycle workload. The
# snake's next move is looked up by the position of its head.
_CYCLE_MOVES: dict[tuple[int, int], Direction] = {
    **{(x, 0): Direction.RIGHT for x in range(6)},
    (6, 0): Direction.DOWN,
    **{(x, 1): Direction.LEFT for x in range(2, 7)},
    (1, 1): Direction.DOWN,
    **{(x, 2): Direction.RIGHT for x in range(1, 6)},
    (6, 2): Direction.DOWN,
    **{(x, 3): Direction.LEFT for x in range(2, 7)},
    (1, 3): Direction.DOWN,
    **{(x, 4): Direction.RIGHT for x in range(1, 6)},
    (6, 4): Direction.DOWN,
    (6, 5): Direction.DOWN,
    (6, 6): Direction.LEFT,
    (5, 6): Direction.UP,
    (5, 5): Direction.LEFT,
    (4, 5): Direction.DOWN,
    (4, 6): Direction.LEFT,
    (3, 6): Direction.UP,
    (3, 5): Direction.LEFT,
    (2, 5): Direction.DOWN,
    (2, 6): Direction.LEFT,
    (1, 6): Direction.UP,
    (1, 5): Direction.LEFT,
    (0, 6): Direction.UP,
    **{(0, y): Direction.UP for y in range(1, 6)},
}

CYCLE_SNAKE_ID = "p1"


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    games: int
    turns: int
    wall_time_seconds: float
    games_per_second: float
    turns_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.games} games, {self.turns} turns in "
            f"{self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.turns_per_second:.1f} turns/s"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    snake_count: int = 2,
    size: Size | None = None,
    max_turns: int = 500,
    apple_spawn_chance: float = 0.15,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw simulation throughput of the standard ruleset.

    Plays *num_games* games in which every live snake picks a uniformly
    random direction each turn, until the game is done or *max_turns*
    is reached.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_turns < 1:
        raise ValueError("max_turns must be at least 1.")

    size = size or Size.small()
    rng = np.random.default_rng(seed)
    ruleset = StandardRuleset(
        RulesetConfig(apple_spawn_chance=apple_spawn_chance), rng=rng,
    )
    snake_ids = [f"p{i + 1}" for i in range(snake_count)]

    total_turns = 0
    start = time.perf_counter()

    for _ in range(num_games):
        board = ruleset.init(size, snake_ids)
        for _ in range(max_turns):
            if ruleset.done(board):
                break
            moves = {
                snake.id: _DIRECTIONS[rng.integers(len(_DIRECTIONS))]
                for snake in board.alive_snakes()
            }
            board = ruleset.next_turn(board, moves)
            total_turns += 1

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        games=num_games,
        turns=total_turns,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        turns_per_second=total_turns / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result


def static_cycle_board() -> Board:
    """Return the starting position of the static cycle workload."""
    return (
        Board.new(Size.small())
        .spawn_snake(CYCLE_SNAKE_ID, Point(1, 3))
        .spawn_apples([Point(0, 4), Point(3, 3)])
    )


def run_static_cycle() -> tuple[Board, int]:
    """Play the deterministic solo workload to the end.

    The snake follows a fixed tour of the small board with apple spawning
    disabled, eats both starting apples, and eventually starves. Returns
    the final board and the number of turns played.
    """
    ruleset = SoloRuleset()
    board = static_cycle_board()
    turns = 0
    while not ruleset.done(board):
        head = board.get_snake(CYCLE_SNAKE_ID).head
        move = _CYCLE_MOVES[(head.x, head.y)]
        board = ruleset.next_turn(board, {CYCLE_SNAKE_ID: move}, 0.0)
        turns += 1
    return board, turns

"""Interface shared by all rule variations."""

from __future__ import annotations

import abc
from collections.abc import Iterable

import numpy as np

from snek.board import Board, Moves
from snek.config import RulesetConfig
from snek.size import Size
from snek.snake import SnakeId


class Ruleset(abc.ABC):
    """Defines how a game plays out from start to finish.

    Implementations decide the initial board position (:meth:`init`),
    each next turn's position once moves are applied (:meth:`next_turn`),
    and when the game is over (:meth:`done`).

    The ruleset owns a seeded NumPy generator for every random choice it
    makes. Passing ``rng=`` to a call overrides it for that call only.
    """

    def __init__(
        self,
        config: RulesetConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or RulesetConfig()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )

    def _rng(self, rng: np.random.Generator | None) -> np.random.Generator:
        return rng if rng is not None else self.rng

    @abc.abstractmethod
    def init(
        self,
        size: Size,
        snake_ids: Iterable[SnakeId],
        *,
        rng: np.random.Generator | None = None,
    ) -> Board:
        """Return the initial board position for a new game."""

    @abc.abstractmethod
    def next_turn(
        self,
        board: Board,
        moves: Moves,
        apple_spawn_chance: float | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> Board:
        """Apply *moves* and return the next turn's board position."""

    @abc.abstractmethod
    def done(self, board: Board) -> bool:
        """Whether the game is over at this board position."""

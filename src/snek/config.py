"""Ruleset configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snek.snake import SNAKE_DEFAULT_LENGTH, SNAKE_MAX_HEALTH

logger = logging.getLogger(__name__)

DEFAULT_APPLE_SPAWN_CHANCE = 0.15


@dataclass(frozen=True)
class RulesetConfig:
    """Tunable parameters for a ruleset.

    Supports JSON serialization so a game setup can be reproduced.
    """

    apple_spawn_chance: float = DEFAULT_APPLE_SPAWN_CHANCE
    snake_start_length: int = SNAKE_DEFAULT_LENGTH
    snake_max_health: int = SNAKE_MAX_HEALTH
    seed: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.apple_spawn_chance <= 1.0:
            raise ValueError("apple_spawn_chance must be between 0 and 1.")
        if self.snake_start_length < 1:
            raise ValueError("snake_start_length must be at least 1.")
        if self.snake_max_health < 1:
            raise ValueError("snake_max_health must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> RulesetConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)

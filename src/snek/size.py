"""Board dimensions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    """Width and height of a rectangular board.

    The presets mirror the default Battlesnake board sizes. Only these
    get the fixed, symmetric starting layout; any other size is set up
    randomly.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Board width and height must be non-negative.")

    @classmethod
    def small(cls) -> Size:
        return cls(7, 7)

    @classmethod
    def medium(cls) -> Size:
        return cls(11, 11)

    @classmethod
    def large(cls) -> Size:
        return cls(19, 19)

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse a preset name or a ``WIDTHxHEIGHT`` string."""
        name = text.strip().lower()
        presets = {
            "small": cls.small,
            "medium": cls.medium,
            "large": cls.large,
        }
        if name in presets:
            return presets[name]()
        width, sep, height = name.partition("x")
        if not sep or not width.isdigit() or not height.isdigit():
            raise ValueError(
                f"Invalid board size {text!r}; expected a preset name or WxH."
            )
        return cls(int(width), int(height))

    @property
    def is_standard(self) -> bool:
        """Whether this is one of the small, medium or large presets."""
        return self in STANDARD_SIZES

    @property
    def area(self) -> int:
        return self.width * self.height


STANDARD_SIZES: frozenset[Size] = frozenset(
    {Size.small(), Size.medium(), Size.large()}
)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

# 4-direction movement (Left, Right, Up, Down)
DIRS4: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class GridBounds:
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        return min(max(x, 0), self.width - 1), min(max(y, 0), self.height - 1)


@dataclass(frozen=True)
class Coordinates:
    """
    A tile position that is always inside its grid.

    Build through `create` (returns None when out of bounds) rather than
    calling the constructor, which raises instead.
    """

    x: int
    y: int
    bounds: GridBounds = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.bounds.contains(self.x, self.y):
            raise ValueError(f"({self.x}, {self.y}) is outside a {self.bounds.width}x{self.bounds.height} grid")

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    @classmethod
    def create(cls, x: int, y: int, bounds: GridBounds) -> Optional[Coordinates]:
        if not bounds.contains(x, y):
            return None
        return cls(x, y, bounds)

    @classmethod
    def random(cls, bounds: GridBounds, rng: np.random.Generator) -> Coordinates:
        x = int(rng.integers(0, bounds.width))
        y = int(rng.integers(0, bounds.height))
        return cls(x, y, bounds)

    @classmethod
    def center(cls, bounds: GridBounds) -> Coordinates:
        return cls(bounds.width // 2, bounds.height // 2, bounds)

    def checked_move(self, dx: int, dy: int) -> Optional[Coordinates]:
        """Step by (dx, dy); None if that leaves the grid."""
        return Coordinates.create(self.x + dx, self.y + dy, self.bounds)

    def clamped_move(self, dx: int, dy: int) -> Coordinates:
        """Step by (dx, dy), saturating at the grid edges."""
        x, y = self.bounds.clamp(self.x + dx, self.y + dy)
        return Coordinates(x, y, self.bounds)

    def manhattan_distance(self, other: Coordinates) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

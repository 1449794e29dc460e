from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ant_forage.sim.coordinates import Coordinates, GridBounds

logger = logging.getLogger(__name__)


@dataclass
class Resource:
    resources_remaining: int
    size: int

    @classmethod
    def default(cls, size: int) -> Resource:
        return cls(resources_remaining=size, size=size)

    def consume(self) -> Optional[int]:
        """Take one unit. Returns the units left, or None once the last unit is gone."""
        if self.resources_remaining <= 0:
            return None
        self.resources_remaining -= 1
        if self.resources_remaining == 0:
            return None
        return self.resources_remaining

    @property
    def fraction_remaining(self) -> float:
        return self.resources_remaining / float(self.size)


class ResourceMap:
    """
    Food on the grid: a dense (H, W) grid for point lookups plus a list of
    occupied tiles for iteration. Both are only changed through `place`
    and `remove` so a tile is in the index iff its grid cell is set.
    """

    def __init__(self, bounds: GridBounds):
        self.bounds = bounds
        self.grid = np.full((bounds.height, bounds.width), None, dtype=object)
        self.index: List[Coordinates] = []
        self.consumed: int = 0

    def __len__(self) -> int:
        return len(self.index)

    def __iter__(self) -> Iterator[Tuple[Coordinates, Resource]]:
        for coords in self.index:
            yield coords, self.grid[coords.y, coords.x]

    def get(self, coords: Coordinates) -> Optional[Resource]:
        return self.grid[coords.y, coords.x]

    def is_free(self, coords: Coordinates) -> bool:
        return self.grid[coords.y, coords.x] is None

    def place(self, coords: Coordinates, resource: Resource) -> None:
        if not self.is_free(coords):
            raise ValueError(f"tile {coords} already holds a resource")
        self.grid[coords.y, coords.x] = resource
        self.index.append(coords)

    def remove(self, coords: Coordinates) -> None:
        self.grid[coords.y, coords.x] = None
        self.index = [c for c in self.index if c != coords]

    def consume_at(self, coords: Coordinates) -> bool:
        """Eat one unit at `coords` if there is food. Returns whether food was found."""
        resource = self.get(coords)
        if resource is None:
            return False
        self.consumed += 1
        if resource.consume() is None:
            logger.debug("Resource at %s depleted", coords)
            self.remove(coords)
        return True

    def total_remaining(self) -> int:
        return sum(resource.resources_remaining for _, resource in self)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ant_forage.sim.coordinates import Coordinates, GridBounds
from ant_forage.sim.entities import PHEROMONE_LAYERS, PheromoneKind, WorldConfig

logger = logging.getLogger(__name__)


@dataclass
class Pheromone:
    """
    A single marker laid by an ant. Strength drops by `decay_rate` every
    tick and the marker is gone once it reaches zero.
    """

    kind: PheromoneKind
    strength: int
    decay_rate: int
    max_strength: int

    @classmethod
    def new(cls, kind: PheromoneKind, strength: int, decay_rate: int, max_strength: int) -> Optional[Pheromone]:
        if strength > max_strength or strength < decay_rate:
            return None
        return cls(kind=kind, strength=strength, decay_rate=decay_rate, max_strength=max_strength)

    @classmethod
    def default(cls, kind: PheromoneKind, config: WorldConfig) -> Pheromone:
        return cls(
            kind=kind,
            strength=config.max_pheromone_strength,
            decay_rate=config.decay_rate(kind),
            max_strength=config.max_pheromone_strength,
        )

    def refresh(self, amount: int) -> None:
        """Reinforce the marker, saturating at max_strength."""
        if amount <= 0:
            return
        self.strength = min(self.max_strength, self.strength + amount)

    def tick(self) -> bool:
        """Decay one step. Returns False once the marker has expired."""
        remaining = self.strength - self.decay_rate
        if remaining <= 0:
            self.strength = 0
            return False
        self.strength = remaining
        return True


class PheromoneMap:
    """
    Both pheromone layers: a dense (layer, H, W) grid plus the list of
    (coords, kind) cells currently holding a marker.
    """

    def __init__(self, bounds: GridBounds):
        self.bounds = bounds
        self.grid = np.full((len(PHEROMONE_LAYERS), bounds.height, bounds.width), None, dtype=object)
        self.index: List[Tuple[Coordinates, PheromoneKind]] = []

    def __len__(self) -> int:
        return len(self.index)

    def __iter__(self) -> Iterator[Tuple[Coordinates, Pheromone]]:
        for coords, kind in self.index:
            yield coords, self.grid[kind.layer, coords.y, coords.x]

    def get(self, coords: Coordinates, kind: PheromoneKind) -> Optional[Pheromone]:
        return self.grid[kind.layer, coords.y, coords.x]

    def strength(self, coords: Coordinates, kind: PheromoneKind) -> int:
        pheromone = self.get(coords, kind)
        return 0 if pheromone is None else pheromone.strength

    def insert(self, coords: Coordinates, pheromone: Pheromone) -> None:
        if self.get(coords, pheromone.kind) is not None:
            raise ValueError(f"{pheromone.kind.value} pheromone already present at {coords}")
        self.grid[pheromone.kind.layer, coords.y, coords.x] = pheromone
        self.index.append((coords, pheromone.kind))

    def count(self, kind: PheromoneKind) -> int:
        return sum(1 for _, k in self.index if k is kind)

    def decay(self) -> int:
        """
        Tick every live marker once, evicting the expired ones from both
        the grid and the index. Returns how many expired.
        """
        retained: List[Tuple[Coordinates, PheromoneKind]] = []
        for coords, kind in list(self.index):
            pheromone = self.grid[kind.layer, coords.y, coords.x]
            if pheromone is not None and pheromone.tick():
                retained.append((coords, kind))
            else:
                self.grid[kind.layer, coords.y, coords.x] = None
        expired = len(self.index) - len(retained)
        self.index = retained
        if expired:
            logger.debug("%d pheromones expired, %d remain", expired, len(retained))
        return expired

    def is_consistent(self) -> bool:
        """True when the index lists exactly the occupied grid cells."""
        indexed = {(kind.layer, coords.y, coords.x) for coords, kind in self.index}
        if len(indexed) != len(self.index):
            return False
        present = np.vectorize(lambda cell: cell is not None, otypes=[bool])(self.grid)
        occupied = {tuple(int(i) for i in cell) for cell in np.argwhere(present)}
        return occupied == indexed

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ant_forage.sim.coordinates import GridBounds


class AntKind(Enum):
    SCOUT = "scout"
    WORKER = "worker"


class PheromoneKind(Enum):
    EXPLORATION = "exploration"
    RESOURCE = "resource"

    @property
    def layer(self) -> int:
        """Index of this kind in the pheromone grid's first axis."""
        return PHEROMONE_LAYERS.index(self)


# Layer order of the dense pheromone grid: (layer, y, x)
PHEROMONE_LAYERS: Tuple[PheromoneKind, ...] = (PheromoneKind.RESOURCE, PheromoneKind.EXPLORATION)


@dataclass(frozen=True)
class WorldConfig:
    # Grid
    grid_w: int = 64
    grid_h: int = 64

    # Pheromones
    max_pheromone_strength: int = 1000
    exploration_decay_rate: int = 5
    resource_decay_rate: int = 10  # food trails fade quicker

    # Movement
    scout_return_pheromone_chance: float = 0.9
    worker_pheromone_chance: float = 0.9
    ant_backwards_chance: float = 0.1
    territory_size: float = 10.0  # scouts go random more often past this radius
    max_ant_steps: int = 1000     # journey timeout

    # Colonies / ants
    max_scouts: int = 25
    max_workers: int = 10
    spawn_rate: int = 2  # per tick, per colony

    # Food
    resource_size: int = 20
    resource_count: int = 5

    def __post_init__(self) -> None:
        self.validate()

    @property
    def bounds(self) -> GridBounds:
        return GridBounds(self.grid_w, self.grid_h)

    def max_ants(self, kind: AntKind) -> int:
        if kind is AntKind.SCOUT:
            return self.max_scouts
        return self.max_workers

    def decay_rate(self, kind: PheromoneKind) -> int:
        if kind is PheromoneKind.EXPLORATION:
            return self.exploration_decay_rate
        return self.resource_decay_rate

    def validate(self) -> None:
        """Raise ValueError on the first inconsistent field."""
        if self.grid_w <= 0 or self.grid_h <= 0:
            raise ValueError(f"grid size must be positive, got {self.grid_w}x{self.grid_h}")

        for name in ("scout_return_pheromone_chance", "worker_pheromone_chance", "ant_backwards_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

        if self.max_pheromone_strength <= 0:
            raise ValueError("max_pheromone_strength must be positive")
        for name in ("exploration_decay_rate", "resource_decay_rate"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
            if value > self.max_pheromone_strength:
                raise ValueError(f"{name} ({value}) exceeds max_pheromone_strength")

        if self.territory_size <= 0:
            raise ValueError("territory_size must be positive")
        if self.max_ant_steps < 0:
            raise ValueError("max_ant_steps must be >= 0")

        for name in ("max_scouts", "max_workers", "spawn_rate", "resource_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.resource_size <= 0:
            raise ValueError("resource_size must be positive")

        # one tile is always taken by the default colony
        free_tiles = self.grid_w * self.grid_h - 1
        if self.resource_count > free_tiles:
            raise ValueError(f"resource_count {self.resource_count} exceeds the {free_tiles} free tiles")

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ant_forage.sim.entities import AntKind, PheromoneKind


@dataclass
class WorldMetrics:
    tick: int = 0
    ants_by_kind: Dict[AntKind, int] = field(default_factory=dict)
    pheromones_by_kind: Dict[PheromoneKind, int] = field(default_factory=dict)
    resource_tiles: int = 0
    food_remaining: int = 0
    food_consumed: int = 0
    pheromones_expired: int = 0

    def reset(self) -> None:
        self.tick = 0
        self.ants_by_kind = {kind: 0 for kind in AntKind}
        self.pheromones_by_kind = {kind: 0 for kind in PheromoneKind}
        self.resource_tiles = 0
        self.food_remaining = 0
        self.food_consumed = 0
        self.pheromones_expired = 0

    @property
    def total_ants(self) -> int:
        return sum(self.ants_by_kind.values())

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

import numpy as np

from ant_forage.sim.ant import Ant
from ant_forage.sim.coordinates import Coordinates
from ant_forage.sim.entities import AntKind, WorldConfig
from ant_forage.sim.pheromone import PheromoneMap
from ant_forage.sim.resource import ResourceMap

logger = logging.getLogger(__name__)


@dataclass
class Colony:
    """A nest tile and the ants that belong to it, grouped by kind."""

    position: Coordinates
    max_ants: Dict[AntKind, int]
    spawn_rate: int
    colony_id: int = 0
    ants: Dict[AntKind, List[Ant]] = field(default_factory=lambda: {kind: [] for kind in AntKind})

    @classmethod
    def default(cls, config: WorldConfig, colony_id: int = 0) -> Colony:
        return cls.at(Coordinates.center(config.bounds), config, colony_id)

    @classmethod
    def at(cls, position: Coordinates, config: WorldConfig, colony_id: int = 0) -> Colony:
        return cls(
            position=position,
            max_ants={kind: config.max_ants(kind) for kind in AntKind},
            spawn_rate=config.spawn_rate,
            colony_id=colony_id,
        )

    @property
    def population(self) -> int:
        return sum(len(ants) for ants in self.ants.values())

    def count(self, kind: AntKind) -> int:
        return len(self.ants.get(kind, []))

    def iter_ants(self) -> Iterator[Tuple[AntKind, Ant]]:
        for kind, ants in self.ants.items():
            for ant in ants:
                yield kind, ant

    # --------------------------
    # Spawning
    # --------------------------
    def spawn_quota(self) -> Dict[AntKind, int]:
        """
        Share this tick's spawn_rate between under-filled kinds in proportion
        to how many each is missing.

        E.g. caps of 50 scouts / 100 workers with 10 / 50 alive need 40 and 50.
        With a spawn rate of 20: floor(40 * 20 / 90) = 8 scouts and
        floor(50 * 20 / 90) = 11 workers.
        """
        required: Dict[AntKind, int] = {}
        for kind in AntKind:
            missing = self.max_ants.get(kind, 0) - self.count(kind)
            if missing > 0:
                required[kind] = missing

        total_required = sum(required.values())
        if total_required <= 0:
            return {}

        # rounding down can leave every share at 0 (e.g. spawn_rate 1 with two
        # short kinds); see spawn_stalled
        quota: Dict[AntKind, int] = {}
        for kind, missing in required.items():
            # a spawn rate above the shortfall must not overshoot the cap
            quota[kind] = min(missing, missing * self.spawn_rate // total_required)
        return quota

    def spawn_stalled(self) -> bool:
        """True when ants are missing but the quota rounds to nothing."""
        quota = self.spawn_quota()
        return bool(quota) and not any(quota.values())

    def spawn_ants(self) -> int:
        spawned = 0
        for kind, amount in self.spawn_quota().items():
            ants = self.ants.setdefault(kind, [])
            for _ in range(amount):
                ants.append(Ant(kind=kind, position=self.position, colony_anchor=self.position))
            spawned += amount
        if spawned:
            logger.debug("Colony %d at %s spawned %d ants (population %d)", self.colony_id, self.position, spawned, self.population)
        return spawned

    # --------------------------
    # Tick
    # --------------------------
    def update(
        self,
        resources: ResourceMap,
        pheromones: PheromoneMap,
        config: WorldConfig,
        rng: np.random.Generator,
    ) -> None:
        """Spawn this tick's quota, then move every ant in turn."""
        self.spawn_ants()
        for _, ant in self.iter_ants():
            ant.update(resources, pheromones, config, rng)

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from ant_forage.sim.ant import Ant
from ant_forage.sim.colony import Colony
from ant_forage.sim.coordinates import Coordinates
from ant_forage.sim.entities import AntKind, PheromoneKind, WorldConfig
from ant_forage.sim.metrics import WorldMetrics
from ant_forage.sim.pheromone import PheromoneMap
from ant_forage.sim.resource import Resource, ResourceMap

logger = logging.getLogger(__name__)


class AntColonyWorld:
    """
    Grid world simulation:
    - Colonies spawn scouts and workers up to a per-kind cap
    - Ants forage, following or laying Exploration / Resource pheromones
    - Resources deplete one unit per visit and vanish when empty
    - Pheromones decay every tick and vanish at zero strength

    State is only mutated inside `update()`; read it between ticks.
    """

    def __init__(self, config: Optional[WorldConfig] = None, seed: Optional[int] = None, populate: bool = True):
        self.cfg = config or WorldConfig()
        self.rng = np.random.default_rng(seed)

        self.resources = ResourceMap(self.cfg.bounds)
        self.pheromones = PheromoneMap(self.cfg.bounds)
        self.colonies: List[Colony] = []
        self.metrics = WorldMetrics()

        self.tick: int = 0

        if populate:
            self.reset(seed=seed)
        else:
            self._clear()

    @classmethod
    def from_entities(
        cls,
        config: WorldConfig,
        resources: Iterable[Tuple[Coordinates, Resource]],
        colonies: Iterable[Colony],
        seed: Optional[int] = None,
    ) -> AntColonyWorld:
        """Build a world holding exactly the given resources and colonies, nothing added."""
        world = cls(config, seed=seed, populate=False)
        world.colonies = list(colonies)
        for coords, resource in resources:
            world.resources.place(coords, resource)
        world._refresh_metrics(expired=0)
        return world

    def _clear(self) -> None:
        self.tick = 0
        self.resources = ResourceMap(self.cfg.bounds)
        self.pheromones = PheromoneMap(self.cfg.bounds)
        self.colonies = []
        self.metrics.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        """Rebuild the default world: one colony at the centre plus `resource_count` resources."""
        if seed is not None:
            self.rng = np.random.default_rng(seed)

        self._clear()
        self.new_colony()
        for _ in range(self.cfg.resource_count):
            self.new_resource()

        self._refresh_metrics(expired=0)
        logger.info(
            "World %dx%d ready: %d colonies, %d resources",
            self.cfg.grid_w,
            self.cfg.grid_h,
            len(self.colonies),
            len(self.resources),
        )

    # --------------------------
    # Population
    # --------------------------
    def new_colony(self, position: Optional[Coordinates] = None) -> Colony:
        colony_id = len(self.colonies)
        if position is None:
            colony = Colony.default(self.cfg, colony_id=colony_id)
        else:
            colony = Colony.at(position, self.cfg, colony_id=colony_id)
        if colony.spawn_stalled():
            logger.warning(
                "Colony %d: spawn_rate %d is too low to spawn any ant for caps %s",
                colony_id,
                colony.spawn_rate,
                {kind.value: cap for kind, cap in colony.max_ants.items()},
            )
        self.colonies.append(colony)
        return colony

    def new_resource(self, coords: Optional[Coordinates] = None) -> Coordinates:
        """Place a fresh resource at `coords`, or at a random free tile off the nests."""
        if coords is None:
            coords = self._random_free_tile()
        self.resources.place(coords, Resource.default(self.cfg.resource_size))
        logger.debug("Resource placed at %s", coords)
        return coords

    def _random_free_tile(self) -> Coordinates:
        bounds = self.cfg.bounds
        nests = {colony.position for colony in self.colonies}
        for _ in range(2000):
            coords = Coordinates.random(bounds, self.rng)
            if coords not in nests and self.resources.is_free(coords):
                return coords

        # Fallback scan (deterministic)
        for y in range(bounds.height):
            for x in range(bounds.width):
                coords = Coordinates(x, y, bounds)
                if coords not in nests and self.resources.is_free(coords):
                    return coords
        raise RuntimeError("no free tile left for a new resource")

    # --------------------------
    # One tick update (key API)
    # --------------------------
    def update(self) -> WorldMetrics:
        """
        Advance the world by ONE tick.
        - Each colony spawns its quota, then moves its ants one at a time
          (later ants see the trails earlier ants laid this tick).
        - Every live pheromone then decays once; expired ones are evicted.
        """
        for colony in self.colonies:
            colony.update(self.resources, self.pheromones, self.cfg, self.rng)

        expired = self.pheromones.decay()

        self.tick += 1
        self._refresh_metrics(expired=expired)
        return self.metrics

    def _refresh_metrics(self, expired: int) -> None:
        m = self.metrics
        m.tick = self.tick
        m.ants_by_kind = self.ant_counts()
        m.pheromones_by_kind = {kind: self.pheromones.count(kind) for kind in PheromoneKind}
        m.resource_tiles = len(self.resources)
        m.food_remaining = self.resources.total_remaining()
        m.food_consumed = self.resources.consumed
        m.pheromones_expired = expired

    # --------------------------
    # Read-only views
    # --------------------------
    @property
    def resource_index(self) -> List[Coordinates]:
        return list(self.resources.index)

    @property
    def pheromone_index(self) -> List[Tuple[Coordinates, PheromoneKind]]:
        return list(self.pheromones.index)

    def iter_ants(self) -> Iterator[Ant]:
        for colony in self.colonies:
            for _, ant in colony.iter_ants():
                yield ant

    def ant_counts(self) -> Dict[AntKind, int]:
        counts = {kind: 0 for kind in AntKind}
        for colony in self.colonies:
            for kind in AntKind:
                counts[kind] += colony.count(kind)
        return counts

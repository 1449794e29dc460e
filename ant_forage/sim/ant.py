from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ant_forage.sim.coordinates import DIRS4, Coordinates
from ant_forage.sim.entities import AntKind, PheromoneKind, WorldConfig
from ant_forage.sim.pheromone import Pheromone, PheromoneMap
from ant_forage.sim.resource import ResourceMap

logger = logging.getLogger(__name__)


class JourneyState(Enum):
    EXPLORING = "exploring"
    RETURNING = "returning"


@dataclass
class Ant:
    """
    One forager. Each tick it eats whatever food is under it, moves one
    tile (following pheromones or at random) and marks the tile it lands on.

    Journey transitions:
    - EXPLORING -> RETURNING when food is found, or when the journey runs
      past `max_ant_steps`
    - any -> EXPLORING (fresh journey) when standing on the colony anchor
    """

    kind: AntKind
    position: Coordinates
    colony_anchor: Coordinates
    steps_on_journey: int = 0
    state: JourneyState = JourneyState.EXPLORING
    found_food: bool = False
    distance_from_colony: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.distance_from_colony = self.position.manhattan_distance(self.colony_anchor)

    @property
    def is_returning(self) -> bool:
        return self.state is JourneyState.RETURNING

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
        self.steps_on_journey += 1

        if resources.consume_at(self.position):
            self.found_food = True
            self.state = JourneyState.RETURNING

        self.move(pheromones, config, rng)
        self.lay_pheromone(pheromones, config)

    # --------------------------
    # Journey state
    # --------------------------
    def evaluate_journey(self, max_steps: int) -> JourneyState:
        if self.position == self.colony_anchor:
            self.steps_on_journey = 0
            self.state = JourneyState.EXPLORING
            self.found_food = False
        elif self.steps_on_journey > max_steps:
            self.steps_on_journey = 0
            self.state = JourneyState.RETURNING
        return self.state

    def is_correct_direction(self, new_position: Coordinates) -> bool:
        """Farther from home while exploring, closer while returning."""
        new_distance = new_position.manhattan_distance(self.colony_anchor)
        if self.is_returning:
            return new_distance < self.distance_from_colony
        return new_distance > self.distance_from_colony

    # --------------------------
    # Movement
    # --------------------------
    def pheromone_chance(self, config: WorldConfig) -> float:
        """Probability of following pheromones instead of moving at random this tick."""
        if self.kind is AntKind.WORKER:
            return config.worker_pheromone_chance
        if self.is_returning:
            return config.scout_return_pheromone_chance
        # the farther out a scout is, the likelier it wanders
        return float(np.exp(-self.distance_from_colony / config.territory_size))

    def followed_layers(self) -> Tuple[PheromoneKind, ...]:
        if self.kind is AntKind.SCOUT:
            return PheromoneKind.EXPLORATION, PheromoneKind.RESOURCE
        return (PheromoneKind.RESOURCE,)

    def move(self, pheromones: PheromoneMap, config: WorldConfig, rng: np.random.Generator) -> bool:
        """Returns False if the ant had nowhere to go and stayed put."""
        self.evaluate_journey(config.max_ant_steps)
        if rng.random() < self.pheromone_chance(config):
            return self.move_pheromones(pheromones, config, rng)
        return self.move_random(config, rng)

    def move_random(self, config: WorldConfig, rng: np.random.Generator) -> bool:
        allow_backwards = rng.random() < config.ant_backwards_chance

        chosen: Optional[Coordinates] = None
        fallback: Optional[Coordinates] = None
        for dx, dy in _shuffled_moves(rng):
            candidate = self.position.checked_move(dx, dy)
            if candidate is None:
                continue
            if allow_backwards or self.is_correct_direction(candidate):
                chosen = candidate
                break
            if fallback is None:
                fallback = candidate

        if chosen is None:
            chosen = fallback
        if chosen is None:
            logger.debug("%s ant at %s has no legal move, staying put", self.kind.value, self.position)
            return False

        self._relocate(chosen)
        return True

    def move_pheromones(self, pheromones: PheromoneMap, config: WorldConfig, rng: np.random.Generator) -> bool:
        """
        Step onto the neighbour (in the correct direction) with the strongest
        followed pheromone. Falls back to a random move when none is found.
        """
        strongest = 0
        target: Optional[Coordinates] = None
        layers = self.followed_layers()

        for dx, dy in _shuffled_moves(rng):
            candidate = self.position.clamped_move(dx, dy)
            if not self.is_correct_direction(candidate):
                continue
            for kind in layers:
                strength = pheromones.strength(candidate, kind)
                if strength > strongest:
                    strongest = strength
                    target = candidate

        if target is None:
            return self.move_random(config, rng)

        self._relocate(target)
        return True

    def _relocate(self, new_position: Coordinates) -> None:
        self.position = new_position
        self.distance_from_colony = self.position.manhattan_distance(self.colony_anchor)

    # --------------------------
    # Marking
    # --------------------------
    def trail_kind(self) -> Optional[PheromoneKind]:
        if self.found_food:
            return PheromoneKind.RESOURCE
        if self.kind is AntKind.SCOUT and not self.is_returning:
            return PheromoneKind.EXPLORATION
        return None

    def lay_pheromone(self, pheromones: PheromoneMap, config: WorldConfig) -> None:
        """Reinforce the marker under the ant, or lay a fresh one."""
        kind = self.trail_kind()
        if kind is None:
            return

        existing = pheromones.get(self.position, kind)
        if existing is not None:
            existing.refresh(existing.strength)
        else:
            pheromones.insert(self.position, Pheromone.default(kind, config))


def _shuffled_moves(rng: np.random.Generator) -> List[Tuple[int, int]]:
    moves = list(DIRS4)
    rng.shuffle(moves)
    return moves

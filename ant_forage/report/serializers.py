from __future__ import annotations

from typing import List

import numpy as np

from ant_forage.report.protocol import ColonyState, PheromoneState, ResourceState, WorldState
from ant_forage.sim.entities import PheromoneKind
from ant_forage.sim.world import AntColonyWorld

MIN_INTENSITY = 55
INTENSITY_RANGE = 200


def pheromone_intensity(strength: int, max_strength: int) -> int:
    """Linear map of a pheromone strength onto a 55..255 colour channel."""
    frac = float(np.clip(strength / max(max_strength, 1), 0.0, 1.0))
    return MIN_INTENSITY + int(INTENSITY_RANGE * frac)


def pheromone_heatmap(world: AntColonyWorld, kind: PheromoneKind) -> np.ndarray:
    """(H, W) uint8 image of one pheromone layer, 0 where there is no marker."""
    out = np.zeros((world.cfg.grid_h, world.cfg.grid_w), dtype=np.uint8)
    for coords, pheromone in world.pheromones:
        if pheromone.kind is kind:
            out[coords.y, coords.x] = pheromone_intensity(pheromone.strength, pheromone.max_strength)
    return out


def pack_world_state(world: AntColonyWorld) -> WorldState:
    """JSON-able snapshot of the world. Call between ticks only."""
    colonies: List[ColonyState] = []
    for colony in world.colonies:
        ants = [
            {
                "x": ant.position.x,
                "y": ant.position.y,
                "kind": kind.value,
                "returning": int(ant.is_returning),
                "found_food": int(ant.found_food),
            }
            for kind, ant in colony.iter_ants()
        ]
        colonies.append(
            {"x": colony.position.x, "y": colony.position.y, "colony": colony.colony_id, "ants": ants}
        )

    resources: List[ResourceState] = [
        {
            "x": coords.x,
            "y": coords.y,
            "remaining": int(resource.resources_remaining),
            "fraction": float(resource.fraction_remaining),
        }
        for coords, resource in world.resources
    ]

    pheromones: List[PheromoneState] = [
        {
            "x": coords.x,
            "y": coords.y,
            "kind": pheromone.kind.value,
            "strength": int(pheromone.strength),
            "intensity": pheromone_intensity(pheromone.strength, pheromone.max_strength),
        }
        for coords, pheromone in world.pheromones
    ]

    return {
        "type": "state",
        "tick": int(world.tick),
        "grid_w": int(world.cfg.grid_w),
        "grid_h": int(world.cfg.grid_h),
        "colonies": colonies,
        "resources": resources,
        "pheromones": pheromones,
    }

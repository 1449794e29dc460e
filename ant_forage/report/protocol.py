from __future__ import annotations

from typing import TypedDict, List


class AntState(TypedDict):
    x: int
    y: int
    kind: str  # "scout" / "worker"
    returning: int  # 0/1
    found_food: int  # 0/1


class ColonyState(TypedDict):
    x: int
    y: int
    colony: int
    ants: List[AntState]


class ResourceState(TypedDict):
    x: int
    y: int
    remaining: int
    fraction: float


class PheromoneState(TypedDict):
    x: int
    y: int
    kind: str  # "exploration" / "resource"
    strength: int
    intensity: int  # 55..255


class WorldState(TypedDict):
    type: str  # "state"
    tick: int
    grid_w: int
    grid_h: int
    colonies: List[ColonyState]
    resources: List[ResourceState]
    pheromones: List[PheromoneState]

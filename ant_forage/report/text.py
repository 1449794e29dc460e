from __future__ import annotations

from typing import List

from ant_forage.sim.entities import AntKind, PheromoneKind
from ant_forage.sim.world import AntColonyWorld

ANT_GLYPHS = {AntKind.SCOUT: "S", AntKind.WORKER: "W"}
COLONY_GLYPH = "C"
RESOURCE_GLYPH = "F"


def format_stats(world: AntColonyWorld) -> str:
    lines: List[str] = [f"Tick {world.tick}", f"    Number of Colonies: {len(world.colonies)}"]
    for colony in world.colonies:
        lines.append(f"        Colony: {colony.colony_id} at {colony.position}")
        for kind in AntKind:
            lines.append(f"        Type: {kind.value} Number {colony.count(kind)}")
    for kind in PheromoneKind:
        lines.append(f"    Pheromones ({kind.value}): {world.pheromones.count(kind)}")
    lines.append(f"    Resources: {len(world.resources)} ({world.resources.total_remaining()} units left)")
    return "\n".join(lines)


def render_ascii(world: AntColonyWorld) -> str:
    """One text row per grid row. Resources are drawn over ants, colonies over everything but resources."""
    grid = [[" "] * world.cfg.grid_w for _ in range(world.cfg.grid_h)]
    for colony in world.colonies:
        for kind, ant in colony.iter_ants():
            grid[ant.position.y][ant.position.x] = ANT_GLYPHS[kind]
        grid[colony.position.y][colony.position.x] = COLONY_GLYPH
    for coords, _ in world.resources:
        grid[coords.y][coords.x] = RESOURCE_GLYPH
    return "\n".join("".join(row) for row in grid)

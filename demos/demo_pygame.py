from __future__ import annotations

import sys
import os
import logging
import pygame

# Allow running from repo root: python demos/demo_pygame.py
THIS_DIR = os.path.dirname(__file__)
PROJECT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PROJECT_DIR not in sys.path:
    sys.path.insert(0, PROJECT_DIR)

from ant_forage.report.serializers import pheromone_intensity
from ant_forage.sim.entities import AntKind, PheromoneKind, WorldConfig
from ant_forage.sim.world import AntColonyWorld

TICK_MS = 250

ANT_COLOURS = {AntKind.SCOUT: (0, 0, 255), AntKind.WORKER: (50, 190, 190)}


def pheromone_colour(kind: PheromoneKind, intensity: int):
    if kind is PheromoneKind.EXPLORATION:
        return (intensity, 0, intensity)
    return (intensity, intensity, intensity)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    cfg = WorldConfig()
    world = AntColonyWorld(cfg, seed=1)

    CELL = 8
    W, H = cfg.grid_w * CELL, cfg.grid_h * CELL
    pygame.init()
    screen = pygame.display.set_mode((W, H))
    pygame.display.set_caption("Ant Simulation")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 14)

    paused = False
    speed = 1
    last_tick = pygame.time.get_ticks()

    running = True
    while running:
        clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_1:
                    speed = 1
                elif event.key == pygame.K_2:
                    speed = 3
                elif event.key == pygame.K_3:
                    speed = 8
                elif event.key == pygame.K_r:
                    world.reset(seed=1)

        # one world tick every TICK_MS of wall-clock time
        now = pygame.time.get_ticks()
        if not paused and now - last_tick >= TICK_MS:
            for _ in range(speed):
                world.update()
            last_tick = now

        screen.fill((0, 0, 0))

        # pheromones
        for coords, pheromone in world.pheromones:
            intensity = pheromone_intensity(pheromone.strength, pheromone.max_strength)
            col = pheromone_colour(pheromone.kind, intensity)
            pygame.draw.rect(screen, col, (coords.x * CELL, coords.y * CELL, CELL, CELL))

        # resources
        for coords, resource in world.resources:
            r = 1 + int((CELL // 2) * resource.fraction_remaining)
            pygame.draw.circle(screen, (60, 200, 90), (coords.x * CELL + CELL // 2, coords.y * CELL + CELL // 2), r)

        # colonies
        for c in world.colonies:
            pygame.draw.rect(screen, (255, 140, 0), (c.position.x * CELL, c.position.y * CELL, CELL, CELL))

        # ants
        for ant in world.iter_ants():
            col = ANT_COLOURS[ant.kind]
            pygame.draw.circle(screen, col, (ant.position.x * CELL + CELL // 2, ant.position.y * CELL + CELL // 2), 2)

        counts = world.ant_counts()
        txt = (
            f"tick={world.tick}  speed={speed}x  pause=[SPACE]  speed=[1/2/3]  reset=[R]  "
            f"scouts={counts[AntKind.SCOUT]} workers={counts[AntKind.WORKER]} food={len(world.resources)}"
        )
        screen.blit(font.render(txt, True, (220, 220, 220)), (8, 8))

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()

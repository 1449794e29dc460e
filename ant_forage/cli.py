from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from typing import List, Optional

from ant_forage.report.serializers import pack_world_state
from ant_forage.report.text import format_stats, render_ascii
from ant_forage.sim.entities import WorldConfig
from ant_forage.sim.world import AntColonyWorld

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the ant foraging simulation headless.")
    parser.add_argument("--ticks", type=int, default=200)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--spawn-rate", type=int, default=None)
    parser.add_argument("--stats-every", type=int, default=50, help="log stats every N ticks (0 = never)")
    parser.add_argument("--ascii", action="store_true", help="print the grid when done")
    parser.add_argument("--json", action="store_true", help="print the final state as JSON")
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser


def make_config(args: argparse.Namespace) -> WorldConfig:
    overrides = {}
    if args.width is not None:
        overrides["grid_w"] = args.width
    if args.height is not None:
        overrides["grid_h"] = args.height
    if args.spawn_rate is not None:
        overrides["spawn_rate"] = args.spawn_rate
    return dataclasses.replace(WorldConfig(), **overrides)


def run(config: WorldConfig, args: argparse.Namespace) -> AntColonyWorld:
    world = AntColonyWorld(config, seed=args.seed)
    for _ in range(args.ticks):
        metrics = world.update()
        if args.stats_every > 0 and metrics.tick % args.stats_every == 0:
            logger.info(
                "tick=%d ants=%d pheromones=%d resources=%d consumed=%d",
                metrics.tick,
                metrics.total_ants,
                sum(metrics.pheromones_by_kind.values()),
                metrics.resource_tiles,
                metrics.food_consumed,
            )
    return world


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = make_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    world = run(config, args)

    logger.info("Done after %d ticks\n%s", world.tick, format_stats(world))
    if args.ascii:
        print(render_ascii(world))
    if args.json:
        print(json.dumps(pack_world_state(world)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

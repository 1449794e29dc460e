"""
Unit tests for ant_forage/sim/world.py
"""

import logging

import pytest

from ant_forage.sim.ant import Ant
from ant_forage.sim.entities import AntKind, PheromoneKind, WorldConfig
from ant_forage.sim.pheromone import Pheromone
from ant_forage.sim.resource import Resource
from ant_forage.sim.world import AntColonyWorld


class TestConstruction:
    """Tests for building worlds"""

    def test_default_world(self, world, config):
        assert len(world.colonies) == 1
        assert world.colonies[0].position.as_tuple() == (config.grid_w // 2, config.grid_h // 2)
        assert len(world.resource_index) == config.resource_count
        assert world.pheromone_index == []
        assert world.tick == 0
        for coords in world.resource_index:
            assert world.resources.get(coords).resources_remaining == config.resource_size

    @pytest.mark.parametrize("seed", range(5))
    def test_resources_never_on_the_colony(self, seed):
        world = AntColonyWorld(WorldConfig(grid_w=4, grid_h=4, resource_count=15), seed=seed)
        nest = world.colonies[0].position
        assert nest not in world.resource_index
        assert len(set(world.resource_index)) == 15

    def test_from_entities_adds_nothing(self, config, at, empty_colony):
        world = AntColonyWorld.from_entities(config, [(at(1, 2), Resource.default(4))], [empty_colony])
        assert world.colonies == [empty_colony]
        assert world.resource_index == [at(1, 2)]
        assert world.metrics.food_remaining == 4

    def test_new_colony_at_position(self, world, at):
        colony = world.new_colony(at(3, 3))
        assert colony.colony_id == 1
        assert world.colonies[1] is colony

    def test_warns_when_spawn_rate_cannot_spawn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ant_forage.sim.world"):
            AntColonyWorld(WorldConfig(spawn_rate=1), seed=0)
        assert "too low to spawn" in caplog.text

    def test_no_warning_for_default_spawn_rate(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ant_forage.sim.world"):
            AntColonyWorld(WorldConfig(), seed=0)
        assert "too low to spawn" not in caplog.text

    def test_new_resource_raises_when_grid_full(self):
        world = AntColonyWorld(WorldConfig(grid_w=2, grid_h=1, resource_count=1), seed=0)
        with pytest.raises(RuntimeError):
            world.new_resource()

    def test_reset(self, world, at):
        for _ in range(5):
            world.update()
        world.reset(seed=3)
        assert world.tick == 0
        assert world.pheromone_index == []
        assert len(world.colonies) == 1
        assert world.colonies[0].population == 0
        assert len(world.resource_index) == world.cfg.resource_count
        assert world.metrics.food_consumed == 0


class TestUpdate:
    """Tests for the tick pipeline"""

    def test_first_tick(self, world, config):
        """Test the first scout moves, marks its tile, and the mark decays once"""
        metrics = world.update()

        assert world.tick == 1
        assert world.ant_counts() == {AntKind.SCOUT: 1, AntKind.WORKER: 0}
        assert len(world.pheromone_index) == 1

        coords, kind = world.pheromone_index[0]
        assert kind is PheromoneKind.EXPLORATION
        assert world.pheromones.strength(coords, kind) == config.max_pheromone_strength - config.exploration_decay_rate
        ant = next(world.iter_ants())
        assert ant.position == coords

        assert metrics.tick == 1
        assert metrics.ants_by_kind[AntKind.SCOUT] == 1
        assert metrics.pheromones_by_kind[PheromoneKind.EXPLORATION] == 1

    def test_depleted_resource_leaves_grid_and_index(self, config, at, empty_colony):
        empty_colony.ants[AntKind.WORKER].append(Ant(kind=AntKind.WORKER, position=at(6, 5), colony_anchor=at(5, 5)))
        world = AntColonyWorld.from_entities(
            config,
            [(at(6, 5), Resource.default(1)), (at(9, 9), Resource.default(3))],
            [empty_colony],
            seed=1,
        )

        metrics = world.update()

        assert world.resources.get(at(6, 5)) is None
        assert world.resource_index == [at(9, 9)]
        assert metrics.food_consumed == 1
        assert metrics.resource_tiles == 1
        assert metrics.food_remaining == 3

    def test_expired_pheromones_are_evicted(self, config, at):
        world = AntColonyWorld.from_entities(config, [], [])
        world.pheromones.insert(at(1, 1), Pheromone.new(PheromoneKind.EXPLORATION, 10, 5, 1000))

        world.update()
        assert world.pheromones.strength(at(1, 1), PheromoneKind.EXPLORATION) == 5
        assert world.metrics.pheromones_expired == 0

        world.update()
        assert world.pheromones.get(at(1, 1), PheromoneKind.EXPLORATION) is None
        assert world.pheromone_index == []
        assert world.metrics.pheromones_expired == 1

    def test_index_views_are_copies(self, world):
        world.update()
        world.pheromone_index.clear()
        world.resource_index.clear()
        assert len(world.pheromone_index) == 1
        assert len(world.resource_index) == world.cfg.resource_count

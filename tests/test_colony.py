"""
Unit tests for ant_forage/sim/colony.py
"""

import pytest

from ant_forage.sim.ant import Ant
from ant_forage.sim.colony import Colony
from ant_forage.sim.entities import AntKind
from ant_forage.sim.pheromone import PheromoneMap
from ant_forage.sim.resource import ResourceMap


def fill(colony, kind, n):
    for _ in range(n):
        colony.ants[kind].append(Ant(kind=kind, position=colony.position, colony_anchor=colony.position))


class TestColonyDefaults:
    """Tests for colony construction"""

    def test_default_colony_at_center(self, config):
        colony = Colony.default(config)
        assert colony.position.as_tuple() == (32, 32)
        assert colony.spawn_rate == config.spawn_rate
        assert colony.max_ants == {AntKind.SCOUT: 25, AntKind.WORKER: 10}
        assert colony.population == 0
        assert set(colony.ants) == set(AntKind)


class TestSpawnQuota:
    """Tests for the proportional spawn allocation"""

    def test_proportional_split(self, config, at):
        colony = Colony.at(at(5, 5), config)
        colony.max_ants = {AntKind.SCOUT: 50, AntKind.WORKER: 100}
        colony.spawn_rate = 20
        fill(colony, AntKind.SCOUT, 10)
        fill(colony, AntKind.WORKER, 50)
        assert colony.spawn_quota() == {AntKind.SCOUT: 8, AntKind.WORKER: 11}

    def test_default_first_tick(self, config):
        """Test 25 / 10 missing with a rate of 2 gives one scout and no worker"""
        assert Colony.default(config).spawn_quota() == {AntKind.SCOUT: 1, AntKind.WORKER: 0}

    def test_full_colony_spawns_nothing(self, config, at):
        colony = Colony.at(at(5, 5), config)
        fill(colony, AntKind.SCOUT, 25)
        fill(colony, AntKind.WORKER, 10)
        assert colony.spawn_quota() == {}
        assert colony.spawn_ants() == 0

    def test_large_rate_fills_exactly_to_cap(self, config, at):
        colony = Colony.at(at(5, 5), config)
        colony.spawn_rate = 100
        assert colony.spawn_ants() == 35
        assert colony.count(AntKind.SCOUT) == 25
        assert colony.count(AntKind.WORKER) == 10

    @pytest.mark.parametrize("spawn_rate", [0, 1, 2, 3, 7, 35, 1000])
    def test_never_exceeds_cap(self, config, at, spawn_rate):
        colony = Colony.at(at(5, 5), config)
        colony.spawn_rate = spawn_rate
        for _ in range(100):
            colony.spawn_ants()
            for kind in AntKind:
                assert colony.count(kind) <= colony.max_ants[kind]

    def test_spawned_ants_start_fresh_at_colony(self, config, at):
        colony = Colony.at(at(5, 5), config)
        colony.spawn_rate = 10
        colony.spawn_ants()
        for kind, ant in colony.iter_ants():
            assert ant.kind is kind
            assert ant.position == colony.position
            assert ant.colony_anchor == colony.position
            assert ant.steps_on_journey == 0
            assert not ant.is_returning
            assert not ant.found_food

    def test_spawn_stalled_when_quota_rounds_to_zero(self, config, at):
        """Test a rate of 1 with two short kinds spawns nothing and is flagged"""
        colony = Colony.at(at(5, 5), config)
        colony.spawn_rate = 1
        assert colony.spawn_quota() == {AntKind.SCOUT: 0, AntKind.WORKER: 0}
        assert colony.spawn_stalled()
        assert colony.spawn_ants() == 0

    def test_default_colony_not_stalled(self, config):
        assert not Colony.default(config).spawn_stalled()

    def test_full_colony_not_stalled(self, config, at):
        colony = Colony.at(at(5, 5), config)
        fill(colony, AntKind.SCOUT, 25)
        fill(colony, AntKind.WORKER, 10)
        assert not colony.spawn_stalled()


class TestColonyUpdate:
    """Tests for a colony tick"""

    def test_spawns_then_moves(self, config, at, rng):
        colony = Colony.at(at(5, 5), config)
        colony.spawn_rate = 35
        colony.update(ResourceMap(config.bounds), PheromoneMap(config.bounds), config, rng)
        assert colony.population == 35
        for _, ant in colony.iter_ants():
            assert ant.distance_from_colony == 1

    def test_empty_colony_is_noop(self, empty_colony, config, rng):
        pmap = PheromoneMap(config.bounds)
        empty_colony.update(ResourceMap(config.bounds), pmap, config, rng)
        assert empty_colony.population == 0
        assert len(pmap) == 0

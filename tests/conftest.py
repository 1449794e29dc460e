"""
Pytest configuration and shared fixtures for the ant foraging tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Allow running without an install: pytest from the project root
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from ant_forage.sim.colony import Colony
from ant_forage.sim.coordinates import Coordinates
from ant_forage.sim.entities import AntKind, WorldConfig
from ant_forage.sim.world import AntColonyWorld


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests"""
    return np.random.default_rng(42)


@pytest.fixture
def config():
    """Default world configuration"""
    return WorldConfig()


@pytest.fixture
def small_config():
    """Small grid for fast tests"""
    return WorldConfig(grid_w=16, grid_h=16, max_scouts=6, max_workers=4, spawn_rate=3, resource_count=3)


@pytest.fixture
def bounds(config):
    return config.bounds


@pytest.fixture
def at(bounds):
    """Shorthand for building in-bounds coordinates on the default grid"""
    def _at(x, y):
        return Coordinates(x, y, bounds)
    return _at


@pytest.fixture
def world(config):
    """Default world, fixed seed"""
    return AntColonyWorld(config, seed=7)


@pytest.fixture
def empty_colony(config, at):
    """Colony at (5, 5) that never spawns"""
    colony = Colony.at(at(5, 5), config)
    colony.max_ants = {kind: 0 for kind in AntKind}
    return colony

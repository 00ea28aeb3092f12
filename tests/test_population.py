import numpy as np
import pytest

from gravcore import population
from gravcore.constants import EARTH_ORBIT_RADIUS, EARTH_ORBIT_VELOCITY, SOLAR_MASS
from gravcore.errors import ConfigurationError
from gravcore.population import SpawnConfig
from gravcore.vector_utils import vec_len
from gravcore.world import World


def test_random_in_sphere_shell_bounds():
    rng = np.random.default_rng(0)
    for _ in range(200):
        r = vec_len(population.random_in_sphere_shell(rng, 2.0, 5.0))
        assert 2.0 - 1e-9 <= r < 5.0 + 1e-9


def test_random_in_ellipsoid_is_inside():
    rng = np.random.default_rng(1)
    for _ in range(200):
        x, y, z = population.random_in_ellipsoid(rng, 6.0, 1.0, 6.0)
        assert x * x / 36.0 + y * y + z * z / 36.0 < 1.0


def test_sun_and_earth():
    world = World(3600.0)
    sun = population.add_sun(world)
    earth = population.add_earth(world)
    assert sun.fixed and sun.mass == SOLAR_MASS
    assert earth.position.z == -EARTH_ORBIT_RADIUS
    assert earth.velocity.x == EARTH_ORBIT_VELOCITY
    assert earth.display_position.z == pytest.approx(-2.0)
    world.step()
    assert sun.position == (0.0, 0.0, 0.0)
    assert earth.position.x > 0.0


@pytest.mark.parametrize("shape", ["flat", "sphere"])
def test_populate(shape):
    config = SpawnConfig(num_planets=25, spawn_shape=shape, spawn_sun=True, trace_num=16, seed=7)
    world = population.populate(World(3600.0), config)
    assert len(world) == 26
    assert world.bodies[0].name == "Sun"
    assert all(b.mass > 0 for b in world.bodies)
    assert all(b.trace_num == 16 for b in world.bodies)


def test_populate_flat_is_flattened():
    config = SpawnConfig(num_planets=200, spawn_shape="flat", seed=3)
    world = population.populate(World(3600.0), config)
    ys = [abs(b.position.y) for b in world.bodies]
    xs = [abs(b.position.x) for b in world.bodies]
    assert max(ys) < EARTH_ORBIT_RADIUS * config.spawn_radius * 2 / 6
    assert max(xs) > max(ys)


def test_populate_is_reproducible():
    config = SpawnConfig(num_planets=10, seed=42)
    w1 = population.populate(World(3600.0), config)
    w2 = population.populate(World(3600.0), config)
    assert [b.position for b in w1.bodies] == [b.position for b in w2.bodies]
    assert [b.mass for b in w1.bodies] == [b.mass for b in w2.bodies]


@pytest.mark.parametrize("config", [
    SpawnConfig(spawn_shape="cube"),
    SpawnConfig(num_planets=-1),
    SpawnConfig(spawn_radius=0.0),
])
def test_invalid_spawn_config(config):
    with pytest.raises(ConfigurationError):
        population.populate(World(3600.0), config)

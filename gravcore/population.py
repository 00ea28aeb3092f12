#!/usr/bin/env python3
"""
World population: the sun, the earth and random planet clouds.

All bodies are created in SI units with the default display scales (2 display
units per AU). Random draws come from a seeded ``numpy.random.Generator`` so a
given SpawnConfig always produces the same world.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import (
    DEFAULT_DENSITY,
    DEFAULT_POSITION_SCALE,
    DEFAULT_RADIUS_SCALE,
    EARTH_MASS,
    EARTH_ORBIT_RADIUS,
    EARTH_ORBIT_VELOCITY,
    SOLAR_MASS,
    TRACE_NUM,
    TRACE_PRELOCATE,
)
from .data_models import Body
from .errors import ConfigurationError
from .vector_utils import Vec3
from .world import World

logger = logging.getLogger("gravity_sim.population")

SPAWN_SHAPES = ("flat", "sphere")


@dataclass
class SpawnConfig:
    """
    Parameters for a random population.

    - spawn_radius: cloud radius in AU (outer extent is 2x this)
    - planet_mass: mean planet mass in earth masses (flat clouds)
    - planet_velocity: velocity spread in units of the earth's orbital speed
    - trace_num / trace_prelocate: trail settings given to every body
    """
    num_planets: int = 3000
    spawn_radius: float = 1.5
    planet_mass: float = 500.0
    planet_velocity: float = 0.5
    spawn_shape: str = "flat"
    spawn_sun: bool = False
    spawn_earth: bool = False
    trace_num: int = TRACE_NUM
    trace_prelocate: int = TRACE_PRELOCATE
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.num_planets < 0:
            raise ConfigurationError(f"num_planets must be >= 0, got {self.num_planets}")
        if self.spawn_shape not in SPAWN_SHAPES:
            raise ConfigurationError(f"spawn_shape must be one of {SPAWN_SHAPES}, got {self.spawn_shape!r}")
        if self.spawn_radius <= 0 or self.planet_mass <= 0 or self.planet_velocity <= 0:
            raise ConfigurationError("spawn_radius, planet_mass and planet_velocity must be positive")


def random_in_sphere_shell(rng: np.random.Generator, inner_r: float, outer_r: float) -> Vec3:
    """Random point with radius in [inner_r, outer_r), uniform in angle parameters."""
    r = rng.random() * (outer_r - inner_r) + inner_r
    theta = rng.random() * math.pi * 2
    phi = (rng.random() - 0.5) * math.pi
    r_sin_phi = r * math.sin(phi)
    r_cos_phi = r * math.cos(phi)
    return Vec3(r_cos_phi * math.cos(theta), r_sin_phi, r_cos_phi * math.sin(theta))


def random_in_ellipsoid(rng: np.random.Generator, a: float, b: float, c: float) -> Vec3:
    """Uniform point strictly inside the axis-aligned ellipsoid with semi-axes a, b, c."""
    while True:
        x, y, z = (rng.random(3) - 0.5) * 2 * np.array([a, b, c])
        if x * x / (a * a) + y * y / (b * b) + z * z / (c * c) < 1:
            return Vec3(float(x), float(y), float(z))


def _body(config: SpawnConfig, **kwargs) -> Body:
    return Body(
        position_scale=DEFAULT_POSITION_SCALE,
        radius_scale=DEFAULT_RADIUS_SCALE,
        trace_num=config.trace_num,
        trace_prelocate=config.trace_prelocate,
        **kwargs,
    )


def _random_mass(rng: np.random.Generator, scale: float) -> float:
    # 1 - U(0, 1) lies in (0, 1], never a zero mass.
    return (1.0 - rng.random()) * scale


def add_sun(world: World, config: Optional[SpawnConfig] = None) -> Body:
    config = config or SpawnConfig()
    sun = _body(
        config,
        mass=SOLAR_MASS,
        density=DEFAULT_DENSITY * 10,
        position=Vec3(0.0, 0.0, 0.0),
        fixed=True,
        name="Sun",
    )
    return world.add_body(sun)


def add_earth(world: World, config: Optional[SpawnConfig] = None) -> Body:
    config = config or SpawnConfig()
    earth = _body(
        config,
        mass=EARTH_MASS,
        density=DEFAULT_DENSITY,
        position=Vec3(0.0, 0.0, -EARTH_ORBIT_RADIUS),
        velocity=Vec3(EARTH_ORBIT_VELOCITY, 0.0, 0.0),
        name="Earth",
    )
    return world.add_body(earth)


def add_random_bodies_sphere(world: World, num: int, config: SpawnConfig, rng: np.random.Generator) -> None:
    outer = EARTH_ORBIT_RADIUS * config.spawn_radius * 2
    v_outer = EARTH_ORBIT_VELOCITY * config.planet_velocity * 2
    for i in range(num):
        world.add_body(_body(
            config,
            mass=_random_mass(rng, EARTH_MASS * 1000),
            density=DEFAULT_DENSITY,
            position=random_in_sphere_shell(rng, EARTH_ORBIT_RADIUS * 0.3, outer),
            velocity=random_in_sphere_shell(rng, EARTH_ORBIT_VELOCITY * 0.1, v_outer),
            name=f"planet-{i}",
        ))


def add_random_bodies_flat(world: World, num: int, config: SpawnConfig, rng: np.random.Generator) -> None:
    """Disc-shaped cloud: an ellipsoid flattened 6x along y, for positions and velocities."""
    p_a = EARTH_ORBIT_RADIUS * config.spawn_radius * 2
    p_c = p_a / 6
    v_a = EARTH_ORBIT_VELOCITY * config.planet_velocity * 2
    v_c = v_a / 6
    for i in range(num):
        world.add_body(_body(
            config,
            mass=_random_mass(rng, EARTH_MASS * config.planet_mass * 2),
            density=DEFAULT_DENSITY,
            position=random_in_ellipsoid(rng, p_a, p_c, p_a),
            velocity=random_in_ellipsoid(rng, v_a, v_c, v_a),
            name=f"planet-{i}",
        ))


def populate(world: World, config: SpawnConfig) -> World:
    config.validate()
    rng = np.random.default_rng(config.seed)
    if config.spawn_sun:
        add_sun(world, config)
    if config.spawn_earth:
        add_earth(world, config)
    if config.spawn_shape == "flat":
        add_random_bodies_flat(world, config.num_planets, config, rng)
    else:
        add_random_bodies_sphere(world, config.num_planets, config, rng)
    logger.info("Populated world with %d bodies (%s, sun=%s)", len(world), config.spawn_shape, config.spawn_sun)
    return world

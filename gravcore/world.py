#!/usr/bin/env python3
"""
World: the container and stepping engine for a set of bodies under mutual gravity.

Each call to step() advances the simulation clock by a fixed ``step_time`` and runs,
strictly in order:

1) clear every body's force accumulator
2) accumulate pairwise gravity (exact O(N^2) summation)
3) integrate every body to the new clock value (this also extends the trails)
4) detect collisions and fuse colliding pairs, replacing the body list

The world is single-threaded: step() completes before returning and nothing else
may mutate the body set while it runs.
"""
import logging
import math
from typing import List, Optional

from . import physics
from .collisions import Fusion, fuse_body, handle_collisions, is_collide
from .constants import G as DEFAULT_G
from .data_models import Body
from .errors import ConfigurationError, PreconditionError
from .vector_utils import Vec3

logger = logging.getLogger("gravity_sim.world")


def _check_config(label: str, value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{label} must be positive and finite, got {value!r}")
    return value


class World:
    """
    Mutable set of bodies advanced by pairwise Newtonian gravity.

    When ``position_scale``/``radius_scale`` are given the world manages display
    scale centrally and pushes them into every body it receives; otherwise each
    body keeps the scales it was constructed with.
    """

    def __init__(self, step_time: float, G: float = DEFAULT_G,
                 position_scale: Optional[float] = None, radius_scale: Optional[float] = None,
                 collisions: bool = True):
        self.step_time = _check_config("step_time", step_time)
        self.G = _check_config("G", G)
        self.position_scale = _check_config("position_scale", position_scale)
        self.radius_scale = _check_config("radius_scale", radius_scale)
        self.collisions = collisions
        self.bodies: List[Body] = []
        self.sim_time = 0.0
        self.step_count = 0
        self.last_fusions: List[Fusion] = []

    def __len__(self) -> int:
        return len(self.bodies)

    def add_body(self, b: Body) -> Body:
        """
        Register a body and return it as the handle for later state queries.

        The body's clock is started at the current simulation time so the next
        step() integrates it over a full step_time.
        """
        if any(existing is b for existing in self.bodies):
            raise PreconditionError(f"body {b.name} is already in the world")
        if self.position_scale is not None or self.radius_scale is not None:
            b.set_display_scale(
                self.position_scale if self.position_scale is not None else b.position_scale,
                self.radius_scale if self.radius_scale is not None else b.radius_scale,
            )
        if not b.clock_started:
            b.step(self.sim_time)
        self.bodies.append(b)
        return b

    def find_body(self, body_id: int) -> Optional[Body]:
        for b in self.bodies:
            if b.id == body_id:
                return b
        return None

    def compute_gravity(self, a: Body, b: Body) -> Vec3:
        """Force applied to ``b`` by ``a``."""
        return physics.compute_gravity(a, b, self.G)

    def is_collide(self, a: Body, b: Body) -> bool:
        return is_collide(a, b)

    def fuse_body(self, a: Body, b: Body) -> Body:
        return fuse_body(a, b)

    def step(self) -> None:
        """
        Advance every body by one step_time.

        All new states are computed before any is written, so a PreconditionError
        leaves the clock, positions, velocities and trails as they were.
        """
        now = self.sim_time + self.step_time

        for b in self.bodies:
            b.clear_force()
        physics.accumulate_gravity(self.bodies, self.G)
        states = [b.integrate(now) for b in self.bodies]

        for b, state in zip(self.bodies, states):
            b.commit(now, state)
        self.sim_time = now
        self.step_count += 1

        if self.collisions:
            self.bodies, self.last_fusions = handle_collisions(self.bodies)
            for fusion in self.last_fusions:
                fusion.fused.step(self.sim_time)
        else:
            self.last_fusions = []

        logger.debug("step %d: t=%.6gs bodies=%d fusions=%d",
                     self.step_count, self.sim_time, len(self.bodies), len(self.last_fusions))

    def total_mass(self) -> float:
        return physics.total_mass(self.bodies)

    def total_momentum(self) -> Vec3:
        return physics.total_momentum(self.bodies)

    def total_energy(self) -> float:
        return physics.kinetic_energy(self.bodies) + physics.potential_energy(self.bodies, self.G)

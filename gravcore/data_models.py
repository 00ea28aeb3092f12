#!/usr/bin/env python3
"""
Data models for the gravity simulation core.

This module defines the Body type advanced by the World.

Units and usage
- mass in kg, density in kg/m^3, position in m, velocity in m/s, force in N.
- radius is derived from mass and density at construction and never changes;
  a fusion creates a new Body instead of mutating an old one.
- position_scale / radius_scale map physics space to display space. They are
  only applied when state is exposed (display_position, display_radius, trail),
  never inside the physics.
- trail holds display-space positions and is appended once per integration step.
"""
import itertools
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .constants import TRACE_NUM, TRACE_PRELOCATE
from .errors import ConfigurationError, PreconditionError
from .trail import Trail
from .vector_utils import ZERO, Vec3, vec, vec_add, vec_is_finite, vec_scale

_ids = itertools.count(1)


def radius_from_mass(mass: float, density: float) -> float:
    """Radius of a uniform sphere: (3m / (4 pi rho))^(1/3)."""
    return (3.0 * mass / (4.0 * math.pi * density)) ** (1.0 / 3.0)


def _check_positive(label: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise PreconditionError(f"{label} must be positive and finite, got {value!r}")
    return value


@dataclass(eq=False)
class Body:
    """
    A point mass with a density-derived radius and a bounded trail.

    Fields:
    - mass, density: physical parameters (both > 0)
    - position, velocity: Vec3 state in physics units
    - fixed: pinned bodies never integrate, whatever force they accumulate
    - position_scale, radius_scale: display-space factors
    - trace_num, trace_prelocate: trail window size and buffer over-allocation
    - name: label used in logs and fusion names

    Bodies compare by identity; ``id`` is a stable integer handle.
    """
    mass: float
    density: float
    position: Vec3
    velocity: Vec3 = ZERO
    fixed: bool = False
    position_scale: float = 1.0
    radius_scale: float = 1.0
    trace_num: int = TRACE_NUM
    trace_prelocate: int = TRACE_PRELOCATE
    name: Optional[str] = None
    id: int = field(init=False)
    radius: float = field(init=False)
    force: Vec3 = field(init=False, default=ZERO)
    last_step_time: Optional[float] = field(init=False, default=None)
    trail: Trail = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.mass = _check_positive("mass", self.mass)
        self.density = _check_positive("density", self.density)
        self.position = vec(self.position)
        self.velocity = vec(self.velocity)
        if not vec_is_finite(self.position) or not vec_is_finite(self.velocity):
            raise PreconditionError(f"non-finite initial state: position={self.position}, velocity={self.velocity}")
        if self.fixed and self.velocity != ZERO:
            raise PreconditionError("a fixed body cannot be given a velocity")
        self._check_scales(self.position_scale, self.radius_scale)
        self.position_scale = float(self.position_scale)
        self.radius_scale = float(self.radius_scale)
        self.id = next(_ids)
        if self.name is None:
            self.name = f"body-{self.id}"
        self.radius = radius_from_mass(self.mass, self.density)
        self.trail = Trail(self.display_position, self.trace_num, self.trace_prelocate)

    @staticmethod
    def _check_scales(position_scale: float, radius_scale: float) -> None:
        for label, s in (("position_scale", position_scale), ("radius_scale", radius_scale)):
            if not math.isfinite(s) or s <= 0:
                raise ConfigurationError(f"{label} must be positive and finite, got {s!r}")

    # --- Forces ---

    def clear_force(self) -> None:
        self.force = ZERO

    def add_force(self, f: Vec3) -> None:
        self.force = vec_add(self.force, f)

    # --- Integration ---

    @property
    def clock_started(self) -> bool:
        return self.last_step_time is not None

    def integrate(self, now: float) -> Optional[Tuple[Vec3, Vec3]]:
        """
        Compute (velocity, position) at simulation time ``now`` without changing the body.

        Returns None when the body does not move: its clock is not started yet,
        or it is fixed. Raises PreconditionError if time runs backwards or the
        result is not finite.
        """
        if self.last_step_time is None:
            return None
        if now < self.last_step_time:
            raise PreconditionError(f"time went backwards for {self.name}: {now} < {self.last_step_time}")
        if self.fixed:
            return None

        delta = now - self.last_step_time
        acceleration = vec_scale(self.force, 1.0 / self.mass)
        velocity = vec_add(self.velocity, vec_scale(acceleration, delta))
        position = vec_add(self.position, vec_scale(velocity, delta))
        if not vec_is_finite(velocity) or not vec_is_finite(position):
            raise PreconditionError(f"integration of {self.name} produced non-finite state")
        return velocity, position

    def commit(self, now: float, state: Optional[Tuple[Vec3, Vec3]]) -> None:
        """Apply a result of integrate() and record the clock."""
        if state is not None:
            self.velocity, self.position = state
            self.trail.append(self.display_position)
        self.last_step_time = now

    def step(self, now: float) -> None:
        """
        Advance the body to simulation time ``now`` using the accumulated force.

        The first call only records the clock. Fixed bodies only record the clock.
        Otherwise a semi-implicit (symplectic) Euler step is taken: velocity is
        updated first, then position with the new velocity.
        """
        self.commit(now, self.integrate(now))

    def set_velocity(self, v: Vec3) -> None:
        if self.fixed:
            raise PreconditionError(f"cannot set velocity of fixed body {self.name}")
        v = vec(v)
        if not vec_is_finite(v):
            raise PreconditionError(f"non-finite velocity {v}")
        self.velocity = v

    # --- Display-space accessors ---

    def set_display_scale(self, position_scale: float, radius_scale: float) -> None:
        """Change display scales; the trail restarts in the new display space."""
        self._check_scales(position_scale, radius_scale)
        self.position_scale = float(position_scale)
        self.radius_scale = float(radius_scale)
        self.trail.reset(self.display_position)

    @property
    def display_position(self) -> Vec3:
        return vec_scale(self.position, self.position_scale)

    @property
    def display_radius(self) -> float:
        return self.radius * self.radius_scale

    def sync(self) -> Vec3:
        """Display-space position for a renderer to copy onto its mesh."""
        return self.display_position

    def trail_window(self) -> Tuple[int, int, np.ndarray]:
        return self.trail.window()

    def trail_points(self) -> np.ndarray:
        return self.trail.points()

    @property
    def momentum(self) -> Vec3:
        return vec_scale(self.velocity, self.mass)

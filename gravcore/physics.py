#!/usr/bin/env python3
"""
Core physics for the gravity simulation.

Responsibilities
- Compute the exact Newtonian force between two bodies.
- Accumulate pairwise forces over a body set (direct O(N^2) summation, each
  unordered pair evaluated once and applied to both bodies).
- Provide diagnostics used by the world and the driver (mass, momentum, energy).

Units and conventions
- Positions in meters [m], velocities in [m/s], masses in [kg], forces in [N].
- G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- No softening is applied. Two coincident bodies make the force undefined and
  raise PreconditionError instead of producing Inf/NaN.
- Forces on a pair are equal and opposite by construction, so total momentum
  is conserved up to floating-point rounding.
"""
from typing import Sequence

from .constants import G as DEFAULT_G
from .data_models import Body
from .errors import PreconditionError
from .vector_utils import ZERO, Vec3, vec_add, vec_len, vec_neg, vec_scale, vec_sub


def compute_gravity(a: Body, b: Body, G: float = DEFAULT_G) -> Vec3:
    """
    Gravitational force applied to ``b`` by ``a``.

        F = G * m_a * m_b / d^2 * (a - b) / d

    The returned vector points from b toward a.
    """
    offset = vec_sub(a.position, b.position)
    d = vec_len(offset)
    if d == 0:
        raise PreconditionError(f"bodies {a.name} and {b.name} coincide; gravity is undefined")
    magnitude = G * a.mass * b.mass / (d * d)
    return vec_scale(offset, magnitude / d)


def accumulate_gravity(bodies: Sequence[Body], G: float = DEFAULT_G) -> None:
    """
    Add the mutual gravity of every unordered pair (i < j) to the bodies' force accumulators.

    Forces must have been cleared beforehand. The force is computed once per pair:
    the second body receives +F, the first a separate negated vector -F.
    """
    n = len(bodies)
    for i in range(n):
        a = bodies[i]
        for j in range(i + 1, n):
            b = bodies[j]
            gravity = compute_gravity(a, b, G)
            b.add_force(gravity)
            a.add_force(vec_neg(gravity))


def total_mass(bodies: Sequence[Body]) -> float:
    return sum(b.mass for b in bodies)


def total_momentum(bodies: Sequence[Body]) -> Vec3:
    p = ZERO
    for b in bodies:
        p = vec_add(p, b.momentum)
    return p


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * b.mass * vec_len(b.velocity) ** 2 for b in bodies)


def potential_energy(bodies: Sequence[Body], G: float = DEFAULT_G) -> float:
    """Total pairwise potential energy, -G m_i m_j / r_ij summed over i < j."""
    energy = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            r = vec_len(vec_sub(bodies[i].position, bodies[j].position))
            if r == 0:
                raise PreconditionError(f"bodies {bodies[i].name} and {bodies[j].name} coincide")
            energy -= G * bodies[i].mass * bodies[j].mass / r
    return energy

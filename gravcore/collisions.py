#!/usr/bin/env python3
"""
Collision handling for the gravity simulation.

Colliding bodies are fused: a perfectly inelastic merge that sums mass and,
for movable bodies, conserves momentum. A fixed body absorbs whatever hits it
and stays where it is.

The per-step pass is a greedy matching in iteration order. Once a body has been
consumed by a fusion it is skipped for the rest of the step, so a body takes
part in at most one fusion per step and the first pairing found wins.
"""
import logging
from typing import List, NamedTuple, Sequence, Set, Tuple

from .data_models import Body
from .vector_utils import vec_add, vec_dist, vec_scale

logger = logging.getLogger("gravity_sim.collisions")


class Fusion(NamedTuple):
    """Record of one fusion: the two consumed bodies and their replacement."""
    a: Body
    b: Body
    fused: Body


def is_collide(a: Body, b: Body) -> bool:
    """
    True when the bodies overlap in display space.

    Uses ``a``'s scale factors for both bodies; bodies touching exactly
    (distance == radius sum) do not collide.
    """
    distance = vec_dist(a.position, b.position) * a.position_scale
    return distance < (a.radius + b.radius) * a.radius_scale


def fuse_body(a: Body, b: Body) -> Body:
    """
    Build the body that replaces ``a`` and ``b`` after a collision.

    Mass adds and density is the mass-weighted average. If either input is
    fixed the result is fixed at that body's position (``a`` wins if both are);
    otherwise position and velocity are the mass-weighted averages.
    """
    m_total = a.mass + b.mass
    density = (a.density * a.mass + b.density * b.mass) / m_total
    name = f"{a.name}+{b.name}"
    common = dict(
        position_scale=a.position_scale,
        radius_scale=a.radius_scale,
        trace_num=a.trace_num,
        trace_prelocate=a.trace_prelocate,
        name=name,
    )

    if a.fixed or b.fixed:
        anchor = a if a.fixed else b
        return Body(m_total, density, anchor.position, fixed=True, **common)

    position = vec_scale(vec_add(vec_scale(a.position, a.mass), vec_scale(b.position, b.mass)), 1.0 / m_total)
    velocity = vec_scale(vec_add(a.momentum, b.momentum), 1.0 / m_total)
    return Body(m_total, density, position, velocity, **common)


def handle_collisions(bodies: Sequence[Body]) -> Tuple[List[Body], List[Fusion]]:
    """
    Detect and fuse colliding pairs.

    Returns (bodies, fusions): the surviving bodies in their original order
    followed by the fused bodies in creation order, and a record of each fusion.
    The input sequence is not modified.
    """
    consumed: Set[int] = set()
    fusions: List[Fusion] = []

    n = len(bodies)
    for i in range(n):
        if i in consumed:
            continue
        bi = bodies[i]
        for j in range(i + 1, n):
            if j in consumed:
                continue
            bj = bodies[j]
            if not is_collide(bi, bj):
                continue

            fused = fuse_body(bi, bj)
            consumed.add(i)
            consumed.add(j)
            fusions.append(Fusion(bi, bj, fused))
            logger.info("Fused %s + %s -> mass %.4g kg, radius %.4g m", bi.name, bj.name, fused.mass, fused.radius)
            break

    if not fusions:
        return list(bodies), fusions

    survivors = [b for idx, b in enumerate(bodies) if idx not in consumed]
    return survivors + [f.fused for f in fusions], fusions

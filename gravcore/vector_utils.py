#!/usr/bin/env python3
"""
Vector helpers for 3D operations.

Vectors are immutable ``Vec3`` tuples; every helper returns a new value, so a
vector handed to one body can never be mutated through another.
"""
import math
from typing import Iterable, NamedTuple


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


ZERO = Vec3(0.0, 0.0, 0.0)


def vec(values: Iterable[float]) -> Vec3:
    """Coerce any 3-element sequence (tuple, list, numpy array) into a Vec3."""
    x, y, z = values
    return Vec3(float(x), float(y), float(z))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return Vec3(a[0] * s, a[1] * s, a[2] * s)


def vec_neg(a: Vec3) -> Vec3:
    return Vec3(-a[0], -a[1], -a[2])


def vec_len(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def vec_dist(a: Vec3, b: Vec3) -> float:
    return vec_len(vec_sub(a, b))


def vec_is_finite(a: Vec3) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1]) and math.isfinite(a[2])

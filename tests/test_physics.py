import pytest

from gravcore import physics
from gravcore.constants import G
from gravcore.errors import PreconditionError
from gravcore.vector_utils import Vec3, vec_len


def test_compute_gravity_magnitude_and_direction(make_body):
    a = make_body(mass=2e10, position=(0.0, 0.0, 0.0))
    b = make_body(mass=3e10, position=(3.0, 4.0, 0.0))
    f = physics.compute_gravity(a, b, G)
    expected = G * 2e10 * 3e10 / 25.0
    assert vec_len(f) == pytest.approx(expected)
    # points from b toward a
    assert f.x == pytest.approx(-0.6 * expected)
    assert f.y == pytest.approx(-0.8 * expected)
    assert f.z == 0.0


def test_compute_gravity_uses_given_constant(make_body):
    a = make_body(mass=1.0, position=(0.0, 0.0, 0.0))
    b = make_body(mass=1.0, position=(0.0, 0.0, 2.0))
    assert physics.compute_gravity(a, b, 4.0) == Vec3(0.0, 0.0, -1.0)


def test_coincident_bodies_are_a_precondition_violation(make_body):
    a = make_body(position=(1.0, 1.0, 1.0))
    b = make_body(position=(1.0, 1.0, 1.0))
    with pytest.raises(PreconditionError):
        physics.compute_gravity(a, b)


def test_accumulate_gravity_equal_and_opposite(make_body):
    bodies = [
        make_body(mass=1e12, position=(0.0, 0.0, 0.0)),
        make_body(mass=2e12, position=(10.0, 0.0, 0.0)),
        make_body(mass=5e11, position=(0.0, 7.0, -3.0)),
    ]
    physics.accumulate_gravity(bodies, G)
    total = Vec3(sum(b.force.x for b in bodies), sum(b.force.y for b in bodies), sum(b.force.z for b in bodies))
    scale = max(vec_len(b.force) for b in bodies)
    assert vec_len(total) < scale * 1e-12
    # the first body is pulled toward the second (+x) and the third (+y)
    assert bodies[0].force.x > 0
    assert bodies[0].force.y > 0


def test_two_body_forces_are_distinct_vectors(make_body):
    a = make_body(mass=1.0, position=(0.0, 0.0, 0.0))
    b = make_body(mass=1.0, position=(1.0, 0.0, 0.0))
    physics.accumulate_gravity([a, b], 1.0)
    assert a.force == Vec3(1.0, 0.0, 0.0)
    assert b.force == Vec3(-1.0, 0.0, 0.0)


def test_mass_and_momentum(make_body):
    a = make_body(mass=1.0, position=(0.0, 0.0, 0.0), velocity=(2.0, 0.0, 0.0))
    b = make_body(mass=3.0, position=(4.0, 0.0, 0.0), velocity=(0.0, 1.0, 0.0))
    assert physics.total_mass([a, b]) == 4.0
    assert physics.total_momentum([a, b]) == Vec3(2.0, 3.0, 0.0)


def test_energies(make_body):
    a = make_body(mass=2.0, position=(0.0, 0.0, 0.0), velocity=(3.0, 0.0, 0.0))
    b = make_body(mass=1.0, position=(2.0, 0.0, 0.0))
    assert physics.kinetic_energy([a, b]) == pytest.approx(9.0)
    assert physics.potential_energy([a, b], 1.0) == pytest.approx(-1.0)

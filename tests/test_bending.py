import numpy as np
import pytest
from pbd_sim.types import Particle
from pbd_sim.constraints import BendingConstraint, dihedral_angle


def hinge_points(phi: float) -> list[np.ndarray]:
    """
    Shared edge along x; x2 in the +y direction, x3 rotated by phi about x.

    The dihedral angle of this hinge is phi (π = flat, 0 = fully folded).
    """
    return [
        np.array([0.0, 0.0, 0.0]),
        np.array([1.0, 0.0, 0.0]),
        np.array([0.3, 1.0, 0.0]),
        np.array([0.6, np.cos(phi), np.sin(phi)]),
    ]


def make_hinge(phi: float, rest_phi: float, stiffness: float = 1.0) -> tuple[BendingConstraint, list[Particle]]:
    ps = [
        Particle(position=x, rest_position=r)
        for x, r in zip(hinge_points(phi), hinge_points(rest_phi))
    ]
    return BendingConstraint(ps, stiffness=stiffness), ps


def numeric_grad(constraint, particles, h: float = 1e-6) -> np.ndarray:
    """Central differences of calculate_value w.r.t. every coordinate."""
    grad = np.zeros(3 * len(particles))
    for i, p in enumerate(particles):
        for k in range(3):
            orig = p.position[k]
            p.position[k] = orig + h
            f_plus = constraint.calculate_value()
            p.position[k] = orig - h
            f_minus = constraint.calculate_value()
            p.position[k] = orig
            grad[3 * i + k] = (f_plus - f_minus) / (2 * h)
    return grad


def test_rest_angle_from_rest_positions():
    c, _ = make_hinge(np.pi / 2, 2 * np.pi / 3)
    assert c.dihedral_angle == pytest.approx(2 * np.pi / 3)
    assert c.calculate_value() == pytest.approx(np.pi / 2 - 2 * np.pi / 3)


def test_explicit_rest_angle_overrides():
    ps = [Particle(position=x) for x in hinge_points(np.pi / 2)]
    c = BendingConstraint(ps, dihedral_angle=1.0)
    assert c.dihedral_angle == 1.0
    assert c.calculate_value() == pytest.approx(np.pi / 2 - 1.0)


def test_gradient_matches_finite_differences():
    c, ps = make_hinge(1.1, 2.0)
    # Break the symmetry of the test hinge
    ps[0].position += np.array([0.05, -0.02, 0.03])
    ps[2].position += np.array([0.0, 0.1, 0.2])

    analytic = c.calculate_grad()
    numeric = numeric_grad(c, ps)
    assert analytic.shape == (12,)
    assert np.allclose(analytic, numeric, atol=1e-6)


def test_gradient_is_translation_invariant():
    """Gradient blocks sum to zero: a rigid shift does not change the angle."""
    c, _ = make_hinge(0.9, 2.5)
    grad = c.calculate_grad().reshape(4, 3)
    assert np.allclose(grad.sum(axis=0), 0.0, atol=1e-12)


def test_flat_hinge_has_zero_gradient():
    """Coplanar quad (n0·n1 = -1): gradient is exactly zero and projection is a no-op."""
    flat = [
        np.array([0.0, 0.0, 0.0]),
        np.array([1.0, 0.0, 0.0]),
        np.array([0.3, 1.0, 0.0]),
        np.array([0.6, -1.0, 0.0]),
    ]
    ps = [
        Particle(position=x, rest_position=r)
        for x, r in zip(flat, hinge_points(2 * np.pi / 3))
    ]
    c = BendingConstraint(ps)
    assert c.calculate_value() == pytest.approx(np.pi - 2 * np.pi / 3)
    assert np.array_equal(c.calculate_grad(), np.zeros(12))

    c.project_particles()
    for p, x in zip(ps, flat):
        assert np.array_equal(p.position, x)


def test_folded_hinge_has_zero_gradient():
    """Both opposite vertices on the same side in-plane (angle 0)."""
    ps = [
        Particle(position=(0.0, 0.0, 0.0)),
        Particle(position=(1.0, 0.0, 0.0)),
        Particle(position=(0.3, 1.0, 0.0)),
        Particle(position=(0.6, 2.0, 0.0)),
    ]
    c = BendingConstraint(ps, dihedral_angle=1.0)
    assert c.calculate_value() == pytest.approx(-1.0)
    assert np.array_equal(c.calculate_grad(), np.zeros(12))


def test_nearly_flat_hinge_has_zero_gradient():
    """x3 lifted 1e-7 off the plane: |n0·n1| is within tolerance of 1 but not equal to it."""
    ps = [
        Particle(position=(0.0, 0.0, 0.0)),
        Particle(position=(1.0, 0.0, 0.0)),
        Particle(position=(0.3, 1.0, 0.0)),
        Particle(position=(0.6, -1.0, 1e-7)),
    ]
    c = BendingConstraint(ps, dihedral_angle=2.0)
    before = [p.position.copy() for p in ps]

    assert c.calculate_value() != pytest.approx(0.0)
    assert dihedral_angle(*before) != np.pi
    assert np.array_equal(c.calculate_grad(), np.zeros(12))

    c.project_particles()
    for p, x in zip(ps, before):
        assert np.array_equal(p.position, x)


def test_collinear_triangle_is_handled():
    """x2 on the shared edge line: no normal, value reported as 0, zero gradient."""
    ps = [
        Particle(position=(0.0, 0.0, 0.0)),
        Particle(position=(1.0, 0.0, 0.0)),
        Particle(position=(2.0, 0.0, 0.0)),
        Particle(position=(0.5, 0.0, 1.0)),
    ]
    c = BendingConstraint(ps, dihedral_angle=1.0)
    assert c.calculate_value() == 0.0
    assert np.array_equal(c.calculate_grad(), np.zeros(12))
    c.project_particles()
    assert np.array_equal(ps[2].position, [2.0, 0.0, 0.0])


def test_degenerate_rest_geometry_rejected():
    ps = [
        Particle(position=(0.0, 0.0, 0.0)),
        Particle(position=(1.0, 0.0, 0.0)),
        Particle(position=(2.0, 0.0, 0.0)),
        Particle(position=(0.5, 1.0, 0.0)),
    ]
    with pytest.raises(ValueError):
        BendingConstraint(ps)
    with pytest.raises(ValueError):
        BendingConstraint(ps[:3])


def test_projection_converges_to_rest_angle():
    c, ps = make_hinge(np.pi / 2, 2 * np.pi / 3)
    for _ in range(50):
        c.project_particles()
    assert abs(c.calculate_value()) < 1e-5
    angle = dihedral_angle(*(p.position for p in ps))
    assert angle == pytest.approx(2 * np.pi / 3, abs=1e-5)


def test_pinned_edge_stays_put():
    c, ps = make_hinge(np.pi / 2, 2 * np.pi / 3)
    ps[0].inv_mass = 0.0
    ps[1].inv_mass = 0.0
    c = BendingConstraint(ps, dihedral_angle=2 * np.pi / 3)
    before = [p.position.copy() for p in ps]

    c.project_particles()
    assert np.array_equal(ps[0].position, before[0])
    assert np.array_equal(ps[1].position, before[1])
    assert abs(c.calculate_value()) < abs(np.pi / 2 - 2 * np.pi / 3)

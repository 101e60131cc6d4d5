"""
Tests for vector utilities.
"""

import numpy as np
import pytest

from clugen.algorithms.vectors import (
    angle_btw,
    points_on_line,
    rand_ortho_vector,
    rand_unit_vector,
    rand_vector_at_angle,
)


# ------------------------------------------------------------------
# rand_unit_vector
# ------------------------------------------------------------------


@pytest.mark.parametrize("num_dims", [1, 2, 3, 5, 30])
def test_rand_unit_vector_norm(seeded_rng, num_dims):
    """Random vectors have the requested size and unit norm."""
    v = rand_unit_vector(num_dims, seeded_rng)
    assert v.shape == (num_dims,)
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)


def test_rand_unit_vector_reproducible():
    """Same seed, same vector."""
    v1 = rand_unit_vector(4, np.random.default_rng(33))
    v2 = rand_unit_vector(4, np.random.default_rng(33))
    np.testing.assert_array_equal(v1, v2)


# ------------------------------------------------------------------
# rand_ortho_vector
# ------------------------------------------------------------------


@pytest.mark.parametrize("num_dims", [2, 3, 5, 30])
def test_rand_ortho_vector_orthogonal(seeded_rng, num_dims):
    """Result is a unit vector orthogonal to the input."""
    for _ in range(10):
        u = rand_unit_vector(num_dims, seeded_rng)
        v = rand_ortho_vector(u, seeded_rng)
        assert v.shape == (num_dims,)
        np.testing.assert_allclose(np.linalg.norm(v), 1.0)
        assert abs(np.dot(u, v)) < 1e-12


def test_rand_ortho_vector_axis_aligned(rng):
    """Works for vectors aligned with an axis."""
    v = rand_ortho_vector([1.0, 0.0, 0.0], rng)
    assert abs(v[0]) < 1e-12
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)


def test_rand_ortho_vector_1d(rng):
    """In 1D there is no orthogonal vector; a 1D unit vector is returned."""
    v = rand_ortho_vector([1.0], rng)
    assert v.shape == (1,)
    np.testing.assert_allclose(np.abs(v), [1.0])


# ------------------------------------------------------------------
# rand_vector_at_angle
# ------------------------------------------------------------------


def test_rand_vector_at_angle_zero(rng):
    """A zero angle returns a copy of the vector."""
    u = np.array([0.6, 0.8])
    v = rand_vector_at_angle(u, 0.0, rng)
    np.testing.assert_array_equal(v, u)
    assert v is not u


@pytest.mark.parametrize("angle", [np.pi / 8, -np.pi / 6, np.pi / 4, np.pi / 3, -1.2])
@pytest.mark.parametrize("num_dims", [2, 3, 7])
def test_rand_vector_at_angle_acute(seeded_rng, num_dims, angle):
    """For |angle| < pi/2 the result is at exactly |angle| from u."""
    u = rand_unit_vector(num_dims, seeded_rng)
    v = rand_vector_at_angle(u, angle, seeded_rng)
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)
    np.testing.assert_allclose(angle_btw(u, v), abs(angle), atol=1e-10)


@pytest.mark.parametrize("angle", [np.pi / 2, -np.pi / 2])
def test_rand_vector_at_angle_right(seeded_rng, angle):
    """At +/- pi/2 the result is orthogonal to u."""
    u = rand_unit_vector(4, seeded_rng)
    v = rand_vector_at_angle(u, angle, seeded_rng)
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)
    assert abs(np.dot(u, v)) < 1e-12


@pytest.mark.parametrize("offset", [5e-6, -5e-6, 1e-4])
def test_rand_vector_at_angle_near_right(seeded_rng, offset):
    """Angles just off pi/2 are kept, not snapped to a right angle."""
    u = rand_unit_vector(3, seeded_rng)
    angle = np.pi / 2 - abs(offset)
    v = rand_vector_at_angle(u, np.sign(offset) * angle, seeded_rng)
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)
    np.testing.assert_allclose(angle_btw(u, v), angle, atol=1e-9)


@pytest.mark.parametrize("angle", [2.0, -3.0, np.pi])
def test_rand_vector_at_angle_obtuse(seeded_rng, angle):
    """Beyond pi/2 the result is just a random unit vector."""
    u = rand_unit_vector(3, seeded_rng)
    v = rand_vector_at_angle(u, angle, seeded_rng)
    assert v.shape == (3,)
    np.testing.assert_allclose(np.linalg.norm(v), 1.0)


def test_rand_vector_at_angle_1d(rng):
    """In 1D any non-zero angle gives a random 1D unit vector."""
    v = rand_vector_at_angle(np.array([1.0]), 0.3, rng)
    np.testing.assert_allclose(np.abs(v), [1.0])


# ------------------------------------------------------------------
# points_on_line
# ------------------------------------------------------------------


def test_points_on_line_2d():
    """Points along a horizontal 2D line."""
    result = points_on_line([5.0, 5.0], [1.0, 0.0], np.arange(-4, 5, 2))
    expected = np.array(
        [[1.0, 5.0], [3.0, 5.0], [5.0, 5.0], [7.0, 5.0], [9.0, 5.0]]
    )
    np.testing.assert_array_equal(result, expected)


def test_points_on_line_4d():
    """Points along a 4D line."""
    result = points_on_line([-2.0, 0, 0, 2.0], [0, 0, -1.0, 0], [10, -10])
    expected = np.array([[-2.0, 0.0, -10.0, 2.0], [-2.0, 0.0, 10.0, 2.0]])
    np.testing.assert_array_equal(result, expected)


def test_points_on_line_zero_distance_is_center(seeded_rng):
    """A zero distance gives the center exactly."""
    center = seeded_rng.normal(size=6) * 100
    direction = rand_unit_vector(6, seeded_rng)
    result = points_on_line(center, direction, [0.0])
    assert result.shape == (1, 6)
    np.testing.assert_array_equal(result[0], center)


def test_points_on_line_line_equation(seeded_rng):
    """Each row is center + w * direction."""
    center = seeded_rng.normal(size=3)
    direction = rand_unit_vector(3, seeded_rng)
    dists = seeded_rng.normal(size=20) * 10
    result = points_on_line(center, direction, dists)
    assert result.shape == (20, 3)
    for w, p in zip(dists, result):
        np.testing.assert_allclose(p, center + w * direction)


def test_points_on_line_empty():
    """No distances, no points."""
    result = points_on_line([1.0, 2.0], [0.0, 1.0], [])
    assert result.shape == (0, 2)


# ------------------------------------------------------------------
# angle_btw
# ------------------------------------------------------------------


def test_angle_btw_known_value():
    """Angle between the diagonal and an axis in 4D is 60 degrees."""
    a = angle_btw([1.0, 1.0, 1.0, 1.0], [1.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(np.degrees(a), 60.0)


def test_angle_btw_bounds():
    """Equal vectors give 0, opposite vectors give pi."""
    assert angle_btw([2.0, 1.0], [4.0, 2.0]) == pytest.approx(0.0, abs=1e-12)
    assert angle_btw([2.0, 1.0], [-2.0, -1.0]) == pytest.approx(np.pi)


def test_angle_btw_matches_acos(seeded_rng):
    """Agrees with the textbook formula away from 0 and pi."""
    for _ in range(20):
        v1 = seeded_rng.normal(size=5)
        v2 = seeded_rng.normal(size=5)
        expected = np.arccos(
            np.dot(v1, v2) / (np.linalg.norm(v1) * np.linalg.norm(v2))
        )
        a = angle_btw(v1, v2)
        assert 0.0 <= a <= np.pi
        np.testing.assert_allclose(a, expected, rtol=1e-9)

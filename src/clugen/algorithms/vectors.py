"""
Vector utilities used throughout cluster generation.

Random unit vectors, orthogonal and angled vectors, points along a line and a
numerically stable angle between vectors.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

Array1D = np.ndarray
Array2D = np.ndarray

_EPS = np.finfo(float).eps
# Relative tolerance for approximate equality, about 1.5e-8
_RTOL = np.sqrt(_EPS)


def rand_unit_vector(num_dims: int, rng: np.random.Generator) -> Array1D:
    """
    Get a random unit vector with *num_dims* dimensions.

    Components are drawn uniformly from [-0.5, 0.5) and the result normalized.

    Args:
        num_dims: Number of dimensions
        rng: NumPy random generator

    Returns:
        Unit vector of shape (num_dims,)
    """
    r = rng.random(num_dims) - 0.5
    return r / np.linalg.norm(r)


def rand_ortho_vector(u: ArrayLike, rng: np.random.Generator) -> Array1D:
    """
    Get a random unit vector orthogonal to *u*.

    *u* is expected to be a unit vector. In 1D there is no orthogonal
    complement, so a random 1D unit vector is returned instead.

    Args:
        u: Reference vector of shape (num_dims,)
        rng: NumPy random generator

    Returns:
        Unit vector of shape (num_dims,) orthogonal to *u*
    """
    u = np.asarray(u, dtype=np.float64)
    if u.size == 1:
        return rand_unit_vector(1, rng)

    # Draw until r is not parallel to u
    while True:
        r = rand_unit_vector(u.size, rng)
        if not np.isclose(abs(np.dot(u, r)), 1.0, rtol=_RTOL, atol=0.0):
            break

    # First step of Gram-Schmidt
    v = r - np.dot(u, r) / np.dot(u, u) * u
    return v / np.linalg.norm(v)


def rand_vector_at_angle(
    u: ArrayLike, angle: float, rng: np.random.Generator
) -> Array1D:
    """
    Get a random unit vector at *angle* radians from *u*.

    *u* is expected to be a unit vector. For |angle| > pi/2, or in 1D, the
    result is simply a random unit vector.

    Args:
        u: Reference unit vector of shape (num_dims,)
        angle: Angle in radians
        rng: NumPy random generator

    Returns:
        Unit vector of shape (num_dims,)
    """
    u = np.asarray(u, dtype=np.float64)
    if abs(angle) < _EPS:
        return u.copy()
    elif np.isclose(abs(angle), np.pi / 2, rtol=_RTOL, atol=0.0) and u.size > 1:
        return rand_ortho_vector(u, rng)
    elif -np.pi / 2 < angle < np.pi / 2 and u.size > 1:
        v = u + rand_ortho_vector(u, rng) * np.tan(angle)
        return v / np.linalg.norm(v)
    else:
        return rand_unit_vector(u.size, rng)


def points_on_line(
    center: ArrayLike, direction: ArrayLike, dist_center: ArrayLike
) -> Array2D:
    """
    Coordinates of points on a line given their distances from its center.

    Uses the vector form of the line equation, ``P = 1 c^T + w d^T``, which
    assumes *direction* is a unit vector.

    Args:
        center: Line center of shape (num_dims,)
        direction: Line direction of shape (num_dims,)
        dist_center: Signed distances from the center, shape (num_points,)

    Returns:
        Array of shape (num_points, num_dims)
    """
    center = np.asarray(center, dtype=np.float64).reshape(-1)
    direction = np.asarray(direction, dtype=np.float64).reshape(-1)
    dist_center = np.asarray(dist_center, dtype=np.float64).reshape(-1)
    return center[None, :] + dist_center[:, None] * direction[None, :]


def angle_btw(v1: ArrayLike, v2: ArrayLike) -> float:
    """
    Angle in radians between two vectors, in [0, pi].

    Avoids the instability of ``acos(dot(v1, v2) / (|v1| |v2|))`` near 0 and pi
    by using W. Kahan's formulation ``2 atan(|u1 - u2| / |u1 + u2|)``.
    """
    u1 = np.asarray(v1, dtype=np.float64)
    u2 = np.asarray(v2, dtype=np.float64)
    u1 = u1 / np.linalg.norm(u1)
    u2 = u2 / np.linalg.norm(u2)

    y = u1 - u2
    x = u1 + u2

    a = 2 * np.arctan2(np.linalg.norm(y), np.linalg.norm(x))

    if not (np.signbit(a) or np.signbit(np.pi - a)):
        return float(a)
    return 0.0 if np.signbit(a) else float(np.pi)

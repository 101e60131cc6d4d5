"""
Default stochastic strategies used by clugen().

Each function implements one randomized step of the algorithm and can be
replaced by a user-supplied callable with the same signature:

- clusizes(num_clusters, num_points, allow_empty, rng)
- clucenters(num_clusters, clu_sep, clu_offset, rng)
- llengths(num_clusters, llength, llength_disp, rng)
- angle_deltas(num_clusters, angle_disp, rng)
- clupoints_n_1 / clupoints_n(projs, lat_disp, line_len, clu_dir, clu_ctr, rng)
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from .corrections import fix_empty, fix_num_points
from .vectors import rand_ortho_vector

Array1D = np.ndarray
Array2D = np.ndarray

# (num_points, lat_disp, rng) -> distances of points to their projections
DistFn = Callable[[int, float, np.random.Generator], ArrayLike]


def clusizes(
    num_clusters: int,
    num_points: int,
    allow_empty: bool,
    rng: np.random.Generator,
) -> Array1D:
    """
    Determine the number of points in each cluster.

    Sizes are drawn from the normal distribution (mean = num_points /
    num_clusters, std = mean / 3, so that [0, 2 * mean] holds ~99.7% of the
    sizes), then corrected so they add up to *num_points* and, unless
    *allow_empty* is true, so that no cluster is empty.

    Args:
        num_clusters: Number of clusters
        num_points: Total number of points
        allow_empty: Whether empty clusters are allowed
        rng: NumPy random generator

    Returns:
        Integer array of shape (num_clusters,) summing to num_points
    """
    mean = num_points / num_clusters
    std = mean / 3

    clu_num_points = std * rng.standard_normal(num_clusters) + mean

    # Negative sizes are meaningless
    clu_num_points[clu_num_points < 0] = 0

    total = clu_num_points.sum()
    if total > 0:
        clu_num_points *= num_points / total

    clu_num_points = np.rint(clu_num_points).astype(int)

    # Rounding may have broken the total
    fix_num_points(clu_num_points, num_points)

    if not allow_empty:
        fix_empty(clu_num_points)

    return clu_num_points


def clucenters(
    num_clusters: int,
    clu_sep: ArrayLike,
    clu_offset: ArrayLike,
    rng: np.random.Generator,
) -> Array2D:
    """
    Determine cluster centers using the uniform distribution.

    Computes ``C = c U diag(s) + 1 o^T`` where U holds values uniform in
    [-0.5, 0.5), c is the number of clusters, s the average separation per
    dimension and o the offset. Scaling by c keeps average spacing roughly
    constant as clusters are added.

    Args:
        num_clusters: Number of clusters
        clu_sep: Average cluster separation per dimension, shape (num_dims,)
        clu_offset: Offset added to every center, shape (num_dims,)
        rng: NumPy random generator

    Returns:
        Array of shape (num_clusters, num_dims)
    """
    clu_sep = np.asarray(clu_sep, dtype=np.float64)
    clu_offset = np.asarray(clu_offset, dtype=np.float64)
    ctr_rel = rng.random((num_clusters, clu_sep.size)) - 0.5
    return num_clusters * ctr_rel * clu_sep[None, :] + clu_offset[None, :]


def llengths(
    num_clusters: int,
    llength: float,
    llength_disp: float,
    rng: np.random.Generator,
) -> Array1D:
    """Line lengths from the folded normal distribution (mu=llength, sigma=llength_disp)."""
    return np.abs(llength + llength_disp * rng.standard_normal(num_clusters))


def angle_deltas(
    num_clusters: int, angle_disp: float, rng: np.random.Generator
) -> Array1D:
    """
    Angles between the main direction and each cluster-supporting line.

    Drawn from a wrapped normal distribution (mu=0, sigma=angle_disp) with
    support in [-pi/2, pi/2], half the support of the usual wrapped normal.
    Angles are wrapped to [-pi, pi] and then shifted by pi into [-pi/2, pi/2].

    Args:
        num_clusters: Number of clusters
        angle_disp: Angle dispersion in radians
        rng: NumPy random generator

    Returns:
        Array of shape (num_clusters,) with values in [-pi/2, pi/2]
    """
    angles = angle_disp * rng.standard_normal(num_clusters)

    angles = np.arctan2(np.sin(angles), np.cos(angles))
    angles[angles > np.pi / 2] -= np.pi
    angles[angles < -np.pi / 2] += np.pi

    return angles


def clupoints_n_1_template(
    projs: ArrayLike,
    lat_disp: float,
    clu_dir: ArrayLike,
    dist_fn: DistFn,
    rng: np.random.Generator,
) -> Array2D:
    """
    Place points on hyperplanes orthogonal to the cluster-supporting line.

    Each point lies on the hyperplane through its projection, at a distance
    given by *dist_fn* along a random direction orthogonal to *clu_dir*. Useful
    for building custom ``point_dist_fn`` strategies with other distance
    distributions.

    Args:
        projs: Point projections on the line, shape (num_points, num_dims)
        lat_disp: Lateral dispersion, passed on to *dist_fn*
        clu_dir: Direction of the cluster-supporting line (unit vector)
        dist_fn: Callable (num_points, lat_disp, rng) returning the distance
            of each point to its projection
        rng: NumPy random generator

    Returns:
        Array of shape (num_points, num_dims)
    """
    projs = np.asarray(projs, dtype=np.float64)
    clu_dir = np.asarray(clu_dir, dtype=np.float64)
    clu_num_points = projs.shape[0]

    points_dist = np.asarray(dist_fn(clu_num_points, lat_disp, rng), dtype=np.float64)
    points_dist = points_dist.reshape(-1, 1)

    orth_vecs = np.zeros((clu_num_points, clu_dir.size))
    for j in range(clu_num_points):
        orth_vecs[j, :] = rand_ortho_vector(clu_dir, rng)

    return projs + np.abs(points_dist) * orth_vecs


def clupoints_n_1(
    projs: ArrayLike,
    lat_disp: float,
    line_len: float,
    clu_dir: ArrayLike,
    clu_ctr: ArrayLike,
    rng: np.random.Generator,
) -> Array2D:
    """
    The "n-1" point placement strategy.

    Points are placed on the hyperplane orthogonal to the cluster-supporting
    line through their projection, at a normally distributed distance
    (mu=0, sigma=lat_disp). *line_len* and *clu_ctr* are ignored.
    """

    def dist_fn(clu_num_points, ldisp, rg):
        return ldisp * rg.standard_normal(clu_num_points)

    return clupoints_n_1_template(projs, lat_disp, clu_dir, dist_fn, rng)


def clupoints_n(
    projs: ArrayLike,
    lat_disp: float,
    line_len: float,
    clu_dir: ArrayLike,
    clu_ctr: ArrayLike,
    rng: np.random.Generator,
) -> Array2D:
    """
    The "n" point placement strategy.

    Points are placed around their projection using the normal distribution
    (mu=0, sigma=lat_disp) in every dimension. *line_len*, *clu_dir* and
    *clu_ctr* are ignored.
    """
    projs = np.asarray(projs, dtype=np.float64)
    return projs + lat_disp * rng.standard_normal(projs.shape)

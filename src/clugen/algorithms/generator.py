"""
Cluster generation orchestrator.

Provides ``clugen()``, which validates its arguments, resolves the pluggable
strategies, determines the properties of every cluster and then generates the
points of each cluster around its supporting line.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike

from ..config import config
from ..errors import CapacityError, DegeneracyError, DimensionError, StrategyError
from ..utils.logging_config import get_logger
from .strategies import (
    angle_deltas,
    clucenters,
    clupoints_n,
    clupoints_n_1,
    clusizes,
    llengths,
)
from .vectors import points_on_line, rand_vector_at_angle

logger = get_logger(__name__)

Array1D = np.ndarray
Array2D = np.ndarray
RngLike = Union[None, int, np.random.Generator]
ArrayOrFn = Union[Callable[..., Any], ArrayLike]

_EPS = np.finfo(float).eps


@dataclass(frozen=True, eq=False)
class ClugenOutput:
    """
    Result of a clugen() run.

    Point-level arrays (points, clusters, projections) have one row per
    generated point; cluster-level arrays (sizes, centers, directions, angles,
    lengths) have one row per cluster. All arrays are read-only.
    """

    points: Array2D
    clusters: Array1D
    projections: Array2D
    sizes: Array1D
    centers: Array2D
    directions: Array2D
    angles: Array1D
    lengths: Array1D

    def __post_init__(self):
        """Mark arrays read-only."""
        for f in fields(self):
            getattr(self, f.name).flags.writeable = False


def _proj_norm(line_len: float, num_points: int, rng: np.random.Generator) -> Array1D:
    # Line length covers ~99.73% of projections (three-sigma rule)
    return (1.0 / 6.0) * line_len * rng.standard_normal(num_points)


def _proj_unif(line_len: float, num_points: int, rng: np.random.Generator) -> Array1D:
    return line_len * rng.random(num_points) - line_len / 2


def _points_are_projections(projs, lat_disp, line_len, clu_dir, clu_ctr, rng):
    return projs


_PROJ_DIST_FNS = {"norm": _proj_norm, "unif": _proj_unif}
_POINT_DIST_FNS = {"n-1": clupoints_n_1, "n": clupoints_n}


@dataclass(frozen=True)
class _Resolvable:
    """A strategy given either as a callable or as a literal array."""

    fn: Optional[Callable[..., Any]] = None
    literal: Optional[np.ndarray] = None

    def resolve(self, *args: Any) -> np.ndarray:
        if self.fn is not None:
            return np.asarray(self.fn(*args))
        return self.literal


def _array_or_fn(
    name: str, value: ArrayOrFn, shape: Tuple[int, ...], description: str
) -> _Resolvable:
    """Check a strategy parameter without calling it."""
    if callable(value):
        return _Resolvable(fn=value)
    if isinstance(value, str):
        raise StrategyError(f"`{name}` has to be either a function or {description}")
    literal = np.asarray(value)
    if literal.dtype.kind not in "biuf":
        raise StrategyError(f"`{name}` has to be either a function or {description}")
    if literal.shape != shape:
        raise DimensionError(
            f"`{name}` has to be either a function or {description} "
            f"(got shape {literal.shape})"
        )
    return _Resolvable(literal=literal)


def _check_literal_sizes(sizes: np.ndarray) -> None:
    """Literal cluster sizes must be non-negative integers."""
    if sizes.dtype.kind == "f" and np.all(np.isfinite(sizes)):
        integral = bool(np.all(sizes == np.rint(sizes)))
    else:
        integral = sizes.dtype.kind in "iu"
    if not integral:
        raise StrategyError("`clusizes_fn` array must contain integer sizes")
    if np.any(sizes < 0):
        raise StrategyError("`clusizes_fn` array must not contain negative sizes")


def _resolve_rng(rng: RngLike) -> np.random.Generator:
    if rng is None:
        return config.generator.make_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(rng)
    raise TypeError("rng must be None, an integer seed or a numpy.random.Generator")


def clugen(
    num_dims: int,
    num_clusters: int,
    num_points: int,
    direction: ArrayLike,
    angle_disp: float,
    cluster_sep: ArrayLike,
    llength: float,
    llength_disp: float,
    lateral_disp: float,
    *,
    allow_empty: bool = False,
    cluster_offset: Optional[ArrayLike] = None,
    proj_dist_fn: Union[str, Callable[..., Any]] = "norm",
    point_dist_fn: Union[str, Callable[..., Any]] = "n-1",
    clusizes_fn: ArrayOrFn = clusizes,
    clucenters_fn: ArrayOrFn = clucenters,
    llengths_fn: ArrayOrFn = llengths,
    angle_deltas_fn: ArrayOrFn = angle_deltas,
    rng: RngLike = None,
) -> ClugenOutput:
    """
    Generate multidimensional clusters.

    Each cluster is supported by a line segment with its own center, direction
    and length. Point projections are placed along the line and the final
    points are obtained by displacing them laterally.

    Pipeline:
    1. Validate arguments and resolve strategies
    2. Determine cluster sizes, centers, line lengths and angle deltas
    3. Rotate each main direction by its angle delta
    4. For each cluster: place projections on the line, then the final points

    Args:
        num_dims: Number of dimensions
        num_clusters: Number of clusters to generate
        num_points: Total number of points to generate
        direction: Average direction of the cluster-supporting lines, either a
            vector of length num_dims (all clusters) or a
            (num_clusters, num_dims) matrix (one direction per cluster)
        angle_disp: Angle dispersion of cluster-supporting lines (radians)
        cluster_sep: Average cluster separation per dimension (num_dims,)
        llength: Average length of cluster-supporting lines
        llength_disp: Length dispersion of cluster-supporting lines
        lateral_disp: Dispersion of points from their projection
        allow_empty: Allow empty clusters (default: False)
        cluster_offset: Offset added to all cluster centers (default: zeros)
        proj_dist_fn: Placement of projections along the lines: "norm"
            (normal, sigma = length / 6), "unif" (uniform over the line) or a
            callable (line_len, num_points, rng) returning distances from the
            line center
        point_dist_fn: Placement of final points around projections: "n-1"
            (on the hyperplane orthogonal to the line), "n" (around the
            projection in all dimensions) or a callable with the signature of
            ``clupoints_n_1``. Ignored in 1D, where points are their
            projections.
        clusizes_fn: Callable (num_clusters, num_points, allow_empty, rng) or
            an array of num_clusters sizes
        clucenters_fn: Callable (num_clusters, cluster_sep, cluster_offset,
            rng) or a (num_clusters, num_dims) array of centers
        llengths_fn: Callable (num_clusters, llength, llength_disp, rng) or an
            array of num_clusters lengths
        angle_deltas_fn: Callable (num_clusters, angle_disp, rng) or an array
            of num_clusters angles
        rng: Seed or numpy Generator. Defaults to the seed configured via
            CLUGEN_SEED, or fresh system entropy if unset.

    Returns:
        ClugenOutput with points, clusters (1-based cluster ids), projections,
        sizes, centers, directions, angles and lengths. When cluster sizes are
        given as an array or by a custom function, the number of points is the
        sum of those sizes, which may differ from *num_points*.

    Raises:
        DimensionError: If a count is < 1 or an array has the wrong shape
        DegeneracyError: If a direction has zero magnitude
        CapacityError: If num_points < num_clusters and allow_empty is False
        StrategyError: If a strategy parameter is not recognized
    """
    # ############### #
    # Validate inputs #
    # ############### #

    if num_dims < 1:
        raise DimensionError("Number of dimensions, `num_dims`, must be > 0")

    if num_clusters < 1:
        raise DimensionError("Number of clusters, `num_clusters`, must be > 0")

    direction = np.asarray(direction, dtype=np.float64)
    if direction.ndim == 1:
        if direction.size != num_dims:
            raise DimensionError(
                "Length of directions in `direction` must be equal to "
                f"`num_dims` ({direction.size} != {num_dims})"
            )
        direction = direction.reshape(1, -1)
    elif direction.ndim == 2:
        if direction.shape[0] != num_clusters:
            raise DimensionError(
                "Number of rows in `direction` must be the same as the "
                f"number of clusters ({direction.shape[0]} != {num_clusters})"
            )
        if direction.shape[1] != num_dims:
            raise DimensionError(
                "Length of directions in `direction` must be equal to "
                f"`num_dims` ({direction.shape[1]} != {num_dims})"
            )
    else:
        raise DimensionError(
            "`direction` must be a vector (1D array) or a matrix (2D array), "
            f"but is {direction.ndim}D"
        )

    dir_magnitudes = np.linalg.norm(direction, axis=1)
    if np.any(dir_magnitudes < _EPS):
        raise DegeneracyError("Directions in `direction` must have magnitude > 0")

    if not allow_empty and num_points < num_clusters:
        raise CapacityError(
            f"A total of {num_points} points is not enough for "
            f"{num_clusters} non-empty clusters"
        )

    cluster_sep = np.asarray(cluster_sep, dtype=np.float64).reshape(-1)
    if cluster_sep.size != num_dims:
        raise DimensionError(
            "Length of `cluster_sep` must be equal to `num_dims` "
            f"({cluster_sep.size} != {num_dims})"
        )

    if cluster_offset is None:
        cluster_offset = np.zeros(num_dims)
    else:
        cluster_offset = np.asarray(cluster_offset, dtype=np.float64).reshape(-1)
        if cluster_offset.size != num_dims:
            raise DimensionError(
                "Length of `cluster_offset` must be equal to `num_dims` "
                f"({cluster_offset.size} != {num_dims})"
            )

    if callable(proj_dist_fn):
        pointproj_fn = proj_dist_fn
    elif isinstance(proj_dist_fn, str) and proj_dist_fn in _PROJ_DIST_FNS:
        pointproj_fn = _PROJ_DIST_FNS[proj_dist_fn]
    else:
        raise StrategyError(
            '`proj_dist_fn` has to be either "norm", "unif" or a user-defined function'
        )

    if num_dims == 1:
        # In 1D, point projections are the points themselves
        pt_from_proj_fn = _points_are_projections
    elif callable(point_dist_fn):
        pt_from_proj_fn = point_dist_fn
    elif isinstance(point_dist_fn, str) and point_dist_fn in _POINT_DIST_FNS:
        pt_from_proj_fn = _POINT_DIST_FNS[point_dist_fn]
    else:
        raise StrategyError(
            '`point_dist_fn` has to be either "n-1", "n" or a user-defined function'
        )

    sizes_src = _array_or_fn(
        "clusizes_fn", clusizes_fn, (num_clusters,), "a `num_clusters`-sized array"
    )
    if sizes_src.literal is not None:
        _check_literal_sizes(sizes_src.literal)

    centers_src = _array_or_fn(
        "clucenters_fn",
        clucenters_fn,
        (num_clusters, num_dims),
        "a matrix of size `num_clusters` x `num_dims`",
    )
    lengths_src = _array_or_fn(
        "llengths_fn", llengths_fn, (num_clusters,), "a `num_clusters`-sized array"
    )
    angles_src = _array_or_fn(
        "angle_deltas_fn",
        angle_deltas_fn,
        (num_clusters,),
        "a `num_clusters`-sized array",
    )

    rng = _resolve_rng(rng)

    logger.debug(
        "Generating %d points in %d clusters with %d dimensions",
        num_points,
        num_clusters,
        num_dims,
    )

    # ############################ #
    # Determine cluster properties #
    # ############################ #

    direction = direction / dir_magnitudes[:, None]
    if direction.shape[0] == 1:
        direction = np.repeat(direction, num_clusters, axis=0)

    cluster_sizes = sizes_src.resolve(num_clusters, num_points, allow_empty, rng)
    cluster_sizes = np.array(cluster_sizes, dtype=int).reshape(-1)

    # Custom sizes need not obey num_points
    if int(cluster_sizes.sum()) != num_points:
        logger.info(
            "Cluster sizes add up to %d points instead of the requested %d",
            int(cluster_sizes.sum()),
            num_points,
        )
    num_points = int(cluster_sizes.sum())

    cluster_centers = centers_src.resolve(num_clusters, cluster_sep, cluster_offset, rng)
    cluster_centers = np.array(cluster_centers, dtype=np.float64)

    cluster_lengths = lengths_src.resolve(num_clusters, llength, llength_disp, rng)
    cluster_lengths = np.array(cluster_lengths, dtype=np.float64).reshape(-1)

    cluster_angles = angles_src.resolve(num_clusters, angle_disp, rng)
    cluster_angles = np.array(cluster_angles, dtype=np.float64).reshape(-1)

    cluster_directions = np.zeros((num_clusters, num_dims))
    for i in range(num_clusters):
        cluster_directions[i, :] = rand_vector_at_angle(
            direction[i, :], cluster_angles[i], rng
        )

    # ################################# #
    # Determine points for each cluster #
    # ################################# #

    cumsum_points = np.concatenate(([0], np.cumsum(cluster_sizes)))

    point_clusters = np.zeros(num_points, dtype=int)
    point_projections = np.zeros((num_points, num_dims))
    points = np.zeros((num_points, num_dims))

    for i in range(num_clusters):
        idx_start = cumsum_points[i]
        idx_end = cumsum_points[i + 1]

        point_clusters[idx_start:idx_end] = i + 1

        # Distances of projections from the line center
        ptproj_dist_center = np.asarray(
            pointproj_fn(cluster_lengths[i], int(cluster_sizes[i]), rng),
            dtype=np.float64,
        )

        # Valid since cluster directions are unit vectors
        point_projections[idx_start:idx_end, :] = points_on_line(
            cluster_centers[i, :], cluster_directions[i, :], ptproj_dist_center
        )

        points[idx_start:idx_end, :] = pt_from_proj_fn(
            point_projections[idx_start:idx_end, :],
            lateral_disp,
            cluster_lengths[i],
            cluster_directions[i, :],
            cluster_centers[i, :],
            rng,
        )

    logger.debug(
        "Generated %d points, cluster sizes: %s", num_points, cluster_sizes.tolist()
    )

    return ClugenOutput(
        points=points,
        clusters=point_clusters,
        projections=point_projections,
        sizes=cluster_sizes,
        centers=cluster_centers,
        directions=cluster_directions,
        angles=cluster_angles,
        lengths=cluster_lengths,
    )

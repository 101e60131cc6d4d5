"""
Corrections applied to per-cluster point counts.

Both helpers modify the given integer array in place and also return it, so
they can be chained in custom ``clusizes_fn`` implementations.
"""

from __future__ import annotations

import numpy as np


def fix_num_points(clu_num_points: np.ndarray, num_points: int) -> np.ndarray:
    """
    Make the values in *clu_num_points* add up to *num_points*.

    While the sum is too small, the (first) smallest cluster is incremented;
    while it is too large, the (first) largest cluster is decremented.

    Args:
        clu_num_points: Integer array with the number of points per cluster
        num_points: Required total

    Returns:
        The same array, modified in place
    """
    while clu_num_points.sum() < num_points:
        imin = int(np.argmin(clu_num_points))
        clu_num_points[imin] += 1
    while clu_num_points.sum() > num_points:
        imax = int(np.argmax(clu_num_points))
        clu_num_points[imax] -= 1
    return clu_num_points


def fix_empty(clu_num_points: np.ndarray, allow_empty: bool = False) -> np.ndarray:
    """
    Given enough points, make sure no cluster is left empty.

    Each empty cluster, in order, takes one point from the current largest
    cluster. Nothing is done when *allow_empty* is true or when there are
    fewer points than clusters.

    Args:
        clu_num_points: Integer array with the number of points per cluster
        allow_empty: If True, return immediately

    Returns:
        The same array, modified in place
    """
    if allow_empty:
        return clu_num_points

    empty_clusters = np.flatnonzero(clu_num_points == 0)

    if empty_clusters.size > 0 and clu_num_points.sum() >= clu_num_points.size:
        for i0 in empty_clusters:
            imax = int(np.argmax(clu_num_points))
            clu_num_points[imax] -= 1
            clu_num_points[i0] += 1

    return clu_num_points

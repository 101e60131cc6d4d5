"""
Merging of clugen() outputs and other point datasets.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..errors import DimensionError, StrategyError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def _has_field(item: Any, field: str) -> bool:
    if isinstance(item, Mapping):
        return field in item
    return hasattr(item, field)


def _get_field(item: Any, field: str) -> np.ndarray:
    value = item[field] if isinstance(item, Mapping) else getattr(item, field)
    return np.asarray(value)


def _num_cols(value: np.ndarray) -> int:
    return 1 if value.ndim < 2 else value.shape[1]


def clumerge(
    *data: Any,
    fields: Sequence[str] = ("points", "clusters"),
    clusters_field: Optional[str] = "clusters",
) -> Dict[str, np.ndarray]:
    """
    Merge the given fields of two or more datasets.

    Datasets can be mappings (e.g. dicts of arrays) or objects exposing the
    fields as attributes, such as the output of ``clugen()``. Rows of each field
    are concatenated in the order the datasets are given; the merged arrays use
    the common promoted dtype.

    If *clusters_field* is not None, that field is always merged and its
    values are treated as cluster ids: the ids of each dataset are renumbered,
    in order of first appearance, continuing after the last id of the
    previous dataset, so that clusters from different datasets stay separate.

    Args:
        *data: Datasets to merge
        fields: Names of the fields to merge
        clusters_field: Name of the field holding integer cluster ids, or None

    Returns:
        Dictionary mapping each merged field to its merged array. Fields that
        are 1-D in every dataset stay 1-D.

    Raises:
        StrategyError: If a dataset lacks a field or the cluster ids are not
            integers
        DimensionError: If fields of a dataset have different numbers of rows,
            or a field has different numbers of columns across datasets
    """
    field_names: List[str] = list(dict.fromkeys(fields))
    if clusters_field is not None and clusters_field not in field_names:
        field_names.append(clusters_field)

    ncols: Dict[str, int] = {}
    dtypes: Dict[str, np.dtype] = {}
    all_1d: Dict[str, bool] = {}
    numel = 0

    for dt in data:
        numel_i = None

        for field in field_names:
            if not _has_field(dt, field):
                raise StrategyError(f"Data item does not contain required field `{field}`")

            value = _get_field(dt, field)

            if field == clusters_field and value.dtype.kind not in "iu":
                raise StrategyError(f"`{clusters_field}` must contain integer types")

            numel_tmp = value.shape[0] if value.ndim > 0 else 1
            if numel_i is None:
                numel_i = numel_tmp
            elif numel_tmp != numel_i:
                raise DimensionError(
                    "Data item contains fields with different sizes "
                    f"({numel_tmp} != {numel_i})"
                )

            if field not in ncols:
                ncols[field] = _num_cols(value)
                dtypes[field] = value.dtype
                all_1d[field] = value.ndim < 2
            else:
                if _num_cols(value) != ncols[field]:
                    raise DimensionError(f"Dimension mismatch in field `{field}`")
                dtypes[field] = np.result_type(dtypes[field], value.dtype)
                all_1d[field] = all_1d[field] and value.ndim < 2

        numel += numel_i or 0

    # Renumbered ids may not fit narrow integer types
    if clusters_field is not None and clusters_field in dtypes:
        widened = np.result_type(dtypes[clusters_field], int)
        if widened.kind in "iu":
            dtypes[clusters_field] = widened

    output: Dict[str, np.ndarray] = {}
    for field in ncols:
        shape = (numel,) if all_1d[field] else (numel, ncols[field])
        output[field] = np.empty(shape, dtype=dtypes[field])

    copied = 0
    last_cluster = 0

    for dt in data:
        tocopy = None

        for field in ncols:
            value = _get_field(dt, field)
            if tocopy is None:
                tocopy = value.shape[0] if value.ndim > 0 else 1

            if field == clusters_field:
                old_clusters = list(dict.fromkeys(value.reshape(-1).tolist()))
                mapping = {
                    old: last_cluster + k + 1 for k, old in enumerate(old_clusters)
                }
                last_cluster += len(old_clusters)
                value = np.array(
                    [mapping[val] for val in value.reshape(-1).tolist()], dtype=int
                ).reshape(value.shape)

            target = output[field][copied:copied + tocopy]
            target[...] = value.reshape(target.shape)

        copied += tocopy or 0

    logger.debug("Merged %d datasets into %d rows", len(data), numel)

    return output

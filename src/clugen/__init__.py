"""
clugen - Core Package

Generation of multidimensional clusters supported by line segments.

This package provides:
- The clugen() generator and its pluggable strategies
- Vector utilities used by the strategies
- clumerge() for combining generated (and other) datasets
"""

__version__ = "0.1.0"

from .algorithms import (
    ClugenOutput,
    angle_btw,
    clugen,
    clumerge,
    points_on_line,
    rand_ortho_vector,
    rand_unit_vector,
    rand_vector_at_angle,
)
from .errors import (
    CapacityError,
    ClugenError,
    DegeneracyError,
    DimensionError,
    StrategyError,
)

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import utils

__all__ = [
    "ClugenOutput",
    "angle_btw",
    "clugen",
    "clumerge",
    "points_on_line",
    "rand_ortho_vector",
    "rand_unit_vector",
    "rand_vector_at_angle",
    "CapacityError",
    "ClugenError",
    "DegeneracyError",
    "DimensionError",
    "StrategyError",
    "algorithms",
    "utils",
]

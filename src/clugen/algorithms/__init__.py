"""
Algorithm core of clugen.

Vector utilities, the default stochastic strategies, the cluster size
corrections, the clugen() orchestrator and the clumerge() dataset merger.
"""

from .vectors import (
    angle_btw,
    points_on_line,
    rand_ortho_vector,
    rand_unit_vector,
    rand_vector_at_angle,
)
from .corrections import fix_empty, fix_num_points
from .strategies import (
    angle_deltas,
    clucenters,
    clupoints_n,
    clupoints_n_1,
    clupoints_n_1_template,
    clusizes,
    llengths,
)
from .generator import ClugenOutput, clugen
from .merge import clumerge

__all__ = [
    # Vector utilities
    "angle_btw",
    "points_on_line",
    "rand_ortho_vector",
    "rand_unit_vector",
    "rand_vector_at_angle",
    # Size corrections
    "fix_empty",
    "fix_num_points",
    # Default strategies
    "angle_deltas",
    "clucenters",
    "clupoints_n",
    "clupoints_n_1",
    "clupoints_n_1_template",
    "clusizes",
    "llengths",
    # Orchestration
    "ClugenOutput",
    "clugen",
    "clumerge",
]

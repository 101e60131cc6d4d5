"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import numpy as np
import pytest


SEEDS = [0, 123, 9999]


@pytest.fixture
def rng():
    """A reproducible NumPy random generator."""
    return np.random.default_rng(123)


@pytest.fixture(params=SEEDS)
def seeded_rng(request):
    """
    Random generators created from several seeds.

    Tests using this fixture run once per seed.
    """
    return np.random.default_rng(request.param)


@pytest.fixture
def clugen_args():
    """
    Valid mandatory arguments for clugen() in 3D.

    Returned as a dict so tests can override single entries.
    """
    return {
        "num_dims": 3,
        "num_clusters": 5,
        "num_points": 1000,
        "direction": [1, 0, 0],
        "angle_disp": np.pi / 64,
        "cluster_sep": [10, 10, 5],
        "llength": 5,
        "llength_disp": 0.5,
        "lateral_disp": 0.3,
    }

"""
Test suite for clugen.

This package contains all tests organized by component:
- test_algorithms/: Tests for vector utilities, strategies, corrections,
  the clugen() orchestrator and clumerge()
- test_utils/: Tests for logging configuration
"""

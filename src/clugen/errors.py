"""
Errors raised by clugen when its arguments are invalid.

Every error is a ``ValueError`` so callers that only care about bad input can
keep catching ``ValueError``.
"""


class ClugenError(ValueError):
    """Base class for invalid arguments given to clugen functions."""


class DimensionError(ClugenError):
    """A count is out of range or an array has the wrong length/shape."""


class DegeneracyError(ClugenError):
    """A direction vector has (near) zero magnitude."""


class CapacityError(ClugenError):
    """Not enough points to populate every cluster."""


class StrategyError(ClugenError):
    """A strategy parameter is neither a known tag nor a usable callable/array."""

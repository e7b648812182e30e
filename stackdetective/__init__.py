"""Incrementally grown, possibly asymmetric pairwise distance matrix."""

from stackdetective.distance import (
    DistanceRecord,
    InvalidDistanceError,
    absolute_difference,
    check_distance,
    forward_difference,
)
from stackdetective.matrix import (
    DistanceMatrix,
    MatrixArgumentError,
    MatrixConsistencyError,
    UnknownItemError,
)
from stackdetective.utils import setup_logging

__all__ = [
    "DistanceMatrix",
    "DistanceRecord",
    "InvalidDistanceError",
    "MatrixArgumentError",
    "MatrixConsistencyError",
    "UnknownItemError",
    "absolute_difference",
    "check_distance",
    "forward_difference",
    "setup_logging",
]

"""Directed distance records and the distance-function contract."""

from __future__ import annotations

import functools
import numbers
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any

DistanceFn = Callable[[Any, Any], int]


class InvalidDistanceError(ValueError):
    """Raised when a distance function returns something other than an int >= 0."""


@functools.total_ordering
@dataclass(frozen=True)
class DistanceRecord:
    """Distance measured from ``source`` to ``target``.

    Records sort by ``(value, rank)``.  ``rank`` is a tuple assigned by the
    owning matrix: ``(0,)`` for the self-record so it always comes first,
    ``(1, key)`` for every other target where ``key`` is the target's
    tie-break position.  Ranks are distinct among the records of one
    source, so over those records ``==`` holds exactly when the sort keys
    match and the ordering is total.
    """

    source: Hashable
    target: Hashable
    value: int
    rank: tuple = field(default=(), repr=False)

    @property
    def sort_key(self) -> tuple[int, tuple]:
        return (self.value, self.rank)

    def __lt__(self, other: DistanceRecord) -> bool:
        if not isinstance(other, DistanceRecord):
            return NotImplemented
        return self.sort_key < other.sort_key

    def as_tuple(self) -> tuple[Hashable, Hashable, int]:
        return (self.source, self.target, self.value)


def check_distance(value: Any, a: Any, b: Any) -> int:
    """Return *value* as an ``int`` if it is a non-negative integer.

    ``bool`` is rejected even though it is an ``Integral``; numpy integer
    scalars are accepted.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDistanceError(
            f"distance({a!r}, {b!r}) must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidDistanceError(f"distance({a!r}, {b!r}) must be >= 0, got {value}")
    return int(value)


def absolute_difference(a: int, b: int) -> int:
    """Symmetric distance: ``|a - b|``."""
    return abs(a - b)


def forward_difference(a: int, b: int) -> int:
    """Asymmetric distance: how far *a* lies above *b*, zero if ``b >= a``."""
    return max(0, a - b)

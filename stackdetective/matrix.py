"""Grow-only pairwise distance matrix, kept sorted by distance per item."""

from __future__ import annotations

import bisect
import logging
from collections.abc import Hashable, Iterable, Iterator, Sequence

import numpy as np
from tqdm import tqdm

from stackdetective.config import DEFAULTS, VALID_TIE_BREAKS
from stackdetective.distance import DistanceFn, DistanceRecord, check_distance

logger = logging.getLogger("stackdetective")

SELF_RANK = (0,)


class MatrixArgumentError(ValueError):
    """Raised when a matrix operation is called with invalid arguments."""


class UnknownItemError(MatrixArgumentError, LookupError):
    """Raised when an item that was never added is looked up."""

    def __init__(self, item: Hashable, role: str = "item") -> None:
        super().__init__(f"{role} {item!r} has not been added to the matrix")
        self.item = item


class MatrixConsistencyError(RuntimeError):
    """Raised when the matrix finds its own invariants broken."""


class DistanceMatrix:
    """Dynamic distance matrix that grows as items are added.

    Each item owns the records of the distances *from* it to every item
    added so far (itself included), kept sorted nearest first.  Distances
    are computed once, in both directions, when an item is added and are
    never recomputed, so the distance function may be asymmetric.

    Not thread-safe: build the matrix from a single thread and query it
    once the adds are done.
    """

    def __init__(
        self,
        distance_fn: DistanceFn,
        *,
        tie_break: str = DEFAULTS.tie_break,
        validate: bool = DEFAULTS.validate_distances,
    ) -> None:
        if tie_break not in VALID_TIE_BREAKS:
            raise MatrixArgumentError(
                f"tie_break must be one of {sorted(VALID_TIE_BREAKS)}, got '{tie_break}'"
            )
        self._distance_fn = distance_fn
        self._tie_break = tie_break
        self._validate = validate
        self._order: list[Hashable] = []
        self._sequence: dict[Hashable, int] = {}
        self._records: dict[Hashable, list[DistanceRecord]] = {}
        self._by_target: dict[Hashable, dict[Hashable, DistanceRecord]] = {}

    # ------------------------------------------------------------------ internals
    def _measure(self, a: Hashable, b: Hashable) -> int:
        value = self._distance_fn(a, b)
        if self._validate:
            return check_distance(value, a, b)
        return value

    def _rank(self, target: Hashable) -> tuple:
        if self._tie_break == "natural":
            return (1, target)
        return (1, self._sequence[target])

    def _require(self, item: Hashable, role: str = "item") -> None:
        if item not in self._records:
            raise UnknownItemError(item, role)

    # ------------------------------------------------------------------ api
    def add(self, item: Hashable) -> None:
        """Add *item*, measuring it against every item already present.

        Adding an item that is already present (or equal to one that is)
        does nothing.  All distances are computed before any state changes,
        so an exception from the distance function leaves the matrix as it
        was.
        """
        if item is None:
            raise MatrixArgumentError("cannot add None to the matrix")
        if item in self._records:
            logger.debug("Skipping %r: already in the matrix", item)
            return

        measured = [
            (other, self._measure(item, other), self._measure(other, item))
            for other in self._order
        ]

        # Work out every placement before touching state; a tie-break
        # comparison that fails must not leave a half-added item behind.
        self._sequence[item] = len(self._order)
        try:
            item_rank = self._rank(item)
            own = [DistanceRecord(item, item, 0, rank=SELF_RANK)]
            own.extend(
                DistanceRecord(item, other, forward, rank=self._rank(other))
                for other, forward, _ in measured
            )
            own.sort()
            placements = []
            for other, _, backward in measured:
                record = DistanceRecord(other, item, backward, rank=item_rank)
                placements.append(
                    (other, bisect.bisect_right(self._records[other], record), record)
                )
        except Exception:
            del self._sequence[item]
            raise

        for other, position, record in placements:
            self._records[other].insert(position, record)
            self._by_target[other][item] = record
        self._order.append(item)
        self._records[item] = own
        self._by_target[item] = {record.target: record for record in own}
        logger.debug("Added %r: %d distances computed", item, 2 * len(measured))

    def add_all(self, items: Iterable[Hashable], *, progress: bool = DEFAULTS.show_progress) -> int:
        """Add each of *items* in order; return how many were new."""
        before = len(self._order)
        seen = 0
        for item in tqdm(items, desc=DEFAULTS.progress_desc, disable=not progress):
            self.add(item)
            seen += 1
        added = len(self._order) - before
        logger.info("Added %d of %d items (%d in matrix)", added, seen, len(self._order))
        return added

    def get_distances_from(self, item: Hashable) -> list[DistanceRecord]:
        """Records from *item* to every item, nearest first, self-record leading."""
        self._require(item)
        return list(self._records[item])

    def nearest(self, item: Hashable, k: int | None = None) -> list[DistanceRecord]:
        """Like :meth:`get_distances_from` without the self-record, capped at *k*."""
        if k is not None and k < 0:
            raise MatrixArgumentError(f"k must be >= 0, got {k}")
        self._require(item)
        neighbours = self._records[item][1:]
        return neighbours if k is None else neighbours[:k]

    def get_distance_between(self, a: Hashable, b: Hashable) -> int:
        """Distance from *a* to *b*.

        Raises ``UnknownItemError`` if either was never added and
        ``MatrixConsistencyError`` if both are known but no record links them.
        """
        self._require(a, "a")
        self._require(b, "b")

        record = self._by_target[a].get(b)
        if record is None:
            raise MatrixConsistencyError(
                f"both {a!r} and {b!r} are in the matrix but no distance between them is recorded"
            )
        return record.value

    def items(self) -> list[Hashable]:
        return list(self._order)

    def to_array(self, items: Sequence[Hashable] | None = None) -> np.ndarray:
        """Dense ``int64`` matrix, ``out[i, j]`` = distance from ``items[i]`` to ``items[j]``.

        Rows and columns follow insertion order unless *items* is given.
        """
        if items is None:
            items = self._order
        for item in items:
            self._require(item)

        n = len(items)
        out = np.zeros((n, n), dtype=np.int64)
        for i, a in enumerate(items):
            for j, b in enumerate(items):
                out[i, j] = self.get_distance_between(a, b)
        return out

    def __contains__(self, item: object) -> bool:
        try:
            return item in self._records
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(items={len(self._order)}, tie_break={self._tie_break!r})"

"""Tests for stackdetective.distance — records and the distance contract."""

import numpy as np
import pytest

from stackdetective.distance import (
    DistanceRecord,
    InvalidDistanceError,
    absolute_difference,
    check_distance,
    forward_difference,
)


class TestDistanceRecord:
    def test_orders_by_value_first(self):
        near = DistanceRecord("a", "b", 1, rank=(1, 5))
        far = DistanceRecord("a", "c", 2, rank=(1, 0))
        assert near < far
        assert sorted([far, near]) == [near, far]

    def test_rank_breaks_ties(self):
        first = DistanceRecord("a", "b", 3, rank=(1, 0))
        second = DistanceRecord("a", "c", 3, rank=(1, 1))
        assert first < second
        assert not second < first

    def test_self_rank_sorts_before_other_targets(self):
        own = DistanceRecord("a", "a", 0, rank=(0,))
        other = DistanceRecord("a", "b", 0, rank=(1, 0))
        assert own < other

    def test_equality_includes_rank(self):
        assert DistanceRecord("a", "b", 3, rank=(1, 0)) == DistanceRecord("a", "b", 3, rank=(1, 0))
        assert DistanceRecord("a", "b", 3, rank=(1, 0)) != DistanceRecord("a", "b", 3, rank=(1, 9))
        assert DistanceRecord("a", "b", 3) != DistanceRecord("b", "a", 3)

    def test_equal_records_are_never_less_than_each_other(self):
        x = DistanceRecord("a", "b", 3, rank=(1, 0))
        y = DistanceRecord("a", "b", 3, rank=(1, 1))
        assert not (x == y and x < y)
        assert x < y
        assert not x < DistanceRecord("a", "b", 3, rank=(1, 0))

    def test_supports_all_rich_comparisons(self):
        near = DistanceRecord("a", "b", 1, rank=(1, 0))
        far = DistanceRecord("a", "c", 2, rank=(1, 1))
        assert near <= far
        assert far >= near
        assert far > near
        assert near <= near
        assert near >= near
        assert not far <= near

    def test_is_frozen(self):
        record = DistanceRecord("a", "b", 3)
        with pytest.raises(AttributeError):
            record.value = 4

    def test_is_hashable(self):
        records = {
            DistanceRecord("a", "b", 3, rank=(1, 0)),
            DistanceRecord("a", "b", 3, rank=(1, 0)),
            DistanceRecord("a", "c", 3, rank=(1, 1)),
        }
        assert len(records) == 2

    def test_as_tuple(self):
        assert DistanceRecord("x", "y", 7).as_tuple() == ("x", "y", 7)

    def test_repr_omits_rank(self):
        assert repr(DistanceRecord("x", "y", 7, rank=(1, 3))) == (
            "DistanceRecord(source='x', target='y', value=7)"
        )

    def test_comparison_with_other_types_is_unsupported(self):
        with pytest.raises(TypeError):
            DistanceRecord("x", "y", 7) < 3


class TestCheckDistance:
    def test_accepts_zero_and_positive_ints(self):
        assert check_distance(0, "a", "b") == 0
        assert check_distance(12, "a", "b") == 12

    def test_converts_numpy_integers(self):
        value = check_distance(np.int32(5), "a", "b")
        assert value == 5
        assert type(value) is int

    def test_rejects_negative(self):
        with pytest.raises(InvalidDistanceError, match=r"distance\('a', 'b'\) must be >= 0, got -1"):
            check_distance(-1, "a", "b")

    def test_rejects_float(self):
        with pytest.raises(InvalidDistanceError, match="must be an integer, got float"):
            check_distance(1.0, "a", "b")

    def test_rejects_bool(self):
        with pytest.raises(InvalidDistanceError, match="got bool"):
            check_distance(True, "a", "b")

    def test_rejects_none(self):
        with pytest.raises(InvalidDistanceError, match="got NoneType"):
            check_distance(None, "a", "b")

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            check_distance("3", "a", "b")


class TestReferenceDistances:
    def test_absolute_difference_is_symmetric(self):
        assert absolute_difference(5, 9) == 4
        assert absolute_difference(9, 5) == 4
        assert absolute_difference(3, 3) == 0

    def test_forward_difference_is_asymmetric(self):
        assert forward_difference(3, 7) == 0
        assert forward_difference(7, 3) == 4
        assert forward_difference(7, 7) == 0

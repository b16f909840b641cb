"""
Unit tests for the underbar array operations.
"""

import numpy as np
import pytest

from underbar.arrays import (
    difference,
    first,
    flatten,
    index_of,
    intersection,
    last,
    zip,
)
from underbar.utils.errors import UnderbarError, ZipArgumentError


class TestFirstAndLast:
    """Tests for first and last."""

    def test_first_element(self):
        """Test first without n."""
        assert first([1, 2, 3]) == 1

    def test_first_n(self):
        """Test taking several elements."""
        assert first([1, 2, 3], 2) == [1, 2]

    def test_first_n_exceeds_length(self):
        """Test n larger than the array."""
        assert first([1, 2, 3], 5) == [1, 2, 3]

    def test_first_non_positive_n(self):
        """Test that n <= 0 gives an empty list."""
        assert first([1, 2, 3], 0) == []
        assert first([1, 2, 3], -1) == []

    def test_first_empty(self):
        """Test first on an empty array."""
        assert first([]) is None

    def test_last_element(self):
        """Test last without n."""
        assert last([1, 2, 3]) == 3

    def test_last_n_keeps_order(self):
        """Test taking several elements from the end."""
        assert last([1, 2, 3], 2) == [2, 3]

    def test_last_n_exceeds_length(self):
        """Test n larger than the array."""
        assert last([1, 2, 3], 5) == [1, 2, 3]

    def test_last_non_positive_n(self):
        """Test that n <= 0 gives an empty list."""
        assert last([1, 2, 3], 0) == []
        assert last([1, 2, 3], -2) == []

    def test_last_empty(self):
        """Test last on an empty array."""
        assert last([]) is None

    def test_returns_new_list(self):
        """Test that slices are copies."""
        items = [1, 2]
        assert first(items, 2) is not items


class TestIndexOf:
    """Tests for index_of."""

    def test_found(self):
        """Test a present value."""
        assert index_of([10, 20, 30], 20) == 1

    def test_first_occurrence(self):
        """Test that the earliest index wins."""
        assert index_of([1, 2, 1], 1) == 0

    def test_missing(self):
        """Test an absent value."""
        assert index_of([1, 2, 3], 4) == -1

    def test_strict_equality(self):
        """Test that values of other types do not match."""
        assert index_of([0, False], False) == 1


class TestIntersection:
    """Tests for intersection."""

    def test_two_arrays(self):
        """Test basic intersection."""
        assert intersection([1, 2, 3], [2, 3, 4]) == [2, 3]

    def test_many_arrays(self):
        """Test values must appear in every array."""
        assert intersection([1, 2, 3, 4], [2, 3, 4], [3, 4, 5], [4, 3]) == [3, 4]

    def test_order_follows_first(self):
        """Test result order comes from the first array."""
        assert intersection(["c", "a", "b"], ["a", "b", "c"]) == ["c", "a", "b"]

    def test_duplicates_collapsed(self):
        """Test repeated values appear once."""
        assert intersection([1, 1, 2], [1, 2]) == [1, 2]

    def test_disjoint(self):
        """Test arrays with nothing in common."""
        assert intersection([1, 2], [3, 4]) == []


class TestDifference:
    """Tests for difference."""

    def test_basic(self):
        """Test removing one array's values."""
        assert difference([1, 2, 3], [2]) == [1, 3]

    def test_many_others(self):
        """Test removing values found in any other array."""
        assert difference([1, 2, 3, 4, 5], [5, 2, 10], [4]) == [1, 3]

    def test_duplicates_collapsed(self):
        """Test repeated values appear once."""
        assert difference([1, 1, 2, 3], [3]) == [1, 2]

    def test_no_others(self):
        """Test difference against nothing."""
        assert difference([2, 1, 2]) == [2, 1]


class TestZip:
    """Tests for zip."""

    def test_equal_lengths(self):
        """Test zipping arrays of the same length."""
        assert zip([1, 2], [3, 4], [5, 6]) == [[1, 3, 5], [2, 4, 6]]

    def test_pads_shorter_with_none(self):
        """Test that the longest array sets the length."""
        assert zip(["a", "b", "c"], [1]) == [["a", 1], ["b", None], ["c", None]]

    def test_no_arguments(self):
        """Test zip of nothing."""
        assert zip() == []

    def test_tuples_and_numpy(self):
        """Test other sequence types are accepted."""
        assert zip((1, 2), np.array([3, 4])) == [[1, 3], [2, 4]]

    def test_non_sequence_raises_type_error(self):
        """Test a scalar argument fails with a type error."""
        with pytest.raises(TypeError):
            zip([1, 2], 3)

    def test_error_carries_position(self):
        """Test the error names the offending argument."""
        with pytest.raises(ZipArgumentError) as excinfo:
            zip([1], [2], "abc")
        assert excinfo.value.position == 2
        assert isinstance(excinfo.value, UnderbarError)
        assert str(excinfo.value).startswith("[zip]")

    def test_mapping_rejected(self):
        """Test that dicts are not sequences."""
        with pytest.raises(ZipArgumentError):
            zip({"a": 1})


class TestFlatten:
    """Tests for flatten."""

    def test_deep(self):
        """Test flattening every level."""
        assert flatten([1, [2, [3, [4]]]]) == [1, 2, 3, 4]

    def test_shallow(self):
        """Test flattening one level."""
        assert flatten([1, [2, [3]]], True) == [1, 2, [3]]

    def test_order_preserved(self):
        """Test depth-first order."""
        assert flatten([[1, 2], 3, [[4], 5]]) == [1, 2, 3, 4, 5]

    def test_strings_kept_whole(self):
        """Test that strings are values, not sequences."""
        assert flatten([["ab"], "cd"]) == ["ab", "cd"]

    def test_tuples_flattened(self):
        """Test tuples count as nesting."""
        assert flatten([(1, (2,)), [3]]) == [1, 2, 3]

    def test_numpy_rows(self):
        """Test flattening a two-dimensional array."""
        assert flatten(np.array([[1, 2], [3, 4]])) == [1, 2, 3, 4]

    def test_empty(self):
        """Test flattening nothing."""
        assert flatten([]) == []
        assert flatten([[], [[]]]) == []

    def test_does_not_mutate(self):
        """Test nested inputs are left alone."""
        nested = [1, [2, [3]]]
        flatten(nested)
        assert nested == [1, [2, [3]]]

"""Tests for the occupancy matrix and the placement predicate."""

import pytest

from weekplan.engine.occupancy import OccupancyMatrix, SlotRange
from weekplan.engine.placement import can_place
from weekplan.models.constants import ROWS


class TestOccupancyMatrix:
    """Test range reads and writes on the matrix."""

    def test_grid_has_84_rows(self):
        """08:00-22:00 in 10-minute slots is 84 rows."""
        assert ROWS == 84
        assert OccupancyMatrix().rows == 84

    def test_empty_matrix_is_free(self):
        matrix = OccupancyMatrix()
        assert matrix.is_free(0, 0, ROWS) is True
        assert matrix.occupied() == set()

    def test_apply_sets_exact_range(self):
        """apply() fills exactly the requested run of slots."""
        matrix = OccupancyMatrix()
        matrix.apply(1, 12, 9, True)
        assert matrix.occupied() == {(1, s) for s in range(12, 21)}

        matrix.apply(1, 12, 9, False)
        assert matrix.occupied() == set()

    def test_apply_out_of_bounds_raises_without_partial_write(self):
        """An out-of-range apply leaves the matrix untouched."""
        matrix = OccupancyMatrix()
        with pytest.raises(ValueError):
            matrix.apply(0, ROWS - 2, 5, True)
        assert matrix.occupied() == set()

    @pytest.mark.parametrize("day,start,length", [
        (0, -1, 2),
        (0, ROWS - 1, 2),
        (7, 0, 1),
        (-1, 0, 1),
        (0, 0, 0),
    ])
    def test_out_of_bounds_is_never_free(self, day, start, length):
        assert OccupancyMatrix().is_free(day, start, length) is False

    def test_last_slot_fits(self):
        assert OccupancyMatrix().is_free(6, ROWS - 1, 1) is True

    def test_ignore_range_treats_own_footprint_as_free(self):
        matrix = OccupancyMatrix()
        matrix.apply(2, 10, 3, True)
        own = SlotRange.of(2, 10, 3)

        assert matrix.is_free(2, 11, 3) is False
        assert matrix.is_free(2, 11, 3, ignore=own) is True

    def test_ignore_range_on_other_day_has_no_effect(self):
        matrix = OccupancyMatrix()
        matrix.apply(2, 10, 3, True)
        assert matrix.is_free(2, 10, 3, ignore=SlotRange.of(3, 10, 3)) is False

    def test_clear(self):
        matrix = OccupancyMatrix()
        matrix.apply(0, 0, 5, True)
        matrix.apply(6, 80, 4, True)
        matrix.clear()
        assert matrix.occupied() == set()


class TestCanPlace:
    """Test the single overlap-prevention predicate."""

    def test_free_range_is_placeable(self):
        matrix = OccupancyMatrix()
        for day in range(7):
            assert can_place(matrix, day, 0, ROWS) is True

    def test_any_occupied_slot_rejects(self):
        matrix = OccupancyMatrix()
        matrix.apply(1, 12, 9, True)
        # Overlaps 15..17
        assert can_place(matrix, 1, 15, 3) is False
        # Touches only the last slot
        assert can_place(matrix, 1, 20, 2) is False
        # Adjacent ranges do not overlap
        assert can_place(matrix, 1, 21, 3) is True
        assert can_place(matrix, 1, 9, 3) is True

    def test_overlap_with_ignore_range_is_accepted(self):
        """A block may be validated against its own footprint."""
        matrix = OccupancyMatrix()
        matrix.apply(1, 12, 9, True)
        assert can_place(matrix, 1, 12, 9, SlotRange.of(1, 12, 9)) is True
        assert can_place(matrix, 1, 14, 9, SlotRange.of(1, 12, 9)) is True

    def test_ignore_range_does_not_hide_other_blocks(self):
        matrix = OccupancyMatrix()
        matrix.apply(0, 10, 2, True)
        matrix.apply(0, 13, 1, True)
        assert can_place(matrix, 0, 10, 5, SlotRange.of(0, 10, 2)) is False

    def test_non_integer_indices_rejected(self):
        matrix = OccupancyMatrix()
        assert can_place(matrix, 0, 1.5, 2) is False
        assert can_place(matrix, None, 0, 2) is False
        assert can_place(matrix, True, 0, 2) is False

"""Tests for grid geometry (pointer <-> slot indices)."""

from weekplan.engine.geometry import GridGeometry, LayoutMetrics, Rect, SlotCoordinate


class TestIndicesFromPoint:

    def test_cell_centre_maps_to_indices(self, geometry, cell_center):
        assert geometry.indices_from_point(*cell_center(0, 0)) == SlotCoordinate(day=0, slot=0)
        assert geometry.indices_from_point(*cell_center(6, 83)) == SlotCoordinate(day=6, slot=83)
        assert geometry.indices_from_point(*cell_center(2, 30)) == SlotCoordinate(day=2, slot=30)

    def test_time_column_is_not_interactive(self, geometry):
        assert geometry.indices_from_point(30, 50) is None

    def test_outside_grid_is_none(self, geometry):
        # Right of the last column
        assert geometry.indices_from_point(60 + 7 * 100 + 1, 50) is None
        # Below the last row
        assert geometry.indices_from_point(100, 84 * 10 + 1) is None
        # Above the grid
        assert geometry.indices_from_point(100, -1) is None

    def test_grid_origin_offset(self, layout):
        layout["metrics"] = LayoutMetrics(origin_x=200, origin_y=50, client_width=760, row_height=10)
        geometry = GridGeometry(lambda: layout["metrics"])
        assert geometry.indices_from_point(200 + 60 + 150, 50 + 25) == SlotCoordinate(day=1, slot=2)

    def test_recomputes_after_zoom(self, geometry, layout):
        """Row height changes between calls are honoured (no caching)."""
        assert geometry.indices_from_point(110, 95) == SlotCoordinate(day=0, slot=9)
        layout["metrics"] = LayoutMetrics(origin_x=0, origin_y=0, client_width=760, row_height=20)
        assert geometry.indices_from_point(110, 95) == SlotCoordinate(day=0, slot=4)

    def test_recomputes_after_width_change(self, geometry, layout):
        assert geometry.indices_from_point(60 + 250, 5).day == 2
        layout["metrics"] = LayoutMetrics(origin_x=0, origin_y=0, client_width=60 + 7 * 50, row_height=10)
        assert geometry.indices_from_point(60 + 250, 5).day == 5

    def test_not_laid_out_degrades_to_none(self):
        geometry = GridGeometry(lambda: None)
        assert geometry.indices_from_point(100, 100) is None
        assert geometry.block_rect(0, 0, 1) is None
        assert geometry.slots_from_pointer(0, 0, 100) is None

    def test_zero_size_grid_degrades_to_none(self):
        geometry = GridGeometry(lambda: LayoutMetrics(origin_x=0, origin_y=0, client_width=60, row_height=10))
        assert geometry.indices_from_point(100, 100) is None


class TestRects:

    def test_cell_rect(self, geometry):
        assert geometry.cell_rect(1, 12) == Rect(left=160, top=120, width=100, height=10)

    def test_block_rect_is_inset(self, geometry):
        assert geometry.block_rect(1, 12, 9) == Rect(left=162, top=122, width=96, height=86)

    def test_block_rect_follows_zoom(self, geometry, layout):
        layout["metrics"] = LayoutMetrics(origin_x=0, origin_y=0, client_width=760, row_height=28)
        assert geometry.block_rect(0, 1, 2) == Rect(left=62, top=30, width=96, height=52)


class TestSlotsFromPointer:

    def test_rounds_to_nearest_row(self, geometry):
        # Block at slot 10 has its top edge at y=102
        assert geometry.slots_from_pointer(0, 10, 152) == 5
        assert geometry.slots_from_pointer(0, 10, 148) == 5
        assert geometry.slots_from_pointer(0, 10, 146) == 4

    def test_minimum_one_slot(self, geometry):
        assert geometry.slots_from_pointer(0, 10, 90) == 1
        assert geometry.slots_from_pointer(0, 10, 102) == 1

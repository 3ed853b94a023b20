"""Tests for the forward projection and its depth edges."""

import random

import numpy as np
import pytest

from diedrico.levels import MAX_LEVELS, level_cells, level_resolution
from diedrico.projection import detect_edges, project, view_indices


def filled_flat(view):
    return [i for i, code in enumerate(view.cells.ravel()) if code]


class TestAxisMapping:
    def test_indices(self):
        index = view_indices(1, 0, 2, 4)
        assert index['front'] == (3, 1)
        assert index['top'] == (2, 1)
        assert index['side'] == (3, 1)


class TestSingleCell:
    def test_single_cube_fills_one_cell_per_view(self):
        views = project([(0, 0, 0, 1)], 2)
        assert filled_flat(views.front) == [(2 - 1 - 0) * 2 + 0]
        assert filled_flat(views.top) == [0]
        assert filled_flat(views.side) == [(2 - 1 - 0) * 2 + (2 - 1 - 0)]

    def test_single_cube_has_no_edges(self):
        views = project([(0, 0, 0, 1)], 2)
        for view in views:
            assert view.v.sum() == 0
            assert view.h.sum() == 0

    def test_filled_cells_are_full(self):
        views = project([(0, 0, 0, 13)], 2)
        assert set(views.front.cells.ravel()) == {0, 1}


class TestEdges:
    def test_equal_depth_gives_no_edge(self, bar_views):
        assert bar_views.front.cells[1, 0] == 1
        assert bar_views.front.cells[1, 1] == 1
        assert bar_views.front.v[1, 0] == 0
        assert bar_views.top.v[0, 0] == 0

    def test_depth_step_marks_vertical_edge(self):
        # x=0 sits at z=0, x=1 at z=1: a step seen from the front
        views = project([(0, 0, 0), (1, 0, 1)], 2)
        assert views.front.v[1, 0] == 1
        # Same two cells are x-depths 0 and 1 side by side in the side view
        assert views.side.v[1, 0] == 1
        assert views.top.v.sum() == 0
        assert views.top.h.sum() == 0

    def test_depth_step_marks_horizontal_edge(self):
        views = project([(0, 0, 0), (0, 1, 1)], 2)
        assert views.front.h[0, 0] == 1
        assert views.front.v.sum() == 0

    def test_depth_is_maximum_over_the_column(self):
        views = project([(0, 0, 0), (0, 0, 1), (1, 0, 1)], 2)
        # Both front cells reach z=1
        assert views.front.v[1, 0] == 0
        views = project([(0, 0, 0), (0, 0, 1), (1, 0, 0)], 2)
        assert views.front.v[1, 0] == 1

    def test_edges_only_between_filled_cells(self):
        filled = np.array([[True, False], [True, True]])
        depth = np.array([[0, -1], [3, 3]])
        v, h = detect_edges(filled, depth)
        assert v.tolist() == [[0], [0]]
        assert h.tolist() == [[1, 0]]

    @pytest.mark.parametrize('level', range(1, MAX_LEVELS + 1))
    def test_edge_law_for_levels(self, level):
        res = level_resolution(level)
        cells = level_cells(level)
        views = project(cells, res)
        depth = {'front': {}, 'top': {}, 'side': {}}
        axis = {'front': 2, 'top': 1, 'side': 0}
        for cell in cells:
            for name, (row, col) in view_indices(cell.x, cell.y, cell.z, res).items():
                key = (row, col)
                depth[name][key] = max(depth[name].get(key, -1), cell[axis[name]])
        for name, view in zip(views._fields, views):
            for r in range(res):
                for c in range(res - 1):
                    a, b = depth[name].get((r, c)), depth[name].get((r, c + 1))
                    expected = int(a is not None and b is not None and a != b)
                    assert view.v[r, c] == expected
            for r in range(res - 1):
                for c in range(res):
                    a, b = depth[name].get((r, c)), depth[name].get((r + 1, c))
                    expected = int(a is not None and b is not None and a != b)
                    assert view.h[r, c] == expected


class TestBounds:
    def test_out_of_range_cell_is_ignored(self):
        views = project([(2, 0, 0), (0, 2, 0), (0, 0, 2)], 2)
        for view in views:
            assert view.cells.sum() == 0

    def test_negative_cell_is_ignored(self):
        views = project([(-1, 0, 0)], 2)
        assert views == project([], 2)

    def test_out_of_range_does_not_disturb_others(self):
        assert project([(0, 0, 0), (5, 5, 5)], 2) == project([(0, 0, 0)], 2)


class TestPurity:
    def test_deterministic(self):
        cells = level_cells(22)
        assert project(cells, 6) == project(cells, 6)

    def test_order_independent(self):
        cells = level_cells(29)
        shuffled = list(cells)
        random.Random(7).shuffle(shuffled)
        assert project(shuffled, 6) == project(cells, 6)

    def test_duplicates_do_not_matter(self):
        cells = level_cells(6)
        assert project(cells + cells, 4) == project(cells, 4)

    def test_empty_input(self):
        views = project([], 3)
        assert views.resolution == 3
        assert all(view.cells.sum() == 0 for view in views)

"""Tests for visual-hull reconstruction."""

import pytest

from diedrico.levels import MAX_LEVELS, box_cells, level_cells, level_resolution
from diedrico.model import Cell, CellType, ViewCell
from diedrico.projection import project
from diedrico.reconstruction import reconstruct, remove_cells, support_mask


def coords(cells):
    return {tuple(cell[:3]) for cell in cells}


class TestHull:
    def test_single_cube_round_trip(self):
        views = project([(0, 0, 0, 1)], 2)
        assert reconstruct(*views, 2) == [(0, 0, 0, 1)]

    def test_bar_is_tight(self, bar_cells, bar_views):
        assert reconstruct(*bar_views, 2) == bar_cells

    @pytest.mark.parametrize('box', [
        (0, 0, 0, 4, 4, 4),
        (1, 0, 2, 2, 3, 1),
        (3, 3, 3, 1, 1, 1),
        (0, 1, 0, 4, 1, 2),
    ])
    def test_boxes_are_tight(self, box):
        cells = box_cells(*box)
        assert coords(reconstruct(*project(cells, 4), 4)) == coords(cells)

    @pytest.mark.parametrize('level', range(1, MAX_LEVELS + 1))
    def test_hull_contains_solid(self, level):
        res = level_resolution(level)
        cells = level_cells(level)
        assert coords(reconstruct(*project(cells, res), res)) >= coords(cells)

    def test_towers_in_one_front_column_stay_apart(self):
        tall = box_cells(0, 0, 0, 1, 3, 1)
        short = box_cells(0, 0, 2, 1, 1, 1)
        hull = reconstruct(*project(tall + short, 4), 4)
        assert coords(hull) == coords(tall + short)
        assert (0, 1, 2) not in coords(hull)

    def test_phantom_cells_are_kept(self):
        # Every view of this checkerboard is full, so the hull is the whole cube
        cells = [(0, 0, 0), (1, 1, 0), (1, 0, 1), (0, 1, 1)]
        hull = reconstruct(*project(cells, 2), 2)
        assert len(hull) == 8

    def test_output_order(self):
        hull = reconstruct(*project(box_cells(0, 0, 0, 2, 2, 2), 2), 2)
        assert [cell[:3] for cell in hull] == sorted(cell[:3] for cell in hull)

    def test_empty_views(self):
        assert reconstruct([0] * 4, [0] * 4, [0] * 4, 2) == []

    def test_deterministic(self):
        views = project(level_cells(25), 6)
        assert reconstruct(*views, 6) == reconstruct(*views, 6)


class TestTypePriority:
    def test_front_slope_beats_side_slope(self):
        assert reconstruct([ViewCell.BR], [1], [ViewCell.TR], 1) == [(0, 0, 0, 13)]

    def test_side_slope_when_front_is_full(self):
        assert reconstruct([1], [1], [4], 1) == [Cell(0, 0, 0, CellType.SIDE_TR)]

    def test_front_slope_alone(self):
        assert reconstruct([5], [1], [1], 1)[0].kind is CellType.FRONT_TL

    def test_top_slope_is_only_a_silhouette(self):
        assert reconstruct([1], [3], [1], 1) == [(0, 0, 0, 1)]

    def test_slopes_follow_their_view_cells(self):
        # Front view of R=2: row 0 is y=1, row 1 is y=0
        front = [0, 0, ViewCell.BL, 1]
        top = [1, 1, 0, 0]
        side = [0, 0, 0, 1]
        hull = reconstruct(front, top, side, 2)
        assert hull == [(0, 0, 0, 12), (1, 0, 0, 1)]


class TestEditing:
    def test_remove_cells(self):
        hull = reconstruct(*project(box_cells(0, 0, 0, 2, 1, 1), 2), 2)
        kept = remove_cells(hull, [(1, 0, 0, 1)])
        assert kept == [(0, 0, 0, 1)]

    def test_remove_cells_matches_coordinates(self):
        hull = [Cell(0, 0, 0, CellType.FRONT_BL), Cell(1, 0, 0, CellType.FULL)]
        assert remove_cells(hull, [(0, 0, 0)]) == [(1, 0, 0, 1)]
        assert remove_cells(hull, [(0, 0, 0, 1)]) == [(1, 0, 0, 1)]
        assert remove_cells(hull, [(0, 1, 0)]) == hull

    def test_support_mask(self):
        masks = support_mask([(1, 0, 0)], 2)
        assert masks['front'].tolist() == [[False, False], [False, True]]
        assert masks['top'].tolist() == [[False, True], [False, False]]
        assert masks['side'].tolist() == [[False, False], [False, True]]

    def test_support_mask_ignores_out_of_range(self):
        masks = support_mask([(4, 0, 0)], 2)
        assert not any(mask.any() for mask in masks.values())

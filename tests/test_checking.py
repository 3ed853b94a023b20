"""Tests for comparing drawn views with a level's solution."""

import pytest

from diedrico.checking import check_projections, check_view, view_mismatches
from diedrico.levels import level_cells, level_resolution
from diedrico.model import ViewCell, ViewState
from diedrico.projection import project


@pytest.fixture
def solution():
    return project(level_cells(2), level_resolution(2))


def test_identical_views_pass(solution):
    result = check_projections(solution, solution)
    assert result.success
    assert result.failed_views == []
    assert all(found.count == 0 for found in result.mismatches.values())


def test_cell_types_are_reduced_to_filled(solution):
    front = solution.front
    row, col = [int(i) for i in next(zip(*front.cells.nonzero()))]
    drawn = solution.replace('front', front.with_cell(row, col, ViewCell.TR))
    assert check_projections(drawn, solution).success


def test_missing_edge_fails(solution):
    # The step shows a depth change between its two columns seen from above
    top = solution.top
    assert top.v[0, 0] == 1 and top.v[1, 0] == 1
    drawn = solution.replace('top', top.toggle_edge('v', 0, 0))

    result = check_projections(drawn, solution)
    assert not result.success
    assert result.failed_views == ['top']
    assert result.mismatches['top'].v == [(0, 0)]
    assert result.mismatches['top'].cells == []


def test_extra_cell_is_reported():
    solution = ViewState(2, cells=[1, 0, 0, 0])
    drawn = solution.with_cell(1, 1, ViewCell.FULL)
    found = view_mismatches(drawn, solution)
    assert found.cells == [(1, 1)]
    assert found.count == 1
    assert not check_view(drawn, solution)


def test_extra_edge_is_reported():
    solution = ViewState(2, cells=[1, 1, 0, 0])
    drawn = solution.toggle_edge('h', 0, 1)
    found = view_mismatches(drawn, solution)
    assert found.h == [(0, 1)]
    assert not check_view(drawn, solution)


def test_resolution_mismatch():
    with pytest.raises(ValueError):
        view_mismatches(ViewState.empty(2), ViewState.empty(3))

"""Tests for the built-in level catalog."""

import pytest

from diedrico.levels import (
    MAX_LEVELS,
    UNKNOWN_NAME,
    box_cells,
    level_cells,
    level_name,
    level_resolution,
)
from diedrico.model import CellType


def test_every_level_has_a_name():
    names = [level_name(level) for level in range(1, MAX_LEVELS + 1)]
    assert UNKNOWN_NAME not in names
    assert level_name(1) == 'El Cubo'
    assert level_name(30) == 'El Núcleo'


def test_unknown_level():
    assert level_name(99) == UNKNOWN_NAME
    assert {c[:3] for c in level_cells(99)} == {c[:3] for c in level_cells(1)}


@pytest.mark.parametrize('level, resolution', [(1, 4), (19, 4), (20, 6), (30, 6)])
def test_resolution(level, resolution):
    assert level_resolution(level) == resolution


@pytest.mark.parametrize('level', range(1, MAX_LEVELS + 1))
def test_levels_fit_their_grid(level):
    res = level_resolution(level)
    cells = level_cells(level)
    assert cells
    for cell in cells:
        assert cell.kind is CellType.FULL
        assert all(0 <= v < res for v in cell[:3])


def test_box_cells():
    cells = box_cells(1, 2, 3, 2, 1, 2)
    assert cells == [(1, 2, 3, 1), (1, 2, 4, 1), (2, 2, 3, 1), (2, 2, 4, 1)]


def test_level_sizes():
    assert len(level_cells(1)) == 8
    assert len({c[:3] for c in level_cells(26)}) == 36 + 16 + 4

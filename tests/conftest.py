"""Shared fixtures for the diedrico test suite."""

import pytest

from diedrico.levels import box_cells
from diedrico.projection import project


@pytest.fixture
def bar_cells():
    """2 x 1 x 1 box along x at the origin."""
    return box_cells(0, 0, 0, 2, 1, 1)


@pytest.fixture
def bar_views(bar_cells):
    return project(bar_cells, 2)

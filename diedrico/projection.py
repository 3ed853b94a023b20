"""
Forward direction: 3D cell set -> front, top and side views

Each view marks an edge between two filled neighbours when the cells they
show sit at different depths, the hidden/visible step of a descriptive
geometry drawing.
"""

import logging

import numpy as np

from .model import Projections, ViewState

logger = logging.getLogger(__name__)

# Coordinate (0=x, 1=y, 2=z) each view measures depth along
DEPTH_AXIS = {
    'front': 2,
    'top': 1,
    'side': 0,
}


def view_indices(x, y, z, resolution):
    """
    Map cell coordinates to (row, col) in each view

    Works on scalars or numpy arrays alike.

    Args:
        x, y, z: Cell coordinates
        resolution: Grid size R

    Returns:
        dict view name -> (row, col)
    """
    last = resolution - 1
    return {
        'front': (last - y, x),
        'top': (z, x),
        'side': (last - y, last - z),
    }


def cell_coordinates(cells):
    """Return an (n, 3) int array of the x, y, z of each cell"""
    coords = np.array([(c[0], c[1], c[2]) for c in cells], dtype=np.int64)
    return coords.reshape(-1, 3)


def in_bounds(coords, resolution):
    """Boolean mask of rows of *coords* inside [0, resolution) on every axis"""
    return np.all((coords >= 0) & (coords < resolution), axis=1)


def detect_edges(filled, depth):
    """
    Mark depth discontinuities between adjacent filled cells

    Args:
        filled: Boolean R x R mask
        depth: R x R depth metric

    Returns:
        (v, h) int8 flag arrays of shapes R x (R-1) and (R-1) x R
    """
    v = filled[:, :-1] & filled[:, 1:] & (depth[:, :-1] != depth[:, 1:])
    h = filled[:-1, :] & filled[1:, :] & (depth[:-1, :] != depth[1:, :])
    return v.astype(np.int8), h.astype(np.int8)


def project(cells, resolution):
    """
    Project a 3D cell set onto its three canonical views

    Only coordinates matter here; every filled view cell is FULL. Cells with
    any coordinate outside [0, resolution) are left out of all three views.

    Args:
        cells: Iterable of (x, y, z[, type]) cells
        resolution: Grid size R

    Returns:
        Projections(front, top, side)
    """
    resolution = int(resolution)
    coords = cell_coordinates(cells)
    inside = in_bounds(coords, resolution)
    if not inside.all():
        logger.debug("Skipping %d out-of-range cells", int((~inside).sum()))
    coords = coords[inside]
    x, y, z = coords.T

    views = {}
    for name, (rows, cols) in view_indices(x, y, z, resolution).items():
        depth = np.full((resolution, resolution), -1, dtype=np.int64)
        # Deepest cell wins where several project to the same view cell
        np.maximum.at(depth, (rows, cols), coords[:, DEPTH_AXIS[name]])
        filled = depth >= 0
        v, h = detect_edges(filled, depth)
        views[name] = ViewState(resolution, filled.astype(np.int8), v, h)

    return Projections(**views)

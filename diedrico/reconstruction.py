"""
Inverse direction: front, top and side views -> 3D cell set

A location is kept when all three silhouettes cover it (the visual hull).
Three silhouettes rarely pin down one solid, so the result is the largest
solid consistent with the views and may include phantom cells; removing
them is left to the user.
"""

import logging

import numpy as np

from .model import FRONT_OFFSET, SIDE_OFFSET, Cell, CellType, ViewCell
from .projection import cell_coordinates, in_bounds, view_indices

logger = logging.getLogger(__name__)


def typed_grid(view, resolution):
    """Return the R x R type codes of a ViewState or any array-like grid"""
    cells = getattr(view, 'cells', view)
    return np.asarray(cells, dtype=np.int64).reshape(resolution, resolution)


def reconstruct(front, top, side, resolution):
    """
    Intersect three view silhouettes into a 3D cell set

    Type priority for each kept location: a front-view slope gives a
    front wedge, otherwise a side-view slope gives a side wedge, otherwise
    a full cube. A front slope always beats a side slope.

    Args:
        front, top, side: ViewStates or typed grids of R*R codes
        resolution: Grid size R

    Returns:
        List of Cell ordered by x, then y, then z
    """
    resolution = int(resolution)
    front_codes = typed_grid(front, resolution)
    top_codes = typed_grid(top, resolution)
    side_codes = typed_grid(side, resolution)

    x, y, z = np.indices((resolution,) * 3)
    index = view_indices(x, y, z, resolution)
    f = front_codes[index['front']]
    t = top_codes[index['top']]
    s = side_codes[index['side']]

    hull = (f > 0) & (t > 0) & (s > 0)
    kinds = np.where(
        f >= ViewCell.BL,
        FRONT_OFFSET + f,
        np.where(s >= ViewCell.BL, SIDE_OFFSET + s, CellType.FULL),
    )

    cells = [
        Cell(int(cx), int(cy), int(cz), CellType(int(kinds[cx, cy, cz])))
        for cx, cy, cz in np.argwhere(hull)
    ]
    logger.debug("Reconstructed %d cells at resolution %d", len(cells), resolution)
    return cells


def _coordinates(cell):
    return tuple(int(v) for v in cell[:3])


def remove_cells(cells, removed):
    """
    Drop user-deleted cells from a reconstruction

    Args:
        cells: Reconstructed cells
        removed: Cells or (x, y, z) coordinates to drop; only the
            coordinates are compared, so a deletion outlives a type change

    Returns:
        List of the remaining cells, in input order
    """
    removed = {_coordinates(cell) for cell in removed}
    return [cell for cell in cells if _coordinates(cell) not in removed]


def support_mask(cells, resolution):
    """
    Which view cells are covered by at least one cell of the solid

    A filled view cell with no support means the edited views ask for
    something the current solid no longer shows.

    Returns:
        dict view name -> boolean R x R mask
    """
    resolution = int(resolution)
    coords = cell_coordinates(cells)
    coords = coords[in_bounds(coords, resolution)]
    x, y, z = coords.T

    masks = {}
    for name, (rows, cols) in view_indices(x, y, z, resolution).items():
        mask = np.zeros((resolution, resolution), dtype=bool)
        mask[rows, cols] = True
        masks[name] = mask
    return masks

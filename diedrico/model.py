"""
Data model shared by the projection, reconstruction and surface engines

A 3D solid is a list of unit cells. A 2D view is a ViewState: a square grid
of typed cells plus two arrays of edge flags. All values are immutable
snapshots; every edit returns a new object.
"""

from enum import IntEnum
from typing import NamedTuple

import numpy as np


class ViewCell(IntEnum):
    """Type of a single 2D view cell"""
    EMPTY = 0
    FULL = 1
    # Half-square triangles, named after the corner holding the right angle
    BL = 2
    BR = 3
    TR = 4
    TL = 5

    @property
    def is_slope(self):
        return self >= ViewCell.BL


SLOPES = (ViewCell.BL, ViewCell.BR, ViewCell.TR, ViewCell.TL)

FRONT_OFFSET = 10
SIDE_OFFSET = 20


class CellType(IntEnum):
    """
    Shape of a 3D cell

    Values are the legacy integer codes: 1 is a full cube, 10+k a wedge
    sloped in the front view and 20+k a wedge sloped in the side view,
    with k the ViewCell orientation of the slope.
    """
    FULL = 1
    FRONT_BL = FRONT_OFFSET + ViewCell.BL
    FRONT_BR = FRONT_OFFSET + ViewCell.BR
    FRONT_TR = FRONT_OFFSET + ViewCell.TR
    FRONT_TL = FRONT_OFFSET + ViewCell.TL
    SIDE_BL = SIDE_OFFSET + ViewCell.BL
    SIDE_BR = SIDE_OFFSET + ViewCell.BR
    SIDE_TR = SIDE_OFFSET + ViewCell.TR
    SIDE_TL = SIDE_OFFSET + ViewCell.TL

    @property
    def axis(self):
        """'front', 'side' or None for a full cube"""
        if self is CellType.FULL:
            return None
        return 'front' if self < SIDE_OFFSET else 'side'

    @property
    def orientation(self):
        """ViewCell slope orientation, or None for a full cube"""
        if self is CellType.FULL:
            return None
        return ViewCell(self.value % 10)

    @classmethod
    def slope(cls, axis, orientation):
        """Build the wedge type sloped in *axis* ('front' or 'side')"""
        orientation = ViewCell(orientation)
        if not orientation.is_slope:
            raise ValueError(f"Not a slope orientation: {orientation!r}")
        if axis == 'front':
            return cls(FRONT_OFFSET + orientation)
        if axis == 'side':
            return cls(SIDE_OFFSET + orientation)
        raise ValueError(f"Unknown slope axis: {axis!r}")

    @classmethod
    def from_code(cls, code, default=None):
        """Look up a legacy code, returning *default* when it is not known"""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return default


class Cell(NamedTuple):
    """Unit cell of a 3D solid"""
    x: int
    y: int
    z: int
    kind: int = CellType.FULL


def as_cell(item):
    """
    Normalize a 3- or 4-item sequence into a Cell

    Known type codes become CellType members; unknown codes are kept as
    plain ints so callers can apply their own fallback.
    """
    if isinstance(item, Cell):
        return item
    if len(item) == 3:
        x, y, z = item
        kind = CellType.FULL
    else:
        x, y, z, kind = item
        kind = CellType.from_code(kind, default=int(kind))
    return Cell(int(x), int(y), int(z), kind)


def _frozen_grid(values, shape, name, max_value):
    if values is None:
        grid = np.zeros(shape, dtype=np.int8)
    else:
        grid = np.array(values, dtype=np.int8)
        if grid.size != shape[0] * shape[1]:
            raise ValueError(
                f"{name} has {grid.size} entries, expected {shape[0] * shape[1]}"
            )
        grid = grid.reshape(shape)
        if grid.size and (grid.min() < 0 or grid.max() > max_value):
            raise ValueError(f"{name} values must lie in [0, {max_value}]")
    grid.flags.writeable = False
    return grid


class ViewState:
    """
    One 2D view: typed cells plus vertical and horizontal edge flags

    Arrays are row-major so the flat indices r*R+c (cells), r*(R-1)+c (v)
    and r*R+c (h) address the same entries as the 2D [r, c] indices.

    Args:
        resolution: Grid size R
        cells: R*R ViewCell codes (flat or R x R), default all empty
        v: R*(R-1) flags between horizontally adjacent cells
        h: (R-1)*R flags between vertically adjacent cells
    """

    __slots__ = ('resolution', 'cells', 'v', 'h')

    def __init__(self, resolution, cells=None, v=None, h=None):
        resolution = int(resolution)
        if resolution < 1:
            raise ValueError(f"Resolution must be positive, got {resolution}")
        self.resolution = resolution
        self.cells = _frozen_grid(cells, (resolution, resolution), 'cells', ViewCell.TL)
        self.v = _frozen_grid(v, (resolution, resolution - 1), 'v', 1)
        self.h = _frozen_grid(h, (resolution - 1, resolution), 'h', 1)

    @classmethod
    def empty(cls, resolution):
        return cls(resolution)

    @classmethod
    def from_dict(cls, data, resolution=None):
        """
        Build a view from the flat-list layout {'cells': [...], 'v': [...], 'h': [...]}

        The resolution is inferred from the cell count when not given.
        """
        cells = data['cells']
        if resolution is None:
            resolution = int(round(np.sqrt(len(cells))))
        return cls(resolution, cells, data.get('v'), data.get('h'))

    def to_dict(self):
        return {
            'cells': self.cells.ravel().tolist(),
            'v': self.v.ravel().tolist(),
            'h': self.h.ravel().tolist(),
        }

    @property
    def filled(self):
        """Boolean R x R mask of non-empty cells"""
        return self.cells > 0

    def _updated(self, cells=None, v=None, h=None):
        return ViewState(
            self.resolution,
            self.cells if cells is None else cells,
            self.v if v is None else v,
            self.h if h is None else h,
        )

    def with_cell(self, row, col, code):
        """Return a copy with cell (row, col) set to *code*"""
        cells = self.cells.copy()
        cells[row, col] = ViewCell(code)
        return self._updated(cells=cells)

    def cycle_cell(self, row, col, tool='block'):
        """
        Return a copy with cell (row, col) advanced by an editing tool

        The 'block' tool toggles between empty and full. The 'slope' tool
        turns any non-slope cell into BL and cycles BL -> BR -> TR -> TL -> BL.
        """
        current = int(self.cells[row, col])
        if tool == 'block':
            following = ViewCell.FULL if current == ViewCell.EMPTY else ViewCell.EMPTY
        elif tool == 'slope':
            if current < ViewCell.BL or current == ViewCell.TL:
                following = ViewCell.BL
            else:
                following = current + 1
        else:
            raise ValueError(f"Unknown tool: {tool!r}")
        return self.with_cell(row, col, following)

    def toggle_edge(self, kind, row, col):
        """Return a copy with one 'v' or 'h' edge flag flipped"""
        if kind not in ('v', 'h'):
            raise ValueError(f"Edge kind must be 'v' or 'h', got {kind!r}")
        flags = getattr(self, kind).copy()
        flags[row, col] = 1 - flags[row, col]
        return self._updated(**{kind: flags})

    def __eq__(self, other):
        if not isinstance(other, ViewState):
            return NotImplemented
        return (
            self.resolution == other.resolution
            and np.array_equal(self.cells, other.cells)
            and np.array_equal(self.v, other.v)
            and np.array_equal(self.h, other.h)
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"ViewState(resolution={self.resolution}, "
            f"filled={int(self.filled.sum())}, "
            f"v={int(self.v.sum())}, h={int(self.h.sum())})"
        )


class Projections(NamedTuple):
    """The three canonical views of a solid, in reconstruct() argument order"""
    front: ViewState
    top: ViewState
    side: ViewState

    @classmethod
    def empty(cls, resolution):
        return cls(*(ViewState.empty(resolution) for _ in range(3)))

    @property
    def resolution(self):
        return self.front.resolution

    def replace(self, name, view):
        """Return a copy with view *name* replaced"""
        if view.resolution != self.resolution:
            raise ValueError(
                f"View resolution {view.resolution} does not match {self.resolution}"
            )
        return self._replace(**{name: view})

    def to_dict(self):
        return {name: getattr(self, name).to_dict() for name in self._fields}

    @classmethod
    def from_dict(cls, data, resolution=None):
        return cls(*(ViewState.from_dict(data[name], resolution) for name in cls._fields))

"""
Synthesis mode state: three edited views, a resolution and deleted cells

A session never changes in place. Every edit returns a new session, and
the derived solid and surface are recomputed from scratch on request.
"""

import logging

from .config import DEFAULT_RESOLUTION
from .model import Projections
from .reconstruction import reconstruct, remove_cells, support_mask
from .surface import build

logger = logging.getLogger(__name__)


class SynthesisSession:
    """
    Args:
        resolution: Grid size R (default 4)
        views: Projections edited by the user, default all empty
        removed: Cells deleted from the reconstruction
    """

    def __init__(self, resolution=DEFAULT_RESOLUTION, views=None, removed=()):
        self.resolution = int(resolution)
        self.views = views if views is not None else Projections.empty(self.resolution)
        if self.views.resolution != self.resolution:
            raise ValueError(
                f"Views have resolution {self.views.resolution}, expected {self.resolution}"
            )
        self.removed = frozenset(tuple(int(v) for v in cell[:3]) for cell in removed)

    def _with(self, views=None, removed=None):
        return SynthesisSession(
            self.resolution,
            self.views if views is None else views,
            self.removed if removed is None else removed,
        )

    def edit_cell(self, view, row, col, tool='block'):
        """Apply an editing tool to one cell of *view* ('front', 'top' or 'side')"""
        edited = getattr(self.views, view).cycle_cell(row, col, tool)
        return self._with(views=self.views.replace(view, edited))

    def set_cell(self, view, row, col, code):
        edited = getattr(self.views, view).with_cell(row, col, code)
        return self._with(views=self.views.replace(view, edited))

    def toggle_edge(self, view, kind, row, col):
        edited = getattr(self.views, view).toggle_edge(kind, row, col)
        return self._with(views=self.views.replace(view, edited))

    def remove_cell(self, cell):
        """Delete the reconstructed cell at (x, y, z), typically a phantom"""
        return self._with(removed=self.removed | {tuple(int(v) for v in cell[:3])})

    def resize(self, resolution):
        """Start over at another resolution; views and deletions are rebuilt together"""
        logger.debug("Resizing session %d -> %d", self.resolution, resolution)
        return SynthesisSession(resolution)

    def reset(self):
        return SynthesisSession(self.resolution)

    def raw_cells(self):
        """Visual hull of the current views"""
        return reconstruct(*self.views, self.resolution)

    def cells(self):
        """Visual hull minus the deleted cells"""
        return remove_cells(self.raw_cells(), self.removed)

    def support(self):
        """Per view, which cells are still shown by the remaining solid"""
        return support_mask(self.cells(), self.resolution)

    def unsupported(self):
        """Per view, filled cells that the remaining solid no longer shows"""
        masks = self.support()
        return {
            name: getattr(self.views, name).filled & ~masks[name]
            for name in self.views._fields
        }

    def surface(self, **kwargs):
        return build(self.cells(), self.resolution, **kwargs)

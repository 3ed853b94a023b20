"""
diedrico - three-view (orthographic) geometry engine

Project a solid of unit cells onto its front, top and side views,
rebuild a solid from three views, and build a colored surface for display.
"""

from .model import Cell, CellType, Projections, ViewCell, ViewState
from .projection import project
from .reconstruction import reconstruct, remove_cells, support_mask
from .surface import Surface, build
from .checking import check_projections, check_view
from .session import SynthesisSession

__version__ = '1.0.0'

__all__ = [
    'Cell',
    'CellType',
    'Projections',
    'ViewCell',
    'ViewState',
    'project',
    'reconstruct',
    'remove_cells',
    'support_mask',
    'Surface',
    'build',
    'check_projections',
    'check_view',
    'SynthesisSession',
]

"""
Default parameters for the diedrico engine and exporters

Every value here can be overridden per call with a keyword argument
(and most of them from the command line).
"""

import os


# World size of one cell edge (used by the surface builder)
UNIT_SIZE = float(os.environ.get('DIEDRICO_UNIT_SIZE', 15))

# Resolution used when nothing else says otherwise
DEFAULT_RESOLUTION = 4

# Minimum angle (degrees) between two face normals for a wireframe edge
EDGE_ANGLE = 1.0

# A normal component above this magnitude picks the face color.
# Slope faces have their dominant component at ~0.707
NORMAL_THRESHOLD = 0.5

PALETTE = {
    'background': '#E0E7FF',
    'grid_background': '#FFFFFF',
    'stroke': '#000000',
    'accent': '#8B5CF6',

    'top': '#A3E635',     # lime
    'front': '#F472B6',   # pink
    'right': '#38BDF8',   # sky blue
    'left': '#FB923C',    # orange
    'back': '#4F46E5',    # indigo
    'bottom': '#059669',  # emerald

    'success': '#22C55E',
    'error': '#EF4444',
}

VIEW_NAMES = ('front', 'top', 'side')

VIEW_TITLES = {
    'front': 'ALZADO (Frente)',
    'top': 'PLANTA (Arriba)',
    'side': 'PERFIL (Derecho)',
}

# Palette entry used to tint each view in exported drawings
VIEW_COLORS = {
    'front': 'front',
    'top': 'top',
    'side': 'right',
}

PROGRESS_PREFIX = 'DIEDRICO-LAB-V1_'
DEFAULT_STUDENT = 'Anonimo'


def hex_to_rgb(value):
    """
    Convert a '#RRGGBB' string to a float RGB tuple in [0, 1]

    Args:
        value: Hex color string, with or without the leading '#'

    Returns:
        (r, g, b) tuple of floats
    """
    value = value.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    return tuple(int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))

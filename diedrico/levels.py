"""
Built-in exercise catalog

Each level is a union of axis-aligned boxes of full cubes. Levels 1-19
use a 4 x 4 x 4 grid, levels 20 and up a 6 x 6 x 6 grid.
"""

from .model import Cell, CellType

MAX_LEVELS = 30
LARGE_LEVEL = 20

UNKNOWN_NAME = 'Pieza Desconocida'

LEVEL_NAMES = {
    1: 'El Cubo',
    2: 'El Escalón',
    3: 'Gusano',
    4: 'Pilar',
    5: 'Mesa',
    6: 'Muesca',
    7: 'Pozo',
    8: 'Escalera',
    9: 'Arco',
    10: 'Cruz 3D',
    11: 'Puente',
    12: 'Ventana',
    13: 'Cruz',
    14: 'Doble Bloque',
    15: 'Autovía',
    16: 'Intersección',
    17: 'La Escalera',
    18: 'Escenario',
    19: 'La Serpiente',
    20: 'La U',
    21: 'Escaleras Gemelas',
    22: 'Cuatro Pilares',
    23: 'La Cruz',
    24: 'La Muralla',
    25: 'El Bosque',
    26: 'Gran Pirámide',
    27: 'La Rampa',
    28: 'Cubo Hueco',
    29: 'La Espiral',
    30: 'El Núcleo',
}

# Boxes as (x, y, z, width, height, depth)
DEFAULT_BOXES = ((0, 0, 0, 2, 2, 2),)

LEVEL_BOXES = {
    1: ((0, 0, 0, 2, 2, 2),),
    2: ((0, 0, 0, 2, 1, 2), (0, 1, 0, 1, 1, 2)),
    3: ((0, 0, 0, 1, 1, 1), (1, 0, 0, 1, 1, 1), (1, 1, 0, 1, 1, 1), (2, 1, 0, 1, 1, 1)),
    4: ((1, 0, 1, 1, 4, 1), (2, 0, 1, 1, 4, 1), (1, 1, 1, 2, 1, 1), (1, 3, 1, 2, 1, 1),
        (1, 0, 2, 1, 2, 1), (2, 0, 2, 1, 2, 1)),
    5: ((1, 0, 1, 1, 4, 1), (2, 0, 1, 1, 4, 1), (1, 2, 1, 2, 1, 1), (1, 0, 2, 1, 2, 1),
        (2, 0, 2, 1, 2, 1)),
    6: ((0, 0, 0, 2, 1, 2), (0, 1, 0, 1, 1, 2), (0, 0, 0, 2, 2, 1)),
    7: ((0, 0, 0, 3, 2, 1), (0, 0, 2, 3, 2, 1), (0, 0, 1, 1, 2, 1), (2, 0, 1, 1, 2, 1)),
    8: ((2, 0, 0, 1, 1, 2), (1, 0, 0, 1, 2, 2), (0, 0, 0, 1, 3, 2)),
    9: ((0, 0, 0, 1, 4, 2), (3, 0, 0, 1, 4, 2), (0, 3, 0, 4, 1, 2)),
    10: ((1, 0, 1, 2, 4, 2), (0, 2, 1, 4, 1, 2)),
    11: ((0, 0, 1, 1, 2, 2), (3, 0, 1, 1, 2, 2), (0, 2, 1, 4, 1, 2)),
    12: ((0, 0, 1, 4, 1, 1), (0, 3, 1, 4, 1, 1), (0, 1, 1, 1, 2, 1), (3, 1, 1, 1, 2, 1)),
    13: ((1, 0, 1, 2, 4, 1), (0, 1, 1, 4, 2, 1)),
    14: ((1, 0, 0, 2, 2, 1), (1, 2, 1, 2, 2, 1)),
    15: ((0, 0, 1, 1, 2, 1), (3, 0, 1, 1, 2, 1), (0, 2, 0, 4, 1, 3)),
    16: ((0, 1, 1, 4, 1, 2), (1, 1, 0, 2, 1, 4)),
    17: ((0, 0, 0, 4, 1, 4), (0, 1, 1, 4, 1, 3), (0, 2, 2, 4, 1, 2), (0, 3, 3, 4, 1, 1)),
    18: ((0, 0, 0, 4, 1, 3), (0, 1, 0, 4, 3, 1)),
    19: ((0, 0, 0, 1, 1, 1), (1, 0, 0, 1, 1, 1), (1, 1, 0, 1, 1, 1), (1, 1, 1, 1, 1, 1),
         (2, 1, 1, 1, 1, 1), (2, 2, 1, 1, 1, 1), (2, 2, 0, 1, 1, 1)),
    20: ((0, 0, 0, 6, 1, 2), (0, 1, 0, 1, 2, 2), (5, 1, 0, 1, 2, 2)),
    21: tuple(box for i in range(6) for box in ((0, i, i, 2, 1, 1), (4, i, i, 2, 1, 1))),
    22: ((0, 0, 0, 6, 1, 6), (1, 1, 1, 1, 3, 1), (4, 1, 4, 1, 3, 1), (1, 1, 4, 1, 3, 1),
         (4, 1, 1, 1, 3, 1)),
    23: ((2, 0, 2, 2, 6, 2), (0, 3, 2, 2, 1, 2), (4, 3, 2, 2, 1, 2)),
    24: ((0, 0, 0, 6, 2, 2), (1, 2, 0, 1, 1, 2), (3, 2, 0, 1, 1, 2), (5, 2, 0, 1, 1, 2)),
    25: ((0, 0, 0, 1, 6, 1), (2, 0, 1, 1, 4, 1), (5, 0, 2, 1, 3, 1), (1, 0, 3, 1, 5, 1),
         (4, 0, 5, 1, 2, 1)),
    26: ((0, 0, 0, 6, 1, 6), (1, 1, 1, 4, 1, 4), (2, 2, 2, 2, 1, 2)),
    27: ((0, 0, 0, 6, 1, 1), (0, 1, 1, 5, 1, 1), (0, 2, 2, 4, 1, 1), (0, 3, 3, 3, 1, 1),
         (0, 4, 4, 2, 1, 1), (0, 5, 5, 1, 1, 1)),
    28: ((0, 0, 0, 6, 1, 1), (0, 0, 0, 1, 6, 1), (0, 0, 0, 1, 1, 6), (5, 0, 0, 1, 6, 1),
         (0, 5, 0, 6, 1, 1), (0, 0, 5, 1, 6, 1)),
    29: ((0, 0, 0, 2, 1, 2), (2, 1, 0, 2, 1, 2), (4, 2, 0, 2, 1, 2), (4, 3, 2, 2, 1, 2),
         (2, 4, 2, 2, 1, 2), (0, 4, 4, 2, 1, 2)),
    30: ((0, 0, 0, 6, 1, 6), (0, 5, 0, 6, 1, 6), (0, 1, 0, 1, 4, 1), (5, 1, 0, 1, 4, 1),
         (0, 1, 5, 1, 4, 1), (5, 1, 5, 1, 4, 1), (2, 2, 2, 2, 2, 2)),
}


def level_resolution(level):
    return 6 if level >= LARGE_LEVEL else 4


def level_name(level):
    return LEVEL_NAMES.get(level, UNKNOWN_NAME)


def box_cells(x, y, z, width=1, height=1, depth=1):
    """Full cubes filling an axis-aligned box"""
    return [
        Cell(x + i, y + j, z + k, CellType.FULL)
        for i in range(width)
        for j in range(height)
        for k in range(depth)
    ]


def level_cells(level):
    """
    Ground-truth solid of a level

    Overlapping boxes are kept as they are listed, so a cube can appear
    more than once; projection does not care. Unknown levels give the
    2 x 2 x 2 cube.
    """
    cells = []
    for box in LEVEL_BOXES.get(level, DEFAULT_BOXES):
        cells.extend(box_cells(*box))
    return cells

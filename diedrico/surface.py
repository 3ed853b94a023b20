"""
3D cell set -> flat-shaded, per-face colored triangle surface

Every cell is built from its own triangles and nothing is merged, so each
face keeps one flat normal and one color. The six colors map onto the
three views: top/bottom belong to the top view, front/back to the front
view and right/left to the side view.
"""

import logging
from functools import lru_cache

import numpy as np
import trimesh

from .config import EDGE_ANGLE, NORMAL_THRESHOLD, PALETTE, UNIT_SIZE, hex_to_rgb
from .model import CellType, ViewCell

logger = logging.getLogger(__name__)

# Unit-square triangles, in the order the vertices are used to build a wedge
WEDGE_FOOTPRINTS = {
    ViewCell.BL: ((0, 0), (1, 0), (0, 1)),
    ViewCell.BR: ((0, 0), (1, 0), (1, 1)),
    ViewCell.TR: ((1, 0), (1, 1), (0, 1)),
    ViewCell.TL: ((0, 0), (1, 1), (0, 1)),
}

# Color name per normal direction, highest priority first
FACE_DIRECTIONS = (
    ('top', 1, 1.0),
    ('bottom', 1, -1.0),
    ('front', 2, 1.0),
    ('back', 2, -1.0),
    ('right', 0, 1.0),
    ('left', 0, -1.0),
)


def _quad(a, b, c, d):
    return [(a, b, c), (a, c, d)]


def _readonly(triangles):
    array = np.array(triangles, dtype=np.float64)
    array.flags.writeable = False
    return array


@lru_cache(maxsize=None)
def cube_triangles():
    """
    Unit cube centered on the origin as 12 independent triangles

    Returns:
        (12, 3, 3) read-only array, counter-clockwise seen from outside
    """
    triangles = []
    for axis in range(3):
        for sign in (1.0, -1.0):
            normal = np.zeros(3)
            normal[axis] = sign
            u = np.zeros(3)
            u[(axis + 1) % 3] = 1.0
            w = np.zeros(3)
            w[(axis + 2) % 3] = 1.0
            if sign < 0:
                u, w = w, u
            center = normal * 0.5
            triangles += _quad(
                center - 0.5 * u - 0.5 * w,
                center + 0.5 * u - 0.5 * w,
                center + 0.5 * u + 0.5 * w,
                center - 0.5 * u + 0.5 * w,
            )
    return _readonly(triangles)


def _lift(point, depth, axis):
    p0, p1 = point
    if axis == 'front':
        return (p0 - 0.5, p1 - 0.5, depth - 0.5)
    # Side view looks at the solid from +x, mirrored left-right
    return (depth - 0.5, p1 - 0.5, 0.5 - p0)


@lru_cache(maxsize=None)
def wedge_triangles(orientation, axis):
    """
    Right triangular prism filling half of a unit cell

    Args:
        orientation: ViewCell slope (BL, BR, TR or TL) giving the footprint
        axis: 'front' extrudes along z, 'side' extrudes along x

    Returns:
        (8, 3, 3) read-only array: two caps and three rectangular sides
    """
    if axis not in ('front', 'side'):
        raise ValueError(f"Unknown wedge axis: {axis!r}")
    footprint = WEDGE_FOOTPRINTS[ViewCell(orientation)]
    a0, b0, c0 = (_lift(p, 0, axis) for p in footprint)
    a1, b1, c1 = (_lift(p, 1, axis) for p in footprint)

    triangles = [(a0, c0, b0), (a1, b1, c1)]
    triangles += _quad(a0, b0, b1, a1)
    triangles += _quad(b0, c0, c1, b1)
    triangles += _quad(c0, a0, a1, c1)
    return _readonly(triangles)


def cell_triangles(kind):
    """Local geometry for a cell type code; unknown codes give a cube"""
    kind = CellType.from_code(kind, default=CellType.FULL)
    if kind.axis is None:
        return cube_triangles()
    return wedge_triangles(kind.orientation, kind.axis)


class MeshBuilder:
    """Arena collecting placed triangles before they become a Surface"""

    def __init__(self, unit_size=UNIT_SIZE):
        self.unit_size = float(unit_size)
        self._chunks = []

    def add(self, triangles, offset=(0.0, 0.0, 0.0)):
        """Scale unit-frame triangles by the unit size and move them to *offset*"""
        self._chunks.append(np.asarray(triangles) * self.unit_size + np.asarray(offset))

    def __len__(self):
        return sum(len(chunk) for chunk in self._chunks)

    def triangles(self):
        if not self._chunks:
            return np.zeros((0, 3, 3))
        return np.concatenate(self._chunks)


def face_normals(triangles):
    """Unit normal of each (a, b, c) triangle following its winding"""
    a, b, c = triangles[:, 0], triangles[:, 1], triangles[:, 2]
    normals = np.cross(b - a, c - a)
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    return normals / np.where(lengths > 0, lengths, 1.0)


def normal_colors(normals, palette=None, threshold=NORMAL_THRESHOLD):
    """
    Pick one of six palette colors for each normal

    Vertical beats depth, which beats lateral. Normals with no component
    above *threshold* fall back to the front color.

    Returns:
        (n, 3) float RGB array
    """
    palette = palette or PALETTE
    conditions = [sign * normals[:, axis] > threshold for _, axis, sign in FACE_DIRECTIONS]
    choice = np.select(conditions, list(range(len(FACE_DIRECTIONS))), default=2)
    table = np.array([hex_to_rgb(palette[name]) for name, _, _ in FACE_DIRECTIONS])
    return table[choice]


def feature_edges(triangles, angle=EDGE_ANGLE):
    """
    Wireframe segments of a triangle soup

    Computed on a position-merged copy: edges whose two faces bend by more
    than *angle* degrees, open edges, and edges shared by more than two
    faces (where cells touch) unless all of those faces are parallel.

    Returns:
        (m, 2, 3) array of segment end points
    """
    if len(triangles) == 0:
        return np.zeros((0, 2, 3))
    merged = trimesh.Trimesh(
        vertices=triangles.reshape(-1, 3),
        faces=np.arange(len(triangles) * 3).reshape(-1, 3),
        process=True,
    )
    limit = np.cos(np.radians(angle))
    normals = merged.face_normals

    edges = [np.sort(
        merged.face_adjacency_edges[merged.face_adjacency_angles > np.radians(angle)],
        axis=1,
    )]
    for group in trimesh.grouping.group_rows(merged.edges_sorted):
        if len(group) == 2:
            continue
        if len(group) > 2:
            faces = merged.edges_face[group]
            bends = np.abs(normals[faces] @ normals[faces[0]])
            if bends.min() >= limit:
                continue
        edges.append(merged.edges_sorted[group[:1]])

    edges = np.unique(np.vstack(edges).reshape(-1, 2), axis=0)
    return merged.vertices[edges]


class Surface:
    """
    Renderable result of build()

    Attributes:
        triangles: (n, 3, 3) triangle corners in world units
        face_normals: (n, 3) flat normal per triangle
        positions: (3n, 3) vertex positions, three per triangle
        normals: (3n, 3) per-vertex normals (the flat triangle normal)
        colors: (3n, 3) per-vertex float RGB
        edges: (m, 2, 3) wireframe segments in the same frame
    """

    def __init__(self, triangles, palette=None, edge_angle=EDGE_ANGLE):
        self.triangles = np.asarray(triangles, dtype=np.float64)
        self.face_normals = face_normals(self.triangles)
        self.positions = self.triangles.reshape(-1, 3)
        self.normals = np.repeat(self.face_normals, 3, axis=0)
        self.colors = normal_colors(self.normals, palette)
        self.edges = feature_edges(self.triangles, edge_angle)

    @property
    def triangle_count(self):
        return len(self.triangles)

    @property
    def bounds(self):
        return np.array([self.positions.min(axis=0), self.positions.max(axis=0)])

    def to_trimesh(self):
        """Unmerged trimesh.Trimesh carrying the flat normals and vertex colors"""
        return trimesh.Trimesh(
            vertices=self.positions,
            faces=np.arange(len(self.positions)).reshape(-1, 3),
            face_normals=self.face_normals,
            vertex_colors=np.round(self.colors * 255).astype(np.uint8),
            process=False,
        )

    def edge_path(self):
        """Wireframe overlay as a trimesh Path3D"""
        return trimesh.load_path(self.edges)

    def export(self, output_path, file_type=None):
        """
        Write the colored surface with trimesh

        Args:
            output_path: Destination (.glb, .ply, .stl, .obj, ...)
            file_type: Force a format instead of using the suffix
        """
        mesh = self.to_trimesh()
        mesh.export(str(output_path), file_type=file_type)
        print(f"[+] Saved surface: {output_path}")
        print(f"  Triangles: {self.triangle_count}")
        print(f"  Edges: {len(self.edges)}")


def build(cells, resolution, unit_size=UNIT_SIZE, palette=None, edge_angle=EDGE_ANGLE):
    """
    Build the colored surface of a cell set

    Each cell is generated in a unit frame around its own center, scaled to
    *unit_size* and moved so the whole R x R x R grid is centered at the
    world origin.

    Args:
        cells: Iterable of (x, y, z[, type]) cells
        resolution: Grid size R
        unit_size: World length of one cell edge
        palette: Color mapping overriding config.PALETTE
        edge_angle: Minimum bend (degrees) for a wireframe edge

    Returns:
        Surface, or None when there are no cells
    """
    cells = list(cells)
    if not cells:
        return None

    builder = MeshBuilder(unit_size)
    center = resolution * builder.unit_size / 2.0 - builder.unit_size / 2.0
    for cell in cells:
        kind = cell[3] if len(cell) > 3 else CellType.FULL
        offset = np.array(cell[:3], dtype=np.float64) * builder.unit_size - center
        builder.add(cell_triangles(kind), offset)

    logger.debug("Built %d triangles for %d cells", len(builder), len(cells))
    return Surface(builder.triangles(), palette=palette, edge_angle=edge_angle)

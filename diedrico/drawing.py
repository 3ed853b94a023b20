"""
Export the three views as a technical drawing sheet

Each view is drawn on its own square grid: filled cells (half squares for
slopes), the silhouette outline, and the depth edges as heavy lines.
Supports SVG (svgwrite), PNG (Pillow) and DXF (ezdxf).
"""

import logging
from pathlib import Path

import numpy as np

from .config import PALETTE, VIEW_COLORS, VIEW_TITLES
from .errors import ExportError
from .model import ViewCell

logger = logging.getLogger(__name__)

# Classic layout: front top-left, side top-right, top below the front view
DEFAULT_VIEWS = ('front', 'side', 'top')

# Corners of each half-square in cell units, y pointing up
HALF_SQUARES = {
    ViewCell.BL: ((0, 0), (1, 0), (0, 1)),
    ViewCell.BR: ((0, 0), (1, 0), (1, 1)),
    ViewCell.TR: ((1, 0), (1, 1), (0, 1)),
    ViewCell.TL: ((0, 0), (1, 1), (0, 1)),
}

FORMATS = ('svg', 'png', 'dxf')


def grid_layout(num_views):
    """Columns and rows of the sheet grid for *num_views* views"""
    if num_views <= 2:
        return num_views, 1
    if num_views <= 4:
        return 2, (num_views + 1) // 2
    return 3, (num_views + 2) // 3


def view_geometry(view):
    """
    Drawing primitives of a view in cell units (x right, y down)

    Args:
        view: ViewState

    Returns:
        dict with
            'cells': list of (code, polygon) for filled cells
            'outline': segments between filled cells and empty space
            'edges': segments for the marked v/h edge flags
            'grid': segments of the full cell grid
    """
    res = view.resolution
    filled = np.pad(view.filled, 1)

    cells = []
    for row, col in np.argwhere(view.filled):
        code = ViewCell(int(view.cells[row, col]))
        if code.is_slope:
            polygon = [(col + px, row + 1 - py) for px, py in HALF_SQUARES[code]]
        else:
            polygon = [(col, row), (col + 1, row), (col + 1, row + 1), (col, row + 1)]
        cells.append((code, polygon))

    outline = []
    for row in range(res + 1):
        for col in range(res):
            # Horizontal boundary above grid row `row`
            if filled[row, col + 1] != filled[row + 1, col + 1]:
                outline.append(((col, row), (col + 1, row)))
    for row in range(res):
        for col in range(res + 1):
            if filled[row + 1, col] != filled[row + 1, col + 1]:
                outline.append(((col, row), (col, row + 1)))

    edges = [((c + 1, r), (c + 1, r + 1)) for r, c in np.argwhere(view.v)]
    edges += [((c, r + 1), (c + 1, r + 1)) for r, c in np.argwhere(view.h)]

    grid = [((0, i), (res, i)) for i in range(res + 1)]
    grid += [((i, 0), (i, res)) for i in range(res + 1)]

    return {'cells': cells, 'outline': outline, 'edges': edges, 'grid': grid}


def _sheet_views(projections, views):
    missing = [v for v in views if v not in projections._fields]
    if missing:
        raise ExportError(f"Unknown views: {', '.join(missing)}")
    return [(name, getattr(projections, name)) for name in views]


def export_to_svg(projections, output_path, views=DEFAULT_VIEWS, title=None, cell_size=10.0):
    """
    Export views to SVG

    Args:
        projections: Projections to draw
        output_path: Output file path
        views: View names, in sheet order
        title: Optional sheet title
        cell_size: Size of one grid cell in mm
    """
    try:
        import svgwrite
    except ImportError:
        raise ExportError("svgwrite not installed. Install with: pip install svgwrite")

    sheet = _sheet_views(projections, views)
    res = projections.resolution
    grid_cols, grid_rows = grid_layout(len(sheet))
    spacing = res * cell_size * 1.5
    header = spacing * 0.25 if title else 0.0
    width = spacing * grid_cols
    height = spacing * grid_rows + header
    margin = (spacing - res * cell_size) / 2

    dwg = svgwrite.Drawing(str(output_path), size=(f'{width}mm', f'{height}mm'),
                           viewBox=f'0 0 {width} {height}')
    dwg.add(dwg.rect(insert=(0, 0), size=(width, height), fill=PALETTE['grid_background']))
    if title:
        dwg.add(dwg.text(title, insert=(width / 2, header * 0.6), text_anchor='middle',
                         font_size=header * 0.4, font_family='Arial'))

    for idx, (name, view) in enumerate(sheet):
        print(f"  Generating {name} view...")
        geometry = view_geometry(view)
        col = idx % grid_cols
        row = idx // grid_cols
        ox = col * spacing + margin
        oy = header + row * spacing + margin * 0.6

        def to_sheet(point):
            return (ox + point[0] * cell_size, oy + point[1] * cell_size)

        group = dwg.g(id=f'{name}_view')
        fill = PALETTE[VIEW_COLORS[name]]
        for _, polygon in geometry['cells']:
            group.add(dwg.polygon([to_sheet(p) for p in polygon], fill=fill,
                                  stroke=PALETTE['stroke'], stroke_width=0.2))
        for start, end in geometry['grid']:
            group.add(dwg.line(to_sheet(start), to_sheet(end), stroke='#BBBBBB',
                               stroke_width=0.15, stroke_dasharray='1,1'))
        for start, end in geometry['outline']:
            group.add(dwg.line(to_sheet(start), to_sheet(end), stroke=PALETTE['stroke'],
                               stroke_width=0.5))
        for start, end in geometry['edges']:
            group.add(dwg.line(to_sheet(start), to_sheet(end), stroke=PALETTE['stroke'],
                               stroke_width=1.0))

        group.add(dwg.text(VIEW_TITLES.get(name, name.upper()),
                           insert=(ox, oy + res * cell_size + cell_size * 0.8),
                           font_size=cell_size * 0.5, font_family='Arial'))
        dwg.add(group)

    dwg.save()
    print(f"[+] Saved SVG: {output_path}")


def _load_font(size):
    from PIL import ImageFont

    for name in ('arial.ttf', 'Arial.ttf', 'DejaVuSans.ttf'):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _draw_dashed_line(draw, start, end, color, width, dash_len=None, gap_len=None):
    """Draw a dashed line between two points"""
    x1, y1 = start
    x2, y2 = end
    dx = x2 - x1
    dy = y2 - y1
    length = np.sqrt(dx ** 2 + dy ** 2)
    if length < 0.001:
        return
    dx /= length
    dy /= length

    if dash_len is None:
        dash_len = width * 4
    if gap_len is None:
        gap_len = width * 2

    current_pos = 0
    while current_pos < length:
        dash_end_pos = min(current_pos + dash_len, length)
        draw.line([(x1 + dx * current_pos, y1 + dy * current_pos),
                   (x1 + dx * dash_end_pos, y1 + dy * dash_end_pos)],
                  fill=color, width=width)
        current_pos += dash_len + gap_len


def export_to_png(projections, output_path, views=DEFAULT_VIEWS, title=None,
                  resolution=(1600, 1600), line_width=3):
    """
    Export views to PNG

    Args:
        projections: Projections to draw
        output_path: Output file path
        views: View names, in sheet order
        title: Optional sheet title
        resolution: Output image size (width, height)
        line_width: Edge line thickness in pixels
    """
    try:
        from PIL import Image, ImageDraw
    except ImportError:
        raise ExportError("Pillow not installed. Install with: pip install Pillow")

    sheet = _sheet_views(projections, views)
    res = projections.resolution

    # 2x supersampling, downsampled at the end
    supersample = 2
    work_res = (resolution[0] * supersample, resolution[1] * supersample)
    img = Image.new('RGB', work_res, PALETTE['grid_background'])
    draw = ImageDraw.Draw(img)

    top_margin = int(work_res[1] * 0.08) if title else int(work_res[1] * 0.03)
    if title:
        title_font = _load_font(int(work_res[1] * 0.035))
        draw.text((work_res[0] // 2, int(work_res[1] * 0.04)), title,
                  fill='black', font=title_font, anchor='mm')

    grid_cols, grid_rows = grid_layout(len(sheet))
    cell_width = work_res[0] // grid_cols
    cell_height = (work_res[1] - top_margin) // grid_rows
    usable = min(cell_width, cell_height) * 0.7
    cell_px = usable / res
    adjusted_line_width = line_width * supersample
    label_font = _load_font(int(cell_height * 0.05))

    for idx, (name, view) in enumerate(sheet):
        print(f"  Generating {name} view...")
        geometry = view_geometry(view)
        col = idx % grid_cols
        row = idx // grid_cols
        ox = col * cell_width + (cell_width - usable) / 2
        oy = top_margin + row * cell_height + (cell_height - usable) / 2

        def to_image(point):
            return (ox + point[0] * cell_px, oy + point[1] * cell_px)

        fill = PALETTE[VIEW_COLORS[name]]
        for _, polygon in geometry['cells']:
            draw.polygon([to_image(p) for p in polygon], fill=fill, outline='black')
        for start, end in geometry['grid']:
            _draw_dashed_line(draw, to_image(start), to_image(end), color='#BBBBBB',
                              width=max(1, adjusted_line_width // 3))
        for start, end in geometry['outline']:
            draw.line([to_image(start), to_image(end)], fill='black',
                      width=max(1, adjusted_line_width // 2))
        for start, end in geometry['edges']:
            draw.line([to_image(start), to_image(end)], fill='black',
                      width=adjusted_line_width * 2)

        draw.text((ox + usable / 2, oy + usable + cell_height * 0.06),
                  VIEW_TITLES.get(name, name.upper()), fill='black',
                  font=label_font, anchor='mm')

    img = img.resize(resolution, Image.LANCZOS)
    img.save(str(output_path))
    print(f"[+] Saved PNG: {output_path}")
    print(f"  Resolution: {resolution[0]}x{resolution[1]}")


def export_to_dxf(projections, output_path, views=DEFAULT_VIEWS, title=None, cell_size=10.0):
    """
    Export views to DXF (R2000) with one layer per kind of line

    Layers: GRID, FILL (cell polygons), OUTLINE (silhouette), EDGES
    (depth edges) and TEXT.

    Args:
        projections: Projections to draw
        output_path: Output file path
        views: View names, in sheet order
        title: Optional sheet title
        cell_size: Size of one grid cell in drawing units (mm)
    """
    try:
        import ezdxf
        from ezdxf import units
    except ImportError:
        raise ExportError("ezdxf not installed. Install with: pip install ezdxf")

    sheet = _sheet_views(projections, views)
    res = projections.resolution

    doc = ezdxf.new('R2000')
    doc.units = units.MM
    msp = doc.modelspace()
    for layer_name in ('GRID', 'FILL', 'OUTLINE', 'EDGES', 'TEXT'):
        if layer_name not in doc.layers:
            doc.layers.new(name=layer_name)

    grid_cols, _ = grid_layout(len(sheet))
    spacing = res * cell_size * 1.5

    for idx, (name, view) in enumerate(sheet):
        print(f"  Generating {name} view (DXF)...")
        geometry = view_geometry(view)
        col = idx % grid_cols
        row = idx // grid_cols
        ox = col * spacing
        oy = -row * spacing

        # DXF y points up, view rows point down
        def to_dxf(point):
            return (ox + point[0] * cell_size, oy - point[1] * cell_size)

        for start, end in geometry['grid']:
            msp.add_line(to_dxf(start), to_dxf(end), dxfattribs={'layer': 'GRID'})
        for _, polygon in geometry['cells']:
            msp.add_lwpolyline([to_dxf(p) for p in polygon], close=True,
                               dxfattribs={'layer': 'FILL'})
        for start, end in geometry['outline']:
            msp.add_line(to_dxf(start), to_dxf(end), dxfattribs={'layer': 'OUTLINE'})
        for start, end in geometry['edges']:
            msp.add_line(to_dxf(start), to_dxf(end), dxfattribs={'layer': 'EDGES'})

        label = msp.add_text(VIEW_TITLES.get(name, name.upper()),
                             dxfattribs={'layer': 'TEXT', 'height': cell_size * 0.4})
        label.set_placement(to_dxf((0, res + 0.8)))

    if title:
        heading = msp.add_text(title, dxfattribs={'layer': 'TEXT', 'height': cell_size * 0.6})
        heading.set_placement((0, spacing * 0.3))

    extent_x = grid_cols * spacing
    extent_y = -((len(sheet) - 1) // grid_cols + 1) * spacing
    doc.header['$EXTMIN'] = (-cell_size, extent_y, 0.0)
    doc.header['$EXTMAX'] = (extent_x, spacing * 0.5, 0.0)

    auditor = doc.audit()
    if auditor.has_errors:
        print(f"  Warning: DXF has {len(auditor.errors)} errors")

    doc.saveas(str(output_path))
    print(f"[+] Saved DXF (R2000): {output_path}")


EXPORTERS = {
    'svg': export_to_svg,
    'png': export_to_png,
    'dxf': export_to_dxf,
}


def export_drawing(projections, output_path, output_format=None, **kwargs):
    """
    Export views with the exporter matching *output_format* (or the file suffix)

    Raises:
        ExportError: Unsupported format
    """
    fmt = (output_format or Path(output_path).suffix.lstrip('.')).lower()
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise ExportError(
            f"Unsupported drawing format: {fmt!r} (supported: {', '.join(FORMATS)})"
        )
    logger.debug("Exporting %s drawing to %s", fmt, output_path)
    exporter(projections, output_path, **kwargs)

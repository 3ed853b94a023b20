"""
Three-view converter: solids of unit cells to drawings and surfaces

Command line front end for the projection, reconstruction and surface
engines. Supports drawing output (SVG, PNG, DXF) and surface output
(GLB, PLY, STL, OBJ).
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from . import levels
from .check_dxf import check_file, print_report
from .config import UNIT_SIZE
from .drawing import DEFAULT_VIEWS, export_drawing
from .errors import DiedricoError
from .logging_config import setup_logging
from .model import Projections, as_cell
from .progress import decode_progress, encode_progress
from .projection import project
from .reconstruction import reconstruct
from .surface import build

DRAWING_FORMATS = ('svg', 'png', 'dxf')
SURFACE_FORMATS = ('glb', 'ply', 'stl', 'obj')


class ViewConverter:
    """Convert a cell solid to its three views, drawings and surface"""

    def __init__(self, cells, resolution, name='solid', unit_size=UNIT_SIZE):
        """
        Args:
            cells: Iterable of (x, y, z[, type]) cells
            resolution: Grid size R
            name: Label used for titles and default output names
            unit_size: World size of one cell for surface output
        """
        self.cells = [as_cell(c) for c in cells]
        self.resolution = int(resolution)
        self.name = name
        self.unit_size = unit_size
        self._cpu_start = time.process_time()
        self._projections = None
        self._surface = None

    @classmethod
    def from_level(cls, level, **kwargs):
        resolution = levels.level_resolution(level)
        name = f"{level:02d} {levels.level_name(level)}"
        return cls(levels.level_cells(level), resolution, name=name, **kwargs)

    @classmethod
    def from_views(cls, projections, name='synthesis', **kwargs):
        """Start from three drawn views; the solid is their visual hull"""
        cells = reconstruct(*projections, projections.resolution)
        return cls(cells, projections.resolution, name=name, **kwargs)

    @property
    def projections(self):
        if self._projections is None:
            self._projections = project(self.cells, self.resolution)
        return self._projections

    def get_projection(self, view='front'):
        """
        Args:
            view: 'front', 'top' or 'side'

        Returns:
            ViewState of that view
        """
        return getattr(self.projections, view)

    @property
    def surface(self):
        if self._surface is None:
            self._surface = build(self.cells, self.resolution, unit_size=self.unit_size)
        return self._surface

    def hull(self):
        """Visual hull of this solid's own views"""
        return reconstruct(*self.projections, self.resolution)

    def convert(self, output_format='svg', output_path=None, views=DEFAULT_VIEWS):
        """
        Write the views or the surface to a file

        Args:
            output_format: 'svg', 'png', 'dxf', 'glb', 'ply', 'stl' or 'obj'
            output_path: Custom output path (optional)
            views: Views to include in a drawing

        Returns:
            Path of the written file
        """
        fmt = output_format.lower()
        if fmt not in DRAWING_FORMATS + SURFACE_FORMATS:
            raise DiedricoError(
                f"Unsupported format: {output_format} "
                f"(supported: {', '.join(DRAWING_FORMATS + SURFACE_FORMATS)})"
            )
        if output_path is None:
            stem = self.name.lower().replace(' ', '_')
            output_path = Path(f"{stem}.{fmt}")

        convert_start = time.time()
        print(f"\nConverting {self.name} to {fmt.upper()}...")

        proj_start = time.time()
        projections = self.projections
        proj_time = time.time() - proj_start

        export_start = time.time()
        if fmt in DRAWING_FORMATS:
            export_drawing(projections, output_path, fmt, views=views, title=self.name)
        else:
            surface = self.surface
            if surface is None:
                raise DiedricoError("Nothing to export: the solid has no cells")
            surface.export(output_path, file_type=fmt)
        export_time = time.time() - export_start

        total_time = time.time() - convert_start
        cpu_time = time.process_time() - self._cpu_start
        self._print_summary(projections, proj_time, export_time, total_time, cpu_time,
                            Path(output_path))
        return Path(output_path)

    def _print_summary(self, projections, proj_time, export_time, total_time, cpu_time,
                       output_file):
        file_size = output_file.stat().st_size if output_file.exists() else 0
        unique_cells = {c[:3] for c in self.cells}
        hull = self.hull()
        phantoms = len(hull) - len(unique_cells)

        print(f"\n{'=' * 55}")
        print("  PERFORMANCE")
        print(f"{'=' * 55}")
        print(f"  Projection Time     : {proj_time:.3f}s")
        print(f"  Export Time         : {export_time:.3f}s")
        print(f"  Total Time          : {total_time:.3f}s")
        print(f"  CPU Time            : {cpu_time:.3f}s")
        if file_size > 0:
            print(f"  Output File Size    : {file_size / 1024:.2f} KB")
        print(f"{'=' * 55}")
        print("  SOLID")
        print(f"{'=' * 55}")
        print(f"  Resolution          : {self.resolution}")
        print(f"  Cells               : {len(unique_cells)}")
        for name in projections._fields:
            view = getattr(projections, name)
            print(f"  {name.capitalize():<6} view         : {int(view.filled.sum())} cells, "
                  f"{int(view.v.sum() + view.h.sum())} edges")
        print(f"  Visual hull         : {len(hull)} cells ({phantoms} phantom)")
        print(f"{'=' * 55}")


def load_views(path):
    """
    Read three views from JSON

    Expected layout: {"resolution": R, "front": {"cells": [...], "v": [...],
    "h": [...]}, "top": {...}, "side": {...}}; edge lists are optional.

    Raises:
        DiedricoError: The file is not valid JSON or the views are malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return Projections.from_dict(data, data.get('resolution'))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DiedricoError(f"Invalid views file {path}: {e!r}") from e


def _cmd_levels(args):
    for level in range(1, levels.MAX_LEVELS + 1):
        cells = {c[:3] for c in levels.level_cells(level)}
        print(f"  {level:2d}  {levels.level_name(level):<20} "
              f"R={levels.level_resolution(level)}  cells={len(cells)}")


def _cmd_project(args):
    converter = ViewConverter.from_level(args.level, unit_size=args.unit_size)
    converter.convert(output_format=args.format, output_path=args.output, views=args.views)


def _cmd_reconstruct(args):
    if not Path(args.input).exists():
        print(f"[!] Error: File not found: {args.input}")
        sys.exit(1)
    projections = load_views(args.input)
    converter = ViewConverter.from_views(projections, name=Path(args.input).stem,
                                         unit_size=args.unit_size)
    output = args.output or Path(args.input).with_suffix(f'.{args.format}')
    converter.convert(output_format=args.format, output_path=output, views=args.views)


def _cmd_progress(args):
    print(encode_progress(args.name, args.completed))


def _cmd_verify(args):
    progress = decode_progress(args.code)
    print(f"[+] Student  : {progress.name}")
    print(f"  Completed  : {len(progress.completed)} levels {progress.completed}")
    print(f"  Date       : {progress.date}")


def _cmd_check_dxf(args):
    if not Path(args.input).exists():
        print(f"[!] Error: File not found: {args.input}")
        sys.exit(1)
    report = check_file(args.input)
    print_report(args.input, report)
    if not report.ok:
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='diedrico',
        description='Project unit-cell solids to three views and back',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  diedrico levels
  diedrico project 7 -f svg -o pozo.svg
  diedrico project 26 -f glb
  diedrico reconstruct views.json -f stl
  diedrico progress Ana 1 2 3
  diedrico verify DIEDRICO-LAB-V1_...
        """
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-file', help='Also write logs to this file')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('levels', help='List the built-in levels').set_defaults(func=_cmd_levels)

    output_formats = DRAWING_FORMATS + SURFACE_FORMATS
    for name, helptext, func in (
        ('project', 'Draw the views of a level', _cmd_project),
        ('reconstruct', 'Rebuild a solid from three views in a JSON file', _cmd_reconstruct),
    ):
        cmd = sub.add_parser(name, help=helptext)
        if name == 'project':
            cmd.add_argument('level', type=int, help=f'Level number (1-{levels.MAX_LEVELS})')
        else:
            cmd.add_argument('input', help='JSON file with front, top and side views')
        cmd.add_argument('-f', '--format', default='svg', choices=output_formats,
                         help='Output format (default: svg)')
        cmd.add_argument('-o', '--output', help='Output file path')
        cmd.add_argument('-v', '--views', nargs='+', default=list(DEFAULT_VIEWS),
                         choices=['front', 'top', 'side'],
                         help='Views to include in a drawing (default: front side top)')
        cmd.add_argument('--unit-size', type=float, default=UNIT_SIZE,
                         help=f'Cell size for surface output (default: {UNIT_SIZE:g})')
        cmd.set_defaults(func=func)

    cmd = sub.add_parser('progress', help='Create a progress code')
    cmd.add_argument('name', help='Student name')
    cmd.add_argument('completed', nargs='*', type=int, help='Completed levels')
    cmd.set_defaults(func=_cmd_progress)

    cmd = sub.add_parser('verify', help='Read a progress code')
    cmd.add_argument('code', help='Progress code')
    cmd.set_defaults(func=_cmd_verify)

    cmd = sub.add_parser('check-dxf', help='Inspect an exported DXF drawing')
    cmd.add_argument('input', help='DXF file')
    cmd.set_defaults(func=_cmd_check_dxf)

    return parser


def main(argv=None):
    """Command-line interface"""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        args.func(args)
    except DiedricoError as e:
        print(f"[!] Error: {e}")
        sys.exit(1)

    if args.command in ('project', 'reconstruct'):
        print("\n[+] Conversion complete!")


if __name__ == '__main__':
    main()

"""Sanity check of an exported DXF drawing"""

from typing import NamedTuple

import ezdxf


class DxfReport(NamedTuple):
    entities: int
    lines: int
    polylines: int
    texts: int
    zero_length_lines: int
    layers: dict
    extmin: tuple
    extmax: tuple

    @property
    def ok(self):
        return self.entities > 0 and self.zero_length_lines == 0


def check_file(path):
    """
    Read a DXF back and count what it contains

    Args:
        path: DXF file path

    Returns:
        DxfReport
    """
    doc = ezdxf.readfile(str(path))
    msp = doc.modelspace()

    lines = polylines = texts = zero_len = 0
    layers = {}
    for e in msp:
        layers[e.dxf.layer] = layers.get(e.dxf.layer, 0) + 1
        kind = e.dxftype()
        if kind == 'LINE':
            lines += 1
            start = e.dxf.start
            end = e.dxf.end
            length = ((start[0] - end[0]) ** 2 + (start[1] - end[1]) ** 2) ** 0.5
            if length < 1e-9:
                zero_len += 1
        elif kind == 'LWPOLYLINE':
            polylines += 1
        elif kind == 'TEXT':
            texts += 1

    extmin = doc.header.get('$EXTMIN', None)
    extmax = doc.header.get('$EXTMAX', None)
    return DxfReport(
        entities=len(msp),
        lines=lines,
        polylines=polylines,
        texts=texts,
        zero_length_lines=zero_len,
        layers=layers,
        extmin=tuple(extmin) if extmin is not None else None,
        extmax=tuple(extmax) if extmax is not None else None,
    )


def print_report(path, report):
    print(f"Checking {path}...")
    print(f"Entities: {report.entities}")
    print(f"EXTMIN: {report.extmin}")
    print(f"EXTMAX: {report.extmax}")
    print(f"Total Lines: {report.lines}")
    print(f"Polylines: {report.polylines}")
    print(f"Zero Length Lines: {report.zero_length_lines}")
    for layer, count in sorted(report.layers.items()):
        print(f"  Layer {layer}: {count}")

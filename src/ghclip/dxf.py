"""
DXF export of clip results.

Each contour is written as one closed LWPOLYLINE entity using the ezdxf
library, so results can be inspected in any CAD viewer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

import ezdxf

logger = logging.getLogger(__name__)


def _points(contour):
    if hasattr(contour, 'point_sequence'):
        return contour.point_sequence()
    return [(float(p[0]), float(p[1])) for p in contour]


def write_dxf(polygons: Iterable, output_path: Union[str, Path],
              layer: str = 'CLIP') -> Path:
    """Export polygons to a DXF file and return the path written.

    Args:
        polygons: ``Polygon`` objects, a ``ClipResult``, or plain lists of
            ``(x, y)`` points
        output_path: destination; ``.dxf`` is appended when missing
        layer: DXF layer for the polylines (created if needed)
    """
    path = Path(output_path)
    if path.suffix.lower() != '.dxf':
        path = path.with_name(path.name + '.dxf')

    doc = ezdxf.new('R2010')
    if not doc.layers.has_entry(layer):
        doc.layers.add(layer)
    msp = doc.modelspace()

    count = 0
    for contour in polygons:
        pts = _points(contour)
        if len(pts) < 2:
            continue
        msp.add_lwpolyline(pts, format='xy', close=True,
                           dxfattribs={'layer': layer})
        count += 1

    doc.saveas(path)
    logger.debug("wrote %d contour(s) to %s", count, path)
    return path


__all__ = ['write_dxf']

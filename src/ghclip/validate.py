"""Pre-validation of clip operands.

The clipper assumes simple polygons and does not check for them;
degenerate input silently produces wrong contours.  These checks catch
the common defects before a clip runs.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence, Tuple

from ghclip.errors import InvalidPolygon
from ghclip.options import ClipOptions
from ghclip.polygon import signed_area
from ghclip.segment import intersect


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


def _ring(points) -> List[Tuple[float, float]]:
    if hasattr(points, 'point_sequence'):
        pts = [tuple(p) for p in points.point_sequence()]
    else:
        pts = [(p[0], p[1]) for p in points]
    if len(pts) > 2 and pts[0] == pts[-1]:
        pts.pop()
    return pts


def _same(a, b, epsilon: float) -> bool:
    if epsilon <= 0.0:
        return a[0] == b[0] and a[1] == b[1]
    return abs(a[0] - b[0]) <= epsilon and abs(a[1] - b[1]) <= epsilon


def check_polygon(points: Sequence, epsilon: float = 0.0) -> CheckResult:
    """Check a ring of ``(x, y)`` points for the defects the clipper
    cannot handle.

    Reported: non-finite coordinates, fewer than three points,
    duplicate consecutive points (the ring is treated as closed), zero
    area and crossing edges.
    """
    try:
        pts = _ring(points)
    except (TypeError, IndexError, KeyError):
        return CheckResult(False, ['points must be (x, y) pairs'])

    warnings: List[str] = []
    bad = [i for i, p in enumerate(pts)
           if not all(isinstance(c, (numbers.Real, Decimal)) and math.isfinite(c) for c in p)]
    if bad:
        return CheckResult(False, [f'non-finite or non-numeric coordinates at indices {bad}'])
    pts = [(float(x), float(y)) for x, y in pts]

    n = len(pts)
    if n < 3:
        return CheckResult(False, [f'need at least 3 points, got {n}'])

    for i in range(n):
        j = (i + 1) % n
        if _same(pts[i], pts[j], epsilon):
            warnings.append(f'duplicate consecutive points at indices {i} and {j}')

    if abs(signed_area(pts)) <= epsilon:
        warnings.append('polygon has zero area')

    ## every pair of edges that share no vertex must not cross
    opts = ClipOptions(epsilon=epsilon)
    for i in range(n):
        a1, a2 = pts[i], pts[(i + 1) % n]
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue
            b1, b2 = pts[j], pts[(j + 1) % n]
            if intersect(a1, a2, b1, b2, opts).valid:
                warnings.append(f'edges {i} and {j} cross (self-intersecting boundary)')

    return CheckResult(not warnings, warnings)


def validate_polygon(points: Sequence, epsilon: float = 0.0, name: str = 'polygon') -> None:
    """Raise ``InvalidPolygon`` unless ``points`` passes :func:`check_polygon`."""
    result = check_polygon(points, epsilon)
    if not result:
        raise InvalidPolygon(result.warnings, name=name)


__all__ = [
    'CheckResult',
    'check_polygon',
    'validate_polygon',
]

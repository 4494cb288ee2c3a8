## segment intersection predicate for ghclip
## Copyright (c) 2026 ghclip contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Parametric intersection of two directed line segments.

The segments are ``s1 -> s2`` (on the source polygon) and ``c1 -> c2``
(on the clip polygon).  We solve ::

    s1 + to_source*(s2 - s1) = c1 + to_clip*(c2 - c1)

by Cramer's rule.  The denominator is the cross product of the two
direction vectors, so it vanishes for parallel and collinear segments;
those are reported as not intersecting.  A crossing is valid only when
both parameters lie strictly inside ``(0, 1)``: segments that merely
touch at an endpoint do not cross.

Endpoints may be anything with ``.x`` and ``.y`` attributes (such as
:class:`ghclip.vertex.Vertex`) or ``(x, y)`` pairs.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import mpmath as mpm

from ghclip.options import ClipOptions, resolve_options


class Intersection(NamedTuple):
    """Result of :func:`intersect`.

    ``x`` and ``y`` are only meaningful when ``valid`` is true.
    ``to_source`` and ``to_clip`` are zero for parallel segments.
    """

    x: float
    y: float
    to_source: float
    to_clip: float
    valid: bool


NO_INTERSECTION = Intersection(0.0, 0.0, 0.0, 0.0, False)


def _xy(p):
    try:
        return p.x, p.y
    except AttributeError:
        return p[0], p[1]


def _solve_float(sx1, sy1, sx2, sy2, cx1, cy1, cx2, cy2, epsilon):
    d = (cy2 - cy1) * (sx2 - sx1) - (cx2 - cx1) * (sy2 - sy1)
    if abs(d) <= epsilon:
        return None
    to_source = ((cx2 - cx1) * (sy1 - cy1) - (cy2 - cy1) * (sx1 - cx1)) / d
    to_clip = ((sx2 - sx1) * (sy1 - cy1) - (sy2 - sy1) * (sx1 - cx1)) / d
    return to_source, to_clip


def _solve_mp(sx1, sy1, sx2, sy2, cx1, cy1, cx2, cy2, epsilon, precision):
    ## evaluate the determinant and numerators with extended precision
    ## so the sign of a nearly-zero cross product is not lost to
    ## cancellation
    with mpm.workdps(precision):
        sx1, sy1, sx2, sy2 = map(mpm.mpf, (sx1, sy1, sx2, sy2))
        cx1, cy1, cx2, cy2 = map(mpm.mpf, (cx1, cy1, cx2, cy2))
        d = (cy2 - cy1) * (sx2 - sx1) - (cx2 - cx1) * (sy2 - sy1)
        if mpm.fabs(d) <= mpm.mpf(epsilon):
            return None
        to_source = ((cx2 - cx1) * (sy1 - cy1) - (cy2 - cy1) * (sx1 - cx1)) / d
        to_clip = ((sx2 - sx1) * (sy1 - cy1) - (sy2 - sy1) * (sx1 - cx1)) / d
        return float(to_source), float(to_clip)


def intersect(s1, s2, c1, c2, options: Optional[ClipOptions] = None) -> Intersection:
    """Intersect segment ``s1 -> s2`` with segment ``c1 -> c2``.

    Returns an :class:`Intersection` whose ``valid`` flag is true only for
    a proper crossing of the two segment interiors.  When valid, the
    point is interpolated along the source segment.
    """
    opts = resolve_options(options)
    sx1, sy1 = _xy(s1)
    sx2, sy2 = _xy(s2)
    cx1, cy1 = _xy(c1)
    cx2, cy2 = _xy(c2)

    if opts.exact:
        params = _solve_mp(sx1, sy1, sx2, sy2, cx1, cy1, cx2, cy2,
                           opts.epsilon, opts.precision)
    else:
        params = _solve_float(sx1, sy1, sx2, sy2, cx1, cy1, cx2, cy2,
                              opts.epsilon)
    if params is None:
        return NO_INTERSECTION

    to_source, to_clip = params
    valid = 0 < to_source < 1 and 0 < to_clip < 1
    if not valid:
        return Intersection(0.0, 0.0, to_source, to_clip, False)
    return Intersection(sx1 + to_source * (sx2 - sx1),
                        sy1 + to_source * (sy2 - sy1),
                        to_source, to_clip, True)


__all__ = ['Intersection', 'NO_INTERSECTION', 'intersect']

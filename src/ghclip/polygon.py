## polygon container for ghclip
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

"""
Polygon container
=================

A ``Polygon`` owns one closed, circular vertex list.  The vertices are
stored in an arena (``self._verts``) and linked by index; the ``first``
vertex is always arena index 0, and walking ``next`` links from it
visits every vertex in insertion order before returning to it.

Polygons are built from an ordered, non-empty sequence of ``(x, y)``
pairs in either winding direction.  A final point repeating the first
closes the ring explicitly and is dropped, so ::

   Polygon([(0, 0), (4, 0), (4, 4), (0, 4)])
   Polygon([(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)])

describe the same four-vertex square.

Boolean operations (``union``, ``intersection``, ``difference``) work
on private copies of both operands (see ``ghclip.clipper``), so a polygon
may be clipped any number of times.  The low-level mutators
(``append``, ``insert_ordered``, ``mark_checked``) do change the list
in place and are meant for the clipper.
"""

from __future__ import annotations

import dataclasses
import numbers
from decimal import Decimal
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ghclip.options import ClipOptions
from ghclip.vertex import Vertex


def _coerce_point(p) -> Tuple[float, float]:
    if isinstance(p, Vertex):
        return (p.x, p.y)
    if isinstance(p, (str, bytes)) or not isinstance(p, (Sequence, np.ndarray)):
        raise ValueError('bad point passed to Polygon: {!r}'.format(p))
    if len(p) != 2:
        raise ValueError('points must be (x, y) pairs, got {!r}'.format(p))
    x, y = p
    for c in (x, y):
        if isinstance(c, bool) or not isinstance(c, (numbers.Real, Decimal)):
            raise ValueError('bad coordinate in point {!r}'.format(p))
    return (float(x), float(y))


def signed_area(points) -> float:
    """Shoelace area of a closed ring of ``(x, y)`` points.

    Positive for counter-clockwise rings, negative for clockwise ones,
    zero for fewer than three points.
    """
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))


class Polygon:
    """Closed polygon boundary stored as a circular vertex list"""

    first = 0

    def __init__(self, points):
        self._verts: List[Vertex] = []

        if isinstance(points, Polygon):
            pts = [v.xy for v in points if not v.intersect]
        elif isinstance(points, (str, bytes)) or not hasattr(points, '__iter__'):
            raise ValueError('bad argument to Polygon constructor')
        else:
            pts = [_coerce_point(p) for p in points]

        if not pts:
            raise ValueError('Polygon requires at least one point')

        ## if the ring was explicitly closed, drop the repeated point
        if len(pts) > 2 and pts[0] == pts[-1]:
            pts.pop()

        for x, y in pts:
            self.append(Vertex(x, y))

    @classmethod
    def from_points(cls, points, *, validate: bool = False,
                    epsilon: float = 0.0, name: str = 'polygon') -> 'Polygon':
        """Build a polygon, optionally rejecting degenerate input.

        With ``validate=True`` the points are checked by
        ``ghclip.validate.validate_polygon`` first and ``InvalidPolygon``
        is raised on any defect.
        """
        if validate:
            from ghclip.validate import validate_polygon
            validate_polygon(points, epsilon=epsilon, name=name)
        return cls(points)

    def __repr__(self):
        return 'Polygon({})'.format(self.point_sequence())

    def __len__(self):
        return len(self._verts)

    def __getitem__(self, index: int) -> Vertex:
        return self._verts[index]

    def __iter__(self) -> Iterator[Vertex]:
        for i in self.indices():
            yield self._verts[i]

    def indices(self) -> Iterator[int]:
        """Arena indices in list order, starting at ``first``."""
        if not self._verts:
            return
        i = self.first
        while True:
            yield i
            i = self._verts[i].next
            if i == self.first:
                break

    def real_indices(self) -> List[int]:
        """Indices of original (non-intersection) vertices, in order."""
        return [i for i in self.indices() if not self._verts[i].intersect]

    ## list primitives
    ## -----------------

    def copy(self) -> 'Polygon':
        """Independent copy of the whole vertex arena.

        Unlike ``Polygon(p)``, intersection vertices and every link
        (``next``, ``prev``, ``neighbor``) and flag are kept as they are.
        """
        dup = Polygon.__new__(Polygon)
        dup._verts = [dataclasses.replace(v) for v in self._verts]
        return dup

    def append(self, vertex: Vertex) -> int:
        """Add ``vertex`` just before ``first``, i.e. at the logical end
        of the list, and return its arena index."""
        verts = self._verts
        idx = len(verts)
        verts.append(vertex)
        if idx == self.first:
            vertex.next = vertex.prev = idx
            return idx
        head = verts[self.first]
        last = head.prev
        vertex.next = self.first
        vertex.prev = last
        verts[last].next = idx
        head.prev = idx
        return idx

    def insert_ordered(self, vertex: Vertex, start: int, end: int,
                       epsilon: float = 0.0) -> int:
        """Insert an intersection vertex into the edge span ``start..end``.

        Scans forward from ``start`` until ``end`` is reached or a vertex
        whose ``alpha`` is not smaller than ``vertex.alpha`` is found, and
        links ``vertex`` in just before it.  Repeated insertions into one
        edge therefore end up ordered by increasing alpha.
        """
        verts = self._verts
        stop = verts[end]
        curr = start
        while not verts[curr].equals(stop, epsilon) and verts[curr].alpha < vertex.alpha:
            curr = verts[curr].next

        idx = len(verts)
        verts.append(vertex)
        before = verts[curr].prev
        vertex.next = curr
        vertex.prev = before
        verts[before].next = idx
        verts[curr].prev = idx
        return idx

    def next_real_vertex(self, index: int) -> int:
        """First vertex at or after ``index`` that is not an intersection."""
        verts = self._verts
        i = index
        while verts[i].intersect:
            i = verts[i].next
        return i

    def first_unvisited_intersection(self) -> Optional[int]:
        for i in self.indices():
            v = self._verts[i]
            if v.intersect and not v.checked:
                return i
        return None

    def has_unvisited_intersections(self) -> bool:
        return self.first_unvisited_intersection() is not None

    def mark_checked(self, index: int, other: 'Polygon') -> None:
        """Mark a vertex visited, together with its neighbor on ``other``.

        ``other`` is the polygon whose arena the ``neighbor`` links of
        this polygon point into.  Propagation runs over a worklist of
        ``(polygon, index)`` pairs; a vertex is only pushed while still
        unchecked, so the walk stops after at most one hop per pair.
        """
        work = [(self, index)]
        while work:
            poly, i = work.pop()
            v = poly._verts[i]
            if v.checked:
                continue
            v.checked = True
            if v.neighbor is not None:
                partner = other if poly is self else self
                if not partner._verts[v.neighbor].checked:
                    work.append((partner, v.neighbor))

    ## queries
    ## ---------

    def point_sequence(self) -> List[Tuple[float, float]]:
        """Ordered ``(x, y)`` coordinates starting at ``first``."""
        return [v.xy for v in self]

    def bbox(self):
        """Bounding box of the original vertices, ``((xmin, ymin), (xmax, ymax))``."""
        pts = [self._verts[i].xy for i in self.real_indices()]
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return ((min(xs), min(ys)), (max(xs), max(ys)))

    def area(self) -> float:
        """Signed shoelace area; positive for counter-clockwise winding."""
        return signed_area(self.point_sequence())

    def contains(self, point, options: Optional[ClipOptions] = None) -> bool:
        """Is ``point`` (an ``(x, y)`` pair) strictly inside this polygon?"""
        x, y = _coerce_point(point)
        return Vertex(x, y).is_inside(self, options)

    def same_boundary(self, other: 'Polygon', epsilon: float = 0.0) -> bool:
        """Do both polygons have the same original vertices, up to the
        choice of starting vertex and winding direction?"""
        a = [self._verts[i] for i in self.real_indices()]
        b = [other._verts[i] for i in other.real_indices()]
        n = len(a)
        if n != len(b):
            return False
        for k in range(n):
            if not b[k].equals(a[0], epsilon):
                continue
            if all(b[(k + j) % n].equals(a[j], epsilon) for j in range(n)):
                return True
            if all(b[(k - j) % n].equals(a[j], epsilon) for j in range(n)):
                return True
        return False

    ## boolean operations
    ## --------------------

    def union(self, other, options: Optional[ClipOptions] = None):
        from ghclip.clipper import union
        return union(self, other, options)

    def intersection(self, other, options: Optional[ClipOptions] = None):
        from ghclip.clipper import intersection
        return intersection(self, other, options)

    def difference(self, other, options: Optional[ClipOptions] = None):
        """Area of this polygon not covered by ``other``."""
        from ghclip.clipper import difference
        return difference(self, other, options)


def point_in_polygon(point, polygon, options: Optional[ClipOptions] = None) -> bool:
    """Even-odd containment test for an ``(x, y)`` point.

    ``polygon`` may be a ``Polygon`` or a sequence of ``(x, y)`` pairs.
    Points exactly on the boundary give an unspecified answer.
    """
    if not isinstance(polygon, Polygon):
        polygon = Polygon(polygon)
    return polygon.contains(point, options)


__all__ = ['Polygon', 'point_in_polygon', 'signed_area']

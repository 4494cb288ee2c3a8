## vertex node for ghclip polygon boundaries
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
Vertex nodes
============

A ``Vertex`` is one node of the circular doubly-linked list that makes
up a polygon boundary.  It is either an original boundary point or an
intersection point synthesized while clipping.

Vertices do not hold references to each other.  They live in the
vertex arena (a plain list) of the ``Polygon`` that owns them, and the
``next`` and ``prev`` links are indices into that arena.  The
``neighbor`` link of an intersection vertex is an index into the arena
of the *other* polygon of the clip: two polygons take part in every
clip, so the polygon half of the link is always implied.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ghclip.options import ClipOptions, resolve_options
from ghclip import segment


@dataclass(eq=False)
class Vertex:
    """A point on a polygon boundary, linked by arena index."""

    x: float
    y: float
    next: int = 0
    prev: int = 0
    intersect: bool = False
    entry: bool = False
    neighbor: Optional[int] = None
    alpha: float = 0.0
    checked: bool = False

    def __repr__(self):
        flags = ''
        if self.intersect:
            flags += ' ix'
            flags += ' entry' if self.entry else ' exit'
        if self.checked:
            flags += ' checked'
        return f'Vertex({self.x}, {self.y}{flags})'

    @property
    def xy(self):
        return (self.x, self.y)

    def equals(self, other: 'Vertex', epsilon: float = 0.0) -> bool:
        """Coordinate equality; exact unless ``epsilon`` is positive."""
        if epsilon <= 0.0:
            return self.x == other.x and self.y == other.y
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon

    def is_inside(self, polygon, options: Optional[ClipOptions] = None) -> bool:
        """Even-odd ray casting test against ``polygon``.

        A horizontal ray is cast from this vertex to a point to the right
        of every vertex of ``polygon``, and crossings with its edges are
        counted.  Edges run between original vertices; intersection
        vertices already inserted by a clip are stepped over, so the
        answer is the same before and after phase one.

        ``polygon`` may also be a sequence of ``(x, y)`` pairs.  Points
        exactly on the boundary give an unspecified answer.
        """
        polygon = _as_polygon(polygon)
        opts = resolve_options(options)
        (_, _), (xmax, _) = polygon.bbox()
        reach = max(xmax, self.x)
        far = (reach + 1.0 + abs(reach), self.y)

        crossings = 0
        for start, end in _edges(polygon):
            if segment.intersect(self, far, start, end, opts).valid:
                crossings += 1
            elif start.y == self.y or end.y == self.y:
                ## the ray runs through an edge end: count the edge only
                ## when exactly one of its ends lies above the ray
                if (start.y > self.y) != (end.y > self.y):
                    x = start.x + (self.y - start.y) * (end.x - start.x) / (end.y - start.y)
                    if x > self.x:
                        crossings += 1
        return crossings % 2 == 1

    def is_on_boundary(self, polygon, epsilon: float = 0.0) -> bool:
        """Does this vertex lie on an edge of ``polygon``?

        Exact unless ``epsilon`` is positive, in which case points within
        ``epsilon`` of an edge count.
        """
        polygon = _as_polygon(polygon)
        for start, end in _edges(polygon):
            dx = end.x - start.x
            dy = end.y - start.y
            cross = dx * (self.y - start.y) - dy * (self.x - start.x)
            if abs(cross) > epsilon * math.hypot(dx, dy):
                continue
            if (min(start.x, end.x) - epsilon <= self.x <= max(start.x, end.x) + epsilon
                    and min(start.y, end.y) - epsilon <= self.y <= max(start.y, end.y) + epsilon):
                return True
        return False


def _edges(polygon):
    ## (start, end) pairs between original vertices
    for i in polygon.real_indices():
        start = polygon[i]
        yield start, polygon[polygon.next_real_vertex(start.next)]


def _as_polygon(polygon):
    from ghclip.polygon import Polygon
    if isinstance(polygon, Polygon):
        return polygon
    return Polygon(polygon)


__all__ = ['Vertex']

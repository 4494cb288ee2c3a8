## Greiner-Hormann boolean operations for ghclip
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
Boolean operations on simple polygons
=====================================

Union, intersection and difference of two simple polygons by the
Greiner-Hormann algorithm.  A clip runs in three phases over private
copies of the two operands:

1. *Intersection discovery.*  Every source edge is tested against
   every clip edge.  Each proper crossing yields a pair of intersection
   vertices at the same coordinate, one inserted into each polygon's
   list in alpha order and each naming the other as its ``neighbor``.

2. *Entry/exit classification.*  Walking each list from ``first``, the
   intersection vertices are alternately flagged entry and exit.  The
   starting flag is whether ``first`` lies inside the other polygon,
   XORed with the per-operation direction flag:

   ============  ==============  ============
   operation     source_forward  clip_forward
   ============  ==============  ============
   union         False           False
   intersection  True            True
   difference    False           True
   ============  ==============  ============

3. *Tracing.*  From each unvisited source intersection, walk forward
   from entry vertices and backward from exit vertices, copying
   coordinates, jump to the neighbor at every intersection, and stop on
   returning to a visited vertex.

When the boundaries never cross, phase three has nothing to start from
and no contour is traced, even though the true answer may be one of
the operands or a polygon with a hole.  Only coincident boundaries are
resolved (union and intersection return the source).  The vertices of
each polygon are then tested against the other boundary:
``ClipResult.relation`` tells these cases apart, and
``ClipResult.complete`` says whether the returned list is the right
answer.  A vertex on the other boundary leaves the relation
undecided (``Relation.TOUCHING``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import List, Optional, Set, Tuple

from ghclip.options import ClipOptions, resolve_options
from ghclip.polygon import Polygon
from ghclip.segment import intersect
from ghclip.vertex import Vertex

logger = logging.getLogger(__name__)

## (source_forward, clip_forward) for each operation
OPERATIONS = {
    'union': (False, False),
    'intersection': (True, True),
    'difference': (False, True),
}

_NAMES = {flags: name for name, flags in OPERATIONS.items()}


class Relation(Enum):
    """How the two boundaries of a clip relate to each other."""

    CROSSING = "crossing"
    DISJOINT = "disjoint"
    SOURCE_INSIDE_CLIP = "source_inside_clip"
    CLIP_INSIDE_SOURCE = "clip_inside_source"
    COINCIDENT = "coincident"
    ## a vertex lies on the other boundary, or the vertex tests disagree
    TOUCHING = "touching"


## non-crossing cases whose returned contours are the whole answer
_RESOLVED = {
    ('intersection', Relation.DISJOINT),
    ('intersection', Relation.COINCIDENT),
    ('union', Relation.COINCIDENT),
    ('difference', Relation.SOURCE_INSIDE_CLIP),
    ('difference', Relation.COINCIDENT),
}


class ClipResult(Sequence):
    """Read-only sequence of output polygons plus how they were found.

    ``relation`` is ``Relation.CROSSING`` whenever the boundaries crossed
    and contours were traced.  Otherwise ``relation`` reports the
    containment relationship between the operands instead, and
    ``complete`` says whether the (usually empty) result is correct.
    """

    def __init__(self, polygons, relation: Relation, operation: Optional[str] = None,
                 crossings: int = 0):
        self._polygons: Tuple[Polygon, ...] = tuple(polygons)
        self.relation = relation
        self.operation = operation
        self.crossings = crossings

    def __getitem__(self, index):
        return self._polygons[index]

    def __len__(self):
        return len(self._polygons)

    def __repr__(self):
        return (f"ClipResult({self.operation}, {self.relation.value}, "
                f"{len(self._polygons)} polygon(s))")

    @property
    def polygons(self) -> List[Polygon]:
        return list(self._polygons)

    @property
    def complete(self) -> bool:
        """Do the returned polygons describe the whole boolean result?"""
        if self.relation is Relation.CROSSING:
            return True
        return (self.operation, self.relation) in _RESOLVED

    def point_sequences(self) -> List[List[Tuple[float, float]]]:
        return [p.point_sequence() for p in self._polygons]


def _working_copy(poly, name: str, opts: ClipOptions) -> Polygon:
    ## the clip mutates its operands, so it always works on fresh lists
    ## holding only the original vertices
    if isinstance(poly, Polygon):
        points = [v.xy for v in poly if not v.intersect]
    else:
        points = poly
    return Polygon.from_points(points, validate=opts.validate,
                               epsilon=opts.epsilon, name=name)


def _find_intersections(source: Polygon, clip: Polygon, opts: ClipOptions) -> int:
    """Phase one: insert a neighbor pair for every proper edge crossing."""
    found = 0
    clip_edges = [(c, clip.next_real_vertex(clip[c].next))
                  for c in clip.real_indices()]
    for s in source.real_indices():
        s_end = source.next_real_vertex(source[s].next)
        for c, c_end in clip_edges:
            ix = intersect(source[s], source[s_end], clip[c], clip[c_end], opts)
            if not ix.valid:
                continue
            vs = Vertex(ix.x, ix.y, intersect=True, alpha=ix.to_source)
            vc = Vertex(ix.x, ix.y, intersect=True, alpha=ix.to_clip)
            i_s = source.insert_ordered(vs, s, s_end, opts.epsilon)
            i_c = clip.insert_ordered(vc, c, c_end, opts.epsilon)
            vs.neighbor = i_c
            vc.neighbor = i_s
            found += 1
    return found


def _mark_entries(poly: Polygon, forward: bool, inside: bool) -> None:
    """Phase two for one polygon: alternate entry/exit along the list."""
    status = forward != inside
    for v in poly:
        if v.intersect:
            v.entry = status
            status = not status


def _trace(source: Polygon, clip: Polygon) -> List[Polygon]:
    """Phase three: walk the linked lists and emit closed contours."""
    contours = []
    while True:
        seed = source.first_unvisited_intersection()
        if seed is None:
            break
        poly, other, i = source, clip, seed
        points = [poly[i].xy]
        while True:
            poly.mark_checked(i, other)
            forward = poly[i].entry
            while True:
                i = poly[i].next if forward else poly[i].prev
                points.append(poly[i].xy)
                if poly[i].intersect:
                    break
            i = poly[i].neighbor
            poly, other = other, poly
            if poly[i].checked:
                break
        # the walk ends back on the seed coordinate; Polygon drops it
        contours.append(Polygon(points))
    return contours


def _classify(poly: Polygon, other: Polygon, opts: ClipOptions) -> Set[str]:
    """Where the original vertices of ``poly`` lie relative to ``other``:
    a subset of ``{'inside', 'outside', 'boundary'}``."""
    found = set()
    for i in poly.real_indices():
        v = poly[i]
        if v.is_on_boundary(other, opts.epsilon):
            found.add('boundary')
        elif v.is_inside(other, opts):
            found.add('inside')
        else:
            found.add('outside')
    return found


def _relation(source: Polygon, clip: Polygon, crossings: int,
              opts: ClipOptions) -> Relation:
    if crossings:
        return Relation.CROSSING
    if source.same_boundary(clip, opts.epsilon):
        return Relation.COINCIDENT
    ## without proper crossings, every vertex of each polygon must agree
    ## on its side of the other boundary for the relation to be decided
    src = _classify(source, clip, opts)
    clp = _classify(clip, source, opts)
    if src == {'inside'} and clp == {'outside'}:
        return Relation.SOURCE_INSIDE_CLIP
    if src == {'outside'} and clp == {'inside'}:
        return Relation.CLIP_INSIDE_SOURCE
    if src == {'outside'} and clp == {'outside'}:
        return Relation.DISJOINT
    return Relation.TOUCHING


def clip(source, clip_poly, source_forward: bool, clip_forward: bool,
         options: Optional[ClipOptions] = None, *,
         operation: Optional[str] = None) -> ClipResult:
    """Run the three-phase clip of ``source`` against ``clip_poly``.

    Either operand may be a ``Polygon`` or a sequence of ``(x, y)``
    pairs; neither is modified.  The direction flags select the
    operation (see ``OPERATIONS``); ``operation`` defaults to the name
    the flags have there.  Raises ``InvalidPolygon`` only when
    ``options.validate`` is set.

    Coincident boundaries never cross.  With equal direction flags
    (union and intersection) the result is then a copy of ``source``;
    otherwise it is empty.
    """
    opts = resolve_options(options)
    if operation is None:
        operation = _NAMES.get((source_forward, clip_forward))
    src = _working_copy(source, 'source polygon', opts)
    clp = _working_copy(clip_poly, 'clip polygon', opts)

    crossings = _find_intersections(src, clp, opts)
    logger.debug("phase 1: %d crossing(s) between %d and %d vertex polygons",
                 crossings, len(src.real_indices()), len(clp.real_indices()))

    source_inside = src[src.first].is_inside(clp, opts)
    clip_inside = clp[clp.first].is_inside(src, opts)
    _mark_entries(src, source_forward, source_inside)
    _mark_entries(clp, clip_forward, clip_inside)

    contours = _trace(src, clp)
    logger.debug("phase 3: traced %d contour(s)", len(contours))

    relation = _relation(src, clp, crossings, opts)
    if relation is Relation.COINCIDENT and source_forward == clip_forward:
        contours = [src.copy()]
    result = ClipResult(contours, relation, operation, crossings)
    if not result.complete:
        logger.warning("%s: boundaries do not cross (%s); result is incomplete",
                       operation or 'clip', relation.value)
    return result


def boolean(operation: str, source, clip_poly,
            options: Optional[ClipOptions] = None) -> ClipResult:
    """Apply the named operation: ``'union'``, ``'intersection'`` or
    ``'difference'``."""
    if operation not in OPERATIONS:
        raise ValueError('invalid operation passed to boolean(): {}'.format(operation))
    source_forward, clip_forward = OPERATIONS[operation]
    return clip(source, clip_poly, source_forward, clip_forward, options,
                operation=operation)


def union(source, clip_poly, options: Optional[ClipOptions] = None) -> ClipResult:
    return boolean('union', source, clip_poly, options)


def intersection(source, clip_poly, options: Optional[ClipOptions] = None) -> ClipResult:
    return boolean('intersection', source, clip_poly, options)


def difference(source, clip_poly, options: Optional[ClipOptions] = None) -> ClipResult:
    """``source`` minus ``clip_poly``."""
    return boolean('difference', source, clip_poly, options)


__all__ = [
    'OPERATIONS',
    'Relation',
    'ClipResult',
    'clip',
    'boolean',
    'union',
    'intersection',
    'difference',
]

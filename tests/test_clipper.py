"""
Tests for the Greiner-Hormann boolean operations
"""

import logging

import pytest

from ghclip.clipper import (OPERATIONS, ClipResult, Relation, boolean, clip,
                            difference, intersection, union)
from ghclip.errors import InvalidPolygon, OptionsError
from ghclip.options import ClipOptions
from ghclip.polygon import Polygon, signed_area

A = [(0, 0), (4, 0), (4, 4), (0, 4)]
B = [(2, 2), (6, 2), (6, 6), (2, 6)]

U_SHAPE = [(0, 0), (6, 0), (6, 6), (4, 6), (4, 2), (2, 2), (2, 6), (0, 6)]
BAR = [(-1, 3), (7, 3), (7, 5), (-1, 5)]

TRIANGLE = [(1, -1), (3, 5), (5, -1)]


def _as_set(polygon):
    return {(round(x, 9), round(y, 9)) for x, y in polygon.point_sequence()}


def _areas(result):
    return sorted(abs(p.area()) for p in result)


class TestOverlappingSquares:

    def test_union(self):
        result = union(A, B)
        assert isinstance(result, ClipResult)
        assert result.relation is Relation.CROSSING
        assert result.complete
        assert result.crossings == 2
        assert len(result) == 1
        assert len(result[0]) == 8
        assert _as_set(result[0]) == {(4, 2), (4, 0), (0, 0), (0, 4),
                                      (2, 4), (2, 6), (6, 6), (6, 2)}
        assert abs(result[0].area()) == pytest.approx(28.0)

    def test_intersection(self):
        result = intersection(A, B)
        assert len(result) == 1
        assert _as_set(result[0]) == {(4, 2), (4, 4), (2, 4), (2, 2)}
        assert abs(result[0].area()) == pytest.approx(4.0)

    def test_difference(self):
        result = difference(A, B)
        assert len(result) == 1
        assert _as_set(result[0]) == {(4, 2), (4, 0), (0, 0), (0, 4), (2, 4), (2, 2)}
        assert abs(result[0].area()) == pytest.approx(12.0)

    def test_reverse_difference(self):
        result = difference(B, A)
        assert len(result) == 1
        assert abs(result[0].area()) == pytest.approx(12.0)

    def test_winding_does_not_matter(self):
        clockwise = list(reversed(A))
        assert _as_set(union(clockwise, B)[0]) == _as_set(union(A, B)[0])
        assert _as_set(intersection(clockwise, B)[0]) == _as_set(intersection(A, B)[0])

    def test_accepts_polygons(self):
        result = union(Polygon(A), Polygon(B))
        assert len(result) == 1
        assert len(result[0]) == 8

    def test_result_is_a_sequence(self):
        result = union(A, B)
        assert list(result) == result.polygons
        assert result.point_sequences() == [result[0].point_sequence()]
        assert result.operation == 'union'
        assert 'crossing' in repr(result)

    def test_output_carries_no_clip_state(self):
        result = union(A, B)
        for v in result[0]:
            assert not v.intersect
            assert not v.checked


class TestMultipleContours:

    def test_intersection_splits(self):
        result = intersection(U_SHAPE, BAR)
        assert result.crossings == 8
        assert len(result) == 2
        assert _areas(result) == pytest.approx([4.0, 4.0])

    def test_difference_splits(self):
        result = difference(U_SHAPE, BAR)
        assert len(result) == 3
        assert _areas(result) == pytest.approx([2.0, 2.0, 16.0])
        assert sum(_areas(result)) == pytest.approx(28.0 - 8.0)

    def test_area_identity(self):
        ## |A u B| = |A| + |B| - |A n B| and |A - B| = |A| - |A n B|
        a_area = abs(signed_area(TRIANGLE))
        b_area = abs(signed_area(A))
        inter = sum(_areas(intersection(TRIANGLE, A)))
        assert sum(_areas(union(TRIANGLE, A))) == pytest.approx(a_area + b_area - inter)
        assert sum(_areas(difference(TRIANGLE, A))) == pytest.approx(a_area - inter)


class TestValueSemantics:

    def test_operands_unchanged(self):
        a = Polygon(A)
        b = Polygon(B)
        before = (a.point_sequence(), b.point_sequence())
        union(a, b)
        intersection(a, b)
        assert (a.point_sequence(), b.point_sequence()) == before
        assert not any(v.intersect or v.checked for v in a)
        assert not any(v.intersect or v.checked for v in b)

    def test_repeated_clips_agree(self):
        a = Polygon(A)
        first = _as_set(difference(a, B)[0])
        second = _as_set(difference(a, B)[0])
        assert first == second

    def test_chained_operations(self):
        ## a clip result can be fed back in
        merged = union(A, B)[0]
        strip = [(-1, 1), (7, 1), (7, 3), (-1, 3)]
        result = intersection(merged, strip)
        assert result.crossings == 4
        assert len(result) == 1
        assert abs(result[0].area()) == pytest.approx(10.0)


class TestNonCrossing:

    def test_disjoint_union_is_incomplete(self, caplog):
        far = [(10, 10), (12, 10), (12, 12), (10, 12)]
        with caplog.at_level(logging.WARNING, logger='ghclip.clipper'):
            result = union(A, far)
        assert len(result) == 0
        assert result.relation is Relation.DISJOINT
        assert not result.complete
        assert 'do not cross' in caplog.text

    def test_disjoint_intersection_is_complete(self, caplog):
        far = [(10, 10), (12, 10), (12, 12), (10, 12)]
        with caplog.at_level(logging.WARNING, logger='ghclip.clipper'):
            result = intersection(A, far)
        assert len(result) == 0
        assert result.complete
        assert caplog.text == ''

    def test_containment(self):
        big = [(0, 0), (10, 0), (10, 10), (0, 10)]
        small = [(2, 2), (4, 2), (4, 4), (2, 4)]
        assert union(big, small).relation is Relation.CLIP_INSIDE_SOURCE
        inner = difference(small, big)
        assert inner.relation is Relation.SOURCE_INSIDE_CLIP
        assert len(inner) == 0
        assert inner.complete
        assert not intersection(small, big).complete

    def test_coincident(self):
        result = intersection(A, A)
        assert result.relation is Relation.COINCIDENT
        assert result.complete
        gone = difference(A, list(reversed(A)))
        assert gone.relation is Relation.COINCIDENT
        assert len(gone) == 0
        assert gone.complete

    @pytest.mark.parametrize('operation', ['union', 'intersection'])
    def test_self_clip_is_idempotent(self, operation):
        result = boolean(operation, A, list(reversed(A)))
        assert len(result) == 1
        assert Polygon(A).same_boundary(result[0])
        assert abs(result[0].area()) == pytest.approx(16.0)

    def test_nested_diamonds(self):
        ## the ray from a vertex runs through the other polygon's vertices
        inner = [(-1, 0), (0, -1), (1, 0), (0, 1)]
        outer = [(-5, 0), (0, -5), (5, 0), (0, 5)]
        assert intersection(inner, outer).relation is Relation.SOURCE_INSIDE_CLIP
        assert union(outer, inner).relation is Relation.CLIP_INSIDE_SOURCE
        assert difference(inner, outer).complete

    def test_shared_edges_are_undecided(self, caplog):
        side = [(2, 0), (6, 0), (6, 4), (2, 4)]
        with caplog.at_level(logging.WARNING, logger='ghclip.clipper'):
            result = intersection(A, side)
        assert result.crossings == 0
        assert result.relation is Relation.TOUCHING
        assert not result.complete
        assert 'touching' in caplog.text

    @pytest.mark.xfail(strict=True, reason="non-crossing union yields no contours")
    def test_disjoint_union_keeps_both(self):
        far = [(10, 10), (12, 10), (12, 12), (10, 12)]
        assert len(union(A, far)) == 2


class TestRayThroughVertex:
    """first vertex level with vertices of the other polygon"""

    SOURCE = [(0, 1), (4, 1), (4, 5), (0, 5)]
    KITE = [(3, -2), (7, 1), (3, 4), (-1, 1)]

    def test_intersection(self):
        result = intersection(self.SOURCE, self.KITE)
        assert result.crossings == 2
        assert len(result) == 1
        assert _as_set(result[0]) == {(4, 3.25), (4, 1), (0, 1), (0, 1.75), (3, 4)}
        assert abs(result[0].area()) == pytest.approx(8.25)

    def test_partition(self):
        inside = sum(_areas(intersection(self.SOURCE, self.KITE)))
        outside = sum(_areas(difference(self.SOURCE, self.KITE)))
        assert inside + outside == pytest.approx(16.0)


class TestDispatch:

    def test_operation_table(self):
        assert OPERATIONS == {
            'union': (False, False),
            'intersection': (True, True),
            'difference': (False, True),
        }

    @pytest.mark.parametrize('operation', sorted(OPERATIONS))
    def test_boolean_matches_direct_clip(self, operation):
        sf, cf = OPERATIONS[operation]
        by_name = boolean(operation, A, B)
        direct = clip(A, B, sf, cf)
        assert [_as_set(p) for p in by_name] == [_as_set(p) for p in direct]
        assert by_name.operation == operation
        assert direct.operation == operation

    def test_invalid_operation(self):
        with pytest.raises(ValueError):
            boolean('xor', A, B)


class TestOptions:

    def test_exact_matches_float(self):
        exact = ClipOptions(exact=True)
        assert _as_set(union(A, B, exact)[0]) == _as_set(union(A, B)[0])
        assert _areas(difference(U_SHAPE, BAR, exact)) == pytest.approx([2.0, 2.0, 16.0])

    def test_validate_rejects_bowtie(self):
        bowtie = [(0, 0), (4, 4), (4, 0), (0, 4)]
        with pytest.raises(InvalidPolygon) as info:
            union(bowtie, B, ClipOptions(validate=True))
        assert info.value.name == 'source polygon'
        with pytest.raises(InvalidPolygon) as info:
            union(B, bowtie, ClipOptions(validate=True))
        assert info.value.name == 'clip polygon'

    def test_validate_passes_good_input(self):
        assert len(union(A, B, ClipOptions(validate=True))) == 1

    def test_rejects_non_options(self):
        with pytest.raises(OptionsError):
            union(A, B, {'epsilon': 1e-9})

import pytest

from ghclip.options import ClipOptions
from ghclip.segment import NO_INTERSECTION, Intersection, intersect
from ghclip.vertex import Vertex


class TestIntersect:
    """segment-segment intersection predicate"""

    def test_proper_crossing(self):
        ix = intersect((0, 0), (2, 2), (0, 2), (2, 0))
        assert ix.valid
        assert ix.x == pytest.approx(1.0)
        assert ix.y == pytest.approx(1.0)
        assert ix.to_source == pytest.approx(0.5)
        assert ix.to_clip == pytest.approx(0.5)

    def test_parameters_are_per_segment(self):
        ix = intersect((0, 0), (4, 0), (3, -1), (3, 3))
        assert ix.valid
        assert ix.to_source == pytest.approx(0.75)
        assert ix.to_clip == pytest.approx(0.25)
        assert (ix.x, ix.y) == pytest.approx((3.0, 0.0))

    def test_shared_endpoint_is_not_a_crossing(self):
        ix = intersect((0, 0), (1, 1), (1, 1), (2, 0))
        assert not ix.valid

    def test_endpoint_touching_interior_is_not_a_crossing(self):
        ## clip segment starts on the source segment
        assert not intersect((0, 0), (2, 0), (1, 0), (1, 1)).valid
        ## source segment ends on the clip segment
        assert not intersect((1, 1), (1, 0), (0, 0), (2, 0)).valid

    def test_parallel(self):
        assert intersect((0, 0), (1, 0), (0, 1), (1, 1)) == NO_INTERSECTION

    def test_collinear_overlap(self):
        assert intersect((0, 0), (2, 0), (1, 0), (3, 0)) == NO_INTERSECTION

    def test_lines_cross_outside_segments(self):
        ix = intersect((0, 0), (1, 1), (3, 0), (2, 1))
        assert not ix.valid
        assert ix.to_source == pytest.approx(1.5)

    def test_accepts_vertices(self):
        ix = intersect(Vertex(0, 0), Vertex(2, 2), Vertex(0, 2), Vertex(2, 0))
        assert isinstance(ix, Intersection)
        assert ix.valid

    def test_point_is_on_source_segment(self):
        ix = intersect((1, 1), (5, 3), (2, 4), (4, 0))
        assert ix.valid
        assert ix.x == pytest.approx(1 + ix.to_source * 4)
        assert ix.y == pytest.approx(1 + ix.to_source * 2)

    def test_epsilon_treats_near_parallel_as_parallel(self):
        s1, s2 = (0, 0), (10, 0)
        c1, c2 = (0, -1e-10), (10, 1e-10)
        assert intersect(s1, s2, c1, c2).valid
        assert intersect(s1, s2, c1, c2, ClipOptions(epsilon=1e-6)) == NO_INTERSECTION

    def test_exact_mode_matches_float_on_ordinary_input(self):
        exact = ClipOptions(exact=True)
        for args in [((0, 0), (2, 2), (0, 2), (2, 0)),
                     ((0, 0), (4, 0), (3, -1), (3, 3)),
                     ((0, 0), (1, 0), (0, 1), (1, 1))]:
            a = intersect(*args)
            b = intersect(*args, options=exact)
            assert a.valid == b.valid
            assert b.to_source == pytest.approx(a.to_source)
            assert b.to_clip == pytest.approx(a.to_clip)

    def test_exact_mode_keeps_tiny_determinant(self):
        ## (1-e)*(1+e) - 1 rounds to zero in double precision
        e = 2.0 ** -52
        s1, s2 = (0.0, 0.0), (1.0 + e, 1.0)
        c1, c2 = (0.0, 0.5), (1.0, 1.5 - e)
        assert intersect(s1, s2, c1, c2) == NO_INTERSECTION
        ix = intersect(s1, s2, c1, c2, ClipOptions(exact=True))
        assert ix.to_source != 0.0
        assert not ix.valid

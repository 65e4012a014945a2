"""
Tests for spherical area and area weighting.
"""

import math

import pytest
from conftest import box_area, make_box
from solzone.area import AreaMethod, area, geodesic_area, region_area, ring_area, weighted_intensity
from solzone.geometry import union
from solzone.models import Region, ZoneOverlap


class TestSphericalArea:
    """Spherical-excess area in square meters."""

    def test_box_matches_analytic_area(self):
        box = make_box(35.0, 37.0, 35.2, 37.2)
        assert area(box) == pytest.approx(box_area(35.0, 37.0, 35.2, 37.2), rel=1e-9)

    def test_one_degree_box_at_equator(self):
        """1°x1° at the equator is roughly 12,391 km² on the sphere."""
        assert area(make_box(0, 0, 1, 1)) / 1e6 == pytest.approx(12391, rel=1e-3)

    def test_winding_does_not_change_area(self):
        ccw = make_box(35.0, 37.0, 35.2, 37.2)
        cw = make_box(35.0, 37.0, 35.2, 37.2, clockwise=True)
        assert area(cw) == pytest.approx(area(ccw), rel=1e-9)

    def test_holes_subtract(self):
        outer = make_box(0, 0, 2, 2)["coordinates"][0]
        hole = make_box(0.5, 0.5, 1.0, 1.0)["coordinates"][0]
        polygon = {"type": "Polygon", "coordinates": [outer, hole]}
        expected = box_area(0, 0, 2, 2) - box_area(0.5, 0.5, 1.0, 1.0)
        assert area(polygon) == pytest.approx(expected, rel=1e-9)

    def test_pieces_sum(self):
        region = union([make_box(0, 0, 1, 1), make_box(5, 5, 6, 6)])
        expected = box_area(0, 0, 1, 1) + box_area(5, 5, 6, 6)
        assert area(region) == pytest.approx(expected, rel=1e-9)

    def test_null_and_empty_regions_have_zero_area(self):
        assert area(None) == 0.0
        assert area(Region.empty()) == 0.0

    def test_ring_area_ignores_closing_vertex(self):
        ring = make_box(0, 0, 1, 1)["coordinates"][0]
        assert ring_area(ring) == pytest.approx(ring_area(ring[:-1]), rel=1e-9)

    def test_ring_area_sign_follows_winding(self):
        ring = make_box(0, 0, 1, 1)["coordinates"][0]
        assert math.copysign(1.0, ring_area(ring)) == -math.copysign(1.0, ring_area(ring[::-1]))

    def test_ring_with_two_vertices_has_zero_area(self):
        assert ring_area([[0, 0], [1, 1]]) == 0.0


class TestGeodesicArea:
    """Ellipsoidal area through pyproj."""

    def test_close_to_spherical_area(self):
        box = make_box(35.0, 37.0, 35.2, 37.2)
        assert geodesic_area(box) == pytest.approx(area(box), rel=0.01)

    def test_region_area_dispatches_on_method(self):
        box = make_box(35.0, 37.0, 35.2, 37.2)
        assert region_area(box, AreaMethod.GEODESIC) == geodesic_area(box)
        assert region_area(box, "spherical") == area(box)

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError):
            region_area(make_box(0, 0, 1, 1), "planar")


class TestWeightedIntensity:
    """Area-weighted mean radiation."""

    def test_weighted_mean(self):
        assert weighted_intensity([(10, 100), (30, 200)]) == pytest.approx(175.0)

    def test_accepts_zone_overlaps(self):
        overlaps = [ZoneOverlap("high", 10.0, 100.0), ZoneOverlap("moderate", 30.0, 200.0)]
        assert weighted_intensity(overlaps) == pytest.approx(175.0)

    def test_zero_total_area_returns_none(self):
        assert weighted_intensity([(0.0, 1800.0), (0.0, 1600.0)]) is None

    def test_empty_returns_none(self):
        assert weighted_intensity([]) is None

    def test_non_finite_returns_none(self):
        assert weighted_intensity([(10.0, float("nan"))]) is None
        assert weighted_intensity([(float("inf"), 100.0)]) is None

    def test_non_numeric_returns_none(self):
        assert weighted_intensity([(10.0, None)]) is None

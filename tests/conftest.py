"""Shared pytest fixtures and geometry builders.

Sample zones sit near Adana (lon 35, lat 37):

- high: two adjacent 0.2° squares, [35.0, 35.4] x [37.0, 37.2], sr_mean 1800
- moderate: one square [35.3, 35.6] x [37.1, 37.3], sr_mean 1600, partly
  overlapping the high zone
"""

import math
import sys
from pathlib import Path

import pytest

_pysrc = str(Path(__file__).resolve().parent.parent / "pysrc")
if _pysrc not in sys.path:
    sys.path.insert(0, _pysrc)

from solzone.constants import EARTH_RADIUS_M  # noqa: E402


def make_box(lon0: float, lat0: float, lon1: float, lat1: float, clockwise: bool = False) -> dict:
    """GeoJSON Polygon for a lon/lat box."""
    ring = [[lon0, lat0], [lon1, lat0], [lon1, lat1], [lon0, lat1], [lon0, lat0]]
    if clockwise:
        ring = ring[::-1]
    return {"type": "Polygon", "coordinates": [ring]}


def box_area(lon0: float, lat0: float, lon1: float, lat1: float) -> float:
    """Spherical area (m²) of a lon/lat box: R² Δλ (sin φ1 - sin φ0)."""
    dlon = math.radians(lon1 - lon0)
    return EARTH_RADIUS_M**2 * dlon * (math.sin(math.radians(lat1)) - math.sin(math.radians(lat0)))


def make_feature(geometry: dict, class_id: str, sr_mean: float) -> dict:
    return {"type": "Feature", "geometry": geometry, "properties": {"class": class_id, "sr_mean": sr_mean}}


def make_collection(*features: dict) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}


# Self-intersecting "bow tie" ring
BOWTIE = {"type": "Polygon", "coordinates": [[[0, 0], [2, 2], [2, 0], [0, 2], [0, 0]]]}


@pytest.fixture
def high_collection():
    return make_collection(
        make_feature(make_box(35.0, 37.0, 35.2, 37.2), "high", 1800.0),
        make_feature(make_box(35.2, 37.0, 35.4, 37.2), "high", 1800.0),
    )


@pytest.fixture
def moderate_collection():
    return make_collection(make_feature(make_box(35.3, 37.1, 35.6, 37.3), "moderate", 1600.0))


@pytest.fixture
def empty_collection():
    return make_collection()

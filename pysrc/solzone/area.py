"""
Surface area of (longitude, latitude) regions and area weighting.

``area`` uses the spherical-excess ring formula (Chamberlain & Duquette,
"Some Algorithms for Polygons on a Sphere", JPL 2007) on a sphere of radius
``EARTH_RADIUS_M``, which is what web-map drawing tools report to users.
``geodesic_area`` is the WGS84 ellipsoidal alternative through pyproj.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np
from pyproj import Geod

from .constants import EARTH_RADIUS_M, GEOD_ELLPS
from .models.region import Region
from .models.results import ZoneOverlap

if TYPE_CHECKING:
    from shapely.geometry import Polygon

_GEOD = Geod(ellps=GEOD_ELLPS)


class AreaMethod(str, Enum):
    """Surface model for area in square meters."""

    SPHERICAL = "spherical"
    GEODESIC = "geodesic"


def ring_area(coords: Sequence[Sequence[float]] | np.ndarray) -> float:
    """
    Signed spherical area of one ring in m² (negative for clockwise-on-map).

    Args:
        coords: (lon, lat) vertices in degrees. A closing vertex equal to the
            first one is ignored.
    """
    pts = np.asarray(coords, dtype=np.float64)
    if pts.ndim != 2 or len(pts) < 3:
        return 0.0
    if np.array_equal(pts[0], pts[-1]):
        pts = pts[:-1]
    if len(pts) < 3:
        return 0.0

    lon = np.radians(pts[:, 0])
    lat = np.radians(pts[:, 1])
    # Term i pairs vertex i (lower) and i+2 (upper) around middle vertex i+1
    lower = lon
    upper = np.roll(lon, -2)
    middle = np.roll(lat, -1)
    total = np.sum((upper - lower) * np.sin(middle))
    return float(total * EARTH_RADIUS_M * EARTH_RADIUS_M / 2.0)


def polygon_area(polygon: Polygon) -> float:
    """Spherical area of one polygon in m²; holes subtract."""
    if polygon.is_empty:
        return 0.0
    total = abs(ring_area(polygon.exterior.coords))
    for hole in polygon.interiors:
        total -= abs(ring_area(hole.coords))
    return max(total, 0.0)


def area(region: Region | Any | None) -> float:
    """
    Surface area of a Region in square meters.

    Sums pieces and subtracts holes. A null or empty Region has zero area.

    Args:
        region: Region, shapely polygon/multipolygon, or GeoJSON geometry.

    Example:
        >>> area(Region.from_geojson(square))  # doctest: +SKIP
        12308778361.47
    """
    region = _as_region(region)
    if region is None:
        return 0.0
    return float(sum(polygon_area(p) for p in region.pieces))


def geodesic_area(region: Region | Any | None) -> float:
    """Ellipsoidal (WGS84) surface area in square meters via pyproj."""
    region = _as_region(region)
    if region is None:
        return 0.0
    total = 0.0
    for piece in region.pieces:
        piece_area, _ = _GEOD.geometry_area_perimeter(piece)
        total += abs(piece_area)
    return float(total)


def region_area(region: Region | Any | None, method: AreaMethod | str = AreaMethod.SPHERICAL) -> float:
    """Area in m² using the chosen surface model."""
    method = AreaMethod(method)
    if method is AreaMethod.GEODESIC:
        return geodesic_area(region)
    return area(region)


def weighted_intensity(overlaps: Iterable[tuple[float, float] | ZoneOverlap]) -> float | None:
    """
    Area-weighted mean intensity: ``sum(area_i * intensity_i) / sum(area_i)``.

    Args:
        overlaps: ``(area, intensity)`` pairs or ``ZoneOverlap`` records.

    Returns:
        The weighted mean, or None when the total area is zero or any term
        is non-finite. Callers treat None as "no overlap".

    Example:
        >>> weighted_intensity([(10, 100), (30, 200)])
        175.0
    """
    pairs = [(o.area_m2, o.sr_mean) if isinstance(o, ZoneOverlap) else tuple(o) for o in overlaps]
    if not pairs:
        return None
    try:
        data = np.asarray(pairs, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if data.ndim != 2 or data.shape[1] != 2 or not np.isfinite(data).all():
        return None
    areas, intensities = data[:, 0], data[:, 1]
    total = areas.sum()
    if total <= 0.0:
        return None
    return float(np.dot(areas, intensities) / total)


def _as_region(region: Region | Any | None) -> Region | None:
    if region is None:
        return None
    if isinstance(region, Region):
        return None if region.is_empty else region
    from .geometry import normalize, to_geometry

    return Region(normalize(to_geometry(region)))

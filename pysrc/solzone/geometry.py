"""
Polygon set algebra over (longitude, latitude) polygons.

Union, difference, intersection and containment run on planar GEOS geometry
through shapely. Area in square meters lives in :mod:`solzone.area`; the
operations here only decide topology, which is unaffected by the choice of
surface model for the small extents a suitability layer covers.

Each operation comes in two flavours:

- ``*_strict`` functions raise :class:`~solzone.errors.GeometryFailure` on
  degenerate or self-intersecting operands, so failures are explicit.
- ``union``, ``difference``, ``intersect`` and ``within`` recover locally
  (skip the operand, return None or False) and log the failure, so one bad
  polygon never aborts a whole computation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np
import shapely
from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, shape
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.validation import explain_validity

from .constants import AREA_REL_TOLERANCE
from .errors import GeometryFailure
from .models.region import Region
from .solzone_logging import get_logger

logger = get_logger(__name__)

_SHAPE_ERRORS = (ValueError, TypeError, KeyError, AttributeError, IndexError, GEOSException)


# =============================================================================
# Parsing and normalisation
# =============================================================================


def to_geometry(obj: Any) -> BaseGeometry:
    """
    Convert a GeoJSON geometry, Feature, Region or shapely geometry to shapely.

    Raises:
        GeometryFailure: If the input is empty, non-polygonal, has non-finite
            coordinates or encloses no area.
    """
    if obj is None:
        raise GeometryFailure("parse", "geometry is None")
    if isinstance(obj, Region):
        geom = obj.geometry
    elif isinstance(obj, BaseGeometry):
        geom = obj
    elif isinstance(obj, dict):
        data = obj.get("geometry") if obj.get("type") == "Feature" else obj
        if data is None:
            raise GeometryFailure("parse", "feature has no geometry")
        try:
            geom = shape(data)
        except _SHAPE_ERRORS as e:
            raise GeometryFailure("parse", f"unreadable GeoJSON geometry: {e}") from e
    else:
        raise GeometryFailure("parse", f"unsupported geometry type {type(obj).__name__}")

    if not isinstance(geom, (Polygon, MultiPolygon)):
        raise GeometryFailure("parse", f"expected Polygon or MultiPolygon, got {geom.geom_type}")
    if geom.is_empty:
        raise GeometryFailure("parse", "geometry is empty")
    if not np.isfinite(shapely.get_coordinates(geom)).all():
        raise GeometryFailure("parse", "geometry has non-finite coordinates")
    if geom.area <= 0.0:
        raise GeometryFailure("parse", "geometry encloses no area")
    return geom


def _polygonal_parts(geom: BaseGeometry) -> list[Polygon]:
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, (MultiPolygon, GeometryCollection)):
        parts: list[Polygon] = []
        for g in geom.geoms:
            parts.extend(_polygonal_parts(g))
        return parts
    # Points and lines left over from touching operands
    return []


def normalize(geom: BaseGeometry) -> BaseGeometry:
    """
    Orient rings (exterior CCW, holes CW) and drop zero-area pieces.

    Returns:
        Polygon, MultiPolygon, or an empty Polygon when nothing remains.
    """
    parts = [orient(p, sign=1.0) for p in _polygonal_parts(geom) if p.area > 0.0]
    if not parts:
        return Polygon()
    if len(parts) == 1:
        return parts[0]
    return MultiPolygon(parts)


def _operand(obj: Any, operation: str) -> BaseGeometry:
    """Parse and validate one set-algebra operand."""
    try:
        geom = to_geometry(obj)
    except GeometryFailure as e:
        raise GeometryFailure(operation, e.detail) from e
    if not geom.is_valid:
        raise GeometryFailure(operation, explain_validity(geom))
    return geom


def validated_region(obj: Any, operation: str = "parse") -> Region:
    """
    Parse a polygon into a normalised Region, rejecting invalid topology.

    Raises:
        GeometryFailure: If the polygon is degenerate or self-intersecting.
    """
    return Region(normalize(_operand(obj, operation)))


def _apply(operation: str, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
    try:
        if operation == "union":
            return a.union(b)
        if operation == "difference":
            return a.difference(b)
        if operation == "intersect":
            return a.intersection(b)
    except GEOSException as e:
        raise GeometryFailure(operation, str(e)) from e
    raise ValueError(f"Unknown operation: {operation}")


def _is_blank(region: Any) -> bool:
    if region is None:
        return True
    if isinstance(region, Region):
        return region.is_empty
    if isinstance(region, BaseGeometry):
        return region.is_empty
    return False


# =============================================================================
# Strict operations
# =============================================================================


def union_strict(polygons: Iterable[Any]) -> Region | None:
    """
    Merge polygons into one Region, raising on the first bad operand.

    Returns:
        Region, or None for an empty input.

    Raises:
        GeometryFailure: On a degenerate operand or a failed merge.
    """
    acc: BaseGeometry | None = None
    for obj in polygons:
        geom = _operand(obj, "union")
        acc = geom if acc is None else _apply("union", acc, geom)
    if acc is None:
        return None
    return Region(normalize(acc))


def difference_strict(a: Any, b: Any) -> Region:
    """
    Portion of ``a`` not covered by ``b``.

    Returns ``a`` unchanged when ``b`` is null or empty, and an empty Region
    on full cancellation.

    Raises:
        GeometryFailure: On a degenerate operand or a failed difference.
    """
    geom_a = _operand(a, "difference")
    if _is_blank(b):
        return Region(normalize(geom_a))
    geom_b = _operand(b, "difference")
    return Region(normalize(_apply("difference", geom_a, geom_b)))


def intersect_strict(a: Any, b: Any) -> Region:
    """
    Overlap of ``a`` and ``b``; an empty Region when they are disjoint.

    Raises:
        GeometryFailure: On a degenerate operand or a failed intersection.
    """
    geom_a = _operand(a, "intersect")
    geom_b = _operand(b, "intersect")
    return Region(normalize(_apply("intersect", geom_a, geom_b)))


# =============================================================================
# Recovering operations
# =============================================================================


def union(polygons: Iterable[Any]) -> Region | None:
    """
    Merge polygons into the smallest set of disjoint pieces covering them.

    Accumulates left to right. Degenerate or self-intersecting operands are
    skipped; a failing pairwise merge keeps the accumulator as it was and
    moves on to the next operand.

    Args:
        polygons: GeoJSON geometries/Features, Regions or shapely polygons.

    Returns:
        Region, or None when no usable operand was given.
    """
    acc: BaseGeometry | None = None
    skipped = 0
    for index, obj in enumerate(polygons):
        try:
            geom = _operand(obj, "union")
        except GeometryFailure as e:
            skipped += 1
            logger.warning(f"Skipping union operand {index}: {e.detail}")
            continue
        if acc is None:
            acc = geom
            continue
        try:
            acc = _apply("union", acc, geom)
        except GeometryFailure as e:
            skipped += 1
            logger.warning(f"Union with operand {index} failed, keeping previous result: {e.detail}")

    if acc is None:
        return None
    if skipped:
        logger.debug(f"Union finished with {skipped} skipped operand(s)")
    return Region(normalize(acc))


def difference(a: Any, b: Any) -> Region | None:
    """
    Portion of ``a`` not covered by ``b``.

    Returns:
        ``a`` unchanged when ``b`` is null/empty, an empty Region on full
        cancellation, or None when ``a`` is null or the operation failed.
    """
    if _is_blank(a):
        return None
    try:
        return difference_strict(a, b)
    except GeometryFailure as e:
        logger.warning(str(e))
        return None


def intersect(a: Any, b: Any) -> Region | None:
    """
    Overlap of two polygons.

    Returns:
        Region, or None when the polygons are disjoint or an operand is
        degenerate.
    """
    if _is_blank(a) or _is_blank(b):
        return None
    try:
        region = intersect_strict(a, b)
    except GeometryFailure as e:
        logger.warning(str(e))
        return None
    return None if region.is_empty else region


def within(a: Any, b: Any) -> bool:
    """
    True iff every point of ``a`` lies inside or on the boundary of ``b``.

    Never raises: a null/empty ``b`` or a degenerate ``a`` gives False.
    Boundary round-off from earlier unions is tolerated up to a relative
    leftover area of ``AREA_REL_TOLERANCE``.
    """
    if _is_blank(a) or _is_blank(b):
        return False
    try:
        geom_a = _operand(a, "within")
        geom_b = _operand(b, "within")
        if geom_b.covers(geom_a):
            return True
        leftover = geom_a.difference(geom_b).area
    except (GeometryFailure, GEOSException) as e:
        logger.debug(f"Containment test failed: {e}")
        return False
    return leftover <= AREA_REL_TOLERANCE * geom_a.area


def clean_zones(high_polygons: Iterable[Any], moderate_polygons: Iterable[Any]) -> tuple[Region | None, Region | None]:
    """
    Build non-overlapping high and moderate regions.

    Independently authored layers may overlap; the moderate zone is reduced
    to the area not already covered by the high zone.

    Returns:
        ``(high, moderate_clean)``; either may be None when its layer had no
        usable polygons, and ``moderate_clean`` may be an empty Region.
    """
    high = union(high_polygons)
    moderate = union(moderate_polygons)
    if moderate is None:
        return high, None
    moderate_clean = difference(moderate, high)
    if moderate_clean is None:
        logger.warning("Could not remove high overlap from moderate zone, keeping raw moderate zone")
        moderate_clean = moderate
    return high, moderate_clean

"""Region model: one semantic zone made of disjoint polygon pieces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shapely.geometry import MultiPolygon, Polygon, mapping
from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True)
class Region:
    """
    Zero or more disjoint polygon pieces in (longitude, latitude).

    A Region carries no scalar of its own; suitability zones attach
    ``sr_mean`` on top of it. Geometry is normalised by the geometry module
    before a Region is built (oriented rings, zero-area pieces dropped).

    Attributes:
        geometry: Shapely Polygon or MultiPolygon. An empty Polygon marks an
            empty Region (full cancellation after a difference).

    Example:
        >>> region = Region.from_geojson({"type": "Polygon", "coordinates": [...]})
        >>> len(region.pieces)
        1
    """

    geometry: BaseGeometry

    @classmethod
    def empty(cls) -> Region:
        """Region with no pieces."""
        return cls(Polygon())

    @classmethod
    def from_geojson(cls, obj: Any) -> Region:
        """
        Build a Region from a GeoJSON geometry or Feature.

        Raises:
            GeometryFailure: If the geometry is degenerate or not polygonal.
        """
        from ..geometry import normalize, to_geometry

        return cls(normalize(to_geometry(obj)))

    @property
    def is_empty(self) -> bool:
        return self.geometry is None or self.geometry.is_empty

    @property
    def pieces(self) -> list[Polygon]:
        """Disjoint polygon pieces (empty list for an empty Region)."""
        if self.is_empty:
            return []
        if isinstance(self.geometry, Polygon):
            return [self.geometry]
        return [g for g in getattr(self.geometry, "geoms", []) if isinstance(g, Polygon) and not g.is_empty]

    @property
    def bounds(self) -> tuple[float, float, float, float] | None:
        """(min_lon, min_lat, max_lon, max_lat), or None when empty."""
        if self.is_empty:
            return None
        return self.geometry.bounds

    def to_geojson(self) -> dict:
        """GeoJSON geometry mapping; an empty Region maps to an empty MultiPolygon."""
        if self.is_empty:
            return {"type": "MultiPolygon", "coordinates": []}
        pieces = self.pieces
        if len(pieces) == 1:
            return mapping(pieces[0])
        return mapping(MultiPolygon(pieces))

"""Suitability zone models."""

from __future__ import annotations

from dataclasses import dataclass

from .region import Region


@dataclass(frozen=True)
class SuitabilityZone:
    """
    A Region plus its mean solar radiation and class label.

    Attributes:
        class_id: Suitability class ("high", "moderate").
        region: Normalised union of the class polygons. For "moderate" this
            is the cleaned region with the "high" overlap removed.
        sr_mean: Mean solar radiation over the zone (kWh/m²/yr).
        label: Display label. Defaults to the class id.
    """

    class_id: str
    region: Region
    sr_mean: float
    label: str = ""

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.class_id)


@dataclass(frozen=True)
class AllowedZoneView:
    """
    Allowed-zone geometry handed to the rendering collaborator.

    Attributes:
        class_id: Selected class, or None before any selection.
        region: Allowed Region for the class (None when inactive).
        active: True when zones are loaded and the region is usable.
        reason: Why the view is inactive (e.g., "no-zones-loaded").
    """

    class_id: str | None
    region: Region | None = None
    active: bool = False
    reason: str | None = None

    def to_geojson(self) -> dict:
        """FeatureCollection with the allowed region and its ``bbox`` (empty when inactive)."""
        if not self.active or self.region is None or self.region.is_empty:
            return {"type": "FeatureCollection", "features": []}
        return {
            "type": "FeatureCollection",
            "bbox": list(self.region.bounds),
            "features": [
                {
                    "type": "Feature",
                    "geometry": self.region.to_geojson(),
                    "properties": {"class": self.class_id},
                }
            ],
        }

"""Result data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Union

from ..constants import M2_PER_KM2
from .region import Region
from .zones import SuitabilityZone

# EmptyResult reasons
NO_OVERLAP = "no-overlap"
NO_POLYGON = "no-polygon"
NON_FINITE = "non-finite"
NO_ZONES = "no-zones-loaded"


@dataclass(frozen=True)
class ZoneOverlap:
    """Overlap of the user polygon with one suitability zone."""

    class_id: str
    area_m2: float
    sr_mean: float


@dataclass(frozen=True)
class YieldResult:
    """
    Annual yield estimate for one region.

    Attributes:
        overlap_area_m2: Raw overlap area between user polygon and zones (m²).
        used_area_m2: Overlap scaled by the coverage fraction (m²).
        sr_weighted: Area-weighted solar radiation (kWh/m²/yr).
        energy_kwh: Annual energy (kWh/yr).
        households: Household equivalents. None when consumption <= 0.
        avoided_kg: Avoided CO2 emissions (kg/yr).
        overlaps: Per-zone overlaps that fed the weighting.
    """

    overlap_area_m2: float
    used_area_m2: float
    sr_weighted: float
    energy_kwh: float
    households: float | None
    avoided_kg: float
    overlaps: tuple[ZoneOverlap, ...] = ()

    empty = False

    @property
    def used_area_km2(self) -> float:
        return self.used_area_m2 / M2_PER_KM2

    @property
    def energy_gwh(self) -> float:
        return self.energy_kwh / 1e6

    @property
    def avoided_tonnes(self) -> float:
        return self.avoided_kg / 1000.0

    def to_dict(self) -> dict:
        return asdict(self)

    def report(self) -> str:
        """Return a human-readable summary report.

        Returns:
            Multi-line report string.
        """
        lines = [
            f"Solar potential: {self.energy_gwh:.2f} GWh/yr",
            f"  Overlap area: {self.overlap_area_m2 / M2_PER_KM2:.2f} km², "
            f"used: {self.used_area_km2:.2f} km²",
            f"  Weighted SR: {self.sr_weighted:.0f} kWh/m²/yr",
        ]
        if self.households is not None:
            lines.append(f"  Households: {self.households:,.0f}")
        else:
            lines.append("  Households: n/a (household consumption must be > 0)")
        lines.append(f"  Avoided CO2: {self.avoided_tonnes:,.0f} t/yr")
        for overlap in self.overlaps:
            lines.append(
                f"    {overlap.class_id}: {overlap.area_m2 / M2_PER_KM2:.3f} km² at {overlap.sr_mean:.0f} kWh/m²/yr"
            )
        return "\n".join(lines)


@dataclass(frozen=True)
class EmptyResult:
    """No yield to show; ``reason`` says why (no-overlap, no-polygon, ...)."""

    reason: str = NO_OVERLAP

    empty = True

    def report(self) -> str:
        return f"Solar potential: no result ({self.reason})"


Estimate = Union[YieldResult, EmptyResult]


@dataclass(frozen=True)
class SubmitResult:
    """
    Outcome of a polygon draw or edit.

    Attributes:
        accepted: True when the polygon became the current user polygon.
        result: Yield estimate for an accepted polygon.
        reason: Rejection reason: "outside-allowed-zone", "no-zones-loaded"
            or "degenerate-geometry".
    """

    accepted: bool
    result: Estimate | None = None
    reason: str | None = None
    polygon: Region | None = None


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading suitability zones."""

    ok: bool
    zones: tuple[SuitabilityZone, ...] = field(default=())
    reason: str | None = None

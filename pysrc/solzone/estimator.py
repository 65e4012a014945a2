"""
Annual yield estimation.

    energy      = sr_weighted * overlap_area * coverage * efficiency * PR
    households  = energy / household_consumption
    avoided_kg  = energy * emission_factor

The estimator trusts its caller to have clamped the scalar inputs
(``YieldInputs.clamped()``); it only refuses to hand NaN or infinity to the
display layer, returning an :class:`EmptyResult` instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .area import AreaMethod, region_area, weighted_intensity
from .constants import M2_PER_KM2, SELECTIONS
from .errors import InvalidInput
from .geometry import intersect
from .models.inputs import YieldInputs
from .models.results import NO_OVERLAP, NON_FINITE, EmptyResult, Estimate, YieldResult, ZoneOverlap
from .models.zones import SuitabilityZone
from .solzone_logging import get_logger
from .utils import is_finite_number

logger = get_logger(__name__)


def estimate_yield(
    overlap_area_m2: float,
    sr_weighted: float | None,
    inputs: YieldInputs,
    overlaps: tuple[ZoneOverlap, ...] = (),
) -> Estimate:
    """
    Map overlap area and weighted radiation to energy, households and CO2.

    Args:
        overlap_area_m2: Raw overlap area (m²) before the coverage fraction.
        sr_weighted: Area-weighted solar radiation (kWh/m²/yr). None means
            there was nothing to weight.
        inputs: Clamped yield inputs.
        overlaps: Per-zone overlaps, carried through to the result.

    Returns:
        YieldResult, or EmptyResult("no-overlap") for zero area and
        EmptyResult("non-finite") when any input or output is not finite.

    Example:
        >>> inputs = YieldInputs(efficiency=0.131, performance_ratio=0.75, coverage=0.4)
        >>> estimate_yield(1_000_000, 1800, inputs).energy_kwh
        70740000.0
    """
    if sr_weighted is None:
        return EmptyResult(NO_OVERLAP)

    scalars = (
        overlap_area_m2,
        sr_weighted,
        inputs.efficiency,
        inputs.performance_ratio,
        inputs.coverage,
        inputs.emission_factor,
    )
    if not all(is_finite_number(v) for v in scalars):
        return EmptyResult(NON_FINITE)
    if overlap_area_m2 <= 0.0:
        return EmptyResult(NO_OVERLAP)

    used_area = overlap_area_m2 * inputs.coverage
    energy = sr_weighted * used_area * inputs.efficiency * inputs.performance_ratio

    consumption = inputs.household_consumption
    households = energy / consumption if is_finite_number(consumption) and consumption > 0 else None
    avoided = energy * inputs.emission_factor

    if not all(is_finite_number(v) for v in (used_area, energy, avoided)):
        return EmptyResult(NON_FINITE)
    if households is not None and not is_finite_number(households):
        return EmptyResult(NON_FINITE)

    return YieldResult(
        overlap_area_m2=float(overlap_area_m2),
        used_area_m2=float(used_area),
        sr_weighted=float(sr_weighted),
        energy_kwh=float(energy),
        households=None if households is None else float(households),
        avoided_kg=float(avoided),
        overlaps=tuple(overlaps),
    )


def zone_overlaps(
    polygon: Any,
    zones: Iterable[SuitabilityZone],
    method: AreaMethod | str = AreaMethod.SPHERICAL,
) -> list[ZoneOverlap]:
    """Intersect a user polygon with each zone and measure the overlaps."""
    overlaps = []
    for zone in zones:
        if zone.region is None or zone.region.is_empty:
            continue
        piece = intersect(polygon, zone.region)
        if piece is None:
            continue
        piece_area = region_area(piece, method)
        if piece_area > 0.0:
            overlaps.append(ZoneOverlap(zone.class_id, piece_area, zone.sr_mean))
    return overlaps


def estimate_for_polygon(
    polygon: Any,
    zones: Iterable[SuitabilityZone],
    inputs: YieldInputs,
    method: AreaMethod | str = AreaMethod.SPHERICAL,
) -> Estimate:
    """
    Estimate the yield of a user polygon against non-overlapping zones.

    Returns:
        YieldResult, or EmptyResult("no-overlap") when the polygon touches no
        zone area.
    """
    overlaps = zone_overlaps(polygon, zones, method)
    if not overlaps:
        return EmptyResult(NO_OVERLAP)
    total = sum(o.area_m2 for o in overlaps)
    sr = weighted_intensity(overlaps)
    logger.debug(f"Polygon overlaps {len(overlaps)} zone(s), {total:.0f} m² at {sr} kWh/m²/yr")
    return estimate_yield(total, sr, inputs, overlaps=tuple(overlaps))


def fallback_intensity(class_id: str, sr_by_class: Mapping[str, float]) -> float:
    """
    Solar radiation to show for a selection before any area is known.

    A single class shows its own ``sr_mean``; the combined ``high_mod``
    selection shows the plain mean of both classes.

    Raises:
        InvalidInput: For an unknown class or a missing class value.
    """
    classes = _selection_classes(class_id)
    try:
        values = [float(sr_by_class[c]) for c in classes]
    except KeyError as e:
        raise InvalidInput("sr_by_class", str(e), f"missing radiation for class {e}") from e
    return sum(values) / len(values)


def estimate_preset(
    class_id: str,
    preset_km2: Mapping[str, float],
    sr_by_class: Mapping[str, float],
    inputs: YieldInputs,
) -> Estimate:
    """
    Estimate from preset per-class areas instead of a drawn polygon.

    ``high`` uses the high area only, ``moderate`` the moderate area, and
    ``high_mod`` sums both with radiation weighted by the preset areas.

    Args:
        class_id: Selection ("high", "moderate", "high_mod").
        preset_km2: Available area per class in km².
        sr_by_class: ``sr_mean`` per class (kWh/m²/yr).
        inputs: Clamped yield inputs.
    """
    overlaps = []
    for c in _selection_classes(class_id):
        area_km2 = preset_km2.get(c, 0.0)
        if c not in sr_by_class:
            raise InvalidInput("sr_by_class", c, f"missing radiation for class '{c}'")
        if not (is_finite_number(area_km2) and is_finite_number(sr_by_class[c])):
            return EmptyResult(NON_FINITE)
        overlaps.append(ZoneOverlap(c, area_km2 * M2_PER_KM2, sr_by_class[c]))

    total = sum(o.area_m2 for o in overlaps)
    return estimate_yield(total, weighted_intensity(overlaps), inputs, overlaps=tuple(overlaps))


def _selection_classes(class_id: str) -> tuple[str, ...]:
    if class_id not in SELECTIONS:
        raise InvalidInput("class_id", class_id, f"expected one of {sorted(SELECTIONS)}")
    return SELECTIONS[class_id]

"""
Allowed-zone state machine.

States::

    PENDING --load ok--> LOADED(selected_class) --select_class--> LOADED(other) ...
       |
       +--load failed--> FAILED (terminal until the host restarts)

All transitions are pure functions of an immutable :class:`EstimatorState`:
they return a new state plus a typed outcome and never patch derived values
in place. :class:`SolzoneSession` owns one state for a UI collaborator.

Out-of-zone handling differs by event: a rejected draw leaves the prior
polygon and result untouched, while a rejected edit clears both under the
default :attr:`EditPolicy.CLEAR` (``EditPolicy.REJECT`` makes edits behave
like draws).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
from types import SimpleNamespace
from typing import Any

import requests

from .area import AreaMethod
from .config import load_params, valid_ranges
from .constants import CLASS_HIGH, CLASS_MODERATE, SELECTIONS
from .errors import GeometryFailure, InvalidInput, InvalidZoneData, OutsideAllowedZone, SolzoneError, ZonesNotLoaded
from .estimator import estimate_for_polygon
from .geometry import clean_zones, union, validated_region, within
from .io import DEFAULT_TIMEOUT_S, parse_zone_features, read_feature_collection
from .models.inputs import Ranges, YieldInputs
from .models.region import Region
from .models.results import NO_POLYGON, NO_ZONES, EmptyResult, Estimate, LoadResult, SubmitResult
from .models.zones import AllowedZoneView, SuitabilityZone
from .solzone_logging import get_logger

logger = get_logger(__name__)

INVALID_INPUT = InvalidInput.reason
UNKNOWN_CLASS = "unknown-class"


class LoadStatus(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class EditPolicy(str, Enum):
    """What an out-of-zone edit does to the current polygon."""

    CLEAR = "clear"
    REJECT = "reject"


@dataclass(frozen=True)
class EstimatorState:
    """
    Everything the estimator core owns.

    Attributes:
        status: Zone loading status.
        zones: Suitability zones by class id (moderate already cleaned).
        selected_class: Active selection ("high", "moderate", "high_mod").
        allowed_region: Union of the selected class zones.
        user_polygon: Current accepted user polygon.
        result: Last estimate for the user polygon.
        load_error: Why loading failed, when status is FAILED.
        area_method: Surface model for overlap areas.
        input_ranges: Clamp ranges for yield inputs. None uses the bundled
            ranges.
    """

    status: LoadStatus = LoadStatus.PENDING
    zones: dict[str, SuitabilityZone] = field(default_factory=dict)
    selected_class: str | None = None
    allowed_region: Region | None = None
    user_polygon: Region | None = None
    result: Estimate | None = None
    load_error: str | None = None
    area_method: AreaMethod = AreaMethod.SPHERICAL
    input_ranges: Ranges | None = None

    @property
    def loaded(self) -> bool:
        return self.status is LoadStatus.LOADED

    @property
    def zone_list(self) -> list[SuitabilityZone]:
        return list(self.zones.values())


# =============================================================================
# Loading
# =============================================================================


def build_zones(high_collection: dict, moderate_collection: dict) -> tuple[SuitabilityZone, ...]:
    """
    Turn the two suitability FeatureCollections into non-overlapping zones.

    The moderate zone is reduced by the high zone once, here.

    Raises:
        InvalidZoneData: If the collections are malformed or the high layer
            has no usable polygons.
    """
    high = parse_zone_features(high_collection, expected_class=CLASS_HIGH)
    moderate = None
    if moderate_collection.get("features"):
        moderate = parse_zone_features(moderate_collection, expected_class=CLASS_MODERATE)

    high_region, moderate_region = clean_zones(high.polygons, moderate.polygons if moderate else ())
    if high_region is None:
        raise InvalidZoneData("High suitability layer has no usable polygons", field="geometry")

    zones = [SuitabilityZone(CLASS_HIGH, high_region, high.sr_mean, label="High suitability")]
    if moderate is not None and moderate_region is not None:
        zones.append(SuitabilityZone(CLASS_MODERATE, moderate_region, moderate.sr_mean, label="Moderate suitability"))
    return tuple(zones)


async def load_zones(
    state: EstimatorState,
    raw_high: dict | str,
    raw_moderate: dict | str,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> tuple[EstimatorState, LoadResult]:
    """
    Load suitability zones once.

    Sources may be FeatureCollection dicts, JSON text, file paths or URLs;
    reading happens off the event loop. On success the high class is
    selected. A failed load is terminal for this state.

    Returns:
        ``(new_state, LoadResult)``.
    """
    if state.status is LoadStatus.FAILED:
        return state, LoadResult(ok=False, reason=state.load_error or ZonesNotLoaded.reason)
    if state.loaded:
        return state, LoadResult(ok=True, zones=tuple(state.zone_list))

    try:
        high_fc, moderate_fc = await asyncio.gather(
            asyncio.to_thread(read_feature_collection, raw_high, timeout),
            asyncio.to_thread(read_feature_collection, raw_moderate, timeout),
        )
        zones = build_zones(high_fc, moderate_fc)
    except (OSError, requests.RequestException, SolzoneError) as e:
        logger.error(f"Failed to load suitability zones: {e}")
        failed = replace(state, status=LoadStatus.FAILED, load_error=str(e))
        return failed, LoadResult(ok=False, reason=str(e))

    loaded = replace(
        state,
        status=LoadStatus.LOADED,
        zones={z.class_id: z for z in zones},
        load_error=None,
    )
    loaded, _ = select_class(loaded, CLASS_HIGH)
    logger.info(f"Loaded {len(zones)} suitability zone(s): {', '.join(z.class_id for z in zones)}")
    return loaded, LoadResult(ok=True, zones=zones)


# =============================================================================
# Transitions
# =============================================================================


def allowed_region_for(zones: dict[str, SuitabilityZone], class_id: str) -> Region:
    """Union of the zones that make up a selection (empty when none)."""
    regions = [zones[c].region for c in SELECTIONS[class_id] if c in zones and not zones[c].region.is_empty]
    merged = union(regions)
    return merged if merged is not None else Region.empty()


def select_class(state: EstimatorState, class_id: str) -> tuple[EstimatorState, AllowedZoneView]:
    """
    Activate a suitability class.

    Recomputes the allowed region, drops a user polygon that is not fully
    within it, and always clears the previous result.
    """
    if not state.loaded:
        return state, AllowedZoneView(class_id, active=False, reason=ZonesNotLoaded.reason)
    if class_id not in SELECTIONS:
        logger.warning(f"Unknown suitability class '{class_id}'")
        return state, AllowedZoneView(class_id, active=False, reason=UNKNOWN_CLASS)

    allowed = allowed_region_for(state.zones, class_id)
    user_polygon = state.user_polygon
    if user_polygon is not None and not within(user_polygon, allowed):
        logger.info(f"Current polygon is outside the '{class_id}' zone, clearing it")
        user_polygon = None

    new_state = replace(
        state,
        selected_class=class_id,
        allowed_region=allowed,
        user_polygon=user_polygon,
        result=None,
    )
    return new_state, AllowedZoneView(class_id, region=allowed, active=True)


def _check_polygon(state: EstimatorState, polygon: Any) -> Region:
    """Validate a drawn/edited polygon against the allowed zone."""
    if not state.loaded:
        raise ZonesNotLoaded(state.load_error)
    region = validated_region(polygon, "submit")
    if not within(region, state.allowed_region):
        raise OutsideAllowedZone(state.selected_class)
    return region


def _estimate(state: EstimatorState, region: Region, inputs: YieldInputs) -> Estimate:
    try:
        inputs = inputs.clamped(state.input_ranges)
    except InvalidInput as e:
        logger.warning(str(e))
        return EmptyResult(INVALID_INPUT)
    return estimate_for_polygon(region, state.zone_list, inputs, state.area_method)


def submit_polygon(state: EstimatorState, polygon: Any, inputs: YieldInputs) -> tuple[EstimatorState, SubmitResult]:
    """
    Accept a newly drawn polygon if it lies inside the allowed zone.

    A rejection leaves the prior polygon and result untouched.

    Returns:
        ``(new_state, SubmitResult)``; rejection reasons are
        "no-zones-loaded", "degenerate-geometry" and "outside-allowed-zone".
    """
    try:
        region = _check_polygon(state, polygon)
    except (ZonesNotLoaded, GeometryFailure, OutsideAllowedZone) as e:
        logger.info(f"Polygon rejected: {e}")
        return state, SubmitResult(accepted=False, reason=e.reason)

    result = _estimate(state, region, inputs)
    new_state = replace(state, user_polygon=region, result=result)
    return new_state, SubmitResult(accepted=True, result=result, polygon=region)


def edit_polygon(
    state: EstimatorState,
    polygon: Any,
    inputs: YieldInputs,
    policy: EditPolicy = EditPolicy.CLEAR,
) -> tuple[EstimatorState, SubmitResult]:
    """
    Replace the current polygon with an edited version.

    Validation matches :func:`submit_polygon`. On failure ``EditPolicy.CLEAR``
    clears the polygon and result; ``EditPolicy.REJECT`` keeps them. Edits
    before zones are loaded never change state.
    """
    new_state, outcome = submit_polygon(state, polygon, inputs)
    if outcome.accepted or outcome.reason == ZonesNotLoaded.reason:
        return new_state, outcome
    if EditPolicy(policy) is EditPolicy.CLEAR:
        return clear(state), outcome
    return state, outcome


def clear(state: EstimatorState) -> EstimatorState:
    """Drop the user polygon and result. Always succeeds."""
    return replace(state, user_polygon=None, result=None)


def recompute(state: EstimatorState, inputs: YieldInputs) -> tuple[EstimatorState, Estimate]:
    """
    Re-run the estimate for the current polygon with new inputs.

    Returns:
        ``(new_state, estimate)``; an EmptyResult when zones are not loaded
        or no polygon is drawn.
    """
    if not state.loaded:
        return state, EmptyResult(NO_ZONES)
    if state.user_polygon is None:
        return replace(state, result=None), EmptyResult(NO_POLYGON)
    result = _estimate(state, state.user_polygon, inputs)
    return replace(state, result=result), result


# =============================================================================
# Owning facade
# =============================================================================


class SolzoneSession:
    """
    Owns one :class:`EstimatorState` on behalf of a UI collaborator.

    Example:
        >>> session = SolzoneSession()
        >>> await session.load_zones("high.geojson", "moderate.geojson")
        >>> view = session.select_class("high_mod")
        >>> outcome = session.submit_polygon(drawn_geojson)
        >>> if outcome.accepted:
        ...     print(outcome.result.report())
    """

    def __init__(
        self,
        inputs: YieldInputs | None = None,
        params: SimpleNamespace | None = None,
        edit_policy: EditPolicy = EditPolicy.CLEAR,
        area_method: AreaMethod | str | None = None,
    ):
        self.params = params if params is not None else load_params()
        self.inputs = inputs if inputs is not None else YieldInputs.from_params(self.params)
        self.edit_policy = EditPolicy(edit_policy)
        method = area_method if area_method is not None else self.params.Area.Value.method
        self.timeout = float(self.params.Fetch.Value.timeout_s)
        self._state = EstimatorState(area_method=AreaMethod(method), input_ranges=valid_ranges(self.params))

    @property
    def state(self) -> EstimatorState:
        return self._state

    async def load_zones(self, raw_high: dict | str, raw_moderate: dict | str) -> LoadResult:
        self._state, outcome = await load_zones(self._state, raw_high, raw_moderate, self.timeout)
        return outcome

    def select_class(self, class_id: str) -> AllowedZoneView:
        self._state, view = select_class(self._state, class_id)
        return view

    def submit_polygon(self, polygon: Any) -> SubmitResult:
        self._state, outcome = submit_polygon(self._state, polygon, self.inputs)
        return outcome

    def edit_polygon(self, polygon: Any) -> SubmitResult:
        self._state, outcome = edit_polygon(self._state, polygon, self.inputs, self.edit_policy)
        return outcome

    def clear(self) -> None:
        self._state = clear(self._state)

    def recompute(self, inputs: YieldInputs | None = None) -> Estimate:
        """Re-estimate with new inputs (kept for later submissions)."""
        if inputs is not None:
            self.inputs = inputs
        self._state, result = recompute(self._state, self.inputs)
        return result

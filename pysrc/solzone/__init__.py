"""solzone - Solar potential inside user-drawn regions.

Combines suitability zones (class label plus mean solar radiation), a panel
technology efficiency, a performance ratio, a coverage fraction and a grid
emission factor into annual energy, household equivalents and avoided CO2.

Quick start::

    import asyncio
    import solzone

    session = solzone.SolzoneSession()
    asyncio.run(session.load_zones("high.geojson", "moderate.geojson"))
    session.select_class("high_mod")
    outcome = session.submit_polygon(drawn_polygon_geojson)
    if outcome.accepted:
        print(outcome.result.report())

Geometry helpers::

    region = solzone.union(polygons)
    solzone.area(region)  # m²
"""

import logging
from importlib.metadata import PackageNotFoundError, version

logger = logging.getLogger(__name__)

# Version: single source of truth is pyproject.toml
try:
    __version__ = version("solzone")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for source checkouts without metadata

from . import io  # noqa: E402
from .area import AreaMethod, area, geodesic_area, region_area, weighted_intensity  # noqa: E402
from .config import load_params, panel_efficiency, panel_technologies, valid_ranges  # noqa: E402
from .errors import (  # noqa: E402
    GeometryFailure,
    InvalidInput,
    InvalidZoneData,
    OutsideAllowedZone,
    SolzoneError,
    ZonesNotLoaded,
)
from .estimator import estimate_for_polygon, estimate_preset, estimate_yield, fallback_intensity  # noqa: E402
from .geometry import clean_zones, difference, intersect, union, within  # noqa: E402
from .models import (  # noqa: E402
    AllowedZoneView,
    EmptyResult,
    LoadResult,
    Region,
    SubmitResult,
    SuitabilityZone,
    YieldInputs,
    YieldResult,
    ZoneOverlap,
)
from .session import EditPolicy, EstimatorState, LoadStatus, SolzoneSession  # noqa: E402

__all__ = [
    "__version__",
    "io",
    # Geometry
    "union",
    "difference",
    "intersect",
    "within",
    "clean_zones",
    # Area
    "AreaMethod",
    "area",
    "geodesic_area",
    "region_area",
    "weighted_intensity",
    # Estimation
    "estimate_yield",
    "estimate_for_polygon",
    "estimate_preset",
    "fallback_intensity",
    # Configuration
    "load_params",
    "panel_efficiency",
    "panel_technologies",
    "valid_ranges",
    # Models
    "Region",
    "SuitabilityZone",
    "AllowedZoneView",
    "YieldInputs",
    "YieldResult",
    "EmptyResult",
    "ZoneOverlap",
    "SubmitResult",
    "LoadResult",
    # Session
    "SolzoneSession",
    "EstimatorState",
    "LoadStatus",
    "EditPolicy",
    # Errors
    "SolzoneError",
    "GeometryFailure",
    "OutsideAllowedZone",
    "ZonesNotLoaded",
    "InvalidInput",
    "InvalidZoneData",
]

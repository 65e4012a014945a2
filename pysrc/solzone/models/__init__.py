"""Data models for solzone.

Modules
-------
region
    ``Region``: disjoint polygon pieces in (lon, lat).
zones
    ``SuitabilityZone`` and ``AllowedZoneView``.
inputs
    ``YieldInputs``: efficiency, PR, coverage, consumption, emission factor.
results
    ``YieldResult``, ``EmptyResult``, ``SubmitResult``, ``LoadResult``.
"""

from .inputs import YieldInputs
from .region import Region
from .results import EmptyResult, Estimate, LoadResult, SubmitResult, YieldResult, ZoneOverlap
from .zones import AllowedZoneView, SuitabilityZone

__all__ = [
    # Geometry
    "Region",
    # Zones
    "SuitabilityZone",
    "AllowedZoneView",
    # Inputs
    "YieldInputs",
    # Results
    "YieldResult",
    "EmptyResult",
    "Estimate",
    "ZoneOverlap",
    "SubmitResult",
    "LoadResult",
]

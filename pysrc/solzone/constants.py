"""
Physical constants and default parameters for solzone.

Defaults here mirror the bundled ``data/default_params.json`` and are used
when no parameter file is supplied.
"""

# =============================================================================
# Geodesy
# =============================================================================

# Earth radius used for spherical-excess polygon area (m)
# WGS84 equatorial radius, the figure used by web-map area helpers
EARTH_RADIUS_M = 6378137.0

# Ellipsoid for pyproj geodesic area
GEOD_ELLPS = "WGS84"

# Square meters per square kilometer
M2_PER_KM2 = 1_000_000.0

# Relative tolerance for area comparisons in containment and equivalence checks
AREA_REL_TOLERANCE = 1e-9


# =============================================================================
# Suitability classes
# =============================================================================

CLASS_HIGH = "high"
CLASS_MODERATE = "moderate"
# Combined selection: high plus cleaned moderate
CLASS_HIGH_MOD = "high_mod"

SUITABILITY_CLASSES = (CLASS_HIGH, CLASS_MODERATE, CLASS_HIGH_MOD)

# Zones that make up each selectable class
SELECTIONS = {
    CLASS_HIGH: (CLASS_HIGH,),
    CLASS_MODERATE: (CLASS_MODERATE,),
    CLASS_HIGH_MOD: (CLASS_HIGH, CLASS_MODERATE),
}


# =============================================================================
# Default yield inputs
# =============================================================================

DEFAULT_EFFICIENCY = 0.20  # monocrystalline module efficiency
DEFAULT_PERFORMANCE_RATIO = 0.75
DEFAULT_COVERAGE = 0.40  # deployable share of the raw overlap
DEFAULT_HOUSEHOLD_KWH = 2400.0  # annual household consumption (kWh/yr)
DEFAULT_EMISSION_FACTOR = 0.45  # grid emission factor (kg CO2/kWh)


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    "EARTH_RADIUS_M",
    "GEOD_ELLPS",
    "M2_PER_KM2",
    "AREA_REL_TOLERANCE",
    "CLASS_HIGH",
    "CLASS_MODERATE",
    "CLASS_HIGH_MOD",
    "SUITABILITY_CLASSES",
    "SELECTIONS",
    "DEFAULT_EFFICIENCY",
    "DEFAULT_PERFORMANCE_RATIO",
    "DEFAULT_COVERAGE",
    "DEFAULT_HOUSEHOLD_KWH",
    "DEFAULT_EMISSION_FACTOR",
]

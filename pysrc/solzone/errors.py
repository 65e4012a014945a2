"""solzone error types for actionable error messages.

These exceptions describe what went wrong and carry a stable ``reason``
code, so the session layer can turn them into typed result values for
the UI collaborator instead of letting them escape.

Example:
    try:
        region = solzone.geometry.union_strict(polygons)
    except solzone.GeometryFailure as e:
        print(f"{e.operation} failed: {e.reason}")
"""

from __future__ import annotations


class SolzoneError(Exception):
    """Base class for all solzone errors."""

    reason = "error"


class GeometryFailure(SolzoneError):
    """Raised when a geometry operation cannot be completed.

    Degenerate polygons (fewer than three distinct vertices, non-finite
    coordinates, non-polygonal types) and GEOS topology failures end up here.

    Attributes:
        operation: The operation that failed (e.g., "union", "intersect").
        detail: Human-readable description of the failure.
    """

    reason = "degenerate-geometry"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Geometry {operation} failed: {detail}")


class OutsideAllowedZone(SolzoneError):
    """Raised when a user polygon is not fully inside the allowed zone.

    Attributes:
        class_id: The suitability class whose zone was checked.
    """

    reason = "outside-allowed-zone"

    def __init__(self, class_id: str | None):
        self.class_id = class_id
        super().__init__(f"Polygon is not fully within the allowed zone for class '{class_id}'")


class ZonesNotLoaded(SolzoneError):
    """Raised when zones are pending or failed to load.

    Attributes:
        detail: Why the zones are unavailable (optional).
    """

    reason = "no-zones-loaded"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = "Suitability zones are not loaded"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class InvalidInput(SolzoneError):
    """Raised when a scalar yield input is non-finite or out of range.

    Attributes:
        parameter: The problematic input (e.g., "efficiency", "coverage").
        value: The invalid value.
        detail: Why the value is invalid.
    """

    reason = "invalid-input"

    def __init__(self, parameter: str, value: float | str, detail: str | None = None):
        self.parameter = parameter
        self.value = value
        self.detail = detail
        message = f"Invalid value for '{parameter}': {value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class InvalidZoneData(SolzoneError):
    """Raised when a suitability FeatureCollection is malformed.

    Attributes:
        message: Human-readable error description.
        field: Name of the problematic field (e.g., "sr_mean", "geometry").
        expected: What was expected (optional).
        got: What was actually provided (optional).
    """

    reason = "invalid-zone-data"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        expected: str | None = None,
        got: str | None = None,
    ):
        self.field = field
        self.expected = expected
        self.got = got
        super().__init__(message)

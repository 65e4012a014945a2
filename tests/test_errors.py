"""
Tests for the error hierarchy and reason codes.
"""

import pytest
from solzone import (
    GeometryFailure,
    InvalidInput,
    InvalidZoneData,
    OutsideAllowedZone,
    SolzoneError,
    ZonesNotLoaded,
)


class TestSolzoneErrorHierarchy:
    """Tests for the error class hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            GeometryFailure("union", "self-intersection"),
            OutsideAllowedZone("high"),
            ZonesNotLoaded(),
            InvalidInput("coverage", 1.5),
            InvalidZoneData("bad"),
        ],
    )
    def test_all_errors_are_solzone_errors(self, error):
        """SolzoneError can be used to catch every solzone error."""
        assert isinstance(error, SolzoneError)
        assert isinstance(error, Exception)

    def test_reason_codes_are_stable(self):
        """Reason codes are the values the UI collaborator sees."""
        assert GeometryFailure.reason == "degenerate-geometry"
        assert OutsideAllowedZone.reason == "outside-allowed-zone"
        assert ZonesNotLoaded.reason == "no-zones-loaded"
        assert InvalidInput.reason == "invalid-input"
        assert InvalidZoneData.reason == "invalid-zone-data"


class TestErrorAttributes:
    """Errors carry actionable details."""

    def test_geometry_failure_has_operation(self):
        error = GeometryFailure("intersect", "Ring Self-intersection[1 1]")
        assert error.operation == "intersect"
        assert error.detail == "Ring Self-intersection[1 1]"
        assert "intersect" in str(error)

    def test_outside_allowed_zone_has_class(self):
        error = OutsideAllowedZone("moderate")
        assert error.class_id == "moderate"
        assert "moderate" in str(error)

    def test_zones_not_loaded_detail(self):
        assert "timeout" in str(ZonesNotLoaded("timeout"))
        assert ZonesNotLoaded().detail is None

    def test_invalid_input_has_parameter(self):
        error = InvalidInput("efficiency", float("nan"), "must be a finite number")
        assert error.parameter == "efficiency"
        assert "efficiency" in str(error)
        assert "finite" in str(error)

    def test_invalid_zone_data_has_fields(self):
        error = InvalidZoneData("Bad sr_mean", field="sr_mean", expected="finite number", got="'abc'")
        assert error.field == "sr_mean"
        assert error.expected == "finite number"
        assert error.got == "'abc'"
        assert str(error) == "Bad sr_mean"

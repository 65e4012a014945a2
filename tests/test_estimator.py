"""
Tests for the yield estimator.

Reference scenario: 1 km² overlap at 1800 kWh/m²/yr, 40% coverage, 13.1%
efficiency, PR 0.75 gives 70.74 GWh/yr, about 29,475 households at
2400 kWh/yr and 31,833 t CO2/yr avoided at 0.45 kg/kWh.
"""

import math

import pytest
from conftest import box_area, make_box
from solzone.errors import InvalidInput
from solzone.estimator import (
    estimate_for_polygon,
    estimate_preset,
    estimate_yield,
    fallback_intensity,
    zone_overlaps,
)
from solzone.geometry import clean_zones
from solzone.models import EmptyResult, SuitabilityZone, YieldInputs, YieldResult


@pytest.fixture
def scenario_inputs():
    return YieldInputs(
        efficiency=0.131,
        performance_ratio=0.75,
        coverage=0.4,
        household_consumption=2400.0,
        emission_factor=0.45,
    )


@pytest.fixture
def zones():
    high, moderate = clean_zones(
        [make_box(35.0, 37.0, 35.2, 37.2), make_box(35.2, 37.0, 35.4, 37.2)],
        [make_box(35.3, 37.1, 35.6, 37.3)],
    )
    return [SuitabilityZone("high", high, 1800.0), SuitabilityZone("moderate", moderate, 1600.0)]


def _all_fields_finite(result: YieldResult) -> bool:
    values = [result.overlap_area_m2, result.used_area_m2, result.sr_weighted, result.energy_kwh, result.avoided_kg]
    if result.households is not None:
        values.append(result.households)
    return all(math.isfinite(v) for v in values)


class TestEstimateYield:
    """Pure yield formula."""

    def test_reference_scenario(self, scenario_inputs):
        result = estimate_yield(1_000_000.0, 1800.0, scenario_inputs)

        assert isinstance(result, YieldResult)
        assert result.used_area_m2 == pytest.approx(400_000.0)
        assert result.energy_kwh == pytest.approx(70_740_000.0)
        assert result.energy_gwh == pytest.approx(70.74)
        assert result.households == pytest.approx(29_475.0)
        assert result.avoided_kg == pytest.approx(31_833_000.0)
        assert result.avoided_tonnes == pytest.approx(31_833.0)

    def test_zero_overlap_is_empty(self, scenario_inputs):
        result = estimate_yield(0.0, 1800.0, scenario_inputs)
        assert isinstance(result, EmptyResult)
        assert result.empty
        assert result.reason == "no-overlap"

    def test_missing_intensity_is_no_overlap(self, scenario_inputs):
        assert estimate_yield(1000.0, None, scenario_inputs).reason == "no-overlap"

    def test_non_finite_inputs_give_empty_result(self, scenario_inputs):
        for bad in (float("nan"), float("inf")):
            inputs = YieldInputs(efficiency=bad, performance_ratio=0.75, coverage=0.4)
            result = estimate_yield(1_000_000.0, 1800.0, inputs)
            assert result.empty
            assert result.reason == "non-finite"

        assert estimate_yield(float("nan"), 1800.0, scenario_inputs).reason == "non-finite"

    def test_overflow_gives_empty_result(self, scenario_inputs):
        result = estimate_yield(1e308, 1e308, scenario_inputs)
        assert result.empty

    def test_non_positive_consumption_has_no_households(self):
        inputs = YieldInputs(efficiency=0.2, performance_ratio=0.8, coverage=1.0, household_consumption=0.0)
        result = estimate_yield(1000.0, 1000.0, inputs)
        assert result.households is None
        assert result.energy_kwh == pytest.approx(160_000.0)
        assert "n/a" in result.report()

    def test_result_fields_are_finite(self, scenario_inputs):
        result = estimate_yield(123.0, 1700.0, scenario_inputs)
        assert not result.empty
        assert _all_fields_finite(result)

    def test_report_mentions_energy(self, scenario_inputs):
        report = estimate_yield(1_000_000.0, 1800.0, scenario_inputs).report()
        assert "70.74 GWh/yr" in report
        assert "29,475" in report


class TestEstimateForPolygon:
    """Intersecting a user polygon against suitability zones."""

    def test_polygon_inside_high_zone(self, zones, scenario_inputs):
        polygon = make_box(35.05, 37.05, 35.15, 37.15)
        result = estimate_for_polygon(polygon, zones, scenario_inputs)

        assert not result.empty
        assert result.sr_weighted == pytest.approx(1800.0)
        assert result.overlap_area_m2 == pytest.approx(box_area(35.05, 37.05, 35.15, 37.15), rel=1e-9)
        assert [o.class_id for o in result.overlaps] == ["high"]

    def test_polygon_across_zones_is_weighted(self, zones, scenario_inputs):
        # Half in high (lat 37.1-37.2), half in cleaned moderate (lat 37.2-37.3)
        polygon = make_box(35.3, 37.1, 35.4, 37.3)
        result = estimate_for_polygon(polygon, zones, scenario_inputs)

        high_part = box_area(35.3, 37.1, 35.4, 37.2)
        moderate_part = box_area(35.3, 37.2, 35.4, 37.3)
        expected_sr = (high_part * 1800.0 + moderate_part * 1600.0) / (high_part + moderate_part)

        assert {o.class_id for o in result.overlaps} == {"high", "moderate"}
        assert result.overlap_area_m2 == pytest.approx(high_part + moderate_part, rel=1e-9)
        assert result.sr_weighted == pytest.approx(expected_sr, rel=1e-9)

    def test_overlap_between_layers_is_counted_once(self, zones):
        # The square where raw high and moderate overlap belongs to high only
        overlaps = zone_overlaps(make_box(35.3, 37.1, 35.4, 37.2), zones)
        assert [o.class_id for o in overlaps] == ["high"]

    def test_polygon_outside_all_zones_is_empty(self, zones, scenario_inputs):
        result = estimate_for_polygon(make_box(10.0, 50.0, 10.1, 50.1), zones, scenario_inputs)
        assert result.empty
        assert result.reason == "no-overlap"

    def test_geodesic_method(self, zones, scenario_inputs):
        polygon = make_box(35.05, 37.05, 35.15, 37.15)
        spherical = estimate_for_polygon(polygon, zones, scenario_inputs)
        geodesic = estimate_for_polygon(polygon, zones, scenario_inputs, method="geodesic")
        assert geodesic.energy_kwh == pytest.approx(spherical.energy_kwh, rel=0.01)


class TestPresetMode:
    """Estimates from preset per-class areas."""

    SR = {"high": 1800.0, "moderate": 1600.0}
    PRESET = {"high": 10.0, "moderate": 30.0}

    def test_high_uses_high_area_only(self, scenario_inputs):
        result = estimate_preset("high", self.PRESET, self.SR, scenario_inputs)
        assert result.overlap_area_m2 == pytest.approx(10.0e6)
        assert result.sr_weighted == pytest.approx(1800.0)

    def test_high_mod_sums_areas_and_weights_radiation(self, scenario_inputs):
        result = estimate_preset("high_mod", self.PRESET, self.SR, scenario_inputs)
        assert result.overlap_area_m2 == pytest.approx(40.0e6)
        assert result.sr_weighted == pytest.approx((10 * 1800 + 30 * 1600) / 40)

    def test_zero_preset_area_is_empty(self, scenario_inputs):
        result = estimate_preset("moderate", {"high": 5.0}, self.SR, scenario_inputs)
        assert result.empty

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_preset_area(self, scenario_inputs, bad):
        result = estimate_preset("high_mod", {"high": bad, "moderate": 30.0}, self.SR, scenario_inputs)
        assert result.empty
        assert result.reason == "non-finite"

    def test_non_finite_radiation(self, scenario_inputs):
        result = estimate_preset("high", self.PRESET, {"high": float("nan")}, scenario_inputs)
        assert result.reason == "non-finite"

    def test_unknown_class_raises(self, scenario_inputs):
        with pytest.raises(InvalidInput) as excinfo:
            estimate_preset("low", self.PRESET, self.SR, scenario_inputs)
        assert excinfo.value.parameter == "class_id"


class TestFallbackIntensity:
    """Radiation shown before any area is known."""

    def test_single_class(self):
        assert fallback_intensity("high", {"high": 1800.0, "moderate": 1600.0}) == 1800.0

    def test_combined_selection_is_plain_mean(self):
        assert fallback_intensity("high_mod", {"high": 1800.0, "moderate": 1600.0}) == 1700.0

    def test_missing_class_raises(self):
        with pytest.raises(InvalidInput):
            fallback_intensity("high_mod", {"high": 1800.0})

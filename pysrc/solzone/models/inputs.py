"""Yield input configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import SimpleNamespace

from ..constants import (
    DEFAULT_COVERAGE,
    DEFAULT_EFFICIENCY,
    DEFAULT_EMISSION_FACTOR,
    DEFAULT_HOUSEHOLD_KWH,
    DEFAULT_PERFORMANCE_RATIO,
)
from ..errors import InvalidInput
from ..utils import clamp, is_finite_number

Ranges = dict[str, tuple[float, float | None]]

INPUT_NAMES = ("efficiency", "performance_ratio", "coverage", "household_consumption", "emission_factor")


@dataclass(frozen=True)
class YieldInputs:
    """
    Scalar configuration for the yield estimator.

    The estimator does not range-check these values: callers validate or
    clamp first (``validate()`` / ``clamped()``) against the ``Valid_ranges``
    of a parameter file, the bundled one when none is given. Non-finite
    values that slip through make the estimator return an empty result
    rather than NaN.

    Attributes:
        efficiency: Panel technology efficiency (0-1).
        performance_ratio: System performance ratio (0-1).
        coverage: Deployable fraction of the raw overlap area (0-1).
        household_consumption: Annual household consumption (kWh/yr, > 0).
        emission_factor: Grid emission factor (kg CO2/kWh, >= 0).

    Examples:
        >>> inputs = YieldInputs.defaults()
        >>> inputs = YieldInputs.from_params(load_params(), technology="thin_film")
        >>> inputs = YieldInputs.from_form(efficiency=0.131, performance_ratio=0.75, coverage_pct=40)
    """

    efficiency: float = DEFAULT_EFFICIENCY
    performance_ratio: float = DEFAULT_PERFORMANCE_RATIO
    coverage: float = DEFAULT_COVERAGE
    household_consumption: float = DEFAULT_HOUSEHOLD_KWH
    emission_factor: float = DEFAULT_EMISSION_FACTOR

    @classmethod
    def defaults(cls) -> YieldInputs:
        return cls()

    @classmethod
    def from_params(cls, params: SimpleNamespace | None = None, technology: str | None = None) -> YieldInputs:
        """
        Build inputs from a loaded parameter file.

        Args:
            params: Result of ``load_params()``. None loads the bundled defaults.
            technology: Panel technology key. None uses the file's default.
        """
        from ..config import load_params, panel_efficiency

        if params is None:
            params = load_params()
        settings = params.Yield_settings.Value
        return cls(
            efficiency=panel_efficiency(technology, params),
            performance_ratio=float(settings.performance_ratio),
            coverage=float(settings.coverage),
            household_consumption=float(settings.household_consumption),
            emission_factor=float(settings.emission_factor),
        )

    @classmethod
    def from_form(
        cls,
        efficiency: float,
        performance_ratio: float,
        coverage_pct: float,
        household_consumption: float = DEFAULT_HOUSEHOLD_KWH,
        emission_factor: float = DEFAULT_EMISSION_FACTOR,
        ranges: Ranges | None = None,
    ) -> YieldInputs:
        """Build clamped inputs from form values; coverage is given in percent."""
        return cls(
            efficiency=efficiency,
            performance_ratio=performance_ratio,
            coverage=coverage_pct / 100.0,
            household_consumption=household_consumption,
            emission_factor=emission_factor,
        ).clamped(ranges)

    def validate(self, ranges: Ranges | None = None) -> None:
        """
        Check every input is finite and inside its valid range.

        Args:
            ranges: ``(lo, hi)`` per input, as returned by
                ``config.valid_ranges()``. None uses the bundled ranges.

        Raises:
            InvalidInput: On the first offending parameter.
        """
        ranges = _resolve(ranges)
        for name in INPUT_NAMES:
            value = getattr(self, name)
            if not is_finite_number(value):
                raise InvalidInput(name, value, "must be a finite number")
            if name in ranges:
                lo, hi = ranges[name]
                if value < lo or (hi is not None and value > hi):
                    upper = "inf" if hi is None else hi
                    raise InvalidInput(name, value, f"must be in [{lo}, {upper}]")
        if self.household_consumption <= 0:
            raise InvalidInput("household_consumption", self.household_consumption, "must be > 0")

    def clamped(self, ranges: Ranges | None = None) -> YieldInputs:
        """
        Return a copy with every ranged input clamped.

        Household consumption has no clamp in the bundled ranges: a
        non-positive value is kept and yields ``households=None`` downstream.

        Args:
            ranges: ``(lo, hi)`` per input. None uses the bundled ranges.

        Raises:
            InvalidInput: If any input is non-finite (cannot be clamped).
        """
        ranges = _resolve(ranges)
        changes = {}
        for name in INPUT_NAMES:
            value = getattr(self, name)
            if not is_finite_number(value):
                raise InvalidInput(name, value, "must be a finite number")
            if name in ranges:
                lo, hi = ranges[name]
                changes[name] = clamp(float(value), lo, hi)
        return replace(self, **changes)


def _resolve(ranges: Ranges | None) -> Ranges:
    if ranges is not None:
        return ranges
    from ..config import valid_ranges

    return valid_ranges()

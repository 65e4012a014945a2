"""Utility functions for namespace conversion and scalar checks."""

from __future__ import annotations

import math
from types import SimpleNamespace
from typing import Any

# =============================================================================
# Namespace Conversion (for JSON parameter loading)
# =============================================================================


def dict_to_namespace(d: dict[str, Any] | list | Any) -> SimpleNamespace | list | Any:
    """
    Recursively convert dicts to SimpleNamespace.

    Args:
        d: Dictionary, list, or scalar value to convert

    Returns:
        SimpleNamespace for dicts, list of converted items for lists, or original value for scalars
    """
    if isinstance(d, dict):
        return SimpleNamespace(**{k: dict_to_namespace(v) for k, v in d.items()})
    elif isinstance(d, list):
        return [dict_to_namespace(i) for i in d]
    else:
        return d


def namespace_to_dict(ns: SimpleNamespace | Any) -> dict | list | Any:
    """
    Recursively convert SimpleNamespace to dict for JSON serialization.

    Inverse of dict_to_namespace.
    """
    if isinstance(ns, SimpleNamespace):
        return {k: namespace_to_dict(v) for k, v in vars(ns).items()}
    elif isinstance(ns, list):
        return [namespace_to_dict(i) for i in ns]
    else:
        return ns


# =============================================================================
# Scalar helpers
# =============================================================================


def is_finite_number(value: Any) -> bool:
    """Return True for real, finite numbers (bools excluded)."""
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def clamp(value: float, lo: float, hi: float | None = None) -> float:
    """Clamp ``value`` into ``[lo, hi]``; ``hi=None`` leaves the top open."""
    value = max(lo, value)
    if hi is not None:
        value = min(hi, value)
    return value

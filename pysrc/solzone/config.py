"""Configuration and parameter loading from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

from .errors import InvalidInput
from .utils import dict_to_namespace


def load_params(params_json_path: str | Path | None = None) -> SimpleNamespace:
    """
    Load solzone parameters from a JSON file.

    Args:
        params_json_path: Path to the parameters JSON file.
            If None (default), loads bundled default_params.json with panel
            technology efficiencies, default yield settings, valid input
            ranges, the area method and the fetch timeout.

    Returns:
        SimpleNamespace object with nested parameter values accessible via attributes.

    Examples:
        Load bundled defaults:

        >>> params = load_params()
        >>> params.Panel_technologies.Value.thin_film  # 0.131
        >>> params.Yield_settings.Value.performance_ratio  # 0.75

        Load regional parameters:

        >>> params = load_params("adana_params.json")
    """
    if params_json_path is None:
        params_path = Path(__file__).parent / "data" / "default_params.json"
    else:
        params_path = Path(params_json_path)

    if not params_path.exists():
        raise FileNotFoundError(f"Parameters file not found: {params_path}")

    with open(params_path) as f:
        params_dict = json.load(f)

    return dict_to_namespace(params_dict)


def panel_technologies(params: SimpleNamespace | None = None) -> dict[str, float]:
    """Return the technology -> efficiency table from params."""
    if params is None:
        params = load_params()
    return dict(vars(params.Panel_technologies.Value))


def panel_efficiency(technology: str | None = None, params: SimpleNamespace | None = None) -> float:
    """
    Look up the module efficiency for a panel technology.

    Args:
        technology: Technology key (e.g., "thin_film"). None uses the
            parameter file's default technology.
        params: Loaded parameters. None loads the bundled defaults.

    Raises:
        InvalidInput: If the technology is not listed in the parameters.
    """
    if params is None:
        params = load_params()
    if technology is None:
        technology = params.Panel_technologies.Default
    table = panel_technologies(params)
    if technology not in table:
        raise InvalidInput("technology", technology, f"expected one of {sorted(table)}")
    return float(table[technology])


def valid_ranges(params: SimpleNamespace | None = None) -> dict[str, tuple[float, float | None]]:
    """
    Return the ``(lo, hi)`` clamp range per yield input from params.

    ``hi`` is None for an open upper end. Feeds ``YieldInputs.validate()``
    and ``YieldInputs.clamped()``.
    """
    if params is None:
        params = load_params()
    ranges = {}
    for name, (lo, hi) in vars(params.Valid_ranges.Value).items():
        ranges[name] = (float(lo), None if hi is None else float(hi))
    return ranges

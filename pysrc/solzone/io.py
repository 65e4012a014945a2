"""
Reading suitability definitions and writing regions as GeoJSON.

Suitability input is a FeatureCollection of polygon features, each carrying
``{"class": str, "sr_mean": number}`` in its properties.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from .errors import GeometryFailure, InvalidZoneData
from .solzone_logging import get_logger
from .utils import is_finite_number

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class ZoneFeatures:
    """
    Parsed content of one suitability FeatureCollection.

    Attributes:
        class_id: Suitability class shared by the features.
        polygons: Raw GeoJSON geometries, in file order.
        sr_mean: Area-weighted mean of the features' ``sr_mean`` values.
    """

    class_id: str
    polygons: tuple[dict, ...]
    sr_mean: float


def check_path(path_str: str | Path, make_dir: bool = False) -> Path:
    """Absolute path whose parent exists (created when ``make_dir``)."""
    path = Path(path_str).absolute()
    if not path.parent.exists():
        if make_dir:
            path.parent.mkdir(parents=True, exist_ok=True)
        else:
            raise OSError(f"Parent directory {path.parent} does not exist for path {path}. Set make_dir=True to create it.")
    return path


def read_feature_collection(source: dict | str | Path, timeout: float = DEFAULT_TIMEOUT_S) -> dict:
    """
    Read a GeoJSON FeatureCollection.

    Args:
        source: FeatureCollection dict, JSON text, file path, or http(s) URL.
        timeout: Request timeout in seconds for URLs.

    Returns:
        The FeatureCollection as a dict.

    Raises:
        FileNotFoundError: If a path does not exist.
        requests.RequestException: If a URL cannot be fetched.
        InvalidZoneData: If the content is not a FeatureCollection.
    """
    if isinstance(source, dict):
        data = source
    elif isinstance(source, str) and source.startswith(("http://", "https://")):
        logger.info(f"Fetching suitability zones from {source}")
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise InvalidZoneData(f"Response from {source} is not JSON: {e}") from e
    elif isinstance(source, str) and source.lstrip().startswith("{"):
        try:
            data = json.loads(source)
        except ValueError as e:
            raise InvalidZoneData(f"Invalid GeoJSON text: {e}") from e
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Suitability file not found: {path}")
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise InvalidZoneData(f"Invalid GeoJSON in {path}: {e}") from e

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        got = data.get("type") if isinstance(data, dict) else type(data).__name__
        raise InvalidZoneData(
            "Suitability data must be a GeoJSON FeatureCollection",
            field="type",
            expected="FeatureCollection",
            got=str(got),
        )
    if not isinstance(data.get("features"), list):
        raise InvalidZoneData("FeatureCollection has no 'features' list", field="features")
    return data


def parse_zone_features(collection: dict, expected_class: str | None = None) -> ZoneFeatures:
    """
    Validate a suitability FeatureCollection and collect its polygons.

    Self-intersecting or degenerate polygons are kept in ``polygons`` (the
    union skips and logs them) but do not count towards ``sr_mean``.

    Args:
        collection: FeatureCollection dict.
        expected_class: When given, every feature must carry this class.

    Returns:
        ZoneFeatures with the polygons and their area-weighted ``sr_mean``.

    Raises:
        InvalidZoneData: On a non-object feature or properties, a missing
            geometry, class or non-finite ``sr_mean``, a class mismatch, or an
            empty collection.
    """
    from .area import area, weighted_intensity
    from .geometry import validated_region

    features = collection.get("features", [])
    if not features:
        raise InvalidZoneData("FeatureCollection has no features", field="features")

    class_id = expected_class
    polygons: list[dict] = []
    weights: list[tuple[float, float]] = []
    for index, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise InvalidZoneData(
                f"Feature {index} is not a GeoJSON object",
                field="features",
                expected="Feature object",
                got=type(feature).__name__,
            )
        props = feature.get("properties")
        if props is None:
            props = {}
        elif not isinstance(props, dict):
            raise InvalidZoneData(
                f"Feature {index} has non-object properties",
                field="properties",
                expected="object",
                got=type(props).__name__,
            )
        geometry = feature.get("geometry")
        if not isinstance(geometry, dict) or geometry.get("type") not in ("Polygon", "MultiPolygon"):
            got = geometry.get("type") if isinstance(geometry, dict) else None
            raise InvalidZoneData(
                f"Feature {index} has no polygon geometry",
                field="geometry",
                expected="Polygon or MultiPolygon",
                got=str(got),
            )

        label = props.get("class")
        if not isinstance(label, str) or not label.strip():
            raise InvalidZoneData(f"Feature {index} has no 'class' property", field="class")
        label = label.strip().lower()
        if class_id is None:
            class_id = label
        elif label != class_id:
            raise InvalidZoneData(
                f"Feature {index} has class '{label}'",
                field="class",
                expected=class_id,
                got=label,
            )

        sr_mean = props.get("sr_mean")
        if not is_finite_number(sr_mean):
            raise InvalidZoneData(
                f"Feature {index} has an invalid 'sr_mean'",
                field="sr_mean",
                expected="finite number",
                got=repr(sr_mean),
            )

        polygons.append(geometry)
        try:
            region = validated_region(geometry, "parse")
        except GeometryFailure as e:
            logger.warning(f"Feature {index} ({label}) is invalid, excluded from sr_mean: {e.detail}")
            continue
        weights.append((area(region), float(sr_mean)))

    sr = weighted_intensity(weights)
    if sr is None:
        raise InvalidZoneData(f"No usable polygon area in '{class_id}' features", field="geometry")
    logger.debug(f"Parsed {len(polygons)} '{class_id}' feature(s), sr_mean {sr:.1f}")
    return ZoneFeatures(class_id=class_id, polygons=tuple(polygons), sr_mean=sr)


def region_to_feature_collection(region: Any, properties: dict | None = None) -> dict:
    """Wrap a Region as a one-feature FeatureCollection (empty when blank)."""
    if region is None or region.is_empty:
        return {"type": "FeatureCollection", "features": []}
    return {
        "type": "FeatureCollection",
        "features": [{"type": "Feature", "geometry": region.to_geojson(), "properties": dict(properties or {})}],
    }


def write_region_geojson(region: Any, path: str | Path, properties: dict | None = None) -> Path:
    """
    Write a Region to a GeoJSON file for the rendering collaborator.

    Returns:
        The absolute path written.
    """
    out = check_path(path, make_dir=True)
    out.write_text(json.dumps(region_to_feature_collection(region, properties), indent=2), encoding="utf-8")
    logger.debug(f"Wrote region GeoJSON to {out}")
    return out

"""
GeoJSON feature construction.

Callers pass coordinates as (latitude, longitude). Every geometry emitted here
is GeoJSON, so positions are always ``[longitude, latitude]`` and each one is
checked against the WGS84 bounds before a feature is built.

Example:
    >>> point_feature_from_coordinate((13.09784, 77.59167), {"name": "NES Office"})
    {'type': 'Feature', 'geometry': {'type': 'Point', 'coordinates': [77.59167, 13.09784]},
     'properties': {'name': 'NES Office'}}
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from shapely.geometry import LineString, Point, box, mapping

from bengaluru_transit.errors import GeometryValidationError, ValidationIssue

WGS84_BOUNDS = box(-180.0, -90.0, 180.0, 90.0)

Position = list[float]


def _position_issue(lon: float, lat: float, path: str) -> ValidationIssue | None:
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return ValidationIssue(path, f"Coordinates must be finite, got [{lon}, {lat}]")
    if not WGS84_BOUNDS.covers(Point(lon, lat)):
        return ValidationIssue(
            path,
            f"Position [{lon}, {lat}] is outside [-180, 180] x [-90, 90]",
        )
    return None


def validate_position(lon: float, lat: float, path: str = "coordinates") -> Position:
    """Return ``[lon, lat]`` or raise GeometryValidationError."""
    issue = _position_issue(float(lon), float(lat), path)
    if issue:
        raise GeometryValidationError("Invalid geometry coordinates", details=[issue])
    return [float(lon), float(lat)]


def coordinate_to_position(coordinate: Sequence[float]) -> Position:
    """Swap a (latitude, longitude) pair into a GeoJSON position."""
    lat, lon = coordinate
    return validate_position(lon, lat)


def _feature(geometry: Mapping[str, Any], properties: Mapping[str, Any] | None) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": dict(geometry),
        "properties": dict(properties or {}),
    }


def point_feature(lon: float, lat: float, properties: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Point feature from an explicit longitude/latitude pair."""
    position = validate_position(lon, lat)
    geometry = mapping(Point(position))
    return _feature(
        {"type": geometry["type"], "coordinates": list(geometry["coordinates"])},
        properties,
    )


def point_feature_from_coordinate(
    coordinate: Sequence[float],
    properties: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Point feature from a caller-side (latitude, longitude) pair."""
    lat, lon = coordinate
    return point_feature(lon, lat, properties)


def line_string_feature(
    positions: Iterable[Sequence[float]],
    properties: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    LineString feature from ordered ``[lon, lat]`` positions.

    Every out-of-bounds position is reported, not only the first.

    Raises:
        GeometryValidationError: Fewer than two positions, or any position
            outside WGS84 bounds.
    """
    points = [(float(lon), float(lat)) for lon, lat in positions]

    issues = [
        issue
        for i, (lon, lat) in enumerate(points)
        if (issue := _position_issue(lon, lat, f"coordinates.{i}"))
    ]
    if len(points) < 2:
        issues.insert(
            0,
            ValidationIssue("coordinates", f"LineString needs at least 2 positions, got {len(points)}"),
        )
    if issues:
        raise GeometryValidationError("Invalid LineString geometry", details=issues)

    geometry = mapping(LineString(points))
    return _feature(
        {"type": geometry["type"], "coordinates": [list(p) for p in geometry["coordinates"]]},
        properties,
    )


def feature_collection(features: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Wrap features in input order. No dedup, no reordering."""
    return {"type": "FeatureCollection", "features": list(features)}


def feature_group(
    metadata: Mapping[str, Any],
    features: Iterable[Mapping[str, Any]],
    key: str = "features",
) -> dict[str, Any]:
    """
    One category of features: metadata lives on the wrapper, not on each
    feature, and the features sit under ``key`` as a FeatureCollection.
    """
    return {**metadata, key: feature_collection(features)}

from .features import (
    coordinate_to_position,
    feature_collection,
    feature_group,
    line_string_feature,
    point_feature,
    point_feature_from_coordinate,
    validate_position,
)

__all__ = [
    "coordinate_to_position",
    "feature_collection",
    "feature_group",
    "line_string_feature",
    "point_feature",
    "point_feature_from_coordinate",
    "validate_position",
]

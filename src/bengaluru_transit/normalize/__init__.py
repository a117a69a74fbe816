"""Field normalization: identifiers, durations, categories and record transforms"""

from .categories import (
    LANGUAGES,
    ROUTE_DIRECTIONS,
    STATION_TYPES,
    STOP_CATEGORIES,
    TRIP_PLANNER_FILTERS,
    CategoryMapping,
    Language,
    RouteDirection,
    StationType,
    StopCategory,
    TripPlannerFilter,
)
from .durations import format_duration, parse_duration
from .fields import FieldSpec, RecordTransformer
from .identifiers import parse_id, stringify_id

__all__ = [
    "CategoryMapping",
    "FieldSpec",
    "Language",
    "LANGUAGES",
    "RecordTransformer",
    "RouteDirection",
    "ROUTE_DIRECTIONS",
    "StationType",
    "STATION_TYPES",
    "StopCategory",
    "STOP_CATEGORIES",
    "TripPlannerFilter",
    "TRIP_PLANNER_FILTERS",
    "format_duration",
    "parse_duration",
    "parse_id",
    "stringify_id",
]

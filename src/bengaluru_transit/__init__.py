"""
Typed, validated client for the Bengaluru (BMTC) bus service API.

Responses are validated, ids become opaque strings, durations gain a
seconds field, spatial results are GeoJSON (``[lon, lat]``), and trip plans
are aggregated into itineraries with fare, distance, duration and transfer
totals.
"""

from .api.base import TransitResponse
from .client.transit_client import TransitClient
from .config.config_manager import ClientConfig, ClientConfigManager, RetryConfig
from .errors import (
    CategoryMappingError,
    GeometryValidationError,
    ParameterValidationError,
    ResponseValidationError,
    TransitError,
    TransitValidationError,
    TransportError,
    ValidationIssue,
)
from .itinerary.aggregator import Itinerary, NormalizedLeg

__version__ = "0.1.0"

__all__ = [
    "CategoryMappingError",
    "ClientConfig",
    "ClientConfigManager",
    "GeometryValidationError",
    "Itinerary",
    "NormalizedLeg",
    "ParameterValidationError",
    "ResponseValidationError",
    "RetryConfig",
    "TransitClient",
    "TransitError",
    "TransitResponse",
    "TransitValidationError",
    "TransportError",
    "ValidationIssue",
]

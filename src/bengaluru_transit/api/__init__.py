"""Per-operation accessors: validate, request, validate, normalize"""

from .base import BaseAPI, TransitResponse
from .info import InfoAPI
from .locations import LocationsAPI
from .routes import RoutesAPI
from .stops import StopsAPI
from .vehicles import VehiclesAPI

__all__ = [
    "BaseAPI",
    "InfoAPI",
    "LocationsAPI",
    "RoutesAPI",
    "StopsAPI",
    "TransitResponse",
    "VehiclesAPI",
]

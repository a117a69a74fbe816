"""Contracts for vehicle search."""

from pydantic import BaseModel

from .common import Envelope, QueryText, RequestModel


class SearchVehiclesParams(RequestModel):
    """Partial registration number, e.g. "KA57F"."""

    query: QueryText


class VehicleItem(BaseModel):
    vehicleid: int
    vehicleregno: str


class VehiclesResponse(Envelope):
    data: list[VehicleItem]

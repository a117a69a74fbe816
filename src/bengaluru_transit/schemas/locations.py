"""Contracts for place search."""

from pydantic import BaseModel

from .common import Envelope, FiniteFloat, QueryText, RequestModel


class SearchPlacesParams(RequestModel):
    query: QueryText


class PlaceItem(BaseModel):
    title: str
    placename: str
    lat: FiniteFloat
    lng: FiniteFloat


class PlacesResponse(Envelope):
    data: list[PlaceItem]

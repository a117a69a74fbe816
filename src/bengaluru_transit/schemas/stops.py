"""Contracts for stop and station lookups."""

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from bengaluru_transit.normalize.categories import StationType, StopCategory

from .common import Coordinate, Envelope, FiniteFloat, NumericString, QueryText, RequestModel


class NearbyStationsParams(RequestModel):
    coordinates: Coordinate


class FacilityItem(BaseModel):
    name: str
    latitude: NumericString
    longitude: NumericString
    distance: NumericString


class FacilityGroup(BaseModel):
    type: str
    typeid: str
    icon: str
    facilities: list[FacilityItem] = Field(alias="list")


class StationAroundItem(BaseModel):
    stationname: str
    distance: NumericString
    arounds: list[FacilityGroup] = Field(alias="Arounds")


class NearbyStationsResponse(Envelope):
    data: list[StationAroundItem]


class SearchStopsParams(RequestModel):
    station_name: QueryText
    station_type: StationType = StationType.BMTC


class StopSearchItem(BaseModel):
    srno: int
    routeno: str
    # stop id, despite the name
    routeid: int
    center_lat: FiniteFloat
    center_lon: FiniteFloat
    routetypeid: str
    routename: str
    route: str


class StopSearchResponse(Envelope):
    data: list[StopSearchItem]


class NearbyStopsParams(RequestModel):
    """
    Radius search around a (latitude, longitude) pair.

    ``bmtc_category`` narrows BMTC stops only, so it is rejected together with
    any other ``station_type``.
    """

    coordinates: Coordinate
    radius_km: FiniteFloat = Field(gt=0)
    station_type: StationType | None = None
    bmtc_category: StopCategory | None = None

    @field_validator("bmtc_category")
    @classmethod
    def category_requires_bmtc(cls, value: StopCategory | None, info: ValidationInfo):
        station_type = info.data.get("station_type")
        if value is not None and station_type not in (None, StationType.BMTC):
            raise ValueError("bmtc_category can only be used when station_type is 'bmtc'")
        return value


class NearbyStopItem(BaseModel):
    rowno: int = Field(gt=0)
    geofenceid: int = Field(gt=0)
    geofencename: str
    center_lat: FiniteFloat
    center_lon: FiniteFloat
    towards: str
    distance: float = Field(ge=0)
    totalminute: float = Field(ge=0)
    radiuskm: float = Field(ge=0)


class NearbyStopsResponse(Envelope):
    data: list[NearbyStopItem]

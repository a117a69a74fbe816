"""
Contracts for route, timetable, fare and trip planning endpoints.

Raw models keep the upstream spelling of every key (``routeid``,
``pathSrno``, ``approx_fare``...). Keys that are Python keywords or shadow
builtins are exposed under another attribute name with the upstream key as
alias.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, ValidationInfo, field_validator

from bengaluru_transit.errors import CategoryMappingError
from bengaluru_transit.normalize.categories import ROUTE_DIRECTIONS, RouteDirection, TripPlannerFilter

from .common import (
    Coordinate,
    DurationString,
    Envelope,
    FiniteFloat,
    Identifier,
    LowercaseEnvelope,
    NumericString,
    QueryText,
    RequestModel,
)


def _check_upstream_direction(value: str) -> str:
    try:
        ROUTE_DIRECTIONS.from_upstream(value)
    except CategoryMappingError as e:
        raise ValueError(str(e)) from None
    return value


UpstreamDirection = Annotated[str, AfterValidator(_check_upstream_direction)]


# --- Route geometry and search ---------------------------------------------


class RoutePointsParams(RequestModel):
    route_id: Identifier


class RoutePointItem(BaseModel):
    latitude: NumericString
    longitude: NumericString


class RoutePointsResponse(Envelope):
    data: list[RoutePointItem]


class SearchRoutesParams(RequestModel):
    query: QueryText


class RouteSearchItem(BaseModel):
    union_rowno: int
    row: int
    routeno: str
    routeparentid: int


class RouteSearchResponse(Envelope):
    data: list[RouteSearchItem]


class RouteListItem(BaseModel):
    routeid: int
    routeno: str
    routename: str
    fromstationid: int
    fromstation: str
    tostationid: int
    tostation: str


class RouteListResponse(Envelope):
    data: list[RouteListItem]


# --- Timetable -------------------------------------------------------------


class TimetableParams(RequestModel):
    """Stop ids narrow the timetable to a stop pair and must be given together."""

    route_id: Identifier
    from_stop_id: Identifier | None = None
    to_stop_id: Identifier | None = Field(default=None, validate_default=True)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @field_validator("to_stop_id")
    @classmethod
    def stop_ids_together(cls, value: int | None, info: ValidationInfo):
        if "from_stop_id" not in info.data:
            return value
        if (info.data["from_stop_id"] is None) != (value is None):
            raise ValueError("from_stop_id and to_stop_id must be provided together")
        return value


class TimetableTrip(BaseModel):
    starttime: str
    endtime: str


class TimetableItem(BaseModel):
    fromstationname: str
    tostationname: str
    fromstationid: str
    tostationid: str
    apptime: DurationString
    distance: NumericString
    platformname: str
    platformnumber: str
    baynumber: str
    tripdetails: list[TimetableTrip]


class TimetableResponse(Envelope):
    data: list[TimetableItem]


# --- Route details (both directions, live vehicles) ------------------------


class RouteDetailsParams(RequestModel):
    parent_route_id: Identifier
    service_type_id: Identifier | None = None


class RouteDetailVehicle(BaseModel):
    vehicleid: int
    vehiclenumber: str
    servicetypeid: int
    servicetype: str
    centerlat: FiniteFloat
    centerlong: FiniteFloat
    eta: str
    sch_arrivaltime: str
    sch_departuretime: str
    actual_arrivaltime: str
    actual_departuretime: str
    sch_tripstarttime: str
    sch_tripendtime: str
    lastlocationid: int
    currentlocationid: int
    nextlocationid: int
    currentstop: str | None
    nextstop: str | None
    laststop: str | None
    stopCoveredStatus: int
    heading: float
    lastrefreshon: str
    lastreceiveddatetimeflag: int
    tripposition: int


class RouteDetailStation(BaseModel):
    routeid: int
    stationid: int
    stationname: str
    from_: str = Field(alias="from")
    to: str
    routeno: str
    distance_on_station: float
    centerlat: FiniteFloat
    centerlong: FiniteFloat
    isnotify: int
    vehicle_details: list[RouteDetailVehicle] = Field(alias="vehicleDetails")


class RouteDetailDirection(BaseModel):
    data: list[RouteDetailStation]
    map_data: list[RouteDetailVehicle] = Field(alias="mapData")


class RouteDetailsResponse(LowercaseEnvelope):
    up: RouteDetailDirection
    down: RouteDetailDirection


# --- Routes between stops and fares ----------------------------------------


class RoutesBetweenStopsParams(RequestModel):
    from_stop_id: Identifier
    to_stop_id: Identifier


class RouteBetweenStopsItem(BaseModel):
    id: int
    fromstationid: int
    source_code: str
    from_displayname: str
    tostationid: int
    destination_code: str
    to_displayname: str
    fromdistance: float
    todistance: float
    routeid: int
    routeno: str
    routename: str
    route_direction: UpstreamDirection
    fromstationname: str
    tostationname: str


class RoutesBetweenStopsResponse(Envelope):
    data: list[RouteBetweenStopsItem]


class FaresParams(RequestModel):
    """Values normally copied from a routes-between-stops item."""

    route_no: QueryText
    subroute_id: Identifier
    route_direction: RouteDirection
    source_code: QueryText
    destination_code: QueryText

    @field_validator("route_direction", mode="before")
    @classmethod
    def lowercase_direction(cls, value: Any):
        return value.strip().lower() if isinstance(value, str) else value


class FareItem(BaseModel):
    servicetype: str
    fare: str


class FaresResponse(Envelope):
    data: list[FareItem]


# --- Trip planner ----------------------------------------------------------


class TripPlanParams(RequestModel):
    """
    Origin and destination are each either a stop id or a (lat, lon) pair.

    ``from_datetime`` must lie in the future relative to the ``now`` value in
    the validation context (falls back to the local clock).
    """

    from_stop_id: Identifier | None = None
    from_coordinates: Coordinate | None = Field(default=None, validate_default=True)
    to_stop_id: Identifier | None = None
    to_coordinates: Coordinate | None = Field(default=None, validate_default=True)
    service_type_id: Identifier | None = None
    from_datetime: datetime | None = None
    filter_by: TripPlannerFilter | None = None

    @field_validator("from_coordinates", "to_coordinates")
    @classmethod
    def exactly_one_endpoint(cls, value: Coordinate | None, info: ValidationInfo):
        side = info.field_name.split("_")[0]
        stop_field = f"{side}_stop_id"
        if stop_field not in info.data:
            return value
        if (info.data[stop_field] is None) == (value is None):
            raise ValueError(f"Provide exactly one of {stop_field} or {info.field_name}")
        return value

    @field_validator("from_datetime")
    @classmethod
    def must_be_future(cls, value: datetime | None, info: ValidationInfo):
        if value is None:
            return value
        now = (info.context or {}).get("now") or datetime.now()
        if value <= _comparable_now(now, value):
            raise ValueError("from_datetime must be in the future")
        return value


def _comparable_now(now: datetime, value: datetime) -> datetime:
    if value.tzinfo is None:
        return now if now.tzinfo is None else now.astimezone().replace(tzinfo=None)
    return now.astimezone(value.tzinfo)


class RawTripLeg(BaseModel):
    """One leg as reported by the trip planner."""

    pathSrno: int
    transferSrNo: int
    tripId: int
    routeid: int
    routeno: str
    schNo: str | None
    vehicleId: int
    busNo: str | None
    distance: FiniteFloat = Field(ge=0)
    duration: DurationString
    fromStationId: int
    fromStationName: str
    toStationId: int
    toStationName: str
    etaFromStation: str | None
    etaToStation: str | None
    serviceTypeId: int
    fromLatitude: FiniteFloat
    fromLongitude: FiniteFloat
    toLatitude: FiniteFloat
    toLongitude: FiniteFloat
    routeParentId: int
    totalDuration: DurationString
    waitingDuration: DurationString | None = None
    platformnumber: str | None = None
    baynumber: int | None = None
    devicestatusnameflag: str | None = None
    devicestatusflag: int | None = None
    srno: int
    approx_fare: FiniteFloat = Field(ge=0)
    fromstagenumber: int | None = None
    tostagenumber: int | None = None
    minsrno: int | None = None
    maxsrno: int | None = None
    tollfees: float | None = None
    totalStages: int | None = None


class TripPlanData(BaseModel):
    direct_routes: list[list[RawTripLeg]] = Field(alias="directRoutes")
    transfer_routes: list[list[RawTripLeg]] = Field(alias="transferRoutes")


class TripPlanResponse(Envelope):
    data: TripPlanData


# --- Stops along planned trips ---------------------------------------------


class TripSegment(RequestModel):
    trip_id: Identifier
    from_stop_id: Identifier
    to_stop_id: Identifier


class TripStopsParams(RequestModel):
    trips: list[TripSegment] = Field(min_length=1)


class PathDetailItem(BaseModel):
    tripId: int
    routeId: int
    routeNo: str
    stationId: int
    stationName: str
    latitude: FiniteFloat
    longitude: FiniteFloat
    eta: str | None = None
    sch_arrivaltime: str | None = None
    sch_departuretime: str | None = None
    actual_arrivaltime: str | None = None
    actual_departuretime: str | None = None
    distance: float
    duration: str | None = None
    isTransfer: bool


class PathDetailsResponse(LowercaseEnvelope):
    data: list[PathDetailItem]

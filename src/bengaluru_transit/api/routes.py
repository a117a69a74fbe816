"""
Route, timetable, fare and trip planning operations.

Identifiers:
    ``parent_route_id`` (from ``search_routes``) groups both directions of a
    route; ``subroute_id`` (from ``get_all_routes``, route details, fares and
    trip legs) is one directional variant. Both are opaque strings.
"""

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

from bengaluru_transit.constants import Endpoint
from bengaluru_transit.geo.features import feature_collection, line_string_feature, point_feature
from bengaluru_transit.itinerary.aggregator import Itinerary, build_itineraries
from bengaluru_transit.normalize.categories import (
    LANGUAGES,
    ROUTE_DIRECTIONS,
    TRIP_PLANNER_FILTERS,
    Language,
    RouteDirection,
    TripPlannerFilter,
)
from bengaluru_transit.normalize.dates import format_datetime, format_iso_datetime, resolve_time_window
from bengaluru_transit.normalize.fields import (
    FieldSpec,
    RecordTransformer,
    direction,
    duration_seconds,
    identifier,
    keep,
    numeric,
    optional_text,
)
from bengaluru_transit.normalize.identifiers import stringify_id
from bengaluru_transit.schemas.routes import (
    FaresParams,
    FaresResponse,
    PathDetailsResponse,
    RouteDetailDirection,
    RouteDetailsParams,
    RouteDetailsResponse,
    RouteListResponse,
    RoutePointsParams,
    RoutePointsResponse,
    RouteSearchResponse,
    RoutesBetweenStopsParams,
    RoutesBetweenStopsResponse,
    SearchRoutesParams,
    TimetableParams,
    TimetableResponse,
    TripPlanParams,
    TripPlanResponse,
    TripStopsParams,
)
from bengaluru_transit.validation.validator import validate_params

from .base import BaseAPI, TransitResponse

ROUTE_SEARCH_FIELDS = RecordTransformer(
    keep("union_rowno", "union_row_no"),
    keep("row"),
    keep("routeno", "route_no"),
    identifier("routeparentid", "parent_route_id"),
)

ROUTE_LIST_FIELDS = RecordTransformer(
    identifier("routeid", "subroute_id"),
    keep("routeno", "route_no"),
    keep("routename", "route_name"),
    identifier("fromstationid", "from_stop_id"),
    keep("fromstation", "from_stop_name"),
    identifier("tostationid", "to_stop_id"),
    keep("tostation", "to_stop_name"),
)

TRIP_TIME_FIELDS = RecordTransformer(
    keep("starttime", "start_time"),
    keep("endtime", "end_time"),
)

TIMETABLE_FIELDS = RecordTransformer(
    keep("fromstationname", "from_stop_name"),
    keep("tostationname", "to_stop_name"),
    # upstream already sends these as strings
    keep("fromstationid", "from_stop_id"),
    keep("tostationid", "to_stop_id"),
    keep("apptime", "approximate_time"),
    duration_seconds("apptime", "approximate_time_seconds"),
    numeric("distance", "distance"),
    keep("platformname", "platform_name"),
    keep("platformnumber", "platform_number"),
    keep("baynumber", "bay_number"),
    FieldSpec("tripdetails", "trip_details", TRIP_TIME_FIELDS.many),
)

ROUTE_STOP_FIELDS = RecordTransformer(
    identifier("stationid", "stop_id"),
    keep("stationname", "stop_name"),
    identifier("routeid", "subroute_id"),
    keep("from"),
    keep("to"),
    keep("routeno", "route_no"),
    keep("distance_on_station"),
    keep("isnotify", "is_notify"),
)

VEHICLE_STATUS_FIELDS = RecordTransformer(
    identifier("vehicleid", "vehicle_id"),
    keep("vehiclenumber", "vehicle_number"),
    identifier("servicetypeid", "service_type_id"),
    keep("servicetype", "service_type"),
    keep("eta"),
    keep("sch_arrivaltime", "scheduled_arrival_time"),
    keep("sch_departuretime", "scheduled_departure_time"),
    keep("actual_arrivaltime", "actual_arrival_time"),
    keep("actual_departuretime", "actual_departure_time"),
    keep("sch_tripstarttime", "scheduled_trip_start_time"),
    keep("sch_tripendtime", "scheduled_trip_end_time"),
    identifier("lastlocationid", "last_location_id"),
    identifier("currentlocationid", "current_location_id"),
    identifier("nextlocationid", "next_location_id"),
    keep("currentstop", "current_stop"),
    keep("nextstop", "next_stop"),
    keep("laststop", "last_stop"),
    keep("stopCoveredStatus", "stop_covered_status"),
    keep("heading"),
    keep("lastrefreshon", "last_refresh_on"),
    keep("lastreceiveddatetimeflag", "last_received_datetime_flag"),
    keep("tripposition", "trip_position"),
)

ROUTE_BETWEEN_STOPS_FIELDS = RecordTransformer(
    identifier("id", "id"),
    identifier("fromstationid", "from_stop_id"),
    keep("source_code"),
    keep("from_displayname", "from_display_name"),
    identifier("tostationid", "to_stop_id"),
    keep("destination_code"),
    keep("to_displayname", "to_display_name"),
    keep("fromdistance", "from_distance"),
    keep("todistance", "to_distance"),
    identifier("routeid", "subroute_id"),
    keep("routeno", "route_no"),
    keep("routename", "route_name"),
    direction("route_direction", "route_direction"),
    keep("fromstationname", "from_stop_name"),
    keep("tostationname", "to_stop_name"),
)

FARE_FIELDS = RecordTransformer(
    keep("servicetype", "service_type"),
    keep("fare"),
)

TRIP_STOP_FIELDS = RecordTransformer(
    identifier("tripId", "trip_id"),
    identifier("routeId", "subroute_id"),
    keep("routeNo", "route_no"),
    identifier("stationId", "stop_id"),
    keep("stationName", "stop_name"),
    optional_text("eta", "eta"),
    optional_text("sch_arrivaltime", "scheduled_arrival_time"),
    optional_text("sch_departuretime", "scheduled_departure_time"),
    optional_text("actual_arrivaltime", "actual_arrival_time"),
    optional_text("actual_departuretime", "actual_departure_time"),
    keep("distance"),
    optional_text("duration", "duration"),
    keep("isTransfer", "is_transfer"),
)


def _direction_features(direction_data: RouteDetailDirection) -> dict[str, Any]:
    """Stops, vehicles reported per stop, and live vehicles of one direction."""
    stops = []
    station_vehicles = []
    for station in direction_data.data:
        stop_id = stringify_id(station.stationid)
        stops.append(
            point_feature(station.centerlong, station.centerlat, ROUTE_STOP_FIELDS(station))
        )
        station_vehicles.extend(
            point_feature(
                vehicle.centerlong,
                vehicle.centerlat,
                {**VEHICLE_STATUS_FIELDS(vehicle), "stop_id": stop_id},
            )
            for vehicle in station.vehicle_details
        )

    live_vehicles = [
        point_feature(vehicle.centerlong, vehicle.centerlat, VEHICLE_STATUS_FIELDS(vehicle))
        for vehicle in direction_data.map_data
    ]
    return {
        "stops": feature_collection(stops),
        "station_vehicles": feature_collection(station_vehicles),
        "live_vehicles": feature_collection(live_vehicles),
    }


class RoutesAPI(BaseAPI):
    """
    Args:
        transport: Shared HTTP transport.
        language: Caller language token, sent as ``lan`` where the payload needs it.
        now: Clock used for default time windows and the future-time check.
    """

    def __init__(
        self,
        transport,
        language: Language | str = Language.ENGLISH,
        now: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(transport)
        self.language = Language(language)
        self._now = now

    def get_route_points(self, route_id: str) -> TransitResponse[dict[str, Any]]:
        """
        Path of one subroute as a FeatureCollection holding a single
        LineString. Zero points give an empty collection.

        Raises:
            GeometryValidationError: If upstream returns exactly one point,
                since a LineString needs at least two positions, or a point
                lies outside WGS84 bounds.
        """
        params = validate_params(RoutePointsParams, {"route_id": route_id}, "Invalid route points parameters")
        raw = self._request(
            Endpoint.ROUTE_POINTS,
            {"routeid": params.route_id},
            RoutePointsResponse,
            "Invalid route points response",
        )
        positions = [[float(item.longitude), float(item.latitude)] for item in raw.data]
        features = []
        if positions:
            features.append(line_string_feature(positions, {"route_id": stringify_id(params.route_id)}))
        return self._respond(Endpoint.ROUTE_POINTS, raw, feature_collection(features))

    def search_routes(self, query: str) -> TransitResponse[list[dict[str, Any]]]:
        """Routes whose number matches ``query``. Items carry ``parent_route_id``."""
        params = validate_params(SearchRoutesParams, {"query": query}, "Invalid route search parameters")
        raw = self._request(
            Endpoint.SEARCH_ROUTES,
            {"routetext": params.query},
            RouteSearchResponse,
            "Invalid route search response",
        )
        return self._respond(Endpoint.SEARCH_ROUTES, raw, ROUTE_SEARCH_FIELDS.many(raw.data))

    def get_all_routes(self) -> TransitResponse[list[dict[str, Any]]]:
        raw = self._request(Endpoint.ALL_ROUTES, {}, RouteListResponse, "Invalid all routes response")
        return self._respond(Endpoint.ALL_ROUTES, raw, ROUTE_LIST_FIELDS.many(raw.data))

    def get_timetable(
        self,
        route_id: str,
        from_stop_id: str | None = None,
        to_stop_id: str | None = None,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> TransitResponse[list[dict[str, Any]]]:
        """
        Scheduled trips of a route.

        Defaults:
            start_time: now
            end_time: 23:59 on the start date
        """
        params = validate_params(
            TimetableParams,
            {
                "route_id": route_id,
                "from_stop_id": from_stop_id,
                "to_stop_id": to_stop_id,
                "start_time": start_time,
                "end_time": end_time,
            },
            "Invalid timetable parameters",
        )
        now = self._now()
        start_text, end_text = resolve_time_window(params.start_time, params.end_time, now)
        payload: dict[str, Any] = {
            "current_date": format_iso_datetime(now),
            "routeid": params.route_id,
            "starttime": start_text,
            "endtime": end_text,
        }
        if params.from_stop_id is not None:
            # Stop ids go out exactly as the caller wrote them
            payload["fromStationId"] = from_stop_id
            payload["toStationId"] = to_stop_id

        raw = self._request(
            Endpoint.TIMETABLE_BY_ROUTE, payload, TimetableResponse, "Invalid timetable response"
        )
        return self._respond(Endpoint.TIMETABLE_BY_ROUTE, raw, TIMETABLE_FIELDS.many(raw.data))

    def get_route_details(
        self,
        parent_route_id: str,
        service_type_id: str | None = None,
    ) -> TransitResponse[dict[str, Any]]:
        """
        Stops and vehicles of a route in both directions.

        Returns:
            ``{"up": {...}, "down": {...}}``, each with ``stops``,
            ``station_vehicles`` and ``live_vehicles`` FeatureCollections.
            Stop features carry the directional ``subroute_id``.
        """
        params = validate_params(
            RouteDetailsParams,
            {"parent_route_id": parent_route_id, "service_type_id": service_type_id},
            "Invalid route details parameters",
        )
        payload: dict[str, Any] = {"routeid": params.parent_route_id}
        if params.service_type_id is not None:
            payload["servicetypeid"] = params.service_type_id

        raw = self._request(
            Endpoint.ROUTE_DETAILS, payload, RouteDetailsResponse, "Invalid route details response"
        )
        details = {"up": _direction_features(raw.up), "down": _direction_features(raw.down)}
        return self._respond(Endpoint.ROUTE_DETAILS, raw, details)

    def get_routes_between_stops(
        self,
        from_stop_id: str,
        to_stop_id: str,
    ) -> TransitResponse[list[dict[str, Any]]]:
        """
        Subroutes serving both stops. Items carry everything ``get_fares``
        needs (route_no, subroute_id, route_direction, source/destination code).
        """
        params = validate_params(
            RoutesBetweenStopsParams,
            {"from_stop_id": from_stop_id, "to_stop_id": to_stop_id},
            "Invalid routes between stops parameters",
        )
        raw = self._request(
            Endpoint.FARE_ROUTES,
            {
                "fromStationId": params.from_stop_id,
                "toStationId": params.to_stop_id,
                "lan": LANGUAGES.to_upstream(self.language),
            },
            RoutesBetweenStopsResponse,
            "Invalid routes between stops response",
        )
        return self._respond(Endpoint.FARE_ROUTES, raw, ROUTE_BETWEEN_STOPS_FIELDS.many(raw.data))

    def get_fares(
        self,
        route_no: str,
        subroute_id: str,
        route_direction: RouteDirection | str,
        source_code: str,
        destination_code: str,
    ) -> TransitResponse[list[dict[str, Any]]]:
        """Fare per service type. Fares are returned as strings, as upstream sends them."""
        params = validate_params(
            FaresParams,
            {
                "route_no": route_no,
                "subroute_id": subroute_id,
                "route_direction": route_direction,
                "source_code": source_code,
                "destination_code": destination_code,
            },
            "Invalid fare parameters",
        )
        raw = self._request(
            Endpoint.FARE_DATA,
            {
                "routeno": params.route_no,
                "routeid": params.subroute_id,
                "route_direction": ROUTE_DIRECTIONS.to_upstream(params.route_direction),
                "source_code": params.source_code,
                "destination_code": params.destination_code,
            },
            FaresResponse,
            "Invalid fare data response",
        )
        return self._respond(Endpoint.FARE_DATA, raw, FARE_FIELDS.many(raw.data))

    def plan_trip(
        self,
        from_stop_id: str | None = None,
        from_coordinates: tuple[float, float] | None = None,
        to_stop_id: str | None = None,
        to_coordinates: tuple[float, float] | None = None,
        service_type_id: str | None = None,
        from_datetime: datetime | None = None,
        filter_by: TripPlannerFilter | str | None = None,
    ) -> TransitResponse[list[Itinerary]]:
        """
        Journey options between two stops or locations.

        Exactly one of ``from_stop_id`` / ``from_coordinates`` and one of
        ``to_stop_id`` / ``to_coordinates`` must be given. ``from_datetime``
        must be in the future. ``filter_by`` is "minimum-transfers" or
        "shortest-time".

        Returns:
            Direct itineraries followed by transfer itineraries, in upstream
            order. Use ``itinerary.transfer_count == 0`` to select direct ones.
        """
        params = validate_params(
            TripPlanParams,
            {
                "from_stop_id": from_stop_id,
                "from_coordinates": from_coordinates,
                "to_stop_id": to_stop_id,
                "to_coordinates": to_coordinates,
                "service_type_id": service_type_id,
                "from_datetime": from_datetime,
                "filter_by": filter_by,
            },
            "Invalid trip planner parameters",
            context={"now": self._now()},
        )

        payload: dict[str, Any] = {}
        if params.from_stop_id is not None:
            payload["fromStationId"] = params.from_stop_id
        else:
            payload["fromLatitude"], payload["fromLongitude"] = params.from_coordinates
        if params.to_stop_id is not None:
            payload["toStationId"] = params.to_stop_id
        else:
            payload["toLatitude"], payload["toLongitude"] = params.to_coordinates
        if params.service_type_id is not None:
            payload["serviceTypeId"] = params.service_type_id
        if params.from_datetime is not None:
            payload["fromDateTime"] = format_datetime(params.from_datetime)
        if params.filter_by is not None:
            payload["filterBy"] = TRIP_PLANNER_FILTERS.to_upstream(params.filter_by)

        raw = self._request(Endpoint.TRIP_PLANNER, payload, TripPlanResponse, "Invalid trip planner response")
        itineraries = build_itineraries(raw.data.direct_routes, raw.data.transfer_routes)
        return self._respond(Endpoint.TRIP_PLANNER, raw, itineraries)

    def get_trip_stops(self, trips: Sequence[Mapping[str, str]]) -> TransitResponse[dict[str, Any]]:
        """
        Stops passed on one or more trip legs.

        Args:
            trips: ``[{"trip_id", "from_stop_id", "to_stop_id"}]``, typically
                taken from itinerary legs.

        Returns:
            FeatureCollection of stop Points, with ``is_transfer`` marking
            where the rider changes vehicle.
        """
        params = validate_params(TripStopsParams, {"trips": trips}, "Invalid trip stops parameters")
        payload = {
            "data": [
                {
                    "tripId": trip.trip_id,
                    "fromStationId": trip.from_stop_id,
                    "toStationId": trip.to_stop_id,
                }
                for trip in params.trips
            ]
        }
        raw = self._request(Endpoint.PATH_DETAILS, payload, PathDetailsResponse, "Invalid trip stops response")
        stops = feature_collection(
            point_feature(item.longitude, item.latitude, TRIP_STOP_FIELDS(item))
            for item in raw.data
        )
        return self._respond(Endpoint.PATH_DETAILS, raw, stops)

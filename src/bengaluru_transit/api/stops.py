"""
Stop and station lookups.

All three operations return GeoJSON. Coordinates go in as
(latitude, longitude) and come out as ``[longitude, latitude]``.
"""

from typing import Any

from bengaluru_transit.constants import Endpoint
from bengaluru_transit.geo.features import feature_collection, feature_group, point_feature
from bengaluru_transit.normalize.categories import STATION_TYPES, STOP_CATEGORIES, StationType, StopCategory
from bengaluru_transit.normalize.fields import RecordTransformer, identifier, keep
from bengaluru_transit.schemas.stops import (
    FacilityGroup,
    NearbyStationsParams,
    NearbyStationsResponse,
    NearbyStopsParams,
    NearbyStopsResponse,
    SearchStopsParams,
    StopSearchResponse,
)
from bengaluru_transit.validation.validator import validate_params

from .base import BaseAPI, TransitResponse

STOP_SEARCH_FIELDS = RecordTransformer(
    keep("srno", "serial_number"),
    identifier("routeid", "stop_id"),
    keep("routename", "stop_name"),
    keep("routeno", "route_no"),
    keep("routetypeid", "route_type_id"),
    keep("route"),
)

NEARBY_STOP_FIELDS = RecordTransformer(
    keep("rowno", "row_number"),
    identifier("geofenceid", "stop_id"),
    keep("geofencename", "stop_name"),
    keep("towards"),
    keep("distance"),
    keep("totalminute", "travel_time_minutes"),
    keep("radiuskm", "radius_km"),
)


def _facility_group(group: FacilityGroup) -> dict[str, Any]:
    # type/type_id/icon live on the group only
    return feature_group(
        {"type": group.type, "type_id": group.typeid, "icon": group.icon},
        (
            point_feature(
                float(facility.longitude),
                float(facility.latitude),
                {"facility_name": facility.name, "distance": float(facility.distance)},
            )
            for facility in group.facilities
        ),
        key="facilities",
    )


class StopsAPI(BaseAPI):

    def find_nearby_stations(self, coordinates: tuple[float, float]) -> TransitResponse[list[dict[str, Any]]]:
        """
        Stations around a location, each with nearby facilities grouped by
        facility type.

        Returns:
            ``[{station_name, distance, facility_types: [{type, type_id, icon,
            facilities: FeatureCollection}]}]``
        """
        params = validate_params(
            NearbyStationsParams, {"coordinates": coordinates}, "Invalid around bus stops parameters"
        )
        lat, lon = params.coordinates
        raw = self._request(
            Endpoint.AROUND_BUS_STOPS,
            {"latitude": lat, "longitude": lon},
            NearbyStationsResponse,
            "Invalid around bus stops response",
        )
        stations = [
            {
                "station_name": station.stationname,
                "distance": float(station.distance),
                "facility_types": [_facility_group(group) for group in station.arounds],
            }
            for station in raw.data
        ]
        return self._respond(Endpoint.AROUND_BUS_STOPS, raw, stations)

    def search_stops(
        self,
        station_name: str,
        station_type: StationType | str = StationType.BMTC,
    ) -> TransitResponse[dict[str, Any]]:
        """
        Stops whose name matches ``station_name``.

        ``station_type`` is one of "bmtc" (default), "chartered", "metro" or "ksrtc".
        """
        params = validate_params(
            SearchStopsParams,
            {"station_name": station_name, "station_type": station_type},
            "Invalid stop search parameters",
        )
        raw = self._request(
            Endpoint.SEARCH_BUS_STOPS,
            {
                "stationname": params.station_name,
                "stationflag": STATION_TYPES.to_upstream(params.station_type),
            },
            StopSearchResponse,
            "Invalid stop search response",
        )
        stops = feature_collection(
            point_feature(item.center_lon, item.center_lat, STOP_SEARCH_FIELDS(item))
            for item in raw.data
        )
        return self._respond(Endpoint.SEARCH_BUS_STOPS, raw, stops)

    def find_nearby_stops(
        self,
        coordinates: tuple[float, float],
        radius_km: float,
        station_type: StationType | str | None = None,
        bmtc_category: StopCategory | str | None = None,
    ) -> TransitResponse[dict[str, Any]]:
        """
        Stops within ``radius_km`` of a location. Upstream returns at most 10.

        ``bmtc_category`` ("airport" or "all") is only valid when
        ``station_type`` is "bmtc" or omitted.
        """
        params = validate_params(
            NearbyStopsParams,
            {
                "coordinates": coordinates,
                "radius_km": radius_km,
                "station_type": station_type,
                "bmtc_category": bmtc_category,
            },
            "Invalid nearby stops parameters",
        )
        lat, lon = params.coordinates
        payload: dict[str, Any] = {"latitude": lat, "longitude": lon, "radiuskm": params.radius_km}
        if params.station_type is not None:
            payload["stationflag"] = STATION_TYPES.to_upstream(params.station_type)
        if params.bmtc_category is not None:
            payload["flexiflag"] = STOP_CATEGORIES.to_upstream(params.bmtc_category)

        raw = self._request(
            Endpoint.NEARBY_STATIONS, payload, NearbyStopsResponse, "Invalid nearby stops response"
        )
        stops = feature_collection(
            point_feature(item.center_lon, item.center_lat, NEARBY_STOP_FIELDS(item))
            for item in raw.data
        )
        return self._respond(Endpoint.NEARBY_STATIONS, raw, stops)

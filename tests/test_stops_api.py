"""
Tests for stop and station lookups.

Covers payload construction from typed parameters (station type and stop
category codes), GeoJSON output with [lon, lat] positions, and facility
grouping around stations.
"""

import math

import pytest

from bengaluru_transit import ParameterValidationError, ResponseValidationError

from fixtures import envelope, sent_payload, sent_url

STATION_AROUND = {
    "stationname": "Kempegowda Bus Station",
    "distance": "0.12",
    "Arounds": [
        {
            "type": "Metro",
            "typeid": "2",
            "icon": "metro.png",
            "list": [
                {"name": "Nadaprabhu Kempegowda Station, Majestic", "latitude": "12.97566", "longitude": "77.57236", "distance": "0.25"},
                {"name": "City Railway Station", "latitude": "12.97591", "longitude": "77.56555", "distance": "0.81"},
            ],
        },
        {"type": "Hospital", "typeid": "5", "icon": "hospital.png", "list": []},
    ],
}

STOP_SEARCH_ITEM = {
    "srno": 1,
    "routeno": "",
    "routeid": 20922,
    "center_lat": 12.97749,
    "center_lon": 77.57327,
    "routetypeid": "1",
    "routename": "Kempegowda Bus Station",
    "route": "KBS",
}

NEARBY_STOP_ITEM = {
    "rowno": 1,
    "geofenceid": 22357,
    "geofencename": "NES Office",
    "center_lat": 13.09784,
    "center_lon": 77.59167,
    "towards": "Hebbala",
    "distance": 0.18,
    "totalminute": 2.4,
    "radiuskm": 1.0,
}


class TestNearbyStations:
    """Stations with grouped facilities."""

    def test_facilities_grouped_by_type(self, client, respond):
        """
        Test each facility type becomes a group with its own FeatureCollection.

        Group metadata (type, type_id, icon) stays on the group and never on
        the individual facility features.
        """
        session = respond(envelope([STATION_AROUND]))

        response = client.stops.find_nearby_stations((12.97749, 77.57327))

        assert sent_url(session).endswith("/AroundBusStops_v2")
        assert sent_payload(session) == {"latitude": 12.97749, "longitude": 77.57327}

        station = response.data[0]
        assert station["station_name"] == "Kempegowda Bus Station"
        assert station["distance"] == 0.12

        metro, hospital = station["facility_types"]
        assert (metro["type"], metro["type_id"], metro["icon"]) == ("Metro", "2", "metro.png")
        features = metro["facilities"]["features"]
        assert features[0]["geometry"]["coordinates"] == [77.57236, 12.97566]
        assert features[0]["properties"] == {
            "facility_name": "Nadaprabhu Kempegowda Station, Majestic",
            "distance": 0.25,
        }
        assert hospital["facilities"] == {"type": "FeatureCollection", "features": []}

        print(f"✅ {len(station['facility_types'])} facility groups around {station['station_name']}")

    def test_non_numeric_distance_rejected(self, client, respond):
        """Test numeric strings are checked before conversion."""
        station = {**STATION_AROUND, "distance": "near"}
        respond(envelope([station]))

        with pytest.raises(ResponseValidationError) as exc_info:
            client.stops.find_nearby_stations((12.97749, 77.57327))

        assert [issue.path for issue in exc_info.value.details] == ["data.0.distance"]

    def test_invalid_coordinates(self, client, session):
        with pytest.raises(ParameterValidationError):
            client.stops.find_nearby_stations((120.0, 77.5))
        session.post.assert_not_called()


class TestSearchStops:
    """Stop name search."""

    def test_default_station_type_is_bmtc(self, client, respond):
        session = respond(envelope([STOP_SEARCH_ITEM]))

        response = client.stops.search_stops("Kempegowda")

        assert sent_url(session).endswith("/FindNearByBusStop_v2")
        assert sent_payload(session) == {"stationname": "Kempegowda", "stationflag": 1}
        feature = response.data["features"][0]
        assert feature["geometry"]["coordinates"] == [77.57327, 12.97749]
        assert feature["properties"]["stop_id"] == "20922"
        assert feature["properties"]["stop_name"] == "Kempegowda Bus Station"

    @pytest.mark.parametrize("station_type,code", [("chartered", 2), ("metro", 163), ("ksrtc", 164)])
    def test_station_type_codes(self, client, respond, station_type, code):
        session = respond(envelope([]))

        client.stops.search_stops("Majestic", station_type=station_type)

        assert sent_payload(session)["stationflag"] == code

    def test_unknown_station_type(self, client, session):
        with pytest.raises(ParameterValidationError) as exc_info:
            client.stops.search_stops("Majestic", station_type="tram")

        assert [issue.path for issue in exc_info.value.details] == ["station_type"]
        session.post.assert_not_called()


class TestNearbyStops:
    """Radius search."""

    def test_minimal_payload(self, client, respond):
        """Test optional flags are omitted when not given."""
        session = respond(envelope([NEARBY_STOP_ITEM]))

        response = client.stops.find_nearby_stops((13.09784, 77.59167), radius_km=1)

        assert sent_url(session).endswith("/NearbyStations_v2")
        assert sent_payload(session) == {"latitude": 13.09784, "longitude": 77.59167, "radiuskm": 1.0}
        assert response.data["features"][0]["properties"] == {
            "row_number": 1,
            "stop_id": "22357",
            "stop_name": "NES Office",
            "towards": "Hebbala",
            "distance": 0.18,
            "travel_time_minutes": 2.4,
            "radius_km": 1.0,
        }

    def test_station_type_and_category(self, client, respond):
        session = respond(envelope([]))

        client.stops.find_nearby_stops((13.09784, 77.59167), radius_km=2, station_type="bmtc", bmtc_category="airport")

        assert sent_payload(session) == {
            "latitude": 13.09784,
            "longitude": 77.59167,
            "radiuskm": 2.0,
            "stationflag": 1,
            "flexiflag": 1,
        }

    def test_category_all(self, client, respond):
        session = respond(envelope([]))

        client.stops.find_nearby_stops((13.09784, 77.59167), radius_km=2, bmtc_category="all")

        assert sent_payload(session)["flexiflag"] == 3
        assert "stationflag" not in sent_payload(session)

    def test_category_with_metro_rejected(self, client, session):
        """Test bmtc_category is refused for non-BMTC station types."""
        with pytest.raises(ParameterValidationError):
            client.stops.find_nearby_stops((13.0, 77.5), radius_km=1, station_type="metro", bmtc_category="all")

        session.post.assert_not_called()

    def test_zero_radius_rejected(self, client, session):
        with pytest.raises(ParameterValidationError):
            client.stops.find_nearby_stops((13.0, 77.5), radius_km=0)

    @pytest.mark.parametrize("radius", [math.inf, math.nan])
    def test_non_finite_radius_rejected(self, client, session, radius):
        """Test a non-finite radius is a parameter error and never reaches the network."""
        with pytest.raises(ParameterValidationError) as exc_info:
            client.stops.find_nearby_stops((13.0, 77.5), radius_km=radius)

        assert [issue.path for issue in exc_info.value.details] == ["radius_km"]
        session.post.assert_not_called()

    def test_negative_distance_in_response(self, client, respond):
        respond(envelope([{**NEARBY_STOP_ITEM, "distance": -1}]))

        with pytest.raises(ResponseValidationError):
            client.stops.find_nearby_stops((13.0, 77.5), radius_km=1)

"""Test fixtures and upstream payload builders for transit client tests."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from bengaluru_transit import ClientConfig, TransitClient

FIXED_NOW = datetime(2026, 1, 18, 18, 30, 0)


def envelope(data, row_count=None, message="Success"):
    """Standard upstream envelope around ``data``."""
    if row_count is None:
        row_count = len(data) if isinstance(data, list) else 0
    return {
        "data": data,
        "Message": message,
        "Issuccess": True,
        "exception": None,
        "RowCount": row_count,
        "responsecode": 200,
    }


def lowercase_envelope(**fields):
    """Envelope variant with lowercase status keys."""
    return {
        **fields,
        "message": "Success",
        "issuccess": True,
        "exception": None,
        "rowCount": 0,
        "responsecode": 200,
    }


def http_response(payload=None, status_code=200, json_error=False):
    """Fake ``requests.Response`` returning ``payload`` from ``.json()``."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error:
        response.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
    else:
        response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


def make_leg(route_no="285-M", subroute_id=1995, fare=24, distance=12.7, duration="00:33:00",
             waiting=None, trip_id=80079217, from_stop=22357, to_stop=20922):
    """Raw trip planner leg with realistic defaults."""
    return {
        "pathSrno": 1,
        "transferSrNo": 0,
        "tripId": trip_id,
        "routeid": subroute_id,
        "routeno": route_no,
        "schNo": "285-M/12",
        "vehicleId": 26298,
        "busNo": "KA57F2481",
        "distance": distance,
        "duration": duration,
        "fromStationId": from_stop,
        "fromStationName": "NES Office (Towards Hebbala)",
        "toStationId": to_stop,
        "toStationName": "Kempegowda Bus Station (Towards Arrival)",
        "etaFromStation": "20:58",
        "etaToStation": "21:31",
        "serviceTypeId": 72,
        "fromLatitude": 13.09784,
        "fromLongitude": 77.59167,
        "toLatitude": 12.97749,
        "toLongitude": 77.57327,
        "routeParentId": 1180,
        "totalDuration": duration,
        "waitingDuration": waiting,
        "platformnumber": "",
        "baynumber": 0,
        "devicestatusnameflag": "Live",
        "devicestatusflag": 1,
        "srno": 1,
        "approx_fare": fare,
        "fromstagenumber": 1,
        "tostagenumber": 9,
        "minsrno": 1,
        "maxsrno": 32,
        "tollfees": 0,
        "totalStages": 9,
    }


def make_walk_leg(route_no="walk_source", distance=0.5, duration="00:05:00"):
    """Walking leg: no fare, sentinel subroute id, no trip."""
    leg = make_leg(route_no=route_no, subroute_id=0, fare=0, distance=distance,
                   duration=duration, trip_id=0)
    leg.update({"schNo": None, "busNo": None, "etaFromStation": None, "etaToStation": None})
    return leg


def make_vehicle(vehicle_id=26298, lat=13.0351, lon=77.5970):
    return {
        "vehicleid": vehicle_id,
        "vehiclenumber": "KA57F2481",
        "servicetypeid": 72,
        "servicetype": "Non AC/Ordinary",
        "centerlat": lat,
        "centerlong": lon,
        "eta": "",
        "sch_arrivaltime": "20:58",
        "sch_departuretime": "20:58",
        "actual_arrivaltime": "",
        "actual_departuretime": "",
        "sch_tripstarttime": "20:30",
        "sch_tripendtime": "21:40",
        "lastlocationid": 22357,
        "currentlocationid": 22358,
        "nextlocationid": 22359,
        "currentstop": None,
        "nextstop": "Hebbala",
        "laststop": "NES Office",
        "stopCoveredStatus": 0,
        "heading": 182.5,
        "lastrefreshon": "18-01-2026 20:55:02",
        "lastreceiveddatetimeflag": 1,
        "tripposition": 1,
    }


def make_route_station(station_id=22357, subroute_id=1995, vehicles=()):
    return {
        "routeid": subroute_id,
        "stationid": station_id,
        "stationname": "NES Office (Towards Hebbala)",
        "from": "Kempegowda Airport",
        "to": "Kempegowda Bus Station",
        "routeno": "285-M",
        "distance_on_station": 1.2,
        "centerlat": 13.09784,
        "centerlong": 77.59167,
        "responsecode": 200,
        "isnotify": 0,
        "vehicleDetails": list(vehicles),
    }


@pytest.fixture
def session():
    """Stand-in for ``requests.Session``; tests set ``session.post`` behaviour."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def client(session, sleep):
    """Client with default configuration, fake HTTP and a fixed clock."""
    return TransitClient(ClientConfig(), session=session, now=lambda: FIXED_NOW, sleep=sleep)


@pytest.fixture
def respond(session):
    """Queue a JSON body as the next successful upstream response."""

    def _respond(payload, status_code=200):
        session.post.return_value = http_response(payload, status_code=status_code)
        return session

    return _respond


def sent_payload(session):
    """JSON body of the last POST."""
    return session.post.call_args.kwargs["json"]


def sent_url(session):
    return session.post.call_args.args[0]

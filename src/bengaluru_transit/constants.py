"""
Fixed upstream values: endpoint paths, client defaults and leg heuristics.
"""

DEFAULT_BASE_URL = "https://bmtcmobileapi.karnataka.gov.in/WebAPI"
DEFAULT_DEVICE_TYPE = "WEB"
DEFAULT_AUTH_TOKEN = "N/A"
DEFAULT_TIMEOUT_SECONDS = 30.0

DEFAULT_RETRY_LIMIT = 2
DEFAULT_RETRY_STATUS_CODES = (408, 413, 429, 500, 502, 503, 504)
DEFAULT_RETRY_BACKOFF_SECONDS = 0.3

# Route token the trip planner uses for the walk to the first boarding stop
WALK_ROUTE_MARKER = "walk_source"
# Any route token starting with this is a pedestrian leg
WALK_PREFIX = "walk"
# Subroute id upstream reports for legs with no real route
EMPTY_SUBROUTE_ID = "0"

# End of the default timetable window, same date as the start time
END_OF_DAY = "23:59"


class Endpoint:
    """Upstream endpoint paths, one per logical operation."""

    HELPLINE = "GetHelplineData"
    SERVICE_TYPES = "GetAllServiceTypes"
    ABOUT = "GetAboutData"

    LIST_VEHICLES = "ListVehicles"

    SEARCH_PLACES = "GetSearchPlaceData"

    AROUND_BUS_STOPS = "AroundBusStops_v2"
    SEARCH_BUS_STOPS = "FindNearByBusStop_v2"
    NEARBY_STATIONS = "NearbyStations_v2"

    ROUTE_POINTS = "RoutePoints"
    SEARCH_ROUTES = "SearchRoute_v2"
    ALL_ROUTES = "GetAllRouteList"
    TIMETABLE_BY_ROUTE = "GetTimetableByRouteid_v3"
    ROUTE_DETAILS = "SearchByRouteDetails_v4"
    FARE_ROUTES = "GetFareRoutes"
    FARE_DATA = "GetMobileFareData_v2"
    TRIP_PLANNER = "TripPlannerMSMD"
    PATH_DETAILS = "GetPathDetails"

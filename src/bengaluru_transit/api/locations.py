from typing import Any

from bengaluru_transit.constants import Endpoint
from bengaluru_transit.geo.features import feature_collection, point_feature
from bengaluru_transit.schemas.locations import PlacesResponse, SearchPlacesParams
from bengaluru_transit.validation.validator import validate_params

from .base import BaseAPI, TransitResponse


class LocationsAPI(BaseAPI):

    def search_places(self, query: str) -> TransitResponse[dict[str, Any]]:
        """
        Free-text place search.

        Returns:
            FeatureCollection of Points with ``title`` and ``address`` properties.
        """
        params = validate_params(SearchPlacesParams, {"query": query}, "Invalid place search parameters")
        raw = self._request(
            Endpoint.SEARCH_PLACES,
            {"placename": params.query},
            PlacesResponse,
            "Invalid search places response",
        )
        places = feature_collection(
            point_feature(item.lng, item.lat, {"title": item.title, "address": item.placename})
            for item in raw.data
        )
        return self._respond(Endpoint.SEARCH_PLACES, raw, places)

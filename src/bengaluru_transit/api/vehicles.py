from typing import Any

from bengaluru_transit.constants import Endpoint
from bengaluru_transit.normalize.fields import RecordTransformer, identifier, keep
from bengaluru_transit.schemas.vehicles import SearchVehiclesParams, VehiclesResponse
from bengaluru_transit.validation.validator import validate_params

from .base import BaseAPI, TransitResponse

VEHICLE_FIELDS = RecordTransformer(
    identifier("vehicleid", "vehicle_id"),
    keep("vehicleregno", "vehicle_reg_no"),
)


class VehiclesAPI(BaseAPI):

    def search_vehicles(self, query: str) -> TransitResponse[list[dict[str, Any]]]:
        """Vehicles whose registration number contains ``query``."""
        params = validate_params(SearchVehiclesParams, {"query": query}, "Invalid vehicle search parameters")
        raw = self._request(
            Endpoint.LIST_VEHICLES,
            {"vehicleregno": params.query},
            VehiclesResponse,
            "Invalid list vehicles response",
        )
        return self._respond(Endpoint.LIST_VEHICLES, raw, VEHICLE_FIELDS.many(raw.data))

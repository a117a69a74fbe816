"""General information endpoints: helpline, service types, about."""

from typing import Any

from bengaluru_transit.constants import Endpoint
from bengaluru_transit.geo.features import point_feature
from bengaluru_transit.normalize.fields import RecordTransformer, identifier, keep
from bengaluru_transit.schemas.info import AboutResponse, HelplineResponse, ServiceTypesResponse

from .base import BaseAPI, TransitResponse

HELPLINE_FIELDS = RecordTransformer(
    keep("labelname", "label_name"),
    keep("busstopname", "bus_stop_name"),
    keep("helplinenumber", "helpline_number"),
)

SERVICE_TYPE_FIELDS = RecordTransformer(
    keep("servicetype", "service_type"),
    identifier("servicetypeid", "service_type_id"),
)

ABOUT_FIELDS = RecordTransformer(
    keep("termsandconditionsurl", "terms_and_conditions_url"),
    keep("aboutbmtcurl", "about_url"),
    keep("aboutdeveloperurl", "about_developer_url"),
    identifier("airportstationid", "airport_stop_id"),
    keep("airportstationname", "airport_stop_name"),
)


class InfoAPI(BaseAPI):

    def get_helpline(self) -> TransitResponse[list[dict[str, Any]]]:
        raw = self._request(Endpoint.HELPLINE, {}, HelplineResponse, "Invalid helpline response")
        return self._respond(Endpoint.HELPLINE, raw, HELPLINE_FIELDS.many(raw.data))

    def get_service_types(self) -> TransitResponse[list[dict[str, Any]]]:
        """Service classes (AC, non-AC, ...) usable as ``service_type_id`` filters."""
        raw = self._request(
            Endpoint.SERVICE_TYPES, {}, ServiceTypesResponse, "Invalid service types response"
        )
        return self._respond(Endpoint.SERVICE_TYPES, raw, SERVICE_TYPE_FIELDS.many(raw.data))

    def get_about(self) -> TransitResponse[dict[str, Any]]:
        """
        Service links plus the airport stop, whose location is returned as a
        GeoJSON Point under ``airport``.
        """
        raw = self._request(Endpoint.ABOUT, {}, AboutResponse, "Invalid about data response")
        item = raw.data[0]
        record = ABOUT_FIELDS(item)
        record["airport"] = point_feature(
            item.airportlongitude,
            item.airportlattitude,
            {"stop_id": record["airport_stop_id"], "stop_name": record["airport_stop_name"]},
        )
        return self._respond(Endpoint.ABOUT, raw, record)

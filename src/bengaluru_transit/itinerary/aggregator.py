"""
Itinerary aggregation for trip planner results.

The trip planner returns two collections of leg arrays: direct itineraries
(one vehicle) and transfer itineraries (several vehicles, often with leading
or trailing walking legs). This module normalizes every leg and folds each
leg array into an ``Itinerary`` whose totals are derived from its legs and
nothing else.

AGGREGATES:
==========

- total_fare: sum of leg ``approx_fare``
- total_distance: sum of leg ``distance``
- total_duration_seconds: sum of leg duration plus waiting duration (when present)
- total_duration: the same total as "HH:mm:ss"
- has_walking: any leg whose route number is the walking marker or starts
  with the walk prefix
- bus_segment_count: legs that are neither walking legs nor carry the empty
  subroute id
- transfer_count: max(0, bus_segment_count - 1)

Result order is direct itineraries then transfer itineraries, each in
upstream order. Nothing is ranked, filtered or deduplicated; a direct-only
view is ``[i for i in itineraries if i.transfer_count == 0]``.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel

from bengaluru_transit.constants import EMPTY_SUBROUTE_ID, WALK_PREFIX, WALK_ROUTE_MARKER
from bengaluru_transit.normalize.durations import format_duration
from bengaluru_transit.normalize.fields import RecordTransformer, duration_seconds, identifier, keep

logger = logging.getLogger(__name__)


LEG_FIELDS = RecordTransformer(
    keep("pathSrno", "path_sr_no"),
    keep("transferSrNo", "transfer_sr_no"),
    identifier("tripId", "trip_id"),
    identifier("routeid", "subroute_id"),
    keep("routeno", "route_no"),
    keep("schNo", "schedule_no"),
    identifier("vehicleId", "vehicle_id"),
    keep("busNo", "bus_no"),
    keep("distance"),
    keep("duration"),
    duration_seconds("duration", "duration_seconds"),
    identifier("fromStationId", "from_stop_id"),
    keep("fromStationName", "from_stop_name"),
    identifier("toStationId", "to_stop_id"),
    keep("toStationName", "to_stop_name"),
    keep("etaFromStation", "eta_from_stop"),
    keep("etaToStation", "eta_to_stop"),
    identifier("serviceTypeId", "service_type_id"),
    keep("fromLatitude", "from_latitude"),
    keep("fromLongitude", "from_longitude"),
    keep("toLatitude", "to_latitude"),
    keep("toLongitude", "to_longitude"),
    identifier("routeParentId", "route_parent_id"),
    keep("totalDuration", "total_duration"),
    duration_seconds("totalDuration", "total_duration_seconds"),
    keep("waitingDuration", "waiting_duration"),
    duration_seconds("waitingDuration", "waiting_duration_seconds"),
    keep("platformnumber", "platform_number"),
    keep("baynumber", "bay_number"),
    keep("devicestatusnameflag", "device_status_name"),
    keep("devicestatusflag", "device_status_flag"),
    keep("srno", "sr_no"),
    keep("approx_fare"),
    keep("fromstagenumber", "from_stage_number"),
    keep("tostagenumber", "to_stage_number"),
    keep("minsrno", "min_sr_no"),
    keep("maxsrno", "max_sr_no"),
    keep("tollfees", "toll_fees"),
    keep("totalStages", "total_stages"),
)


@dataclass(frozen=True)
class NormalizedLeg:
    """One trip planner leg with string ids and durations in seconds."""

    path_sr_no: int
    transfer_sr_no: int
    trip_id: str
    subroute_id: str
    route_no: str
    schedule_no: str | None
    vehicle_id: str
    bus_no: str | None
    distance: float
    duration: str
    duration_seconds: int
    from_stop_id: str
    from_stop_name: str
    to_stop_id: str
    to_stop_name: str
    eta_from_stop: str | None
    eta_to_stop: str | None
    service_type_id: str
    from_latitude: float
    from_longitude: float
    to_latitude: float
    to_longitude: float
    route_parent_id: str
    total_duration: str
    total_duration_seconds: int
    waiting_duration: str | None
    waiting_duration_seconds: int | None
    platform_number: str | None
    bay_number: int | None
    device_status_name: str | None
    device_status_flag: int | None
    sr_no: int
    approx_fare: float
    from_stage_number: int | None
    to_stage_number: int | None
    min_sr_no: int | None
    max_sr_no: int | None
    toll_fees: float | None
    total_stages: int | None

    @property
    def is_walking(self) -> bool:
        return self.route_no == WALK_ROUTE_MARKER or self.route_no.startswith(WALK_PREFIX)

    @property
    def is_bus_segment(self) -> bool:
        return self.subroute_id != EMPTY_SUBROUTE_ID and not self.is_walking


def normalize_leg(raw: BaseModel | Mapping[str, Any]) -> NormalizedLeg:
    """Rename and coerce one validated raw leg."""
    return NormalizedLeg(**LEG_FIELDS(raw))


@dataclass(frozen=True)
class ItineraryTotals:
    total_fare: float
    total_distance: float
    total_duration_seconds: int
    total_duration: str
    bus_segment_count: int
    transfer_count: int
    has_walking: bool


def aggregate_legs(legs: Iterable[NormalizedLeg]) -> ItineraryTotals:
    """Fold legs, in order, into their totals. An empty sequence gives zeros."""
    total_fare = 0.0
    total_distance = 0.0
    total_seconds = 0
    bus_segments = 0
    has_walking = False

    for leg in legs:
        total_fare += leg.approx_fare
        total_distance += leg.distance
        total_seconds += leg.duration_seconds + (leg.waiting_duration_seconds or 0)
        has_walking = has_walking or leg.is_walking
        if leg.is_bus_segment:
            bus_segments += 1

    return ItineraryTotals(
        total_fare=total_fare,
        total_distance=total_distance,
        total_duration_seconds=total_seconds,
        total_duration=format_duration(total_seconds),
        bus_segment_count=bus_segments,
        transfer_count=max(0, bus_segments - 1),
        has_walking=has_walking,
    )


@dataclass(frozen=True)
class Itinerary:
    """
    Ordered legs of one journey option plus totals computed from them.

    ``totals`` cannot be passed in: it is always recomputed from ``legs``.
    """

    legs: tuple[NormalizedLeg, ...]
    totals: ItineraryTotals = field(init=False)

    def __post_init__(self):
        legs = tuple(self.legs)
        object.__setattr__(self, "legs", legs)
        object.__setattr__(self, "totals", aggregate_legs(legs))

    @classmethod
    def from_legs(cls, legs: Iterable[NormalizedLeg]) -> "Itinerary":
        return cls(tuple(legs))

    @property
    def total_fare(self) -> float:
        return self.totals.total_fare

    @property
    def total_distance(self) -> float:
        return self.totals.total_distance

    @property
    def total_duration_seconds(self) -> int:
        return self.totals.total_duration_seconds

    @property
    def total_duration(self) -> str:
        return self.totals.total_duration

    @property
    def transfer_count(self) -> int:
        return self.totals.transfer_count

    @property
    def has_walking(self) -> bool:
        return self.totals.has_walking

    @property
    def is_direct(self) -> bool:
        return self.totals.transfer_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "legs": [asdict(leg) for leg in self.legs],
            **asdict(self.totals),
        }


def build_itineraries(
    direct: Sequence[Sequence[BaseModel | Mapping[str, Any]]],
    transfer: Sequence[Sequence[BaseModel | Mapping[str, Any]]],
) -> list[Itinerary]:
    """
    Normalize and aggregate every leg array, direct ones first.

    Zero-leg arrays are kept and produce an all-zero itinerary.
    """
    itineraries = [
        Itinerary.from_legs(normalize_leg(leg) for leg in legs)
        for legs in [*direct, *transfer]
    ]
    logger.debug(
        f"🧭 Built {len(itineraries)} itineraries "
        f"({len(direct)} direct, {len(transfer)} with transfers)"
    )
    return itineraries

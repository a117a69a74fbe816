from .aggregator import (
    Itinerary,
    ItineraryTotals,
    NormalizedLeg,
    aggregate_legs,
    build_itineraries,
    normalize_leg,
)

__all__ = [
    "Itinerary",
    "ItineraryTotals",
    "NormalizedLeg",
    "aggregate_legs",
    "build_itineraries",
    "normalize_leg",
]

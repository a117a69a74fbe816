"""
Closed bidirectional tables between caller-facing tokens and upstream codes.

Each table is built from an Enum and checked at construction: every member
must map to exactly one upstream code and no two members may share a code.
A table that is not a bijection fails at import time, so lookups never fall
through silently on an unmapped category.

Example:
    >>> STATION_TYPES.to_upstream(StationType.METRO)
    163
    >>> STATION_TYPES.from_upstream(163)
    <StationType.METRO: 'metro'>
"""

from collections.abc import Callable, Hashable, Mapping
from enum import Enum
from typing import Generic, TypeVar

from bengaluru_transit.errors import CategoryMappingError

E = TypeVar("E", bound=Enum)


class StationType(str, Enum):
    """Kind of stop network searched by the stop endpoints."""

    BMTC = "bmtc"
    CHARTERED = "chartered"
    METRO = "metro"
    KSRTC = "ksrtc"


class StopCategory(str, Enum):
    """Subset of BMTC stops for radius searches."""

    AIRPORT = "airport"
    ALL = "all"


class TripPlannerFilter(str, Enum):
    """Upstream sorting preference for trip plans."""

    MINIMUM_TRANSFERS = "minimum-transfers"
    SHORTEST_TIME = "shortest-time"


class RouteDirection(str, Enum):
    """Travel direction of a subroute, canonical lowercase."""

    UP = "up"
    DOWN = "down"


class Language(str, Enum):
    """Response language requested from upstream."""

    ENGLISH = "en"
    KANNADA = "kn"


class CategoryMapping(Generic[E]):
    """
    Exhaustive, unambiguous mapping between an Enum and upstream codes.

    Args:
        enum_cls: Enum whose members are the caller-facing tokens.
        codes: Upstream code for every member of ``enum_cls``.
        normalize_upstream: Optional function applied to upstream codes before
            reverse lookup (e.g. ``str.upper`` for case-insensitive directions).

    Raises:
        CategoryMappingError: If a member is missing, an extra key is present,
            or two members share a code.
    """

    def __init__(
        self,
        enum_cls: type[E],
        codes: Mapping[E, Hashable],
        normalize_upstream: Callable[[Hashable], Hashable] | None = None,
    ):
        self.enum_cls = enum_cls
        self._normalize = normalize_upstream

        missing = [member.value for member in enum_cls if member not in codes]
        if missing:
            raise CategoryMappingError(
                f"{enum_cls.__name__} mapping is not total, missing: {missing}"
            )

        extra = [key for key in codes if not isinstance(key, enum_cls)]
        if extra:
            raise CategoryMappingError(
                f"{enum_cls.__name__} mapping has keys outside the enum: {extra}"
            )

        self._to_code: dict[E, Hashable] = dict(codes)
        self._to_member: dict[Hashable, E] = {}
        for member, code in self._to_code.items():
            key = self._normalize(code) if self._normalize else code
            if key in self._to_member:
                raise CategoryMappingError(
                    f"{enum_cls.__name__} mapping is ambiguous: code {code!r} is used by "
                    f"'{self._to_member[key].value}' and '{member.value}'"
                )
            self._to_member[key] = member

    def to_upstream(self, token: E | str) -> Hashable:
        """Return the upstream code for a member or its string token."""
        try:
            member = self.enum_cls(token)
        except ValueError as e:
            raise CategoryMappingError(
                f"Unknown {self.enum_cls.__name__} token {token!r}; "
                f"expected one of {self.tokens()}"
            ) from e
        return self._to_code[member]

    def from_upstream(self, code: Hashable) -> E:
        """Return the member an upstream code stands for."""
        key = self._normalize(code) if self._normalize else code
        try:
            return self._to_member[key]
        except KeyError as e:
            raise CategoryMappingError(
                f"Unknown upstream {self.enum_cls.__name__} code {code!r}"
            ) from e

    def tokens(self) -> list[str]:
        return [member.value for member in self.enum_cls]

    def __len__(self) -> int:
        return len(self._to_code)


STATION_TYPES: CategoryMapping[StationType] = CategoryMapping(
    StationType,
    {
        StationType.BMTC: 1,
        StationType.CHARTERED: 2,
        StationType.METRO: 163,
        StationType.KSRTC: 164,
    },
)

STOP_CATEGORIES: CategoryMapping[StopCategory] = CategoryMapping(
    StopCategory,
    {
        StopCategory.AIRPORT: 1,
        StopCategory.ALL: 3,
    },
)

TRIP_PLANNER_FILTERS: CategoryMapping[TripPlannerFilter] = CategoryMapping(
    TripPlannerFilter,
    {
        TripPlannerFilter.MINIMUM_TRANSFERS: 1,
        TripPlannerFilter.SHORTEST_TIME: 2,
    },
)

ROUTE_DIRECTIONS: CategoryMapping[RouteDirection] = CategoryMapping(
    RouteDirection,
    {
        RouteDirection.UP: "UP",
        RouteDirection.DOWN: "DOWN",
    },
    normalize_upstream=lambda code: str(code).strip().upper(),
)

LANGUAGES: CategoryMapping[Language] = CategoryMapping(
    Language,
    {
        Language.ENGLISH: "English",
        Language.KANNADA: "Kannada",
    },
)

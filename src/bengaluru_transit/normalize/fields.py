"""
Declarative field renaming and coercion for upstream records.

Most endpoints differ only in which upstream keys they rename and how each
value is coerced (numeric id -> string id, numeric string -> float, ...).
Instead of one bespoke transform per endpoint, each endpoint declares a
``RecordTransformer`` listing its fields, which keeps the endpoint contract
visible in one place.

Example:
    >>> vehicle = RecordTransformer(
    ...     identifier("vehicleid", "vehicle_id"),
    ...     keep("vehicleregno", "vehicle_reg_no"),
    ... )
    >>> vehicle({"vehicleid": 26298, "vehicleregno": "KA51AH4541"})
    {'vehicle_id': '26298', 'vehicle_reg_no': 'KA51AH4541'}
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from bengaluru_transit.normalize.categories import ROUTE_DIRECTIONS
from bengaluru_transit.normalize.durations import parse_duration
from bengaluru_transit.normalize.identifiers import stringify_id


@dataclass(frozen=True)
class FieldSpec:
    """
    One output field: where it comes from and how it is coerced.

    ``None`` values pass through untouched so nullable upstream fields stay
    nullable after normalization.
    """

    source: str
    target: str
    coerce: Callable[[Any], Any] | None = None

    def extract(self, record: Mapping[str, Any]) -> Any:
        value = record[self.source]
        if value is None or self.coerce is None:
            return value
        return self.coerce(value)


def keep(source: str, target: str | None = None) -> FieldSpec:
    """Copy a field as-is, optionally under a new name."""
    return FieldSpec(source, target or source)


def identifier(source: str, target: str) -> FieldSpec:
    """Numeric upstream id -> opaque string id."""
    return FieldSpec(source, target, stringify_id)


def numeric(source: str, target: str) -> FieldSpec:
    """Numeric string (already validated) -> float."""
    return FieldSpec(source, target, float)


def duration_seconds(source: str, target: str) -> FieldSpec:
    """Duration string -> total seconds, keeping the string under its own field."""
    return FieldSpec(source, target, parse_duration)


def optional_text(source: str, target: str) -> FieldSpec:
    """Empty strings become None."""
    return FieldSpec(source, target, lambda value: value or None)


def direction(source: str, target: str) -> FieldSpec:
    """Upstream direction token ("UP", "Down", ...) -> canonical lowercase value."""
    return FieldSpec(source, target, lambda value: ROUTE_DIRECTIONS.from_upstream(value).value)


class RecordTransformer:
    """
    Ordered collection of FieldSpecs applied to one upstream record.

    Args:
        *specs: Output fields, in output order. Target names must be unique.

    Raises:
        ValueError: If two specs write the same target.
    """

    def __init__(self, *specs: FieldSpec):
        targets = [spec.target for spec in specs]
        duplicates = sorted({t for t in targets if targets.count(t) > 1})
        if duplicates:
            raise ValueError(f"Duplicate output fields: {duplicates}")
        self.specs = specs

    def __call__(self, record: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
        if isinstance(record, BaseModel):
            record = record.model_dump(by_alias=True)
        return {spec.target: spec.extract(record) for spec in self.specs}

    def many(self, records: Iterable[Mapping[str, Any] | BaseModel]) -> list[dict[str, Any]]:
        return [self(record) for record in records]

    def extend(self, *specs: FieldSpec) -> "RecordTransformer":
        """Return a new transformer with extra fields appended."""
        return RecordTransformer(*self.specs, *specs)

    @property
    def targets(self) -> list[str]:
        return [spec.target for spec in self.specs]

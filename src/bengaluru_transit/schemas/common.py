"""
Shared pydantic building blocks for request and response contracts.

Request models use caller-facing names (``route_id``, ``coordinates``) and
typed constraints. Response models mirror the upstream keys exactly and wrap
one of the two envelope shapes the service returns.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

from bengaluru_transit.normalize.durations import DURATION_PATTERN
from bengaluru_transit.normalize.identifiers import parse_id


def _coerce_identifier(value: Any) -> int:
    if not isinstance(value, str):
        raise ValueError("Identifier must be a string of digits")
    return parse_id(value)


def _check_finite_decimal(value: str) -> str:
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        raise ValueError(f"'{value}' is not a decimal number") from None
    if not number.is_finite():
        raise ValueError(f"'{value}' is not a finite number")
    return value


def _check_finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("Number must be finite")
    return value


# Opaque string id from the caller, sent upstream as a positive integer
Identifier = Annotated[int, BeforeValidator(_coerce_identifier), Field(gt=0)]

Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]

# Caller-side coordinate order is (latitude, longitude)
Coordinate = tuple[Latitude, Longitude]

QueryText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Numbers upstream sends as strings, e.g. "13.19"
NumericString = Annotated[str, AfterValidator(_check_finite_decimal)]

FiniteFloat = Annotated[float, AfterValidator(_check_finite)]

DurationString = Annotated[str, Field(pattern=DURATION_PATTERN)]


class RequestModel(BaseModel):
    """Base for caller parameter contracts. Unknown parameters are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Envelope(BaseModel):
    """Standard upstream envelope: ``Message`` / ``Issuccess`` / ``RowCount``."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(alias="Message")
    is_success: bool = Field(alias="Issuccess")
    row_count: int | None = Field(default=None, alias="RowCount")
    responsecode: int | None = None
    exception: Any = None


class LowercaseEnvelope(BaseModel):
    """Envelope variant used by a few endpoints: ``message`` / ``issuccess`` / ``rowCount``."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    is_success: bool = Field(alias="issuccess")
    row_count: int | None = Field(default=None, alias="rowCount")
    responsecode: int | None = None
    exception: Any = None

"""
Shared plumbing for the endpoint accessors.

Each accessor method runs the same pipeline:

1. validate caller parameters (nothing is sent when this fails)
2. build the upstream payload
3. POST through the transport
4. validate the raw response
5. normalize into the returned ``TransitResponse``
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from bengaluru_transit.validation.validator import validate_response

if TYPE_CHECKING:
    from bengaluru_transit.client.transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class TransitResponse(Generic[T]):
    """Normalized result of one operation plus the upstream envelope status."""

    data: T
    message: str
    success: bool
    row_count: int | None = None

    @classmethod
    def from_envelope(cls, envelope: BaseModel, data: T) -> "TransitResponse[T]":
        return cls(
            data=data,
            message=envelope.message,
            success=envelope.is_success,
            row_count=envelope.row_count,
        )


class BaseAPI:
    """Accessor base: holds the transport and runs the request/validate step."""

    def __init__(self, transport: "Transport"):
        self.transport = transport

    def _request(self, endpoint: str, payload: dict[str, Any], contract: type[M], message: str) -> M:
        logger.debug(f"➡️ POST {endpoint}")
        raw = self.transport.post(endpoint, payload)
        return validate_response(contract, raw, message)

    @staticmethod
    def _respond(endpoint: str, envelope: BaseModel, data: T) -> TransitResponse[T]:
        logger.debug(f"✅ {endpoint}: normalized {_record_count(data)} record(s)")
        return TransitResponse.from_envelope(envelope, data)


def _record_count(data: Any) -> int:
    if isinstance(data, list):
        return len(data)
    if isinstance(data, dict) and data.get("type") == "FeatureCollection":
        return len(data["features"])
    return 1

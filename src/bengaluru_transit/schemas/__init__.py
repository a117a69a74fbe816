"""Request and raw response contracts, one module per endpoint group"""

from .common import Coordinate, Envelope, Identifier, LowercaseEnvelope, RequestModel

__all__ = ["Coordinate", "Envelope", "Identifier", "LowercaseEnvelope", "RequestModel"]

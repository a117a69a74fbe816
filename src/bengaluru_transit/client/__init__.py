from .transport import Transport
from .transit_client import TransitClient

__all__ = ["Transport", "TransitClient"]

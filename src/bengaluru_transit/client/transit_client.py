"""
Entry point that wires configuration, transport and accessors together.

Usage:
```python
client = TransitClient(ClientConfig(language="kn"))
plans = client.routes.plan_trip(from_stop_id="22357", to_stop_id="20922")
direct = [p for p in plans.data if p.transfer_count == 0]
```
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime

import requests

from bengaluru_transit.api.info import InfoAPI
from bengaluru_transit.api.locations import LocationsAPI
from bengaluru_transit.api.routes import RoutesAPI
from bengaluru_transit.api.stops import StopsAPI
from bengaluru_transit.api.vehicles import VehiclesAPI
from bengaluru_transit.config.config_manager import ClientConfig
from bengaluru_transit.logging import setup_logger

from .transport import Transport

logger = logging.getLogger(__name__)


class TransitClient:
    """
    Client for the Bengaluru bus service API.

    Args:
        config: Immutable client configuration. Defaults to ``ClientConfig()``.
        session: Optional ``requests.Session`` (e.g. with custom adapters).
        now: Clock for default time windows and future-time checks.
        sleep: Backoff sleep used between retries.

    Attributes:
        info: helpline, service types, about
        vehicles: vehicle search
        locations: place search
        stops: stop and station lookups
        routes: routes, timetables, fares and trip planning
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
        now: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config if config is not None else ClientConfig()

        if self.config.log_level:
            setup_logger(
                "bengaluru_transit",
                log_dir=self.config.log_dir,
                console_level=self.config.log_level,
            )

        self.transport = Transport(self.config, session=session, sleep=sleep)
        self.info = InfoAPI(self.transport)
        self.vehicles = VehiclesAPI(self.transport)
        self.locations = LocationsAPI(self.transport)
        self.stops = StopsAPI(self.transport)
        self.routes = RoutesAPI(self.transport, language=self.config.language, now=now)

        logger.debug(f"🚌 Transit client ready for {self.config.base_url} (language={self.config.language})")

    def close(self):
        self.transport.close()

    def __enter__(self) -> "TransitClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

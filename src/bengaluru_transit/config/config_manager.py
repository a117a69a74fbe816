"""
Client configuration data classes and YAML loading.

Configuration is an immutable value handed to ``TransitClient`` at
construction; nothing is read from module-level state.

Example YAML Configuration:
```yaml
client:
  base_url: "https://bmtcmobileapi.karnataka.gov.in/WebAPI"
  timeout_seconds: 20
  language: "kn"
  device_id: "b7c1e6a2"
  headers:
    User-Agent: "commute-dashboard/1.4"

retry:
  limit: 3
  backoff_seconds: 0.5

logging:
  level: "DEBUG"
  log_dir: "logs"
```

Usage:
```python
config_manager = ClientConfigManager("transit.yaml")
client = TransitClient(config_manager.get_client_config())
```
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bengaluru_transit.constants import (
    DEFAULT_AUTH_TOKEN,
    DEFAULT_BASE_URL,
    DEFAULT_DEVICE_TYPE,
    DEFAULT_RETRY_BACKOFF_SECONDS,
    DEFAULT_RETRY_LIMIT,
    DEFAULT_RETRY_STATUS_CODES,
    DEFAULT_TIMEOUT_SECONDS,
)
from bengaluru_transit.normalize.categories import Language

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class RetryConfig:
    """
    Fixed-attempt retry policy applied by the transport.

    Attributes:
    ===========

    limit : int, default=2
        Extra attempts after the first one. 0 disables retries.

    status_codes : tuple[int, ...]
        HTTP statuses that trigger a retry. Any other error status fails
        immediately.

    backoff_seconds : float, default=0.3
        Linear backoff unit: attempt ``n`` sleeps ``n * backoff_seconds``.
    """

    limit: int = DEFAULT_RETRY_LIMIT
    status_codes: tuple[int, ...] = DEFAULT_RETRY_STATUS_CODES
    backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS

    def __post_init__(self):
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
            raise ValueError(f"Retry limit must be a non-negative integer, got {self.limit!r}")
        object.__setattr__(self, "status_codes", tuple(self.status_codes))
        for code in self.status_codes:
            if not isinstance(code, int) or not 100 <= code <= 599:
                raise ValueError(f"Retry status codes must be HTTP statuses, got {code!r}")
        if self.backoff_seconds < 0:
            raise ValueError("Retry backoff cannot be negative")


@dataclass(frozen=True)
class ClientConfig:
    """
    Everything the client needs to talk to the upstream service.

    Attributes:
    ===========

    base_url : str
        Service root. A trailing slash is stripped.

    timeout_seconds : float, default=30.0
        Per-request timeout handed to ``requests``.

    language : str, default="en"
        Response language, "en" or "kn".

    device_type, auth_token, device_id : str
        Values for the ``deviceType``, ``authToken`` and ``deviceId`` headers.
        ``deviceId`` is only sent when set.

    headers : dict[str, str]
        Extra headers, applied after the defaults.

    retry : RetryConfig
        Transport retry policy.

    log_level, log_dir : str | None
        When ``log_level`` is set the client attaches handlers via
        ``setup_logger``; otherwise logging configuration is left to the
        application.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    language: str = Language.ENGLISH.value
    device_type: str = DEFAULT_DEVICE_TYPE
    auth_token: str = DEFAULT_AUTH_TOKEN
    device_id: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    retry: RetryConfig = field(default_factory=RetryConfig)
    log_level: str | None = None
    log_dir: str | None = None

    def __post_init__(self):
        if not isinstance(self.base_url, str) or not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.base_url in ("http:/", "https:/", "http:", "https:"):
            raise ValueError("base_url must include a host")

        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")

        valid_languages = [member.value for member in Language]
        if self.language not in valid_languages:
            raise ValueError(f"Language must be one of {valid_languages}")

        if not self.device_type:
            raise ValueError("device_type cannot be empty")
        if not self.auth_token:
            raise ValueError("auth_token cannot be empty")

        if self.log_level is not None:
            level = str(self.log_level).upper()
            if level not in VALID_LOG_LEVELS:
                raise ValueError(f"Log level must be one of {list(VALID_LOG_LEVELS)}")
            object.__setattr__(self, "log_level", level)

        object.__setattr__(self, "headers", dict(self.headers))


class ClientConfigManager:
    """
    Load and validate client configuration from YAML or a dictionary.

    Configuration Structure:
        ```yaml
        client: {...}     # ClientConfig fields (required section)
        retry: {...}      # RetryConfig fields (optional)
        logging: {...}    # level / log_dir (optional)
        ```
    """

    def __init__(self, config_path: str | None = None, config_dict: dict | None = None):
        """
        Args:
            config_path: Path to YAML configuration file
            config_dict: Configuration dictionary (alternative to file)

        Raises:
            FileNotFoundError: If config_path doesn't exist
            ValueError: If both or neither sources are given, or validation fails
            yaml.YAMLError: If the YAML file is malformed
        """
        if config_path and config_dict:
            raise ValueError("Provide either config_path or config_dict, not both")

        if not config_path and not config_dict:
            raise ValueError(
                "Configuration is required. Provide either:\n"
                "  - config_path: Path to YAML configuration file\n"
                "  - config_dict: Configuration dictionary\n"
                "Example: ClientConfigManager('transit.yaml')"
            )

        if config_path:
            self.config = self._load_yaml_config(config_path)
        else:
            self.config = config_dict

        self._validate_config()
        self.client_config = self._build_client_config()

    def _load_yaml_config(self, config_path: str) -> dict[str, Any]:
        """Load configuration from YAML file with error handling."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a dictionary, got {type(config)}")

        logger.info(f"📂 Loaded configuration from {config_path}")
        return config

    def _validate_config(self):
        """Validate configuration structure and section types."""
        if "client" not in self.config:
            raise ValueError("Missing required configuration section: 'client'")

        for section in ("client", "retry", "logging"):
            value = self.config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

        known = {"client", "retry", "logging"}
        unknown = sorted(set(self.config) - known)
        if unknown:
            raise ValueError(f"Unknown configuration sections: {unknown}")

    def _build_client_config(self) -> ClientConfig:
        """Setup structured configuration objects with validation."""
        client_section = dict(self.config["client"] or {})
        retry_section = dict(self.config.get("retry") or {})
        logging_section = dict(self.config.get("logging") or {})

        for key in ("retry", "log_level", "log_dir"):
            if key in client_section:
                raise ValueError(f"'{key}' belongs in its own section, not under 'client'")

        if "status_codes" in retry_section:
            retry_section["status_codes"] = tuple(retry_section["status_codes"])

        try:
            retry = RetryConfig(**retry_section)
            return ClientConfig(
                **client_section,
                retry=retry,
                log_level=logging_section.get("level"),
                log_dir=logging_section.get("log_dir"),
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration keys: {e}") from e

    def get_client_config(self) -> ClientConfig:
        return self.client_config

    def get_full_config(self) -> dict[str, Any]:
        return self.config

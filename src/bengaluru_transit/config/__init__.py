"""
Client configuration: immutable config values plus a YAML loader.
"""

from .config_manager import ClientConfig, ClientConfigManager, RetryConfig

__all__ = [
    "ClientConfig",
    "ClientConfigManager",
    "RetryConfig",
]

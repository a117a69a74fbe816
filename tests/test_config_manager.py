"""
Basic tests for client configuration management.

These tests validate that configuration values are checked at construction
and that YAML / dictionary configurations are turned into the same immutable
``ClientConfig``.
"""

import tempfile
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest
import yaml

from bengaluru_transit.config import ClientConfig, ClientConfigManager, RetryConfig


class TestConfigDataClasses:
    """Test basic configuration data class creation and validation."""

    def test_client_config_defaults(self):
        """Test ClientConfig creates with the public service defaults."""
        config = ClientConfig()

        assert config.base_url == "https://bmtcmobileapi.karnataka.gov.in/WebAPI"
        assert config.timeout_seconds == 30.0
        assert config.language == "en"
        assert config.device_type == "WEB"
        assert config.auth_token == "N/A"
        assert config.device_id is None
        assert config.headers == {}
        assert config.log_level is None

        print(f"✅ ClientConfig defaults: base_url={config.base_url}, language={config.language}")

    def test_retry_config_defaults(self):
        """Test RetryConfig defaults: two retries on the transient statuses."""
        retry = RetryConfig()

        assert retry.limit == 2
        assert retry.status_codes == (408, 413, 429, 500, 502, 503, 504)
        assert retry.backoff_seconds == 0.3

        print(f"✅ RetryConfig defaults: limit={retry.limit}")

    def test_client_config_validation(self):
        """Test ClientConfig rejects unusable values."""
        with pytest.raises(ValueError, match="http"):
            ClientConfig(base_url="ftp://example.org")
        with pytest.raises(ValueError, match="host"):
            ClientConfig(base_url="https://")
        with pytest.raises(ValueError, match="Timeout"):
            ClientConfig(timeout_seconds=0)
        with pytest.raises(ValueError, match="Language"):
            ClientConfig(language="fr")
        with pytest.raises(ValueError, match="Log level"):
            ClientConfig(log_level="verbose")

        print("✅ ClientConfig validation works")

    def test_retry_config_validation(self):
        """Test RetryConfig rejects negative limits and non-HTTP statuses."""
        assert RetryConfig(limit=0).limit == 0

        with pytest.raises(ValueError):
            RetryConfig(limit=-1)
        with pytest.raises(ValueError):
            RetryConfig(limit=True)
        with pytest.raises(ValueError):
            RetryConfig(status_codes=(503, 700))
        with pytest.raises(ValueError):
            RetryConfig(backoff_seconds=-0.1)

    def test_normalized_values(self):
        """Test trailing slashes and log level case are normalized."""
        config = ClientConfig(base_url="https://example.org/api/", log_level="debug")

        assert config.base_url == "https://example.org/api"
        assert config.log_level == "DEBUG"

    def test_config_is_immutable(self):
        """Test config values cannot be changed after construction."""
        headers = {"User-Agent": "test"}
        config = ClientConfig(headers=headers)
        headers["User-Agent"] = "changed"

        assert config.headers == {"User-Agent": "test"}
        with pytest.raises(FrozenInstanceError):
            config.language = "kn"


class TestConfigManager:
    """Test ClientConfigManager core functionality."""

    def test_yaml_config_loading(self):
        """Test loading configuration from YAML file."""

        # Create a simple test YAML config
        test_config = {
            "client": {
                "base_url": "https://example.org/WebAPI/",
                "timeout_seconds": 12,
                "language": "kn",
                "device_id": "b7c1e6a2",
                "headers": {"User-Agent": "commute-dashboard/1.4"},
            },
            "retry": {"limit": 3, "status_codes": [502, 503], "backoff_seconds": 0.5},
            "logging": {"level": "debug", "log_dir": "logs"},
        }

        # Write to temporary file
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump(test_config, f)
            temp_path = f.name

        try:
            manager = ClientConfigManager(temp_path)
            config = manager.get_client_config()

            assert config.base_url == "https://example.org/WebAPI"
            assert config.timeout_seconds == 12
            assert config.language == "kn"
            assert config.device_id == "b7c1e6a2"
            assert config.headers == {"User-Agent": "commute-dashboard/1.4"}
            assert config.retry == RetryConfig(limit=3, status_codes=(502, 503), backoff_seconds=0.5)
            assert config.log_level == "DEBUG"
            assert config.log_dir == "logs"
            assert manager.get_full_config() == test_config

            print("✅ YAML config loading works")

        finally:
            # Clean up temp file
            Path(temp_path).unlink()

    def test_dict_config_loading(self):
        """Test loading configuration from dictionary."""
        manager = ClientConfigManager(config_dict={"client": {"language": "en"}})
        config = manager.get_client_config()

        assert config == ClientConfig()

        print("✅ Dictionary config loading works")

    def test_empty_client_section(self):
        """Test an empty client section falls back to defaults."""
        manager = ClientConfigManager(config_dict={"client": None})
        assert manager.get_client_config() == ClientConfig()

    def test_config_validation(self):
        """Test configuration validation catches basic errors."""

        with pytest.raises(ValueError, match="Missing required configuration section"):
            ClientConfigManager(config_dict={"retry": {"limit": 1}})

        with pytest.raises(ValueError, match="Unknown configuration sections"):
            ClientConfigManager(config_dict={"client": {}, "proxy": {}})

        with pytest.raises(ValueError, match="must be a mapping"):
            ClientConfigManager(config_dict={"client": ["base_url"]})

        with pytest.raises(ValueError, match="own section"):
            ClientConfigManager(config_dict={"client": {"log_level": "INFO"}})

        with pytest.raises(ValueError, match="Invalid configuration keys"):
            ClientConfigManager(config_dict={"client": {"base_uri": "https://example.org"}})

        with pytest.raises(ValueError, match="Language"):
            ClientConfigManager(config_dict={"client": {"language": "fr"}})

        print("✅ Configuration validation works")

    def test_required_sources(self):
        """Test exactly one configuration source is required."""
        with pytest.raises(ValueError, match="Configuration is required"):
            ClientConfigManager()

        with pytest.raises(ValueError, match="not both"):
            ClientConfigManager("transit.yaml", config_dict={"client": {}})

    def test_missing_and_malformed_files(self, tmp_path):
        """Test file errors surface with the offending path."""
        with pytest.raises(FileNotFoundError):
            ClientConfigManager(str(tmp_path / "missing.yaml"))

        broken = tmp_path / "broken.yaml"
        broken.write_text("client: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError, match="Invalid YAML"):
            ClientConfigManager(str(broken))

        scalar = tmp_path / "scalar.yaml"
        scalar.write_text("just a string\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a dictionary"):
            ClientConfigManager(str(scalar))

"""Unit tests for statflat.config -- configuration model."""

from __future__ import annotations

import json

import pytest

from statflat.config import StatsConfig


class TestDefaults:
    """Test that default values are correct."""

    def test_parser_version(self):
        assert StatsConfig().parser_version == "statflat:1.0.0"

    def test_endpoint_defaults(self):
        config = StatsConfig()
        assert config.port == 9443
        assert config.stats_path == "/rest/v1/monitor/stats"
        assert config.username is None
        assert config.password is None

    def test_tls_verification_off(self):
        assert StatsConfig().verify_tls is False

    def test_structuring_defaults(self):
        config = StatsConfig()
        assert config.include_root is False
        assert config.strip_namespaces is True
        assert config.preserve_whitespace is True
        assert config.skip_attribute_prefixes == ["xmlns", "xsi"]

    def test_flattening_defaults(self):
        config = StatsConfig()
        assert config.path_separator == "."
        assert config.name_field == "Name"

    def test_log_sample_data_off(self):
        assert StatsConfig().log_sample_data is False


class TestFromFile:
    """Test loading configuration from files."""

    def test_from_json_file(self, tmp_config_file):
        path = tmp_config_file(json.dumps({"host": "array-02", "port": 8443}), "config.json")
        config = StatsConfig.from_file(path)
        assert config.host == "array-02"
        assert config.port == 8443
        assert config.max_depth == 100

    def test_from_yaml_file(self, tmp_config_file):
        path = tmp_config_file("host: array-03\nverify_tls: true\n", "config.yaml")
        config = StatsConfig.from_file(path)
        assert config.host == "array-03"
        assert config.verify_tls is True

    def test_empty_yaml_uses_defaults(self, tmp_config_file):
        path = tmp_config_file("", "config.yml")
        assert StatsConfig.from_file(path) == StatsConfig()

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            StatsConfig.from_file("/nonexistent/config.json")

    def test_unsupported_extension_raises(self, tmp_config_file):
        path = tmp_config_file("port = 1", "config.toml")
        with pytest.raises(ValueError, match="Unsupported config file extension"):
            StatsConfig.from_file(path)

"""
Unit tests for config_module.py.

Tests cover:
- .env file loading and environment variable overriding
- get_config with present keys, missing keys, and defaults
- typed getters for numbers and boolean flags
"""

import os
import logging
import pytest

from distmatrix.config.config_module import (
    ConfigError,
    get_bool_config,
    get_config,
    get_float_config,
    get_int_config,
    load_config,
)


class TestLoadConfig:
    """Test cases for load_config function."""

    def test_load_config_existing_file(self, tmp_path, caplog, monkeypatch):
        """Test loading configuration from existing .env file."""
        # setenv first so monkeypatch removes the loaded values afterwards
        monkeypatch.setenv("DISTANCE_MATRIX_API_KEY", "placeholder")
        monkeypatch.setenv("DISTANCE_MATRIX_UNITS", "placeholder")
        env_file = tmp_path / ".env"
        env_file.write_text("DISTANCE_MATRIX_API_KEY=abc123\nDISTANCE_MATRIX_UNITS=imperial\n")

        with caplog.at_level(logging.INFO):
            load_config(str(env_file))

        assert os.getenv("DISTANCE_MATRIX_API_KEY") == "abc123"
        assert os.getenv("DISTANCE_MATRIX_UNITS") == "imperial"
        assert f"Loaded configuration from {str(env_file)}" in caplog.text

    def test_load_config_nonexistent_file(self, caplog):
        """Test loading configuration when .env file doesn't exist."""
        nonexistent_file = "/path/that/does/not/exist/.env"

        with caplog.at_level(logging.WARNING):
            load_config(nonexistent_file)

        assert f"Configuration file {nonexistent_file} not found" in caplog.text

    def test_load_config_override_existing_env(self, tmp_path, monkeypatch):
        """Test that .env file values override existing environment variables."""
        monkeypatch.setenv("OVERRIDE_TEST", "original_value")

        env_file = tmp_path / ".env"
        env_file.write_text("OVERRIDE_TEST=new_value\n")

        load_config(str(env_file))

        assert os.getenv("OVERRIDE_TEST") == "new_value"


class TestGetConfig:
    """Test cases for get_config and the typed getters."""

    def setup_method(self):
        os.environ["EXISTING_KEY"] = "existing_value"
        os.environ["EMPTY_KEY"] = ""

    def teardown_method(self):
        for key in ["EXISTING_KEY", "EMPTY_KEY"]:
            if key in os.environ:
                del os.environ[key]

    def test_get_config_existing_key(self):
        assert get_config("EXISTING_KEY") == "existing_value"

    def test_get_config_missing_key_with_default(self, caplog):
        """Missing keys fall back to the default and are logged at debug level."""
        with caplog.at_level(logging.DEBUG):
            result = get_config("MISSING_KEY", "default_value")

        assert result == "default_value"
        assert "Configuration key 'MISSING_KEY' not found, using default value: default_value" in caplog.text

    def test_get_config_missing_key_no_default(self, caplog):
        with caplog.at_level(logging.DEBUG):
            result = get_config("MISSING_KEY")

        assert result is None
        assert "Configuration key 'MISSING_KEY' not found and no default provided" in caplog.text

    def test_get_config_empty_key(self):
        assert get_config("EMPTY_KEY") == ""

    def test_get_float_config(self, monkeypatch):
        monkeypatch.setenv("WAIT_SECONDS", "2.5")
        assert get_float_config("WAIT_SECONDS") == 2.5
        assert get_float_config("MISSING_KEY", 10.0) == 10.0

    def test_get_float_config_invalid(self, monkeypatch):
        monkeypatch.setenv("WAIT_SECONDS", "soon")
        with pytest.raises(ConfigError) as exc_info:
            get_float_config("WAIT_SECONDS")
        assert "must be a number" in str(exc_info.value)

    def test_get_int_config(self, monkeypatch):
        monkeypatch.setenv("MAX_URL", "1800")
        assert get_int_config("MAX_URL") == 1800
        assert get_int_config("MISSING_KEY", 2000) == 2000

    def test_get_int_config_invalid(self, monkeypatch):
        monkeypatch.setenv("MAX_URL", "1800.5")
        with pytest.raises(ConfigError):
            get_int_config("MAX_URL")

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("YES", True), ("on", True),
        ("false", False), ("0", False), ("No", False), ("", False),
    ])
    def test_get_bool_config(self, monkeypatch, raw, expected):
        monkeypatch.setenv("STRICT", raw)
        assert get_bool_config("STRICT") is expected

    def test_get_bool_config_missing_uses_default(self):
        assert get_bool_config("MISSING_KEY") is False
        assert get_bool_config("MISSING_KEY", True) is True

    def test_get_bool_config_invalid(self, monkeypatch):
        monkeypatch.setenv("STRICT", "maybe")
        with pytest.raises(ConfigError) as exc_info:
            get_bool_config("STRICT")
        assert "boolean flag" in str(exc_info.value)

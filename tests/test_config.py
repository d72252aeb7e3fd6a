"""Tests for configuration and logging setup."""

import logging

import pytest

from ospfscope.config import OSPFScopeConfig, get_config, set_config
from ospfscope.logging_config import (
    ErrorTracker,
    configure_logging,
    error_summary,
    get_error_stats,
    reset_error_stats,
    setup_logging,
    track_error,
)


@pytest.fixture
def package_logger():
    return logging.getLogger("ospfscope")


class TestConfig:
    def test_defaults(self):
        config = OSPFScopeConfig()
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.aux_owner_policy == "first-lsa-router"
        assert config.external_area == "0"

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            OSPFScopeConfig(aux_owner_policy="last-router")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OSPFSCOPE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("OSPFSCOPE_AUX_OWNER_POLICY", "none")
        monkeypatch.setenv("OSPFSCOPE_EXTERNAL_AREA", "0.0.0.0")
        monkeypatch.delenv("OSPFSCOPE_LOG_FILE", raising=False)

        config = OSPFScopeConfig.from_env()
        assert config.log_level == "DEBUG"
        assert config.aux_owner_policy == "none"
        assert config.external_area == "0.0.0.0"
        assert config.log_file is None

    def test_global_config(self, monkeypatch):
        monkeypatch.setenv("OSPFSCOPE_EXTERNAL_AREA", "51")
        set_config(None)
        assert get_config().external_area == "51"
        assert get_config() is get_config()

        custom = OSPFScopeConfig(external_area="7")
        set_config(custom)
        assert get_config() is custom


class TestLogging:
    def test_console_only_by_default(self, package_logger):
        logger = setup_logging(level="WARNING")
        assert logger is package_logger
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler(self, package_logger, tmp_path):
        log_file = tmp_path / "logs" / "ospfscope.log"
        setup_logging(level="DEBUG", log_file=str(log_file), enable_console=False, enable_file=True)

        logging.getLogger("ospfscope.topology.builder").debug("router-created")
        for handler in package_logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "router-created" in content
        assert "DEBUG" in content

    def test_configure_logging_debug_flag(self, package_logger):
        configure_logging(debug=True, config=OSPFScopeConfig(log_level="ERROR"))
        assert package_logger.level == logging.DEBUG

    def test_configure_logging_uses_config_level(self, package_logger):
        configure_logging(config=OSPFScopeConfig(log_level="ERROR"))
        assert package_logger.level == logging.ERROR


class TestErrorTracking:
    def test_tracker_counts(self):
        tracker = ErrorTracker()
        tracker.record("no_data", "empty capture")
        tracker.record("no_data", "still empty")
        tracker.record("invalid_input", "bad bundle", ValueError("bad"))
        assert tracker.summary() == [
            ("invalid_input", 1, "bad bundle"),
            ("no_data", 2, "still empty"),
        ]

        tracker.reset()
        assert tracker.summary() == []

    def test_global_stats(self):
        reset_error_stats()
        track_error("invalid_input", "malformed snapshot")
        assert get_error_stats() == {"invalid_input": 1}
        assert error_summary() == [("invalid_input", 1, "malformed snapshot")]
        reset_error_stats()
        assert get_error_stats() == {}

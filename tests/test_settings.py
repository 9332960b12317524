"""
Tests for environment settings and logging setup.
"""

import logging

import pytest

from common.settings import (
    DEFAULT_LOG_LEVEL,
    PluginConfig,
    _parse_log_level,
    get_log_settings,
    get_settings,
)
from common.utils.logging_setup import ColorFormatter, FlaggingFileHandler
from common.utils.timer import BlockTimer


class TestSettings:

    def test_defaults(self):
        settings = get_settings()
        assert settings.access_key_id == ""
        assert settings.region == ""
        assert settings.request_timeout == 10

    def test_environment_values(self, monkeypatch):
        monkeypatch.setenv("DXVIF_METRIC_KEY_PREFIX", "osaka")
        monkeypatch.setenv("DXVIF_ROLE_ARN", "arn:aws:iam::1:role/r")
        monkeypatch.setenv("DXVIF_TIMEOUT_SECONDS", "3")

        settings = get_settings()

        assert settings.metric_key_prefix == "osaka"
        assert settings.role_arn == "arn:aws:iam::1:role/r"
        assert settings.request_timeout == 3

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("DXVIF_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValueError, match="DXVIF_TIMEOUT_SECONDS"):
            get_settings()

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    def test_plugin_config_is_immutable(self):
        config = PluginConfig("", "", "", "", "", "dxvif-1", "dxcon-1")
        assert config.key_prefix == "DxVif"
        with pytest.raises(AttributeError):
            config.region = "us-east-1"

    @pytest.mark.parametrize(
        "value,expected",
        [(None, DEFAULT_LOG_LEVEL), ("debug", logging.DEBUG), ("20", 20), ("nonsense", DEFAULT_LOG_LEVEL)],
    )
    def test_parse_log_level(self, value, expected):
        assert _parse_log_level(value, DEFAULT_LOG_LEVEL) == expected

    def test_log_settings_default_to_no_file(self, monkeypatch):
        monkeypatch.delenv("LOGS_DIR", raising=False)
        assert get_log_settings().logs_dir == ""


class TestLogging:

    def make_record(self, level):
        return logging.LogRecord("dx_vif", level, __file__, 1, "hello", None, None)

    def test_color_formatter_restores_levelname(self):
        formatter = ColorFormatter(fmt="%(levelname)s %(message)s", use_color=True)
        record = self.make_record(logging.WARNING)

        assert "\x1b[33mWARNING" in formatter.format(record)
        assert record.levelname == "WARNING"

    def test_file_handler_renamed_after_max_level(self, tmp_path):
        handler = FlaggingFileHandler(tmp_path, "20240501_120000_000000")
        handler.setFormatter(logging.Formatter("%(message)s"))

        handler.emit(self.make_record(logging.INFO))
        handler.emit(self.make_record(logging.WARNING))
        handler.close()

        assert handler.max_level == logging.WARNING
        assert [p.name for p in tmp_path.iterdir()] == ["WARNING_20240501_120000_000000.log"]

    def test_block_timer_logs_duration(self, caplog):
        logger = logging.getLogger("dx_vif.timer_test")
        with caplog.at_level(logging.DEBUG, logger="dx_vif.timer_test"):
            with BlockTimer("report", logger) as timer:
                pass

        assert timer.total_time >= 0
        assert "report took" in caplog.text

"""配置单元测试"""

import pytest

from feedspider.common.config import Config, LogConfig, ScrollConfig
from feedspider.common.constants import DEFAULT_MAX_ITERATIONS, DEFAULT_POLL_INTERVAL_MS
from feedspider.common.exceptions import ConfigError


class TestScrollConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SCROLL_POLL_INTERVAL_MS", raising=False)
        monkeypatch.delenv("SCROLL_MAX_ITERATIONS", raising=False)

        scroll = ScrollConfig()

        assert scroll.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
        assert scroll.max_iterations == DEFAULT_MAX_ITERATIONS

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SCROLL_MAX_RETRIES", "5")

        assert ScrollConfig().max_retries == 5


class TestLogConfig:
    def test_file_logging_off_by_default(self, monkeypatch):
        monkeypatch.delenv("LOG_FILE", raising=False)

        assert LogConfig().file == ""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOG_FILE", "logs/feedspider.log")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        log = LogConfig()

        assert log.file == "logs/feedspider.log"
        assert log.level == "DEBUG"


class TestValidateValues:
    def test_default_config_is_valid(self):
        Config().validate_values()

    def test_non_positive_interval(self):
        cfg = Config()
        cfg.scroll.poll_interval_ms = 0

        with pytest.raises(ConfigError):
            cfg.validate_values()

    def test_negative_retries(self):
        cfg = Config()
        cfg.scroll.max_retries = -1

        with pytest.raises(ConfigError):
            cfg.validate_values()

    def test_empty_suffix(self):
        cfg = Config()
        cfg.export.suffix = ""

        with pytest.raises(ConfigError):
            cfg.validate_values()

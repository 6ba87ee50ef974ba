"""Tests for environment-driven settings and logging configuration."""

import logging

import pytest
from marketplace.config import Settings
from marketplace.utils.logging import (
    build_processors,
    resolve_log_format,
    resolve_log_level,
    setup_stdlib_logging,
)
from pydantic import ValidationError as SettingsError
from structlog.processors import JSONRenderer


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        monkeypatch.delenv(name, raising=False)
    for name in ("LOCK_BACKEND", "LOCK_MAX_ATTEMPTS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"MARKETPLACE_{name}", raising=False)
    return monkeypatch


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.lock_backend == "memory"
        assert settings.lock_max_attempts == 5
        assert settings.stock_update_attempts == 5

    def test_reads_prefixed_environment(self, clean_env):
        clean_env.setenv("MARKETPLACE_LOCK_BACKEND", "redis")
        clean_env.setenv("MARKETPLACE_LOCK_MAX_ATTEMPTS", "3")

        settings = Settings(_env_file=None)
        assert settings.lock_backend == "redis"
        assert settings.lock_max_attempts == 3

    def test_rejects_unknown_backend(self, clean_env):
        with pytest.raises(SettingsError):
            Settings(_env_file=None, lock_backend="zookeeper")

    def test_rejects_zero_attempts(self, clean_env):
        with pytest.raises(SettingsError):
            Settings(_env_file=None, lock_max_attempts=0)


class TestLogLevel:
    def test_explicit_level_wins(self, clean_env):
        clean_env.setenv("ENV", "production")
        assert resolve_log_level(Settings(_env_file=None, log_level="debug")) == "DEBUG"

    @pytest.mark.parametrize(
        "env, level",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("unknown", "INFO")],
    )
    def test_follows_environment(self, clean_env, env, level):
        clean_env.setenv("PROTEAN_ENV", env)
        assert resolve_log_level(Settings(_env_file=None)) == level


class TestLogFormat:
    def test_json_in_production(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")
        assert resolve_log_format(Settings(_env_file=None)) == "json"

    def test_console_elsewhere(self, clean_env):
        assert resolve_log_format(Settings(_env_file=None)) == "console"

    def test_json_renderer_is_last(self):
        assert isinstance(build_processors("json")[-1], JSONRenderer)


class TestStdlibLogging:
    def test_errors_get_their_own_file(self, tmp_path, restore_root_logger):
        setup_stdlib_logging("INFO", tmp_path / "logs")

        logging.getLogger("marketplace.test").info("routine")
        logging.getLogger("marketplace.test").error("settlement broke")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "routine" in (tmp_path / "logs" / "marketplace.log").read_text()
        errors = (tmp_path / "logs" / "marketplace_error.log").read_text()
        assert "settlement broke" in errors
        assert "routine" not in errors

    def test_quiets_library_loggers(self, tmp_path, restore_root_logger):
        setup_stdlib_logging("DEBUG", tmp_path)
        assert logging.getLogger("protean").level == logging.WARNING

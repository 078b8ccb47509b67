import logging

import pytest
import structlog
from shared.config import Settings, get_settings
from shared.logging import configure_logging, get_log_level


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers, root.level = handlers, level
    structlog.reset_defaults()


class TestSettings:
    def test_test_session_uses_memory_provider(self):
        settings = get_settings()
        assert settings.env == "test"
        assert settings.database_url == "memory://"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CRM_JWT_EXPIRY_MINUTES", "15")
        monkeypatch.setenv("CRM_ADMIN_EMAIL", "boss@example.com")
        settings = Settings()
        assert settings.jwt_expiry_minutes == 15
        assert settings.admin_email == "boss@example.com"

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            Settings(jwt_secret_key="too-short")

    @pytest.mark.parametrize("env", ["production", "staging", "Production"])
    def test_is_production(self, env):
        assert Settings(env=env).is_production is True

    def test_development_is_not_production(self):
        assert Settings(env="development").is_production is False


class TestLogLevel:
    @pytest.mark.parametrize(
        "env, level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING")],
    )
    def test_level_follows_environment(self, monkeypatch, env, level):
        monkeypatch.setenv("CRM_ENV", env)
        get_settings.cache_clear()
        try:
            assert get_log_level() == level
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("CRM_LOG_LEVEL", "error")
        get_settings.cache_clear()
        try:
            assert get_log_level() == "ERROR"
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()


class TestConfigureLogging:
    def test_writes_log_and_error_files(self, tmp_path, restore_logging):
        configure_logging(log_dir=str(tmp_path))

        structlog.get_logger("tests").error("something_broke", detail="x")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "something_broke" in (tmp_path / "crm.log").read_text()
        assert "something_broke" in (tmp_path / "crm_error.log").read_text()

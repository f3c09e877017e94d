"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from .models import API_BASE
from .settings import Settings, get_settings


def describe_settings():

    def it_has_defaults(monkeypatch):
        for var in ("GHW_API_KEY", "GHW_BASE_URL", "GHW_TIMEOUT", "GHW_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.ghw_api_key is None
        assert s.ghw_base_url == API_BASE
        assert s.ghw_timeout == 15.0
        assert s.ghw_log_level == "WARNING"

    def it_reads_environment(monkeypatch):
        monkeypatch.setenv("GHW_API_KEY", "env-key")
        monkeypatch.setenv("GHW_TIMEOUT", "2.5")
        s = Settings(_env_file=None)
        assert s.ghw_api_key == "env-key"
        assert s.ghw_timeout == 2.5

    def it_reads_dotenv_file(tmp_path, monkeypatch):
        monkeypatch.delenv("GHW_API_KEY", raising=False)
        env = tmp_path / ".env"
        env.write_text("GHW_API_KEY=dotenv-key\nUNRELATED=1\n")
        assert Settings(_env_file=env).ghw_api_key == "dotenv-key"

    def it_caches_the_instance():
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def it_normalises_log_level_case(monkeypatch):
        monkeypatch.setenv("GHW_LOG_LEVEL", "debug")
        assert Settings(_env_file=None).ghw_log_level == "DEBUG"

    def it_rejects_unknown_log_levels(monkeypatch):
        monkeypatch.setenv("GHW_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError, match="ghw_log_level"):
            Settings(_env_file=None)

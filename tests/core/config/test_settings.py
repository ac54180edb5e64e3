"""
Tests for environment-based settings.
"""

import pytest

from wacloud.core.config.settings import DEFAULT_API_VERSION, DEFAULT_BASE_URL, Settings

ENV_VARS = [
    "LOG_LEVEL",
    "LOG_DIR",
    "ENVIRONMENT",
    "API_VERSION",
    "BASE_URL",
    "REQUEST_TIMEOUT",
    "REPLAY_CACHE_DIR",
    "WHATSAPP_ACCESS_TOKEN",
    "WHATSAPP_WABA_ID",
    "WHATSAPP_PHONE_NUMBER_ID",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.api_version == DEFAULT_API_VERSION == "v24.0"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.request_timeout == 30.0
        assert settings.replay_cache_dir is None
        assert settings.is_production
        assert settings.access_token is None

    def test_reads_environment(self, clean_env):
        clean_env.setenv("API_VERSION", "v21.0")
        clean_env.setenv("ENVIRONMENT", "dev")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("WHATSAPP_WABA_ID", "102290129340398")

        settings = Settings()

        assert settings.api_version == "v21.0"
        assert settings.is_development
        assert settings.log_level == "DEBUG"
        assert settings.waba_id == "102290129340398"

    def test_unknown_environment_falls_back_to_prod(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "staging")

        assert Settings().environment == "PROD"

    def test_invalid_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Settings()

    def test_invalid_timeout(self, clean_env):
        clean_env.setenv("REQUEST_TIMEOUT", "0")

        with pytest.raises(ValueError, match="REQUEST_TIMEOUT"):
            Settings()

    def test_version_from_pyproject(self, clean_env):
        assert Settings().version == "0.1.0"


class TestRequire:
    def test_returns_values(self, clean_env):
        clean_env.setenv("WHATSAPP_ACCESS_TOKEN", "EAAtest-token")
        clean_env.setenv("WHATSAPP_PHONE_NUMBER_ID", "106540352242922")

        values = Settings().require("access_token", "phone_number_id")

        assert values == {"access_token": "EAAtest-token", "phone_number_id": "106540352242922"}

    def test_missing_value_names_env_var(self, clean_env):
        clean_env.setenv("WHATSAPP_ACCESS_TOKEN", "EAAtest-token")

        with pytest.raises(ValueError, match="WHATSAPP_WABA_ID is required"):
            Settings().require("access_token", "waba_id")

    def test_empty_value_is_missing(self, clean_env):
        clean_env.setenv("WHATSAPP_ACCESS_TOKEN", "")

        with pytest.raises(ValueError, match="WHATSAPP_ACCESS_TOKEN is required"):
            Settings().require("access_token")

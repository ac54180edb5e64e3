"""
Settings for the wacloud client tooling.

Plain environment variable configuration. Only the CLI and logging setup read
these values; WhatsAppClient takes everything it needs as arguments.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Local development credentials live in ./.env
load_dotenv(".env")

DEFAULT_API_VERSION = "v24.0"
DEFAULT_BASE_URL = "https://graph.facebook.com"
FALLBACK_VERSION = "0.1.0"

# Credential attribute -> environment variable
CREDENTIAL_ENV_VARS = {
    "access_token": "WHATSAPP_ACCESS_TOKEN",
    "waba_id": "WHATSAPP_WABA_ID",
    "phone_number_id": "WHATSAPP_PHONE_NUMBER_ID",
}


def _get_version_from_pyproject() -> str:
    """Return the project version declared in the nearest pyproject.toml."""
    here = Path(__file__).resolve()
    for directory in here.parents:
        candidate = directory / "pyproject.toml"
        if not candidate.is_file():
            continue
        try:
            project = tomllib.loads(candidate.read_text(encoding="utf-8")).get("project", {})
        except (OSError, tomllib.TOMLDecodeError):
            continue
        if project.get("name") == "wacloud" and project.get("version"):
            return project["version"]
    return FALLBACK_VERSION


class Settings:
    """Environment-based settings, read once at construction."""

    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
    ENVIRONMENTS = ("DEV", "PROD")

    def __init__(self):
        self.version: str = _get_version_from_pyproject()

        # Logging
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "PROD").upper()

        # Graph API
        self.api_version: str = os.getenv("API_VERSION", DEFAULT_API_VERSION)
        self.base_url: str = os.getenv("BASE_URL", DEFAULT_BASE_URL)
        self.request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))
        self.replay_cache_dir: str | None = os.getenv("REPLAY_CACHE_DIR") or None

        # Credentials, checked on use by require()
        self.access_token: str | None = os.getenv(CREDENTIAL_ENV_VARS["access_token"])
        self.waba_id: str | None = os.getenv(CREDENTIAL_ENV_VARS["waba_id"])
        self.phone_number_id: str | None = os.getenv(
            CREDENTIAL_ENV_VARS["phone_number_id"]
        )

        self._validate_settings()

    def _validate_settings(self):
        if self.log_level not in self.LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(self.LOG_LEVELS)}")
        if self.environment not in self.ENVIRONMENTS:
            self.environment = "PROD"
        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

    def require(self, *names: str) -> dict[str, str]:
        """Return the named credential settings, failing on the first missing one.

        Args:
            names: Attribute names such as "access_token" or "waba_id"

        Raises:
            ValueError: If a setting is unset or empty
        """
        values = {}
        for name in names:
            value = getattr(self, name)
            if not value:
                env_var = CREDENTIAL_ENV_VARS.get(name, name.upper())
                raise ValueError(f"{env_var} is required")
            values[name] = value
        return values

    @property
    def is_development(self) -> bool:
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        return self.environment == "PROD"


settings = Settings()

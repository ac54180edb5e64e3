"""Environment configuration."""

from .settings import DEFAULT_API_VERSION, DEFAULT_BASE_URL, Settings, settings

__all__ = ["DEFAULT_API_VERSION", "DEFAULT_BASE_URL", "Settings", "settings"]

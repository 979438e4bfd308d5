"""
Runtime settings read from the environment.

Every field can be set through a ``KEYSTORE_CREDENTIALS_`` prefixed variable,
e.g. ``KEYSTORE_CREDENTIALS_PROJECT_ROOT=/work/app``.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Environment defaults for the CLI and ConfigManager."""

    model_config = SettingsConfigDict(
        env_prefix="KEYSTORE_CREDENTIALS_",
        case_sensitive=False,
    )

    config_path: Optional[str] = Field(
        default=None, description="Config file, relative to the project root"
    )
    project_root: Optional[str] = Field(
        default=None, description="Project root (defaults to the working directory)"
    )
    debug: bool = Field(default=False, description="Enable debug logging")


# Global settings instance
_settings: Optional[RuntimeSettings] = None


def get_settings() -> RuntimeSettings:
    """
    Get the global runtime settings.

    Returns:
        RuntimeSettings instance
    """
    global _settings
    if _settings is None:
        _settings = RuntimeSettings()
    return _settings


def reload_settings() -> RuntimeSettings:
    """Re-read the environment, replacing the global settings."""
    global _settings
    _settings = RuntimeSettings()
    return _settings

from typing import Optional

from pydantic import Field, field_validator

from .base import PersistBaseSettings
from .database import DatabaseSettings
from .naming import NamingSettings


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class _Settings(PersistBaseSettings):

    app_env: str = Field(
        default="dev",
        description="Application deployment environment (e.g., dev, qa, prod, local)"
    )
    log_level: str = Field(
        default="INFO",
        description="Base log level passed to setup_logging()"
    )

    database: DatabaseSettings = Field(
        default_factory=DatabaseSettings,
        description="Database connection and dialect configuration"
    )
    naming: NamingSettings = Field(
        default_factory=NamingSettings,
        description="Table/column naming configuration"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level


# Singleton instance
_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    The settings are loaded from environment variables and ``.env`` on
    first access and shared afterwards, so every factory sees the same
    dialect and naming strategy.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        assert settings is get_settings()

        new_settings = get_settings(force_reload=True)
        assert new_settings is not settings
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = _Settings()

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh _Settings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)

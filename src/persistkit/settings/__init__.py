"""Settings module providing configuration management for persistkit.

Built on Pydantic Settings: type-safe values with automatic validation,
loaded from environment variables and an optional ``.env`` file.

Architecture:
    1. Base Layer (base.py):
       - PersistBaseSettings: shared model configuration

    2. Domain Settings:
       - database.py: Connection URL, dialect and pool sizing (DATABASE_*)
       - naming.py: Naming strategy for tables and columns (NAMING_*)

    3. Main Aggregator (main.py):
       - _Settings: aggregates all domain settings
       - get_settings(): Singleton factory function
       - _reload_settings(): Force reload from environment

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from persistkit.settings import get_settings
    >>>
    >>> settings = get_settings()
    >>> settings.database.dialect
    <SqlDialect.POSTGRESQL: 'postgresql'>
    >>> settings.naming.strategy
    <NamingStrategy.SNAKE_CASE: 'snake_case'>

Environment Variables:
    - DATABASE_URL: SQLAlchemy URL (required before connecting)
    - DATABASE_DIALECT: postgresql | sqlserver
    - DATABASE_POOL_SIZE, DATABASE_MAX_OVERFLOW, DATABASE_POOL_TIMEOUT
    - DATABASE_CONNECT_RETRIES, DATABASE_RETRY_DELAY_SECONDS
    - NAMING_STRATEGY: snake_case | annotation
    - LOG_LEVEL, APP_ENV
"""

# Main settings and functions
from .main import _Settings, get_settings, _reload_settings

# Base classes
from .base import PersistBaseSettings

# Domain settings
from .database import DatabaseSettings
from .naming import NamingSettings

__all__ = [
    "_Settings",
    "get_settings",
    "_reload_settings",
    "PersistBaseSettings",
    "DatabaseSettings",
    "NamingSettings",
]

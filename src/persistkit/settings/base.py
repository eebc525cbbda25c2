from pydantic_settings import BaseSettings, SettingsConfigDict


class PersistBaseSettings(BaseSettings):
    """Base class for every persistkit settings group.

    Values are read from environment variables first, then from a ``.env``
    file, then from the defaults in code. Names are case-insensitive and
    nested groups use ``__`` as delimiter (e.g. ``DATABASE__POOL_SIZE``).
    Subclasses add an ``env_prefix`` for their own group.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

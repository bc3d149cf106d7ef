"""Configuration loading for itemsapi.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from itemsapi.config import get_settings

    settings = get_settings()
    table = settings.table_name
"""

from functools import lru_cache

from itemsapi.config.loader import load_config
from itemsapi.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Missing TOML files are not an error: environment variables alone are
    enough as long as the required fields are present.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.

    Raises:
        pydantic.ValidationError: If table_name or primary_key is missing
        FileNotFoundError: If ITEMS_CONFIG_DIR names a missing directory
    """
    set_toml_config(load_config())

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]

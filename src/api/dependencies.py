"""FastAPI dependencies."""

from functools import lru_cache

from src.config.settings import Settings, get_settings
from src.services.viz.factory import OptionsFactory, default_factory


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()


def get_options_factory() -> OptionsFactory:
    """Process-wide options factory (overridable in tests)."""
    return default_factory

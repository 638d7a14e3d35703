"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import (
    DEFAULT_CATALOG_MAX_ID,
    DEFAULT_CATALOG_URL,
    CatalogConfig,
    CollectorConfig,
    GlobalConfig,
)

__all__ = [
    "CatalogConfig",
    "CollectorConfig",
    "ConfigLocator",
    "ConfigRepository",
    "DEFAULT_CATALOG_MAX_ID",
    "DEFAULT_CATALOG_URL",
    "GlobalConfig",
]

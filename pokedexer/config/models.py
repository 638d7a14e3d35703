"""Pydantic models used across Pokedexer configuration flow."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_CATALOG_URL = "https://pokeapi.co/api/v2/pokemon"
DEFAULT_CATALOG_MAX_ID = 1025


class CatalogConfig(BaseModel):
    """Where records come from and how long a single fetch may take."""

    base_url: str = DEFAULT_CATALOG_URL
    catalog_max_id: int = DEFAULT_CATALOG_MAX_ID
    request_timeout: float = 15.0
    user_agent: str | None = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url cannot be empty")
        return value.rstrip("/")

    @model_validator(mode="after")
    def _validate_bounds(self) -> "CatalogConfig":
        if self.catalog_max_id < 1:
            raise ValueError("catalog_max_id must be >= 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        return self

    def record_url(self, record_id: int) -> str:
        return f"{self.base_url}/{record_id}"


class CollectorConfig(BaseModel):
    """Sizing of the incremental collection and its growth trigger."""

    initial_target: int = 40
    growth_step: int = 20
    proximity_threshold: int = 100

    @model_validator(mode="after")
    def _validate_non_negative(self) -> "CollectorConfig":
        if self.initial_target < 0:
            raise ValueError("initial_target must be >= 0")
        if self.growth_step < 1:
            raise ValueError("growth_step must be >= 1")
        if self.proximity_threshold < 0:
            raise ValueError("proximity_threshold must be >= 0")
        return self


class GlobalConfig(BaseModel):
    """Global controls shared by the CLI and engine."""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
    enable_progress_bar: bool = True
    verbose_logging: bool = False


__all__ = [
    "CatalogConfig",
    "CollectorConfig",
    "DEFAULT_CATALOG_MAX_ID",
    "DEFAULT_CATALOG_URL",
    "GlobalConfig",
]

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pokedexer.config import CatalogConfig, CollectorConfig, GlobalConfig


def test_catalog_defaults_match_public_catalog() -> None:
    cfg = CatalogConfig()
    assert cfg.catalog_max_id == 1025
    assert cfg.record_url(25) == "https://pokeapi.co/api/v2/pokemon/25"


def test_catalog_strips_trailing_slash() -> None:
    cfg = CatalogConfig(base_url="https://catalog.example/items/ ")
    assert cfg.record_url(3) == "https://catalog.example/items/3"


@pytest.mark.parametrize(
    "overrides",
    [
        {"catalog_max_id": 0},
        {"request_timeout": 0},
        {"base_url": "   "},
    ],
)
def test_catalog_rejects_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        CatalogConfig(**overrides)


def test_collector_validation() -> None:
    assert CollectorConfig().model_dump() == {
        "initial_target": 40,
        "growth_step": 20,
        "proximity_threshold": 100,
    }
    with pytest.raises(ValueError):
        CollectorConfig(growth_step=0)
    with pytest.raises(ValueError):
        CollectorConfig(initial_target=-1)


def test_global_config_accepts_nested_mapping() -> None:
    cfg = GlobalConfig.model_validate(
        {"catalog": {"catalog_max_id": 151}, "collector": {"growth_step": 5}}
    )
    assert cfg.catalog.catalog_max_id == 151
    assert cfg.collector.growth_step == 5
    assert cfg.collector.initial_target == 40

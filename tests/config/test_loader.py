from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from pokedexer.config import ConfigLocator, ConfigRepository, GlobalConfig


def test_config_locator_uses_env_and_creates_directories(pokedexer_home: Path) -> None:
    locator = ConfigLocator()
    assert locator.project_root == pokedexer_home.resolve()
    assert locator.data_dir.exists()
    assert locator.logs_dir.exists()
    assert locator.global_config_path() == locator.data_dir / "global_config.yaml"


def test_missing_global_config_is_written_with_defaults(temp_config_repository: ConfigRepository) -> None:
    loaded = temp_config_repository.load_global_config()
    assert loaded == GlobalConfig()
    path = temp_config_repository.locator.global_config_path()
    assert path.exists()
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["catalog"]["catalog_max_id"] == 1025


def test_config_repository_global_roundtrip(temp_config_repository: ConfigRepository) -> None:
    config = GlobalConfig(enable_progress_bar=False)
    temp_config_repository.save_global_config(config)
    fresh = ConfigRepository(temp_config_repository.locator)
    assert fresh.load_global_config() == config


def test_json_config_is_picked_up(temp_config_repository: ConfigRepository) -> None:
    data_dir = temp_config_repository.locator.data_dir
    (data_dir / "global_config.json").write_text(
        json.dumps({"collector": {"initial_target": 12}}), encoding="utf-8"
    )
    assert temp_config_repository.load_global_config().collector.initial_target == 12


def test_reload_drops_cache(temp_config_repository: ConfigRepository) -> None:
    temp_config_repository.load_global_config()
    path = temp_config_repository.locator.global_config_path()
    path.write_text("collector:\n  growth_step: 7\n", encoding="utf-8")
    assert temp_config_repository.load_global_config().collector.growth_step == 20
    assert temp_config_repository.reload().collector.growth_step == 7


def test_non_mapping_config_is_rejected(temp_config_repository: ConfigRepository) -> None:
    path = temp_config_repository.locator.global_config_path()
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        temp_config_repository.load_global_config()

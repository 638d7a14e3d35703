"""Pytest configuration providing shared fixtures and an in-memory record service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Iterable

import pytest

from pokedexer.config import (
    CatalogConfig,
    CollectorConfig,
    ConfigLocator,
    ConfigRepository,
    GlobalConfig,
)
from pokedexer.engine import Record, RecordFetchError


def make_record(record_id: int) -> Record:
    return Record(
        id=record_id,
        name=f"mon{record_id}",
        image_url=f"https://img.example/{record_id}.png",
        categories=("grass", "poison"),
    )


class FakeRecordService:
    """Serve generated records, fail chosen ids and optionally hold fetches open."""

    def __init__(
        self,
        failures: Iterable[int] = (),
        builder: Callable[[int], Record] = make_record,
    ) -> None:
        self.failures = set(failures)
        self.builder = builder
        self.calls: list[int] = []
        self.gates: dict[int, asyncio.Event] = {}
        self.closed = False

    def hold(self, record_id: int) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[record_id] = gate
        return gate

    async def fetch_by_id(self, record_id: int) -> Record:
        self.calls.append(record_id)
        gate = self.gates.get(record_id)
        if gate is not None:
            await gate.wait()
        if record_id in self.failures:
            raise RecordFetchError(record_id, "simulated outage")
        return self.builder(record_id)

    async def close(self) -> None:
        self.closed = True


async def wait_until(predicate: Callable[[], bool], rounds: int = 100) -> None:
    for _ in range(rounds):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


@pytest.fixture
def fake_service() -> FakeRecordService:
    return FakeRecordService()


@pytest.fixture
def pokedexer_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("POKEDEXER_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def sample_global_config() -> GlobalConfig:
    return GlobalConfig(
        catalog=CatalogConfig(base_url="https://catalog.example/api/v2/pokemon", catalog_max_id=30),
        collector=CollectorConfig(initial_target=3, growth_step=2, proximity_threshold=100),
        enable_progress_bar=False,
    )


@pytest.fixture
def temp_config_repository(pokedexer_home: Path) -> ConfigRepository:
    locator = ConfigLocator(project_root=pokedexer_home)
    return ConfigRepository(locator)

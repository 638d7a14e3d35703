"""Catalog record fetching over HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ..config import CatalogConfig
from ..logging_conf import component_logger


class RecordFetchError(RuntimeError):
    """A single record could not be fetched or decoded."""

    def __init__(self, record_id: int, reason: str) -> None:
        super().__init__(f"Record {record_id} unavailable: {reason}")
        self.record_id = record_id
        self.reason = reason


@dataclass(frozen=True, slots=True)
class Record:
    """One catalog entity."""

    id: int
    name: str
    image_url: str | None = None
    categories: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        return _capitalise(self.name)

    @property
    def display_categories(self) -> tuple[str, ...]:
        return tuple(_capitalise(category) for category in self.categories)

    @property
    def number_label(self) -> str:
        return f"#{self.id}"


def _capitalise(value: str) -> str:
    return value[:1].upper() + value[1:]


class RecordSource(Protocol):
    async def fetch_by_id(self, record_id: int) -> Record: ...


# ----------------------------------------------------------------------
# Wire payload (only the fields the catalog contract guarantees)
# ----------------------------------------------------------------------
class _HomeSprites(BaseModel):
    front_default: str | None = None


class _OtherSprites(BaseModel):
    home: _HomeSprites | None = None


class _Sprites(BaseModel):
    other: _OtherSprites | None = None


class _NamedRef(BaseModel):
    name: str


class _TypeSlot(BaseModel):
    slot: int | None = None
    type: _NamedRef


class RecordPayload(BaseModel):
    id: int
    name: str
    sprites: _Sprites | None = None
    types: list[_TypeSlot] | None = None

    def to_record(self) -> Record:
        image_url = None
        if self.sprites and self.sprites.other and self.sprites.other.home:
            image_url = self.sprites.other.home.front_default
        return Record(
            id=self.id,
            name=self.name,
            image_url=image_url,
            categories=tuple(entry.type.name for entry in self.types or ()),
        )


class RecordService:
    """Fetch records by numeric id from the remote catalog."""

    def __init__(
        self,
        config: CatalogConfig | None = None,
        client: httpx.AsyncClient | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config or CatalogConfig()
        self.logger = logger or component_logger("service")
        self._owns_client = client is None
        headers = {"User-Agent": self.config.user_agent} if self.config.user_agent else None
        self._client = client or httpx.AsyncClient(
            follow_redirects=True,
            timeout=self.config.request_timeout,
            headers=headers,
        )

    async def __aenter__(self) -> "RecordService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_by_id(self, record_id: int) -> Record:
        url = self.config.record_url(record_id)
        try:
            response = await self._client.get(url, timeout=self.config.request_timeout)
        except httpx.HTTPError as exc:
            raise RecordFetchError(record_id, f"{type(exc).__name__}: {exc}") from exc
        if self._is_failure(response):
            raise RecordFetchError(record_id, f"unexpected status {response.status_code}")
        try:
            payload = RecordPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            # json decode errors are ValueError subclasses
            raise RecordFetchError(record_id, f"malformed body: {exc}") from exc
        self.logger.debug("record_fetched", id=record_id, url=url)
        return payload.to_record()

    @staticmethod
    def _is_failure(response: httpx.Response) -> bool:
        return not 200 <= response.status_code < 300


__all__ = ["Record", "RecordFetchError", "RecordPayload", "RecordService", "RecordSource"]

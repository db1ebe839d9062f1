"""Remote collection client over httpx.

Talks to a json-server style resource:
- GET  /<resource>        -> list of animals
- GET  /<resource>/<id>   -> one animal
- POST /<resource>        -> created animal (server assigns the id)

Any transport error, non-2xx status or malformed body becomes a typed
failure; 4xx and 5xx are not told apart.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import CreateFailed, FetchFailed
from core.domain.models import Entity, EntityDraft, EntityId
from core.interfaces.collection import CollectionClient

logger = logging.getLogger(__name__)

_ENTITY_LIST = TypeAdapter(list[Entity])


class HttpCollectionClient(CollectionClient):
    """`CollectionClient` backed by an `httpx.AsyncClient`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, transport=transport)
        self._path = f"/{self._settings.resource}"

    async def __aenter__(self) -> "HttpCollectionClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_all(self) -> list[Entity]:
        payload = await self._read(self._path, failure="list failed")
        try:
            return _ENTITY_LIST.validate_python(payload)
        except ValidationError as exc:
            logger.warning("Malformed list payload from %s: %s", self._path, exc)
            raise FetchFailed("list failed") from exc

    async def get_one(self, entity_id: EntityId) -> Entity:
        path = f"{self._path}/{quote(str(entity_id), safe='')}"
        payload = await self._read(path, failure="detail failed")
        try:
            return Entity.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Malformed detail payload from %s: %s", path, exc)
            raise FetchFailed("detail failed") from exc

    async def create(self, draft: EntityDraft) -> Entity:
        body = draft.model_dump(mode="json")
        logger.debug("POST %s %s", self._path, body)
        try:
            resp = await self._client.post(self._path, json=body)
        except httpx.HTTPError as exc:
            logger.warning("POST %s failed: %s", self._path, exc)
            raise CreateFailed("create failed") from exc

        if not resp.is_success:
            logger.warning("POST %s returned HTTP %s", self._path, resp.status_code)
            raise CreateFailed(f"create failed (HTTP {resp.status_code})")

        try:
            return Entity.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Malformed create response from %s: %s", self._path, exc)
            raise CreateFailed("create failed") from exc

    async def _read(self, path: str, *, failure: str) -> Any:
        logger.debug("GET %s", path)
        try:
            resp = await self._client.get(path)
        except httpx.HTTPError as exc:
            logger.warning("GET %s failed: %s", path, exc)
            raise FetchFailed(failure) from exc

        if not resp.is_success:
            logger.warning("GET %s returned HTTP %s", path, resp.status_code)
            raise FetchFailed(f"{failure} (HTTP {resp.status_code})")

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("GET %s returned a non-JSON body", path)
            raise FetchFailed(failure) from exc

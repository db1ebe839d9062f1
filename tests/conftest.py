"""
File: tests/conftest.py
Shared fixtures: an in-memory json-server stand-in (served through
httpx.MockTransport) and an in-memory CollectionClient for controller tests.
"""
from __future__ import annotations

import asyncio
import json
from urllib.parse import unquote

import httpx
import pytest

from core.domain.errors import CreateFailed, FetchFailed
from core.domain.models import Entity, EntityDraft


ANIMALS = [
    {"id": 1, "name": "Fox", "image": "http://img.test/fox.png", "votes": 3},
    {"id": 2, "name": "Owl", "image": "http://img.test/owl.png", "votes": 0},
    {"id": 3, "name": "Lynx", "image": "http://img.test/lynx.png", "votes": 7},
]


class FakeCollectionServer:
    """Minimal json-server: GET list, GET one, POST create on one resource."""

    def __init__(self, records: list[dict] | None = None, resource: str = "characters"):
        self.records = [dict(r) for r in (records if records is not None else ANIMALS)]
        self.resource = resource
        self.requests: list[httpx.Request] = []
        self.fail_status: int | None = None
        self.down = False
        self.next_id = max([int(r["id"]) for r in self.records if str(r["id"]).isdigit()] or [0]) + 1

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={})

        raw_path = request.url.raw_path.split(b"?", 1)[0].decode("ascii")
        parts = [unquote(p) for p in raw_path.strip("/").split("/")]
        if not parts or parts[0] != self.resource:
            return httpx.Response(404, json={})

        if request.method == "GET" and len(parts) == 1:
            return httpx.Response(200, json=self.records)
        if request.method == "GET" and len(parts) == 2:
            for record in self.records:
                if str(record["id"]) == parts[1]:
                    return httpx.Response(200, json=record)
            return httpx.Response(404, json={})
        if request.method == "POST" and len(parts) == 1:
            body = json.loads(request.content)
            record = {"id": self.next_id, **body}
            self.next_id += 1
            self.records.append(record)
            return httpx.Response(201, json=record)
        return httpx.Response(405, json={})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_for(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]


class FakeCollection:
    """In-memory CollectionClient.

    Every read returns fresh Entity objects, like a real server, so the
    selected copy and the store copy are never the same object.
    `gates` holds per-id events that make `get_one` wait until released.
    """

    def __init__(self, records: list[dict] | None = None):
        self.records = [dict(r) for r in (records if records is not None else ANIMALS)]
        self.calls: list[tuple] = []
        self.fail_list = False
        self.fail_get: set[str] = set()
        self.fail_create = False
        self.gates: dict[str, asyncio.Event] = {}
        self.next_id = max([int(r["id"]) for r in self.records if str(r["id"]).isdigit()] or [0]) + 1

    async def list_all(self) -> list[Entity]:
        self.calls.append(("list_all",))
        if self.fail_list:
            raise FetchFailed("list failed")
        return [Entity.model_validate(r) for r in self.records]

    async def get_one(self, entity_id) -> Entity:
        self.calls.append(("get_one", entity_id))
        gate = self.gates.get(str(entity_id))
        if gate is not None:
            await gate.wait()
        if str(entity_id) in self.fail_get:
            raise FetchFailed("detail failed")
        for record in self.records:
            if str(record["id"]) == str(entity_id):
                return Entity.model_validate(record)
        raise FetchFailed("detail failed (HTTP 404)")

    async def create(self, draft: EntityDraft) -> Entity:
        self.calls.append(("create", draft.name, draft.image))
        if self.fail_create:
            raise CreateFailed("create failed")
        record = {"id": self.next_id, **draft.model_dump()}
        self.next_id += 1
        self.records.append(record)
        return Entity.model_validate(record)

    def network_calls(self) -> int:
        return len(self.calls)


@pytest.fixture
def server():
    """Fixture with a fake json-server holding three animals."""
    return FakeCollectionServer()


@pytest.fixture
def collection():
    """Fixture with an in-memory collection holding three animals."""
    return FakeCollection()

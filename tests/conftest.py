"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from incidentio.api.config import ClientConfig
from incidentio.api.resources import Client

BASE_URL = "https://api.example.com"

# URL segment -> (envelope key, delete success status)
KINDS: dict[str, tuple[str, int]] = {
    "incident_roles": ("incident_role", 204),
    "severities": ("severity", 202),
    "custom_fields": ("custom_field", 204),
    "custom_field_options": ("custom_field_option", 204),
}


def json_response(status: int, payload: Any) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload).encode())


def not_found_body(request_id: str = "req-404") -> dict[str, Any]:
    return {
        "type": "not_found",
        "status": 404,
        "request_id": request_id,
        "errors": [{"code": "not_found", "message": "Resource not found"}],
    }


class RecordingHandler:
    """httpx.MockTransport handler that records every request it serves."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)


class FakeIncidentIO:
    """In-memory stand-in for the incident.io REST API (the four managed kinds)."""

    def __init__(self) -> None:
        self.store: dict[str, dict[str, dict[str, Any]]] = {kind: {} for kind in KINDS}
        self._next_id = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = request.url.path.strip("/").split("/")
        if len(parts) < 2 or parts[0] != "v1" or parts[1] not in KINDS:
            return json_response(404, not_found_body())
        kind = parts[1]
        envelope, delete_status = KINDS[kind]
        items = self.store[kind]

        if len(parts) == 2 and request.method == "POST":
            self._next_id += 1
            resource_id = f"01FAKE{self._next_id:04d}"
            item = {**json.loads(request.content), "id": resource_id}
            if kind != "custom_field_options":
                item["created_at"] = "2022-05-28T07:46:07.385Z"
                item["updated_at"] = "2022-05-28T07:46:07.385Z"
            if kind == "incident_roles":
                item["role_type"] = "custom"
            if kind == "custom_fields":
                item["options"] = []
            items[resource_id] = item
            return json_response(201, {envelope: item})

        if len(parts) != 3:
            return json_response(405, {"type": "method_not_allowed", "status": 405})

        resource_id = parts[2]
        if resource_id not in items:
            return json_response(404, not_found_body())

        if request.method == "GET":
            return json_response(200, {envelope: items[resource_id]})
        if request.method == "PUT":
            items[resource_id] = {**items[resource_id], **json.loads(request.content)}
            return json_response(200, {envelope: items[resource_id]})
        if request.method == "DELETE":
            del items[resource_id]
            return httpx.Response(delete_status)
        return json_response(405, {"type": "method_not_allowed", "status": 405})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep INCIDENT_IO_* settings from the developer's shell out of tests."""
    for name in (
        "INCIDENT_IO_API_KEY",
        "INCIDENT_IO_BASE_URL",
        "INCIDENT_IO_DEBUG",
        "INCIDENT_IO_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key", base_url=BASE_URL)


Responder = Callable[[httpx.Request], httpx.Response]
ClientFactory = Callable[[Responder], tuple[Client, RecordingHandler]]


@pytest.fixture
def make_client(config: ClientConfig) -> Iterator[ClientFactory]:
    """Factory: build a Client whose requests are served by `responder`."""
    clients: list[Client] = []

    def _make(responder: Responder) -> tuple[Client, RecordingHandler]:
        handler = RecordingHandler(responder)
        client = Client(config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client, handler

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def respond() -> Callable[[int, Any], httpx.Response]:
    """Build a JSON response; pass payload=None for an empty body."""

    def _respond(status: int, payload: Any = None) -> httpx.Response:
        if payload is None:
            return httpx.Response(status)
        return json_response(status, payload)

    return _respond


@pytest.fixture
def fake_server() -> FakeIncidentIO:
    return FakeIncidentIO()


@pytest.fixture
def fake_client(make_client: ClientFactory, fake_server: FakeIncidentIO) -> Client:
    """Client wired to the in-memory FakeIncidentIO."""
    client, _ = make_client(fake_server)
    return client

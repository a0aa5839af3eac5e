"""Shared fixtures: an in-process fake of the SoundVault backend."""

import json

import httpx
import pytest

from src.vault_api import VaultClient

BASE_URL = "http://vault.test"


class FakeBackend:
    """Answers canned responses per (method, path) and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: object = None) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not found"})

        status, body = self.routes[key]
        if body is None:
            return httpx.Response(status)
        if isinstance(body, bytes):
            return httpx.Response(status, content=body, headers={"content-type": "text/html"})
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def json_body(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    def client(self) -> VaultClient:
        return VaultClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def playlist_data() -> list[dict]:
    return [
        {"id": 1, "name": "Voice Memos", "color": "#1DB954", "icon": "ri-mic-fill"},
        {"id": 2, "name": "Band Practice", "color": "#2D46B9", "icon": "ri-music-fill"},
        {"id": 3, "name": "Recordings 2024", "color": "#F230AA", "icon": "ri-album-fill"},
    ]


@pytest.fixture
def track_data() -> list[dict]:
    return [
        {"id": 10, "name": "Recording 1", "duration": 65, "createdAt": "2024-03-04T10:15:00Z"},
        {"id": 11, "name": "Song", "duration": 212.4, "createdAt": "2024-03-05T08:00:00Z"},
        {"id": 12, "name": "REC Demo", "duration": 9, "createdAt": "2024-03-06T21:30:00Z"},
    ]

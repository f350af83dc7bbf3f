"""Shared fixtures: an in-memory API behind httpx.MockTransport."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

import httpx
import pytest

from api_collections.client import ApiClient


BASE_URL = "https://example.test/api/v2"


class FakeApi:
    """Serves canned JSON bodies and records every request it receives."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: List[Tuple[str, str, Dict[str, str], int, Any]] = []

    def add(
        self,
        path: str,
        json: Any = None,
        status: int = 200,
        method: str = "GET",
        query: Optional[Dict[str, Any]] = None,
    ) -> None:
        expected = {key: str(value) for key, value in (query or {}).items()}
        self._routes.append((method.upper(), "/api/v2/" + path.lstrip("/"), expected, status, json))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, path, query, status, body in self._routes:
            if request.method != method or request.url.path != path:
                continue
            if any(request.url.params.get(key) != value for key, value in query.items()):
                continue
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)
        return httpx.Response(404, json={"error": "RecordNotFound"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi) -> Iterator[ApiClient]:
    client = ApiClient(BASE_URL, transport=httpx.MockTransport(api.handler))
    yield client
    client.close()

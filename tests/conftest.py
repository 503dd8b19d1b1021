from __future__ import annotations

import json as _json
from typing import Any, Callable, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, *, raw: Optional[bytes] = None):
        self.status_code = status_code
        self._body = body
        if raw is not None:
            self.content = raw
        else:
            self.content = b"" if body is None else _json.dumps(body).encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if not self.content:
            raise ValueError("No JSON body")
        return _json.loads(self.content.decode("utf-8"))


class FakeSession:
    """Stands in for ``requests.Session``: routes (method, path) to canned handlers."""

    def __init__(self, base_url: str = "http://api.test/api"):
        self.base_url = base_url
        self.headers: dict = {}
        self.calls: list[dict] = []
        self._routes: dict[tuple[str, str], Callable[..., Any]] = {}

    def route(self, method: str, path: str, handler) -> None:
        if not callable(handler):
            value = handler
            handler = lambda **_: value  # noqa: E731
        self._routes[(method.upper(), path)] = handler

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def request(self, method, url, timeout=None, **kwargs):
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        self.calls.append({"method": method, "path": path, **kwargs})
        handler = self._routes.get((method, path))
        if handler is None:
            return FakeResponse(404, {"error": f"No route for {method} {path}"})
        result = handler(params=kwargs.get("params"), json=kwargs.get("json"))
        if isinstance(result, Exception):
            raise result
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse(200, result)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def offline_error():
    return requests.ConnectionError("Network is unreachable")


@pytest.fixture
def response():
    """Factory for canned HTTP responses (``response(409, {"error": ...})``)."""
    return FakeResponse

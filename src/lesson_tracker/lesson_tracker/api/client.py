from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS, OFFLINE_MESSAGE
from ..core.exceptions import ApiError, ApiUnavailableError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_API_TIMEOUT_SECONDS
    token: Optional[str] = None


class ApiClient:
    """Thin JSON client for the lesson tracker REST API.

    Note: One ``requests.Session`` per client so connections are pooled; the
    session is injectable for tests.
    """

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if config.token:
            self._session.headers.update({"Authorization": f"Bearer {config.token}"})

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("GET", path, params=_drop_empty(params))

    def post(self, path: str, *, json: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("POST", path, json=dict(json or {}))

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("%s %s %s", method, url, kwargs.get("params") or kwargs.get("json") or "")

        try:
            response = self._session.request(method, url, timeout=self._config.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("API unreachable: %s %s (%s)", method, url, e)
            raise ApiUnavailableError(OFFLINE_MESSAGE) from e

        if not response.ok:
            message = _error_message(response)
            logger.warning("API error %s on %s %s: %s", response.status_code, method, url, message)
            if response.status_code == 404:
                raise NotFoundError(message, status_code=404)
            raise ApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid response from server", status_code=response.status_code) from e


def _drop_empty(params: Optional[Mapping[str, Any]]) -> dict:
    return {k: v for k, v in (params or {}).items() if v is not None and v != ""}


def _error_message(response: requests.Response) -> str:
    """Server-provided ``error``/``message`` when present, else a status-based text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f"Request failed (HTTP {response.status_code})"

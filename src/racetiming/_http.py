"""Low-level HTTP transport for the runner store, wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from racetiming.exceptions import (
    RunnerStoreAPIError,
    RunnerStoreConnectionError,
    RunnerStoreTimeoutError,
)

DEFAULT_TIMEOUT = 30.0


def _auth_params(auth: str | None) -> dict[str, str] | None:
    return {"auth": auth} if auth else None


def _handle_response(response: httpx.Response) -> Any:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise RunnerStoreAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    return response.json()


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        auth: str | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            params=_auth_params(auth),
        )

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """Perform a request and return parsed JSON (``None`` for JSON null)."""
        try:
            response = self._client.request(method, path, json=json)
        except httpx.ConnectError as exc:
            raise RunnerStoreConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise RunnerStoreTimeoutError(str(exc)) from exc
        return _handle_response(response)

    def close(self) -> None:
        self._client.close()


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        auth: str | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            params=_auth_params(auth),
        )

    async def request(self, method: str, path: str, json: Any = None) -> Any:
        """Perform an async request and return parsed JSON (``None`` for JSON null)."""
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.ConnectError as exc:
            raise RunnerStoreConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise RunnerStoreTimeoutError(str(exc)) from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()

"""Tests for the HTTP transport layer."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from racetiming._http import AsyncTransport, SyncTransport
from racetiming.exceptions import (
    RunnerStoreAPIError,
    RunnerStoreConnectionError,
    RunnerStoreTimeoutError,
)

BASE_URL = "https://race-db.example.com"


class TestSyncTransport:
    @respx.mock
    def test_get_success(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(
            return_value=httpx.Response(200, json={"-N1": {"name": "A12"}})
        )
        transport = SyncTransport(BASE_URL)
        assert transport.request("GET", "/runners.json") == {"-N1": {"name": "A12"}}
        transport.close()

    @respx.mock
    def test_json_null(self) -> None:
        respx.delete(f"{BASE_URL}/runners/-N1.json").mock(
            return_value=httpx.Response(200, content=b"null")
        )
        transport = SyncTransport(BASE_URL)
        assert transport.request("DELETE", "/runners/-N1.json") is None
        transport.close()

    @respx.mock
    def test_sends_json_body(self) -> None:
        route = respx.patch(f"{BASE_URL}/runners/-N1.json").mock(
            return_value=httpx.Response(200, json={"endtime": None})
        )
        transport = SyncTransport(BASE_URL)
        transport.request("PATCH", "/runners/-N1.json", json={"endtime": None})
        assert route.called
        assert json.loads(route.calls.last.request.content) == {"endtime": None}
        transport.close()

    @respx.mock
    def test_auth_query_param(self) -> None:
        route = respx.get(f"{BASE_URL}/runners.json", params={"auth": "secret"}).mock(
            return_value=httpx.Response(200, content=b"null")
        )
        transport = SyncTransport(BASE_URL, auth="secret")
        transport.request("GET", "/runners.json")
        assert route.called
        transport.close()

    @respx.mock
    def test_get_401(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(
            return_value=httpx.Response(401, text="Permission denied")
        )
        transport = SyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreAPIError) as exc_info:
            transport.request("GET", "/runners.json")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Permission denied"
        transport.close()

    @respx.mock
    def test_get_500(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )
        transport = SyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreAPIError) as exc_info:
            transport.request("GET", "/runners.json")
        assert exc_info.value.status_code == 500
        transport.close()

    @respx.mock
    def test_connection_error(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(side_effect=httpx.ConnectError("fail"))
        transport = SyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreConnectionError):
            transport.request("GET", "/runners.json")
        transport.close()

    @respx.mock
    def test_timeout_error(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(side_effect=httpx.ReadTimeout("timeout"))
        transport = SyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreTimeoutError):
            transport.request("GET", "/runners.json")
        transport.close()


class TestAsyncTransport:
    @respx.mock
    @pytest.mark.asyncio
    async def test_get_success(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(
            return_value=httpx.Response(200, json={"-N1": {"name": "A12"}})
        )
        transport = AsyncTransport(BASE_URL)
        result = await transport.request("GET", "/runners.json")
        assert result == {"-N1": {"name": "A12"}}
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_get_404(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(
            return_value=httpx.Response(404, text="Not Found")
        )
        transport = AsyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreAPIError) as exc_info:
            await transport.request("GET", "/runners.json")
        assert exc_info.value.status_code == 404
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(side_effect=httpx.ConnectError("fail"))
        transport = AsyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreConnectionError):
            await transport.request("GET", "/runners.json")
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout_error(self) -> None:
        respx.get(f"{BASE_URL}/runners.json").mock(side_effect=httpx.ReadTimeout("timeout"))
        transport = AsyncTransport(BASE_URL)
        with pytest.raises(RunnerStoreTimeoutError):
            await transport.request("GET", "/runners.json")
        await transport.close()

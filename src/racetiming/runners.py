"""Clients for the live runner tracking store.

The store is a realtime JSON database exposed over REST (Firebase style):
each runner lives at ``{collection}/{id}.json`` and timestamps are filled
in by the server from the ``{".sv": "timestamp"}`` placeholder.

This is independent of the analysis pipeline, which never touches it.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from racetiming._http import AsyncTransport, SyncTransport
from racetiming._logging import alog_store_call, log_store_call
from racetiming.config import get_settings
from racetiming.exceptions import (
    RunnerNotFoundError,
    RunnerStoreError,
    RunnerStoreValidationError,
)
from racetiming.models.runner import Runner

SERVER_TIMESTAMP = {".sv": "timestamp"}


def _validate_runner(runner_id: str, data: Any) -> Runner:
    """Validate one stored node against the Runner model."""
    if not isinstance(data, dict):
        raise RunnerStoreValidationError(
            f"Failed to validate runner {runner_id!r}: expected an object, got {type(data).__name__}"
        )
    try:
        return Runner.model_validate({**data, "id": runner_id})
    except ValidationError as exc:
        raise RunnerStoreValidationError(
            f"Failed to validate runner {runner_id!r}: {exc}"
        ) from exc


def _validate_collection(data: Any) -> dict[str, Runner]:
    # An empty collection comes back as JSON null.
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RunnerStoreValidationError(
            f"Failed to validate runner collection: expected an object, got {type(data).__name__}"
        )
    return {runner_id: _validate_runner(runner_id, node) for runner_id, node in data.items()}


def _created_id(data: Any) -> str:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise RunnerStoreValidationError(f"Unexpected create response: {data!r}")
    return data["name"]


def _new_runner_payload(name: str) -> dict[str, Any]:
    return {"name": name, "startTime": SERVER_TIMESTAMP, "endtime": None}


def _resolve_options(
    base_url: str | None,
    collection: str | None,
    timeout: float | None,
    auth: str | None,
) -> tuple[str, str, float, str | None]:
    settings = get_settings()
    base_url = base_url or settings.runner_store_url
    if not base_url:
        raise RunnerStoreError(
            "No runner store URL configured; pass base_url or set RACETIMING_RUNNER_STORE_URL"
        )
    return (
        base_url,
        collection or settings.runner_store_collection,
        timeout if timeout is not None else settings.request_timeout,
        auth if auth is not None else settings.runner_store_auth,
    )


class RunnerStoreClient:
    """Synchronous client for the runner store.

    Usage:
        with RunnerStoreClient("https://my-db.firebaseio.com") as store:
            runner = store.create("A12")
            store.update_end_time(runner.id)
    """

    def __init__(
        self,
        base_url: str | None = None,
        collection: str | None = None,
        timeout: float | None = None,
        auth: str | None = None,
    ) -> None:
        base_url, self._collection, timeout, auth = _resolve_options(base_url, collection, timeout, auth)
        self._transport = SyncTransport(base_url=base_url, timeout=timeout, auth=auth)

    def __enter__(self) -> RunnerStoreClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    def _path(self, runner_id: str | None = None) -> str:
        if runner_id is None:
            return f"/{self._collection}.json"
        return f"/{self._collection}/{runner_id}.json"

    # ── Operations ─────────────────────────────────────────────

    @log_store_call
    def create(self, name: str) -> Runner:
        """Register a runner; the store stamps the start time."""
        created = self._transport.request("POST", self._path(), json=_new_runner_payload(name))
        return self.get(_created_id(created))

    @log_store_call
    def get(self, runner_id: str) -> Runner:
        """Fetch one runner, raising RunnerNotFoundError if absent."""
        data = self._transport.request("GET", self._path(runner_id))
        if data is None:
            raise RunnerNotFoundError(runner_id)
        return _validate_runner(runner_id, data)

    @log_store_call
    def list(self) -> dict[str, Runner]:
        """All runners keyed by id."""
        return _validate_collection(self._transport.request("GET", self._path()))

    def active(self) -> dict[str, Runner]:
        """Runners that have not finished yet."""
        return {rid: r for rid, r in self.list().items() if r.is_active}

    @log_store_call
    def update_end_time(self, runner_id: str) -> Runner:
        """Stamp the current server time as the runner's end time."""
        self.get(runner_id)
        self._transport.request("PATCH", self._path(runner_id), json={"endtime": SERVER_TIMESTAMP})
        return self.get(runner_id)

    @log_store_call
    def undo_end_time(self, runner_id: str) -> Runner:
        """Clear the runner's end time so it is active again."""
        self.get(runner_id)
        self._transport.request("PATCH", self._path(runner_id), json={"endtime": None})
        return self.get(runner_id)

    @log_store_call
    def delete(self, runner_id: str) -> None:
        """Remove a runner; deleting a missing id is a no-op."""
        self._transport.request("DELETE", self._path(runner_id))


class AsyncRunnerStoreClient:
    """Asynchronous client for the runner store.

    Usage:
        async with AsyncRunnerStoreClient("https://my-db.firebaseio.com") as store:
            runners = await store.list()
    """

    def __init__(
        self,
        base_url: str | None = None,
        collection: str | None = None,
        timeout: float | None = None,
        auth: str | None = None,
    ) -> None:
        base_url, self._collection, timeout, auth = _resolve_options(base_url, collection, timeout, auth)
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout, auth=auth)

    async def __aenter__(self) -> AsyncRunnerStoreClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    def _path(self, runner_id: str | None = None) -> str:
        if runner_id is None:
            return f"/{self._collection}.json"
        return f"/{self._collection}/{runner_id}.json"

    # ── Operations ─────────────────────────────────────────────

    @alog_store_call
    async def create(self, name: str) -> Runner:
        """Register a runner; the store stamps the start time."""
        created = await self._transport.request("POST", self._path(), json=_new_runner_payload(name))
        return await self.get(_created_id(created))

    @alog_store_call
    async def get(self, runner_id: str) -> Runner:
        """Fetch one runner, raising RunnerNotFoundError if absent."""
        data = await self._transport.request("GET", self._path(runner_id))
        if data is None:
            raise RunnerNotFoundError(runner_id)
        return _validate_runner(runner_id, data)

    @alog_store_call
    async def list(self) -> dict[str, Runner]:
        """All runners keyed by id."""
        return _validate_collection(await self._transport.request("GET", self._path()))

    async def active(self) -> dict[str, Runner]:
        """Runners that have not finished yet."""
        return {rid: r for rid, r in (await self.list()).items() if r.is_active}

    @alog_store_call
    async def update_end_time(self, runner_id: str) -> Runner:
        """Stamp the current server time as the runner's end time."""
        await self.get(runner_id)
        await self._transport.request("PATCH", self._path(runner_id), json={"endtime": SERVER_TIMESTAMP})
        return await self.get(runner_id)

    @alog_store_call
    async def undo_end_time(self, runner_id: str) -> Runner:
        """Clear the runner's end time so it is active again."""
        await self.get(runner_id)
        await self._transport.request("PATCH", self._path(runner_id), json={"endtime": None})
        return await self.get(runner_id)

    @alog_store_call
    async def delete(self, runner_id: str) -> None:
        """Remove a runner; deleting a missing id is a no-op."""
        await self._transport.request("DELETE", self._path(runner_id))

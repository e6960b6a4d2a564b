"""Exceptions raised by racetiming.

The analysis pipeline has no error path of its own: defective rows are
dropped and pairing gaps become DNF or orphan attempts. Everything below
comes from the runner store client.
"""

from __future__ import annotations


class RaceTimingError(Exception):
    """Base exception for all racetiming errors."""


class RunnerStoreError(RaceTimingError):
    """The runner store could not be used, including a missing store URL."""


class RunnerStoreConnectionError(RunnerStoreError):
    """The store host refused or dropped the connection."""


class RunnerStoreTimeoutError(RunnerStoreError):
    """The store did not answer within ``request_timeout`` seconds."""


class RunnerStoreAPIError(RunnerStoreError):
    """The store answered with a 4xx/5xx status, e.g. 401 for a bad ``auth`` token.

    ``message`` is the raw response body, which the realtime database
    fills with a JSON ``{"error": ...}`` object.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class RunnerStoreValidationError(RunnerStoreError):
    """A stored node is not a runner object, or the create response carried no key."""


class RunnerNotFoundError(RunnerStoreError):
    """The runner path holds JSON null; the id was never created or was deleted."""

    def __init__(self, runner_id: str) -> None:
        self.runner_id = runner_id
        super().__init__(f"Runner not found: {runner_id}")

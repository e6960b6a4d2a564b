"""Call logging for the analysis pipeline and the runner store client."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from racetiming.config import LoggingSettings, get_logging_settings
from racetiming.models.session import Session

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "racetiming"
LOG_FILE_NAME = "racetiming.log"

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def _get_logger() -> logging.Logger:
    """Return the package logger, attaching a file handler on first use if a log dir is set.

    Invalid logging settings fall back to the defaults with a warning;
    logging configuration never fails the caller.
    """
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        settings_error: ValidationError | None = None
        try:
            settings = get_logging_settings()
        except ValidationError as exc:
            settings_error = exc
            settings = LoggingSettings.model_construct()

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(settings.log_level)

        if settings.log_dir and not logger.handlers:
            os.makedirs(settings.log_dir, exist_ok=True)
            handler = logging.FileHandler(
                os.path.join(settings.log_dir, LOG_FILE_NAME), encoding="utf-8",
            )
            handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
            )
            logger.addHandler(handler)
            logger.propagate = False

        if settings_error is not None:
            logger.warning(
                "Ignoring invalid logging settings, using defaults: %s",
                settings_error.errors(include_url=False),
            )

        _logger = logger

    return _logger


def _describe(value: Any) -> str:
    # Stage inputs are whole exports; log their size rather than their content.
    if isinstance(value, str):
        return f"<{len(value)} chars>"
    if isinstance(value, (list, tuple)):
        return f"<{len(value)} items>"
    if isinstance(value, Session):
        return f"<{value.id}: {value.record_count} records>"
    return repr(value)


def _count(result: Any) -> int:
    if isinstance(result, (list, tuple, dict)):
        return len(result)
    return 1


def log_stage(fn: F) -> F:
    """Decorator that logs pipeline stage calls with input sizes and result counts."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        arg_parts = [_describe(a) for a in args]
        arg_parts += [f"{k}={_describe(v)}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.debug("STAGE: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "STAGE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info(
            "STAGE OK: %s -> %d items (%.3fs)",
            fn.__qualname__, _count(result), elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_store_call(fn: F) -> F:
    """Decorator that logs runner store client method calls."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        # Skip 'self'
        arg_parts = [repr(a) for a in args[1:]]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("STORE CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "STORE FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info("STORE OK: %s(%s) (%.3fs)", fn.__qualname__, arg_str, elapsed)
        return result

    return wrapper  # type: ignore[return-value]


def alog_store_call(fn: F) -> F:
    """Async counterpart of :func:`log_store_call`."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        arg_parts = [repr(a) for a in args[1:]]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("STORE CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "STORE FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info("STORE OK: %s(%s) (%.3fs)", fn.__qualname__, arg_str, elapsed)
        return result

    return wrapper  # type: ignore[return-value]

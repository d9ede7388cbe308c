"""Structured logging helpers distilled into tiny orchestration phrases.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing applications to adopt a specific logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``bind_trace_id`` / ``new_trace_id``: bind, clear, or mint identifiers.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for structured event payloads.
    - ``enable_console_logging`` / ``disable_console_logging``: stderr handler
      toggled by ``--verbose``.

System Integration
    Used by adapters and the composition root so that resolve, connect, send,
    and receive events carry the same trace metadata. The domain layer stays
    free from logging concerns.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("framed_command_client_trace_id", default=None)
"""Current trace identifier propagated through logging helpers.

Why
    Every stage of one exchange should be correlatable in the logs without
    threading identifiers through each call.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("framed_command_client")
_LOGGER.addHandler(logging.NullHandler())

_CONSOLE_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s %(context)s"


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def new_trace_id() -> str:
    """Mint and bind a fresh trace identifier, returning it."""

    trace_id = uuid.uuid4().hex[:16]
    bind_trace_id(trace_id)
    return trace_id


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    stage: str,
    endpoint: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for exchange lifecycle events.

    Why
        Keeps event construction consistent so downstream log processors can rely
        on stable keys.
    What
        Returns a dictionary with ``stage`` and ``endpoint`` keys and any optional
        payload fields.
    Inputs
        stage: Name of the exchange stage (``resolve``, ``connect``, ...).
        endpoint: Rendered ``host:port`` the event refers to, if known.
        payload: Optional mapping with extra diagnostic detail.

    Examples
    --------
    >>> make_event('send', '127.0.0.1:9000', {'bytes': 5})
    {'stage': 'send', 'endpoint': '127.0.0.1:9000', 'bytes': 5}
    """

    event: dict[str, Any] = {"stage": stage, "endpoint": endpoint}
    if payload:
        event |= dict(payload)
    return event


def enable_console_logging(level: int = logging.DEBUG) -> logging.Handler:
    """Attach a single stderr handler to the package logger.

    Why
        The CLI keeps stdout for the reply bytes; diagnostics requested with
        ``--verbose`` must go to stderr.
    What
        Reuses the handler installed by a previous call so repeated invocations
        (tests, REPL sessions) never duplicate output.
    """

    handler = _console_handler()
    if handler is None:
        handler = _ConsoleHandler()
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, defaults={"context": {}}))
        _LOGGER.addHandler(handler)
    handler.setLevel(level)
    _LOGGER.setLevel(level)
    return handler


def disable_console_logging() -> None:
    """Detach the stderr handler installed by :func:`enable_console_logging`."""

    handler = _console_handler()
    if handler is not None:
        _LOGGER.removeHandler(handler)
        _LOGGER.setLevel(logging.NOTSET)


class _ConsoleHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


def _console_handler() -> _ConsoleHandler | None:
    for handler in _LOGGER.handlers:
        if isinstance(handler, _ConsoleHandler):
            return handler
    return None


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context

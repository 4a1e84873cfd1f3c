"""Logging context helpers for consistent structured fields."""

from __future__ import annotations

import logging
import contextlib
from dataclasses import dataclass
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

from ..config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT

_SESSION_ID: ContextVar[str] = ContextVar("session_id", default="-")
_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Explicit logging settings handed to configure_logging()."""

    level: str = APP_LOG_LEVEL
    format: str = APP_LOG_FORMAT
    datefmt: str = APP_LOG_DATEFMT

    @classmethod
    def for_verbosity(cls, verbose: bool) -> "LoggingConfig":
        """Build a config whose level is DEBUG when verbose, else the env default."""
        return cls(level="DEBUG") if verbose else cls()


def set_log_context(
    *,
    session_id: str | None = None,
    request_id: str | None = None,
) -> list[tuple[ContextVar[str], Token[str]]]:
    """Set log context values and return tokens for reset."""
    tokens: list[tuple[ContextVar[str], Token[str]]] = []
    if session_id is not None:
        tokens.append((_SESSION_ID, _SESSION_ID.set(session_id)))
    if request_id is not None:
        tokens.append((_REQUEST_ID, _REQUEST_ID.set(request_id)))
    return tokens


def reset_log_context(tokens: list[tuple[ContextVar[str], Token[str]]]) -> None:
    """Reset log context values using tokens returned by set_log_context."""
    for var, token in reversed(tokens):
        var.reset(token)


def current_log_context() -> dict[str, str]:
    """Return the context fields that will be stamped on new log records."""
    return {"session_id": _SESSION_ID.get(), "request_id": _REQUEST_ID.get()}


@contextmanager
def log_context(
    *,
    session_id: str | None = None,
    request_id: str | None = None,
) -> Iterator[None]:
    """Context manager for applying log fields within a block."""
    tokens = set_log_context(session_id=session_id, request_id=request_id)
    try:
        yield
    finally:
        reset_log_context(tokens)


def install_log_context() -> None:
    """Install a LogRecord factory that injects context fields."""
    if getattr(install_log_context, "_installed", False):
        return

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.session_id = _SESSION_ID.get()
        record.request_id = _REQUEST_ID.get()
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


def configure_logging(config: LoggingConfig) -> None:
    """Initialize root logging from an explicit config value."""
    install_log_context()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=config.level, format=config.format, datefmt=config.datefmt)
    else:
        root_logger.setLevel(config.level)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(config.level)
                handler.setFormatter(logging.Formatter(config.format, datefmt=config.datefmt))

    logging.getLogger("vocllm").setLevel(config.level)


__all__ = [
    "LoggingConfig",
    "configure_logging",
    "current_log_context",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
]

"""Diagnostics raised while processing citations.

Recoverable problems (unknown keys, entries a style cannot render) do not
stop processing. They are handed to a `DiagnosticEmitter`, which the library
routes to `logging` and the CLI prints on a rich console. Progress is
reported as named events with a small payload.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver of warnings, errors, and progress events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard every diagnostic."""

    debug_enabled = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def error(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        pass


class LoggingEmitter:
    """Forward diagnostics to a `logging.Logger`.

    Tracebacks are attached to warnings only when *debug_enabled* is set;
    errors always carry them.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.warning(message, exc_info=exc if self.debug_enabled else None)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.error(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("event %s: %s", name, dict(payload))
        else:
            self._logger.info(message)


def _harvested(data: Mapping[str, Any]) -> str:
    lines = data.get("lines")
    suffix = "" if lines is None else f" from {lines} lines"
    return f"Collected {data.get('count', 0)} distinct citation(s){suffix}"


def _built(data: Mapping[str, Any]) -> str:
    style = data.get("style") or "<unknown>"
    return f"Built bibliography with {data.get('count', 0)} entries ({style})"


def _loaded(data: Mapping[str, Any]) -> str:
    source = data.get("source") or "<unknown>"
    return f"Loaded {data.get('entries', 0)} references from {source}"


_EVENT_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "citations_harvested": _harvested,
    "bibliography_built": _built,
    "bibliography_loaded": _loaded,
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary of a known event, ``None`` otherwise."""
    formatter = _EVENT_FORMATTERS.get(name)
    return None if formatter is None else formatter(payload)


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]

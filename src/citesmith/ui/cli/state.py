"""Per-invocation CLI state and rich diagnostics rendering."""

from __future__ import annotations

from collections.abc import Iterator
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys

from rich.console import Console
from rich.text import Text


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "reset_cli_state",
    "set_cli_state",
]

_LEVEL_STYLES = {"warning": "yellow", "error": "red"}


@dataclass(slots=True)
class CLIState:
    """Verbosity settings and warnings collected during one command."""

    verbosity: int = 0
    show_tracebacks: bool = False
    warnings: list[str] = field(default_factory=list, init=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def err_console(self) -> Console:
        """Return a stderr console, rebuilt when ``sys.stderr`` is swapped."""
        if self._err_console is None or self._err_console.file is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("citesmith_cli_state", default=None)


def get_cli_state(*, create: bool = True) -> CLIState:
    """Return the state bound to the current context."""
    state = _STATE_VAR.get()
    if state is not None:
        return state
    if not create:
        raise RuntimeError("CLI state is not initialised for this context.")
    return reset_cli_state()


def reset_cli_state() -> CLIState:
    state = CLIState()
    _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int | None = None, debug: bool | None = None) -> CLIState:
    state = get_cli_state()
    if verbosity is not None:
        state.verbosity = max(verbosity, 0)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _causes(exc: BaseException) -> Iterator[BaseException]:
    seen = {id(exc)}
    current = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print *message* on stderr.

    Info messages need ``-v``. With ``-v`` the exception type is appended to
    warnings and errors, with ``-vv`` the chain of causes as well.
    """
    state = get_cli_state()
    if level == "info":
        if state.verbosity:
            state.err_console.log(message)
        return

    colour = _LEVEL_STYLES.get(level, "yellow")
    text = Text(f"{level}: ", style=f"bold {colour}")
    text.append(message, style=colour)
    if exception is not None and state.verbosity >= 1:
        details = [f"type: {type(exception).__name__}"]
        if state.verbosity >= 2:
            details.extend(f"caused by {type(cause).__name__}: {cause}" for cause in _causes(exception))
        text.append("\n" + "\n".join(details), style=colour)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    get_cli_state().warnings.append(message)
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether failures should propagate with their traceback."""
    state = _STATE_VAR.get()
    return state is not None and state.show_tracebacks

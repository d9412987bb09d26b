"""Public CLI exports for citesmith."""

from __future__ import annotations

from .app import app, main, render
from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "CliEmitter",
    "app",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
    "render",
]

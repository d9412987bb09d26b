"""Exception hierarchy for the citation pipeline."""

from __future__ import annotations


class CitationError(RuntimeError):
    """Base exception for citation processing failures."""


class UnknownReferenceError(CitationError):
    """Raised when a citation key is missing from the bibliography database."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown reference: {key}")
        self.key = key


class StyleRenderError(CitationError):
    """Raised when a reference cannot be rendered in the active style."""

    def __init__(self, key: str, reason: str | None = None) -> None:
        message = f"Failed to render {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key


class ConfigurationError(CitationError):
    """Raised when the processor cannot be constructed from its settings."""


__all__ = [
    "CitationError",
    "ConfigurationError",
    "StyleRenderError",
    "UnknownReferenceError",
]

"""Interface of the style-rendering collaborator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StyleRenderer(Protocol):
    """Turn a bibliography key into styled citation or bibliography text.

    Implementations raise `StyleRenderError` when a key cannot be rendered.
    """

    def render_citation(self, key: str, *, narrative: bool = False) -> str: ...

    def render_bibliography(self, key: str) -> str: ...


__all__ = ["StyleRenderer"]

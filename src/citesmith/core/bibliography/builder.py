"""Bibliography list construction."""

from __future__ import annotations

from pathlib import Path

from ..config import OutputTarget, ProcessorConfig
from ..diagnostics import DiagnosticEmitter, LoggingEmitter
from ..exceptions import StyleRenderError
from ..ordering import CitationOrder
from ..rendering import StyleRenderer


class BibliographyBuilder:
    """Produce the formatted reference list for the cited keys."""

    def __init__(
        self,
        config: ProcessorConfig,
        order: CitationOrder,
        style_renderer: StyleRenderer | None = None,
        *,
        source: Path | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._config = config
        self._order = order
        self._style_renderer = style_renderer
        self._source = source
        self._emitter = emitter or LoggingEmitter()

    def build_entry(self, key: str) -> str:
        """Return the bibliography text for *key*, falling back to the key itself."""
        prefix = ". " if self._config.policy.numeric else ""
        if self._config.links:
            prefix += f"[[{key}]]"

        if self._style_renderer is None:
            self._emitter.warning(str(StyleRenderError(key, "no style renderer configured")))
            return f"{prefix}{key}"

        try:
            text = self._style_renderer.render_bibliography(key)
        except StyleRenderError as exc:
            self._emitter.warning(str(exc), exc)
            return f"{prefix}{key}"
        return f"{prefix}{text}"

    def build_list(self) -> list[str]:
        """Return one entry per cited key, each followed by a blank line."""
        if self._config.output.is_typesetting:
            return [self._typesetting_command()]

        result: list[str] = []
        for key in self._order.keys():
            result.append(self.build_entry(key))
            result.append("")
        self._emitter.event(
            "bibliography_built",
            {"count": len(result) // 2, "style": self._config.style},
        )
        return result

    def _typesetting_command(self) -> str:
        if self._config.output is OutputTarget.BIBLATEX:
            return "+++\\printbibliography+++"
        stem = self._source.stem if self._source is not None else "references"
        return f"+++\\bibliography{{{stem}}}+++"


__all__ = ["BibliographyBuilder"]

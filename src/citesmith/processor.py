"""Citation processor holding the state of one document.

A document is processed in two passes. `process_citation_macros` must see
every line first so that the set of cited keys, and therefore the numbering
of numeric styles, is complete. `replace_citation_macros` then rewrites each
line, and `build_bibliography_list` produces the reference list.
"""

from __future__ import annotations

from pathlib import Path

from citesmith.adapters.pybtex import PybtexStyleRenderer
from citesmith.core.bibliography import BibliographyBuilder, BibliographyCollection
from citesmith.core.citations import CitationRenderer
from citesmith.core.config import ProcessorConfig, build_config
from citesmith.core.context import CitationState
from citesmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from citesmith.core.macros import CitationMacro, extract_macros, substitute_macros
from citesmith.core.ordering import CitationOrder
from citesmith.core.rendering import StyleRenderer


class Processor:
    """Resolve citation macros against a BibTeX database."""

    def __init__(
        self,
        bibfile: Path | str | BibliographyCollection,
        config: ProcessorConfig | None = None,
        *,
        style_renderer: StyleRenderer | None = None,
        emitter: DiagnosticEmitter | None = None,
        **options: object,
    ) -> None:
        self.config = build_config(config, **options)
        self.emitter = emitter or LoggingEmitter()

        if isinstance(bibfile, BibliographyCollection):
            self.database = bibfile
            self.source: Path | None = None
        else:
            self.source = Path(bibfile)
            self.database = BibliographyCollection.from_file(self.source)
            self.emitter.event(
                "bibliography_loaded",
                {"source": str(self.source), "entries": len(self.database)},
            )
        for issue in self.database.issues:
            label = f"{issue.key}: " if issue.key else ""
            self.emitter.warning(f"{label}{issue.message}")

        if style_renderer is None and not self.config.output.is_typesetting:
            style_renderer = PybtexStyleRenderer(
                self.database, self.config.policy, self.config.locale
            )

        self.state = CitationState()
        self.order = CitationOrder(self.config, self.database, self.state)
        self.renderer = CitationRenderer(
            self.config,
            self.database,
            self.order,
            style_renderer,
            emitter=self.emitter,
        )
        self.builder = BibliographyBuilder(
            self.config,
            self.order,
            style_renderer,
            source=self.source,
            emitter=self.emitter,
        )

    @property
    def citations(self) -> list[str]:
        """Return the distinct cited keys in order of first appearance."""
        return list(self.state.citations)

    def process_citation_macros(self, line: str) -> None:
        """Record the keys cited on *line*."""
        for macro in extract_macros(line):
            self.state.record_citations(macro.keys)

    harvest = process_citation_macros

    def complete_citation(self, macro: CitationMacro) -> str:
        """Return the rendered text for a single macro."""
        return self.renderer.render(macro)

    def replace_citation_macros(self, line: str) -> str:
        """Return *line* with every citation macro rendered."""
        return substitute_macros(line, self.renderer.render)

    def get_reference(self, key: str) -> str:
        """Return the bibliography entry text for *key*."""
        return self.builder.build_entry(key)

    def cites(self) -> list[str]:
        """Return the cited keys in bibliography order."""
        return self.order.keys()

    def build_bibliography_list(self) -> list[str]:
        """Return the bibliography as a list of paragraphs separated by blanks."""
        return self.builder.build_list()


__all__ = ["Processor"]

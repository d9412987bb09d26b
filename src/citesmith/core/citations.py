"""Inline citation rendering.

`CitationRenderer.render` turns one `CitationMacro` into the text that
replaces it in the document. Numeric styles print the 1-based number of
each key in the ordering sequence and compact consecutive numbers into
ranges. Author-date styles delegate the fragment to the style renderer
and attach locators themselves. Typesetting outputs bypass both and emit
LaTeX citation commands inside an AsciiDoc passthrough.
"""

from __future__ import annotations

from collections.abc import Sequence

from .bibliography.collection import BibliographyCollection
from .config import OutputTarget, ProcessorConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import StyleRenderError, UnknownReferenceError
from .locale import locale_terms
from .macros import CitationItem, CitationMacro, CitationType
from .ordering import CitationOrder
from .rendering import StyleRenderer


ESCAPED_COMMA = "&#44;"


def combine_consecutive_numbers(values: Sequence[object], joiner: str = ",") -> str:
    """Join *values*, collapsing runs of three or more consecutive integers.

    >>> combine_consecutive_numbers([1, 3, 4, 5])
    '1,3-5'
    """
    parts = [str(value).strip() for value in values]
    numbers = [int(part) if part.isascii() and part.isdigit() else None for part in parts]
    result: list[str] = []
    start = 0
    while start < len(parts):
        end = start
        while (
            end + 1 < len(parts)
            and numbers[end] is not None
            and numbers[end + 1] is not None
            and numbers[end + 1] == numbers[end] + 1  # type: ignore[operator]
        ):
            end += 1
        if end - start >= 2:
            result.append(f"{parts[start]}-{parts[end]}")
        else:
            result.extend(parts[start : end + 1])
        start = end + 1
    return joiner.join(result)


class CitationRenderer:
    """Render citation macros according to the processor configuration."""

    def __init__(
        self,
        config: ProcessorConfig,
        database: BibliographyCollection,
        order: CitationOrder,
        style_renderer: StyleRenderer | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._config = config
        self._policy = config.policy
        self._database = database
        self._order = order
        self._style_renderer = style_renderer
        self._no_date = locale_terms(config.locale).no_date
        self._emitter = emitter or LoggingEmitter()

    def render(self, macro: CitationMacro) -> str:
        """Return the replacement text for *macro*."""
        if self._config.output.is_typesetting:
            return self._render_typesetting(macro)

        fragments: list[str] = []
        for item in macro.items:
            fragment = self._render_item(macro, item)
            if self._config.links:
                fragment = f"<<{item.key},{fragment}>>"
            fragments.append(fragment)

        joiner = f"{self._policy.separator} "
        if self._policy.numeric and not self._config.links:
            body = combine_consecutive_numbers(fragments, joiner=joiner)
        else:
            body = joiner.join(fragments)
        return self._include_pretext(body, macro)

    def with_pp(self, locator: str) -> str:
        """Annotate a locator with ``p.``/``pp.`` as the style requires."""
        if not locator:
            return ""
        if self._policy.bare_locators:
            return locator
        if "-" in locator:
            return f"pp. {locator}"
        return f"p. {locator}"

    def page_str(self, item: CitationItem) -> str:
        """Return the locator suffix appended to a citation fragment."""
        if not item.locator:
            return ""
        return f", {self.with_pp(item.locator)}"

    def _render_item(self, macro: CitationMacro, item: CitationItem) -> str:
        entry = self._database.lookup(item.key)
        if entry is None:
            error = UnknownReferenceError(item.key)
            if self._config.throw_on_unknown:
                raise error
            self._emitter.warning(str(error))
            return item.key

        if self._policy.numeric:
            text = f"{self._order.index(item.key)}{self.page_str(item)}"
        else:
            try:
                text = self._styled_fragment(item.key, macro.type)
            except StyleRenderError as exc:
                self._emitter.warning(str(exc), exc)
                return item.key
            suffix = self.page_str(item)
            anchor = entry.year or self._no_date
            if macro.type.narrative and suffix and anchor in text:
                # Only the first occurrence of the year or no-date term receives the locator.
                text = text.replace(anchor, f"{anchor}{suffix}", 1)
            else:
                text = f"{text}{suffix}"

        if self._config.links:
            text = text.replace(",", ESCAPED_COMMA)
        return text

    def _styled_fragment(self, key: str, citation_type: CitationType) -> str:
        if self._style_renderer is None:
            raise StyleRenderError(key, "no style renderer configured")
        return self._style_renderer.render_citation(key, narrative=citation_type.narrative)

    def _include_pretext(self, body: str, macro: CitationMacro) -> str:
        pretext = f"{macro.pretext} " if macro.pretext else ""
        opening, closing = self._policy.brackets
        if self._policy.numeric:
            return f"{pretext}{opening}{body}{closing}"
        if macro.type is CitationType.CITE:
            return f"{opening}{pretext}{body}{closing}"
        return f"{pretext}{body}"

    def _render_typesetting(self, macro: CitationMacro) -> str:
        commands: list[str] = []
        for item in macro.items:
            command = f"\\{self._latex_command(macro.type)}"
            if item.locator:
                command += f"[p. {item.locator}]"
            commands.append(f"{command}{{{item.key}}}")
        pretext = f"{macro.pretext} " if macro.pretext else ""
        return f"{pretext}+++{','.join(commands)}+++"

    def _latex_command(self, citation_type: CitationType) -> str:
        # Only biblatex provides distinct narrative and parenthetical commands.
        if self._config.output is OutputTarget.BIBLATEX:
            return "textcite" if citation_type.narrative else "parencite"
        return "cite"


__all__ = ["ESCAPED_COMMA", "CitationRenderer", "combine_consecutive_numbers"]

"""Style renderer built on pybtex formatting styles."""

from __future__ import annotations

import logging

from pybtex.backends import BaseBackend
from pybtex.exceptions import PybtexError
from pybtex.plugin import find_plugin
from pybtex.style.formatting import BaseStyle

from citesmith.core.bibliography.collection import BibliographyCollection
from citesmith.core.bibliography.names import join_surnames
from citesmith.core.exceptions import ConfigurationError, StyleRenderError
from citesmith.core.locale import LOCALE_TERMS, LocaleTerms, locale_terms
from citesmith.core.styles import StylePolicy

from .backend import AsciiDocBackend
from .styles import AUTHOR_YEAR_STYLES


logger = logging.getLogger(__name__)


class PybtexStyleRenderer:
    """Render citations and bibliography entries for one style and locale.

    Bibliography entries are produced by the formatting style named in the
    policy: one of `AUTHOR_YEAR_STYLES`, or else a pybtex formatting plugin.
    Author-date citation fragments are assembled from the entry's author (or
    editor) surnames and year.
    """

    def __init__(
        self,
        collection: BibliographyCollection,
        policy: StylePolicy,
        locale: str = "en-US",
        *,
        backend: BaseBackend | None = None,
    ) -> None:
        self._collection = collection
        self._policy = policy
        self._terms = locale_terms(locale)
        self._backend = backend or AsciiDocBackend()
        self._style = self._load_style(policy.formatting_style)
        self._data = collection.to_bibliography_data()
        self._bibliography_cache: dict[str, str] = {}

    def _load_style(self, name: str) -> BaseStyle:
        author_year = AUTHOR_YEAR_STYLES.get(name)
        if author_year is not None:
            return author_year(no_date=self._terms.no_date)
        try:
            style_cls = find_plugin("pybtex.style.formatting", name)
        except PybtexError as exc:
            raise ConfigurationError(f"Formatting style '{name}' is not available: {exc}") from exc
        return style_cls()

    @property
    def policy(self) -> StylePolicy:
        return self._policy

    def render_citation(self, key: str, *, narrative: bool = False) -> str:
        entry = self._collection.lookup(key)
        if entry is None:
            raise StyleRenderError(key, "reference not found")

        names = join_surnames(
            entry.names,
            conjunction=self._terms.conjunction,
            et_al=self._terms.et_al,
            et_al_min=self._policy.et_al_min,
        )
        year = entry.year or self._terms.no_date
        if not names:
            names = key
        if narrative:
            return f"{names} ({year})"
        return f"{names}{self._policy.year_separator}{year}"

    def render_bibliography(self, key: str) -> str:
        cached = self._bibliography_cache.get(key)
        if cached is not None:
            return cached
        if key not in self._data.entries:
            raise StyleRenderError(key, "reference not found")

        try:
            formatted = self._style.format_bibliography(self._data, citations=[key])
            matches = [item for item in formatted if item.key.lower() == key.lower()]
            if not matches:
                raise StyleRenderError(key, "formatter returned no entry")
            text = matches[0].text.render(self._backend)
        except (PybtexError, KeyError) as exc:
            raise StyleRenderError(key, str(exc) or type(exc).__name__) from exc

        logger.debug("rendered bibliography entry %s with %s", key, self._policy.formatting_style)
        self._bibliography_cache[key] = text
        return text


__all__ = ["LOCALE_TERMS", "LocaleTerms", "PybtexStyleRenderer", "locale_terms"]

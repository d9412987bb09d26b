"""pybtex-backed implementation of the style-rendering collaborator."""

from __future__ import annotations

from .backend import AsciiDocBackend
from .renderer import LOCALE_TERMS, LocaleTerms, PybtexStyleRenderer, locale_terms
from .styles import AUTHOR_YEAR_STYLES, ApaStyle, AuthorYearStyle


__all__ = [
    "AUTHOR_YEAR_STYLES",
    "LOCALE_TERMS",
    "ApaStyle",
    "AsciiDocBackend",
    "AuthorYearStyle",
    "LocaleTerms",
    "PybtexStyleRenderer",
    "locale_terms",
]

"""Locale-dependent words of author-date citations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class LocaleTerms:
    """Connective words used in author-date citations."""

    conjunction: str
    et_al: str
    no_date: str


LOCALE_TERMS: Mapping[str, LocaleTerms] = MappingProxyType(
    {
        "en": LocaleTerms(conjunction="and", et_al="et al.", no_date="n.d."),
        "fr": LocaleTerms(conjunction="et", et_al="et al.", no_date="s. d."),
        "de": LocaleTerms(conjunction="und", et_al="et al.", no_date="o. J."),
        "es": LocaleTerms(conjunction="y", et_al="et al.", no_date="s. f."),
    }
)


def locale_terms(locale: str) -> LocaleTerms:
    """Return the terms for the language subtag of *locale*, defaulting to English."""
    language = locale.replace("_", "-").split("-", 1)[0].strip().lower()
    return LOCALE_TERMS.get(language, LOCALE_TERMS["en"])


__all__ = ["LOCALE_TERMS", "LocaleTerms", "locale_terms"]

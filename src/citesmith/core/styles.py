"""Citation style classification table.

Every style the processor understands is declared once in `STYLES`. A
`StylePolicy` answers the questions the renderer and the bibliography
builder need: is the style numeric, how are items separated, which brackets
surround a citation group, and how author-date fragments are assembled.

`formatting_style`
: Name of the pybtex formatting style used for full bibliography entries.
  Numeric styles use the pybtex plugins `plain` and `unsrt`; author-date
  styles use `author-year` or `author-year-apa`, which lead each entry with
  the inverted author names and the year.

`year_separator`
: Text placed between the author names and the year of an author-date
  citation (`Smith 2010` vs. `Smith, 2010`).

`bare_locators`
: Chicago-family styles print locators as given, without `p.`/`pp.`.

`et_al_min`
: Number of authors from which only the first one is printed, followed by
  "et al.".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class StylePolicy:
    """Static rendering conventions attached to a citation style."""

    name: str
    numeric: bool
    formatting_style: str = "plain"
    year_separator: str = " "
    bare_locators: bool = False
    et_al_min: int = 3

    @property
    def separator(self) -> str:
        """Return the item-to-item separator."""
        return "," if self.numeric else ";"

    @property
    def brackets(self) -> tuple[str, str]:
        """Return the opening and closing glyphs of a citation group."""
        return ("[", "]") if self.numeric else ("(", ")")


def _table(policies: Iterable[StylePolicy]) -> Mapping[str, StylePolicy]:
    return MappingProxyType({policy.name: policy for policy in policies})


STYLES: Mapping[str, StylePolicy] = _table(
    [
        StylePolicy("ieee", numeric=True, formatting_style="unsrt"),
        StylePolicy("vancouver", numeric=True, formatting_style="unsrt", et_al_min=7),
        StylePolicy("nature", numeric=True, formatting_style="unsrt", et_al_min=6),
        StylePolicy("acm", numeric=True, formatting_style="plain"),
        StylePolicy("unsrt", numeric=True, formatting_style="unsrt"),
        StylePolicy("plain", numeric=True, formatting_style="plain"),
        StylePolicy(
            "apa",
            numeric=False,
            formatting_style="author-year-apa",
            year_separator=", ",
            et_al_min=3,
        ),
        StylePolicy("harvard", numeric=False, formatting_style="author-year", et_al_min=4),
        StylePolicy(
            "chicago-author-date",
            numeric=False,
            formatting_style="author-year",
            bare_locators=True,
            et_al_min=4,
        ),
        StylePolicy(
            "chicago-note-bibliography",
            numeric=False,
            formatting_style="author-year",
            bare_locators=True,
            et_al_min=4,
        ),
        StylePolicy("mla", numeric=False, formatting_style="author-year", et_al_min=3),
    ]
)


def normalise_style_name(name: str) -> str:
    """Return the lookup form of a style identifier."""
    return name.strip().lower()


def get_style(name: str) -> StylePolicy:
    """Return the policy registered for *name*."""
    policy = STYLES.get(normalise_style_name(name))
    if policy is None:
        known = ", ".join(sorted(STYLES))
        raise ConfigurationError(f"Unknown citation style '{name}'. Known styles: {known}.")
    return policy


def is_numeric(name: str) -> bool:
    """Return whether *name* designates a numeric citation style."""
    return get_style(name).numeric


def separator(name: str) -> str:
    """Return the item separator used by *name*."""
    return get_style(name).separator


__all__ = [
    "STYLES",
    "StylePolicy",
    "get_style",
    "is_numeric",
    "normalise_style_name",
    "separator",
]

"""Author-year formatting styles for pybtex.

pybtex ships numeric styles only (`plain`, `unsrt`, `alpha`), which print the
given names first and the year last. Author-date citation styles need the
reference list to start with the inverted author names and the year, so the
entry a reader looks up matches the ``Smith 2010`` printed in the text::

    Smith, D. 2010. Book Title. Mahwah, NJ: Lawrence Erlbaum.
    Smith, D. (2010). Book Title. Mahwah, NJ: Lawrence Erlbaum.

The second form is used by APA.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pybtex.style import FormattedEntry
from pybtex.style.formatting import BaseStyle, toplevel
from pybtex.style.formatting.unsrt import dashify
from pybtex.style.template import (
    field,
    first_of,
    join,
    names,
    optional,
    sentence,
)


class AuthorYearStyle(BaseStyle):
    """Reference list entries led by ``Last, First. Year.``"""

    default_name_style = "lastfirst"
    default_label_style = "number"
    default_sorting_style = "none"

    def __init__(self, *, no_date: str = "n.d.", **kwargs) -> None:
        super().__init__(**kwargs)
        self.no_date = no_date

    def format_entry(self, label, entry, bib_data=None):
        # Entry types without a dedicated template use the generic one.
        get_template = getattr(self, f"get_{entry.type}_template", self.get_misc_template)
        context = {"entry": entry, "style": self, "bib_data": bib_data}
        return FormattedEntry(entry.key, get_template(entry).format_data(context), label)

    def format_contributors(self, e):
        if "author" in e.persons:
            return names("author", sep=", ", sep2=" and ", last_sep=", and ")
        if "editor" in e.persons:
            role = "eds." if len(e.persons["editor"]) > 1 else "ed."
            return join(sep=", ")[names("editor", sep=", ", sep2=" and ", last_sep=", and "), role]
        return optional[field("organization")]

    def format_year(self, e):
        return first_of[optional[field("year")], self.no_date]

    def format_head(self, e):
        return sentence(sep=" ")[self.format_contributors(e), self.format_year(e)]

    def format_publisher(self, e):
        return optional[sentence[join(sep=": ")[optional[field("address")], field("publisher")]]]

    def get_article_template(self, e):
        return toplevel[
            self.format_head(e),
            sentence[field("title")],
            sentence[
                field("journal"),
                optional[field("volume")],
                optional[field("pages", apply_func=dashify)],
            ],
        ]

    def get_book_template(self, e):
        return toplevel[
            self.format_head(e),
            sentence[field("title")],
            self.format_publisher(e),
        ]

    def get_inproceedings_template(self, e):
        return toplevel[
            self.format_head(e),
            sentence[field("title")],
            sentence[
                join(sep=" ")["In", field("booktitle")],
                optional[field("pages", apply_func=dashify)],
            ],
            self.format_publisher(e),
        ]

    def get_misc_template(self, e):
        return toplevel[
            self.format_head(e),
            optional[sentence[field("title")]],
            optional[sentence[field("howpublished")]],
            self.format_publisher(e),
            optional[sentence[field("note")]],
        ]


class ApaStyle(AuthorYearStyle):
    """Author-year entries with the year in parentheses."""

    def format_year(self, e):
        return join["(", super().format_year(e), ")"]


AUTHOR_YEAR_STYLES: Mapping[str, type[AuthorYearStyle]] = MappingProxyType(
    {
        "author-year": AuthorYearStyle,
        "author-year-apa": ApaStyle,
    }
)


__all__ = ["AUTHOR_YEAR_STYLES", "ApaStyle", "AuthorYearStyle"]

"""Name helpers shared by sorting and author-date labels."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pybtex.database import Person
from pybtex.richtext import Text


def decode_latex(value: str) -> str:
    """Return *value* with LaTeX escapes decoded and grouping braces removed."""
    if not value:
        return ""
    return Text.from_latex(value).render_as("text")


def surname(person: Person) -> str:
    """Return the printable family name of *person*, including particles."""
    parts = [*person.prelast_names, *person.last_names]
    return decode_latex(" ".join(parts))


def sort_name(person: Person) -> str:
    """Return the ``LAST, FIRST`` sort token for *person*.

    Grouping braces are stripped and the result is uppercased so that the
    ordering is case-insensitive.
    """
    last = " ".join([*person.prelast_names, *person.last_names])
    first = " ".join([*person.first_names, *person.middle_names])
    token = f"{last}, {first}" if first else last
    return token.upper().replace("{", "").replace("}", "")


def sort_names(persons: Iterable[Person]) -> tuple[str, ...]:
    """Return the sort tokens of several persons, preserving their order."""
    return tuple(sort_name(person) for person in persons)


def join_surnames(
    persons: Sequence[Person],
    *,
    conjunction: str,
    et_al: str,
    et_al_min: int,
) -> str:
    """Format the author part of an author-date citation."""
    names = [surname(person) for person in persons]
    if not names:
        return ""
    if len(names) >= et_al_min:
        return f"{names[0]} {et_al}"
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} {conjunction} {names[-1]}"


__all__ = ["decode_latex", "join_surnames", "sort_name", "sort_names", "surname"]

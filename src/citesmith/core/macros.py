"""Inline citation macro parsing.

Citations are written as ``cite:[key]`` or ``citenp:[key]``. A pretext may
sit between the colon and the opening bracket, and several items are
separated by commas, each optionally carrying a locator in parentheses::

    cite:see[Lane12a(59-60), Lane08]
    citenp:[Smith10(12)]

Malformed macros, such as an unterminated bracket, are left untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
import re


_ITEM_PATTERN = r"[^\s,()\[\]]+(?:\([^()\[\]]*\))?"
_MACRO_RE = re.compile(
    r"(?<!\w)(?P<type>citenp|cite):(?P<pretext>(?:[^\s\[\]:][^\[\]:\n]*)?)"
    rf"\[(?P<items>\s*{_ITEM_PATTERN}(?:\s*,\s*{_ITEM_PATTERN})*\s*)\]"
)
_ITEM_RE = re.compile(r"(?P<key>[^\s,()\[\]]+)(?:\((?P<locator>[^()\[\]]*)\))?")


class CitationType(str, Enum):
    """Closed set of citation macro kinds."""

    CITE = "cite"
    CITENP = "citenp"

    @property
    def narrative(self) -> bool:
        """Return whether the citation reads as part of the sentence."""
        return self is CitationType.CITENP


@dataclass(frozen=True, slots=True)
class CitationItem:
    """A single cited key with its optional locator."""

    key: str
    locator: str = ""

    @property
    def ref(self) -> str:
        """Return the item as written in the source."""
        if self.locator:
            return f"{self.key}({self.locator})"
        return self.key


@dataclass(frozen=True, slots=True)
class CitationMacro:
    """One citation macro occurrence found in a line of text."""

    type: CitationType
    pretext: str
    items: tuple[CitationItem, ...]
    text: str
    start: int
    end: int

    @property
    def keys(self) -> list[str]:
        """Return the cited keys in source order."""
        return [item.key for item in self.items]


def _parse_items(payload: str) -> tuple[CitationItem, ...]:
    items: list[CitationItem] = []
    for match in _ITEM_RE.finditer(payload):
        locator = match.group("locator") or ""
        items.append(CitationItem(key=match.group("key"), locator=locator.strip()))
    return tuple(items)


def extract_macros(line: str) -> Iterator[CitationMacro]:
    """Yield the citation macros of *line* from left to right."""
    for match in _MACRO_RE.finditer(line):
        yield CitationMacro(
            type=CitationType(match.group("type")),
            pretext=match.group("pretext").strip(),
            items=_parse_items(match.group("items")),
            text=match.group(0),
            start=match.start(),
            end=match.end(),
        )


def substitute_macros(line: str, replacement: Callable[[CitationMacro], str]) -> str:
    """Return *line* with every macro replaced by ``replacement(macro)``."""
    parts: list[str] = []
    cursor = 0
    for macro in extract_macros(line):
        parts.append(line[cursor : macro.start])
        parts.append(replacement(macro))
        cursor = macro.end
    if not parts:
        return line
    parts.append(line[cursor:])
    return "".join(parts)


__all__ = [
    "CitationItem",
    "CitationMacro",
    "CitationType",
    "extract_macros",
    "substitute_macros",
]

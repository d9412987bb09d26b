"""BibTeX database used to resolve citation keys."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import copy
from dataclasses import dataclass, field
import html
from pathlib import Path
import re
from typing import Any

from pybtex.database import BibliographyData, Entry, Person
from pybtex.database.input import bibtex
from pybtex.exceptions import PybtexError

from ..exceptions import ConfigurationError
from .issues import BibliographyIssue
from .names import sort_names


_PERSON_PARTS = (
    ("first", "first_names"),
    ("middle", "middle_names"),
    ("prelast", "prelast_names"),
    ("last", "last_names"),
    ("lineage", "lineage_names"),
)


@dataclass(slots=True)
class ReferenceEntry:
    """Private copy of a bibliography entry handed out for rendering.

    Mutating an instance never affects the collection it came from.
    """

    key: str
    entry_type: str
    year: str
    fields: dict[str, str] = field(default_factory=dict)
    authors: list[Person] = field(default_factory=list)
    editors: list[Person] = field(default_factory=list)
    entry: Entry | None = None

    @classmethod
    def from_entry(cls, key: str, entry: Entry) -> ReferenceEntry:
        private = copy.deepcopy(entry)
        return cls(
            key=key,
            entry_type=private.type,
            year=str(private.fields.get("year", "")).strip(),
            fields={str(name): str(value) for name, value in private.fields.items()},
            authors=list(private.persons.get("author", [])),
            editors=list(private.persons.get("editor", [])),
            entry=private,
        )

    @property
    def names(self) -> list[Person]:
        """Return the authors, falling back to the editors."""
        return self.authors or self.editors

    @property
    def sort_key(self) -> tuple[tuple[str, ...], str]:
        """Return the ``(names, year)`` ordering key used by sorted styles."""
        return sort_names(self.names), self.year


class BibliographyCollection:
    """Reference database merged from one or more BibTeX sources.

    The first definition of a key wins. A later definition with different
    content is ignored and reported through `issues`.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self._sources: dict[str, list[Path]] = {}
        self._issues: list[BibliographyIssue] = []
        self._counts: dict[Path, int] = {}

    @classmethod
    def from_file(cls, path: Path | str) -> BibliographyCollection:
        """Load a single database file, failing loudly when it is unusable."""
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(f"File '{file_path}' is not found")
        collection = cls()
        try:
            collection.load_file(file_path, strict=True)
        except (OSError, PybtexError) as exc:
            raise ConfigurationError(f"Failed to parse '{file_path}': {exc}") from exc
        return collection

    @property
    def issues(self) -> Sequence[BibliographyIssue]:
        return tuple(self._issues)

    @property
    def file_stats(self) -> Sequence[tuple[Path, int]]:
        """Return ``(source, entry_count)`` pairs in load order."""
        return tuple(self._counts.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def load_files(self, files: Iterable[Path | str]) -> None:
        for file_path in files:
            self.load_file(Path(file_path))

    def load_file(self, file_path: Path, *, strict: bool = False) -> None:
        """Parse *file_path*; parse failures are recorded unless *strict*."""
        source = file_path.resolve()
        try:
            data = bibtex.Parser().parse_file(str(source))
        except (OSError, PybtexError) as exc:
            if strict:
                raise
            self._counts[source] = 0
            self._report(f"Failed to parse '{source}': {exc}", source=source)
            return
        self._add(data, source, empty_message="No references found in file.")

    def load_data(self, data: BibliographyData, *, source: Path | str | None = None) -> None:
        """Merge pre-parsed bibliography data into the collection."""
        origin = Path(source) if source is not None else Path("inline-bibliography.bib")
        self._add(data, origin, empty_message="No references found in inline bibliography data.")

    def lookup(self, reference_key: str) -> ReferenceEntry | None:
        """Return a private copy of the entry registered under *reference_key*."""
        entry = self._entries.get(reference_key)
        if entry is None:
            return None
        return ReferenceEntry.from_entry(reference_key, entry)

    def find(self, reference_key: str) -> dict[str, Any] | None:
        """Return a plain-data view of *reference_key*, or ``None``."""
        entry = self._entries.get(reference_key)
        if entry is None:
            return None
        return {
            "key": reference_key,
            "type": entry.type,
            "fields": dict(entry.fields.items()),
            "persons": {
                role: [_person_payload(person) for person in persons]
                for role, persons in entry.persons.items()
            },
            "source_files": [str(path) for path in self._sources[reference_key]],
        }

    def to_bibliography_data(self, *, keys: Iterable[str] | None = None) -> BibliographyData:
        """Return the pybtex data of the selected keys (all keys by default)."""
        selected = self._entries if keys is None else [key for key in keys if key in self]
        return BibliographyData(entries={key: self._entries[key] for key in selected})

    def _add(self, data: BibliographyData, source: Path, *, empty_message: str) -> None:
        self._counts[source] = self._counts.get(source, 0) + len(data.entries)
        if not data.entries:
            self._report(empty_message, source=source)
            return

        for key, entry in data.entries.items():
            _sanitize_entry(entry)
            existing = self._entries.get(key)
            if existing is None:
                self._entries[key] = entry
                self._sources[key] = [source]
                continue
            if _signature(existing) != _signature(entry):
                self._report(
                    "Duplicate entry conflicts with an existing reference; "
                    "ignoring the newer definition.",
                    key=key,
                    source=source,
                )
            if source not in self._sources[key]:
                self._sources[key].append(source)

    def _report(self, message: str, *, key: str | None = None, source: Path | None = None) -> None:
        self._issues.append(BibliographyIssue(message=message, key=key, source=source))


def _person_payload(person: Person) -> dict[str, Any]:
    payload: dict[str, Any] = {
        name: [str(part) for part in getattr(person, attribute)]
        for name, attribute in _PERSON_PARTS
    }
    payload["text"] = str(person)
    return payload


def _signature(entry: Entry) -> tuple[Any, ...]:
    persons = tuple(
        (role, tuple(str(person) for person in people))
        for role, people in sorted(entry.persons.items())
    )
    return entry.type, tuple(sorted(entry.fields.items())), persons


_HTML_TAG_RE = re.compile(r"<[^>]+?>")
_MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


def _sanitize_entry(entry: Entry) -> None:
    for name, value in list(entry.fields.items()):
        if name.lower() == "month":
            month = _month_number(value)
            if month is not None:
                entry.fields[name] = month
                continue
        cleaned = _sanitize_field_text(value, name=name)
        if cleaned != value:
            entry.fields[name] = cleaned


def _sanitize_field_text(value: str, *, name: str) -> str:
    """Strip HTML tags and entities that leak into exported BibTeX."""
    if "<" in value and ">" in value:
        value = _HTML_TAG_RE.sub("", value)
    value = html.unescape(value)
    if name.lower() in {"url", "doi"}:
        value = value.replace(r"\_", "_")
    return value


def _month_number(value: str) -> str | None:
    """Return the two-digit month for names, abbreviations and numbers."""
    candidate = value.strip().strip("{}\"'").lower()
    if candidate.isdigit():
        number = int(candidate)
        return f"{number:02d}" if 1 <= number <= 12 else None
    if len(candidate) < 3:
        return None
    for number, name in enumerate(_MONTHS, start=1):
        if name.startswith(candidate):
            return f"{number:02d}"
    return None

"""Reference ordering shared by numeric citations and the bibliography."""

from __future__ import annotations

from .bibliography.collection import BibliographyCollection
from .config import ProcessorConfig
from .context import CitationState
from .exceptions import CitationError


SortKey = tuple[tuple[str, ...], str]


class CitationOrder:
    """Resolve the ordering sequence of cited references.

    Numeric styles configured for appearance order follow `CitationState`
    directly. Every other configuration sorts the cited keys by uppercased
    author (or editor) names and year; keys missing from the database sort
    by their own text. The sort is stable, so ties keep appearance order.
    """

    def __init__(
        self,
        config: ProcessorConfig,
        database: BibliographyCollection,
        state: CitationState,
    ) -> None:
        self._config = config
        self._database = database
        self._state = state
        self._cached_size: int | None = None
        self._keys: list[str] = []
        self._positions: dict[str, int] = {}

    def sort_key(self, key: str) -> SortKey:
        """Return the alphabetical ordering key of *key*."""
        entry = self._database.lookup(key)
        if entry is None:
            return (key.upper(),), ""
        return entry.sort_key

    def keys(self) -> list[str]:
        """Return the cited keys in bibliography order."""
        self._refresh()
        return list(self._keys)

    def index(self, key: str) -> int:
        """Return the 1-based number of *key* in the ordering sequence."""
        self._refresh()
        position = self._positions.get(key)
        if position is None:
            raise CitationError(
                f"Citation '{key}' was not collected before rendering; "
                "harvest every line of the document first."
            )
        return position + 1

    def _refresh(self) -> None:
        # The state is append-only, so its size identifies its content.
        if self._cached_size == len(self._state):
            return
        if self._config.ordered_by_appearance:
            keys = list(self._state)
        else:
            keys = sorted(self._state, key=self.sort_key)
        self._keys = keys
        self._positions = {key: position for position, key in enumerate(keys)}
        self._cached_size = len(self._state)


__all__ = ["CitationOrder"]

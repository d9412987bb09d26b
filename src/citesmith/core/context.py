"""Citation state accumulated while scanning a document."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class CitationState:
    """Distinct cited keys in order of first appearance."""

    citations: list[str] = field(default_factory=list)
    _citation_index: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        keys = list(self.citations)
        self.citations = []
        self.record_citations(keys)

    def record_citation(self, key: str) -> None:
        """Track a citation key, ignoring repeats."""
        if key in self._citation_index:
            return
        self._citation_index[key] = len(self.citations)
        self.citations.append(key)

    def record_citations(self, keys: Iterable[str]) -> None:
        """Track several citation keys in order."""
        for key in keys:
            self.record_citation(key)

    def position(self, key: str) -> int | None:
        """Return the 0-based first-appearance position of *key*."""
        return self._citation_index.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._citation_index

    def __iter__(self) -> Iterator[str]:
        return iter(self.citations)

    def __len__(self) -> int:
        return len(self.citations)


__all__ = ["CitationState"]

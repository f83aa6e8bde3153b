"""Fuzzy search over the corpus.

Each record contributes a handful of short search terms: title, description,
every tag, component key and stage key. A query is scored against each term
and the record keeps its best term. Distances above ``max_distance`` are
dropped; the rest are returned best-first with corpus order breaking ties.

The index holds only those terms plus a reference to the record, never the
prompt payload or context note.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rapidfuzz.distance import Indel

from promptlib.models.prompt import PromptMatch

if TYPE_CHECKING:
    from promptlib.loader import Corpus
    from promptlib.models.prompt import PromptRecord

# Similarity in [0, 100] between a lowercased query and a lowercased term
Scorer = Callable[[str, str], float]

DEFAULT_MAX_DISTANCE = 0.3


def default_scorer(query: str, term: str) -> float:
    """Typo-tolerant similarity, measured in errors per query character.

    The query is aligned against every window of the term whose width is
    within two characters of the query, and the fewest insertions plus
    deletions over those windows wins (a substitution costs two). Similarity
    is ``100 * (1 - edits / len(query))``, floored at 0. "carousel" scores
    100 inside a longer description, "carousl" and "carusel" score ~86, and
    words that only share an ending ("navigation" vs "foundation") score 20.
    A term shorter than every window is compared whole, so a short tag like
    "di" cannot match a long query that happens to contain it.
    """
    size = len(query)
    if not size:
        return 0.0
    edits = size + len(term)
    for width in range(max(size - 2, 1), size + 3):
        if width >= len(term):
            edits = min(edits, Indel.distance(query, term))
            break
        for start in range(len(term) - width + 1):
            edits = min(edits, Indel.distance(query, term[start : start + width]))
            if not edits:
                return 100.0
    return max(0.0, 100.0 * (1.0 - edits / size))


def _terms_for(record: PromptRecord) -> tuple[str, ...]:
    terms = [record.title, record.description, *record.tags, record.component_key, record.stage_key]
    return tuple(t.lower() for t in terms if t)


@dataclass(frozen=True)
class _Entry:
    record: PromptRecord
    terms: tuple[str, ...]


class SearchIndex:
    """Read-only index over one Corpus. Rebuild it whenever the corpus changes."""

    def __init__(
        self,
        entries: tuple[_Entry, ...],
        max_distance: float = DEFAULT_MAX_DISTANCE,
        scorer: Scorer = default_scorer,
    ) -> None:
        self._entries = entries
        self._max_distance = max_distance
        self._scorer = scorer

    @classmethod
    def build(
        cls,
        corpus: Corpus,
        max_distance: float = DEFAULT_MAX_DISTANCE,
        scorer: Scorer = default_scorer,
    ) -> SearchIndex:
        if not 0.0 <= max_distance <= 1.0:
            raise ValueError(f"max_distance must be within [0, 1], got {max_distance}")
        entries = tuple(_Entry(record, _terms_for(record)) for record in corpus)
        return cls(entries, max_distance=max_distance, scorer=scorer)

    @property
    def max_distance(self) -> float:
        return self._max_distance

    def __len__(self) -> int:
        return len(self._entries)

    def query(self, text: str) -> list[PromptMatch]:
        """Ranked matches for ``text``; empty for a blank query. Not capped."""
        needle = text.strip().lower()
        if not needle:
            return []

        matches: list[PromptMatch] = []
        for entry in self._entries:
            best = max((self._scorer(needle, term) for term in entry.terms), default=0.0)
            distance = (100.0 - best) / 100.0
            if distance <= self._max_distance:
                matches.append(PromptMatch(record=entry.record, score=round(1.0 - distance, 4)))

        # sorted() is stable, so equal scores keep corpus order
        return sorted(matches, key=lambda m: m.score, reverse=True)

"""Retrieval façade: the one object editor, HTTP and UI layers talk to.

``PromptLibrary`` owns a ``LibraryState`` holding a Corpus and the
SearchIndex built from it. Reads take one snapshot of that reference, so a
concurrent ``reload`` is never observed half-applied: the new pair is built
off to the side and swapped in with a single assignment.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from promptlib import filters, suggest as suggestions
from promptlib.config import Settings, resolve_dataset_path
from promptlib.errors import NotFoundError
from promptlib.loader import Corpus, category_label, fetch_dataset, load, load_dataset_file
from promptlib.models.prompt import CategoryInfo, StageSummary
from promptlib.search import DEFAULT_MAX_DISTANCE, SearchIndex

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    import httpx

    from promptlib.config import SearchSettings
    from promptlib.models.dataset import StageInfo
    from promptlib.models.prompt import EditorContext, PromptMatch, PromptRecord

log = structlog.get_logger()


@dataclass(frozen=True)
class LibraryState:
    """One consistent (corpus, index) pair."""

    corpus: Corpus
    index: SearchIndex
    by_id: Mapping[str, PromptRecord]
    loaded_at: datetime


def _build_state(corpus: Corpus, max_distance: float) -> LibraryState:
    return LibraryState(
        corpus=corpus,
        index=SearchIndex.build(corpus, max_distance=max_distance),
        by_id={record.id: record for record in corpus},
        loaded_at=datetime.now(UTC),
    )


class PromptLibrary:
    """Read-only retrieval over the currently loaded prompt corpus."""

    def __init__(
        self,
        corpus: Corpus,
        max_distance: float = DEFAULT_MAX_DISTANCE,
        suggestion_limit: int = suggestions.DEFAULT_SUGGESTION_LIMIT,
        related_limit: int = suggestions.DEFAULT_RELATED_LIMIT,
    ) -> None:
        self._max_distance = max_distance
        self._suggestion_limit = suggestion_limit
        self._related_limit = related_limit
        self._state = _build_state(corpus, max_distance)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _with_search_settings(cls, corpus: Corpus, search: SearchSettings) -> PromptLibrary:
        return cls(
            corpus,
            max_distance=search.max_distance,
            suggestion_limit=search.suggestion_limit,
            related_limit=search.related_limit,
        )

    @classmethod
    def from_dataset(cls, data: Mapping[str, Any], **kwargs: Any) -> PromptLibrary:
        return cls(load(data), **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> PromptLibrary:
        return cls(load_dataset_file(path), **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PromptLibrary:
        """Load from the configured dataset file (or the bundled sample)."""
        settings = settings or Settings()
        path = resolve_dataset_path(settings)
        return cls._with_search_settings(load_dataset_file(path), settings.search)

    @classmethod
    async def from_url(
        cls, client: httpx.AsyncClient, url: str, settings: Settings | None = None
    ) -> PromptLibrary:
        settings = settings or Settings()
        corpus = await fetch_dataset(client, url)
        return cls._with_search_settings(corpus, settings.search)

    # ------------------------------------------------------------------
    # Reload
    # ------------------------------------------------------------------

    def reload(self, corpus: Corpus) -> None:
        """Replace the served corpus. Readers see either the old or the new pair."""
        state = _build_state(corpus, self._max_distance)
        previous = self._state
        self._state = state
        log.info(
            "library_reloaded",
            records=len(corpus),
            previous_records=len(previous.corpus),
        )

    def reload_from_file(self, path: str | Path) -> None:
        """Reload from disk. On failure the current corpus keeps being served."""
        self.reload(load_dataset_file(path))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def corpus(self) -> Corpus:
        return self._state.corpus

    @property
    def loaded_at(self) -> datetime:
        return self._state.loaded_at

    def get_all(self) -> list[PromptRecord]:
        return list(self._state.corpus.records)

    def get_by_id(self, prompt_id: str) -> PromptRecord:
        try:
            return self._state.by_id[prompt_id]
        except KeyError:
            raise NotFoundError(f"Prompt {prompt_id!r} not found") from None

    def get_by_category(self, category: str) -> list[PromptRecord]:
        return filters.by_category(self._state.corpus, category)

    def get_by_stage(self, stage_key: str) -> list[PromptRecord]:
        return filters.by_stage(self._state.corpus, stage_key)

    def get_by_component(self, category: str, component_key: str) -> list[PromptRecord]:
        return filters.by_component(self.get_by_category(category), component_key)

    def search(self, text: str) -> list[PromptRecord]:
        return [match.record for match in self._state.index.query(text)]

    def search_with_scores(self, text: str) -> list[PromptMatch]:
        return self._state.index.query(text)

    def suggest(self, context: EditorContext) -> list[PromptRecord]:
        return suggestions.suggest(
            self._state.corpus.records, context, limit=self._suggestion_limit
        )

    def related(self, prompt_id: str, limit: int | None = None) -> list[PromptRecord]:
        state = self._state
        try:
            target = state.by_id[prompt_id]
        except KeyError:
            raise NotFoundError(f"Prompt {prompt_id!r} not found") from None
        return suggestions.related(
            state.corpus.records, target, limit=self._related_limit if limit is None else limit
        )

    # ------------------------------------------------------------------
    # Listings for pickers
    # ------------------------------------------------------------------

    def categories(self) -> list[CategoryInfo]:
        corpus = self._state.corpus
        counts = Counter(record.category for record in corpus)
        return [
            CategoryInfo(
                key=key,
                label=category_label(key),
                component_count=len(component_keys),
                record_count=counts[key],
            )
            for key, component_keys in corpus.components.items()
        ]

    def stages(self) -> list[StageSummary]:
        corpus = self._state.corpus
        counts = Counter(record.stage_key for record in corpus)
        return [
            StageSummary(
                key=key,
                name=stage.name,
                description=stage.description,
                record_count=counts[key],
            )
            for key, stage in corpus.stages.items()
        ]

    def stage(self, stage_key: str) -> StageInfo:
        return self._state.corpus.stage(stage_key)

"""Corpus loading: dataset validation and flattening into PromptRecords.

The dataset is validated against ``RawDataset`` and flattened in a single
pass. Stage keys must resolve in ``sdlc_stages``; a dangling key fails the
whole load rather than dropping the entry. The returned ``Corpus`` is never
mutated afterwards. A reload builds a new one.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import ValidationError

from promptlib.errors import DataIntegrityError, DatasetUnavailableError, ErrorCode, NotFoundError
from promptlib.models.dataset import RawDataset, StageInfo
from promptlib.models.prompt import PromptRecord

if TYPE_CHECKING:
    from promptlib.models.dataset import ComponentSpec

log = structlog.get_logger()

# Emission order for the categories the library ships with. Any other category
# in a dataset follows these, in document order.
KNOWN_CATEGORIES: tuple[str, ...] = (
    "foundation",
    "feature",
    "project",
    "components",
    "testing",
    "styling",
    "sdlc_templates",
)


@dataclass(frozen=True)
class Corpus:
    """Ordered, read-only set of records from one dataset load."""

    records: tuple[PromptRecord, ...] = ()
    stages: Mapping[str, StageInfo] = field(default_factory=lambda: MappingProxyType({}))
    # category key → component keys, in emission order
    components: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self.components)

    def stage(self, key: str) -> StageInfo:
        try:
            return self.stages[key]
        except KeyError:
            raise NotFoundError(
                f"Stage {key!r} is not defined", code=ErrorCode.STAGE_NOT_FOUND
            ) from None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PromptRecord]:
        return iter(self.records)


def category_label(category: str) -> str:
    """Upper-case the first character only: ``sdlc_templates`` → ``Sdlc_templates``."""
    return category[:1].upper() + category[1:]


def _ordered_categories(categories: Mapping[str, Any]) -> list[str]:
    known = [c for c in KNOWN_CATEGORIES if c in categories]
    extra = [c for c in categories if c not in KNOWN_CATEGORIES]
    return known + extra


def parse_dataset(data: Mapping[str, Any]) -> RawDataset:
    """Schema check. Shape violations surface as ``DataIntegrityError``."""
    try:
        return RawDataset.model_validate(data)
    except ValidationError as exc:
        raise DataIntegrityError(f"Invalid prompt dataset: {exc}") from exc


def _build_record(
    category: str, component_key: str, component: ComponentSpec, stage_key: str
) -> PromptRecord:
    entry = component.prompts[stage_key]
    return PromptRecord(
        id=f"{category}-{component_key}-{stage_key}",
        category=category,
        component_key=component_key,
        stage_key=stage_key,
        title=f"{component.name} ({category_label(category)})",
        description=component.description,
        prompt_text=entry.prompt,
        context_note=entry.context,
        tags=(*entry.tags, category),
    )


def build_corpus(dataset: RawDataset) -> Corpus:
    """Flatten a validated dataset into a Corpus. Pure transform."""
    records: list[PromptRecord] = []
    seen_ids: set[str] = set()
    components: dict[str, tuple[str, ...]] = {}

    for category in _ordered_categories(dataset.categories):
        category_components = dataset.categories[category]
        components[category] = tuple(category_components)
        for component_key, component in category_components.items():
            for stage_key in component.prompts:
                if stage_key not in dataset.sdlc_stages:
                    raise DataIntegrityError(
                        f"Component {category}/{component_key} references undefined "
                        f"stage {stage_key!r}"
                    )
                record = _build_record(category, component_key, component, stage_key)
                # Hyphens inside keys can make two triples collide
                if record.id in seen_ids:
                    raise DataIntegrityError(f"Duplicate prompt id {record.id!r}")
                seen_ids.add(record.id)
                records.append(record)

    corpus = Corpus(
        records=tuple(records),
        stages=MappingProxyType(dict(dataset.sdlc_stages)),
        components=MappingProxyType(components),
    )
    log.info(
        "corpus_built",
        records=len(corpus),
        categories=len(components),
        stages=len(corpus.stages),
    )
    return corpus


def load(data: Mapping[str, Any]) -> Corpus:
    """Validate and flatten a raw dataset mapping."""
    return build_corpus(parse_dataset(data))


def load_dataset_file(path: str | Path) -> Corpus:
    """Read a JSON dataset from disk and build its Corpus."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.error("dataset_read_error", path=str(path), exc_info=True)
        raise DatasetUnavailableError(f"Could not read prompt dataset at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise DataIntegrityError(f"Prompt dataset at {path} must be a JSON object")
    log.info("dataset_read", path=str(path))
    return load(data)


async def fetch_dataset(client: httpx.AsyncClient, url: str) -> Corpus:
    """Download a JSON dataset and build its Corpus."""
    try:
        response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        log.warning("dataset_fetch_error", url=url, exc_info=True)
        raise DatasetUnavailableError(f"Could not fetch prompt dataset from {url}: {exc}") from exc
    if not isinstance(data, dict):
        raise DataIntegrityError(f"Prompt dataset from {url} must be a JSON object")
    log.info("dataset_fetched", url=url)
    return load(data)

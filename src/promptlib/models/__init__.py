from __future__ import annotations

from promptlib.models.dataset import (
    ComponentSpec,
    DatasetMetadata,
    PromptEntry,
    RawDataset,
    StageInfo,
)
from promptlib.models.prompt import (
    CategoryInfo,
    EditorContext,
    PromptMatch,
    PromptRecord,
    StageSummary,
)

__all__ = [
    # dataset
    "RawDataset",
    "DatasetMetadata",
    "ComponentSpec",
    "PromptEntry",
    "StageInfo",
    # records
    "PromptRecord",
    "PromptMatch",
    "EditorContext",
    # listings
    "CategoryInfo",
    "StageSummary",
]

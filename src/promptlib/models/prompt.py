from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


class PromptRecord(BaseModel):
    """Flattened, immutable unit served by the library."""

    model_config = ConfigDict(frozen=True)

    id: str  # "{category}-{component_key}-{stage_key}"
    category: str
    component_key: str
    stage_key: str
    title: str
    description: str
    prompt_text: str
    context_note: str
    tags: tuple[str, ...]  # Declared tags followed by the category


class PromptMatch(BaseModel):
    """Search hit. ``score`` is a similarity: 1.0 exact, 0.0 unrelated."""

    model_config = ConfigDict(frozen=True)

    record: PromptRecord
    score: float


class EditorContext(BaseModel):
    """Ambient editor signals used by the suggestion rules."""

    model_config = ConfigDict(frozen=True)

    file_name_lower: str = ""
    file_content_lower: str = ""
    language_id: str = ""

    @classmethod
    def from_editor(cls, file_name: str, content: str, language_id: str) -> EditorContext:
        """Build from raw editor state: basename and content are lowercased."""
        return cls(
            file_name_lower=os.path.basename(file_name).lower(),
            file_content_lower=content.lower(),
            language_id=language_id,
        )


class CategoryInfo(BaseModel):
    key: str
    label: str  # "Foundation", "Sdlc_templates", ...
    component_count: int
    record_count: int


class StageSummary(BaseModel):
    key: str
    name: str
    description: str
    record_count: int

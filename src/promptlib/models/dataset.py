from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class StageInfo(BaseModel):
    """Display data for one lifecycle stage (``sdlc_stages`` entry)."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str


class PromptEntry(BaseModel):
    """One stage-keyed prompt inside a component."""

    prompt: str  # Opaque payload, never interpreted
    context: str = ""
    tags: list[str] = []


class ComponentSpec(BaseModel):
    name: str
    description: str
    prompts: dict[str, PromptEntry]


class DatasetMetadata(BaseModel):
    version: str | None = None
    description: str | None = None
    platform: str | None = None
    architecture: str | None = None
    created: str | None = None
    updated: str | None = None
    author: str | None = None


class RawDataset(BaseModel):
    """Shape of promptData.json: categories → components → stage prompts."""

    metadata: DatasetMetadata | None = None
    categories: dict[str, dict[str, ComponentSpec]]
    sdlc_stages: dict[str, StageInfo]
    component_snippets: dict[str, list[str]] = {}

    @field_validator("categories")
    @classmethod
    def validate_category_keys(
        cls, v: dict[str, dict[str, ComponentSpec]]
    ) -> dict[str, dict[str, ComponentSpec]]:
        for key in v:
            if not key.strip():
                raise ValueError("category key must not be empty")
        return v

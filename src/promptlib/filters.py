"""Exact-match filters. Each preserves input order and chains with the others."""

from __future__ import annotations

from collections.abc import Iterable

from promptlib.models.prompt import PromptRecord


def by_category(records: Iterable[PromptRecord], category: str) -> list[PromptRecord]:
    return [r for r in records if r.category == category]


def by_stage(records: Iterable[PromptRecord], stage_key: str) -> list[PromptRecord]:
    return [r for r in records if r.stage_key == stage_key]


def by_component(records: Iterable[PromptRecord], component_key: str) -> list[PromptRecord]:
    return [r for r in records if r.component_key == component_key]


def by_tag(records: Iterable[PromptRecord], tag: str) -> list[PromptRecord]:
    """Records carrying ``tag``. Every record is also tagged with its category."""
    return [r for r in records if tag in r.tags]

"""Prompt library: load a prompt dataset, search it and suggest prompts."""

from __future__ import annotations

from promptlib.errors import (
    DataIntegrityError,
    DatasetUnavailableError,
    ErrorCode,
    NotFoundError,
    PromptLibError,
)
from promptlib.library import PromptLibrary
from promptlib.loader import Corpus, load
from promptlib.models import EditorContext, PromptMatch, PromptRecord

__all__ = [
    "PromptLibrary",
    "Corpus",
    "load",
    "PromptRecord",
    "PromptMatch",
    "EditorContext",
    "ErrorCode",
    "PromptLibError",
    "DataIntegrityError",
    "DatasetUnavailableError",
    "NotFoundError",
]

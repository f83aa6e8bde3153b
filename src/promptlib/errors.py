"""Error taxonomy for the prompt library.

Every error raised across the public API is a ``PromptLibError`` carrying a
machine-readable ``ErrorCode``. The HTTP façade serialises these with
``to_dict()`` and maps ``NotFoundError`` to 404. Empty search, filter and
suggestion results are never errors.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    DATA_INTEGRITY = "DATA_INTEGRITY"
    DATASET_UNAVAILABLE = "DATASET_UNAVAILABLE"
    PROMPT_NOT_FOUND = "PROMPT_NOT_FOUND"
    STAGE_NOT_FOUND = "STAGE_NOT_FOUND"


class PromptLibError(Exception):
    """Base error. ``recoverable`` tells the caller whether retrying makes sense."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class DataIntegrityError(PromptLibError):
    """The raw dataset is malformed or violates stage-key referential integrity."""

    def __init__(self, message: str) -> None:
        super().__init__(
            ErrorCode.DATA_INTEGRITY,
            message,
            suggestion="Fix the prompt dataset and reload.",
            recoverable=False,
        )


class DatasetUnavailableError(PromptLibError):
    """The dataset could not be read or fetched."""

    def __init__(self, message: str) -> None:
        super().__init__(
            ErrorCode.DATASET_UNAVAILABLE,
            message,
            suggestion="Check the dataset path or URL and try again.",
            recoverable=True,
        )


class NotFoundError(PromptLibError):
    def __init__(self, message: str, code: ErrorCode = ErrorCode.PROMPT_NOT_FOUND) -> None:
        super().__init__(
            code,
            message,
            suggestion="Pick another prompt from the library.",
            recoverable=True,
        )

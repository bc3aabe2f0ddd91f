"""Exceptions raised by the field extractors.

A field error is never fatal for an extraction run: the orchestrator turns
it into a diagnostic and leaves the field empty.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

ErrorKind = Literal["not_found", "no_valid_candidate", "error"]


class AutoSdbError(Exception):
    """Base exception for all auto-sdb errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Field extraction
# =============================================================================


class FieldExtractionError(AutoSdbError):
    """A single field could not be extracted."""

    kind: ErrorKind = "error"

    def __init__(self, field: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.field = field


class FieldNotFoundError(FieldExtractionError):
    """The field's pattern matched nothing in the document."""

    kind: ErrorKind = "not_found"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"could not extract {field}: no match")


class NoValidCandidateError(FieldExtractionError):
    """The pattern matched, but every candidate was filtered out."""

    kind: ErrorKind = "no_valid_candidate"

    def __init__(self, field: str, candidates: int) -> None:
        super().__init__(
            field,
            f"could not extract {field}: no usable value in {candidates} match(es)",
            {"candidates": candidates},
        )

"""auto-sdb Extraction Engine — Pydantic schemas for the extracted SDS fields."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from autosdb.modules.extraction.catalog import STORAGE_CLASSES
from autosdb.modules.extraction.dedup import dedupe
from autosdb.modules.extraction.errors import ErrorKind

SignalWord = Literal["Danger", "Warning"]

# German rendering used by the legacy JSON shape
_LEGACY_SIGNAL_WORDS: dict[str, str] = {
    "Danger": "Gefahr",
    "Warning": "Achtung",
}


# ---------------------------------------------------------------------------
# Main extraction result
# ---------------------------------------------------------------------------


class ExtractionResult(BaseModel):
    """Regulatory fields extracted from one safety data sheet.

    Absent scalars are ``None`` and absent sequences are empty tuples. Serialize with
    ``by_alias=True`` for the camelCase JSON shape, or use
    ``to_legacy_dict()`` for the German-keyed shape of the old frontend.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str | None = Field(None, description="Product / trade name (Bezeichnung), lower-cased")
    signal_word: SignalWord | None = Field(None, description="GHS signal word")
    storage_class: str | None = Field(None, description="Lagerklasse code, e.g. '3', '6.1D', '10-13'")
    h_statements: tuple[str, ...] = Field(
        default_factory=tuple, description="Hazard statements, deduplicated and sorted"
    )
    p_statements: tuple[str, ...] = Field(
        default_factory=tuple, description="Precautionary statements, deduplicated and sorted"
    )
    ghs_codes: tuple[str, ...] = Field(
        default_factory=tuple, description="GHS pictogram codes in document order"
    )
    water_hazard_class: str | None = Field(
        None, pattern=r"^[0-9]$", description="Wassergefährdungsklasse digit"
    )

    @field_validator("storage_class")
    @classmethod
    def _check_storage_class(cls, value: str | None) -> str | None:
        if value is not None and value not in STORAGE_CLASSES:
            raise ValueError(f"unknown storage class: {value!r}")
        return value

    @field_validator("h_statements", "p_statements")
    @classmethod
    def _normalize_statements(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(sorted(dedupe(value)))

    def to_legacy_dict(self) -> dict[str, Any]:
        """Render the original wire shape (German keys, empty strings for absent values)."""
        return {
            "bezeichnung": self.name or "",
            "lagerklasse": self.storage_class or "",
            "signalwort": _LEGACY_SIGNAL_WORDS.get(self.signal_word or "", ""),
            "hSaezte": list(self.h_statements),
            "pSaezte": list(self.p_statements),
            "ghs": list(self.ghs_codes),
            "wgk": self.water_hazard_class or "",
        }


# Every data field of the record; each must be owned by exactly one extractor.
RESULT_FIELDS: tuple[str, ...] = tuple(ExtractionResult.model_fields)


# ---------------------------------------------------------------------------
# Diagnostics + report envelope
# ---------------------------------------------------------------------------


class FieldDiagnostic(BaseModel):
    """Why a field stayed empty."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field: str = Field(..., description="Result field(s) owned by the failing extractor")
    kind: ErrorKind
    message: str


class ExtractionReport(BaseModel):
    """Result record plus the diagnostics collected while building it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    result: ExtractionResult
    diagnostics: list[FieldDiagnostic] = []
    missing_fields: list[str] = Field(
        default_factory=list, description="Result fields left empty by a failed extractor"
    )
    processing_time_ms: int = 0

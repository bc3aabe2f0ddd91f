"""auto-sdb Field Extractors.

Six independent, pure extractors. Each one reads the full SDS text and
returns the value of its own result field(s), or raises a
FieldExtractionError. None of them touches shared state, so the orchestrator
can run them on parallel threads and merge the values afterwards.

  Extractor                    Result field(s)
  ---------------------------  ------------------------------
  extract_name                 name
  extract_signal_word          signal_word
  extract_storage_class        storage_class
  extract_statements           h_statements, p_statements
  extract_ghs_codes            ghs_codes
  extract_water_hazard_class   water_hazard_class
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial
from typing import Any, Literal

from autosdb.modules.extraction.catalog import (
    GHS_RE,
    NAME_KEYWORDS,
    NAME_RE,
    SIGNAL_WORD_RE,
    SIGNAL_WORDS,
    STATEMENT_RE,
    STORAGE_CLASS_NOISE,
    STORAGE_CLASS_RE,
    STORAGE_CLASSES_BY_SPECIFICITY,
    WATER_HAZARD_CLASS_RE,
)
from autosdb.modules.extraction.dedup import dedupe
from autosdb.modules.extraction.errors import FieldNotFoundError, NoValidCandidateError
from autosdb.modules.extraction.schemas import RESULT_FIELDS, SignalWord

WgkPolicy = Literal["first", "last"]

_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Name (Bezeichnung)
# ---------------------------------------------------------------------------


def clean_name_candidate(line: str) -> str:
    """Lower-case a name line and strip keywords, colons and whitespace."""
    candidate = line.lower()
    for keyword in NAME_KEYWORDS:
        candidate = candidate.replace(keyword, "")
    return candidate.replace(":", "").strip()


def extract_name(text: str) -> str:
    """Return the first non-blank line following a name heading.

    A blank candidate is a heading whose value sits on a later line
    ("Produktidentifikator" / "Handelsname: X"), so the search resumes at
    the candidate line and can match it as a heading of its own.
    """
    candidates = 0
    pos = 0
    while (match := NAME_RE.search(text, pos)) is not None:
        candidates += 1
        candidate = clean_name_candidate(match.group("value"))
        if candidate:
            return candidate
        pos = match.start("value")

    if candidates == 0:
        raise FieldNotFoundError("name")
    raise NoValidCandidateError("name", candidates)


# ---------------------------------------------------------------------------
# Signal word (Signalwort)
# ---------------------------------------------------------------------------


def extract_signal_word(text: str) -> SignalWord:
    """Return Danger/Warning from the first signal-word line naming either.

    "gefahr" is checked before "achtung" within one line only; an earlier
    "Achtung" line still wins over a later "Gefahr" line.
    """
    spans = [match.group(0).lower() for match in SIGNAL_WORD_RE.finditer(text)]
    if not spans:
        raise FieldNotFoundError("signal_word")

    for span in spans:
        for keyword, signal_word in SIGNAL_WORDS:
            if keyword in span:
                return signal_word  # type: ignore[return-value]

    raise NoValidCandidateError("signal_word", len(spans))


# ---------------------------------------------------------------------------
# Storage class (Lagerklasse)
# ---------------------------------------------------------------------------


def classify_storage_class(line: str) -> str | None:
    """Map one "Lagerklasse ..." line to a catalog code, or None."""
    cleaned = line.replace(STORAGE_CLASS_NOISE, "")
    cleaned = _WHITESPACE_RE.sub("", cleaned).upper()
    for code in STORAGE_CLASSES_BY_SPECIFICITY:
        if code in cleaned:
            return code
    return None


def extract_storage_class(text: str) -> str:
    lines = [match.group(0) for match in STORAGE_CLASS_RE.finditer(text)]
    if not lines:
        raise FieldNotFoundError("storage_class")

    for line in lines:
        code = classify_storage_class(line)
        if code is not None:
            return code

    raise NoValidCandidateError("storage_class", len(lines))


# ---------------------------------------------------------------------------
# Hazard / precautionary statements (H- und P-Sätze)
# ---------------------------------------------------------------------------


def is_hazard_statement(statement: str) -> bool:
    return "H" in statement.upper()


def extract_statements(text: str) -> tuple[list[str], list[str]]:
    """Return (hazard, precautionary) statements, each deduplicated and sorted.

    Combination statements ("P305 + P351 + P338") stay one entry. A text
    with only H or only P statements is a valid, sparse result.
    """
    statements = [match.group(0).strip() for match in STATEMENT_RE.finditer(text)]
    if not statements:
        raise FieldNotFoundError("h_statements,p_statements")

    hazard: list[str] = []
    precautionary: list[str] = []
    for statement in statements:
        if is_hazard_statement(statement):
            hazard.append(statement)
        else:
            precautionary.append(statement)

    return sorted(dedupe(hazard)), sorted(dedupe(precautionary))


# ---------------------------------------------------------------------------
# GHS pictograms
# ---------------------------------------------------------------------------


def extract_ghs_codes(text: str, deduplicate: bool = False) -> list[str]:
    """Return GHS pictogram codes in document order.

    Repeats are kept unless ``deduplicate`` is set; the list is never sorted.
    """
    codes = [match.group(0).strip() for match in GHS_RE.finditer(text)]
    if not codes:
        raise FieldNotFoundError("ghs_codes")
    if deduplicate:
        return dedupe(codes)
    return codes


# ---------------------------------------------------------------------------
# Water hazard class (WGK)
# ---------------------------------------------------------------------------


def extract_water_hazard_class(text: str, policy: WgkPolicy = "last") -> str:
    """Return the WGK digit; with the default policy the last mention wins."""
    if policy not in ("first", "last"):
        raise ValueError(f"Unsupported WGK policy: {policy}")

    digits = [match.group("value") for match in WATER_HAZARD_CLASS_RE.finditer(text)]
    if not digits:
        raise FieldNotFoundError("water_hazard_class")

    return digits[-1] if policy == "last" else digits[0]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldExtractor:
    """An extractor bound to the result fields it alone may populate."""

    fields: tuple[str, ...]
    func: Callable[[str], Any]

    @property
    def label(self) -> str:
        return ",".join(self.fields)

    def values(self, text: str) -> dict[str, Any]:
        """Run the extractor and key its output by field name."""
        value = self.func(text)
        if len(self.fields) == 1:
            return {self.fields[0]: value}
        return dict(zip(self.fields, value, strict=True))


def build_field_extractors(
    ghs_deduplicate: bool = False,
    wgk_policy: WgkPolicy = "last",
) -> tuple[FieldExtractor, ...]:
    """Build the six extractors, in the order diagnostics are reported."""
    return (
        FieldExtractor(("name",), extract_name),
        FieldExtractor(("signal_word",), extract_signal_word),
        FieldExtractor(("storage_class",), extract_storage_class),
        FieldExtractor(("h_statements", "p_statements"), extract_statements),
        FieldExtractor(("ghs_codes",), partial(extract_ghs_codes, deduplicate=ghs_deduplicate)),
        FieldExtractor(
            ("water_hazard_class",),
            partial(extract_water_hazard_class, policy=wgk_policy),
        ),
    )


def validate_field_ownership(extractors: Iterable[FieldExtractor]) -> None:
    """Check that every result field is owned by exactly one extractor.

    Extractors run concurrently without locks; two of them targeting the
    same field would make the merged record depend on thread timing.
    """
    owners: dict[str, str] = {}
    for extractor in extractors:
        for field_name in extractor.fields:
            if field_name not in RESULT_FIELDS:
                raise ValueError(f"{extractor.label}: unknown result field {field_name!r}")
            if field_name in owners:
                raise ValueError(
                    f"Field {field_name!r} claimed by both {owners[field_name]} and {extractor.label}"
                )
            owners[field_name] = extractor.label

    unowned = [f for f in RESULT_FIELDS if f not in owners]
    if unowned:
        raise ValueError(f"Result fields without an extractor: {unowned}")

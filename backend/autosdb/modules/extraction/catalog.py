"""Pattern catalog for the SDS field extractors.

All patterns are compiled once at import time and never mutated, so the
extractor threads share them without synchronisation. Every pattern is
case-insensitive: the OCR'd text mixes "WGK", "Wgk" and "wgk" freely.
"""

from __future__ import annotations

import re

_FLAGS = re.IGNORECASE | re.MULTILINE

# ---------------------------------------------------------------------------
# Storage classes (Lagerklassen, TRGS 510)
# ---------------------------------------------------------------------------

# Canonical order. Composite and lettered codes come after the plain codes
# they contain, so scanning in reverse finds "10-13" before "13" or "1".
STORAGE_CLASSES: tuple[str, ...] = (
    "1", "2A", "2B", "3",
    "4.1A", "4.1B", "4.2", "4.3",
    "5.1A", "5.1B", "5.1C", "5.2",
    "6.1A", "6.1B", "6.1C", "6.1D", "6.2",
    "7", "8A", "8B",
    "10", "11", "12", "13", "10-13",
)

STORAGE_CLASSES_BY_SPECIFICITY: tuple[str, ...] = tuple(reversed(STORAGE_CLASSES))

# "TRGS 510" is quoted next to the class on most German sheets and would
# otherwise be read as class 5.x / 10.
STORAGE_CLASS_NOISE = "510"

# ---------------------------------------------------------------------------
# Line patterns
# ---------------------------------------------------------------------------

# "Handelsname" / "Produktname" / "Name" / "Produktidentifikator" heading,
# value on the following line.
NAME_RE = re.compile(
    r"(?P<keyword>(?:handels?)?name|produktidentifikator)\s*\n(?P<value>.*)",
    _FLAGS,
)

# Keywords removed from a name candidate (longest first).
NAME_KEYWORDS: tuple[str, ...] = ("produktidentifikator", "produktname", "handelsname")

SIGNAL_WORD_RE = re.compile(r"(?:signalwort|signalwörter)\r?\n?.*", _FLAGS)

SIGNAL_WORDS: tuple[tuple[str, str], ...] = (
    ("gefahr", "Danger"),
    ("achtung", "Warning"),
)

STORAGE_CLASS_RE = re.compile(r"lagerklasse.*", _FLAGS)

# Up to three chained H/P codes, e.g. "H315 + H319", "P305+P351+P338", "EUH066".
STATEMENT_RE = re.compile(r"(?:\s?\+?\s?E?U?[HP][0-9]{3}[a-zA-Z]{0,2}){1,3}", _FLAGS)

GHS_RE = re.compile(r"ghs\s?-?[0-9]{2}", _FLAGS)

WATER_HAZARD_CLASS_RE = re.compile(
    r"(?:wassergefährdungsklasse|wgk)\s+?(?P<value>[0-9])",
    _FLAGS,
)

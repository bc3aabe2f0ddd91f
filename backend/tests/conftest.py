"""Shared test fixtures for the auto-sdb test suite."""

from __future__ import annotations

import pytest

from autosdb.modules.extraction.orchestrator import ExtractionOrchestrator

# Abridged plain-text rendition (gs txtwrite) of a German acetone SDS.
SAMPLE_SDS_TEXT = """\
SICHERHEITSDATENBLATT
gemäß Verordnung (EG) Nr. 1907/2006

ABSCHNITT 1: Bezeichnung des Stoffs bzw. des Gemischs und des Unternehmens
1.1 Produktidentifikator
Handelsname: Aceton technisch
Artikelnummer: 4711

ABSCHNITT 2: Mögliche Gefahren
2.1 Einstufung des Stoffs oder Gemischs
Flam. Liq. 2; H225
Eye Irrit. 2; H319
STOT SE 3; H336
2.2 Kennzeichnungselemente
Gefahrenpiktogramme
GHS02 GHS07
Signalwort
Gefahr
Gefahrenhinweise
H225 Flüssigkeit und Dampf leicht entzündbar.
H319 Verursacht schwere Augenreizung.
H336 Kann Schläfrigkeit und Benommenheit verursachen.
EUH066 Wiederholter Kontakt kann zu spröder oder rissiger Haut führen.
Sicherheitshinweise
P210 Von Hitze, heißen Oberflächen, Funken, offenen Flammen fernhalten. Nicht rauchen.
P233 Behälter dicht verschlossen halten.
P305+P351+P338 BEI KONTAKT MIT DEN AUGEN: Einige Minuten lang behutsam mit Wasser spülen.

ABSCHNITT 7: Handhabung und Lagerung
Lagerklasse (TRGS 510): 3

ABSCHNITT 15: Rechtsvorschriften
Wassergefährdungsklasse 1
WGK 1 (schwach wassergefährdend)
"""


@pytest.fixture
def sample_sds_text() -> str:
    return SAMPLE_SDS_TEXT


@pytest.fixture
def orchestrator() -> ExtractionOrchestrator:
    """Orchestrator with explicit flags so tests don't depend on the environment."""
    return ExtractionOrchestrator(max_workers=6, ghs_deduplicate=False, wgk_policy="last")

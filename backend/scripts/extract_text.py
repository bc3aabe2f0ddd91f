#!/usr/bin/env python3
"""auto-sdb Text Extraction Runner.

Feeds plain-text renditions of safety data sheets (e.g. the output of
``gs -sDEVICE=txtwrite``) through the extraction engine and prints one JSON
document per input on stdout. Logs go to stderr.

Usage:
    # Extract from one or more text files
    python -m scripts.extract_text sds_1.txt sds_2.txt

    # Read from stdin
    gs -sDEVICE=txtwrite -dBATCH -dNOPAUSE -sOutputFile=- sds.pdf | python -m scripts.extract_text

    # Old frontend JSON shape (German keys)
    python -m scripts.extract_text --legacy sds.txt

    # Include per-field diagnostics
    python -m scripts.extract_text --diagnostics sds.txt

    # Deduplicate GHS codes / first WGK mention wins
    python -m scripts.extract_text --ghs-dedupe --wgk-policy first sds.txt
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, TextIO

# Add backend to path for imports
_backend = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_backend))

# Load .env before importing app modules
from dotenv import load_dotenv
load_dotenv(_backend / ".env")

import structlog

from autosdb.core.logging import LOG_LEVELS, configure_logging
from autosdb.modules.extraction.orchestrator import ExtractionOrchestrator
from autosdb.modules.extraction.schemas import ExtractionReport

logger = structlog.get_logger()


def render(
    report: ExtractionReport,
    source: str,
    *,
    legacy: bool = False,
    diagnostics: bool = False,
) -> dict[str, Any]:
    """Build the JSON document printed for one input."""
    if legacy:
        result: dict[str, Any] = report.result.to_legacy_dict()
    else:
        result = report.result.model_dump(mode="json", by_alias=True)

    doc: dict[str, Any] = {"source": source, "result": result}
    if diagnostics:
        doc["diagnostics"] = [d.model_dump(mode="json") for d in report.diagnostics]
        doc["missingFields"] = list(report.missing_fields)
        doc["processingTimeMs"] = report.processing_time_ms
    return doc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="auto-sdb SDS text extraction")
    parser.add_argument("files", nargs="*", type=Path,
                        help="UTF-8 text files (default: read stdin)")
    parser.add_argument("--legacy", action="store_true",
                        help="Print the legacy German-keyed JSON shape")
    parser.add_argument("--diagnostics", action="store_true",
                        help="Include per-field diagnostics")
    parser.add_argument("--ghs-dedupe", action="store_true", default=None,
                        help="Deduplicate GHS pictogram codes")
    parser.add_argument("--wgk-policy", choices=["first", "last"], default=None,
                        help="Which WGK mention wins (default: settings)")
    parser.add_argument("--indent", type=int, default=None,
                        help="Pretty-print JSON with this indent")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="Log level (default: settings)")
    return parser


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    orchestrator = ExtractionOrchestrator(
        ghs_deduplicate=args.ghs_dedupe,
        wgk_policy=args.wgk_policy,
    )

    inputs: list[tuple[str, str]] = []
    if not args.files:
        inputs.append(("<stdin>", (stdin or sys.stdin).read()))
    for path in args.files:
        try:
            inputs.append((str(path), path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not read input", file=str(path), error=str(e))
            return 1

    for source, text in inputs:
        report = orchestrator.run(text)
        doc = render(report, source, legacy=args.legacy, diagnostics=args.diagnostics)
        print(json.dumps(doc, ensure_ascii=False, indent=args.indent))
        logger.info(
            "Extracted",
            source=source,
            missing=len(report.missing_fields),
            duration_ms=report.processing_time_ms,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""auto-sdb Extraction Orchestrator.

Pure Python controller. Fans the field extractors out over a thread pool,
joins on all of them, and merges their values into one record:

    text -> [name | signal word | storage class | H/P | GHS | WGK] -> join
         -> ExtractionResult + diagnostics

A failing extractor never aborts its siblings; its field stays empty and the
failure is reported as a FieldDiagnostic.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import structlog

from autosdb.core.config import settings
from autosdb.modules.extraction.errors import FieldExtractionError
from autosdb.modules.extraction.fields import (
    FieldExtractor,
    WgkPolicy,
    build_field_extractors,
    validate_field_ownership,
)
from autosdb.modules.extraction.schemas import (
    ExtractionReport,
    ExtractionResult,
    FieldDiagnostic,
)

logger = structlog.get_logger()


class ExtractionOrchestrator:
    """Runs all field extractors concurrently and merges their results.

    Arguments left as None fall back to the extraction settings.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        ghs_deduplicate: bool | None = None,
        wgk_policy: WgkPolicy | None = None,
    ) -> None:
        self.max_workers = (
            settings.extraction_max_workers if max_workers is None else max_workers
        )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        self.ghs_deduplicate = (
            settings.extraction_ghs_dedupe if ghs_deduplicate is None else ghs_deduplicate
        )
        self.wgk_policy: WgkPolicy = wgk_policy or settings.extraction_wgk_policy

        self.extractors: tuple[FieldExtractor, ...] = build_field_extractors(
            ghs_deduplicate=self.ghs_deduplicate,
            wgk_policy=self.wgk_policy,
        )
        validate_field_ownership(self.extractors)

    # ------------------------------------------------------------------
    # Single document
    # ------------------------------------------------------------------

    def run(self, text: str | None) -> ExtractionReport:
        """Extract every field from ``text``; never raises for field failures.

        Returns:
            ExtractionReport with the merged result, one diagnostic per
            failed extractor (in registry order) and the fields left empty.
        """
        text = text or ""
        start = time.time()

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="sdb-extract",
        ) as executor:
            futures: list[tuple[FieldExtractor, Future[dict[str, Any]]]] = [
                (extractor, executor.submit(extractor.values, text))
                for extractor in self.extractors
            ]
        # Leaving the executor block is the join barrier.

        values: dict[str, Any] = {}
        diagnostics: list[FieldDiagnostic] = []
        missing: list[str] = []

        for extractor, future in futures:
            try:
                values.update(future.result())
            except FieldExtractionError as e:
                logger.warning(
                    "Field extraction failed",
                    field=extractor.label,
                    kind=e.kind,
                    error=str(e),
                )
                diagnostics.append(
                    FieldDiagnostic(field=extractor.label, kind=e.kind, message=str(e))
                )
                missing.extend(extractor.fields)
            except Exception as e:
                logger.error(
                    "Field extractor crashed",
                    field=extractor.label,
                    error=str(e),
                    exc_info=e,
                )
                diagnostics.append(
                    FieldDiagnostic(
                        field=extractor.label,
                        kind="error",
                        message=f"{type(e).__name__}: {e}",
                    )
                )
                missing.extend(extractor.fields)

        result = ExtractionResult.model_validate(values)
        duration_ms = int((time.time() - start) * 1000)

        logger.info(
            "Extraction complete",
            chars=len(text),
            extracted=len(values),
            missing=len(missing),
            duration_ms=duration_ms,
        )

        return ExtractionReport(
            result=result,
            diagnostics=diagnostics,
            missing_fields=missing,
            processing_time_ms=duration_ms,
        )

    def extract(self, text: str | None) -> ExtractionResult:
        """Extract every field from ``text`` and return only the record."""
        return self.run(text).result

    async def run_async(self, text: str | None) -> ExtractionReport:
        """Run the extraction on a worker thread for async callers."""
        return await asyncio.to_thread(self.run, text)


# ---------------------------------------------------------------------------
# Module-level entry point
# ---------------------------------------------------------------------------

_default_orchestrator: ExtractionOrchestrator | None = None


def get_orchestrator() -> ExtractionOrchestrator:
    """Return the shared orchestrator built from the current settings."""
    global _default_orchestrator
    if _default_orchestrator is None:
        _default_orchestrator = ExtractionOrchestrator()
    return _default_orchestrator


def extract(text: str | None) -> ExtractionResult:
    """Extract the SDS fields from ``text`` with the default orchestrator."""
    return get_orchestrator().extract(text)

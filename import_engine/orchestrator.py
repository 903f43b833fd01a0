"""
import_engine.orchestrator - Top-level upload pipeline.

Coordinates csv_parser → importer → upload-run bookkeeping and produces
a structured UploadReport.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from db.models import RUN_COMPLETED, RUN_FAILED
from import_engine.csv_parser import parse_csv
from import_engine.importer import QuestionImporter
from import_engine.report import RowError, UploadReport
from services.question_store import QuestionStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UploadOrchestrator:
    """
    Owns the UploadRun record for each upload: creates it in
    ``processing`` and finalises it exactly once as ``completed`` or
    ``failed``.
    """

    def __init__(self, store, importer: QuestionImporter | None = None):
        self._store = store
        self._importer = importer or QuestionImporter(store)

    def process(self, filename: str, content: str | bytes, file_size: int) -> UploadReport:
        """
        Run one upload end to end.

        Row-level problems (bad rows, duplicates, rejected writes) are
        reported in the result.  Only run-level failures, e.g. the
        database going away, are raised.
        """
        logger.info("Upload started: %s (%d bytes)", filename, file_size)
        parsed = parse_csv(content)

        # Structural failures always come back with no rows
        if not parsed.rows:
            return self._reject(filename, file_size, parsed.errors)

        run = self._store.create_run(filename, file_size, total_rows=len(parsed.rows))

        try:
            batch = self._importer.import_batch(parsed.rows)

            errors = parsed.errors + batch.errors
            failed = batch.failures + len(parsed.errors)
            self._store.update_run(
                run.id,
                status=RUN_COMPLETED,
                successful_imports=batch.successful_imports,
                failed_imports=failed,
                duplicate_count=batch.duplicates,
                errors=errors,
                completed_at=_now(),
            )
        except Exception as exc:
            logger.exception("Upload %d (%s) aborted", run.id, filename)
            self._mark_failed(run.id, exc)
            raise

        logger.info(
            "Upload %d completed: %d imported, %d duplicates, %d failed",
            run.id, batch.successful_imports, batch.duplicates, failed,
        )
        return UploadReport(
            upload_id=run.id,
            filename=filename,
            total_rows=len(parsed.rows),
            successful_imports=batch.successful_imports,
            failed_imports=failed,
            duplicate_count=batch.duplicates,
            errors=errors,
            status=RUN_COMPLETED,
        )

    # ── Private helpers ────────────────────────────────────────────────

    def _reject(self, filename: str, file_size: int, errors: list[RowError]) -> UploadReport:
        """Nothing importable: record a failed run without touching questions."""
        run = self._store.create_run(filename, file_size, total_rows=0)
        try:
            self._store.update_run(
                run.id,
                status=RUN_FAILED,
                failed_imports=len(errors),
                errors=errors,
                completed_at=_now(),
            )
        except Exception as exc:
            logger.exception("Upload %d (%s) could not be finalised", run.id, filename)
            self._mark_failed(run.id, exc)
            raise
        logger.info("Upload %d failed validation with %d errors", run.id, len(errors))
        return UploadReport(
            upload_id=run.id,
            filename=filename,
            total_rows=0,
            failed_imports=len(errors),
            errors=list(errors),
            status=RUN_FAILED,
        )

    def _mark_failed(self, run_id: int, exc: Exception):
        try:
            self._store.update_run(
                run_id,
                status=RUN_FAILED,
                errors=[RowError(0, str(exc))],
                completed_at=_now(),
            )
        except Exception:
            # Keep the original exception; this one is only logged
            logger.exception("Could not mark upload %d as failed", run_id)


def process_upload(filename: str, content: str | bytes, file_size: int,
                   store: QuestionStore | None = None) -> UploadReport:
    """Convenience wrapper using the default database-backed store."""
    return UploadOrchestrator(store or QuestionStore()).process(filename, content, file_size)

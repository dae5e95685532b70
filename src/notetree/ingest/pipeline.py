from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.orm import sessionmaker

from notetree.ingest.reader import FileTreeReader
from notetree.storage import CorpusEntryRecord, PatientDocCountRecord, ScanRunRecord
from notetree.types import Document

logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    """Downstream consumer of materialized documents, typically an annotation engine."""

    def process(self, document: Document) -> None:
        """Handle one document."""


@dataclass
class ScanStats:
    """High-level counters returned to the CLI and tests."""

    run_id: str | None = None
    documents: int = 0
    errors: int = 0
    patients: int = 0


class CorpusPipeline:
    """
    Drives a `FileTreeReader` to exhaustion and hands each document to a sink.

    Design goals:
    1. Keep the reader's pull protocol intact: one `get_next()` per `has_next()`.
    2. Optionally record the run, its ordered corpus manifest, and the patient counts, so a
       patient-assembly stage can read them without rescanning.
    3. Let unreadable files either abort the run (default) or be logged and skipped.
    """

    def __init__(
        self,
        reader: FileTreeReader,
        sink: DocumentSink,
        session_factory: sessionmaker | None = None,
        *,
        continue_on_error: bool = False,
    ) -> None:
        self.reader = reader
        self.sink = sink
        self.session_factory = session_factory
        self.continue_on_error = continue_on_error

    def run(self) -> ScanStats:
        stats = ScanStats(run_id=str(uuid.uuid4()), patients=len(self.reader.registry))
        run_id = stats.run_id
        if self.session_factory is not None:
            self._start_run_record(run_id)

        logger.info(
            "Starting corpus run",
            extra={
                "run_id": run_id,
                "root": self.reader.root_path,
                "documents_total": self.reader.note_count,
                "continue_on_error": self.continue_on_error,
            },
        )

        final_status = "success"
        fatal_error: Exception | None = None
        error_message: str | None = None

        try:
            while self.reader.has_next():
                try:
                    document = self.reader.get_next()
                except (OSError, UnicodeDecodeError) as exc:
                    stats.errors += 1
                    logger.exception("Failed to read document", extra={"run_id": run_id})
                    if not self.continue_on_error:
                        raise
                    final_status = "partial"
                    error_message = str(exc)
                    continue
                self.sink.process(document)
                stats.documents += 1
        except Exception as exc:
            final_status = "failed"
            fatal_error = exc
            error_message = str(exc)
        finally:
            if self.session_factory is not None:
                self._finish_run_record(
                    run_id=run_id,
                    status=final_status,
                    stats=stats,
                    error_message=error_message,
                )
            logger.info("Corpus run finished", extra={"status": final_status, **stats.__dict__})

        if fatal_error is not None:
            raise fatal_error
        return stats

    def _start_run_record(self, run_id: str) -> None:
        """Write the run row together with the manifest and patient counts the walk produced."""

        with self.session_factory() as session:
            run = ScanRunRecord(
                id=run_id,
                root_path=self.reader.root_path,
                status="running",
                patient_level=self.reader.scan_result.patient_level,
                extensions_json=list(self.reader.config.extensions),
                documents_total=self.reader.note_count,
            )
            session.add(run)
            for position, entry in enumerate(self.reader.entries):
                session.add(
                    CorpusEntryRecord(
                        scan_run_id=run_id,
                        position=position,
                        document_id=entry.document_id,
                        id_prefix=entry.id_prefix,
                        patient_id=entry.patient_id,
                        document_type=entry.document_type,
                        document_time=entry.document_time,
                        path=str(entry.path),
                    )
                )
            for patient_id, count in self.reader.registry.as_dict().items():
                session.add(
                    PatientDocCountRecord(
                        scan_run_id=run_id,
                        patient_id=patient_id,
                        wanted_count=count,
                    )
                )
            session.commit()

    def _finish_run_record(
        self,
        *,
        run_id: str,
        status: str,
        stats: ScanStats,
        error_message: str | None,
    ) -> None:
        with self.session_factory() as session:
            run = session.get(ScanRunRecord, run_id)
            if run is None:
                return
            run.status = status
            run.finished_at = datetime.now(timezone.utc)
            run.documents_read = stats.documents
            run.errors = stats.errors
            run.error_message = error_message
            session.commit()

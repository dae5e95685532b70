from __future__ import annotations

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from notetree.storage.models import Base, CorpusEntryRecord, PatientDocCountRecord


def create_session_factory(database_url: str):
    engine = create_engine(database_url, future=True)
    return sessionmaker(bind=engine, expire_on_commit=False), engine


def init_db(engine) -> None:
    Base.metadata.create_all(engine)


def load_patient_doc_counts(session_factory: sessionmaker, run_id: str) -> dict[str, int]:
    """Wanted document counts recorded for a run, for the patient-assembly stage."""

    with session_factory() as session:
        rows = session.scalars(
            select(PatientDocCountRecord)
            .where(PatientDocCountRecord.scan_run_id == run_id)
            .order_by(PatientDocCountRecord.patient_id)
        )
        return {row.patient_id: row.wanted_count for row in rows}


def load_corpus_entries(session_factory: sessionmaker, run_id: str) -> list[CorpusEntryRecord]:
    with session_factory() as session:
        return list(
            session.scalars(
                select(CorpusEntryRecord)
                .where(CorpusEntryRecord.scan_run_id == run_id)
                .order_by(CorpusEntryRecord.position)
            )
        )

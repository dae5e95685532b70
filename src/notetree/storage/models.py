from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class ScanRunRecord(Base):
    """
    One row per pipeline execution over a corpus root.

    Records when the run started, which options shaped the corpus, and how many documents were
    handed to the sink.
    """

    __tablename__ = "scan_runs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    root_path: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)  # running|success|failed|partial
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), nullable=False
    )
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    patient_level: Mapped[int] = mapped_column(Integer, nullable=False)
    extensions_json: Mapped[list | None] = mapped_column(JSON, nullable=True)
    documents_total: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    documents_read: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    errors: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    entries: Mapped[list[CorpusEntryRecord]] = relationship(
        back_populates="scan_run", cascade="all, delete-orphan", passive_deletes=True
    )
    patient_counts: Mapped[list[PatientDocCountRecord]] = relationship(
        back_populates="scan_run", cascade="all, delete-orphan", passive_deletes=True
    )


class CorpusEntryRecord(Base):
    """A corpus file in walk order, with the identity derived from its path."""

    __tablename__ = "corpus_entries"
    __table_args__ = (
        UniqueConstraint("scan_run_id", "position", name="uq_corpus_entry_run_position"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scan_run_id: Mapped[str] = mapped_column(
        ForeignKey("scan_runs.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    document_id: Mapped[str] = mapped_column(String, nullable=False)
    id_prefix: Mapped[str] = mapped_column(String, nullable=False, default="")
    patient_id: Mapped[str | None] = mapped_column(String, nullable=True)
    document_type: Mapped[str] = mapped_column(String, nullable=False)
    document_time: Mapped[str] = mapped_column(String, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)

    scan_run: Mapped[ScanRunRecord] = relationship(back_populates="entries")


class PatientDocCountRecord(Base):
    """Wanted document count per patient, as published by the walk."""

    __tablename__ = "patient_doc_counts"

    scan_run_id: Mapped[str] = mapped_column(
        ForeignKey("scan_runs.id", ondelete="CASCADE"), primary_key=True
    )
    patient_id: Mapped[str] = mapped_column(String, primary_key=True)
    wanted_count: Mapped[int] = mapped_column(Integer, nullable=False)

    scan_run: Mapped[ScanRunRecord] = relationship(back_populates="patient_counts")

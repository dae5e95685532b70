from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Note type used when a document id carries no `_TYPE` suffix.
CLINICAL_NOTE = "ClinicalNote"


@dataclass(frozen=True, slots=True)
class CorpusEntry:
    path: Path
    document_id: str
    id_prefix: str
    patient_id: str | None
    document_type: str = CLINICAL_NOTE
    document_time: str = ""


@dataclass(slots=True)
class Document:
    """Normalized text plus the identity metadata handed to the annotation engine."""

    text: str
    document_id: str
    id_prefix: str
    document_type: str
    document_time: str
    patient_id: str | None
    path: Path

    @classmethod
    def from_entry(cls, entry: CorpusEntry, text: str, document_time: str | None = None) -> "Document":
        return cls(
            text=text,
            document_id=entry.document_id,
            id_prefix=entry.id_prefix,
            document_type=entry.document_type,
            document_time=entry.document_time if document_time is None else document_time,
            patient_id=entry.patient_id,
            path=entry.path,
        )

from .database import create_session_factory, init_db, load_corpus_entries, load_patient_doc_counts
from .models import Base, CorpusEntryRecord, PatientDocCountRecord, ScanRunRecord

__all__ = [
    "Base",
    "CorpusEntryRecord",
    "PatientDocCountRecord",
    "ScanRunRecord",
    "create_session_factory",
    "init_db",
    "load_corpus_entries",
    "load_patient_doc_counts",
]

"""Deterministic reader for clinical note corpora laid out as directory trees."""

from importlib import metadata

from notetree.config import ScanConfig, Settings
from notetree.context import PatientRegistry, ProgressTracker, ScanContext
from notetree.ingest import CorpusExhaustedError, CorpusPipeline, FileTreeReader, open_corpus
from notetree.types import CLINICAL_NOTE, CorpusEntry, Document

__all__ = [
    "CLINICAL_NOTE",
    "CorpusEntry",
    "CorpusExhaustedError",
    "CorpusPipeline",
    "Document",
    "FileTreeReader",
    "PatientRegistry",
    "ProgressTracker",
    "ScanConfig",
    "ScanContext",
    "Settings",
    "__version__",
    "open_corpus",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("notetree")
        except metadata.PackageNotFoundError:  # pragma: no cover - package not installed yet
            return "0.0.0"
    raise AttributeError(name)

from .pipeline import CorpusPipeline, DocumentSink, ScanStats
from .reader import CorpusExhaustedError, FileTreeReader, open_corpus

__all__ = [
    "CorpusExhaustedError",
    "CorpusPipeline",
    "DocumentSink",
    "FileTreeReader",
    "ScanStats",
    "open_corpus",
]

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from notetree.config import ScanConfig
from notetree.context import PatientRegistry, ScanContext
from notetree.processing.text import TextNormalizer
from notetree.readers import PlainTextReader, TextReader
from notetree.readers.text import UNKNOWN
from notetree.scanning.walker import DirectoryWalker, ScanResult
from notetree.types import CorpusEntry, Document

logger = logging.getLogger(__name__)


class CorpusExhaustedError(RuntimeError):
    """Raised when `get_next` is called after the corpus has been fully read."""


class FileTreeReader:
    """
    Pull-based reader over every document under one root.

    The tree is walked once, in the constructor, so the full ordered corpus and the patient
    document counts are known before the first document is handed out. After that the caller
    alternates `has_next()` and `get_next()`; each `get_next()` reads exactly one file.
    """

    def __init__(
        self,
        config: ScanConfig,
        text_reader: TextReader | None = None,
        context: ScanContext | None = None,
    ) -> None:
        self.config = config
        self.text_reader = text_reader or PlainTextReader(config.encoding)
        self.context = context or ScanContext()
        self.normalizer = TextNormalizer(keep_cr=config.keep_cr, cr_to_space=config.cr_to_space)

        self.walker = DirectoryWalker(config)
        self.scan_result: ScanResult = self.walker.scan()
        self._entries = self.scan_result.entries
        self._cursor = 0
        self.context.publish_patient_counts(self.scan_result.patient_counts)
        self.context.tracker.initialize_progress(self.root_path, len(self._entries))

    @property
    def root_path(self) -> str:
        return str(self.config.root_path)

    @property
    def valid_encoding(self) -> str:
        return self.config.encoding or UNKNOWN

    @property
    def note_count(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[CorpusEntry]:
        return list(self._entries)

    @property
    def registry(self) -> PatientRegistry:
        return self.context.registry

    def has_next(self) -> bool:
        has_next = self._cursor < len(self._entries)
        if not has_next:
            self.context.tracker.update_progress(len(self._entries))
        return has_next

    def get_next(self) -> Document:
        if self._cursor >= len(self._entries):
            raise CorpusExhaustedError(
                f"All {len(self._entries)} documents under {self.root_path} have already been read"
            )
        entry = self._entries[self._cursor]
        self.context.tracker.update_progress(self._cursor)
        self._cursor += 1

        logger.info("Reading %s : %s", entry.document_id, entry.path)
        text = self.normalizer.normalize(self.text_reader.read(entry.path))
        document_time = self.walker.identity.document_time(entry.path)
        document = Document.from_entry(entry, text, document_time)
        logger.info("Finished Reading.", extra={"document_id": entry.document_id})
        return document

    def progress(self) -> tuple[int, int]:
        return self.context.tracker.progress()

    def __iter__(self) -> Iterator[Document]:
        while self.has_next():
            yield self.get_next()


def open_corpus(root: Path, **options) -> FileTreeReader:
    """Build a reader for `root` with the given `ScanConfig` options."""

    return FileTreeReader(ScanConfig(root_path=root, **options))

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from notetree.processing.identity import DocumentIdentity
from notetree.scanning.filters import is_extension_valid, is_hidden
from notetree.scanning.ordering import path_name_key
from notetree.types import CorpusEntry

if TYPE_CHECKING:
    from notetree.config import ScanConfig

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Ordered corpus entries and per-patient document counts for one root."""

    root: Path
    entries: list[CorpusEntry] = field(default_factory=list)
    patient_counts: dict[str, int] = field(default_factory=dict)
    patient_level: int = 1

    def duplicate_document_ids(self) -> dict[str, list[Path]]:
        paths_by_id: dict[str, list[Path]] = {}
        for entry in self.entries:
            paths_by_id.setdefault(entry.document_id, []).append(entry.path)
        return {doc_id: paths for doc_id, paths in paths_by_id.items() if len(paths) > 1}


class DirectoryWalker:
    """
    Depth-first walk of a corpus root.

    Each directory contributes its own files first, then the files of its subdirectories in
    natural name order. The directory found at the patient level names the patient for every
    file beneath it. The order depends only on names, never on filesystem listing order.
    """

    def __init__(self, config: ScanConfig):
        self.config = config
        self.identity = DocumentIdentity(
            config.root_path,
            config.extensions,
            config.document_time_format,
        )

    def scan(self) -> ScanResult:
        root = self.config.root_path
        logger.info(
            "Starting scan",
            extra={
                "root": str(root),
                "extensions": list(self.config.extensions),
                "patient_level": self.config.patient_level,
            },
        )

        if root.is_file():
            # A single file root skips the extension check.
            patient_id = root.parent.name
            result = ScanResult(
                root=root,
                entries=[self.identity.entry_for(root, patient_id)],
                patient_counts={patient_id: 1},
                patient_level=self.config.patient_level,
            )
            self._log_finished(result)
            return result

        children = self._list_children(root)
        if not children:
            result = ScanResult(root=root, patient_level=self.config.patient_level)
            self._log_finished(result)
            return result

        patient_level = self.config.patient_level
        if not any(child.is_dir() for child in children):
            patient_level = 0

        patients: dict[Path, str] = {}
        counts: Counter[str] = Counter()
        files = self._descendant_files(root, 0, patient_level, patients, counts)
        result = ScanResult(
            root=root,
            entries=[self.identity.entry_for(path, patients.get(path)) for path in files],
            patient_counts=dict(counts),
            patient_level=patient_level,
        )
        self._warn_duplicates(result)
        self._log_finished(result)
        return result

    def _descendant_files(
        self,
        directory: Path,
        level: int,
        patient_level: int,
        patients: dict[Path, str],
        counts: Counter[str],
    ) -> list[Path]:
        child_dirs: list[Path] = []
        files: list[Path] = []
        for child in self._list_children(directory):
            if child.is_dir():
                child_dirs.append(child)
            elif is_extension_valid(child, self.config.extensions) and not is_hidden(child):
                files.append(child)
        child_dirs.sort(key=path_name_key)
        files.sort(key=path_name_key)

        descendants = list(files)
        for child_dir in child_dirs:
            descendants.extend(
                self._descendant_files(child_dir, level + 1, patient_level, patients, counts)
            )

        if level == patient_level:
            patient_id = directory.name
            counts[patient_id] += len(descendants)
            for path in descendants:
                patients[path] = patient_id
        return descendants

    @staticmethod
    def _list_children(directory: Path) -> list[Path]:
        try:
            return list(directory.iterdir())
        except OSError:
            logger.warning("Cannot list directory %s; treating it as empty", directory)
            return []

    @staticmethod
    def _warn_duplicates(result: ScanResult) -> None:
        for document_id, paths in result.duplicate_document_ids().items():
            logger.warning(
                "Document id %s is shared by %d files",
                document_id,
                len(paths),
                extra={"paths": [str(path) for path in paths]},
            )

    @staticmethod
    def _log_finished(result: ScanResult) -> None:
        logger.info(
            "Scan finished",
            extra={
                "root": str(result.root),
                "documents": len(result.entries),
                "patients": len(result.patient_counts),
            },
        )

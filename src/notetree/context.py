from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)


class PatientRegistry:
    """
    Wanted document counts per patient for one scan.

    The walker publishes every count once the tree has been fully walked and then freezes the
    registry. A patient-assembly stage downstream only reads it, so it knows how many documents
    to wait for before a patient is complete.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._frozen = False

    def set_wanted_doc_count(self, patient_id: str, count: int) -> None:
        if self._frozen:
            raise RuntimeError(f"Patient registry is frozen; cannot set count for {patient_id!r}")
        if count < 0:
            raise ValueError(f"Document count must be non-negative, got {count}")
        self._counts[patient_id] = count

    def get_wanted_doc_count(self, patient_id: str) -> int:
        return self._counts.get(patient_id, 0)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def patient_ids(self) -> list[str]:
        return list(self._counts)

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, patient_id: object) -> bool:
        return patient_id in self._counts


class ProgressTracker:
    """(current, total) position through a corpus, keyed by the scanned root."""

    def __init__(self) -> None:
        self.key: str | None = None
        self.current = 0
        self.total = 0

    def initialize_progress(self, key: str, total: int) -> None:
        self.key = key
        self.current = 0
        self.total = total
        logger.debug("Progress initialized", extra={"progress_key": key, "total": total})

    def update_progress(self, current: int) -> None:
        self.current = current

    def progress(self) -> tuple[int, int]:
        return self.current, self.total


@dataclass
class ScanContext:
    """Shared state owned by a single scan and handed to downstream collaborators."""

    registry: PatientRegistry = field(default_factory=PatientRegistry)
    tracker: ProgressTracker = field(default_factory=ProgressTracker)

    def publish_patient_counts(self, counts: Mapping[str, int]) -> None:
        for patient_id, count in counts.items():
            self.registry.set_wanted_doc_count(patient_id, count)
        self.registry.freeze()

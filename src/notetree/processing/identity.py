from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Collection

from notetree.types import CLINICAL_NOTE, CorpusEntry

logger = logging.getLogger(__name__)

DEFAULT_TIME_FORMAT = "%Y%m%d%H%M"


def create_document_id(name: str, extensions: Collection[str]) -> str:
    """Return the file name with the longest matching configured extension removed."""

    longest = max((ext for ext in extensions if name.endswith(ext)), key=len, default="")
    if longest:
        return name[: len(name) - len(longest)]
    last_dot = name.rfind(".")
    if last_dot < 0:
        return name
    return name[:last_dot]


def create_document_id_prefix(path: Path, root: Path) -> str:
    """Return the subdirectory path between the root directory and the file."""

    try:
        relative = path.parent.relative_to(root)
    except ValueError:
        return ""
    prefix = str(relative)
    return "" if prefix == "." else prefix


def create_document_type(document_id: str) -> str:
    last_score = document_id.rfind("_")
    if last_score < 0 or last_score == len(document_id) - 1:
        return CLINICAL_NOTE
    return document_id[last_score + 1 :]


def create_document_time(path: Path, fmt: str = DEFAULT_TIME_FORMAT) -> str:
    modified = datetime.fromtimestamp(path.stat().st_mtime)
    return modified.strftime(fmt)


class DocumentIdentity:
    """Derives the identity metadata of a corpus file from its path under one root."""

    def __init__(
        self,
        root: Path,
        extensions: Collection[str] = (),
        time_format: str = DEFAULT_TIME_FORMAT,
    ) -> None:
        self.root = root
        self.extensions = tuple(extensions)
        self.time_format = time_format

    def entry_for(self, path: Path, patient_id: str | None) -> CorpusEntry:
        document_id = create_document_id(path.name, self.extensions)
        try:
            document_time = create_document_time(path, self.time_format)
        except OSError:
            # Left blank here; the failure surfaces when the document itself is read.
            logger.warning("Cannot stat %s during scan", path)
            document_time = ""
        return CorpusEntry(
            path=path,
            document_id=document_id,
            id_prefix=create_document_id_prefix(path, self.root),
            patient_id=patient_id,
            document_type=create_document_type(document_id),
            document_time=document_time,
        )

    def document_time(self, path: Path) -> str:
        return create_document_time(path, self.time_format)

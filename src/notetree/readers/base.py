from __future__ import annotations

from pathlib import Path
from typing import Protocol


class TextReader(Protocol):
    """Interface for reading the raw text of one corpus file."""

    def read(self, path: Path) -> str:
        """Return the file content with line endings untouched."""

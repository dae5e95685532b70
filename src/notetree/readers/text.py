from __future__ import annotations

from pathlib import Path

from notetree.readers.base import TextReader

UNICODE = "unicode"
UNKNOWN = "Unknown"


def resolve_encoding(encoding: str | None) -> str:
    """Map the configured encoding hint onto a Python codec name."""

    if not encoding or encoding.lower() in {UNICODE, UNKNOWN.lower()}:
        return "utf-8"
    return encoding


class PlainTextReader(TextReader):
    """Reads a file's bytes and decodes them with the configured encoding hint."""

    def __init__(self, encoding: str | None = None):
        self.encoding = resolve_encoding(encoding)

    def read(self, path: Path) -> str:
        # Bytes are decoded directly so CRLF sequences reach the normalizer unchanged.
        return path.read_bytes().decode(self.encoding)

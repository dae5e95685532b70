from .base import TextReader
from .text import PlainTextReader, resolve_encoding

__all__ = [
    "PlainTextReader",
    "TextReader",
    "resolve_encoding",
]

from .identity import (
    DocumentIdentity,
    create_document_id,
    create_document_id_prefix,
    create_document_time,
    create_document_type,
)
from .text import TextNormalizer, normalize_text

__all__ = [
    "DocumentIdentity",
    "TextNormalizer",
    "create_document_id",
    "create_document_id_prefix",
    "create_document_time",
    "create_document_type",
    "normalize_text",
]

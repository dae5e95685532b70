#!/usr/bin/env python3
"""Print one materialized corpus document as JSON for quick smoke-testing."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from notetree.config import ScanConfig, Settings
from notetree.ingest import FileTreeReader


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("root", type=Path, help="Corpus root directory (or a single file)")
    parser.add_argument("position", type=int, help="Zero-based position in the ordered corpus")
    parser.add_argument(
        "--extension",
        "-e",
        dest="extensions",
        action="append",
        default=None,
        help="File extension to read; repeat for several. Defaults to NOTETREE_EXTENSIONS/.env",
    )
    parser.add_argument(
        "--patient-level",
        dest="patient_level",
        type=int,
        default=None,
        help="Directory level whose names are patient ids (default 1)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = Settings()
    try:
        config = ScanConfig.from_settings(
            settings,
            args.root,
            extensions=args.extensions,
            patient_level=args.patient_level,
        )
    except (FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    reader = FileTreeReader(config)
    if not 0 <= args.position < reader.note_count:
        print(f"Position out of range: corpus holds {reader.note_count} documents", file=sys.stderr)
        return 1

    document = None
    for _ in range(args.position + 1):
        reader.has_next()
        document = reader.get_next()

    payload = {
        "document_id": document.document_id,
        "id_prefix": document.id_prefix,
        "document_type": document.document_type,
        "document_time": document.document_time,
        "patient_id": document.patient_id,
        "path": str(document.path),
        "wanted_doc_count": reader.registry.get_wanted_doc_count(document.patient_id or ""),
        "progress": list(reader.progress()),
        "text": document.text,
    }
    print(json.dumps(payload, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

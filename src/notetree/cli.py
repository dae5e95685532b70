from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from notetree.config import ScanConfig, Settings
from notetree.ingest import CorpusPipeline, FileTreeReader
from notetree.storage import create_session_factory, init_db
from notetree.types import Document

app = typer.Typer(help="Clinical note corpus reader CLI")


@app.callback()
def configure_logging(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


class EchoSink:
    """Prints one line per document; stands in for an annotation engine."""

    def process(self, document: Document) -> None:
        typer.echo(
            f"{document.patient_id or '-'}\t{document.document_id}\t"
            f"{len(document.text)} chars\t{document.path}"
        )


def _build_config(
    settings: Settings,
    root: Optional[Path],
    extensions: Optional[List[str]],
    patient_level: Optional[int],
) -> ScanConfig:
    try:
        return ScanConfig.from_settings(
            settings,
            root,
            extensions=extensions,
            patient_level=patient_level,
        )
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("scan")
def scan(
    root: Optional[Path] = typer.Argument(None, help="Corpus root (defaults to NOTETREE_INPUT_DIR)"),
    extension: Optional[List[str]] = typer.Option(
        None, "--extension", "-e", help="File extension to read; repeat for several"
    ),
    patient_level: Optional[int] = typer.Option(
        None, help="Directory level whose names are patient ids (0 = root itself)"
    ),
) -> None:
    """List the ordered corpus and the patient document counts without reading files."""

    reader = FileTreeReader(_build_config(Settings(), root, extension, patient_level))
    for position, entry in enumerate(reader.entries):
        typer.echo(
            f"{position}\t{entry.patient_id or '-'}\t{entry.document_id}\t"
            f"{entry.document_type}\t{entry.document_time}\t{entry.path}"
        )
    for patient_id, count in reader.registry.as_dict().items():
        typer.echo(f"patient {patient_id}: {count} documents")
    typer.echo(f"Scan complete: documents={reader.note_count} patients={len(reader.registry)}")


@app.command("ingest")
def ingest(
    root: Optional[Path] = typer.Argument(None, help="Corpus root (defaults to NOTETREE_INPUT_DIR)"),
    extension: Optional[List[str]] = typer.Option(None, "--extension", "-e"),
    patient_level: Optional[int] = typer.Option(None),
    db_url: Optional[str] = typer.Option(None, envvar="NOTETREE_DATABASE_URL"),
    persist: Optional[bool] = typer.Option(
        None,
        "--persist/--no-persist",
        help="Record the run, corpus manifest and patient counts in the database",
    ),
    continue_on_error: Optional[bool] = typer.Option(
        None,
        "--continue-on-error/--strict",
        help="Skip unreadable files instead of aborting the run",
    ),
) -> None:
    """Read every document in order and pass it to the echo sink."""

    settings = Settings()
    config = _build_config(settings, root, extension, patient_level)
    effective_persist = persist if persist is not None else settings.persist_manifest
    effective_continue = (
        continue_on_error if continue_on_error is not None else settings.continue_on_error
    )

    session_factory = None
    if effective_persist:
        session_factory, engine = create_session_factory(db_url or settings.database_url)
        init_db(engine)

    reader = FileTreeReader(config)
    pipeline = CorpusPipeline(
        reader,
        EchoSink(),
        session_factory,
        continue_on_error=effective_continue,
    )
    stats = pipeline.run()
    typer.echo(
        "Ingestion complete: "
        f"run_id={stats.run_id} "
        f"documents={stats.documents} patients={stats.patients} errors={stats.errors}"
    )


if __name__ == "__main__":
    app()

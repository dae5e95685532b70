from typer.testing import CliRunner

from notetree import cli
from notetree.cli import app
from notetree.storage import ScanRunRecord, create_session_factory

runner = CliRunner()


def test_scan_lists_ordered_corpus(make_tree):
    root = make_tree({"patient10/n1.txt": "", "patient2/n1_RAD.txt": "", "patient2/n1.xml": ""})

    result = runner.invoke(app, ["scan", str(root), "-e", "txt"])

    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if line.startswith(("0\t", "1\t"))]
    assert lines[0].split("\t")[:4] == ["0", "patient2", "n1_RAD", "RAD"]
    assert lines[1].split("\t")[:4] == ["1", "patient10", "n1", "ClinicalNote"]
    assert "patient patient2: 1 documents" in result.output
    assert "Scan complete: documents=2 patients=2" in result.output


def test_scan_rejects_missing_root(tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

    assert result.exit_code != 0


def test_ingest_persists_run(make_tree, tmp_path):
    root = make_tree({"patientA/doc1.txt": "hello"})
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"

    result = runner.invoke(app, ["ingest", str(root), "--db-url", db_url, "--persist"])

    assert result.exit_code == 0, result.output
    assert "documents=1 patients=1 errors=0" in result.output
    session_factory, _ = create_session_factory(db_url)
    with session_factory() as session:
        run = session.query(ScanRunRecord).one()
        assert run.status == "success"


def test_ingest_reads_settings_once(make_tree, monkeypatch):
    root = make_tree({"patientA/doc1.txt": "hello", "patientA/doc2.txt": "world"})
    built = []

    class CountingSettings(cli.Settings):
        def __init__(self, **values):
            super().__init__(**values)
            built.append(self)

    monkeypatch.setattr(cli, "Settings", CountingSettings)
    monkeypatch.setenv("NOTETREE_INPUT_DIR", str(root))
    monkeypatch.setenv("NOTETREE_PERSIST_MANIFEST", "false")

    result = runner.invoke(app, ["ingest"])

    assert result.exit_code == 0, result.output
    assert "documents=2 patients=1 errors=0" in result.output
    assert len(built) == 1

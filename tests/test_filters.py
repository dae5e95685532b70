import logging
from pathlib import Path

from notetree.scanning import create_valid_extensions, is_extension_valid, is_hidden


def test_extensions_are_dot_prefixed():
    assert create_valid_extensions(["txt", ".xml", " note "]) == (".txt", ".xml", ".note")


def test_missing_or_wildcard_extensions_accept_all():
    assert create_valid_extensions(None) == ()
    assert create_valid_extensions([]) == ()
    assert create_valid_extensions(["*"]) == ()
    assert create_valid_extensions([".*"]) == ()


def test_empty_extension_set_accepts_every_file():
    assert is_extension_valid(Path("anything.bin"), ())
    assert is_extension_valid(Path("no_extension"), ())


def test_file_must_end_with_configured_extension():
    extensions = (".txt", ".note")
    assert is_extension_valid(Path("visit_1.txt"), extensions)
    assert is_extension_valid(Path("visit_1.note"), extensions)
    assert not is_extension_valid(Path("visit_1.xml"), extensions)
    assert not is_extension_valid(Path("visit_1.txt.bak"), extensions)


def test_file_named_exactly_like_extension_is_rejected(caplog):
    with caplog.at_level(logging.WARNING, logger="notetree.scanning.filters"):
        assert not is_extension_valid(Path("/corpus/patientA/.txt"), (".txt",))
    assert "exactly matches extension .txt" in caplog.text


def test_dot_files_are_hidden(tmp_path):
    hidden = tmp_path / ".DS_Store"
    hidden.write_text("junk")
    visible = tmp_path / "note.txt"
    visible.write_text("text")

    assert is_hidden(hidden)
    assert not is_hidden(visible)

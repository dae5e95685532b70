import logging

from notetree.config import ScanConfig
from notetree.scanning import DirectoryWalker


def _scan(root, **options):
    return DirectoryWalker(ScanConfig(root_path=root, **options)).scan()


def _layout(result):
    return [(entry.patient_id, entry.id_prefix, entry.path.name) for entry in result.entries]


def test_patients_one_level_below_root(make_tree):
    root = make_tree(
        {
            "patientB/doc1.txt": "b1",
            "patientA/doc2.txt": "a2",
            "patientA/doc1.txt": "a1",
        }
    )

    result = _scan(root)

    assert result.patient_counts == {"patientA": 2, "patientB": 1}
    assert _layout(result) == [
        ("patientA", "patientA", "doc1.txt"),
        ("patientA", "patientA", "doc2.txt"),
        ("patientB", "patientB", "doc1.txt"),
    ]


def test_flat_root_uses_root_name_as_patient(make_tree):
    root = make_tree({"doc2.txt": "2", "doc1.txt": "1"})

    result = _scan(root)

    assert result.patient_level == 0
    assert result.patient_counts == {"root": 2}
    assert _layout(result) == [("root", "", "doc1.txt"), ("root", "", "doc2.txt")]


def test_directories_and_files_follow_natural_order(make_tree):
    root = make_tree(
        {
            "patient10/note10.txt": "",
            "patient10/note2.txt": "",
            "patient2/note1.txt": "",
        }
    )

    result = _scan(root)

    assert [entry.path.relative_to(root).parts for entry in result.entries] == [
        ("patient2", "note1.txt"),
        ("patient10", "note2.txt"),
        ("patient10", "note10.txt"),
    ]


def test_files_precede_deeper_subdirectories(make_tree):
    root = make_tree(
        {
            "patientA/z_last.txt": "",
            "patientA/archive/a_first.txt": "",
        }
    )

    result = _scan(root)

    assert [entry.path.name for entry in result.entries] == ["z_last.txt", "a_first.txt"]
    assert result.patient_counts == {"patientA": 2}
    assert result.entries[1].id_prefix.endswith("archive")
    assert result.entries[1].patient_id == "patientA"


def test_files_above_patient_level_have_no_patient(make_tree):
    root = make_tree({"readme.txt": "", "patientA/doc1.txt": ""})

    result = _scan(root)

    assert _layout(result) == [(None, "", "readme.txt"), ("patientA", "patientA", "doc1.txt")]
    assert result.patient_counts == {"patientA": 1}


def test_same_patient_under_several_sites_accumulates(make_tree):
    root = make_tree(
        {
            "siteX/patientA/doc1.txt": "",
            "siteX/patientA/doc2.txt": "",
            "siteY/patientA/doc1.txt": "",
            "siteY/patientB/doc1.txt": "",
        }
    )

    result = _scan(root, patient_level=2)

    assert result.patient_counts == {"patientA": 3, "patientB": 1}
    assert [entry.patient_id for entry in result.entries] == [
        "patientA",
        "patientA",
        "patientA",
        "patientB",
    ]


def test_extension_filter_and_hidden_files(make_tree, caplog):
    root = make_tree(
        {
            "patientA/doc1.txt": "",
            "patientA/doc1.xml": "",
            "patientA/.hidden.txt": "",
            "patientA/.txt": "",
        }
    )

    with caplog.at_level(logging.WARNING):
        result = _scan(root, extensions=("txt",))

    assert [entry.path.name for entry in result.entries] == ["doc1.txt"]
    assert result.patient_counts == {"patientA": 1}
    assert "exactly matches extension" in caplog.text


def test_single_file_root(make_tree):
    root = make_tree({"patientA/only_RAD.note": "x"})
    note = root / "patientA" / "only_RAD.note"

    result = _scan(note, extensions=("txt",))

    assert result.patient_counts == {"patientA": 1}
    assert len(result.entries) == 1
    entry = result.entries[0]
    assert entry.patient_id == "patientA"
    assert entry.document_id == "only_RAD"
    assert entry.document_type == "RAD"


def test_empty_root_yields_nothing(make_tree):
    root = make_tree({})

    result = _scan(root)

    assert result.entries == []
    assert result.patient_counts == {}


def test_empty_patient_directory_counts_zero(make_tree):
    root = make_tree({"patientA/doc1.txt": "", "patientB/": ""})

    result = _scan(root)

    assert result.patient_counts == {"patientA": 1, "patientB": 0}


def test_rescanning_unchanged_tree_is_deterministic(make_tree):
    root = make_tree(
        {
            "p3/n1.txt": "",
            "p1/n12.txt": "",
            "p1/n3.txt": "",
            "p1/sub/n1.txt": "",
            "p20/x_PATH.txt": "",
        }
    )

    first = _scan(root)
    second = _scan(root)

    assert first.entries == second.entries
    assert first.patient_counts == second.patient_counts


def test_duplicate_document_ids_are_reported_not_renamed(make_tree, caplog):
    root = make_tree({"patientA/doc1.txt": "", "patientB/doc1.txt": ""})

    with caplog.at_level(logging.WARNING):
        result = _scan(root)

    duplicates = result.duplicate_document_ids()
    assert list(duplicates) == ["doc1"]
    assert len(duplicates["doc1"]) == 2
    assert [entry.document_id for entry in result.entries] == ["doc1", "doc1"]
    assert "Document id doc1 is shared by 2 files" in caplog.text


def test_dangling_symlink_does_not_abort_the_scan(make_tree):
    root = make_tree({"patientA/doc1.txt": "one", "patientA/doc3.txt": "three"})
    (root / "patientA" / "doc2.txt").symlink_to(root / "patientA" / "gone.txt")

    result = _scan(root)

    assert [entry.document_id for entry in result.entries] == ["doc1", "doc2", "doc3"]
    assert result.entries[1].document_time == ""
    assert result.entries[0].document_time != ""
    assert result.patient_counts == {"patientA": 3}

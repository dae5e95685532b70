from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

import pytest


@pytest.fixture
def make_tree(tmp_path) -> Callable[[Mapping[str, str]], Path]:
    """
    Build a corpus under `tmp_path / "root"` from a mapping of relative path to file content.

    A relative path ending in "/" creates an empty directory.
    """

    def _make(files: Mapping[str, str], root_name: str = "root") -> Path:
        root = tmp_path / root_name
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            target = root / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content.encode("utf-8"))
        return root.resolve()

    return _make

"""
Shared fixtures: the checked-in sample library and a builder for throwaway
libraries under tmp_path.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

TESTDATA = Path(__file__).parent / "testdata"


def fixture_path(p: str) -> Path:
    return TESTDATA / p


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class LibraryBuilder:
    """Writes a minimal .qvlibrary tree, one call per entity."""

    def __init__(self, root: Path, name: str = "Test.qvlibrary", hierarchy=None):
        self.path = root / name
        self.path.mkdir(parents=True)
        write_json(self.path / "meta.json", {"children": hierarchy or []})

    def notebook(self, name: str, uuid: str, folder: str = None) -> Path:
        nb = self.path / f"{folder or name}.qvnotebook"
        write_json(nb / "meta.json", {"name": name, "uuid": uuid})
        return nb

    def note(self, notebook: Path, uuid: str, title: str = "Note", tags=None, cells=None, resources=None) -> Path:
        note = notebook / f"{uuid}.qvnote"
        write_json(note / "meta.json", {
            "uuid": uuid,
            "title": title,
            "tags": tags or [],
            "created_at": 1500000000,
            "updated_at": 1500000060,
        })
        write_json(note / "content.json", {
            "cells": cells if cells is not None else [{"type": "markdown", "data": f"# {title}"}]
        })
        for rel_path, data in (resources or {}).items():
            dest = note / "resources" / rel_path
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(data)
        return note


@pytest.fixture
def fixture_library() -> Path:
    return fixture_path("Quiver.qvlibrary")


@pytest.fixture
def library_builder(tmp_path):
    def build(**kwargs) -> LibraryBuilder:
        return LibraryBuilder(tmp_path, **kwargs)
    return build

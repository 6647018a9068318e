"""
Test suite for the JSON and Markdown exports and the CLI tools
"""

import inspect
import io
import json

import quiver.main
from quiver.export.markdown import MarkdownExporter, clean_path_element, export_markdown
from quiver.main import json_main, markdown_main
from quiver.storage.loader import read_library
from quiver.utils.serializers import dump_library_json, serialize_library, serialize_note

IMAGES_NOTE_UUID = "B59AC519-2A2C-4EC8-B701-E69F54F40A85"


def find_note(library, uuid):
    for notebook in library.notebooks:
        for note in notebook.notes:
            if note.uuid == uuid:
                return note
    raise KeyError(uuid)


class TestJSONExport:

    def test_library_shape(self, fixture_library):
        """Test: hierarchy + notebooks with exact field names"""
        data = serialize_library(read_library(fixture_library))

        assert data["children"] == [{"uuid": "FIXTURE", "children": []}]
        notebook = data["notebooks"][0]
        assert notebook["name"] == "Quiver Test"
        assert notebook["uuid"] == "FIXTURE"
        tags_note = notebook["notes"][0]
        assert set(tags_note) == {"uuid", "title", "tags", "created_at", "updated_at", "cells"}
        assert tags_note["created_at"] == 1487866457
        assert tags_note["tags"] == ["retest", "tags", "test"]

    def test_cells_omit_empty_attributes(self, fixture_library):
        data = serialize_library(read_library(fixture_library))
        cells = data["notebooks"][0]["notes"][2]["cells"]
        assert cells[0] == {"type": "text", "data": "<div>Text cells hold <b>rich text</b>.</div>"}
        assert cells[1] == {"type": "code", "language": "golang", "data": 'fmt.Println("hello")'}

    def test_resources_as_data_uris(self, fixture_library):
        """Test: resources export as Name/Data with image MIME types"""
        note = find_note(read_library(fixture_library, load_resources=True), IMAGES_NOTE_UUID)
        data = serialize_note(note)

        names = [r["Name"] for r in data["resources"]]
        assert names == [
            "1C3392AA-54E7-4EA3-A129-1C20F208B029.jpg",
            "F6E1CA4A-FA0B-4E45-9861-3E3FEB0DAF99.png",
        ]
        assert data["resources"][0]["Data"].startswith("data:image/jpeg,")
        assert data["resources"][1]["Data"].startswith("data:image/png,")

    def test_diagram_type_alias(self):
        from quiver.models.note import Note

        note = Note.model_validate({
            "uuid": "U", "title": "T", "tags": [], "created_at": 0, "updated_at": 0,
            "cells": [{"type": "diagram", "diagramType": "flow", "data": "st=>start"}],
        })
        assert serialize_note(note)["cells"] == [{"type": "diagram", "diagramType": "flow", "data": "st=>start"}]

    def test_dump_is_valid_json(self, fixture_library):
        out = io.StringIO()
        dump_library_json(read_library(fixture_library, load_resources=True), out)
        parsed = json.loads(out.getvalue())
        assert len(parsed["notebooks"][0]["notes"]) == 3


class TestMarkdownExport:

    def test_clean_path_element(self):
        assert clean_path_element(" a/b: c ") == "a|b- c"

    def test_export_fixture(self, fixture_library, tmp_path):
        """Test: one file per note, resources copied byte-exact"""
        library = read_library(fixture_library, load_resources=True)
        written = export_markdown(library, tmp_path / "out")

        folder = tmp_path / "out" / "Quiver Test"
        assert sorted(p.name for p in written) == [
            "Images, Files and Links.md",
            "Tags.md",
            "Text cells.md",
        ]
        source = fixture_library / "Quiver Test.qvnotebook" / f"{IMAGES_NOTE_UUID}.qvnote" / "resources"
        for name in ["1C3392AA-54E7-4EA3-A129-1C20F208B029.jpg", "F6E1CA4A-FA0B-4E45-9861-3E3FEB0DAF99.png"]:
            assert (folder / "resources" / name).read_bytes() == (source / name).read_bytes()

    def test_cells_rendering(self, fixture_library, tmp_path):
        """Test: code uses the language alias, latex gets its own fence"""
        export_markdown(read_library(fixture_library), tmp_path)
        text = (tmp_path / "Quiver Test" / "Text cells.md").read_text(encoding="utf-8")

        assert text == (
            "<div>Text cells hold <b>rich text</b>.</div>\n"
            "\n"
            "```go\n"
            'fmt.Println("hello")\n'
            "```\n"
            "\n"
            "```latex\n"
            "e^{i\\pi} + 1 = 0\n"
            "```\n"
        )

    def test_links_rewritten(self, fixture_library, tmp_path):
        """Test: note links and image markers become relative paths"""
        export_markdown(read_library(fixture_library, load_resources=True), tmp_path)
        folder = tmp_path / "Quiver Test"

        images = (folder / "Images, Files and Links.md").read_text(encoding="utf-8")
        assert "(resources/1C3392AA-54E7-4EA3-A129-1C20F208B029.jpg)" in images
        assert "[the tagged note](Tags.md)" in images
        assert "quiver" not in images

        tags = (folder / "Tags.md").read_text(encoding="utf-8")
        assert 'href="Text%20cells.md"' in tags

    def test_nested_hierarchy_and_collisions(self, library_builder, tmp_path):
        """Test: child notebooks nest under their parent, same titles get a counter"""
        lib = library_builder(hierarchy=[{"uuid": "P", "children": [{"uuid": "C"}]}])
        parent = lib.notebook("Parent", "P")
        child = lib.notebook("Child", "C")
        lib.note(parent, "N1", title="Same")
        lib.note(parent, "N2", title="Same")
        lib.note(child, "N3", title="Deep", cells=[
            {"type": "markdown", "data": "[up](quiver:///notes/N1) [gone](quiver:///notes/MISSING)"}
        ])
        lib.note(child, "N4", title="  ")

        out = tmp_path / "md"
        written = MarkdownExporter(out).export(read_library(lib.path))

        assert sorted(str(p.relative_to(out)) for p in written) == [
            "Parent/Child/Deep.md",
            "Parent/Same (1).md",
            "Parent/Same.md",
        ]
        deep = (out / "Parent" / "Child" / "Deep.md").read_text(encoding="utf-8")
        assert deep == "[up](../Same.md) [gone](quiver:///notes/MISSING)\n"

    def test_same_named_notebooks_share_counter(self, library_builder, tmp_path):
        """Test: notebooks with the same name do not overwrite each other's notes"""
        lib = library_builder()
        first = lib.notebook("Work", "NA")
        second = lib.notebook("Work", "NB", folder="Work copy")
        lib.note(first, "N1", title="Todo")
        lib.note(second, "N2", title="Todo")

        out = tmp_path / "md"
        written = export_markdown(read_library(lib.path), out)

        assert sorted(str(p.relative_to(out)) for p in written) == ["Work/Todo (1).md", "Work/Todo.md"]
        assert len(list(out.rglob("*.md"))) == 2

    def test_language_aliases_override(self, library_builder, tmp_path):
        lib = library_builder()
        nb = lib.notebook("NB", "NB")
        lib.note(nb, "N1", title="Code", cells=[{"type": "code", "language": "c_cpp", "data": "int x;"}])

        MarkdownExporter(tmp_path / "md", language_aliases={}).export(read_library(lib.path))
        text = (tmp_path / "md" / "NB" / "Code.md").read_text(encoding="utf-8")
        assert text.startswith("```c_cpp\n")


class TestCLI:

    def test_json_main(self, fixture_library, capsys):
        assert json_main(["--res", str(fixture_library)]) == 0
        data = json.loads(capsys.readouterr().out)
        images = data["notebooks"][0]["notes"][1]
        assert len(images["resources"]) == 2

    def test_json_main_error(self, tmp_path, capsys):
        """Test: errors exit 1 and go to stderr, stdout stays empty"""
        assert json_main([str(tmp_path / "nope.qvlibrary")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "nope.qvlibrary" in captured.err

    def test_markdown_main(self, fixture_library, tmp_path):
        assert markdown_main([str(fixture_library), str(tmp_path / "out")]) == 0
        assert (tmp_path / "out" / "Quiver Test" / "Tags.md").exists()

    def test_module_has_no_default_tool(self):
        """Test: both tools are reached through their own entry points only"""
        source = inspect.getsource(quiver.main)
        assert "__main__" not in source
        assert callable(quiver.main.run_json)
        assert callable(quiver.main.run_markdown)

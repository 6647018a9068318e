"""
Serialization helpers for exporting a loaded library as JSON.
"""

from __future__ import annotations

import json
from typing import IO, Any, Dict, Optional

from ..models.note import Library, Note, Notebook, NoteResource
from .resources import MimeRegistry


def serialize_resource(resource: NoteResource, registry: Optional[MimeRegistry] = None) -> Dict[str, str]:
    """Returns the ``{"Name", "Data"}`` form of a resource, with the payload as a data URI."""
    return {"Name": resource.name, "Data": resource.to_data_uri(registry)}


def serialize_note(note: Note, registry: Optional[MimeRegistry] = None) -> Dict[str, Any]:
    """
    Returns a JSON-serializable dict representation of a Note.

    Timestamps are integer seconds since the Epoch, empty cell attributes
    (language, diagramType) are omitted, and so are missing or empty resources.
    """
    data = note.model_dump(
        mode="json",
        by_alias=True,
        exclude={"cells", "resources"},
    )
    data["cells"] = [
        cell.model_dump(mode="json", by_alias=True, exclude_defaults=True)
        for cell in note.cells
    ]
    if note.resources:
        data["resources"] = [serialize_resource(r, registry) for r in note.resources]
    return data


def serialize_notebook(notebook: Notebook, registry: Optional[MimeRegistry] = None) -> Dict[str, Any]:
    return {
        "name": notebook.name,
        "uuid": notebook.uuid,
        "notes": [serialize_note(note, registry) for note in notebook.notes],
    }


def serialize_library(library: Library, registry: Optional[MimeRegistry] = None) -> Dict[str, Any]:
    """Returns the whole library (declared hierarchy + notebooks) as a JSON-ready dict."""
    return {
        "children": [node.model_dump(mode="json") for node in library.children],
        "notebooks": [serialize_notebook(nb, registry) for nb in library.notebooks],
    }


def dump_library_json(
    library: Library,
    stream: IO[str],
    indent: Optional[int] = None,
    registry: Optional[MimeRegistry] = None,
) -> None:
    """Writes the library JSON to a text stream, followed by a newline."""
    json.dump(serialize_library(library, registry), stream, ensure_ascii=False, indent=indent)
    stream.write("\n")

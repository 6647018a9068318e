"""
Tree loader: reads a .qvlibrary folder into a Library object graph.

The load is all-or-nothing: any validator or parser failure aborts it and
propagates to the caller with the offending path. The only tolerated gap is
a note without a resources/ folder, which simply has no resources.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from ..config import settings
from ..errors import MissingRequiredFileError, PathNotFoundError
from ..models.note import Library, Note, Notebook, NoteResource
from ..utils.logs import log_debug
from ..utils.resources import read_note_resources
from .parsers import (
    read_library_metadata,
    read_note_content,
    read_note_metadata,
    read_notebook_metadata,
)
from .validators import is_library, is_note, is_notebook

PathLike = Union[str, Path]


class LibraryLoader:
    """
    Loads libraries, notebooks and notes with a fixed set of options.

    Args:
        load_resources: also read the files under each note resources/ folder
        sort_entries: visit directory entries in name order (defaults to
            QUIVER_SORT_ENTRIES); otherwise os.scandir order is kept
    """

    def __init__(self, load_resources: bool = False, sort_entries: Optional[bool] = None):
        self.load_resources = load_resources
        self.sort_entries = settings.SORT_ENTRIES if sort_entries is None else sort_entries

    def _list_dir(self, path: Path) -> List[Path]:
        with os.scandir(path) as it:
            names = [entry.name for entry in it]
        if self.sort_entries:
            names.sort()
        return [path / name for name in names]

    def read_library(self, path: PathLike) -> Library:
        """Loads the Quiver library at the given path."""
        path = Path(path)
        is_library(path)

        metadata = None
        notebooks: List[Notebook] = []
        for entry in self._list_dir(path):
            if entry.name == settings.META_FILE:
                metadata = read_library_metadata(entry)
            else:
                # all other elements should be notebooks
                notebooks.append(self.read_notebook(entry))

        if metadata is None:
            raise MissingRequiredFileError(
                f"library has no {settings.META_FILE}", path / settings.META_FILE
            )

        log_debug(f"[LOAD] Library {path.name}: {len(notebooks)} notebook(s)")
        return Library(children=metadata.children, notebooks=notebooks)

    def read_notebook(self, path: PathLike) -> Notebook:
        """Loads the Quiver notebook at the given path."""
        path = Path(path)
        is_notebook(path)

        metadata = None
        notes: List[Note] = []
        for entry in self._list_dir(path):
            if entry.name == settings.META_FILE:
                metadata = read_notebook_metadata(entry)
            else:
                notes.append(self.read_note(entry))

        if metadata is None:
            raise MissingRequiredFileError(
                f"notebook has no {settings.META_FILE}", path / settings.META_FILE
            )

        log_debug(f"[LOAD] Notebook {metadata.name!r} ({metadata.uuid}): {len(notes)} note(s)")
        return Notebook(name=metadata.name, uuid=metadata.uuid, notes=notes)

    def read_note(self, path: PathLike) -> Note:
        """Loads the Quiver note at the given path."""
        path = Path(path)
        is_note(path)

        metadata = read_note_metadata(path / settings.META_FILE)
        content = read_note_content(path / settings.CONTENT_FILE)

        resources: Optional[List[NoteResource]] = None
        if self.load_resources:
            resources_dir = path / settings.RESOURCES_DIR
            try:
                resources = read_note_resources(resources_dir, sort_entries=self.sort_entries)
            except PathNotFoundError as exc:
                # a note without attachments has no resources/ folder
                if exc.path != resources_dir:
                    raise
                resources = []

        return Note.assemble(metadata, content, resources)


def read_library(path: PathLike, load_resources: bool = False, sort_entries: Optional[bool] = None) -> Library:
    """Loads the Quiver library at the given path (optionally with note resources)."""
    return LibraryLoader(load_resources, sort_entries).read_library(path)


def read_notebook(path: PathLike, load_resources: bool = False, sort_entries: Optional[bool] = None) -> Notebook:
    """Loads the Quiver notebook at the given path (optionally with note resources)."""
    return LibraryLoader(load_resources, sort_entries).read_notebook(path)


def read_note(path: PathLike, load_resources: bool = False) -> Note:
    """Loads the Quiver note at the given path (optionally with its resources)."""
    return LibraryLoader(load_resources).read_note(path)

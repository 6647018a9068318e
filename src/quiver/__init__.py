"""
Quiver: reads Quiver (.qvlibrary) note libraries into memory.

    from quiver import read_library

    library = read_library("/path/to/Quiver.qvlibrary", load_resources=False)

    # Print the title of all the notes in all the notebooks
    for notebook in library.notebooks:
        for note in notebook.notes:
            print(note.title)
"""

from .core.hierarchy import iter_notebooks_hierarchy, walk_notebooks_hierarchy
from .errors import (
    ErrorKind,
    InvalidDataURIError,
    InvalidEncodingError,
    InvalidPathError,
    MalformedJSONError,
    MissingRequiredFileError,
    NotADirectoryPathError,
    PathNotFoundError,
    QuiverError,
    WrongExtensionError,
)
from .models.note import (
    Cell,
    CodeCell,
    DiagramCell,
    LatexCell,
    Library,
    LibraryMetadata,
    MarkdownCell,
    Note,
    Notebook,
    NotebookHierarchyInfo,
    NotebookMetadata,
    NoteContent,
    NoteMetadata,
    NoteResource,
    TextCell,
)
from .storage.loader import LibraryLoader, read_library, read_note, read_notebook

__version__ = "0.3.4"

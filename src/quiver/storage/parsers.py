"""
Entity parsers: decode the fixed-shape JSON documents of a library.

``parse_*`` functions read from an open stream (text or binary);
``read_*`` functions open the file, parse it and attach the path to errors.
"""

from pathlib import Path
from typing import IO, Type, TypeVar, Union

from pydantic import ValidationError

from ..errors import MalformedJSONError, MissingRequiredFileError
from ..models.note import LibraryMetadata, NotebookMetadata, NoteContent, NoteMetadata

T = TypeVar("T", LibraryMetadata, NotebookMetadata, NoteMetadata, NoteContent)


def _parse(model: Type[T], stream: IO) -> T:
    raw = stream.read()
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        # first error is enough to locate the problem
        err = exc.errors()[0]
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        raise MalformedJSONError(
            f"malformed {model.__name__} JSON at {loc}: {err['msg']}"
        ) from exc


def parse_library_metadata(stream: IO) -> LibraryMetadata:
    """Loads the JSON from the given stream into a LibraryMetadata."""
    return _parse(LibraryMetadata, stream)


def parse_notebook_metadata(stream: IO) -> NotebookMetadata:
    """Loads the JSON from the given stream into a NotebookMetadata."""
    return _parse(NotebookMetadata, stream)


def parse_note_metadata(stream: IO) -> NoteMetadata:
    """Loads the JSON from the given stream into a NoteMetadata."""
    return _parse(NoteMetadata, stream)


def parse_note_content(stream: IO) -> NoteContent:
    """Loads the JSON from the given stream into a NoteContent."""
    return _parse(NoteContent, stream)


def _read(path: Union[str, Path], parser):
    path = Path(path)
    try:
        with open(path, "rb") as f:
            return parser(f)
    except FileNotFoundError as exc:
        raise MissingRequiredFileError(f"required file {path.name} is missing", path) from exc
    except IsADirectoryError as exc:
        raise MissingRequiredFileError(f"required file {path.name} is a directory", path) from exc
    except MalformedJSONError as exc:
        raise MalformedJSONError(exc.message, path) from exc


def read_library_metadata(path: Union[str, Path]) -> LibraryMetadata:
    """Loads the library "meta.json" at the given path."""
    return _read(path, parse_library_metadata)


def read_notebook_metadata(path: Union[str, Path]) -> NotebookMetadata:
    """Loads the notebook "meta.json" at the given path."""
    return _read(path, parse_notebook_metadata)


def read_note_metadata(path: Union[str, Path]) -> NoteMetadata:
    """Loads the note "meta.json" at the given path."""
    return _read(path, parse_note_metadata)


def read_note_content(path: Union[str, Path]) -> NoteContent:
    """Loads the note "content.json" at the given path."""
    return _read(path, parse_note_content)

"""
Error kinds raised while loading or converting a Quiver library.

Every error carries the filesystem path (or resource name) it relates to, so a
failed load can be traced back to the offending file.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    NOT_A_DIRECTORY = "NotADirectory"
    WRONG_EXTENSION = "WrongExtension"
    MALFORMED_JSON = "MalformedJSON"
    INVALID_DATA_URI = "InvalidDataURI"
    INVALID_ENCODING = "InvalidEncoding"
    MISSING_REQUIRED_FILE = "MissingRequiredFile"


class QuiverError(Exception):
    """Base class for all library errors."""

    kind: ErrorKind

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message}: {self.path}"
        return self.message


class InvalidPathError(QuiverError):
    """A path does not match the role (library, notebook, note) it is used for."""


class PathNotFoundError(InvalidPathError):
    kind = ErrorKind.NOT_FOUND


class NotADirectoryPathError(InvalidPathError):
    kind = ErrorKind.NOT_A_DIRECTORY


class WrongExtensionError(InvalidPathError):
    kind = ErrorKind.WRONG_EXTENSION


class MalformedJSONError(QuiverError):
    kind = ErrorKind.MALFORMED_JSON


class InvalidDataURIError(QuiverError):
    kind = ErrorKind.INVALID_DATA_URI


class InvalidEncodingError(QuiverError):
    kind = ErrorKind.INVALID_ENCODING


class MissingRequiredFileError(QuiverError):
    kind = ErrorKind.MISSING_REQUIRED_FILE

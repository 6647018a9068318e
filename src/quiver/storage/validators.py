"""
Filesystem validators: check that a path plays the expected role
(library, notebook or note) before it is loaded.
"""

from pathlib import Path
from typing import Union

from ..config import settings
from ..errors import NotADirectoryPathError, PathNotFoundError, WrongExtensionError


def check_directory(path: Union[str, Path], suffix: str, role: str = "element") -> bool:
    """
    Checks that ``path`` exists, is a directory, and its name ends with ``suffix``.

    Returns True, or raises PathNotFoundError / NotADirectoryPathError /
    WrongExtensionError.
    """
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(f"the Quiver {role} does not exist", path)
    if not path.is_dir():
        raise NotADirectoryPathError(f"the Quiver {role} should be a directory", path)
    if not path.name.endswith(suffix):
        raise WrongExtensionError(f"the Quiver {role} should have {suffix} extension", path)
    return True


def is_library(path: Union[str, Path]) -> bool:
    return check_directory(path, settings.LIBRARY_SUFFIX, "Library")


def is_notebook(path: Union[str, Path]) -> bool:
    return check_directory(path, settings.NOTEBOOK_SUFFIX, "Notebook")


def is_note(path: Union[str, Path]) -> bool:
    return check_directory(path, settings.NOTE_SUFFIX, "Note")

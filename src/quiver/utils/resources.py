"""
Resource codec: note attachments on disk and as data URIs.

On disk a resource is any file below a note's resources/ folder (sub-folders
allowed). In JSON it travels as ``data:<mime-type>,<base64>`` where the payload
uses the URL-safe Base64 alphabet without padding.
"""

import base64
import binascii
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, List, Mapping, Optional, Tuple, Union

from ..config import settings
from ..errors import (
    InvalidDataURIError,
    InvalidEncodingError,
    NotADirectoryPathError,
    PathNotFoundError,
)
from .logs import log_debug

if TYPE_CHECKING:
    from ..models.note import NoteResource

# extension (with leading dot) -> MIME type
MimeRegistry = Mapping[str, str]

DATA_URI_PREFIX = "data:"

_BASE64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")

_default_registry: Optional[dict] = None


def default_mime_registry() -> MimeRegistry:
    """Lazily builds the default extension table (one per process, never mutated)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = settings.default_mime_registry()
    return _default_registry


def guess_mime_type(name: str, registry: Optional[MimeRegistry] = None) -> str:
    """
    Returns the MIME type for a file name based on its extension.

    The exact extension is tried first, then its lower-case form.
    Unknown extensions give an empty string.
    """
    table = default_mime_registry() if registry is None else registry
    ext = os.path.splitext(name)[1]
    if not ext:
        return ""
    return table.get(ext) or table.get(ext.lower(), "")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decodes URL-safe Base64 without padding; padding or foreign characters are rejected."""
    if not _BASE64URL_RE.match(text) or len(text) % 4 == 1:
        raise InvalidEncodingError("invalid base64url payload")
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(f"invalid base64url payload ({exc})") from exc


def encode_data_uri(name: str, data: bytes, registry: Optional[MimeRegistry] = None) -> str:
    """Builds the data URI for a resource payload; the MIME type is inferred from ``name``."""
    return f"{DATA_URI_PREFIX}{guess_mime_type(name, registry)},{b64url_encode(data)}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Splits a data URI into its MIME type and decoded payload.

    Raises:
        InvalidDataURIError: missing ``data:`` prefix or ``,`` separator
        InvalidEncodingError: the payload is not URL-safe unpadded Base64
    """
    if not isinstance(uri, str) or not uri.startswith(DATA_URI_PREFIX):
        raise InvalidDataURIError(f"invalid data URI {str(uri)[:40]!r}: missing '{DATA_URI_PREFIX}' prefix")
    head, sep, payload = uri[len(DATA_URI_PREFIX):].partition(",")
    if not sep:
        raise InvalidDataURIError(f"invalid data URI {uri[:40]!r}: missing ',' separator")
    return head, b64url_decode(payload)


def read_note_resources(
    path: Union[str, Path],
    rel: str = "",
    sort_entries: Optional[bool] = None,
) -> List["NoteResource"]:
    """
    Loads every file under ``path`` into memory.

    Sub-directories are walked depth-first; ``rel`` accumulates the folder
    path from the resource root ("" for files directly under it). Entries are
    visited in name order unless QUIVER_SORT_ENTRIES is disabled.
    """
    from ..models.note import NoteResource

    path = Path(path)
    if not path.exists():
        raise PathNotFoundError("resources folder not found", path)
    if not path.is_dir():
        raise NotADirectoryPathError("note resources should be held in a directory", path)

    with os.scandir(path) as it:
        entries = list(it)
    if sort_entries is None:
        sort_entries = settings.SORT_ENTRIES
    if sort_entries:
        entries.sort(key=lambda e: e.name)

    resources: List[NoteResource] = []
    for entry in entries:
        if entry.is_dir():
            sub_rel = f"{rel}/{entry.name}" if rel else entry.name
            resources.extend(read_note_resources(entry.path, sub_rel, sort_entries))
        else:
            # Read the file completely in memory
            with open(entry.path, "rb") as f:
                data = f.read()
            resources.append(NoteResource(name=entry.name, rel=rel, data=data))

    log_debug(f"[RESOURCES] {len(resources)} file(s) under {path}")
    return resources

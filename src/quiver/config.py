"""
Configuration for the Quiver library reader
"""

import mimetypes
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    # Default library for the CLI tools (can be overridden on the command line)
    _library_path = os.getenv("QUIVER_LIBRARY_PATH", "")
    LIBRARY_PATH = Path(_library_path) if _library_path else None

    # Loader behaviour
    LOAD_RESOURCES = _env_flag("QUIVER_LOAD_RESOURCES", "false")
    # Sort directory entries by name instead of relying on os.scandir order
    SORT_ENTRIES = _env_flag("QUIVER_SORT_ENTRIES", "true")

    # Debug output on stderr (stdout is reserved for JSON export)
    DEBUG = _env_flag("QUIVER_DEBUG", "false")

    # JSON export indentation (None = compact)
    _json_indent = os.getenv("QUIVER_JSON_INDENT", "")
    JSON_INDENT = int(_json_indent) if _json_indent else None

    # On-disk naming conventions
    LIBRARY_SUFFIX = ".qvlibrary"
    NOTEBOOK_SUFFIX = ".qvnotebook"
    NOTE_SUFFIX = ".qvnote"
    META_FILE = "meta.json"
    CONTENT_FILE = "content.json"
    RESOURCES_DIR = "resources"

    # Quiver code-cell languages -> Markdown fence info strings
    LANGUAGE_ALIASES = {
        "c_cpp": "cpp",
        "golang": "go",
        "objc": "objectivec",
        "sh": "bash",
        "plain_text": "",
        "text": "",
    }

    @staticmethod
    def default_mime_registry() -> dict:
        """Returns a fresh extension -> MIME type table built from the platform registry."""
        registry = mimetypes.MimeTypes()
        # strict entries win over the non-standard ones
        table = dict(registry.types_map[False])
        table.update(registry.types_map[True])
        return table


settings = Config()

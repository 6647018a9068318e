"""
Markdown export: writes a loaded library as a tree of Markdown files.

  - one folder per notebook, nested like the declared notebook hierarchy
  - one <title>.md file per note
  - attachments copied to a resources/ folder next to the notes
  - links between notes and image references rewritten as relative paths
"""

import os
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Tuple
from urllib.parse import quote

from ..config import settings
from ..core.hierarchy import notebook_paths
from ..models.note import Library, Note
from ..utils.logs import log_debug

NOTE_LINK_RE = re.compile(r"quiver:///notes/([0-9A-Za-z-]+)")
IMAGE_URL_RE = re.compile(r"quiver-image-url/([^\s)\"'>]+)")


def clean_path_element(name: str) -> str:
    """Makes a title or notebook name usable as a single path element."""
    return name.replace("/", "|").replace(":", "-").strip()


def ensure_directory(path: Path) -> None:
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Should be a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)


class MarkdownExporter:
    """
    Converts a Library into Markdown files under ``out_path``.

    Args:
        out_path: destination folder (created if needed)
        language_aliases: Quiver code language -> fence info string; defaults
            to the table in the configuration
    """

    def __init__(self, out_path, language_aliases: Optional[Mapping[str, str]] = None):
        self.out_path = Path(out_path)
        self.language_aliases = settings.LANGUAGE_ALIASES if language_aliases is None else language_aliases

    # ── Planning ──────────────────────────────────────────────────────

    def plan(self, library: Library) -> List[Tuple[Note, Path]]:
        """Returns every exported note with the Markdown file it will be written to."""
        planned: List[Tuple[Note, Path]] = []
        # sibling notebooks with the same name share a folder
        taken: Dict[Path, Set[str]] = {}
        for notebook, ancestors in notebook_paths(library):
            folder = self.out_path
            for parent in ancestors:
                if parent is not None:
                    folder = folder / clean_path_element(parent.name)
            folder = folder / clean_path_element(notebook.name)

            used = taken.setdefault(folder, set())
            for note in notebook.notes:
                stem = clean_path_element(note.title)
                if not stem:
                    log_debug(f"[MARKDOWN] Skipping note {note.uuid}: empty title")
                    continue
                # Avoid overwriting: append a counter
                candidate = stem
                counter = 1
                while candidate in used:
                    candidate = f"{stem} ({counter})"
                    counter += 1
                used.add(candidate)
                planned.append((note, folder / f"{candidate}.md"))
        return planned

    # ── Rendering ─────────────────────────────────────────────────────

    def render_note(self, note: Note, note_file: Path, note_files: Mapping[str, Path]) -> str:
        """Renders the cells of a note as Markdown, rewriting internal links."""
        resource_paths = {r.name: r.rel_path for r in note.resources or []}

        def note_link(match):
            target = note_files.get(match.group(1))
            if target is None:
                return match.group(0)
            rel = os.path.relpath(target, note_file.parent).replace(os.sep, "/")
            return quote(rel)

        def image_link(match):
            name = match.group(1)
            return quote(f"{settings.RESOURCES_DIR}/{resource_paths.get(name, name)}")

        blocks = []
        for cell in note.cells:
            if cell.is_code():
                lang = self.language_aliases.get(cell.language, cell.language)
                blocks.append(f"```{lang}\n{cell.data}\n```\n")
            elif cell.is_latex():
                blocks.append(f"```latex\n{cell.data}\n```\n")
            elif cell.is_diagram():
                blocks.append(f"```{cell.diagram_type}\n{cell.data}\n```\n")
            else:
                text = NOTE_LINK_RE.sub(note_link, cell.data)
                text = IMAGE_URL_RE.sub(image_link, text)
                blocks.append(text if text.endswith("\n") else text + "\n")
        return "\n".join(blocks)

    # ── Writing ───────────────────────────────────────────────────────

    def export(self, library: Library) -> List[Path]:
        """Writes the whole library and returns the Markdown files created."""
        ensure_directory(self.out_path)
        planned = self.plan(library)
        note_files: Dict[str, Path] = {note.uuid: path for note, path in planned}

        written: List[Path] = []
        for note, path in planned:
            ensure_directory(path.parent)
            path.write_text(self.render_note(note, path, note_files), encoding="utf-8")
            self.write_resources(note, path.parent / settings.RESOURCES_DIR)
            written.append(path)

        log_debug(f"[MARKDOWN] {len(written)} note(s) written to {self.out_path}")
        return written

    def write_resources(self, note: Note, folder: Path) -> None:
        for resource in note.resources or []:
            dest = folder / resource.rel_path
            ensure_directory(dest.parent)
            dest.write_bytes(resource.data)


def export_markdown(library: Library, out_path, language_aliases: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Converts a Library into a set of Markdown files."""
    return MarkdownExporter(out_path, language_aliases).export(library)

"""
Hierarchy walker: explores the declared notebook hierarchy of a library.

The hierarchy comes from the library meta.json and is independent of the
on-disk layout (all notebook folders sit side by side in the library).
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..models.note import Library, Notebook, NotebookHierarchyInfo
from ..utils.logs import log_debug

# notebook is None when the hierarchy references an unknown UUID
Ancestors = Tuple[Optional[Notebook], ...]
Visitor = Callable[[Optional[Notebook], Ancestors], None]


def index_notebooks(library: Library) -> Dict[str, Notebook]:
    """Maps notebook UUIDs to notebooks (the last one wins on duplicates)."""
    return {notebook.uuid: notebook for notebook in library.notebooks}


def iter_notebooks_hierarchy(library: Library) -> Iterator[Tuple[Optional[Notebook], Ancestors]]:
    """
    Yields ``(notebook, ancestors)`` for every node of the declared hierarchy.

    Pre-order, depth-first, children in declared order. ``ancestors`` is a
    tuple of notebooks from the root down to the direct parent.
    """
    notebooks = index_notebooks(library)

    def resolve(uuid: str) -> Optional[Notebook]:
        notebook = notebooks.get(uuid)
        if notebook is None:
            log_debug(f"[HIERARCHY] Warning: notebook {uuid} is declared but was not found in the library")
        return notebook

    def walk(node: NotebookHierarchyInfo, ancestors: Ancestors):
        notebook = resolve(node.uuid)
        yield notebook, ancestors
        # a new tuple per level, siblings never share a mutable parent list
        child_ancestors = ancestors + (notebook,)
        for child in node.children:
            yield from walk(child, child_ancestors)

    for root in library.children:
        yield from walk(root, ())


def walk_notebooks_hierarchy(library: Library, visitor: Visitor) -> None:
    """
    Calls ``visitor(notebook, ancestors)`` for every notebook of the declared hierarchy.

    Any exception raised by the visitor stops the walk and propagates.
    """
    for notebook, ancestors in iter_notebooks_hierarchy(library):
        visitor(notebook, ancestors)


def notebook_paths(library: Library) -> List[Tuple[Notebook, Ancestors]]:
    """
    Returns every notebook of the library with its declared ancestors.

    Notebooks missing from the declared hierarchy come last, as roots.
    Unknown UUIDs of the hierarchy are skipped.
    """
    seen = set()
    result: List[Tuple[Notebook, Ancestors]] = []
    for notebook, ancestors in iter_notebooks_hierarchy(library):
        if notebook is None or notebook.uuid in seen:
            continue
        seen.add(notebook.uuid)
        result.append((notebook, ancestors))
    for notebook in library.notebooks:
        if notebook.uuid not in seen:
            seen.add(notebook.uuid)
            result.append((notebook, ()))
    return result

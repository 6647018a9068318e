"""
Data models for Quiver libraries, notebooks, notes and resources
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer, model_validator

from ..utils.resources import decode_data_uri, encode_data_uri
from ..utils.timestamps import Timestamp


class QuiverModel(BaseModel):
    """Records are immutable once loaded; unknown JSON fields are ignored."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Library metadata (declared notebook hierarchy) ---

class NotebookHierarchyInfo(QuiverModel):
    """A node in the declared notebook hierarchy."""
    uuid: str
    children: List["NotebookHierarchyInfo"] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def null_children_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LibraryMetadata(QuiverModel):
    """Contents of the library meta.json: the roots of the notebook hierarchy."""
    children: List[NotebookHierarchyInfo]

    @field_validator("children", mode="before")
    @classmethod
    def null_children_as_empty(cls, value: Any) -> Any:
        # null is an empty list, but the key itself is required
        return [] if value is None else value


# --- Notebook ---

class NotebookMetadata(QuiverModel):
    """Contents of a notebook meta.json."""
    name: str
    uuid: str


# --- Note metadata & content ---

class NoteMetadata(QuiverModel):
    """Contents of a note meta.json."""
    uuid: str
    title: str
    tags: List[str]
    created_at: Timestamp
    updated_at: Timestamp


class _CellBase(QuiverModel):
    data: str

    def is_code(self) -> bool:
        return self.type == "code"

    def is_text(self) -> bool:
        return self.type == "text"

    def is_markdown(self) -> bool:
        return self.type == "markdown"

    def is_latex(self) -> bool:
        return self.type == "latex"

    def is_diagram(self) -> bool:
        return self.type == "diagram"


class CodeCell(_CellBase):
    type: Literal["code"]
    language: str = ""


class TextCell(_CellBase):
    type: Literal["text"]


class MarkdownCell(_CellBase):
    type: Literal["markdown"]


class LatexCell(_CellBase):
    type: Literal["latex"]


class DiagramCell(_CellBase):
    type: Literal["diagram"]
    diagram_type: str = Field(default="", alias="diagramType")


Cell = Annotated[
    Union[CodeCell, TextCell, MarkdownCell, LatexCell, DiagramCell],
    Field(discriminator="type"),
]

CELL_TYPES = ("code", "text", "markdown", "latex", "diagram")


class NoteContent(QuiverModel):
    """
    Contents of a note content.json.

    The title is not repeated here, it lives in the note meta.json.
    """
    cells: List[Cell]


# --- Resources ---

class NoteResource(QuiverModel):
    """
    A file found under a note resources/ folder.

    Serializes as ``{"Name": ..., "Data": "data:<mime>,<base64url>"}`` and
    validates back from that form (``rel`` is not part of the JSON form).
    """
    name: str
    rel: str = ""
    data: bytes = Field(repr=False)

    @model_validator(mode="before")
    @classmethod
    def decode_serialized_form(cls, value: Any) -> Any:
        if isinstance(value, dict) and "Data" in value:
            _, payload = decode_data_uri(value["Data"])
            return {
                "name": value.get("Name", value.get("name", "")),
                "rel": value.get("rel", ""),
                "data": payload,
            }
        return value

    @model_serializer(mode="plain")
    def serialize_as_data_uri(self) -> Dict[str, str]:
        return {"Name": self.name, "Data": self.to_data_uri()}

    def to_data_uri(self, registry=None) -> str:
        return encode_data_uri(self.name, self.data, registry)

    @property
    def rel_path(self) -> str:
        """Path of the file relative to the resource root."""
        return f"{self.rel}/{self.name}" if self.rel else self.name


# --- Assembled tree ---

class Note(QuiverModel):
    """A loaded .qvnote: metadata, content and (optionally) resources."""
    uuid: str
    title: str
    tags: List[str]
    created_at: Timestamp
    updated_at: Timestamp
    cells: List[Cell]
    # None when resources were not requested
    resources: Optional[List[NoteResource]] = None

    @classmethod
    def assemble(
        cls,
        metadata: NoteMetadata,
        content: NoteContent,
        resources: Optional[List[NoteResource]] = None,
    ) -> "Note":
        return cls(
            uuid=metadata.uuid,
            title=metadata.title,
            tags=list(metadata.tags),
            created_at=metadata.created_at,
            updated_at=metadata.updated_at,
            cells=list(content.cells),
            resources=resources,
        )

    @property
    def metadata(self) -> NoteMetadata:
        return NoteMetadata(
            uuid=self.uuid,
            title=self.title,
            tags=list(self.tags),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @property
    def content(self) -> NoteContent:
        return NoteContent(cells=list(self.cells))


class Notebook(QuiverModel):
    """A loaded .qvnotebook."""
    name: str
    uuid: str
    notes: List[Note] = Field(default_factory=list)

    @property
    def metadata(self) -> NotebookMetadata:
        return NotebookMetadata(name=self.name, uuid=self.uuid)


class Library(QuiverModel):
    """
    A loaded .qvlibrary.

    ``children`` is the declared notebook hierarchy, ``notebooks`` the flat
    list of notebook folders found on disk.
    """
    children: List[NotebookHierarchyInfo] = Field(default_factory=list)
    notebooks: List[Notebook] = Field(default_factory=list)

    @property
    def metadata(self) -> LibraryMetadata:
        return LibraryMetadata(children=list(self.children))

    def get_notebook(self, uuid: str) -> Optional[Notebook]:
        for notebook in self.notebooks:
            if notebook.uuid == uuid:
                return notebook
        return None


NotebookHierarchyInfo.model_rebuild()

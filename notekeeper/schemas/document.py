"""Document schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, computed_field, field_validator

from ..models import Document
from ..content import empty_content, generate_content_preview
from .common import CamelModel, normalize_folder_ref, normalize_optional_id, normalize_tags


class DocumentBase(CamelModel):
    """Fields a client may write."""
    title: str
    content: str = Field(default_factory=empty_content)
    tags: List[str] = []
    folder_id: Optional[str] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)

    @field_validator('folder_id')
    @classmethod
    def clean_folder_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_folder_ref(v)


class DocumentCreate(DocumentBase):
    """Schema for creating a document.

    ``id`` is generated when missing or empty. ``createdAt`` is kept when
    supplied, so imports keep their original creation time.
    """
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('id')
    @classmethod
    def clean_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional_id(v)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Reading list",
                    "content": '{"blocks":[{"key":"a1b2c","text":"Books to read","type":"unstyled",'
                               '"depth":0,"inlineStyleRanges":[],"entityRanges":[],"data":{}}],'
                               '"entityMap":{}}',
                    "tags": ["books", "personal"],
                    "folderId": None,
                }
            ]
        }
    }


class DocumentUpdate(CamelModel):
    """Schema for updating a document. Omitted fields keep their stored value."""
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    folder_id: Optional[str] = None

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_tags(v) if v is not None else None

    @field_validator('folder_id')
    @classmethod
    def clean_folder_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_folder_ref(v)


class DocumentResponse(Document):
    """Stored document plus derived read-only fields."""

    @computed_field(alias="contentPreview")
    @property
    def content_preview(self) -> str:
        return generate_content_preview(self.content)

    @classmethod
    def from_record(cls, document: Document) -> "DocumentResponse":
        return cls.model_validate(document.model_dump())


class LinkResponse(CamelModel):
    """A hyperlink found in a document's content."""
    block_key: str
    text: str
    url: str


class TagCount(CamelModel):
    """A tag and how many documents carry it."""
    tag: str
    count: int

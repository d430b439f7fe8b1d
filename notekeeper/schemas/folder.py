"""Folder and tree schemas."""

from typing import List, Optional

from pydantic import field_validator

from ..models import Folder
from .common import CamelModel, normalize_folder_ref, normalize_optional_id
from .document import DocumentResponse


def _clean_description(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return v.strip() or None


class FolderCreate(CamelModel):
    """Schema for creating a folder."""
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None

    @field_validator('id')
    @classmethod
    def clean_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional_id(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        return v

    @field_validator('description')
    @classmethod
    def clean_description(cls, v: Optional[str]) -> Optional[str]:
        return _clean_description(v)

    @field_validator('parent_id')
    @classmethod
    def clean_parent_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_folder_ref(v)


class FolderUpdate(CamelModel):
    """Schema for updating a folder. Omitted fields keep their stored value."""
    name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        return v

    @field_validator('description')
    @classmethod
    def clean_description(cls, v: Optional[str]) -> Optional[str]:
        return _clean_description(v)

    @field_validator('parent_id')
    @classmethod
    def clean_parent_id(cls, v: Optional[str]) -> Optional[str]:
        return normalize_folder_ref(v)


class FolderResponse(Folder):
    """Schema for folder response."""
    pass


class FolderContentsResponse(CamelModel):
    """Everything the folder view needs in one response."""
    folder: FolderResponse
    path: List[FolderResponse]  # breadcrumb chain, top level first, root excluded
    folders: List[FolderResponse]
    documents: List[DocumentResponse]


class TreeNode(CamelModel):
    """Schema for tree navigation."""
    id: str
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None
    document_count: int = 0
    children: List['TreeNode'] = []

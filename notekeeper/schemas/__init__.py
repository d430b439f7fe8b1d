"""Pydantic schemas for API validation."""

from .document import (
    DocumentBase,
    DocumentCreate,
    DocumentUpdate,
    DocumentResponse,
    LinkResponse,
    TagCount,
)
from .folder import (
    FolderCreate,
    FolderUpdate,
    FolderResponse,
    FolderContentsResponse,
    TreeNode,
)
from .search import SearchResponse

__all__ = [
    "DocumentBase",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "LinkResponse",
    "TagCount",
    "FolderCreate",
    "FolderUpdate",
    "FolderResponse",
    "FolderContentsResponse",
    "TreeNode",
    "SearchResponse",
]

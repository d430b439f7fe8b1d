"""Business logic services."""

from .document_service import DocumentService
from .folder_service import FolderService
from .search_service import SearchService

__all__ = ["DocumentService", "FolderService", "SearchService"]

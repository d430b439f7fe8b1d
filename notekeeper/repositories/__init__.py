"""Data access repositories."""

from .base import BaseRepository, validate_record_id
from .document_repository import DocumentRepository
from .folder_repository import FolderRepository

__all__ = [
    "BaseRepository",
    "validate_record_id",
    "DocumentRepository",
    "FolderRepository",
]

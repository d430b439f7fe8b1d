"""Document repository: ``<data_dir>/documents/<id>.json``."""

from typing import List, Optional

from ..exceptions import DocumentNotFoundError
from ..models import Document
from .base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for document records.

    Queries are linear scans over every file; the store is meant for a
    personal-size collection.
    """

    model_class = Document
    not_found_error = DocumentNotFoundError

    def get_all_sorted(self) -> List[Document]:
        """All documents, most recently updated first."""
        return sorted(self.get_all(), key=lambda d: d.updated_at, reverse=True)

    def get_in_folder(self, folder_id: Optional[str]) -> List[Document]:
        """Documents directly inside *folder_id* (None = top level)."""
        return [d for d in self.get_all_sorted() if d.folder_id == folder_id]

    def count_in_folder(self, folder_id: str) -> int:
        return sum(1 for d in self.get_all() if d.folder_id == folder_id)

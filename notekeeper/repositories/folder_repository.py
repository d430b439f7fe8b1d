"""Folder repository: ``<data_dir>/folders/<id>.json``."""

from typing import List, Optional

from ..exceptions import FolderNotFoundError
from ..models import Folder
from .base import BaseRepository


def _name_key(folder: Folder) -> tuple:
    return (folder.name.lower(), folder.id)


class FolderRepository(BaseRepository[Folder]):
    """Repository for folder records."""

    model_class = Folder
    not_found_error = FolderNotFoundError

    def get_all_sorted(self) -> List[Folder]:
        """All folders sorted by name, case-insensitive."""
        return sorted(self.get_all(), key=_name_key)

    def get_children(self, parent_id: Optional[str]) -> List[Folder]:
        """Direct subfolders of *parent_id* (None = top level), by name."""
        return [f for f in self.get_all_sorted() if f.parent_id == parent_id]

    def count_children(self, parent_id: str) -> int:
        return sum(1 for f in self.get_all() if f.parent_id == parent_id)

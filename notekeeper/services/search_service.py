"""Substring search over documents and folders."""

import logging
from typing import List, Optional

from ..content import extract_plain_text
from ..exceptions import ValidationError
from ..models import Document, Folder
from ..schemas.common import normalize_folder_ref
from ..storage import Storage

logger = logging.getLogger(__name__)


def document_matches(document: Document, needle: str) -> bool:
    """Case-insensitive match on title, any tag, or the content's plain text.

    Unparseable content is matched as the raw string.

    *needle* must already be lower-cased.
    """
    if needle in document.title.lower():
        return True
    if any(needle in tag.lower() for tag in document.tags):
        return True
    return needle in extract_plain_text(document.content).lower()


def folder_matches(folder: Folder, needle: str) -> bool:
    if needle in folder.name.lower():
        return True
    return bool(folder.description) and needle in folder.description.lower()


class SearchService:
    """Linear scan over every stored record."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def search(
        self, query: Optional[str], folder_id: Optional[str] = None
    ) -> tuple[List[Document], List[Folder]]:
        """Return ``(documents, folders)`` matching *query*.

        Args:
            query: Substring to look for. Required and non-blank.
            folder_id: Restrict to items directly inside this folder
                (``"root"`` = top level). ``None`` searches everything.

        Raises:
            ValidationError: the query is missing or blank.
        """
        if query is None or not query.strip():
            raise ValidationError("Search query is required", field="query")
        needle = query.lower()

        documents = [
            d for d in self.storage.documents.get_all_sorted() if document_matches(d, needle)
        ]
        folders = [
            f for f in self.storage.folders.get_all_sorted() if folder_matches(f, needle)
        ]

        if folder_id is not None:
            scope = normalize_folder_ref(folder_id)
            documents = [d for d in documents if d.folder_id == scope]
            folders = [f for f in folders if f.parent_id == scope]

        logger.debug(
            "Search completed",
            extra={"query": needle, "documents": len(documents), "folders": len(folders)},
        )
        return documents, folders

"""Search schemas."""

from typing import List

from .common import CamelModel
from .document import DocumentResponse
from .folder import FolderResponse


class SearchResponse(CamelModel):
    """Documents and folders matching a query."""
    documents: List[DocumentResponse] = []
    folders: List[FolderResponse] = []

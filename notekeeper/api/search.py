"""Search endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..schemas.document import DocumentResponse
from ..schemas.folder import FolderResponse
from ..schemas.search import SearchResponse
from ..services import SearchService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def search(
    query: Optional[str] = None,
    folder_id: Optional[str] = Query(None, alias="folderId"),
    storage: Storage = Depends(get_storage),
):
    """Case-insensitive substring search over documents and folders.

    A missing or blank query is a 400, not an empty result.
    """
    service = SearchService(storage)
    documents, folders = service.search(query, folder_id=folder_id)
    return SearchResponse(
        documents=[DocumentResponse.from_record(d) for d in documents],
        folders=[FolderResponse.model_validate(f.model_dump()) for f in folders],
    )

"""Folder API: CRUD, folder contents, breadcrumbs and tree.

Single router for all folder operations. Delegates to FolderService (deep module).
"""

from typing import List

from fastapi import APIRouter, Depends

from ..schemas.document import DocumentResponse
from ..schemas.folder import (
    FolderContentsResponse,
    FolderCreate,
    FolderResponse,
    FolderUpdate,
    TreeNode,
)
from ..services import FolderService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/folders", tags=["folders"])

# Separate router to keep /api/tree at the top level.
tree_router = APIRouter(tags=["folders"])


# -- Tree -----------------------------------------------------------------

@tree_router.get("/api/tree", response_model=List[TreeNode])
def get_tree(storage: Storage = Depends(get_storage)):
    """Get the nested folder tree with per-folder document counts."""
    service = FolderService(storage)
    return service.get_tree()


# -- Folder CRUD ----------------------------------------------------------

@router.get("", response_model=List[FolderResponse])
def list_folders(storage: Storage = Depends(get_storage)):
    service = FolderService(storage)
    return service.list_folders()


@router.post("", response_model=FolderResponse, status_code=201)
def create_folder(data: FolderCreate, storage: Storage = Depends(get_storage)):
    """Create a folder. The parent, when given, must exist."""
    service = FolderService(storage)
    return service.create_folder(data)


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(folder_id: str, storage: Storage = Depends(get_storage)):
    """Get a folder; ``root`` returns the synthetic root folder."""
    service = FolderService(storage)
    return service.get_folder(folder_id)


@router.put("/{folder_id}", response_model=FolderResponse)
def update_folder(
    folder_id: str,
    data: FolderUpdate,
    storage: Storage = Depends(get_storage),
):
    """Rename, describe or re-parent a folder. Cycles are rejected."""
    service = FolderService(storage)
    return service.update_folder(folder_id, data)


@router.delete("/{folder_id}", status_code=204)
def delete_folder(folder_id: str, storage: Storage = Depends(get_storage)):
    """Delete an empty folder. 409 while documents or subfolders reference it."""
    service = FolderService(storage)
    service.delete_folder(folder_id)
    return None


# -- Folder contents ------------------------------------------------------

@router.get("/{folder_id}/documents", response_model=List[DocumentResponse])
def get_folder_documents(folder_id: str, storage: Storage = Depends(get_storage)):
    """Documents directly in the folder; ``root`` = documents without a folder."""
    service = FolderService(storage)
    return service.get_folder_documents(folder_id)


@router.get("/{folder_id}/path", response_model=List[FolderResponse])
def get_folder_path(folder_id: str, storage: Storage = Depends(get_storage)):
    """Breadcrumb chain from the top level down to the folder."""
    service = FolderService(storage)
    return service.get_folder_path(folder_id)


@router.get("/{folder_id}/contents", response_model=FolderContentsResponse)
def get_folder_contents(folder_id: str, storage: Storage = Depends(get_storage)):
    """Folder, breadcrumbs, direct subfolders and direct documents in one call."""
    service = FolderService(storage)
    return service.get_folder_contents(folder_id)

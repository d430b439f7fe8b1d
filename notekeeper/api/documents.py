"""Document API endpoints.

Endpoints are thin: DocumentService owns the document lifecycle.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas.document import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    LinkResponse,
    TagCount,
)
from ..services import DocumentService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/documents", tags=["documents"])

# /api/tags lives outside the /api/documents prefix.
tags_router = APIRouter(tags=["documents"])


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    tag: Optional[str] = None,
    folder_id: Optional[str] = Query(None, alias="folderId"),
    storage: Storage = Depends(get_storage),
):
    """List documents, newest first, optionally filtered by tag or folder."""
    service = DocumentService(storage)
    return service.list_documents(tag=tag, folder_id=folder_id)


@router.post("", response_model=DocumentResponse, status_code=201)
def create_document(
    document: DocumentCreate,
    storage: Storage = Depends(get_storage),
):
    """Create a document. An existing id is overwritten, keeping its createdAt."""
    service = DocumentService(storage)
    return service.create_document(document)


@router.get("/{doc_id}", response_model=DocumentResponse)
def get_document(doc_id: str, storage: Storage = Depends(get_storage)):
    service = DocumentService(storage)
    return service.get_document(doc_id)


@router.put("/{doc_id}", response_model=DocumentResponse)
def update_document(
    doc_id: str,
    update: DocumentUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update a document. Omitted fields keep their stored values."""
    service = DocumentService(storage)
    return service.update_document(doc_id, update)


@router.delete("/{doc_id}", status_code=204)
def delete_document(doc_id: str, storage: Storage = Depends(get_storage)):
    service = DocumentService(storage)
    service.delete_document(doc_id)
    return None


@router.get("/{doc_id}/links", response_model=List[LinkResponse])
def get_document_links(doc_id: str, storage: Storage = Depends(get_storage)):
    """Hyperlinks found in the document's rich-text content."""
    service = DocumentService(storage)
    return [
        LinkResponse(block_key=link.block_key, text=link.text, url=link.url)
        for link in service.get_document_links(doc_id)
    ]


@tags_router.get("/api/tags", response_model=List[TagCount])
def list_tags(storage: Storage = Depends(get_storage)):
    """Distinct tags across all documents with usage counts."""
    service = DocumentService(storage)
    return service.list_tags()

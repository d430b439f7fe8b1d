"""Document lifecycle: create, read, update, delete, tags and links.

Endpoints stay thin; everything that touches document records goes
through DocumentService.
"""

import logging
import uuid
from collections import Counter
from typing import List, Optional

from ..content import LinkRef, extract_links
from ..models import Document, utcnow
from ..schemas.common import normalize_folder_ref
from ..schemas.document import DocumentCreate, DocumentUpdate, TagCount
from ..storage import Storage

logger = logging.getLogger(__name__)

# Fields DocumentUpdate may set to None explicitly. Everything else
# treats an explicit null like an omitted field.
_NULLABLE_UPDATE_FIELDS = frozenset({"folder_id"})


class DocumentService:
    """All document operations behind a simple interface."""

    def __init__(self, storage: Storage):
        self.storage = storage
        self.doc_repo = storage.documents

    def generate_doc_id(self) -> str:
        return str(uuid.uuid4())

    def list_documents(
        self,
        tag: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> List[Document]:
        """All documents, newest first.

        Args:
            tag: Only documents carrying this tag (case-insensitive).
            folder_id: Only documents directly in this folder; ``"root"``
                selects documents without a folder. ``None`` = no filter.
        """
        documents = self.doc_repo.get_all_sorted()
        if folder_id is not None:
            target = normalize_folder_ref(folder_id)
            documents = [d for d in documents if d.folder_id == target]
        if tag:
            wanted = tag.strip().lower()
            documents = [d for d in documents if any(t.lower() == wanted for t in d.tags)]
        return documents

    def get_document(self, doc_id: str) -> Document:
        return self.doc_repo.get_by_id(doc_id)

    def create_document(self, data: DocumentCreate) -> Document:
        """Create a document, or overwrite one with the same id.

        Overwriting keeps the stored ``created_at``.
        """
        doc_id = data.id or self.generate_doc_id()
        existing = self.doc_repo.get_by_id_optional(doc_id)
        now = utcnow()

        if existing is not None:
            created_at = existing.created_at
        else:
            created_at = data.created_at or now

        document = Document(
            id=doc_id,
            title=data.title,
            content=data.content,
            tags=data.tags,
            folder_id=data.folder_id,
            created_at=created_at,
            updated_at=now,
        )
        self.doc_repo.save(document)
        logger.info(
            "Document saved",
            extra={"doc_id": doc_id, "is_new": existing is None, "folder_id": document.folder_id},
        )
        return document

    def update_document(self, doc_id: str, data: DocumentUpdate) -> Document:
        """Apply the fields present in *data*; ``created_at`` never changes."""
        existing = self.doc_repo.get_by_id(doc_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_UPDATE_FIELDS
        }
        changes["updated_at"] = utcnow()

        document = existing.model_copy(update=changes)
        self.doc_repo.save(document)
        logger.info(
            "Document updated",
            extra={"doc_id": doc_id, "fields": sorted(k for k in changes if k != "updated_at")},
        )
        return document

    def delete_document(self, doc_id: str) -> None:
        if not self.doc_repo.delete(doc_id):
            raise self.doc_repo.not_found_error(doc_id)
        logger.info("Document deleted", extra={"doc_id": doc_id})

    def get_document_links(self, doc_id: str) -> List[LinkRef]:
        """Hyperlinks in the document's rich-text content, in reading order."""
        return extract_links(self.get_document(doc_id).content)

    def list_tags(self) -> List[TagCount]:
        """Distinct tags with usage counts, most used first."""
        counts: Counter = Counter()
        for document in self.doc_repo.get_all():
            counts.update(document.tags)
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0].lower()))
        return [TagCount(tag=tag, count=count) for tag, count in ranked]

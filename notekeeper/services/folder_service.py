"""Deep module for all folder operations: CRUD, contents, breadcrumbs and tree building.

Folders form a tree through ``parent_id`` pointers. The root folder
(id ``"root"``) is synthetic: documents and folders without a parent
belong to it, and it is never written to disk.
"""

import logging
import uuid
from collections import Counter
from typing import Dict, List, Optional, Set

from ..exceptions import (
    FolderNotEmptyError,
    FolderNotFoundError,
    InvalidFolderMoveError,
    ValidationError,
)
from ..models import Folder, ROOT_FOLDER_ID, root_folder, utcnow
from ..schemas.document import DocumentResponse
from ..schemas.folder import (
    FolderContentsResponse,
    FolderCreate,
    FolderResponse,
    FolderUpdate,
    TreeNode,
)
from ..storage import Storage

logger = logging.getLogger(__name__)

_NULLABLE_UPDATE_FIELDS = frozenset({"description", "parent_id"})


class FolderService:
    """All folder and tree operations behind a simple interface.

    Public methods:
        list_folders          -- every stored folder, by name
        get_folder            -- lookup by id; "root" returns the synthetic root
        create_folder         -- parent must exist
        update_folder         -- rename / describe / re-parent (no cycles)
        delete_folder         -- only when no document or folder points at it
        get_folder_documents  -- direct documents of a folder
        get_folder_path       -- breadcrumb chain
        get_folder_contents   -- folder + breadcrumbs + subfolders + documents
        get_tree              -- nested folder tree with document counts
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.folder_repo = storage.folders
        self.doc_repo = storage.documents

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_folders(self) -> List[Folder]:
        return self.folder_repo.get_all_sorted()

    def get_folder(self, folder_id: str) -> Folder:
        if folder_id == ROOT_FOLDER_ID:
            return root_folder()
        return self.folder_repo.get_by_id(folder_id)

    def create_folder(self, data: FolderCreate) -> Folder:
        folder_id = data.id or str(uuid.uuid4())
        if folder_id == ROOT_FOLDER_ID:
            raise ValidationError("The id 'root' is reserved", field="id")
        if data.parent_id is not None:
            # Overwrites and stored children pointing at a new id can both close a loop.
            self._validate_move(folder_id, data.parent_id)

        existing = self.folder_repo.get_by_id_optional(folder_id)
        now = utcnow()
        folder = Folder(
            id=folder_id,
            name=data.name,
            description=data.description,
            parent_id=data.parent_id,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self.folder_repo.save(folder)
        logger.info(
            "Folder created",
            extra={"folder_id": folder_id, "parent_id": folder.parent_id},
        )
        return folder

    def update_folder(self, folder_id: str, data: FolderUpdate) -> Folder:
        self._reject_root(folder_id, "modified")
        existing = self.folder_repo.get_by_id(folder_id)

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_UPDATE_FIELDS
        }
        new_parent = changes.get("parent_id")
        if new_parent is not None and new_parent != existing.parent_id:
            self._validate_move(folder_id, new_parent)
        changes["updated_at"] = utcnow()

        folder = existing.model_copy(update=changes)
        self.folder_repo.save(folder)
        logger.info(
            "Folder updated",
            extra={"folder_id": folder_id, "fields": sorted(k for k in changes if k != "updated_at")},
        )
        return folder

    def delete_folder(self, folder_id: str) -> None:
        """Delete an empty folder.

        Raises:
            FolderNotEmptyError: documents or subfolders still reference it.
        """
        self._reject_root(folder_id, "deleted")
        self.folder_repo.get_by_id(folder_id)

        document_count = self.doc_repo.count_in_folder(folder_id)
        subfolder_count = self.folder_repo.count_children(folder_id)
        if document_count or subfolder_count:
            raise FolderNotEmptyError(folder_id, document_count, subfolder_count)

        self.folder_repo.delete(folder_id)
        logger.info("Folder deleted", extra={"folder_id": folder_id})

    def get_folder_documents(self, folder_id: str):
        """Documents directly in the folder, newest first."""
        return self.doc_repo.get_in_folder(self._resolve_parent_ref(folder_id))

    def get_folder_path(self, folder_id: str) -> List[Folder]:
        """Breadcrumb chain from the top level down to *folder_id* (root excluded).

        Stops at a missing parent or a repeated folder, so broken or cyclic
        data still yields a finite chain.
        """
        if folder_id == ROOT_FOLDER_ID:
            return []
        folders = {f.id: f for f in self.folder_repo.get_all()}
        if folder_id not in folders:
            raise FolderNotFoundError(folder_id)

        chain: List[Folder] = []
        seen: Set[str] = set()
        current: Optional[str] = folder_id
        while current is not None and current in folders and current not in seen:
            seen.add(current)
            folder = folders[current]
            chain.append(folder)
            current = folder.parent_id
        chain.reverse()
        return chain

    def get_folder_contents(self, folder_id: str) -> FolderContentsResponse:
        folder = self.get_folder(folder_id)
        parent_ref = self._resolve_parent_ref(folder_id)
        return FolderContentsResponse(
            folder=FolderResponse.model_validate(folder.model_dump()),
            path=[FolderResponse.model_validate(f.model_dump()) for f in self.get_folder_path(folder_id)],
            folders=[
                FolderResponse.model_validate(f.model_dump())
                for f in self.folder_repo.get_children(parent_ref)
            ],
            documents=[
                DocumentResponse.from_record(d)
                for d in self.doc_repo.get_in_folder(parent_ref)
            ],
        )

    def get_tree(self) -> List[TreeNode]:
        """Build the nested folder tree from the flat folder list.

        Folders whose parent is missing are attached at the top level.
        Folders only reachable through a cycle are attached there too,
        each expanded once.
        """
        folders = self.folder_repo.get_all_sorted()
        by_id = {f.id: f for f in folders}
        doc_counts = Counter(d.folder_id for d in self.doc_repo.get_all() if d.folder_id)

        children: Dict[Optional[str], List[Folder]] = {}
        for folder in folders:
            parent = folder.parent_id
            if parent is not None and parent not in by_id:
                logger.warning(
                    "Folder has a missing parent; attaching at top level",
                    extra={"folder_id": folder.id, "parent_id": parent},
                )
                parent = None
            children.setdefault(parent, []).append(folder)

        visited: Set[str] = set()

        def build(folder: Folder) -> TreeNode:
            visited.add(folder.id)
            node = TreeNode(
                id=folder.id,
                name=folder.name,
                description=folder.description,
                parent_id=folder.parent_id,
                document_count=doc_counts.get(folder.id, 0),
            )
            for child in children.get(folder.id, []):
                if child.id not in visited:
                    node.children.append(build(child))
            return node

        tree = [build(f) for f in children.get(None, [])]

        for folder in folders:
            if folder.id not in visited:
                logger.warning("Folder is part of a parent cycle", extra={"folder_id": folder.id})
                tree.append(build(folder))
        return tree

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _reject_root(self, folder_id: str, action: str) -> None:
        if folder_id == ROOT_FOLDER_ID:
            raise ValidationError(f"The root folder cannot be {action}", field="id")

    def _require_folder(self, folder_id: str) -> None:
        if not self.folder_repo.exists(folder_id):
            raise FolderNotFoundError(folder_id)

    def _resolve_parent_ref(self, folder_id: str) -> Optional[str]:
        """Map a folder id to the value stored in children's parent pointers."""
        if folder_id == ROOT_FOLDER_ID:
            return None
        self._require_folder(folder_id)
        return folder_id

    def _validate_move(self, folder_id: str, new_parent_id: str) -> None:
        """Reject re-parenting under itself or one of its descendants."""
        if new_parent_id == folder_id:
            raise InvalidFolderMoveError(folder_id, new_parent_id, "A folder cannot be its own parent")
        self._require_folder(new_parent_id)

        folders = {f.id: f for f in self.folder_repo.get_all()}
        seen: Set[str] = set()
        current: Optional[str] = new_parent_id
        # Walk up from the new parent; folder_id need not be stored yet.
        while current is not None and current not in seen:
            if current == folder_id:
                raise InvalidFolderMoveError(
                    folder_id, new_parent_id, "Cannot move folder into its own descendant"
                )
            seen.add(current)
            parent = folders.get(current)
            current = parent.parent_id if parent else None

"""Unit tests for FolderService: the deep module for folder operations."""

import pytest

from notekeeper.exceptions import (
    FolderNotEmptyError,
    FolderNotFoundError,
    InvalidFolderMoveError,
    ValidationError,
)
from notekeeper.models import Document, Folder
from notekeeper.schemas.folder import FolderCreate, FolderUpdate
from notekeeper.services import FolderService


def _create(svc: FolderService, name: str, parent_id=None, **kwargs) -> Folder:
    return svc.create_folder(FolderCreate(name=name, parent_id=parent_id, **kwargs))


class TestCreateAndUpdate:

    def test_create_top_level(self, storage):
        svc = FolderService(storage)
        folder = _create(svc, "Top")
        assert folder.parent_id is None
        assert storage.folders.exists(folder.id)

    def test_self_parent_rejected(self, storage):
        svc = FolderService(storage)
        with pytest.raises(InvalidFolderMoveError):
            _create(svc, "Loop", parent_id="same", id="same")

    def test_missing_parent_rejected(self, storage):
        with pytest.raises(FolderNotFoundError):
            _create(FolderService(storage), "Orphan", parent_id="ghost")

    def test_new_folder_under_its_own_orphan_rejected(self, storage):
        storage.folders.save(Folder(id="child", name="Child", parent_id="late"))
        with pytest.raises(InvalidFolderMoveError):
            _create(FolderService(storage), "Late", parent_id="child", id="late")

    def test_clear_description(self, storage):
        svc = FolderService(storage)
        folder = _create(svc, "F", description="something")
        updated = svc.update_folder(folder.id, FolderUpdate.model_validate({"description": None}))
        assert updated.description is None
        assert updated.name == "F"

    def test_move_under_descendant_rejected(self, storage):
        svc = FolderService(storage)
        a = _create(svc, "A")
        b = _create(svc, "B", parent_id=a.id)
        with pytest.raises(InvalidFolderMoveError):
            svc.update_folder(a.id, FolderUpdate(parent_id=b.id))

    def test_root_cannot_be_modified(self, storage):
        with pytest.raises(ValidationError):
            FolderService(storage).update_folder("root", FolderUpdate(name="x"))


class TestDelete:

    def test_not_empty_carries_counts(self, storage):
        svc = FolderService(storage)
        folder = _create(svc, "Full")
        _create(svc, "Sub", parent_id=folder.id)
        storage.documents.save(Document(id="d1", title="Doc", folder_id=folder.id))

        with pytest.raises(FolderNotEmptyError) as exc_info:
            svc.delete_folder(folder.id)
        assert exc_info.value.details["document_count"] == 1
        assert exc_info.value.details["subfolder_count"] == 1

    def test_root_cannot_be_deleted(self, storage):
        with pytest.raises(ValidationError):
            FolderService(storage).delete_folder("root")


class TestPathAndTree:

    def test_path_survives_cycle(self, storage):
        storage.folders.save(Folder(id="x", name="X", parent_id="y"))
        storage.folders.save(Folder(id="y", name="Y", parent_id="x"))
        path = FolderService(storage).get_folder_path("x")
        assert [f.id for f in path] == ["y", "x"]

    def test_root_path_is_empty(self, storage):
        assert FolderService(storage).get_folder_path("root") == []

    def test_orphan_attached_at_top_level(self, storage):
        storage.folders.save(Folder(id="orphan", name="Orphan", parent_id="gone"))
        storage.folders.save(Folder(id="top", name="Top"))

        tree = FolderService(storage).get_tree()
        assert [n.id for n in tree] == ["orphan", "top"]
        assert tree[0].parent_id == "gone"

    def test_cycle_members_expanded_once(self, storage):
        storage.folders.save(Folder(id="x", name="X", parent_id="y"))
        storage.folders.save(Folder(id="y", name="Y", parent_id="x"))

        tree = FolderService(storage).get_tree()
        assert [n.id for n in tree] == ["x"]
        assert [c.id for c in tree[0].children] == ["y"]
        assert tree[0].children[0].children == []

    def test_document_counts(self, storage):
        storage.folders.save(Folder(id="f", name="F"))
        storage.documents.save(Document(id="d1", title="1", folder_id="f"))
        storage.documents.save(Document(id="d2", title="2"))

        tree = FolderService(storage).get_tree()
        assert tree[0].document_count == 1

"""Stored record models (one JSON file per record)."""

from .base import RecordModel, ROOT_FOLDER_ID, utcnow
from .document import Document
from .folder import Folder, root_folder

__all__ = ["RecordModel", "ROOT_FOLDER_ID", "utcnow", "Document", "Folder", "root_folder"]

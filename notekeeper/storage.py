"""File storage wiring: one Storage per data directory."""

import os
from functools import lru_cache
from pathlib import Path

from .core.config import settings
from .repositories import DocumentRepository, FolderRepository


class Storage:
    """Document and folder repositories rooted at one data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.documents = DocumentRepository(self.data_dir / "documents")
        self.folders = FolderRepository(self.data_dir / "folders")

    def ensure_directories(self) -> None:
        self.documents.ensure_directory()
        self.folders.ensure_directory()

    def is_available(self) -> bool:
        """True when both record directories exist and are writable."""
        return all(
            path.is_dir() and os.access(path, os.R_OK | os.W_OK)
            for path in (self.documents.directory, self.folders.directory)
        )


@lru_cache()
def _default_storage() -> Storage:
    return Storage(settings.data_dir)


def get_storage() -> Storage:
    """FastAPI dependency returning the configured Storage.

    Tests override this dependency to point at a temporary directory.
    """
    return _default_storage()

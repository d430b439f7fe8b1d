"""Exception hierarchy for Notekeeper.

Every error the API reports deliberately is a ``NotekeeperException``.
Subclasses pin the HTTP status and error code; the single exception handler
in ``middleware/exception_handler.py`` renders them as
``{"error", "message", "details"}``.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable codes returned in the ``error`` field."""

    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"

    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    FOLDER_NOT_EMPTY = "FOLDER_NOT_EMPTY"
    INVALID_FOLDER_MOVE = "INVALID_FOLDER_MOVE"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class NotekeeperException(Exception):
    """Base class. Carries a message, an ErrorCode, an HTTP status and details."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class DocumentNotFoundError(NotekeeperException):
    """No ``documents/<id>.json`` for the requested id."""

    error_code = ErrorCode.DOCUMENT_NOT_FOUND
    status_code = 404

    def __init__(self, doc_id: str):
        super().__init__(f"Document not found: {doc_id}", {"doc_id": doc_id})


class FolderNotFoundError(NotekeeperException):
    """No ``folders/<id>.json`` for the requested id."""

    error_code = ErrorCode.FOLDER_NOT_FOUND
    status_code = 404

    def __init__(self, folder_id: str):
        super().__init__(f"Folder not found: {folder_id}", {"folder_id": folder_id})


class FolderNotEmptyError(NotekeeperException):
    error_code = ErrorCode.FOLDER_NOT_EMPTY
    status_code = 409

    def __init__(self, folder_id: str, document_count: int, subfolder_count: int):
        super().__init__(
            f"Folder {folder_id} still contains {document_count} document(s) "
            f"and {subfolder_count} subfolder(s)",
            {
                "folder_id": folder_id,
                "document_count": document_count,
                "subfolder_count": subfolder_count,
            },
        )


class InvalidFolderMoveError(NotekeeperException):
    """Re-parenting would put a folder inside itself."""

    error_code = ErrorCode.INVALID_FOLDER_MOVE
    status_code = 400

    def __init__(self, folder_id: str, parent_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot move folder {folder_id} under {parent_id}",
            {"folder_id": folder_id, "parent_id": parent_id},
        )


class ValidationError(NotekeeperException):
    """Bad client input that pydantic cannot catch (ids, queries, reserved names)."""

    error_code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)


class StorageError(NotekeeperException):
    """A record file could not be read, parsed, written or removed."""

    error_code = ErrorCode.STORAGE_ERROR
    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {"original_error": str(original_error)} if original_error else None
        super().__init__(message, details)

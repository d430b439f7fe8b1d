"""Base repository: one JSON file per record in a directory.

Subclasses set ``model_class`` and ``not_found_error``; the base provides
listing, lookup, atomic save and delete. Record ids become file stems, so
every id is validated before it touches the filesystem.
"""

import logging
import os
import re
import threading
from pathlib import Path
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import NotekeeperException, StorageError, ValidationError
from ..models.base import RecordModel

ModelT = TypeVar("ModelT", bound=RecordModel)

_VALID_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

logger = logging.getLogger(__name__)


def validate_record_id(record_id: str) -> str:
    """Reject ids that are not safe file stems (path separators, dots, etc.)."""
    if not isinstance(record_id, str) or not _VALID_ID_RE.match(record_id):
        raise ValidationError(f"Invalid id: {record_id!r}", field="id")
    return record_id


class BaseRepository(Generic[ModelT]):
    """Shared JSON-file storage logic.

    Class variables to set in subclasses:
        model_class:     The pydantic record model (e.g., Document)
        not_found_error: Exception class to raise from get_by_id
    """

    model_class: Type[ModelT]
    not_found_error: Type[NotekeeperException]

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, record_id: str) -> Path:
        return self.directory / f"{validate_record_id(record_id)}.json"

    def _read(self, path: Path) -> ModelT:
        try:
            return self.model_class.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, PydanticValidationError) as e:
            raise StorageError(f"Could not read record file {path.name}", e) from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, record_id: str) -> ModelT:
        """Get record by id. Raises not_found_error if missing."""
        record = self.get_by_id_optional(record_id)
        if record is None:
            raise self.not_found_error(record_id)
        return record

    def get_by_id_optional(self, record_id: str) -> Optional[ModelT]:
        """Get record by id, or None if there is no file for it."""
        path = self._path_for(record_id)
        if not path.is_file():
            return None
        return self._read(path)

    def exists(self, record_id: str) -> bool:
        return self._path_for(record_id).is_file()

    def get_all(self) -> List[ModelT]:
        """Every readable record. Corrupt files are logged and skipped."""
        if not self.directory.is_dir():
            return []

        records: List[ModelT] = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                records.append(self._read(path))
            except StorageError as e:
                logger.warning(
                    "Skipping unreadable record file",
                    extra={"file": str(path), "error": e.details.get("original_error")},
                )
        return records

    def count(self) -> int:
        """Number of readable records, so it always agrees with get_all()."""
        return len(self.get_all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, record: ModelT) -> ModelT:
        """Write the record atomically: temp file in the same directory, then rename."""
        path = self._path_for(record.id)
        payload = record.model_dump_json(by_alias=True, indent=2)
        tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}.{threading.get_ident()}")
        with self._lock:
            try:
                self.ensure_directory()
                tmp_path.write_text(payload + "\n", encoding="utf-8")
                tmp_path.replace(path)
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                raise StorageError(f"Could not write record file {path.name}", e) from e
        return record

    def delete(self, record_id: str) -> bool:
        """Remove the record file. Returns False if it did not exist."""
        path = self._path_for(record_id)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            except OSError as e:
                raise StorageError(f"Could not delete record file {path.name}", e) from e
        return True

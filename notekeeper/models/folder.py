"""Folder record."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from .base import RecordModel, ROOT_FOLDER_ID, utcnow


class Folder(RecordModel):
    """A folder, stored as ``folders/<id>.json``. Forms a tree via parent_id."""

    name: str
    description: Optional[str] = None
    # None = child of the root folder
    parent_id: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def root_folder() -> Folder:
    """The synthetic root folder returned for id ``root``."""
    return Folder(
        id=ROOT_FOLDER_ID,
        name="Home",
        parent_id=None,
        created_at=_EPOCH,
        updated_at=_EPOCH,
    )

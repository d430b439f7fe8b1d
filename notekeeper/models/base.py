"""Shared base for stored records.

Records are written with camelCase keys (``folderId``, ``createdAt``) so the
files and the API share one wire format.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Synthetic folder standing for "no folder". Never stored.
ROOT_FOLDER_ID = "root"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordModel(BaseModel):
    """Base for every persisted record; ``id`` doubles as the file stem."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str

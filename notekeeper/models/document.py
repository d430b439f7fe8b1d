"""Document record."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import RecordModel, utcnow


class Document(RecordModel):
    """A note, stored as ``documents/<id>.json``."""

    title: str
    # Serialized rich-text raw content (blocks + entityMap)
    content: str = ""
    tags: List[str] = Field(default_factory=list)
    # None = top level (the synthetic root folder)
    folder_id: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

"""Validators shared by document and folder schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.base import ROOT_FOLDER_ID


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def normalize_folder_ref(v: Optional[str]) -> Optional[str]:
    """'root' and blank references both mean "no folder"."""
    if v is None:
        return None
    v = v.strip()
    if not v or v == ROOT_FOLDER_ID:
        return None
    return v


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip tags, drop empty ones, keep the first occurrence of duplicates."""
    result: List[str] = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in result:
            result.append(tag)
    return result


def normalize_optional_id(v: Optional[str]) -> Optional[str]:
    """Treat an empty client-supplied id as absent."""
    if v is None:
        return None
    v = v.strip()
    return v or None

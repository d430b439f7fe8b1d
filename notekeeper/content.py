"""Helpers for the editor's serialized raw content.

A document's ``content`` field holds the rich-text editor's raw content as a
JSON string::

    {"blocks": [{"key": "a1b2c", "text": "Hello", "type": "unstyled",
                 "depth": 0, "inlineStyleRanges": [], "entityRanges": [],
                 "data": {}}],
     "entityMap": {"0": {"type": "LINK", "mutability": "MUTABLE",
                         "data": {"url": "https://example.com"}}}}

Nothing here mutates content; editing stays in the browser.
"""

import json
import re
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

CONTENT_PREVIEW_LENGTH = 120
"""Characters of the first block shown in document cards."""

NO_PREVIEW_TEXT = "No content preview available"
UNPARSABLE_PREVIEW_TEXT = "Unable to parse content"

LINK_ENTITY_TYPE = "LINK"

_URL_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


class _RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class InlineStyleRange(_RawModel):
    offset: int
    length: int
    style: str


class EntityRange(_RawModel):
    offset: int
    length: int
    key: int


class RawBlock(_RawModel):
    key: str = ""
    text: str = ""
    type: str = "unstyled"
    depth: int = 0
    inline_style_ranges: List[InlineStyleRange] = Field(default_factory=list)
    entity_ranges: List[EntityRange] = Field(default_factory=list)
    data: Dict[str, Any] = Field(default_factory=dict)


class RawEntity(_RawModel):
    type: str
    mutability: str = "MUTABLE"
    data: Dict[str, Any] = Field(default_factory=dict)


class RawContent(_RawModel):
    blocks: List[RawBlock]
    entity_map: Dict[str, RawEntity] = Field(default_factory=dict)


class LinkRef(_RawModel):
    """A LINK entity applied to a range of block text."""
    block_key: str
    text: str
    url: str


def parse_raw_content(content: Optional[str]) -> Optional[RawContent]:
    """Parse serialized raw content, or return None if it is not raw content."""
    if not content:
        return None
    try:
        return RawContent.model_validate_json(content)
    except PydanticValidationError:
        return None


def extract_plain_text(content: Optional[str]) -> str:
    """Block texts joined by newlines; the raw string when it does not parse."""
    raw = parse_raw_content(content)
    if raw is None:
        return content or ""
    return "\n".join(block.text for block in raw.blocks)


def _is_json(content: Optional[str]) -> bool:
    try:
        json.loads(content or "")
    except ValueError:
        return False
    return True


def generate_content_preview(content: Optional[str]) -> str:
    """First block's text, truncated to CONTENT_PREVIEW_LENGTH with '...'."""
    raw = parse_raw_content(content)
    if raw is None:
        # Valid JSON of another shape just has nothing to preview.
        return NO_PREVIEW_TEXT if _is_json(content) else UNPARSABLE_PREVIEW_TEXT
    if not raw.blocks or not raw.blocks[0].text:
        return NO_PREVIEW_TEXT
    text = raw.blocks[0].text
    if len(text) > CONTENT_PREVIEW_LENGTH:
        return text[:CONTENT_PREVIEW_LENGTH] + "..."
    return text


def normalize_link_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already carries an http(s) scheme."""
    formatted = url.strip()
    if formatted and not _URL_SCHEME_RE.match(formatted):
        formatted = "https://" + formatted
    return formatted


def extract_links(content: Optional[str]) -> List[LinkRef]:
    """Every LINK entity range in block order."""
    raw = parse_raw_content(content)
    if raw is None:
        return []

    links: List[LinkRef] = []
    for block in raw.blocks:
        for entity_range in block.entity_ranges:
            entity = raw.entity_map.get(str(entity_range.key))
            if entity is None or entity.type.upper() != LINK_ENTITY_TYPE:
                continue
            url = entity.data.get("url") or entity.data.get("href") or ""
            if not isinstance(url, str):
                continue
            start = entity_range.offset
            links.append(
                LinkRef(
                    block_key=block.key,
                    text=block.text[start:start + entity_range.length],
                    url=normalize_link_url(url),
                )
            )
    return links


def empty_content() -> str:
    """Serialized raw content of an empty editor document."""
    block = RawBlock(key=uuid.uuid4().hex[:5])
    return json.dumps(
        RawContent(blocks=[block]).model_dump(by_alias=True),
        separators=(",", ":"),
    )

"""Shared test fixtures for the Notekeeper test suite.

Every test gets a fresh data directory under pytest's ``tmp_path``: the
``get_storage`` dependency is overridden, so nothing touches ``./data``.
"""

import json
import os
import tempfile

# Quiet, human-readable logs and a throwaway default data dir before any app imports.
os.environ["LOG_FORMAT"] = "text"
os.environ["ENVIRONMENT"] = "development"
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="notekeeper-test-")

import pytest
from fastapi.testclient import TestClient

from notekeeper.main import app
from notekeeper.middleware.request_context import _rate_buckets
from notekeeper.storage import Storage, get_storage


@pytest.fixture()
def storage(tmp_path) -> Storage:
    """Per-test storage rooted in a temporary directory."""
    store = Storage(tmp_path / "data")
    store.ensure_directories()
    return store


@pytest.fixture()
def client(storage):
    """FastAPI TestClient with the storage dependency pointed at the test directory."""
    app.dependency_overrides[get_storage] = lambda: storage
    _rate_buckets.clear()  # Reset rate limiter so tests don't hit 429
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_content(*texts: str, links=None) -> str:
    """Serialized raw editor content with one unstyled block per text.

    *links* is a list of ``(block_index, offset, length, url)`` tuples; each
    becomes a LINK entity applied to that block range.
    """
    blocks = [
        {
            "key": f"b{i}",
            "text": text,
            "type": "unstyled",
            "depth": 0,
            "inlineStyleRanges": [],
            "entityRanges": [],
            "data": {},
        }
        for i, text in enumerate(texts)
    ]
    entity_map = {}
    for entity_key, (block_index, offset, length, url) in enumerate(links or []):
        blocks[block_index]["entityRanges"].append(
            {"offset": offset, "length": length, "key": entity_key}
        )
        entity_map[str(entity_key)] = {
            "type": "LINK",
            "mutability": "MUTABLE",
            "data": {"url": url},
        }
    return json.dumps({"blocks": blocks, "entityMap": entity_map})


def make_document(
    title: str = "Test Document",
    content: str = None,
    tags=None,
    **overrides,
) -> dict:
    """Factory for document creation payloads."""
    payload = {
        "title": title,
        "content": content if content is not None else make_content("Hello world."),
        "tags": tags if tags is not None else [],
    }
    payload.update(overrides)
    return payload


def make_folder(name: str = "Test Folder", **overrides) -> dict:
    """Factory for folder creation payloads."""
    payload = {"name": name}
    payload.update(overrides)
    return payload

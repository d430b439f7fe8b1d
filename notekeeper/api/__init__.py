"""API routes."""

from .documents import router as documents_router, tags_router
from .folders import router as folders_router, tree_router
from .search import router as search_router

__all__ = [
    "documents_router",
    "tags_router",
    "folders_router",
    "tree_router",
    "search_router",
]

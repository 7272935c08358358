"""Bookmark store adapters sharing one async contract."""

from .base import BookmarkStore, NodeNotFoundError, StoreError, StoreReadError, StoreWriteError
from .chromium import ChromiumBookmarkFile
from .memory import InMemoryBookmarkStore

__all__ = [
    "BookmarkStore",
    "ChromiumBookmarkFile",
    "InMemoryBookmarkStore",
    "NodeNotFoundError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
]

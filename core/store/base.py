"""Async contract for tree-structured bookmark stores."""

from __future__ import annotations

from typing import List, Optional, Protocol

from core.organizer.models import TreeNode


class StoreError(RuntimeError):
    """Base class for bookmark store failures."""


class StoreReadError(StoreError):
    pass


class StoreWriteError(StoreError):
    pass


class NodeNotFoundError(StoreError):
    def __init__(self, node_id: str):
        super().__init__(f"No bookmark node with id {node_id!r}")
        self.node_id = node_id


class BookmarkStore(Protocol):
    async def fetch_tree(self) -> List[TreeNode]: ...

    async def list_children(self, folder_id: str) -> List[TreeNode]: ...

    async def create_entry(self, parent_id: str, title: str, url: Optional[str] = None) -> TreeNode: ...

    async def delete_subtree(self, node_id: str) -> None: ...

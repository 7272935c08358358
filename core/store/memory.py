"""Dict-backed bookmark store kept entirely in memory."""

from __future__ import annotations

import itertools
from typing import Dict, List, Optional, Sequence, Union

from core.organizer.models import TreeNode

from .base import NodeNotFoundError, StoreWriteError


class InMemoryBookmarkStore:
    """Mutable bookmark tree with the same async surface as a real store.

    Every `fetch_tree` call returns a fresh immutable snapshot, so callers
    never observe later mutations through a tree they already hold.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, dict] = {}
        self._roots: List[str] = []
        self._ids = itertools.count(1)

    @classmethod
    def from_tree(cls, tree: Union[dict, Sequence[dict]]) -> "InMemoryBookmarkStore":
        """Build a store from nested dicts: {"id", "title", "url", "children"}."""
        store = cls()
        roots = [tree] if isinstance(tree, dict) else list(tree)
        for raw in roots:
            store._roots.append(store._insert(raw, parent_id=None))
        return store

    async def fetch_tree(self) -> List[TreeNode]:
        return [self._snapshot(root_id) for root_id in self._roots]

    async def list_children(self, folder_id: str) -> List[TreeNode]:
        node = self._get(folder_id)
        return [self._snapshot(child_id, deep=False) for child_id in node["children"]]

    async def create_entry(self, parent_id: str, title: str, url: Optional[str] = None) -> TreeNode:
        parent = self._get(parent_id)
        if parent["url"]:
            raise StoreWriteError(f"Cannot create entries under bookmark {parent_id!r}")
        node_id = self._insert({"title": title, "url": url}, parent_id=parent_id)
        return self._snapshot(node_id)

    async def delete_subtree(self, node_id: str) -> None:
        node = self._get(node_id)
        if node["parent"] is None:
            raise StoreWriteError(f"Cannot remove root node {node_id!r}")
        self._nodes[node["parent"]]["children"].remove(node_id)
        self._drop(node_id)

    def snapshot_dict(self) -> List[dict]:
        """Export the tree as nested dicts (ids included)."""
        return [self._to_dict(root_id) for root_id in self._roots]

    def _insert(self, raw: dict, parent_id: Optional[str]) -> str:
        node_id = str(raw.get("id") or self._next_id())
        if node_id in self._nodes:
            raise StoreWriteError(f"Duplicate node id {node_id!r}")
        self._nodes[node_id] = {
            "id": node_id,
            "title": str(raw.get("title") or ""),
            "url": raw.get("url") or None,
            "parent": parent_id,
            "children": [],
        }
        if parent_id is not None:
            self._nodes[parent_id]["children"].append(node_id)
        for child in raw.get("children") or []:
            self._insert(child, parent_id=node_id)
        return node_id

    def _next_id(self) -> str:
        while True:
            candidate = str(next(self._ids))
            if candidate not in self._nodes:
                return candidate

    def _get(self, node_id: str) -> dict:
        node = self._nodes.get(str(node_id))
        if node is None:
            raise NodeNotFoundError(str(node_id))
        return node

    def _drop(self, node_id: str) -> None:
        node = self._nodes.pop(node_id)
        for child_id in node["children"]:
            self._drop(child_id)

    def _snapshot(self, node_id: str, deep: bool = True) -> TreeNode:
        node = self._nodes[node_id]
        children = tuple(self._snapshot(c) for c in node["children"]) if deep else ()
        return TreeNode(id=node["id"], title=node["title"], url=node["url"], children=children)

    def _to_dict(self, node_id: str) -> dict:
        node = self._nodes[node_id]
        out = {"id": node["id"], "title": node["title"]}
        if node["url"]:
            out["url"] = node["url"]
        if node["children"] or not node["url"]:
            out["children"] = [self._to_dict(c) for c in node["children"]]
        return out

"""Bookmark store backed by a Chromium profile's `Bookmarks` JSON file.

File layout:
- { "checksum": "...", "roots": { "bookmark_bar": {...}, "other": {...}, "synced": {...} }, "version": 1 }
- Folder nodes: { "type": "folder", "id", "guid", "name", "date_added", "date_modified", "children": [...] }
- URL nodes:    { "type": "url", "id", "guid", "name", "date_added", "url" }

The tree is presented the way the browser's extension API shows it: one
synthetic root (id "0") whose children are the permanent folders in
bookmark_bar, other, synced order.

The parsed document is kept between calls and re-read only when the file's
mtime or size changes. Every mutation is written back before it returns.
The stale checksum is dropped on write; Chromium recomputes it on next save.
Close the browser first, or it will overwrite the file on exit.
"""

from __future__ import annotations

import json
import os
import time
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from core.organizer.models import TreeNode

from .base import NodeNotFoundError, StoreReadError, StoreWriteError

ROOT_ID = "0"

# Permanent folders in the order the browser lists them, with fallback names.
PERMANENT_ROOTS = (
    ("bookmark_bar", "Bookmarks bar"),
    ("other", "Other bookmarks"),
    ("synced", "Mobile bookmarks"),
)

# Seconds between 1601-01-01 (Chromium/Windows epoch) and 1970-01-01.
CHROMIUM_EPOCH_OFFSET = 11_644_473_600


def chromium_timestamp(now: Optional[float] = None) -> str:
    """Microseconds since 1601-01-01, as Chromium stores them."""
    ts = time.time() if now is None else now
    return str(int((ts + CHROMIUM_EPOCH_OFFSET) * 1_000_000))


class ChromiumBookmarkFile:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()
        self._data: Optional[Dict] = None
        self._stamp: Optional[Tuple[int, int]] = None
        # id -> (node, parent); parent is None for permanent folders.
        self._index: Dict[str, Tuple[Dict, Optional[Dict]]] = {}
        self._max_id = 0

    async def fetch_tree(self) -> List[TreeNode]:
        data = self._load()
        children = tuple(_snapshot(node, title) for node, title in _permanent_roots(data))
        return [TreeNode(id=ROOT_ID, title="", children=children)]

    async def list_children(self, folder_id: str) -> List[TreeNode]:
        data = self._load()
        if str(folder_id) == ROOT_ID:
            return [_snapshot(node, title, deep=False) for node, title in _permanent_roots(data)]
        node, _parent = self._find(folder_id)
        if node.get("type") == "url":
            return []
        return [_snapshot(child, deep=False) for child in node.get("children") or []]

    async def create_entry(self, parent_id: str, title: str, url: Optional[str] = None) -> TreeNode:
        data = self._load()
        if str(parent_id) == ROOT_ID:
            raise StoreWriteError("Cannot create entries directly under the root")
        parent, _ = self._find(parent_id)
        if parent.get("type") == "url":
            raise StoreWriteError(f"Cannot create entries under bookmark {parent_id!r}")

        now = chromium_timestamp()
        node_id = str(self._max_id + 1)
        node: Dict = {
            "date_added": now,
            "guid": str(uuid.uuid4()),
            "id": node_id,
            "name": title,
        }
        if url:
            node["type"] = "url"
            node["url"] = url
        else:
            node["type"] = "folder"
            node["date_modified"] = "0"
            node["children"] = []

        parent.setdefault("children", []).append(node)
        parent["date_modified"] = now
        self._index[node_id] = (node, parent)
        self._max_id += 1
        self._save(data)
        return _snapshot(node)

    async def delete_subtree(self, node_id: str) -> None:
        data = self._load()
        node, parent = self._find(node_id)
        if parent is None:
            raise StoreWriteError(f"Cannot remove permanent folder {node_id!r}")
        parent["children"] = [child for child in parent["children"] if child is not node]
        parent["date_modified"] = chromium_timestamp()
        stack = [node]
        while stack:
            current = stack.pop()
            self._index.pop(str(current.get("id")), None)
            stack.extend(current.get("children") or [])
        self._save(data)

    def _find(self, node_id: str) -> Tuple[Dict, Optional[Dict]]:
        found = self._index.get(str(node_id))
        if found is None:
            raise NodeNotFoundError(str(node_id))
        return found

    def _file_stamp(self) -> Tuple[int, int]:
        st = self.path.stat()
        return st.st_mtime_ns, st.st_size

    def _load(self) -> Dict:
        try:
            stamp = self._file_stamp()
            if self._data is not None and stamp == self._stamp:
                return self._data
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._forget()
            raise StoreReadError(f"Cannot read bookmarks file {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("roots"), dict):
            self._forget()
            raise StoreReadError(f"Not a Chromium bookmarks file (missing roots): {self.path}")

        self._data = data
        self._stamp = stamp
        self._index, self._max_id = _build_index(data)
        return data

    def _save(self, data: Dict) -> None:
        data.pop("checksum", None)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, separators=(",", ":")), encoding="utf-8")
            os.replace(tmp, self.path)
            self._stamp = self._file_stamp()
        except OSError as exc:
            # The in-memory document no longer matches the file.
            self._forget()
            raise StoreWriteError(f"Cannot write bookmarks file {self.path}: {exc}") from exc

    def _forget(self) -> None:
        self._data = None
        self._stamp = None
        self._index = {}
        self._max_id = 0


def _permanent_roots(data: Dict) -> List[Tuple[Dict, str]]:
    roots = data["roots"]
    out = []
    for key, fallback in PERMANENT_ROOTS:
        node = roots.get(key)
        if isinstance(node, dict):
            out.append((node, str(node.get("name") or fallback)))
    return out


def _snapshot(node: Dict, title: Optional[str] = None, deep: bool = True) -> TreeNode:
    is_url = node.get("type") == "url"
    children = ()
    if deep:
        children = tuple(_snapshot(child) for child in node.get("children") or [])
    return TreeNode(
        id=str(node.get("id") or ""),
        title=str(node.get("name") or "") if title is None else title,
        url=(node.get("url") or None) if is_url else None,
        children=children,
    )


def _build_index(data: Dict) -> Tuple[Dict[str, Tuple[Dict, Optional[Dict]]], int]:
    """Map every node id to (node, parent) and find the highest numeric id."""
    index: Dict[str, Tuple[Dict, Optional[Dict]]] = {}
    highest = 0
    stack: List[Tuple[Dict, Optional[Dict]]] = [(node, None) for node, _ in _permanent_roots(data)]
    while stack:
        node, parent = stack.pop()
        node_id = str(node.get("id"))
        index[node_id] = (node, parent)
        if node_id.isdigit():
            highest = max(highest, int(node_id))
        for child in node.get("children") or []:
            stack.append((child, node))
    return index, highest

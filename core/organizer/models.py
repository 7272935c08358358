"""Data models for bookmark grouping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class TreeNode:
    """Immutable snapshot of one node in a bookmark store.

    A node with a URL is a bookmark; a node without one is a folder.
    """

    id: str
    title: str = ""
    url: Optional[str] = None
    children: Tuple["TreeNode", ...] = ()

    @property
    def is_bookmark(self) -> bool:
        return bool(self.url)

    @property
    def is_folder(self) -> bool:
        return not self.url


@dataclass(frozen=True)
class BookmarkRecord:
    id: str
    title: str
    url: str
    path: str


@dataclass
class DomainGroup:
    domain: str
    items: list = field(default_factory=list)

"""Flatten a bookmark tree into records that remember their folder path."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from core.site_policy import NO_TITLE, PATH_SEPARATOR, display_title

from .models import BookmarkRecord, TreeNode


def flatten(root: TreeNode) -> List[BookmarkRecord]:
    """Depth-first walk of `root`, one record per bookmark in store order.

    A record's path lists its ancestors' non-empty titles, never its own.
    """
    out: List[BookmarkRecord] = []
    _walk(root, [], out)
    return out


def flatten_roots(roots: Iterable[TreeNode]) -> List[BookmarkRecord]:
    out: List[BookmarkRecord] = []
    for root in roots:
        out.extend(flatten(root))
    return out


async def collect_bookmarks(store, prune: Optional[Callable] = None) -> List[BookmarkRecord]:
    """Fetch a fresh tree snapshot from `store` and flatten every root.

    `prune`, when given, maps the fetched roots to the roots to flatten.
    """
    roots = await store.fetch_tree()
    if prune is not None:
        roots = prune(roots)
    return flatten_roots(roots)


def _walk(node: TreeNode, path_parts: Sequence[str], out: List[BookmarkRecord]) -> None:
    next_path = [*path_parts, node.title] if node.title else list(path_parts)

    if node.url:
        out.append(
            BookmarkRecord(
                id=node.id,
                title=display_title(node.title, fallback=NO_TITLE),
                url=node.url,
                path=PATH_SEPARATOR.join(path_parts),
            )
        )

    # Bookmarks normally have no children; walk them anyway if present.
    for child in node.children or ():
        _walk(child, next_path, out)

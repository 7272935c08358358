"""Rebuild the "Sorted by Website" folder from a domain grouping.

Steps, each store call awaited before the next one is issued:
- Locate the parent folder ("Other bookmarks", else a positional guess)
- Find or create the main folder under it
- Remove every child of the main folder
- Create one folder per domain group and one bookmark per item

There is no rollback. A failure midway leaves the main folder partially
rebuilt; the next run clears it again.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence

from core.site_policy import MAIN_FOLDER_TITLE, TARGET_PARENT_TITLE

from .models import DomainGroup, TreeNode


def target_parent_node(roots: Sequence[TreeNode], parent_title: str = TARGET_PARENT_TITLE) -> TreeNode:
    """Folder that holds the main folder.

    Looks for `parent_title` among the first root's children, then falls back
    to the second child, the first child, and finally the root itself.
    """
    root = roots[0]
    children = list(root.children or ())

    for child in children:
        if child.title == parent_title:
            return child
    if len(children) > 1:
        return children[1]
    if children:
        return children[0]
    return root


async def locate_target_parent(store, parent_title: str = TARGET_PARENT_TITLE) -> str:
    tree = await store.fetch_tree()
    return target_parent_node(tree, parent_title).id


def without_main_folder(
    roots: Sequence[TreeNode],
    main_folder_title: str = MAIN_FOLDER_TITLE,
    parent_title: str = TARGET_PARENT_TITLE,
) -> List[TreeNode]:
    """Copy of `roots` minus the folders a previous apply produced."""
    if not roots:
        return list(roots)
    parent = target_parent_node(roots, parent_title)

    def prune(node: TreeNode) -> TreeNode:
        if node.id == parent.id:
            kept = tuple(c for c in node.children if not (c.is_folder and c.title == main_folder_title))
            return replace(node, children=kept)
        if not node.children:
            return node
        return replace(node, children=tuple(prune(c) for c in node.children))

    return [prune(root) for root in roots]


async def find_or_create_folder(store, parent_id: str, title: str) -> str:
    children = await store.list_children(parent_id)
    for child in children:
        if child.is_folder and child.title == title:
            return child.id
    created = await store.create_entry(parent_id, title)
    return created.id


async def clear_folder_children(store, folder_id: str) -> None:
    children = await store.list_children(folder_id)
    for child in children:
        await store.delete_subtree(child.id)


async def apply_grouping(
    store,
    grouped: Iterable[DomainGroup],
    main_folder_title: str = MAIN_FOLDER_TITLE,
    parent_title: str = TARGET_PARENT_TITLE,
) -> str:
    """Replace the main folder's contents with `grouped`; returns its id."""
    target_parent = await locate_target_parent(store, parent_title)
    main_folder_id = await find_or_create_folder(store, target_parent, main_folder_title)

    await clear_folder_children(store, main_folder_id)

    for group in grouped:
        domain_folder = await store.create_entry(main_folder_id, group.domain)
        for item in group.items:
            await store.create_entry(domain_folder.id, item.title, item.url)

    return main_folder_id

import asyncio

from core.organizer.flatten import collect_bookmarks, flatten, flatten_roots
from core.organizer.models import TreeNode
from core.store.memory import InMemoryBookmarkStore
from tests.bookmark_trees import chrome_like_tree


def _roots():
    return asyncio.run(InMemoryBookmarkStore.from_tree(chrome_like_tree()).fetch_tree())


def test_flatten_records_ancestor_path_without_own_title():
    records = flatten(_roots()[0])
    docs = next(r for r in records if r.id == "13")

    assert docs.title == "Docs"
    assert docs.path == "Bookmarks bar / Work / Projects"


def test_flatten_skips_empty_folder_titles_in_paths():
    root = TreeNode(
        id="0",
        title="",
        children=(
            TreeNode(
                id="1",
                title="Work",
                children=(
                    TreeNode(
                        id="2",
                        title="",
                        children=(
                            TreeNode(
                                id="3",
                                title="Projects",
                                children=(TreeNode(id="4", title="Docs", url="https://example.com/d"),),
                            ),
                        ),
                    ),
                ),
            ),
        ),
    )

    (record,) = flatten(root)

    assert record.path == "Work / Projects"


def test_flatten_defaults_missing_titles():
    records = flatten(_roots()[0])
    untitled = next(r for r in records if r.id == "14")

    assert untitled.title == "(no title)"
    assert untitled.path == "Bookmarks bar / Work"


def test_flatten_keeps_store_order_and_is_repeatable():
    root = _roots()[0]

    first = flatten(root)
    second = flatten(root)

    assert [r.id for r in first] == ["10", "13", "14", "20", "21"]
    assert first == second


def test_flatten_emits_bookmark_then_walks_its_children():
    odd = TreeNode(
        id="1",
        title="Parent",
        url="https://parent.example.com",
        children=(TreeNode(id="2", title="Child", url="https://child.example.com"),),
    )

    records = flatten(TreeNode(id="0", children=(odd,)))

    assert [r.id for r in records] == ["1", "2"]
    assert records[0].path == ""
    assert records[1].path == "Parent"


def test_flatten_roots_concatenates_in_root_order():
    bar = TreeNode(id="a", title="A", children=(TreeNode(id="a1", title="x", url="https://x.com"),))
    other = TreeNode(id="b", title="B", children=(TreeNode(id="b1", title="y", url="https://y.com"),))

    records = flatten_roots([bar, other])

    assert [(r.id, r.path) for r in records] == [("a1", "A"), ("b1", "B")]


def test_collect_bookmarks_reads_store_snapshot():
    store = InMemoryBookmarkStore.from_tree(chrome_like_tree())

    records = asyncio.run(collect_bookmarks(store))

    assert len(records) == 5

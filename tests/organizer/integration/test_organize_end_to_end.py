import asyncio
import io

import pytest

from core.organizer.flatten import collect_bookmarks
from core.organizer.grouping import group_bookmarks
from core.organizer.pipeline import run_apply
from core.store.chromium import ChromiumBookmarkFile
from core.store.memory import InMemoryBookmarkStore
from tests.bookmark_trees import chromium_bookmarks_file

pytestmark = pytest.mark.integration


def _store():
    return InMemoryBookmarkStore.from_tree(
        {
            "id": "0",
            "children": [
                {
                    "id": "1",
                    "title": "Bookmarks bar",
                    "children": [
                        {"id": "a", "title": "Y", "url": "https://example.com/y"},
                        {"id": "b", "title": "Z", "url": "not-a-url"},
                        {"id": "c", "title": "X", "url": "https://a.example.com/x"},
                    ],
                },
                {"id": "2", "title": "Other bookmarks", "children": []},
            ],
        }
    )


def _summary(grouped):
    return [(g.domain, [i.title for i in g.items]) for g in grouped]


def test_grouping_scenario_with_merged_subdomains():
    records = asyncio.run(collect_bookmarks(_store()))

    assert _summary(group_bookmarks(records, True)) == [("example.com", ["X", "Y"]), ("other", ["Z"])]


def _sorted_folder(store):
    (main,) = store.snapshot_dict()[0]["children"][1]["children"]
    return [(f["title"], [b["title"] for b in f["children"]]) for f in main["children"]]


def test_repeated_apply_does_not_regroup_its_own_output():
    store = _store()

    asyncio.run(run_apply(store, True, stderr=io.StringIO()))
    first = _sorted_folder(store)
    asyncio.run(run_apply(store, True, stderr=io.StringIO()))

    assert first == [("example.com", ["X", "Y"]), ("other", ["Z"])]
    assert _sorted_folder(store) == first


def test_repeated_apply_without_exclusion_reimports_previous_copies():
    store = _store()
    cfg = {"excludeMainFolder": False}

    asyncio.run(run_apply(store, True, cfg, stderr=io.StringIO()))
    asyncio.run(run_apply(store, True, cfg, stderr=io.StringIO()))

    assert _sorted_folder(store) == [("example.com", ["X", "X", "Y", "Y"]), ("other", ["Z", "Z"])]


def test_chromium_file_apply_is_idempotent_on_contents(tmp_path):
    store = ChromiumBookmarkFile(chromium_bookmarks_file(tmp_path))

    def contents():
        roots = asyncio.run(store.fetch_tree())
        other = roots[0].children[1]
        main = next(c for c in other.children if c.title == "Sorted by Website")
        return main.id, [(f.title, [(b.title, b.url) for b in f.children]) for f in main.children]

    asyncio.run(run_apply(store, True, stderr=io.StringIO()))
    first_id, first = contents()
    asyncio.run(run_apply(store, True, stderr=io.StringIO()))
    second_id, second = contents()

    assert first_id == second_id
    assert first == second
    assert [title for title, _ in first] == ["bbc.co.uk", "example.com", "python.org"]


def test_apply_keeps_sorted_copies_once_originals_are_gone():
    store = _store()
    asyncio.run(run_apply(store, True, stderr=io.StringIO()))
    first = _sorted_folder(store)
    for node_id in ("a", "b", "c"):
        asyncio.run(store.delete_subtree(node_id))

    result = asyncio.run(run_apply(store, True, stderr=io.StringIO()))

    assert result.ok
    assert result.folder_id is None
    assert result.status == "Nothing to sort; “Sorted by Website” left unchanged."
    assert _sorted_folder(store) == first


def test_apply_without_exclusion_still_clears_when_nothing_is_found():
    store = InMemoryBookmarkStore.from_tree(
        {
            "id": "0",
            "children": [
                {"id": "1", "title": "Bookmarks bar", "children": []},
                {"id": "2", "title": "Other bookmarks", "children": []},
            ],
        }
    )

    result = asyncio.run(run_apply(store, True, {"excludeMainFolder": False}, stderr=io.StringIO()))

    assert result.ok
    assert result.folder_id is not None

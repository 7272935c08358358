from core.organizer.grouping import group_bookmarks
from core.organizer.models import BookmarkRecord


def _rec(title, url, rid=None):
    return BookmarkRecord(id=rid or title, title=title, url=url, path="")


def test_group_bookmarks_merges_subdomains_and_uses_other_sentinel():
    records = [
        _rec("Y", "https://example.com/y"),
        _rec("Z", "not-a-url"),
        _rec("X", "https://a.example.com/x"),
    ]

    grouped = group_bookmarks(records, True)

    assert [g.domain for g in grouped] == ["example.com", "other"]
    assert [i.title for i in grouped[0].items] == ["X", "Y"]
    assert [i.title for i in grouped[1].items] == ["Z"]


def test_group_bookmarks_keeps_full_hosts_without_merge():
    records = [_rec("X", "https://a.example.com/x"), _rec("Y", "https://example.com/y")]

    grouped = group_bookmarks(records, False)

    assert [g.domain for g in grouped] == ["a.example.com", "example.com"]


def test_group_bookmarks_domains_are_unique_and_sorted():
    records = [
        _rec("b", "https://zeta.org/1"),
        _rec("a", "https://alpha.org/1"),
        _rec("c", "https://www.alpha.org/2"),
        _rec("d", "https://mid.net"),
    ]

    grouped = group_bookmarks(records, True)
    domains = [g.domain for g in grouped]

    assert domains == sorted(set(domains))
    assert domains == ["alpha.org", "mid.net", "zeta.org"]
    assert sum(len(g.items) for g in grouped) == len(records)


def test_group_bookmarks_uses_injected_sort_key():
    records = [_rec("beta", "https://B.com"), _rec("Alpha", "https://a.com"), _rec("alpha2", "https://a.com")]

    grouped = group_bookmarks(records, True, sort_key=str.casefold)

    assert [i.title for i in grouped[0].items] == ["Alpha", "alpha2"]
    assert [g.domain for g in grouped] == ["a.com", "b.com"]


def test_group_bookmarks_uses_injected_suffixes():
    records = [_rec("x", "https://www.example.co.in")]

    assert group_bookmarks(records, True)[0].domain == "co.in"
    assert group_bookmarks(records, True, suffixes={"co.in"})[0].domain == "example.co.in"


def test_group_bookmarks_empty_input():
    assert group_bookmarks([], True) == []


def test_group_bookmarks_collation_key_can_differ_from_code_points():
    records = [_rec("apple", "https://example.com/a"), _rec("Banana", "https://example.com/b")]

    by_code_point = group_bookmarks(records, True, sort_key=str)
    by_collation = group_bookmarks(records, True, sort_key=str.casefold)

    assert [i.title for i in by_code_point[0].items] == ["Banana", "apple"]
    assert [i.title for i in by_collation[0].items] == ["apple", "Banana"]

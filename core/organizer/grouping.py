"""Domain grouping for flattened bookmarks."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from core.site_policy import MULTI_LABEL_SUFFIXES, collation_key

from .models import BookmarkRecord, DomainGroup
from .urls import domain_key_for


def group_bookmarks(
    records: Iterable[BookmarkRecord],
    should_merge: bool,
    suffixes: Iterable[str] = MULTI_LABEL_SUFFIXES,
    sort_key: Callable[[str], object] = collation_key,
) -> List[DomainGroup]:
    """Bucket records by domain key. Groups sort by domain, items by title."""
    suffix_set = frozenset(suffixes)
    buckets: Dict[str, List[BookmarkRecord]] = {}
    for record in records:
        domain = domain_key_for(record.url, should_merge, suffix_set)
        buckets.setdefault(domain, []).append(record)

    grouped: List[DomainGroup] = []
    for domain in sorted(buckets, key=sort_key):
        items = sorted(buckets[domain], key=lambda rec: sort_key(rec.title))
        grouped.append(DomainGroup(domain=domain, items=items))
    return grouped

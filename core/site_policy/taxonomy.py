"""Shared site taxonomy used by the organizer and the preview renderer."""

from __future__ import annotations

# Two-label public suffixes that should keep one more label when merging
# subdomains ("bbc.co.uk" instead of "co.uk").
MULTI_LABEL_SUFFIXES = frozenset(
    {
        "co.uk",
        "org.uk",
        "ac.uk",
        "com.au",
        "net.au",
        "org.au",
        "co.jp",
        "ne.jp",
        "or.jp",
        "co.kr",
        "or.kr",
        "co.nz",
        "org.nz",
    }
)

# Bucket for bookmarks whose URL has no usable hostname.
OTHER_DOMAIN = "other"

NO_TITLE = "(no title)"
PATH_SEPARATOR = " / "

# Destination layout written by the synchronizer.
MAIN_FOLDER_TITLE = "Sorted by Website"
TARGET_PARENT_TITLE = "Other bookmarks"

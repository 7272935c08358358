"""Hostname extraction and domain-key heuristics."""

import re
import urllib.parse
from typing import AbstractSet

from core.site_policy import MULTI_LABEL_SUFFIXES, OTHER_DOMAIN

# Characters a URL host can never contain once parsed.
FORBIDDEN_HOST_CHARS = re.compile(r"[\s\"#%/<>?@\\^`{|}]")


def hostname_of(url: str) -> str:
    """Lowercase hostname of `url`, or "" when it cannot be parsed."""
    try:
        parsed = urllib.parse.urlsplit(str(url or "").strip())
        host = (parsed.hostname or "").lower()
        # Raises ValueError for a non-numeric or out-of-range port.
        parsed.port
    except Exception:
        return ""
    if FORBIDDEN_HOST_CHARS.search(host):
        return ""
    return host


def merge_domain(hostname: str, suffixes: AbstractSet[str] = MULTI_LABEL_SUFFIXES) -> str:
    """Collapse subdomains to the registrable part of `hostname`.

    Keeps the last two labels, or the last three when the last two form a
    known multi-label suffix such as "co.uk". Approximate by design; hosts
    outside the suffix set are not checked against a public suffix list.
    """
    if not hostname:
        return hostname
    labels = [label for label in hostname.split(".") if label]
    if len(labels) <= 2:
        return hostname

    last2 = ".".join(labels[-2:])
    last3 = ".".join(labels[-3:])
    if last2 in suffixes and len(labels) >= 3:
        return last3
    return last2


def domain_key_for(
    url: str,
    should_merge: bool,
    suffixes: AbstractSet[str] = MULTI_LABEL_SUFFIXES,
) -> str:
    host = hostname_of(url)
    if not host:
        return OTHER_DOMAIN
    if not should_merge:
        return host
    return merge_domain(host, suffixes)

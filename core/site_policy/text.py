"""Shared text normalization and ordering helpers."""

from __future__ import annotations

import locale


def collation_key(value: str) -> str:
    """Sort key following the process LC_COLLATE setting (not code points)."""
    return locale.strxfrm(str(value or ""))


def apply_collation_locale(name: str = "") -> str:
    """Switch LC_COLLATE to `name` ("" selects the user's default).

    Falls back to the C locale when the requested one is not installed and
    returns whichever locale ended up active.
    """
    try:
        return locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        return locale.setlocale(locale.LC_COLLATE, "C")


def display_title(title: str, *, fallback: str) -> str:
    """Return the stored title, or `fallback` when it is empty."""
    return title if title else fallback

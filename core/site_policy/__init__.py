"""Shared site classification semantics used across organizer stages."""

from .text import apply_collation_locale, collation_key, display_title
from .taxonomy import (
    MAIN_FOLDER_TITLE,
    MULTI_LABEL_SUFFIXES,
    NO_TITLE,
    OTHER_DOMAIN,
    PATH_SEPARATOR,
    TARGET_PARENT_TITLE,
)

__all__ = [
    "apply_collation_locale",
    "collation_key",
    "display_title",
    "MAIN_FOLDER_TITLE",
    "MULTI_LABEL_SUFFIXES",
    "NO_TITLE",
    "OTHER_DOMAIN",
    "PATH_SEPARATOR",
    "TARGET_PARENT_TITLE",
]

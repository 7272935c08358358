"""Preview and apply triggers.

Each trigger re-reads the store from scratch, never raises, and reports a
short status string. Failure causes go to the diagnostic stream only.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, TextIO

from core.renderer.preview import render_preview
from core.site_policy import apply_collation_locale

from .flatten import collect_bookmarks
from .grouping import group_bookmarks
from .models import DomainGroup
from .settings import DEFAULT_CFG, log, merge_cfg, non_negative_int, suffixes_from_cfg
from .sync import apply_grouping, without_main_folder

STATUS_SCANNING = "Scanning bookmarks…"
STATUS_PREVIEW_READY = "Preview ready."
STATUS_PREVIEW_ERROR = "Error while previewing. Check console."
STATUS_BUILDING = "Building new sorted folder…"
STATUS_APPLY_ERROR = "Error while applying. Check console."


@dataclass
class PreviewResult:
    text: str
    status: str
    ok: bool


@dataclass
class ApplyResult:
    folder_id: Optional[str]
    status: str
    ok: bool


def applied_status(folder_id: str, main_folder_title: str) -> str:
    return f"Done! Created/updated “{main_folder_title}”. (folder id: {folder_id})"


def unchanged_status(main_folder_title: str) -> str:
    return f"Nothing to sort; “{main_folder_title}” left unchanged."


async def build_grouping(store, merge_subdomains: bool, cfg: Dict, stderr=None, verbose=False) -> List[DomainGroup]:
    active = apply_collation_locale(str(cfg.get("collationLocale") or ""))
    log(f"collating with LC_COLLATE={active}", stderr=stderr, verbose=verbose)
    prune = None
    if cfg.get("excludeMainFolder", True):
        prune = partial(
            without_main_folder,
            main_folder_title=_main_folder_title(cfg),
            parent_title=_parent_title(cfg),
        )
    records = await collect_bookmarks(store, prune)
    log(f"collected {len(records)} bookmarks", stderr=stderr, verbose=verbose)
    grouped = group_bookmarks(records, merge_subdomains, suffixes_from_cfg(cfg))
    log(f"grouped into {len(grouped)} domains", stderr=stderr, verbose=verbose)
    return grouped


async def run_preview(
    store,
    merge_subdomains: bool,
    include_folder_path: bool,
    cfg: Optional[Dict] = None,
    *,
    on_status: Optional[Callable[[str], None]] = None,
    stderr: Optional[TextIO] = None,
    verbose: bool = False,
) -> PreviewResult:
    cfg = merge_cfg(cfg, None) if cfg is not None else dict(DEFAULT_CFG)
    stderr = stderr if stderr is not None else sys.stderr
    _report(on_status, STATUS_SCANNING)
    try:
        grouped = await build_grouping(store, merge_subdomains, cfg, stderr=stderr, verbose=verbose)
        text = render_preview(
            grouped,
            include_folder_path=include_folder_path,
            max_domains=non_negative_int(cfg, "maxDomains"),
            max_items_per_domain=non_negative_int(cfg, "maxItemsPerDomain"),
        )
    except Exception as exc:
        _report_failure("preview", exc, stderr)
        _report(on_status, STATUS_PREVIEW_ERROR)
        return PreviewResult(text="", status=STATUS_PREVIEW_ERROR, ok=False)

    _report(on_status, STATUS_PREVIEW_READY)
    return PreviewResult(text=text, status=STATUS_PREVIEW_READY, ok=True)


async def run_apply(
    store,
    merge_subdomains: bool,
    cfg: Optional[Dict] = None,
    *,
    on_status: Optional[Callable[[str], None]] = None,
    stderr: Optional[TextIO] = None,
    verbose: bool = False,
) -> ApplyResult:
    """Group bookmarks and rebuild the main folder. Folder paths are never included."""
    cfg = merge_cfg(cfg, None) if cfg is not None else dict(DEFAULT_CFG)
    stderr = stderr if stderr is not None else sys.stderr
    main_folder_title = _main_folder_title(cfg)
    _report(on_status, STATUS_BUILDING)
    try:
        grouped = await build_grouping(store, merge_subdomains, cfg, stderr=stderr, verbose=verbose)
        if not grouped and cfg.get("excludeMainFolder", True):
            # Clearing now would delete the only remaining copies.
            log("no bookmarks outside the sorted folder; leaving it unchanged", stderr=stderr, verbose=verbose)
            status = unchanged_status(main_folder_title)
            _report(on_status, status)
            return ApplyResult(folder_id=None, status=status, ok=True)
        folder_id = await apply_grouping(
            store,
            grouped,
            main_folder_title=main_folder_title,
            parent_title=_parent_title(cfg),
        )
    except Exception as exc:
        _report_failure("apply", exc, stderr)
        _report(on_status, STATUS_APPLY_ERROR)
        return ApplyResult(folder_id=None, status=STATUS_APPLY_ERROR, ok=False)

    log(f"rebuilt folder {folder_id}", stderr=stderr, verbose=verbose)
    status = applied_status(folder_id, main_folder_title)
    _report(on_status, status)
    return ApplyResult(folder_id=folder_id, status=status, ok=True)


def _main_folder_title(cfg: Dict) -> str:
    return str(cfg.get("mainFolderTitle") or DEFAULT_CFG["mainFolderTitle"])


def _parent_title(cfg: Dict) -> str:
    return str(cfg.get("targetParentTitle") or DEFAULT_CFG["targetParentTitle"])


def _report(on_status: Optional[Callable[[str], None]], status: str) -> None:
    if on_status is not None:
        on_status(status)


def _report_failure(action: str, exc: BaseException, stderr: TextIO) -> None:
    log(f"{action} failed: {exc}", stderr=stderr)
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=stderr)

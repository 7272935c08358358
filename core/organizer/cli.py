#!/usr/bin/env python3
"""Group Chromium bookmarks by website.

Commands:
- preview: print the grouping report, change nothing
- apply:   rebuild "Sorted by Website" under "Other bookmarks". Its own contents are
           left out of the scan; if nothing else is found it is left as is.

Env:
- SITESORT_BOOKMARKS_PATH: Chromium `Bookmarks` file when --bookmarks is not given
- SITESORT_CONFIG_PATH: JSON config file (defaults to ~/.config/sitesort/config.json)
- SITESORT_MERGE_SUBDOMAINS / SITESORT_INCLUDE_FOLDER_PATH: boolean defaults
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from core.store.chromium import ChromiumBookmarkFile

from .pipeline import run_apply, run_preview
from .settings import (
    BOOKMARKS_ENV,
    ConfigError,
    env_overrides,
    load_cfg,
    merge_cfg,
    resolve_config_path,
)

USAGE = (
    "usage: sitesort [--bookmarks PATH] [--config PATH] [--merge-subdomains|--no-merge-subdomains] "
    "[--include-folder-path] [--max-domains N] [--max-items N] [--verbose] preview|apply"
)
COMMANDS = {"preview", "apply"}


class UsageError(ValueError):
    pass


def parse_args(argv: List[str]) -> Dict:
    opts: Dict = {
        "command": None,
        "bookmarks": None,
        "config": None,
        "verbose": False,
        "overrides": {},
    }
    args = list(argv[1:])
    idx = 0

    def _value(flag: str) -> str:
        nonlocal idx
        if "=" in args[idx]:
            return args[idx].split("=", 1)[1]
        if idx + 1 >= len(args):
            raise UsageError(f"{flag} requires a value")
        idx += 1
        return args[idx]

    def _int_value(flag: str) -> int:
        raw = _value(flag)
        try:
            value = int(raw)
        except ValueError:
            raise UsageError(f"invalid {flag} value: {raw}")
        if value < 0:
            raise UsageError(f"invalid {flag} value: {raw}")
        return value

    while idx < len(args):
        arg = args[idx]
        flag = arg.split("=", 1)[0]
        if arg in ("-v", "--verbose"):
            opts["verbose"] = True
        elif arg == "--merge-subdomains":
            opts["overrides"]["mergeSubdomains"] = True
        elif arg == "--no-merge-subdomains":
            opts["overrides"]["mergeSubdomains"] = False
        elif arg == "--include-folder-path":
            opts["overrides"]["includeFolderPath"] = True
        elif flag == "--bookmarks":
            opts["bookmarks"] = _value(flag)
        elif flag == "--config":
            opts["config"] = _value(flag)
        elif flag == "--max-domains":
            opts["overrides"]["maxDomains"] = _int_value(flag)
        elif flag == "--max-items":
            opts["overrides"]["maxItemsPerDomain"] = _int_value(flag)
        elif arg in ("-h", "--help"):
            opts["command"] = "help"
            return opts
        elif arg in COMMANDS and opts["command"] is None:
            opts["command"] = arg
        else:
            raise UsageError(f"unknown arg: {arg}")
        idx += 1

    if opts["command"] is None:
        raise UsageError("missing command: preview or apply")
    return opts


def resolve_bookmarks_path(explicit: Optional[str]) -> Optional[Path]:
    value = explicit or os.environ.get(BOOKMARKS_ENV, "").strip()
    if not value:
        return None
    return Path(value).expanduser()


def main(argv: List[str]) -> int:
    try:
        opts = parse_args(argv)
    except UsageError as exc:
        print(str(exc), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2
    if opts["command"] == "help":
        print(USAGE, file=sys.stderr)
        return 0

    try:
        config_path = resolve_config_path(opts["config"])
        file_cfg = load_cfg(config_path) if config_path is not None else None
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    overrides = env_overrides()
    overrides.update(opts["overrides"])
    cfg = merge_cfg(file_cfg, overrides)

    bookmarks = resolve_bookmarks_path(opts["bookmarks"])
    if bookmarks is None or not bookmarks.exists():
        print(f"Bookmarks file not found: {bookmarks or '(set --bookmarks or ' + BOOKMARKS_ENV + ')'}", file=sys.stderr)
        return 3
    store = ChromiumBookmarkFile(bookmarks)
    merge = bool(cfg.get("mergeSubdomains"))

    if opts["command"] == "preview":
        result = asyncio.run(
            run_preview(
                store,
                merge,
                bool(cfg.get("includeFolderPath")),
                cfg,
                stderr=sys.stderr,
                verbose=opts["verbose"],
            )
        )
        if result.ok:
            print(result.text)
        print(result.status, file=sys.stderr)
        return 0 if result.ok else 1

    result = asyncio.run(run_apply(store, merge, cfg, stderr=sys.stderr, verbose=opts["verbose"]))
    print(result.status)
    return 0 if result.ok else 1


def run() -> None:
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()

"""Organizer configuration, defaults and diagnostics."""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, FrozenSet, Optional, TextIO

from core.renderer.preview import DEFAULT_MAX_DOMAINS, DEFAULT_MAX_ITEMS_PER_DOMAIN
from core.site_policy import MAIN_FOLDER_TITLE, MULTI_LABEL_SUFFIXES, TARGET_PARENT_TITLE

DEFAULT_CFG: Dict = {
    "mergeSubdomains": True,
    "includeFolderPath": False,
    "maxDomains": DEFAULT_MAX_DOMAINS,
    "maxItemsPerDomain": DEFAULT_MAX_ITEMS_PER_DOMAIN,
    "mainFolderTitle": MAIN_FOLDER_TITLE,
    "targetParentTitle": TARGET_PARENT_TITLE,
    "excludeMainFolder": True,
    "multiLabelSuffixes": sorted(MULTI_LABEL_SUFFIXES),
    "collationLocale": "",
}

CONFIG_ENV = "SITESORT_CONFIG_PATH"
BOOKMARKS_ENV = "SITESORT_BOOKMARKS_PATH"
DEFAULT_CONFIG_PATH = Path("~/.config/sitesort/config.json").expanduser()


class ConfigError(ValueError):
    pass


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on", "y"}


def load_cfg(p: Path) -> dict:
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Config not found: {p}") from exc
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Config unreadable: {p}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a JSON object: {p}")
    return raw


def resolve_config_path(explicit: Optional[str] = None) -> Optional[Path]:
    """Explicit path, then $SITESORT_CONFIG_PATH, then the default if it exists."""
    if explicit:
        return Path(explicit).expanduser()
    env_value = os.environ.get(CONFIG_ENV, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def merge_cfg(file_cfg: Dict | None, override_cfg: Dict | None) -> Dict:
    merged = dict(DEFAULT_CFG)
    if file_cfg:
        merged.update(file_cfg)
    if override_cfg:
        merged.update(override_cfg)
    return merged


def env_overrides() -> Dict:
    out: Dict = {}
    for key, env_name in (
        ("mergeSubdomains", "SITESORT_MERGE_SUBDOMAINS"),
        ("includeFolderPath", "SITESORT_INCLUDE_FOLDER_PATH"),
    ):
        if os.environ.get(env_name) is not None:
            out[key] = _env_flag(env_name)
    return out


def suffixes_from_cfg(cfg: Dict) -> FrozenSet[str]:
    raw = cfg.get("multiLabelSuffixes")
    if raw is None:
        return MULTI_LABEL_SUFFIXES
    if isinstance(raw, str) or not isinstance(raw, (list, tuple, set, frozenset)):
        raise ConfigError("multiLabelSuffixes must be a list of strings")
    return frozenset(s for s in (str(x).strip().lower() for x in raw) if s)


def non_negative_int(cfg: Dict, key: str) -> int:
    try:
        value = int(cfg.get(key))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer") from exc
    if value < 0:
        raise ConfigError(f"{key} must not be negative")
    return value


def log(msg: str, stderr: Optional[TextIO] = None, verbose: bool = True) -> None:
    if not verbose:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[sitesort] {ts} {msg}", file=stderr if stderr is not None else sys.stderr)

"""Plain-text preview of a domain grouping."""

from __future__ import annotations

from typing import List, Sequence

from core.organizer.models import DomainGroup

DEFAULT_MAX_DOMAINS = 25
DEFAULT_MAX_ITEMS_PER_DOMAIN = 10


def render_preview(
    grouped: Sequence[DomainGroup],
    include_folder_path: bool = False,
    max_domains: int = DEFAULT_MAX_DOMAINS,
    max_items_per_domain: int = DEFAULT_MAX_ITEMS_PER_DOMAIN,
) -> str:
    """Render the first `max_domains` groups, each capped at `max_items_per_domain` items."""
    lines: List[str] = []
    lines.append(f"Domains found: {len(grouped)}")
    lines.append(f"Showing up to {max_domains} domains, {max_items_per_domain} items each")
    lines.append("")

    for group in grouped[:max_domains]:
        lines.extend(_render_group(group, include_folder_path, max_items_per_domain))
        lines.append("")

    if len(grouped) > max_domains:
        lines.append(f"… +{len(grouped) - max_domains} more domains")

    return "\n".join(lines)


def _render_group(group: DomainGroup, include_folder_path: bool, max_items: int) -> List[str]:
    lines = [f"• {group.domain} ({len(group.items)})"]
    for item in group.items[:max_items]:
        lines.append(f"   - {item.title}{_path_suffix(item.path, include_folder_path)}")
    if len(group.items) > max_items:
        lines.append(f"   … +{len(group.items) - max_items} more")
    return lines


def _path_suffix(path: str, include_folder_path: bool) -> str:
    if include_folder_path and path:
        return f"  [{path}]"
    return ""

"""Derive per-category MCP tools from generated actions.

For each category (up to MAX_TOOL_CATEGORIES) at most two tools are emitted:
  - {slug}_{category}_create, from the first action whose id starts
    with create_ or post_
  - {slug}_{category}_list, from the first action whose id starts with
    list_, or starts with get_ and contains "all"

The list check is looser than the create check. Existing registries were
generated with this exact matching; keep both checks unchanged.
"""

from __future__ import annotations

import copy
from typing import Any

from .actions import get_categories

# Limit to keep manifests for large APIs a reasonable size
MAX_TOOL_CATEGORIES = 20

_CREATE_PREFIXES = ("create_", "post_")


def is_create_action(action_id: str) -> bool:
    return action_id.startswith(_CREATE_PREFIXES)


def is_list_action(action_id: str) -> bool:
    return action_id.startswith("list_") or (action_id.startswith("get_") and "all" in action_id)


def build_tools(
    actions: list[dict[str, Any]],
    slug: str,
    name: str,
    categories: list[str] | None = None,
) -> list[dict[str, Any]]:
    """Build create/list tools for each category."""
    if categories is None:
        categories = get_categories(actions)

    tools: list[dict[str, Any]] = []
    for category in categories[:MAX_TOOL_CATEGORIES]:
        category_actions = [a for a in actions if a["category"] == category]
        if not category_actions:
            continue

        create_action = next((a for a in category_actions if is_create_action(a["id"])), None)
        list_action = next((a for a in category_actions if is_list_action(a["id"])), None)

        if create_action is not None:
            tools.append({
                "name": f"{slug}_{category}_create",
                "description": f"Create a new {category} in {name}",
                "inputSchema": copy.deepcopy(create_action["configSchema"]),
            })

        if list_action is not None:
            tools.append({
                "name": f"{slug}_{category}_list",
                "description": f"List {category} from {name}",
                "inputSchema": copy.deepcopy(list_action["configSchema"]),
            })

    return tools

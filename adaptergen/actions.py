"""Build action descriptors from the operations of an OpenAPI spec.

One action per (path, method) pair for the recognized methods, skipping
deprecated operations. Malformed operations are skipped and recorded in
diagnostics; they never abort the batch.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import Diagnostics, OperationParseError
from .loader import get_paths
from .naming import build_action_id, build_action_name, extract_category, unique_action_id
from .schema_parser import build_input_schema, get_response_schema

logger = logging.getLogger(__name__)

# Methods turned into actions, in output order per path
HTTP_METHODS = ("get", "post", "put", "patch", "delete")


def _tags(operation: dict[str, Any], method: str, path: str) -> list[str]:
    tags = operation.get("tags") or []
    if not isinstance(tags, list):
        raise OperationParseError(method, path, "tags must be a list")
    return tags


def build_action(
    spec: dict[str, Any],
    method: str,
    path: str,
    path_item: dict[str, Any],
    operation: Any,
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any]:
    """Build a single action descriptor. The id is not yet de-duplicated."""
    if not isinstance(operation, dict):
        raise OperationParseError(method, path, "operation must be an object")

    operation_id = operation.get("operationId")
    if operation_id is not None and not isinstance(operation_id, str):
        raise OperationParseError(method, path, "operationId must be a string")

    summary = operation.get("summary")
    action: dict[str, Any] = {
        "id": build_action_id(method, path, operation_id),
        "name": build_action_name(method, path, summary),
        "description": operation.get("description") or summary or f"{method.upper()} {path}",
        "category": extract_category(path, _tags(operation, method, path)),
        "configSchema": build_input_schema(
            spec, method, path, path_item, operation, diagnostics,
        ),
    }

    response_schema = get_response_schema(spec, operation, method, path, diagnostics)
    if response_schema is not None:
        action["responseSchema"] = response_schema
    return action


def build_actions(
    spec: dict[str, Any],
    diagnostics: Diagnostics | None = None,
) -> list[dict[str, Any]]:
    """Build all actions in document order with unique ids."""
    actions: list[dict[str, Any]] = []
    seen: set[str] = set()

    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, dict):
            error = OperationParseError("*", path, "path item must be an object")
            logger.warning("Skipping %s", error)
            if diagnostics is not None:
                diagnostics.skip(error)
            continue

        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation is None:
                continue
            if isinstance(operation, dict) and operation.get("deprecated"):
                logger.debug("Skipping deprecated %s %s", method.upper(), path)
                continue

            try:
                action = build_action(spec, method, path, path_item, operation, diagnostics)
            except OperationParseError as exc:
                logger.warning("Skipping malformed operation %s", exc)
                if diagnostics is not None:
                    diagnostics.skip(exc)
                continue

            action["id"] = unique_action_id(action["id"], path, seen)
            actions.append(action)

    logger.info("Built %d actions from %d paths", len(actions), len(get_paths(spec)))
    return actions


def get_categories(actions: list[dict[str, Any]]) -> list[str]:
    """Distinct action categories in first-appearance order."""
    categories: list[str] = []
    for action in actions:
        category = action.get("category")
        if category and category not in categories:
            categories.append(category)
    return categories

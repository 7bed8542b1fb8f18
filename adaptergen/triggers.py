"""Build trigger descriptors from spec webhooks and known event catalogs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .actions import HTTP_METHODS
from .errors import Diagnostics, OperationParseError
from .loader import get_webhooks
from .naming import event_to_trigger_id, event_to_trigger_name, unique_trigger_id
from .schema_parser import get_request_body_schema, simplify_schema

logger = logging.getLogger(__name__)


def _default_description(event: str) -> str:
    return f"Triggered on {event}"


def _webhook_operation(webhook: dict[str, Any]) -> dict[str, Any] | None:
    """The webhook's POST operation, else its first recognized method."""
    for method in ("post", *HTTP_METHODS):
        operation = webhook.get(method)
        if isinstance(operation, dict):
            return operation
    return None


def known_event_trigger(event: str, seen: set[str] | None = None) -> dict[str, Any]:
    """Trigger for an event that only appears in a known-event catalog."""
    trigger_id = event_to_trigger_id(event)
    if seen is not None:
        trigger_id = unique_trigger_id(trigger_id, seen)
    return {
        "id": trigger_id,
        "name": event_to_trigger_name(event),
        "description": _default_description(event),
        "event": event,
    }


def build_webhook_triggers(
    spec: dict[str, Any],
    diagnostics: Diagnostics | None = None,
) -> list[dict[str, Any]]:
    """One trigger per entry of the spec's webhooks section, in order."""
    triggers: list[dict[str, Any]] = []
    seen: set[str] = set()

    for event, webhook in get_webhooks(spec).items():
        if not isinstance(webhook, dict):
            logger.warning("Skipping malformed webhook %s", event)
            continue
        operation = _webhook_operation(webhook) or {}
        if operation.get("deprecated"):
            logger.debug("Skipping deprecated webhook %s", event)
            continue

        trigger: dict[str, Any] = {
            "id": unique_trigger_id(event_to_trigger_id(event), seen),
            "name": operation.get("summary") or event_to_trigger_name(event),
            "description": operation.get("description") or _default_description(event),
            "event": event,
        }

        try:
            payload = get_request_body_schema(spec, operation, "post", event, diagnostics)
        except OperationParseError as exc:
            logger.warning("Ignoring webhook payload: %s", exc)
            payload = None
        if payload is not None:
            trigger["payloadSchema"] = simplify_schema(payload, spec, diagnostics=diagnostics)

        triggers.append(trigger)

    return triggers


def merge_known_events(
    triggers: list[dict[str, Any]],
    known_events: Iterable[str] | None,
) -> list[dict[str, Any]]:
    """Append known events not already present, matched by exact event name.

    New trigger ids are suffixed when they collide with an existing id.
    Returns a new list; merging the same events again changes nothing.
    """
    merged = list(triggers)
    present = {t["event"] for t in merged}
    seen = {t["id"] for t in merged}

    for event in known_events or ():
        if event in present:
            continue
        merged.append(known_event_trigger(event, seen))
        present.add(event)

    return merged


def build_triggers(
    spec: dict[str, Any],
    known_events: Iterable[str] | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[dict[str, Any]]:
    """Spec-declared webhook triggers followed by known-event triggers."""
    triggers = merge_known_events(build_webhook_triggers(spec, diagnostics), known_events)
    logger.info("Built %d triggers", len(triggers))
    return triggers

"""Derive action ids, names, categories and trigger ids from the spec.

Action ids:
  - operationId present -> snake_case of the operationId
      GetCustomersCustomer          -> get_customers_customer
  - otherwise           -> {method}_{path slug}
      GET /v1/widgets/{id}          -> get_widgets
      POST /v1/payment_intents      -> post_payment_intents

Action names:
  - summary verbatim, else "{Verb} {Resource}"
      GET /v1/widgets/{id}          -> Get Widgets
      DELETE /v1/payment_intents    -> Delete Payment Intents
"""

from __future__ import annotations

import re

# HTTP method to the verb used in generated action names
_METHOD_NAMES: dict[str, str] = {
    "get": "Get",
    "post": "Create",
    "put": "Update",
    "patch": "Update",
    "delete": "Delete",
}

DEFAULT_CATEGORY = "general"

_VERSION_SEGMENT = re.compile(r"/v\d+/")
_PATH_PARAM = re.compile(r"\{[^}]+\}")


def _strip_version(path: str) -> str:
    return _VERSION_SEGMENT.sub("/", path)


def _title_words(text: str) -> str:
    """Capitalize the first letter of every word."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)


def _path_segments(path: str) -> list[str]:
    """Non-empty, non-parameter segments with the version prefix removed."""
    return [
        p for p in _strip_version(path).split("/")
        if p and not _PATH_PARAM.fullmatch(p)
    ]


def operation_id_to_action_id(operation_id: str) -> str:
    """Convert an operationId to snake_case.

    Every capital gets a leading underscore, so acronyms split per letter:
    "GetAPIKeys" -> "get_a_p_i_keys". Existing output depends on this.
    """
    action_id = re.sub(r"([A-Z])", r"_\1", operation_id).lower()
    action_id = re.sub(r"^_", "", action_id)
    return re.sub(r"__+", "_", action_id)


def path_to_slug(path: str) -> str:
    """Convert a path template to an underscore slug without params."""
    slug = _PATH_PARAM.sub("", _strip_version(path))
    slug = slug.replace("/", "_")
    slug = re.sub(r"__+", "_", slug)
    return slug.strip("_")


def build_action_id(method: str, path: str, operation_id: str | None = None) -> str:
    """Build a deterministic action id for an operation."""
    if operation_id:
        return operation_id_to_action_id(operation_id)

    slug = path_to_slug(path)
    if not slug:
        return method.lower()
    return f"{method}_{slug}".lower()


def build_action_name(method: str, path: str, summary: str | None = None) -> str:
    """Return the summary, or compose "Verb Resource" from the path."""
    if summary:
        return summary

    segments = _path_segments(path)
    resource = segments[-1] if segments else "Resource"
    resource = _title_words(resource.replace("_", " "))
    return f"{_METHOD_NAMES.get(method, method)} {resource}"


def extract_category(path: str, tags: list[str] | None = None) -> str:
    """First tag, else the first path segment, else the default category."""
    if tags:
        return re.sub(r"\s+", "_", str(tags[0]).lower())

    segments = _path_segments(path)
    return segments[0] if segments else DEFAULT_CATEGORY


def event_to_trigger_id(event: str) -> str:
    """customer.subscription.created -> customer_subscription_created"""
    return re.sub(r"[.\-/\s]+", "_", event)


def event_to_trigger_name(event: str) -> str:
    """customer.subscription.created -> Customer Subscription Created"""
    return _title_words(event.replace(".", " "))


def unique_action_id(action_id: str, path: str, seen: set[str]) -> str:
    """Make action_id unique against seen, then record it.

    Repeats are suffixed with the last path parameter
    (get_customers -> get_customers_by_customer), then with a counter.
    """
    candidate = action_id
    if candidate in seen:
        params = _PATH_PARAM.findall(path)
        if params:
            param = re.sub(r"\W+", "_", params[-1][1:-1]).strip("_").lower()
            candidate = f"{action_id}_by_{param}"

    return _claim(candidate, seen)


def unique_trigger_id(trigger_id: str, seen: set[str]) -> str:
    """Make trigger_id unique against seen with a counter suffix, then record it.

    Distinct events can normalize to the same id (a.b-c and a.b_c).
    """
    return _claim(trigger_id, seen)


def _claim(candidate: str, seen: set[str]) -> str:
    counter = 2
    base = candidate
    while candidate in seen:
        candidate = f"{base}_{counter}"
        counter += 1

    seen.add(candidate)
    return candidate

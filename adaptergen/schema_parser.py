"""Simplify OpenAPI schemas into the JSON Schema subset used by adapters.

Handles:
- $ref resolution against components (missing targets become placeholders)
- Allow-listed fields only (type, format, description, enum, min/max,
  default, properties, items, required)
- A hard depth bound, so cyclic component schemas always terminate
- Path/query/header parameters merged with the request body into a single
  input schema
- Output schema from the first JSON success response
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .errors import Diagnostics, OperationParseError, ReferenceResolutionError
from .loader import resolve_ref

logger = logging.getLogger(__name__)

# Nodes reached deeper than this collapse to an object placeholder.
MAX_SCHEMA_DEPTH = 3

# Request body media types, in order of preference.
BODY_MEDIA_TYPES = ("application/json", "application/x-www-form-urlencoded")

# Success responses checked for an output schema, in order.
SUCCESS_STATUSES = ("200", "201")

_SCALAR_FIELDS = ("type", "format", "description", "enum", "minimum", "maximum", "default")


def _placeholder() -> dict[str, Any]:
    return {"type": "object"}


def _resolve(
    spec: dict[str, Any],
    node: dict[str, Any],
    diagnostics: Diagnostics | None,
) -> dict[str, Any] | None:
    """Follow a $ref on a non-schema object (parameter, body, response)."""
    if "$ref" not in node:
        return node
    try:
        return resolve_ref(spec, node["$ref"])
    except ReferenceResolutionError as exc:
        logger.warning("%s; ignoring", exc)
        if diagnostics is not None:
            diagnostics.unresolved(exc.ref)
        return None


def simplify_schema(
    schema: dict[str, Any] | None,
    spec: dict[str, Any],
    depth: int = 0,
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any]:
    """Dereference and flatten a schema node.

    Every $ref hop and every nesting level (properties, items) costs one
    level of depth. Past MAX_SCHEMA_DEPTH the node becomes {"type": "object"}.
    """
    if not schema or not isinstance(schema, dict) or depth > MAX_SCHEMA_DEPTH:
        return _placeholder()

    if "$ref" in schema:
        try:
            resolved = resolve_ref(spec, schema["$ref"])
        except ReferenceResolutionError as exc:
            logger.warning("%s; using object placeholder", exc)
            if diagnostics is not None:
                diagnostics.unresolved(exc.ref)
            return _placeholder()
        return simplify_schema(resolved, spec, depth + 1, diagnostics)

    result: dict[str, Any] = {}
    for key in _SCALAR_FIELDS:
        if schema.get(key) is not None:
            result[key] = copy.deepcopy(schema[key])

    properties = schema.get("properties")
    if isinstance(properties, dict):
        result["properties"] = {
            name: simplify_schema(prop, spec, depth + 1, diagnostics)
            for name, prop in properties.items()
        }

    if isinstance(schema.get("items"), dict):
        result["items"] = simplify_schema(schema["items"], spec, depth + 1, diagnostics)

    required = schema.get("required")
    if isinstance(required, list) and required:
        result["required"] = list(required)

    return result


def _iter_parameters(
    spec: dict[str, Any],
    method: str,
    path: str,
    path_item: dict[str, Any],
    operation: dict[str, Any],
    diagnostics: Diagnostics | None,
):
    """Yield path-level then operation-level parameters, refs resolved."""
    for owner in (path_item, operation):
        params = owner.get("parameters") or []
        if not isinstance(params, list):
            raise OperationParseError(method, path, "parameters must be a list")
        for param in params:
            if not isinstance(param, dict):
                raise OperationParseError(method, path, "parameter must be an object")
            param = _resolve(spec, param, diagnostics)
            if param is None:
                continue
            if not isinstance(param.get("name"), str) or not param["name"]:
                raise OperationParseError(method, path, "parameter without a name")
            yield param


def get_request_body_schema(
    spec: dict[str, Any],
    operation: dict[str, Any],
    method: str = "post",
    path: str = "",
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any] | None:
    """Return the raw request body schema, JSON preferred over form content."""
    body = operation.get("requestBody")
    if body is None:
        return None
    if not isinstance(body, dict):
        raise OperationParseError(method, path, "requestBody must be an object")

    body = _resolve(spec, body, diagnostics)
    if body is None:
        return None

    content = body.get("content") or {}
    for media_type in BODY_MEDIA_TYPES:
        media = content.get(media_type)
        if isinstance(media, dict) and media.get("schema"):
            return media["schema"]
    return None


def build_input_schema(
    spec: dict[str, Any],
    method: str,
    path: str,
    path_item: dict[str, Any],
    operation: dict[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any]:
    """Merge parameters and request body into one object schema."""
    properties: dict[str, Any] = {}
    required: list[str] = []

    for param in _iter_parameters(spec, method, path, path_item, operation, diagnostics):
        if param.get("deprecated"):
            continue
        name = param["name"]
        prop = simplify_schema(param.get("schema"), spec, diagnostics=diagnostics)
        if param.get("description"):
            prop["description"] = param["description"]
        properties[name] = prop
        if param.get("required") and name not in required:
            required.append(name)

    body_schema = get_request_body_schema(spec, operation, method, path, diagnostics)
    if body_schema is not None:
        body = simplify_schema(body_schema, spec, diagnostics=diagnostics)
        properties.update(body.get("properties", {}))
        for name in body.get("required", []):
            if name not in required:
                required.append(name)

    result: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        result["required"] = required
    return result


def get_response_schema(
    spec: dict[str, Any],
    operation: dict[str, Any],
    method: str = "get",
    path: str = "",
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any] | None:
    """Simplified schema of the first JSON success response, if any."""
    responses = operation.get("responses") or {}
    if not isinstance(responses, dict):
        raise OperationParseError(method, path, "responses must be an object")

    for status in SUCCESS_STATUSES:
        # YAML specs may key responses by int
        response = responses.get(status, responses.get(int(status)))
        if not isinstance(response, dict):
            continue
        response = _resolve(spec, response, diagnostics)
        if response is None:
            continue
        media = (response.get("content") or {}).get("application/json")
        if isinstance(media, dict) and media.get("schema"):
            return simplify_schema(media["schema"], spec, diagnostics=diagnostics)
    return None

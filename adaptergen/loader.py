"""Fetch and parse a provider's OpenAPI spec.

Specs are fetched over HTTP with httpx or read from a local path, and
parsed as JSON or YAML. Also provides accessors for paths, webhooks and
component schemas, and $ref resolution.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from .errors import FetchError, InvalidSpecError, ReferenceResolutionError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

_YAML_SUFFIXES = (".yaml", ".yml")

_YAML_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _SpecLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates and timestamps as plain strings."""


# Unquoted dates (API versions, examples) must stay JSON-serializable
_SpecLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _load_yaml(text: str) -> Any:
    return yaml.load(text, Loader=_SpecLoader)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def parse_spec_text(text: str, source: str = "<string>") -> dict[str, Any]:
    """Parse a JSON or YAML OpenAPI document."""
    try:
        if source.lower().endswith(_YAML_SUFFIXES):
            spec = _load_yaml(text)
        else:
            try:
                spec = json.loads(text)
            except json.JSONDecodeError:
                spec = _load_yaml(text)
    except yaml.YAMLError as exc:
        raise FetchError(source, f"invalid document: {exc}") from exc

    if not isinstance(spec, dict):
        raise FetchError(source, "document is not a mapping")
    return spec


def load_spec(path: Path) -> dict[str, Any]:
    """Load the OpenAPI spec from disk."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(str(path), str(exc)) from exc
    return parse_spec_text(text, str(path))


def fetch_spec(
    source: str,
    client: httpx.Client | None = None,
    timeout: float = FETCH_TIMEOUT,
) -> dict[str, Any]:
    """Fetch the OpenAPI spec from a URL, or load it if source is a path.

    Any transport failure or non-success status raises FetchError.
    """
    if not _is_url(source):
        return load_spec(Path(source))

    logger.info("Fetching OpenAPI spec from %s", source)
    try:
        if client is None:
            response = httpx.get(source, timeout=timeout, follow_redirects=True)
        else:
            response = client.get(source)
    except httpx.HTTPError as exc:
        raise FetchError(source, str(exc)) from exc

    if not response.is_success:
        raise FetchError(source, f"HTTP {response.status_code}")

    return parse_spec_text(response.text, source)


def _section(parent: dict[str, Any], key: str, where: str) -> dict[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidSpecError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def get_info(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the info section from the spec."""
    return _section(spec, "info", "info")


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return _section(spec, "paths", "paths")


def get_webhooks(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the native webhooks section from the spec."""
    return _section(spec, "webhooks", "webhooks")


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    components = _section(spec, "components", "components")
    return _section(components, "schemas", "components.schemas")


def validate_spec(spec: dict[str, Any]) -> None:
    """Check the shape of the top-level sections the generator reads.

    Raises InvalidSpecError when info, paths, webhooks or components is
    present but not a mapping. A malformed components.schemas is left to
    $ref resolution, which records it as unresolved.
    """
    get_info(spec)
    get_paths(spec)
    get_webhooks(spec)
    _section(spec, "components", "components")


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer such as #/components/schemas/Customer."""
    if not ref.startswith("#/"):
        raise ReferenceResolutionError(ref)

    parts = [part.replace("~1", "/").replace("~0", "~") for part in ref[2:].split("/")]
    node: Any = spec
    if parts[:2] == ["components", "schemas"]:
        try:
            node = get_schemas(spec)
        except InvalidSpecError as exc:
            raise ReferenceResolutionError(ref) from exc
        parts = parts[2:]

    for part in parts:
        if not isinstance(node, dict) or part not in node:
            raise ReferenceResolutionError(ref)
        node = node[part]

    if not isinstance(node, dict):
        raise ReferenceResolutionError(ref)
    return node

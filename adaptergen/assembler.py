"""Assemble adapter.json and manifest.json from an OpenAPI spec.

Pipeline: fetch spec -> actions + triggers -> tools -> documents -> disk.
assemble_adapter() is pure; generate_adapter() adds the fetch and write.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from .actions import build_actions, get_categories
from .errors import Diagnostics, EmptySpecError
from .loader import fetch_spec, get_info, get_paths, validate_spec
from .providers import PROVIDERS, ProviderMetadata, resolve_provider
from .tools import build_tools
from .triggers import build_triggers
from .writer import DEFAULT_OUTPUT_DIR, write_documents

logger = logging.getLogger(__name__)


@dataclass
class GeneratedAdapter:
    """Result of one generation run."""

    slug: str
    adapter_json: dict[str, Any]
    manifest_json: dict[str, Any]
    stats: dict[str, Any]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    output_dir: Path | None = None


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC timestamp like 2024-05-01T12:00:00.000Z."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_adapter_document(
    spec: dict[str, Any],
    slug: str,
    name: str,
    provider: ProviderMetadata,
    generated_at: str,
) -> dict[str, Any]:
    info = get_info(spec)
    return {
        "slug": slug,
        "name": name,
        "version": str(info.get("version") or "1.0.0"),
        "description": info.get("description") or f"{name} integration",
        "type": provider.type,
        "provider": {
            "name": name,
            "website": provider.website,
            "documentation": provider.documentation,
        },
        "authentication": provider.authentication.to_dict(),
        "rateLimit": provider.rate_limit_dict(),
        "generatedFrom": "openapi",
        "generatedAt": generated_at,
    }


def assemble_adapter(
    spec: dict[str, Any],
    slug: str,
    name: str,
    known_events: Iterable[str] | None = None,
    providers: Mapping[str, ProviderMetadata] = PROVIDERS,
    generated_at: str | None = None,
) -> GeneratedAdapter:
    """Build both adapter documents from a parsed spec.

    Args:
        spec: Parsed OpenAPI document.
        slug: Adapter slug, used for tool names and the output directory.
        name: Display name of the provider.
        known_events: Extra webhook events to expose as triggers.
        providers: Static provider metadata registry.
        generated_at: Fixed timestamp; defaults to now. Pass one for
            reproducible output.

    Raises:
        InvalidSpecError: If info, paths, webhooks or components is not a
            mapping.
        EmptySpecError: If the spec declares no paths.
    """
    validate_spec(spec)
    paths = get_paths(spec)
    if not paths:
        raise EmptySpecError(f"OpenAPI spec for {slug} declares no paths")

    logger.info("Generating actions from %d paths...", len(paths))
    diagnostics = Diagnostics()
    actions = build_actions(spec, diagnostics)
    triggers = build_triggers(spec, known_events, diagnostics)
    categories = get_categories(actions)
    tools = build_tools(actions, slug, name, categories)

    provider = resolve_provider(slug, providers)
    adapter_json = build_adapter_document(
        spec, slug, name, provider, generated_at or iso_timestamp(),
    )
    manifest_json = {
        "actions": actions,
        "triggers": triggers,
        "webhooks": provider.webhooks.to_dict(),
        "mcp": {"tools": tools},
    }

    if diagnostics.skipped_operations:
        logger.warning("Skipped %d malformed operations", len(diagnostics.skipped_operations))

    return GeneratedAdapter(
        slug=slug,
        adapter_json=adapter_json,
        manifest_json=manifest_json,
        stats={
            "actions": len(actions),
            "triggers": len(triggers),
            "tools": len(tools),
            "categories": categories,
        },
        diagnostics=diagnostics,
    )


def generate_adapter(
    slug: str,
    name: str,
    source: str,
    known_events: Iterable[str] | None = None,
    output_dir: Path = DEFAULT_OUTPUT_DIR,
    providers: Mapping[str, ProviderMetadata] = PROVIDERS,
    client: httpx.Client | None = None,
    generated_at: str | None = None,
) -> GeneratedAdapter:
    """Fetch a spec, assemble the adapter and write both documents.

    Nothing is written unless the fetch and assembly succeed.
    """
    spec = fetch_spec(source, client=client)
    validate_spec(spec)
    logger.info(
        "OpenAPI %s, API version %s",
        spec.get("openapi", spec.get("swagger", "unknown")),
        get_info(spec).get("version", "unknown"),
    )

    adapter = assemble_adapter(spec, slug, name, known_events, providers, generated_at)
    adapter.output_dir = write_documents(
        slug, adapter.adapter_json, adapter.manifest_json, output_dir,
    )
    return adapter

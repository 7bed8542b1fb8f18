"""Shared fixtures: small OpenAPI documents exercising the generator."""

from __future__ import annotations

import copy
from typing import Any

import pytest


_WIDGET_SPEC: dict[str, Any] = {
    "openapi": "3.1.0",
    "info": {
        "title": "Widget API",
        "version": "2024-01-01",
        "description": "Widgets as a service",
    },
    "paths": {
        "/v1/widgets": {
            "get": {
                "operationId": "ListWidgets",
                "summary": "List widgets",
                "tags": ["Widgets"],
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer", "minimum": 1, "maximum": 100}},
                    {"name": "cursor", "in": "query", "deprecated": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Widget"},
                                },
                            },
                        },
                    },
                },
            },
            "post": {
                "operationId": "CreateWidget",
                "tags": ["Widgets"],
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/WidgetInput"},
                        },
                    },
                },
                "responses": {
                    "201": {
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Widget"}},
                        },
                    },
                },
            },
        },
        "/v1/widgets/{id}": {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "tags": ["Widgets"],
                "responses": {"200": {"description": "OK"}},
            },
            "delete": {
                "tags": ["Widgets"],
                "deprecated": True,
            },
        },
        "/v1/gadgets/{gadget}/charges": {
            "post": {
                "summary": "Charge a gadget",
                "parameters": [
                    {"name": "gadget", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "requestBody": {
                    "content": {
                        "application/x-www-form-urlencoded": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "amount": {"type": "integer"},
                                    "currency": {"type": "string", "default": "usd"},
                                },
                                "required": ["amount"],
                            },
                        },
                    },
                },
            },
        },
    },
    "webhooks": {
        "widget.created": {
            "post": {
                "summary": "Widget created",
                "description": "Sent when a widget is created",
                "requestBody": {
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/Widget"}},
                    },
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Widget": {
                "type": "object",
                "description": "A widget",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "color": {"type": "string", "enum": ["red", "blue"]},
                },
                "required": ["id"],
            },
            "WidgetInput": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Display name"},
                    "color": {"type": "string", "enum": ["red", "blue"], "default": "red"},
                },
                "required": ["name"],
            },
        },
    },
}


@pytest.fixture
def widget_spec() -> dict[str, Any]:
    """A fresh copy of the widget spec for each test."""
    return copy.deepcopy(_WIDGET_SPEC)


def _schema_depth(schema: Any) -> int:
    """Number of nested properties/items levels in a simplified schema."""
    if not isinstance(schema, dict):
        return 0
    children = list((schema.get("properties") or {}).values())
    if "items" in schema:
        children.append(schema["items"])
    if not children:
        return 0
    return 1 + max(_schema_depth(child) for child in children)


@pytest.fixture
def schema_depth():
    """Measure nesting depth of a simplified schema."""
    return _schema_depth

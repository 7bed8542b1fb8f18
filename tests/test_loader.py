"""Tests for spec fetching, parsing and known-event files."""

import json

import httpx
import pytest

from adaptergen.errors import FetchError, InvalidSpecError, ReferenceResolutionError
from adaptergen.events import KNOWN_EVENTS, STRIPE_WEBHOOK_EVENTS, load_events_file
from adaptergen.loader import (
    fetch_spec,
    get_info,
    get_paths,
    get_schemas,
    get_webhooks,
    load_spec,
    parse_spec_text,
    resolve_ref,
    validate_spec,
)

_SPEC_URL = "https://example.com/openapi.json"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchSpec:
    """Fetching specs over HTTP."""

    def test_success(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == _SPEC_URL
            return httpx.Response(200, json={"openapi": "3.0.0", "paths": {"/a": {}}})

        spec = fetch_spec(_SPEC_URL, client=_client(handler))
        assert spec["openapi"] == "3.0.0"

    def test_http_error_status(self):
        client = _client(lambda request: httpx.Response(404, text="Not Found"))
        with pytest.raises(FetchError, match="HTTP 404"):
            fetch_spec(_SPEC_URL, client=client)

    def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="connection refused"):
            fetch_spec(_SPEC_URL, client=_client(handler))

    def test_yaml_body(self):
        body = "openapi: 3.0.0\npaths:\n  /a:\n    get: {}\n"
        client = _client(lambda request: httpx.Response(200, text=body))
        spec = fetch_spec("https://example.com/openapi.yaml", client=client)
        assert "/a" in spec["paths"]

    def test_non_mapping_body(self):
        client = _client(lambda request: httpx.Response(200, json=[1, 2, 3]))
        with pytest.raises(FetchError, match="not a mapping"):
            fetch_spec(_SPEC_URL, client=client)

    def test_local_path(self, tmp_path):
        path = tmp_path / "spec.json"
        path.write_text(json.dumps({"openapi": "3.0.0", "paths": {}}))
        assert fetch_spec(str(path)) == {"openapi": "3.0.0", "paths": {}}

    def test_missing_local_path(self, tmp_path):
        with pytest.raises(FetchError):
            load_spec(tmp_path / "nope.json")


class TestParseSpecText:
    """JSON and YAML parsing."""

    def test_json(self):
        assert parse_spec_text('{"openapi": "3.1.0"}') == {"openapi": "3.1.0"}

    def test_yaml_fallback(self):
        assert parse_spec_text("openapi: 3.1.0\n") == {"openapi": "3.1.0"}

    def test_invalid(self):
        with pytest.raises(FetchError):
            parse_spec_text("{unclosed: [", "spec.yaml")

    def test_yaml_dates_stay_strings(self):
        text = (
            "openapi: 3.0.0\n"
            "info:\n"
            "  version: 2024-04-10\n"
            "components:\n"
            "  schemas:\n"
            "    ApiVersion:\n"
            "      type: string\n"
            "      enum: [2023-10-16, 2024-04-10]\n"
            "      default: 2024-04-10T12:00:00Z\n"
        )
        spec = parse_spec_text(text, "spec.yaml")
        assert spec["info"]["version"] == "2024-04-10"
        schema = spec["components"]["schemas"]["ApiVersion"]
        assert schema["enum"] == ["2023-10-16", "2024-04-10"]
        assert schema["default"] == "2024-04-10T12:00:00Z"
        json.dumps(spec)

    def test_yaml_fallback_dates_stay_strings(self):
        assert parse_spec_text("info:\n  version: 2024-01-01\n") == {"info": {"version": "2024-01-01"}}


class TestAccessors:
    """Accessors and $ref resolution."""

    def test_missing_sections(self):
        assert get_paths({}) == {}
        assert get_schemas({}) == {}
        assert get_schemas({"components": {}}) == {}
        assert get_paths({"paths": None}) == {}
        assert get_info({}) == {}

    @pytest.mark.parametrize("spec", [
        {"paths": ["/a"]},
        {"webhooks": "none"},
        {"components": []},
        {"info": "Acme API"},
    ])
    def test_malformed_sections(self, spec):
        with pytest.raises(InvalidSpecError):
            validate_spec(spec)

    def test_malformed_section_accessors(self):
        with pytest.raises(InvalidSpecError):
            get_paths({"paths": []})
        with pytest.raises(InvalidSpecError):
            get_webhooks({"webhooks": 1})
        with pytest.raises(InvalidSpecError):
            get_schemas({"components": {"schemas": ["A"]}})

    def test_resolve_ref(self):
        spec = {"components": {"schemas": {"A": {"type": "string"}}}}
        assert resolve_ref(spec, "#/components/schemas/A") == {"type": "string"}

    def test_resolve_escaped_pointer(self):
        spec = {"paths": {"/a/b": {"get": {}}}}
        assert resolve_ref(spec, "#/paths/~1a~1b") == {"get": {}}

    def test_missing_ref(self):
        with pytest.raises(ReferenceResolutionError):
            resolve_ref({"components": {"schemas": {}}}, "#/components/schemas/A")

    def test_malformed_schemas_table(self):
        with pytest.raises(ReferenceResolutionError):
            resolve_ref({"components": {"schemas": ["A"]}}, "#/components/schemas/A")

    def test_schema_ref_without_components(self):
        with pytest.raises(ReferenceResolutionError):
            resolve_ref({}, "#/components/schemas/A")

    def test_remote_ref_unsupported(self):
        with pytest.raises(ReferenceResolutionError):
            resolve_ref({}, "other.yaml#/A")


class TestKnownEvents:
    """Built-in catalogs and event files."""

    def test_stripe_catalog(self):
        assert KNOWN_EVENTS["stripe"] is STRIPE_WEBHOOK_EVENTS
        assert "customer.subscription.created" in STRIPE_WEBHOOK_EVENTS
        assert len(STRIPE_WEBHOOK_EVENTS) == len(set(STRIPE_WEBHOOK_EVENTS))

    def test_text_file(self, tmp_path):
        path = tmp_path / "events.txt"
        path.write_text("# widget events\nwidget.created\n\n  widget.deleted  \n")
        assert load_events_file(path) == ["widget.created", "widget.deleted"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text('["widget.created", "widget.deleted"]')
        assert load_events_file(path) == ["widget.created", "widget.deleted"]

    def test_json_file_wrong_shape(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text("[1, 2]")
        with pytest.raises(FetchError):
            load_events_file(path)

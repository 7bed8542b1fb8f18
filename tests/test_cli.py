"""Tests for the python -m adaptergen entry point."""

import json

import pytest

from adaptergen.__main__ import main


@pytest.fixture
def spec_file(widget_spec, tmp_path):
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(widget_spec))
    return path


class TestMain:
    """CLI behaviour and exit codes."""

    def test_generates_adapter(self, spec_file, tmp_path, capsys):
        out_dir = tmp_path / "adapters"
        code = main(["acme", "--spec", str(spec_file), "--output-dir", str(out_dir)])
        assert code == 0
        assert (out_dir / "acme" / "adapter.json").exists()
        assert (out_dir / "acme" / "manifest.json").exists()
        output = capsys.readouterr().out
        assert "4 actions" in output
        assert "1 triggers" in output
        assert "2 categories" in output

    def test_name_defaults_to_capitalized_slug(self, spec_file, tmp_path):
        main(["acme", "--spec", str(spec_file), "--output-dir", str(tmp_path)])
        adapter = json.loads((tmp_path / "acme" / "adapter.json").read_text())
        assert adapter["name"] == "Acme"

    def test_events_file(self, spec_file, tmp_path):
        events = tmp_path / "events.txt"
        events.write_text("widget.created\nwidget.deleted\n")
        main([
            "acme", "--spec", str(spec_file), "--output-dir", str(tmp_path),
            "--events-file", str(events),
        ])
        manifest = json.loads((tmp_path / "acme" / "manifest.json").read_text())
        assert [t["id"] for t in manifest["triggers"]] == ["widget_created", "widget_deleted"]

    def test_builtin_known_events_merged(self, spec_file, tmp_path):
        main(["stripe", "--spec", str(spec_file), "--output-dir", str(tmp_path)])
        manifest = json.loads((tmp_path / "stripe" / "manifest.json").read_text())
        events = [t["event"] for t in manifest["triggers"]]
        assert events[0] == "widget.created"
        assert "charge.succeeded" in events
        assert manifest["webhooks"]["signatureHeader"] == "stripe-signature"

    def test_no_known_events(self, spec_file, tmp_path):
        main(["stripe", "--spec", str(spec_file), "--output-dir", str(tmp_path), "--no-known-events"])
        manifest = json.loads((tmp_path / "stripe" / "manifest.json").read_text())
        assert len(manifest["triggers"]) == 1

    def test_fetch_failure_exit_code(self, tmp_path):
        code = main(["acme", "--spec", str(tmp_path / "missing.json"), "--output-dir", str(tmp_path / "out")])
        assert code == 1
        assert not (tmp_path / "out").exists()

    def test_malformed_spec_exit_code(self, tmp_path):
        spec_file = tmp_path / "openapi.json"
        spec_file.write_text(json.dumps({"openapi": "3.0.0", "paths": ["/things"]}))
        code = main(["acme", "--spec", str(spec_file), "--output-dir", str(tmp_path / "out")])
        assert code == 1
        assert not (tmp_path / "out").exists()

    def test_unknown_slug_without_spec(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["acme"])
        assert exc_info.value.code == 2

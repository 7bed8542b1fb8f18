"""Write generated adapter documents into the registry directory.

Produces {output_dir}/{slug}/adapter.json and manifest.json. Both files
are staged first and then swapped into place, so a failure never leaves a
half-written pair behind.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any

from .errors import WriteError

logger = logging.getLogger(__name__)

OUTPUT_DIR_ENV = "ADAPTERGEN_OUTPUT_DIR"
DEFAULT_OUTPUT_DIR = Path(os.environ.get(OUTPUT_DIR_ENV, "adapters"))

ADAPTER_FILENAME = "adapter.json"
MANIFEST_FILENAME = "manifest.json"


def render_document(document: dict[str, Any]) -> str:
    """Serialize a document; key order is preserved for stable output."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _first_missing(path: Path) -> Path | None:
    """The outermost ancestor of path (or path itself) that doesn't exist."""
    missing = None
    for candidate in (path, *path.parents):
        if candidate.exists():
            break
        missing = candidate
    return missing


def _file_mode(target: Path) -> int:
    """Mode for a written document: keep an existing file's mode, else 0o666 minus umask."""
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _restore(target: Path, backup: bytes | None) -> None:
    try:
        if backup is None:
            target.unlink(missing_ok=True)
        else:
            target.write_bytes(backup)
    except OSError as exc:
        logger.error("Could not restore %s: %s", target, exc)


def write_documents(
    slug: str,
    adapter_json: dict[str, Any],
    manifest_json: dict[str, Any],
    output_dir: Path = DEFAULT_OUTPUT_DIR,
) -> Path:
    """Write adapter.json and manifest.json, returning the adapter directory."""
    adapter_dir = Path(output_dir) / slug
    try:
        documents = {
            ADAPTER_FILENAME: render_document(adapter_json),
            MANIFEST_FILENAME: render_document(manifest_json),
        }
    except (TypeError, ValueError) as exc:
        raise WriteError(f"Cannot serialize adapter documents for {slug}: {exc}") from exc

    created = _first_missing(adapter_dir)
    try:
        adapter_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Cannot create {adapter_dir}: {exc}") from exc

    staged: dict[Path, Path] = {}
    backups: dict[Path, bytes | None] = {}
    replaced: list[Path] = []
    try:
        for filename, text in documents.items():
            fd, tmp = tempfile.mkstemp(prefix=f".{filename}.", suffix=".tmp", dir=adapter_dir)
            staged[adapter_dir / filename] = Path(tmp)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)

        for target in staged:
            backups[target] = target.read_bytes() if target.exists() else None
            os.chmod(staged[target], _file_mode(target))

        for target, tmp in staged.items():
            os.replace(tmp, target)
            replaced.append(target)
    except OSError as exc:
        for tmp in staged.values():
            tmp.unlink(missing_ok=True)
        for target in replaced:
            _restore(target, backups[target])
        if created is not None:
            shutil.rmtree(created, ignore_errors=True)
        raise WriteError(f"Cannot write adapter documents to {adapter_dir}: {exc}") from exc

    logger.info("Wrote %s and %s to %s", ADAPTER_FILENAME, MANIFEST_FILENAME, adapter_dir)
    return adapter_dir

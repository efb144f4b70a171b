"""Schema file discovery and namespace loading service."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from pathlib import Path
from typing import Any

from .json_documents import JsonDocumentError, load_json_document
from .schema_models import MANIFEST_NAMESPACE

LOGGER = logging.getLogger(__name__)


class SchemaLoadError(Exception):
    """Raised when schema files cannot be read."""


def list_schema_files(directory: Path | str, skip_files: Collection[str] = ()) -> list[Path]:
    """Return the `.json` files of one schema directory in name order, minus skipped names."""
    folder = Path(directory)
    try:
        candidates = sorted(folder.iterdir(), key=lambda item: item.name)
    except OSError as exc:
        raise SchemaLoadError(f"Unable to read schema directory '{folder}': {exc}") from exc
    return [
        candidate
        for candidate in candidates
        if not candidate.is_dir()
        and candidate.suffix.lower() == ".json"
        and candidate.name not in skip_files
    ]


def load_namespaces(
    directories: Sequence[Path | str], *, skip_files: Collection[str] = ()
) -> list[dict[str, Any]]:
    """Load every namespace definition found in the given schema directories.

    All `manifest` fragments are merged into one synthetic namespace at index 0.
    Their array-valued keys are concatenated in file order; any other key is
    reported and dropped.
    """
    files = [path for directory in directories for path in list_schema_files(directory, skip_files)]
    manifest: dict[str, Any] = {"namespace": MANIFEST_NAMESPACE}
    namespaces: list[dict[str, Any]] = [manifest]

    for path in files:
        try:
            document = load_json_document(path)
        except JsonDocumentError as exc:
            raise SchemaLoadError(str(exc)) from exc
        if not isinstance(document, list):
            LOGGER.error("Schema file %s must contain a JSON array, skipped", path.name)
            continue
        for namespace_obj in document:
            if not isinstance(namespace_obj, dict):
                LOGGER.error("Schema file %s contains a non-object namespace, skipped", path.name)
                continue
            if namespace_obj.get("namespace") == MANIFEST_NAMESPACE:
                _merge_manifest_fragment(manifest, namespace_obj)
            else:
                namespaces.append(namespace_obj)
    return namespaces


def _merge_manifest_fragment(manifest: dict[str, Any], fragment: dict[str, Any]) -> None:
    for key, value in fragment.items():
        if key == "namespace":
            continue
        if isinstance(value, list):
            manifest.setdefault(key, []).extend(value)
        else:
            LOGGER.error("%s.%s cannot be merged", MANIFEST_NAMESPACE, key)

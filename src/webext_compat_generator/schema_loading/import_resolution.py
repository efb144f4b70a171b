"""`$import` placeholder resolution service."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import SchemaNodeKind, classify_schema_node, find_definition

LOGGER = logging.getLogger(__name__)

MANIFEST_BASE_IMPORT = "manifest.ManifestBase"
_FOREIGN_IDENTITY_KEYS = frozenset(
    {"min_manifest_version", "max_manifest_version", "namespace", "id"}
)


def resolve_imports(namespaces: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return copies of the namespaces with every `$import` placeholder replaced.

    Namespaces are resolved in order and the search universe is updated as each
    one finishes, so later namespaces import already resolved content. The input
    trees are not modified.
    """
    resolved: list[Any] = list(namespaces)
    for index, namespace_obj in enumerate(resolved):
        resolved[index] = _resolve_node(namespace_obj, resolved, frozenset())

    if LOGGER.isEnabledFor(logging.DEBUG):
        LOGGER.debug("Found namespace definitions after $import")
        for namespace_obj in resolved:
            LOGGER.debug("%s", json.dumps(namespace_obj, indent=2))
    return resolved


def merge_schema_fragments(
    own: Mapping[str, Any], imported: Mapping[str, Any]
) -> dict[str, Any]:
    """Return the union of two schema objects.

    Keys present on both sides are merged recursively when both values are
    objects and concatenated (own first) when both are arrays; any other
    collision keeps the value of `own`.
    """
    merged = copy.deepcopy(dict(own))
    for key, value in imported.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
            continue
        current = merged[key]
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_schema_fragments(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + copy.deepcopy(value)
    return merged


def find_import_target(universe: Sequence[Any], import_id: str) -> Mapping[str, Any] | None:
    """Return the first definition named `import_id` across all namespaces."""
    for namespace_obj in universe:
        found = find_definition(namespace_obj, import_id)
        if found is not None:
            return found
    return None


def _resolve_node(value: Any, universe: Sequence[Any], active_imports: frozenset[str]) -> Any:
    match classify_schema_node(value):
        case SchemaNodeKind.LEAF:
            return value
        case SchemaNodeKind.SEQUENCE:
            return [_resolve_node(element, universe, active_imports) for element in value]
        case SchemaNodeKind.IMPORT_PLACEHOLDER:
            return _resolve_import(value, universe, active_imports)
        case (
            SchemaNodeKind.REF_PLACEHOLDER
            | SchemaNodeKind.NAMESPACE
            | SchemaNodeKind.MEMBER
            | SchemaNodeKind.CONTAINER
        ):
            return _resolve_children(value, universe, active_imports)


def _resolve_children(
    value: Mapping[str, Any], universe: Sequence[Any], active_imports: frozenset[str]
) -> dict[str, Any]:
    return {key: _resolve_node(child, universe, active_imports) for key, child in value.items()}


def _resolve_import(
    value: Mapping[str, Any], universe: Sequence[Any], active_imports: frozenset[str]
) -> Any:
    import_id = value["$import"]
    if import_id == MANIFEST_BASE_IMPORT:
        return copy.deepcopy(dict(value))
    if not isinstance(import_id, str) or import_id in active_imports:
        LOGGER.warning("Recursive or invalid $import left unresolved: %s", import_id)
        return copy.deepcopy(dict(value))

    imported = find_import_target(universe, import_id)
    if imported is None:
        LOGGER.warning("Missing requested $import: %s", import_id)
        return _resolve_children(value, universe, active_imports)

    fragment = {
        key: child for key, child in imported.items() if key not in _FOREIGN_IDENTITY_KEYS
    }
    own = {key: child for key, child in value.items() if key != "$import"}
    merged = merge_schema_fragments(own, fragment)
    # The imported fragment may carry its own `$import`, which is resolved next.
    return _resolve_node(merged, universe, active_imports | {import_id})
